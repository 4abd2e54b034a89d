"""Read-only view of the active deposit limits."""

from fastapi import APIRouter, Request

from deposit_limiter.models import LimitsConfig

router = APIRouter(prefix="/api")


@router.get("/limits", response_model=LimitsConfig)
async def get_limits(request: Request) -> LimitsConfig:
    """Return the limits new accounts are created with."""
    return request.app.state.config
