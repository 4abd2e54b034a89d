"""Account lookup endpoints."""

from typing import List

from fastapi import APIRouter, HTTPException, Request

from deposit_limiter.models import Account
from deposit_limiter.storage.memory import AccountStore

router = APIRouter(prefix="/api")


def _get_store(request: Request) -> AccountStore:
    """Retrieve the account store from application state."""
    return request.app.state.store


@router.get("/accounts", response_model=List[Account])
async def list_accounts(request: Request) -> List[Account]:
    """Return every account seen so far."""
    return _get_store(request).get_all()


@router.get("/accounts/{customer_id}", response_model=Account)
async def get_account(customer_id: str, request: Request) -> Account:
    """Return one customer's balance, limits and rolling counters."""
    account = _get_store(request).get(customer_id)
    if account is None:
        raise HTTPException(status_code=404, detail=f"Unknown customer '{customer_id}'")
    return account
