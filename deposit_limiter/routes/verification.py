"""Verification endpoint: replay a feed and compare with expected outcomes."""

from fastapi import APIRouter, HTTPException, Request

from deposit_limiter.exceptions import FeedParseError
from deposit_limiter.feed.runner import run_sequential
from deposit_limiter.feed.source import TransactionSource
from deposit_limiter.feed.verifier import verify_outcomes
from deposit_limiter.limits.engine import DepositLimiter
from deposit_limiter.models import VerificationReport, VerificationRequest
from deposit_limiter.storage.memory import AccountStore

router = APIRouter(prefix="/api")


@router.post("/verification", response_model=VerificationReport)
async def verify_feed(
    body: VerificationRequest,
    request: Request,
) -> VerificationReport:
    """Run the feed against a fresh store and report the first mismatch.

    The live accounts are never touched; the replay uses its own store
    with the service's active limits.
    """
    limiter = DepositLimiter(store=AccountStore(), config=request.app.state.config)
    source = TransactionSource(body.records)

    try:
        transactions = source.transactions()
    except FeedParseError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    decisions = run_sequential(transactions, limiter)
    return verify_outcomes(decisions, body.expected)
