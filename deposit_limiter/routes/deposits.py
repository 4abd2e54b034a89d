"""Deposit endpoints for single transactions and whole load feeds."""

from fastapi import APIRouter, HTTPException, Request

from deposit_limiter.exceptions import FeedParseError
from deposit_limiter.feed.runner import run_sequential, summarize
from deposit_limiter.feed.source import TransactionSource
from deposit_limiter.limits.engine import DepositLimiter
from deposit_limiter.models import (
    DepositDecision,
    FeedRequest,
    FeedResponse,
    Transaction,
)

router = APIRouter(prefix="/api")


def _get_limiter(request: Request) -> DepositLimiter:
    """Retrieve the deposit limiter from application state."""
    return request.app.state.limiter


@router.post("/deposits", response_model=DepositDecision)
async def submit_deposit(
    transaction: Transaction,
    request: Request,
) -> DepositDecision:
    """Accept or reject a single already-parsed deposit."""
    limiter = _get_limiter(request)
    return limiter.process(transaction)


@router.post("/deposits/feed", response_model=FeedResponse)
async def submit_feed(
    feed: FeedRequest,
    request: Request,
) -> FeedResponse:
    """Process a load feed in arrival order.

    Duplicate ids within the feed are dropped. If any amount cannot be
    parsed the whole feed is refused before anything is evaluated.
    """
    limiter = _get_limiter(request)
    source = TransactionSource(feed.records)

    try:
        transactions = source.transactions()
    except FeedParseError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    results = run_sequential(transactions, limiter)
    return FeedResponse(
        results=results,
        summary=summarize(results, duplicates=source.duplicates),
    )
