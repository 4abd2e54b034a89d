"""Calendar window rollover policy.

Rolling counters are tied to calendar positions, not to fixed 24h/7d
spans. Before a deposit is evaluated, its timestamp is compared with the
last ACCEPTED deposit:

  - year, month or ISO-8601 week changed -> weekly and daily counters reset
  - otherwise the day-of-month changed   -> daily counters reset
  - otherwise                            -> nothing resets

The coarse check runs first because crossing a week/month/year boundary
always crosses a day boundary too. Two deposits ten minutes apart on
either side of midnight are on different days.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

import structlog

from deposit_limiter.models import Account, ResetScope, Transaction

logger = structlog.get_logger(__name__)


def decide_reset(
    last_accepted: Optional[Transaction],
    timestamp: datetime,
) -> ResetScope:
    """Return which counters must be zeroed before evaluating at `timestamp`."""
    if last_accepted is None:
        return "NONE"

    previous = last_accepted.timestamp
    if (
        previous.year != timestamp.year
        or previous.month != timestamp.month
        or previous.isocalendar()[1] != timestamp.isocalendar()[1]
    ):
        return "WEEKLY"

    if previous.day != timestamp.day:
        return "DAILY"

    return "NONE"


def apply_window_reset(account: Account, timestamp: datetime) -> ResetScope:
    """Zero the account's counters for any calendar boundary crossed."""
    scope = decide_reset(account.last_accepted_deposit, timestamp)

    if scope == "WEEKLY":
        account.weekly_deposit_velocity = Decimal("0")
    if scope in ("WEEKLY", "DAILY"):
        account.daily_deposit_velocity = Decimal("0")
        account.daily_deposit_count = 0
        logger.info(
            "window_reset",
            customer_id=account.customer_id,
            scope=scope,
        )

    return scope
