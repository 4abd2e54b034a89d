"""Deposit ceiling checks.

Three checks run in a fixed order against the already-reset counters:
  1. Weekly velocity
  2. Daily velocity
  3. Daily deposit count

Every check is evaluated so the violations list is complete, but the
first violation is the one reported as the rejection reason. Limits are
inclusive: a deposit that lands exactly on a ceiling is accepted.
"""

from decimal import Decimal

from deposit_limiter.models import Account, LimitCheckResult


def evaluate_limits(account: Account, amount: Decimal) -> LimitCheckResult:
    """Decide whether a deposit of `amount` fits the account's limits.

    Does not mutate the account.
    """
    violations: list[str] = []
    reasons: list[str] = []

    # 1. Weekly velocity ceiling
    if account.weekly_deposit_velocity + amount > account.weekly_deposit_limit:
        violations.append("WEEKLY_LIMIT_EXCEEDED")
        reasons.append(
            f"Weekly deposits would reach ${account.weekly_deposit_velocity + amount:.2f} "
            f"(limit: ${account.weekly_deposit_limit:.2f})"
        )

    # 2. Daily velocity ceiling
    if account.daily_deposit_velocity + amount > account.daily_deposit_limit:
        violations.append("DAILY_LIMIT_EXCEEDED")
        reasons.append(
            f"Daily deposits would reach ${account.daily_deposit_velocity + amount:.2f} "
            f"(limit: ${account.daily_deposit_limit:.2f})"
        )

    # 3. Daily count ceiling
    if account.daily_deposit_count + 1 > account.daily_deposit_count_limit:
        violations.append("DAILY_COUNT_EXCEEDED")
        reasons.append(
            f"Deposit would be number {account.daily_deposit_count + 1} today "
            f"(limit: {account.daily_deposit_count_limit})"
        )

    return LimitCheckResult(
        accepted=not violations,
        violations=violations,
        reasons=reasons,
    )
