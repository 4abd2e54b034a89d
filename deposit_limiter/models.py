"""Pydantic models for the deposit velocity limiter."""

from datetime import datetime
from decimal import Decimal
from typing import Dict, Literal, Optional

from pydantic import AwareDatetime, BaseModel, Field, field_validator

# Which rolling counters a window rollover zeroed before evaluation
ResetScope = Literal["NONE", "DAILY", "WEEKLY"]


def is_whole_cents(amount: Decimal) -> bool:
    """True when the amount has no non-zero digits beyond the cent.

    Reads the exact digits so no context rounding is involved.
    """
    _, digits, exponent = amount.as_tuple()
    if exponent >= -2:
        return True
    return not any(digits[exponent + 2:])


class Transaction(BaseModel):
    """A parsed deposit ready for limit evaluation."""
    id: str
    customer_id: str
    amount: Decimal = Field(gt=0)
    timestamp: AwareDatetime

    @field_validator("amount")
    @classmethod
    def amount_in_whole_cents(cls, value: Decimal) -> Decimal:
        # Sub-cent digits would be rounded away when added to the counters
        if not is_whole_cents(value):
            raise ValueError("amount must not have more than two decimal places")
        return value


class Account(BaseModel):
    """Per-customer balance, limits and rolling deposit counters."""
    customer_id: str
    balance: Decimal = Decimal("0")

    daily_deposit_limit: Decimal
    weekly_deposit_limit: Decimal
    daily_deposit_count_limit: int

    daily_deposit_velocity: Decimal = Decimal("0")
    weekly_deposit_velocity: Decimal = Decimal("0")
    daily_deposit_count: int = 0

    # None until the first deposit is accepted
    last_accepted_deposit: Optional[Transaction] = None


class LimitCheckResult(BaseModel):
    """Output of the three ordered ceiling checks."""
    accepted: bool
    violations: list[str]  # Rule tags in check order
    reasons: list[str]


class DepositDecision(BaseModel):
    """Accept/reject outcome for one transaction plus the account afterwards."""
    transaction_id: str
    customer_id: str
    accepted: bool
    reset: ResetScope
    violations: list[str]
    reasons: list[str]
    account: Account


class LoadRecord(BaseModel):
    """One raw line of the load feed, amount still in its textual form."""
    id: str
    customer_id: str
    load_amount: str
    time: AwareDatetime


class ExpectedOutcome(BaseModel):
    """One line of the expected-results feed."""
    id: str
    customer_id: str
    accepted: bool


class LimitOverride(BaseModel):
    """Per-customer limits applied when the account is first created."""
    daily_deposit_limit: Optional[Decimal] = Field(default=None, gt=0)
    weekly_deposit_limit: Optional[Decimal] = Field(default=None, gt=0)
    daily_deposit_count_limit: Optional[int] = Field(default=None, gt=0)


class LimitsConfig(BaseModel):
    """Default deposit limits and per-customer overrides."""
    daily_deposit_limit: Decimal = Field(default=Decimal("5000"), gt=0)
    weekly_deposit_limit: Decimal = Field(default=Decimal("20000"), gt=0)
    daily_deposit_count_limit: int = Field(default=3, gt=0)
    customer_overrides: Dict[str, LimitOverride] = Field(default_factory=dict)

    def limits_for(self, customer_id: str) -> tuple[Decimal, Decimal, int]:
        """Return (daily, weekly, count) limits for a new account."""
        override = self.customer_overrides.get(customer_id, LimitOverride())
        daily = override.daily_deposit_limit or self.daily_deposit_limit
        weekly = override.weekly_deposit_limit or self.weekly_deposit_limit
        count = override.daily_deposit_count_limit or self.daily_deposit_count_limit
        return daily, weekly, count


class FeedRequest(BaseModel):
    """A load feed submitted in one request."""
    records: list[LoadRecord]


class FeedSummary(BaseModel):
    """Aggregate statistics for a processed feed."""
    total: int
    accepted: int
    rejected: int
    duplicates: int
    common_violations: list[str]


class FeedResponse(BaseModel):
    """Decisions for every non-duplicate record in a feed."""
    results: list[DepositDecision]
    summary: FeedSummary


class Mismatch(BaseModel):
    """First disagreement between the limiter and the expected outcomes."""
    transaction_id: str
    kind: Literal["MISSING_EXPECTED", "CUSTOMER_DESYNC", "DECISION_MISMATCH"]
    customer_id: str
    expected_customer_id: Optional[str] = None
    actual_accepted: bool
    expected_accepted: Optional[bool] = None
    account: Account


class VerificationRequest(BaseModel):
    """A load feed paired with its expected-results feed."""
    records: list[LoadRecord]
    expected: list[ExpectedOutcome]


class VerificationReport(BaseModel):
    """Result of comparing limiter decisions with expected outcomes."""
    checked: int
    passed: bool
    mismatch: Optional[Mismatch] = None
    generated_at: datetime
