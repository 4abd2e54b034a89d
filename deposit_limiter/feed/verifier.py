"""Comparison of limiter decisions with an expected-results feed.

Expected outcomes are joined to decisions by transaction id rather than
by line position. Checking stops at the first mismatch, which is
reported together with the account snapshot taken right after the
offending transaction.
"""

from datetime import datetime, timezone
from typing import Dict, Sequence

import structlog

from deposit_limiter.models import (
    DepositDecision,
    ExpectedOutcome,
    Mismatch,
    VerificationReport,
)

logger = structlog.get_logger(__name__)


def verify_outcomes(
    decisions: Sequence[DepositDecision],
    expected: Sequence[ExpectedOutcome],
) -> VerificationReport:
    """Check each decision against the expected outcome with the same id.

    Ids are unique across the whole feed, so the id alone is the join key;
    the customer id is then compared to detect a desync.
    """
    expected_by_id: Dict[str, ExpectedOutcome] = {}
    for outcome in expected:
        # First entry wins, mirroring duplicate suppression in the feed
        expected_by_id.setdefault(outcome.id, outcome)

    checked = 0
    for decision in decisions:
        checked += 1
        outcome = expected_by_id.get(decision.transaction_id)

        mismatch = None
        if outcome is None:
            mismatch = Mismatch(
                transaction_id=decision.transaction_id,
                kind="MISSING_EXPECTED",
                customer_id=decision.customer_id,
                actual_accepted=decision.accepted,
                account=decision.account,
            )
        elif outcome.customer_id != decision.customer_id:
            mismatch = Mismatch(
                transaction_id=decision.transaction_id,
                kind="CUSTOMER_DESYNC",
                customer_id=decision.customer_id,
                expected_customer_id=outcome.customer_id,
                actual_accepted=decision.accepted,
                expected_accepted=outcome.accepted,
                account=decision.account,
            )
        elif outcome.accepted != decision.accepted:
            mismatch = Mismatch(
                transaction_id=decision.transaction_id,
                kind="DECISION_MISMATCH",
                customer_id=decision.customer_id,
                expected_customer_id=outcome.customer_id,
                actual_accepted=decision.accepted,
                expected_accepted=outcome.accepted,
                account=decision.account,
            )

        if mismatch is not None:
            logger.error(
                "verification_mismatch",
                transaction_id=mismatch.transaction_id,
                kind=mismatch.kind,
                actual=mismatch.actual_accepted,
                expected=mismatch.expected_accepted,
                account=mismatch.account.model_dump(mode="json"),
            )
            return VerificationReport(
                checked=checked,
                passed=False,
                mismatch=mismatch,
                generated_at=datetime.now(timezone.utc),
            )

    return VerificationReport(
        checked=checked,
        passed=True,
        generated_at=datetime.now(timezone.utc),
    )
