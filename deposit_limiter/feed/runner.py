"""Threads a parsed feed through the deposit limiter.

Window state depends on the last ACCEPTED deposit, so each customer's
transactions must be processed in arrival order. Different customers
share nothing and can run on separate threads.
"""

from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Sequence

from deposit_limiter.limits.engine import DepositLimiter
from deposit_limiter.models import DepositDecision, FeedSummary, Transaction


def run_sequential(
    transactions: Sequence[Transaction],
    limiter: DepositLimiter,
) -> List[DepositDecision]:
    """Process every transaction in feed order on the calling thread."""
    return [limiter.process(tx) for tx in transactions]


def run_parallel(
    transactions: Sequence[Transaction],
    limiter: DepositLimiter,
    max_workers: int = 4,
) -> List[DepositDecision]:
    """Process customers concurrently, each customer's deposits in order.

    Returns decisions in the original feed order, identical to what
    run_sequential would produce.
    """
    # Feed positions grouped by customer, arrival order preserved
    groups: Dict[str, List[int]] = {}
    for index, tx in enumerate(transactions):
        groups.setdefault(tx.customer_id, []).append(index)

    def _process_group(indexes: List[int]) -> List[tuple[int, DepositDecision]]:
        return [(i, limiter.process(transactions[i])) for i in indexes]

    decisions: List[DepositDecision] = [None] * len(transactions)  # type: ignore[list-item]
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        for processed in executor.map(_process_group, groups.values()):
            for index, decision in processed:
                decisions[index] = decision

    return decisions


def summarize(decisions: Sequence[DepositDecision], duplicates: int = 0) -> FeedSummary:
    """Count outcomes and the five most common rejection reasons."""
    accepted = sum(1 for d in decisions if d.accepted)

    # Only the first violation decides a rejection, so count that one
    first_violations = Counter(d.violations[0] for d in decisions if d.violations)

    return FeedSummary(
        total=len(decisions),
        accepted=accepted,
        rejected=len(decisions) - accepted,
        duplicates=duplicates,
        common_violations=[rule for rule, _ in first_violations.most_common(5)],
    )
