"""Core deposit limiter.

For each deposit, in the customer's critical section:
  1. Window reset (calendar rollover since the last accepted deposit)
  2. Ceiling checks (weekly velocity, daily velocity, daily count)
  3. Commit, only if every check passed

The decision carries a snapshot of the account after the transaction so
callers can inspect it without holding the customer's lock.
"""

import structlog

from deposit_limiter.limits.commit import commit_deposit
from deposit_limiter.limits.evaluator import evaluate_limits
from deposit_limiter.limits.window import apply_window_reset
from deposit_limiter.models import DepositDecision, LimitsConfig, Transaction
from deposit_limiter.storage.memory import AccountStore

logger = structlog.get_logger(__name__)


class DepositLimiter:
    """Accepts or rejects deposits against per-account velocity limits."""

    def __init__(self, store: AccountStore, config: LimitsConfig) -> None:
        self.store = store
        self.config = config

    def process(self, transaction: Transaction) -> DepositDecision:
        """Evaluate one deposit and update the customer's account.

        Rejections are ordinary decisions and never raise.
        """
        customer_id = transaction.customer_id

        with self.store.lock(customer_id):
            daily, weekly, count = self.config.limits_for(customer_id)
            account = self.store.get_or_create(customer_id, daily, weekly, count)

            reset = apply_window_reset(account, transaction.timestamp)
            result = evaluate_limits(account, transaction.amount)

            if result.accepted:
                commit_deposit(account, transaction)
            else:
                logger.info(
                    "deposit_rejected",
                    transaction_id=transaction.id,
                    customer_id=customer_id,
                    amount=str(transaction.amount),
                    reason=result.reasons[0],
                    violations=result.violations,
                )

            snapshot = account.model_copy(deep=True)

        return DepositDecision(
            transaction_id=transaction.id,
            customer_id=customer_id,
            accepted=result.accepted,
            reset=reset,
            violations=result.violations,
            reasons=result.reasons,
            account=snapshot,
        )
