"""In-memory account storage.

Accounts are keyed by customer id and created lazily on first sight.
Each customer gets its own lock so that the reset-evaluate-commit
sequence for one customer never interleaves with another transaction
for the same customer, while different customers proceed in parallel.
All data lives in memory and is lost on restart.
"""

import threading
from decimal import Decimal
from typing import Dict, List, Optional

from deposit_limiter.models import Account


class AccountStore:
    """Thread-safe in-memory store of customer accounts."""

    def __init__(self) -> None:
        self._accounts: Dict[str, Account] = {}
        self._locks: Dict[str, threading.Lock] = {}
        # Guards creation of accounts and locks only, never evaluation
        self._registry_lock = threading.Lock()

    def lock(self, customer_id: str) -> threading.Lock:
        """Return the exclusive lock for a customer, creating it if needed."""
        with self._registry_lock:
            if customer_id not in self._locks:
                self._locks[customer_id] = threading.Lock()
            return self._locks[customer_id]

    def get_or_create(
        self,
        customer_id: str,
        daily_limit: Decimal,
        weekly_limit: Decimal,
        count_limit: int,
    ) -> Account:
        """Return the customer's account, creating it with the given limits.

        Limits only apply to a newly created account; an existing account
        keeps the limits it was created with.
        """
        with self._registry_lock:
            account = self._accounts.get(customer_id)
            if account is None:
                account = Account(
                    customer_id=customer_id,
                    daily_deposit_limit=daily_limit,
                    weekly_deposit_limit=weekly_limit,
                    daily_deposit_count_limit=count_limit,
                )
                self._accounts[customer_id] = account
            return account

    def get(self, customer_id: str) -> Optional[Account]:
        """Return the customer's account, or None if it has never deposited."""
        return self._accounts.get(customer_id)

    def get_all(self) -> List[Account]:
        """Return all accounts in creation order."""
        with self._registry_lock:
            return list(self._accounts.values())
