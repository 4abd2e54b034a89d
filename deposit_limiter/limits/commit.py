"""Accumulation of an accepted deposit into the account."""

from deposit_limiter.models import Account, Transaction


def commit_deposit(account: Account, transaction: Transaction) -> None:
    """Apply an accepted deposit. Never called for a rejected one."""
    account.weekly_deposit_velocity += transaction.amount
    account.daily_deposit_velocity += transaction.amount
    account.daily_deposit_count += 1
    account.balance += transaction.amount
    account.last_accepted_deposit = transaction
