"""Tests for accumulating an accepted deposit."""

from decimal import Decimal

from deposit_limiter.limits.commit import commit_deposit
from tests.conftest import make_account, make_transaction


class TestCommitDeposit:
    def test_advances_all_counters(self):
        account = make_account(daily_velocity="100", weekly_velocity="600", count=1)
        account.balance = Decimal("600")
        tx = make_transaction(amount="250.50")

        commit_deposit(account, tx)

        assert account.daily_deposit_velocity == Decimal("350.50")
        assert account.weekly_deposit_velocity == Decimal("850.50")
        assert account.daily_deposit_count == 2
        assert account.balance == Decimal("850.50")

    def test_records_last_accepted_deposit(self):
        account = make_account()
        tx = make_transaction(tx_id="tx-42")
        commit_deposit(account, tx)
        assert account.last_accepted_deposit is not None
        assert account.last_accepted_deposit.id == "tx-42"
