"""Tests for the calendar window rollover policy."""

from decimal import Decimal

from deposit_limiter.limits.window import apply_window_reset, decide_reset
from tests.conftest import (
    MONDAY,
    NEXT_MONDAY,
    SUNDAY,
    TUESDAY,
    make_account,
    make_transaction,
    parse_ts,
)


class TestDecideReset:
    def test_no_prior_deposit_no_reset(self):
        assert decide_reset(None, parse_ts(MONDAY)) == "NONE"

    def test_same_day_no_reset(self):
        last = make_transaction(timestamp="2026-10-19T08:00:00Z")
        assert decide_reset(last, parse_ts("2026-10-19T22:00:00Z")) == "NONE"

    def test_new_day_same_week_daily_reset(self):
        last = make_transaction(timestamp=MONDAY)
        assert decide_reset(last, parse_ts(TUESDAY)) == "DAILY"

    def test_sunday_still_same_iso_week(self):
        last = make_transaction(timestamp=MONDAY)
        assert decide_reset(last, parse_ts(SUNDAY)) == "DAILY"

    def test_new_iso_week_weekly_reset(self):
        last = make_transaction(timestamp=SUNDAY)
        assert decide_reset(last, parse_ts(NEXT_MONDAY)) == "WEEKLY"

    def test_midnight_straddle_is_new_day(self):
        """Ten minutes apart, but on different calendar days."""
        last = make_transaction(timestamp="2026-10-20T23:55:00Z")
        assert decide_reset(last, parse_ts("2026-10-21T00:05:00Z")) == "DAILY"

    def test_month_change_inside_iso_week(self):
        """Sat Oct 31 and Sun Nov 1 2026 share ISO week 44."""
        last = make_transaction(timestamp="2026-10-31T10:00:00Z")
        assert decide_reset(last, parse_ts("2026-11-01T10:00:00Z")) == "WEEKLY"

    def test_year_change_inside_iso_week(self):
        """Thu Dec 31 2026 and Fri Jan 1 2027 are both ISO week 53."""
        last = make_transaction(timestamp="2026-12-31T10:00:00Z")
        assert decide_reset(last, parse_ts("2027-01-01T10:00:00Z")) == "WEEKLY"

    def test_same_day_of_month_next_month(self):
        last = make_transaction(timestamp="2026-09-19T10:00:00Z")
        assert decide_reset(last, parse_ts("2026-10-19T10:00:00Z")) == "WEEKLY"

    def test_calendar_read_in_timestamp_offset(self):
        """23:30 and 00:10 local time at -05:00 straddle local midnight."""
        last = make_transaction(timestamp="2026-10-20T23:30:00-05:00")
        assert decide_reset(last, parse_ts("2026-10-21T00:10:00-05:00")) == "DAILY"


class TestApplyWindowReset:
    def test_daily_reset_keeps_weekly(self):
        account = make_account(
            daily_velocity="3000",
            weekly_velocity="8000",
            count=2,
            last_accepted=make_transaction(timestamp=MONDAY),
        )
        scope = apply_window_reset(account, parse_ts(TUESDAY))
        assert scope == "DAILY"
        assert account.daily_deposit_velocity == 0
        assert account.daily_deposit_count == 0
        assert account.weekly_deposit_velocity == Decimal("8000")

    def test_weekly_reset_zeroes_everything(self):
        account = make_account(
            daily_velocity="3000",
            weekly_velocity="8000",
            count=2,
            last_accepted=make_transaction(timestamp=SUNDAY),
        )
        scope = apply_window_reset(account, parse_ts(NEXT_MONDAY))
        assert scope == "WEEKLY"
        assert account.daily_deposit_velocity == 0
        assert account.weekly_deposit_velocity == 0
        assert account.daily_deposit_count == 0

    def test_no_reset_leaves_counters(self):
        account = make_account(
            daily_velocity="3000",
            weekly_velocity="8000",
            count=2,
            last_accepted=make_transaction(timestamp=MONDAY),
        )
        scope = apply_window_reset(account, parse_ts("2026-10-19T18:00:00Z"))
        assert scope == "NONE"
        assert account.daily_deposit_velocity == Decimal("3000")
        assert account.daily_deposit_count == 2

    def test_balance_never_reset(self):
        account = make_account(last_accepted=make_transaction(timestamp=SUNDAY))
        account.balance = Decimal("12345")
        apply_window_reset(account, parse_ts(NEXT_MONDAY))
        assert account.balance == Decimal("12345")
