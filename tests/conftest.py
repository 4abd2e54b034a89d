"""Shared fixtures for the test suite."""

import json
from datetime import datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from deposit_limiter.limits.engine import DepositLimiter
from deposit_limiter.main import app
from deposit_limiter.models import Account, LimitsConfig, LoadRecord, Transaction
from deposit_limiter.storage.memory import AccountStore

# 2026-10-19 is a Monday (ISO week 43)
MONDAY = "2026-10-19T10:00:00Z"
TUESDAY = "2026-10-20T10:00:00Z"
SUNDAY = "2026-10-25T10:00:00Z"
NEXT_MONDAY = "2026-10-26T10:00:00Z"


@pytest.fixture
def config():
    return LimitsConfig()


@pytest.fixture
def store():
    return AccountStore()


@pytest.fixture
def limiter(store, config):
    return DepositLimiter(store=store, config=config)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def parse_ts(timestamp: str) -> datetime:
    return datetime.fromisoformat(timestamp.replace("Z", "+00:00"))


def make_transaction(
    tx_id="tx-1",
    customer="528",
    amount="100.00",
    timestamp=MONDAY,
) -> Transaction:
    return Transaction(
        id=tx_id,
        customer_id=customer,
        amount=Decimal(amount),
        timestamp=parse_ts(timestamp),
    )


def make_account(
    customer="528",
    daily_velocity="0",
    weekly_velocity="0",
    count=0,
    last_accepted=None,
) -> Account:
    return Account(
        customer_id=customer,
        daily_deposit_limit=Decimal("5000"),
        weekly_deposit_limit=Decimal("20000"),
        daily_deposit_count_limit=3,
        daily_deposit_velocity=Decimal(daily_velocity),
        weekly_deposit_velocity=Decimal(weekly_velocity),
        daily_deposit_count=count,
        last_accepted_deposit=last_accepted,
    )


def make_record(
    tx_id="tx-1",
    customer="528",
    load_amount="$100.00",
    time=MONDAY,
) -> LoadRecord:
    return LoadRecord(
        id=tx_id,
        customer_id=customer,
        load_amount=load_amount,
        time=parse_ts(time),
    )


def feed_line(tx_id="tx-1", customer="528", load_amount="$100.00", time=MONDAY) -> str:
    return json.dumps({
        "id": tx_id,
        "customer_id": customer,
        "load_amount": load_amount,
        "time": time,
    })


def expected_line(tx_id="tx-1", customer="528", accepted=True) -> str:
    return json.dumps({"id": tx_id, "customer_id": customer, "accepted": accepted})
