"""Command-line runner for load feeds.

Reads a JSON-lines load feed, prints one {"id", "customer_id", "accepted"}
line per decision to stdout, and optionally verifies the decisions
against an expected-results file.

Exit codes:
  0 - feed processed (and verified, if requested)
  1 - verification found a mismatch
  2 - unparsable feed or invalid configuration
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

import structlog

from deposit_limiter.config import load_limits_config
from deposit_limiter.exceptions import ConfigurationError, FeedParseError
from deposit_limiter.feed.runner import run_parallel, run_sequential
from deposit_limiter.feed.source import TransactionSource, read_expected_outcomes
from deposit_limiter.feed.verifier import verify_outcomes
from deposit_limiter.limits.engine import DepositLimiter
from deposit_limiter.logging_config import setup_logging
from deposit_limiter.storage.memory import AccountStore

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deposit-limiter",
        description="Apply deposit velocity limits to a load feed",
    )
    parser.add_argument("input", type=Path, help="JSON-lines load feed")
    parser.add_argument(
        "--expected",
        type=Path,
        default=None,
        help="JSON-lines expected outcomes to verify against",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Limits config JSON (default: data/limits_config.json)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Threads for per-customer parallel processing (default: 1)",
    )
    parser.add_argument("--log-level", default="WARNING", help="Log level (default: WARNING)")
    parser.add_argument(
        "--log-format",
        choices=["json", "console"],
        default="console",
        help="Log output format (default: console)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level, fmt=args.log_format)

    try:
        config = load_limits_config(args.config)
        with open(args.input, "r", encoding="utf-8") as f:
            source = TransactionSource(f.readlines())
        transactions = source.transactions()
        expected = None
        if args.expected is not None:
            with open(args.expected, "r", encoding="utf-8") as f:
                expected = read_expected_outcomes(f.readlines())
    except (ConfigurationError, FeedParseError, OSError, UnicodeDecodeError) as exc:
        logger.error("feed_load_failed", error=str(exc))
        print(f"error: {exc}", file=sys.stderr)
        return 2

    limiter = DepositLimiter(store=AccountStore(), config=config)
    if args.workers > 1:
        decisions = run_parallel(transactions, limiter, max_workers=args.workers)
    else:
        decisions = run_sequential(transactions, limiter)

    for decision in decisions:
        print(json.dumps({
            "id": decision.transaction_id,
            "customer_id": decision.customer_id,
            "accepted": decision.accepted,
        }))

    if expected is None:
        return 0

    report = verify_outcomes(decisions, expected)
    if report.passed:
        print(f"verified {report.checked} decisions", file=sys.stderr)
        return 0

    mismatch = report.mismatch
    account = mismatch.account
    print(
        f"mismatch ({mismatch.kind}) on transaction {mismatch.transaction_id}: "
        f"actual={mismatch.actual_accepted} expected={mismatch.expected_accepted}",
        file=sys.stderr,
    )
    print(f"Customer ID {account.customer_id}", file=sys.stderr)
    print(f"Balance {account.balance}", file=sys.stderr)
    print(f"Deposit Count {account.daily_deposit_count}", file=sys.stderr)
    print(f"Daily Velocity {account.daily_deposit_velocity}", file=sys.stderr)
    print(f"Weekly Velocity {account.weekly_deposit_velocity}", file=sys.stderr)
    last = account.last_accepted_deposit
    print(f"Last Deposit {last.id if last else None}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
