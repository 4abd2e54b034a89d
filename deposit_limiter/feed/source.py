"""Load feed parsing.

Turns raw feed records into transactions the limiter can evaluate:
  - JSON lines are validated into LoadRecord
  - textual amounts such as "$3318.47" become positive Decimals
  - a record whose id was already seen in the feed is dropped

Parsing never raises to the caller; each record yields a ParseResult
and the consumer decides whether a failure is fatal.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Iterable, Iterator, List, Optional, Set, Union

import structlog
from pydantic import ValidationError

from deposit_limiter.exceptions import AmountParseError, FeedParseError
from deposit_limiter.models import ExpectedOutcome, LoadRecord, Transaction, is_whole_cents

logger = structlog.get_logger(__name__)


@dataclass
class ParseResult:
    """Success or failure of turning one feed record into a transaction."""

    line_number: int
    transaction: Optional[Transaction] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.transaction is not None

    def unwrap(self) -> Transaction:
        """Return the transaction or raise the parse failure."""
        if self.transaction is None:
            raise FeedParseError(self.error or "unparsable record", self.line_number)
        return self.transaction


def parse_amount(raw: str) -> Decimal:
    """Parse a load amount like "$100.00" into Decimal("100.00")."""
    text = raw.strip()
    if text.startswith("$"):
        text = text[1:]

    try:
        amount = Decimal(text)
    except InvalidOperation as exc:
        raise AmountParseError(f"Cannot parse amount {raw!r}") from exc

    if not amount.is_finite() or amount <= 0:
        raise AmountParseError(f"Amount must be a positive number, got {raw!r}")
    if not is_whole_cents(amount):
        raise AmountParseError(f"Amount has fractions of a cent: {raw!r}")
    return amount


def to_transaction(record: LoadRecord, line_number: int = 0) -> ParseResult:
    """Convert a raw record into a transaction, capturing amount errors."""
    try:
        amount = parse_amount(record.load_amount)
    except AmountParseError as exc:
        return ParseResult(line_number=line_number, error=str(exc))

    return ParseResult(
        line_number=line_number,
        transaction=Transaction(
            id=record.id,
            customer_id=record.customer_id,
            amount=amount,
            timestamp=record.time,
        ),
    )


class TransactionSource:
    """Iterates a load feed in arrival order, dropping duplicate ids.

    Accepts either JSON lines or already-validated LoadRecords.
    """

    def __init__(self, records: Iterable[Union[str, LoadRecord]]) -> None:
        self._records = records
        self._seen_ids: Set[str] = set()
        self.duplicates = 0

    def __iter__(self) -> Iterator[ParseResult]:
        for line_number, raw in enumerate(self._records, start=1):
            if isinstance(raw, LoadRecord):
                record = raw
            else:
                text = raw.strip()
                if not text:
                    continue
                try:
                    record = LoadRecord.model_validate_json(text)
                except ValidationError as exc:
                    logger.error("feed_record_invalid", line=line_number, error=str(exc))
                    yield ParseResult(line_number=line_number, error=f"Invalid record: {exc}")
                    continue

            if record.id in self._seen_ids:
                self.duplicates += 1
                logger.warning(
                    "duplicate_transaction_skipped",
                    transaction_id=record.id,
                    customer_id=record.customer_id,
                    line=line_number,
                )
                continue

            result = to_transaction(record, line_number)
            if result.ok:
                self._seen_ids.add(record.id)
            else:
                logger.error("feed_amount_invalid", line=line_number, error=result.error)
            yield result

    def transactions(self) -> List[Transaction]:
        """Parse the whole feed, raising on the first unparsable record."""
        return [result.unwrap() for result in self]


def read_expected_outcomes(lines: Iterable[str]) -> List[ExpectedOutcome]:
    """Parse the expected-results feed, skipping blank lines."""
    outcomes: List[ExpectedOutcome] = []
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            outcomes.append(ExpectedOutcome.model_validate_json(line))
        except ValidationError as exc:
            raise FeedParseError(f"Invalid expected outcome: {exc}", line_number) from exc
    return outcomes
