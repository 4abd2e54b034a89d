"""Exception hierarchy for the deposit limiter's boundaries.

The limiter itself never raises for a rejected deposit; these cover
feed parsing and configuration only.
"""

from typing import Optional


class DepositLimiterError(Exception):
    """Base exception for all deposit limiter errors."""


class FeedParseError(DepositLimiterError):
    """Raised when a feed record cannot be turned into a transaction."""

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class AmountParseError(FeedParseError):
    """Raised when a load amount is not a positive number."""


class ConfigurationError(DepositLimiterError):
    """Raised when the limits configuration is invalid or unreadable."""
