"""Errors raised by the scoring core and the batch ingestor."""

from __future__ import annotations

from typing import Optional


class CarbonAnalyticsError(Exception):
    """Base exception for carbon analytics errors."""


class CalculationError(CarbonAnalyticsError):
    """A single calculation could not produce a score."""


class InvalidDivisor(CalculationError, ZeroDivisionError):
    """Raised when total energy use is zero and the purchase ratio is undefined."""


class SelfCheckFailure(CalculationError):
    """A known-answer vector did not reproduce its expected score."""

    def __init__(self, description: str, expected: float, actual: float):
        self.description = description
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Invalid calculation when {description}: expected {expected}, but got {actual}"
        )


class MalformedRecord(CarbonAnalyticsError, ValueError):
    """A batch record is missing a required field or holds a non-numeric value."""

    def __init__(self, message: str, index: Optional[int] = None, isin: Optional[str] = None):
        self.index = index
        self.isin = isin
        location = []
        if index is not None:
            location.append(f"record {index}")
        if isin:
            location.append(f"ISIN {isin}")
        prefix = f"{', '.join(location)}: " if location else ""
        super().__init__(f"{prefix}{message}")
