"""
Shared Calculator Types

Frequency and payment-timing enums, input parsing, validity checks and
the two-slice breakdown used by every calculator result.
"""

import math
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class Frequency(str, Enum):
    """Contribution (or step-up) cadence."""

    MONTHLY = "monthly"
    WEEKLY = "weekly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"
    FIFTEEN_DAYS = "15-days"

    @property
    def periods_per_year(self) -> int:
        return _PERIODS_PER_YEAR[self]

    @property
    def label(self) -> str:
        return _LABELS[self]


_PERIODS_PER_YEAR = {
    Frequency.MONTHLY: 12,
    Frequency.WEEKLY: 52,
    Frequency.QUARTERLY: 4,
    Frequency.YEARLY: 1,
    Frequency.FIFTEEN_DAYS: 24,
}

_LABELS = {
    Frequency.MONTHLY: "Monthly",
    Frequency.WEEKLY: "Weekly",
    Frequency.QUARTERLY: "Quarterly",
    Frequency.YEARLY: "Yearly",
    Frequency.FIFTEEN_DAYS: "15 Days",
}


class PaymentTiming(str, Enum):
    """Whether each contribution lands at the beginning or end of its period."""

    BEGINNING = "beginning"
    END = "end"


def parse_number(text: Optional[str]) -> float:
    """
    Parse a raw form field into a float.

    Empty or unparsable text becomes NaN so that the positivity checks in
    each calculator reject it without raising. Digit separators (1_000) are
    not numbers in a form field.
    """
    if text is None:
        return math.nan
    text = text.strip()
    if not text or "_" in text:
        return math.nan
    try:
        return float(text)
    except ValueError:
        return math.nan


def is_finite(value: Optional[float]) -> bool:
    """True when value is a real, finite number."""
    return value is not None and math.isfinite(value)


def is_positive(value: Optional[float]) -> bool:
    return is_finite(value) and value > 0


def is_non_negative(value: Optional[float]) -> bool:
    return is_finite(value) and value >= 0


def finite_or_none(value: float) -> Optional[float]:
    """Collapse NaN/Infinity into the "no result" marker."""
    return value if is_finite(value) else None


class ChartSlice(BaseModel):
    """One named, non-negative slice of a result breakdown."""

    name: str
    value: float = Field(..., ge=0)


def make_breakdown(
    first_name: str, first_value: float, second_name: str, second_value: float
) -> List[ChartSlice]:
    """Build the two-slice breakdown, clamping both values at zero."""
    return [
        ChartSlice(name=first_name, value=max(first_value, 0.0)),
        ChartSlice(name=second_name, value=max(second_value, 0.0)),
    ]


class CalculationResult(BaseModel):
    """Base for calculator results: a primary figure plus its breakdown."""

    breakdown: List[ChartSlice]

    @property
    def breakdown_total(self) -> float:
        return sum(item.value for item in self.breakdown)
