"""
Lumpsum Calculations

Future value of a single one-time investment compounded annually.
"""

import math
from typing import Optional

from pydantic import BaseModel

from fincalc.calculations.common import (
    CalculationResult,
    finite_or_none,
    is_non_negative,
    is_positive,
    make_breakdown,
)


class LumpsumInput(BaseModel):
    """Inputs for the lumpsum calculator."""

    principal: float = math.nan
    annual_rate: float = math.nan  # Percent, e.g. 10 for 10%
    years: float = math.nan


class LumpsumResult(CalculationResult):
    """Lumpsum future value and gain."""

    future_value: float
    invested: float
    profit: float


def calculate_future_value(
    principal: float, annual_rate: float, years: float
) -> Optional[float]:
    """
    Calculate the future value of a lumpsum.

    Args:
        principal: Amount invested today
        annual_rate: Annual return in percent (e.g., 10 for 10%)
        years: Holding period in years

    Returns:
        principal * (1 + rate/100) ** years, or None for invalid inputs
    """
    if not (
        is_positive(principal) and is_non_negative(annual_rate) and is_positive(years)
    ):
        return None

    try:
        value = principal * (1 + annual_rate / 100) ** years
    except OverflowError:
        return None
    return finite_or_none(value)


def lumpsum(inputs: LumpsumInput) -> Optional[LumpsumResult]:
    """Evaluate the lumpsum calculator."""
    future_value = calculate_future_value(
        inputs.principal, inputs.annual_rate, inputs.years
    )
    if future_value is None:
        return None

    profit = max(future_value - inputs.principal, 0.0)
    return LumpsumResult(
        future_value=future_value,
        invested=inputs.principal,
        profit=profit,
        breakdown=make_breakdown("Invested", inputs.principal, "Profit", profit),
    )
