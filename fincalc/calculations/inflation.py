"""
Inflation Calculations

Purchasing-power erosion of a present amount, and the nominal amount
needed in the future to keep today's purchasing power.
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


class InflationInput(BaseModel):
    """Inputs for the inflation calculator."""

    amount: float = math.nan
    inflation_rate: float = math.nan  # Percent
    years: float = math.nan


class InflationResult(CalculationResult):
    """Purchasing power today's amount retains, and what it takes to keep it."""

    purchasing_power: float
    future_amount: float
    purchasing_power_loss: Optional[float] = None  # Percent, only when positive


def _inflation_factor(inflation_rate: float, years: float) -> Optional[float]:
    """(1 + rate/100) ** years, or None when inputs are invalid."""
    if not (is_non_negative(inflation_rate) and is_positive(years)):
        return None
    try:
        factor = (1 + inflation_rate / 100) ** years
    except OverflowError:
        return None
    return finite_or_none(factor)


def calculate_purchasing_power(
    amount: float, inflation_rate: float, years: float
) -> Optional[float]:
    """
    Calculate what an amount will be worth in today's money after inflation.

    Args:
        amount: Present amount
        inflation_rate: Annual inflation in percent
        years: Horizon in years

    Returns:
        amount / (1 + rate/100) ** years, or None for invalid inputs
    """
    if not is_positive(amount):
        return None
    factor = _inflation_factor(inflation_rate, years)
    if factor is None:
        return None
    return finite_or_none(amount / factor)


def calculate_future_amount(
    amount: float, inflation_rate: float, years: float
) -> Optional[float]:
    """Nominal amount needed after `years` to match today's purchasing power."""
    if not is_positive(amount):
        return None
    factor = _inflation_factor(inflation_rate, years)
    if factor is None:
        return None
    return finite_or_none(amount * factor)


def calculate_purchasing_power_loss(
    amount: float, inflation_rate: float, years: float
) -> Optional[float]:
    """
    Percentage of purchasing power lost to inflation.

    Returns None unless the loss is strictly positive (zero inflation
    loses nothing and is not reported).
    """
    purchasing_power = calculate_purchasing_power(amount, inflation_rate, years)
    if purchasing_power is None or purchasing_power <= 0:
        return None
    loss = (amount - purchasing_power) / amount * 100
    return loss if loss > 0 else None


def inflation(inputs: InflationInput) -> Optional[InflationResult]:
    """Evaluate the inflation calculator."""
    purchasing_power = calculate_purchasing_power(
        inputs.amount, inputs.inflation_rate, inputs.years
    )
    future_amount = calculate_future_amount(
        inputs.amount, inputs.inflation_rate, inputs.years
    )
    if purchasing_power is None or future_amount is None:
        return None

    lost = max(inputs.amount - purchasing_power, 0.0)
    return InflationResult(
        purchasing_power=purchasing_power,
        future_amount=future_amount,
        purchasing_power_loss=calculate_purchasing_power_loss(
            inputs.amount, inputs.inflation_rate, inputs.years
        ),
        breakdown=make_breakdown(
            "Remaining Purchasing Power", purchasing_power, "Lost to Inflation", lost
        ),
    )
