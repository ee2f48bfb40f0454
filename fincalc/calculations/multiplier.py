"""
Multiplier Calculations

Two modes:
- time: years needed for money to grow by a target multiple
- multiplier: the multiple between an initial and a final amount
"""

import math
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from fincalc.calculations.common import (
    CalculationResult,
    finite_or_none,
    is_finite,
    is_positive,
    make_breakdown,
)


class MultiplierMode(str, Enum):
    TIME = "time"
    MULTIPLIER = "multiplier"


class MultiplierInput(BaseModel):
    """Inputs for the multiplier calculator; unused fields are ignored per mode."""

    mode: MultiplierMode = MultiplierMode.TIME
    principal: float = math.nan
    annual_rate: float = math.nan  # Percent, time mode only
    multiplier: float = math.nan  # Target multiple, time mode only
    final: float = math.nan  # Final amount, multiplier mode only


class MultiplierResult(CalculationResult):
    """
    Outcome of either mode.

    Only the active mode's output is set: `years` in time mode,
    `multiplier` in multiplier mode.
    """

    mode: MultiplierMode
    years: Optional[float] = None
    multiplier: Optional[float] = None
    principal: float
    future_value: float
    growth: float


def calculate_time_to_multiply(
    annual_rate: float, multiplier: float
) -> Optional[float]:
    """
    Years for money to grow `multiplier` times at `annual_rate` percent.

    ln(multiplier) / ln(1 + rate/100). Requires rate > 0 and multiplier > 1.
    """
    if not (is_positive(annual_rate) and is_finite(multiplier) and multiplier > 1):
        return None
    denominator = math.log1p(annual_rate / 100)
    if denominator <= 0:
        return None
    return finite_or_none(math.log(multiplier) / denominator)


def calculate_multiplier(principal: float, final: float) -> Optional[float]:
    """final / principal, requiring final > principal > 0."""
    if not (is_positive(principal) and is_finite(final) and final > principal):
        return None
    return finite_or_none(final / principal)


def _time_mode(inputs: MultiplierInput) -> Optional[MultiplierResult]:
    if not is_positive(inputs.principal):
        return None
    years = calculate_time_to_multiply(inputs.annual_rate, inputs.multiplier)
    if years is None:
        return None
    future_value = finite_or_none(inputs.principal * inputs.multiplier)
    if future_value is None:
        return None

    growth = max(future_value - inputs.principal, 0.0)
    return MultiplierResult(
        mode=MultiplierMode.TIME,
        years=years,
        principal=inputs.principal,
        future_value=future_value,
        growth=growth,
        breakdown=make_breakdown("Initial", inputs.principal, "Growth", growth),
    )


def _multiplier_mode(inputs: MultiplierInput) -> Optional[MultiplierResult]:
    multiple = calculate_multiplier(inputs.principal, inputs.final)
    if multiple is None:
        return None

    growth = inputs.final - inputs.principal
    return MultiplierResult(
        mode=MultiplierMode.MULTIPLIER,
        multiplier=multiple,
        principal=inputs.principal,
        future_value=inputs.final,
        growth=growth,
        breakdown=make_breakdown(
            "Initial Amount", inputs.principal, "Final Amount", growth
        ),
    )


def multiplier(inputs: MultiplierInput) -> Optional[MultiplierResult]:
    """Evaluate the multiplier calculator in the requested mode."""
    if inputs.mode == MultiplierMode.TIME:
        return _time_mode(inputs)
    return _multiplier_mode(inputs)
