"""
CAGR Calculations

Compound annual growth rate between an initial and a final value.
"""

import math
from typing import Optional

from pydantic import BaseModel

from fincalc.calculations.common import (
    CalculationResult,
    finite_or_none,
    is_positive,
    make_breakdown,
)


class CagrInput(BaseModel):
    """Inputs for the CAGR calculator."""

    initial: float = math.nan
    final: float = math.nan
    years: float = math.nan


class CagrResult(CalculationResult):
    """CAGR in percent plus absolute and total return."""

    cagr: float  # Percent; negative for a declining investment
    absolute_gain: float  # final - initial, sign preserved
    total_return: float  # Percent


def calculate_cagr(initial: float, final: float, years: float) -> Optional[float]:
    """
    Calculate CAGR.

    Args:
        initial: Starting value
        final: Ending value
        years: Elapsed time in years

    Returns:
        CAGR in percent, ((final/initial) ** (1/years) - 1) * 100.
        Negative when final < initial. None for invalid inputs.
    """
    if not (is_positive(initial) and is_positive(final) and is_positive(years)):
        return None

    try:
        rate = ((final / initial) ** (1 / years) - 1) * 100
    except (OverflowError, ZeroDivisionError):
        return None
    return finite_or_none(rate)


def cagr(inputs: CagrInput) -> Optional[CagrResult]:
    """Evaluate the CAGR calculator."""
    rate = calculate_cagr(inputs.initial, inputs.final, inputs.years)
    if rate is None:
        return None
    total_return = finite_or_none((inputs.final / inputs.initial - 1) * 100)
    if total_return is None:
        return None

    # Chart shows a non-negative split whatever the sign of the CAGR
    invested = min(inputs.initial, inputs.final)
    gain = max(inputs.final - invested, 0.0)

    return CagrResult(
        cagr=rate,
        absolute_gain=inputs.final - inputs.initial,
        total_return=total_return,
        breakdown=make_breakdown("Invested", invested, "Profit", gain),
    )
