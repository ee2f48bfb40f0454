"""
Goal-Based SIP Calculations

Periodic contribution needed to reach a goal amount, after adjusting the
goal for inflation over the horizon.
"""

import math
from typing import Optional

from pydantic import BaseModel

from fincalc.calculations.common import (
    CalculationResult,
    Frequency,
    finite_or_none,
    is_non_negative,
    is_positive,
    make_breakdown,
)


class GoalInput(BaseModel):
    """Inputs for the goal calculator."""

    goal: float = math.nan
    years: float = math.nan
    annual_rate: float = math.nan  # Expected return, percent
    inflation_rate: float = math.nan  # Percent
    frequency: Frequency = Frequency.MONTHLY


class GoalResult(CalculationResult):
    """Required contribution and the inflation-adjusted target it reaches."""

    required_sip: float
    goal: float
    inflation_adjusted_goal: float
    invested: float
    returns: float


def calculate_inflation_adjusted_goal(
    goal: float, inflation_rate: float, years: float
) -> Optional[float]:
    """goal * (1 + inflation/100) ** years, or None for invalid inputs."""
    if not (
        is_positive(goal) and is_non_negative(inflation_rate) and is_positive(years)
    ):
        return None
    try:
        return finite_or_none(goal * (1 + inflation_rate / 100) ** years)
    except OverflowError:
        return None


def calculate_required_sip(
    goal: float,
    years: float,
    annual_rate: float,
    inflation_rate: float,
    periods_per_year: int,
) -> Optional[float]:
    """
    Calculate the periodic contribution needed to reach a goal.

    Contributions are assumed at the end of each period.

    Args:
        goal: Target amount in today's money
        years: Horizon in years
        annual_rate: Expected annual return in percent
        inflation_rate: Expected annual inflation in percent
        periods_per_year: Contributions per year (12 for monthly)

    Returns:
        Required contribution per period, or None when inputs are invalid
        or the result is not a positive finite number
    """
    if not is_non_negative(annual_rate) or periods_per_year <= 0:
        return None
    adjusted_goal = calculate_inflation_adjusted_goal(goal, inflation_rate, years)
    if adjusted_goal is None:
        return None

    periodic_rate = annual_rate / 100 / periods_per_year
    total_periods = years * periods_per_year

    try:
        if periodic_rate == 0:
            required = adjusted_goal / total_periods
        else:
            required = (adjusted_goal * periodic_rate) / (
                (1 + periodic_rate) ** total_periods - 1
            )
    except (OverflowError, ZeroDivisionError):
        return None

    if finite_or_none(required) is None or required <= 0:
        return None
    return required


def goal(inputs: GoalInput) -> Optional[GoalResult]:
    """Evaluate the goal calculator."""
    periods_per_year = inputs.frequency.periods_per_year
    required = calculate_required_sip(
        inputs.goal,
        inputs.years,
        inputs.annual_rate,
        inputs.inflation_rate,
        periods_per_year,
    )
    if required is None:
        return None

    adjusted_goal = calculate_inflation_adjusted_goal(
        inputs.goal, inputs.inflation_rate, inputs.years
    )
    invested = required * periods_per_year * inputs.years
    returns = max(adjusted_goal - invested, 0.0)

    return GoalResult(
        required_sip=required,
        goal=inputs.goal,
        inflation_adjusted_goal=adjusted_goal,
        invested=invested,
        returns=returns,
        breakdown=make_breakdown("Invested", invested, "Returns", returns),
    )
