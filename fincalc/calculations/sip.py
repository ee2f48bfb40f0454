"""
SIP Calculations

Future value of a systematic investment plan: a fixed contribution every
period, optionally stepped up by a percentage at a slower cadence.

Without step-up the closed-form annuity formula is used. With step-up the
schedule is accumulated period by period:

1. Add this period's contribution, compounded to the end of the horizon
2. On a step-up boundary (and only before the last period) grow the
   contribution for the following periods
"""

import math
from typing import Optional, Tuple, Union

from pydantic import BaseModel

from fincalc.calculations.common import (
    CalculationResult,
    Frequency,
    PaymentTiming,
    is_finite,
    is_non_negative,
    is_positive,
    make_breakdown,
)

# Upper bound on periods walked by the step-up loop; longer schedules
# produce no result.
MAX_STEP_UP_PERIODS = 10_000


class SipInput(BaseModel):
    """Inputs for the SIP calculator."""

    amount: float = math.nan
    frequency: Frequency = Frequency.MONTHLY
    years: float = math.nan
    annual_rate: float = math.nan  # Percent
    timing: PaymentTiming = PaymentTiming.END

    step_up: bool = False
    step_up_frequency: Frequency = Frequency.YEARLY
    step_up_percent: float = 0.0


class SipResult(CalculationResult):
    """SIP maturity value split into contributions and profit."""

    future_value: float
    invested: float
    profit: float
    periodic_rate: float
    total_periods: float


def step_up_interval(periods_per_year: int, step_up_periods_per_year: int) -> int:
    """
    Number of contribution periods between step-ups.

    round(n / m) with halves rounded up. Step-ups are never more frequent than
    contributions (m <= n), so this is at least one period. When m does not
    divide n this is an approximation (e.g. weekly contributions
    stepped up every 15 days step every 2 weeks).
    """
    return math.floor(periods_per_year / step_up_periods_per_year + 0.5)


def _valid_inputs(amount: float, years: float, annual_rate: float) -> bool:
    return is_positive(amount) and is_positive(years) and is_non_negative(annual_rate)


def _closed_form_future_value(
    amount: float,
    periodic_rate: float,
    total_periods: float,
    timing: PaymentTiming,
) -> float:
    if periodic_rate == 0:
        return amount * total_periods

    value = amount * ((1 + periodic_rate) ** total_periods - 1) / periodic_rate
    if timing == PaymentTiming.BEGINNING:
        value *= 1 + periodic_rate
    return value


def _accumulate_step_up(
    amount: float,
    periodic_rate: float,
    total_periods: float,
    timing: PaymentTiming,
    interval: int,
    step_up_percent: float,
) -> Tuple[float, float]:
    """Walk the schedule once, returning (future value, total invested)."""
    step_factor = 1 + step_up_percent / 100
    growth = 1 + periodic_rate
    offset = 1 if timing == PaymentTiming.BEGINNING else 0

    contribution = amount
    future_value = 0.0
    invested = 0.0

    for period in range(1, math.floor(total_periods) + 1):
        invested += contribution
        if periodic_rate == 0:
            future_value += contribution
        else:
            future_value += contribution * growth ** (total_periods - period + offset)

        if period % interval == 0 and period < total_periods:
            contribution *= step_factor

    return future_value, invested


def calculate_sip(
    amount: float,
    periods_per_year: int,
    years: float,
    annual_rate: float,
    timing: Union[PaymentTiming, str] = PaymentTiming.END,
    step_up_periods_per_year: Optional[int] = None,
    step_up_percent: float = 0.0,
) -> Optional[Tuple[float, float]]:
    """
    Calculate SIP future value and total amount contributed.

    Args:
        amount: Contribution per period (the first period when stepping up)
        periods_per_year: Contributions per year (12 for monthly)
        years: Investment horizon in years
        annual_rate: Expected annual return in percent
        timing: Contributions at the beginning or end of each period
        step_up_periods_per_year: Step-ups per year, or None for a flat SIP;
            no more frequent than contributions
        step_up_percent: Increase applied at each step-up, in percent

    Returns:
        (future_value, invested), or None for invalid inputs
    """
    timing = PaymentTiming(timing)
    if not _valid_inputs(amount, years, annual_rate) or periods_per_year <= 0:
        return None

    periodic_rate = annual_rate / 100 / periods_per_year
    total_periods = years * periods_per_year

    try:
        if step_up_periods_per_year is None:
            future_value = _closed_form_future_value(
                amount, periodic_rate, total_periods, timing
            )
            invested = amount * total_periods
        else:
            if not 0 < step_up_periods_per_year <= periods_per_year:
                return None
            if not is_non_negative(step_up_percent):
                return None
            if total_periods > MAX_STEP_UP_PERIODS:
                return None
            future_value, invested = _accumulate_step_up(
                amount,
                periodic_rate,
                total_periods,
                timing,
                step_up_interval(periods_per_year, step_up_periods_per_year),
                step_up_percent,
            )
    except OverflowError:
        return None

    if not (is_finite(future_value) and is_finite(invested)):
        return None
    return future_value, invested


def calculate_sip_future_value(
    amount: float,
    periods_per_year: int,
    years: float,
    annual_rate: float,
    timing: Union[PaymentTiming, str] = PaymentTiming.END,
    step_up_periods_per_year: Optional[int] = None,
    step_up_percent: float = 0.0,
) -> Optional[float]:
    """SIP maturity value; see calculate_sip."""
    result = calculate_sip(
        amount,
        periods_per_year,
        years,
        annual_rate,
        timing,
        step_up_periods_per_year,
        step_up_percent,
    )
    return None if result is None else result[0]


def calculate_total_invested(
    amount: float,
    periods_per_year: int,
    years: float,
    annual_rate: float = 0.0,
    timing: Union[PaymentTiming, str] = PaymentTiming.END,
    step_up_periods_per_year: Optional[int] = None,
    step_up_percent: float = 0.0,
) -> Optional[float]:
    """Sum of all contributions over the horizon; see calculate_sip."""
    result = calculate_sip(
        amount,
        periods_per_year,
        years,
        annual_rate,
        timing,
        step_up_periods_per_year,
        step_up_percent,
    )
    return None if result is None else result[1]


def sip(inputs: SipInput) -> Optional[SipResult]:
    """Evaluate the SIP calculator."""
    periods_per_year = inputs.frequency.periods_per_year
    result = calculate_sip(
        amount=inputs.amount,
        periods_per_year=periods_per_year,
        years=inputs.years,
        annual_rate=inputs.annual_rate,
        timing=inputs.timing,
        step_up_periods_per_year=(
            inputs.step_up_frequency.periods_per_year if inputs.step_up else None
        ),
        step_up_percent=inputs.step_up_percent,
    )
    if result is None:
        return None

    future_value, invested = result
    profit = max(future_value - invested, 0.0)
    return SipResult(
        future_value=future_value,
        invested=invested,
        profit=profit,
        periodic_rate=inputs.annual_rate / 100 / periods_per_year,
        total_periods=inputs.years * periods_per_year,
        breakdown=make_breakdown("Invested", invested, "Profit", profit),
    )
