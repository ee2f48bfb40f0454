"""
Finance Calculation Engine

Pure, stateless calculators for personal-finance planning.
Every calculator returns None instead of raising when its inputs are
missing or out of range.
"""

from typing import Callable, Dict, NamedTuple, Optional, Type

from pydantic import BaseModel

from fincalc.calculations import cagr, common, goal, inflation, lumpsum, multiplier, sip


class Calculator(NamedTuple):
    """A calculator's input record type and its entry point."""

    name: str
    title: str
    input_model: Type[BaseModel]
    evaluate: Callable[[BaseModel], Optional[common.CalculationResult]]


CALCULATORS: Dict[str, Calculator] = {
    calc.name: calc
    for calc in (
        Calculator("sip", "SIP Calculator", sip.SipInput, sip.sip),
        Calculator("lumpsum", "Lumpsum Calculator", lumpsum.LumpsumInput, lumpsum.lumpsum),
        Calculator("cagr", "CAGR Calculator", cagr.CagrInput, cagr.cagr),
        Calculator(
            "inflation", "Inflation Calculator", inflation.InflationInput, inflation.inflation
        ),
        Calculator("goal", "Goal Calculator", goal.GoalInput, goal.goal),
        Calculator(
            "multiplier",
            "Multiplier Calculator",
            multiplier.MultiplierInput,
            multiplier.multiplier,
        ),
    )
}


def get_calculator(name: str) -> Calculator:
    """Look up a calculator by name; unknown names raise ValueError."""
    try:
        return CALCULATORS[name]
    except KeyError:
        raise ValueError(
            f"Unknown calculator {name!r}; expected one of {', '.join(CALCULATORS)}"
        ) from None


__all__ = [
    "CALCULATORS",
    "Calculator",
    "get_calculator",
    "cagr",
    "common",
    "goal",
    "inflation",
    "lumpsum",
    "multiplier",
    "sip",
]
