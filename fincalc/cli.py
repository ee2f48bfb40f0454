"""
Command-line front end for the calculators.

Usage:
    fincalc sip --amount 5000 --duration 5 --return 10
    fincalc goal --query "goal=1000000&duration=10&return=12&inflation=6"
    fincalc multiplier --mode time --principal 10000 --return 10 --multiplier 2 --json
"""

import argparse
import json
import logging
import re
import sys
from typing import Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel

from fincalc.calculations import CALCULATORS, get_calculator
from fincalc.calculations.common import CalculationResult, Frequency
from fincalc.calculations.multiplier import MultiplierMode
from fincalc.config import Settings, get_settings
from fincalc.share import QUERY_PARAMS, parse_query, share_url, to_input

logger = logging.getLogger(__name__)

PLACEHOLDER = "—"


def configure_logging(level: str) -> None:
    """Send log records to stderr at the given level name."""
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )


def _flag_name(key: str) -> str:
    """Query key to CLI flag, e.g. stepupFrequency -> --stepup-frequency."""
    return "--" + re.sub(r"(?<!^)(?=[A-Z])", "-", key).lower()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fincalc", description=get_settings().app_name
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    subparsers = parser.add_subparsers(dest="calculator", required=True)

    for name, calculator in CALCULATORS.items():
        sub = subparsers.add_parser(name, help=calculator.title)
        for param in QUERY_PARAMS[name]:
            flag = _flag_name(param.key)
            if param.key == "stepup":
                sub.add_argument(
                    flag, dest=param.key, action="store_const", const="true",
                    help="enable step-up contributions",
                )
            elif isinstance(param.convert, type):
                sub.add_argument(
                    flag, dest=param.key,
                    choices=[member.value for member in param.convert],
                )
            else:
                sub.add_argument(flag, dest=param.key, metavar="NUMBER")
        sub.add_argument("--query", help="read inputs from a share-link query string")
        sub.add_argument("--json", action="store_true", help="print the result as JSON")
        sub.add_argument("--share", action="store_true", help="also print a share link")

    return parser


def collect_params(calculator: str, args: argparse.Namespace) -> Dict[str, str]:
    """Merge validated --query values with explicit flags; flags win."""
    params = parse_query(calculator, args.query) if args.query else {}
    for param in QUERY_PARAMS[calculator]:
        value = getattr(args, param.key, None)
        if value is not None:
            params[param.key] = value
    return params


def _json_ready(model: BaseModel) -> dict:
    """Plain JSON values for a record; unset or non-finite numbers become null."""
    return json.loads(model.model_dump_json())


def _money(value: float, settings: Settings) -> str:
    return f"{settings.currency_symbol}{value:,.{settings.display_decimals}f}"


def _percent(value: float, settings: Settings) -> str:
    return f"{value:.{settings.display_decimals}f}%"


def summary_lines(
    calculator: str, inputs, result: CalculationResult, settings: Settings
) -> List[Tuple[str, str]]:
    """Headline figures for a calculator result as (label, text) pairs."""
    if calculator in ("sip", "lumpsum"):
        return [
            ("Future Value", _money(result.future_value, settings)),
            ("Total Invested", _money(result.invested, settings)),
            ("Profit", _money(result.profit, settings)),
        ]
    if calculator == "cagr":
        return [
            ("CAGR", _percent(result.cagr, settings)),
            ("Absolute Gain", _money(result.absolute_gain, settings)),
            ("Total Return", _percent(result.total_return, settings)),
        ]
    if calculator == "inflation":
        lines = [
            ("Future Purchasing Power", _money(result.purchasing_power, settings)),
            ("Amount Needed", _money(result.future_amount, settings)),
        ]
        if result.purchasing_power_loss is not None:
            lines.append(
                ("Purchasing Power Loss", _percent(result.purchasing_power_loss, settings))
            )
        return lines
    if calculator == "goal":
        frequency: Frequency = inputs.frequency
        return [
            (f"Required {frequency.label} SIP", _money(result.required_sip, settings)),
            ("Inflation-Adjusted Goal", _money(result.inflation_adjusted_goal, settings)),
            ("Total Invested", _money(result.invested, settings)),
            ("Returns", _money(result.returns, settings)),
        ]
    if result.mode == MultiplierMode.TIME:
        return [
            ("Time Required", f"{result.years:.{settings.display_decimals}f} years"),
            ("Future Value", _money(result.future_value, settings)),
        ]
    return [
        ("Multiplier", f"{result.multiplier:.{settings.display_decimals}f}x"),
        ("Growth", _money(result.growth, settings)),
    ]


def render_report(
    calculator: str, inputs, result: CalculationResult, settings: Settings
) -> str:
    """Plain-text report: headline figures followed by the breakdown."""
    lines = [get_calculator(calculator).title]
    rows = summary_lines(calculator, inputs, result, settings)
    width = max(len(label) for label, _ in rows)
    lines.extend(f"  {label:<{width}}  {text}" for label, text in rows)

    lines.append("Breakdown")
    total = result.breakdown_total
    for item in result.breakdown:
        share = item.value / total * 100 if total > 0 else 0.0
        lines.append(
            f"  {item.name:<{width}}  {_money(item.value, settings)} ({share:.1f}%)"
        )
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging("DEBUG" if args.verbose or settings.debug else settings.log_level)

    calculator = get_calculator(args.calculator)
    params = collect_params(calculator.name, args)
    inputs = to_input(calculator.name, params)
    logger.debug("Evaluating %s with %s", calculator.name, inputs)

    result = calculator.evaluate(inputs)

    if args.json:
        payload = {
            "calculator": calculator.name,
            "inputs": _json_ready(inputs),
            "result": _json_ready(result) if result is not None else None,
        }
        if args.share:
            payload["share_url"] = share_url(calculator.name, inputs)
        print(json.dumps(payload, indent=2, ensure_ascii=False, allow_nan=False))
    elif result is None:
        print(f"{calculator.title}: {PLACEHOLDER}")
    else:
        print(render_report(calculator.name, inputs, result, settings))
        if args.share:
            print(f"Share: {share_url(calculator.name, inputs)}")

    if result is None:
        logger.debug("No result for %s", calculator.name)
        print(
            "Enter positive amounts and durations (rates may be zero).",
            file=sys.stderr,
        )
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
