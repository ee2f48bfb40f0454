"""
Shareable Query Strings

Serializes calculator inputs to URL query parameters and reads them back.
Each incoming parameter is checked against the same constraint the
calculator applies to typed-in values; parameters that fail are dropped
so the form falls back to its default for that field.
"""

import logging
import math
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Optional
from urllib.parse import parse_qsl, urlencode

from pydantic import BaseModel

from fincalc.calculations import get_calculator
from fincalc.calculations.common import (
    Frequency,
    PaymentTiming,
    is_finite,
    is_non_negative,
    is_positive,
    parse_number,
)
from fincalc.calculations.multiplier import MultiplierMode
from fincalc.config import get_settings

logger = logging.getLogger(__name__)


class QueryParam(NamedTuple):
    """Maps one query-string key onto an input-record field."""

    key: str
    field: str
    accepts: Callable[[str], bool]
    convert: Callable[[str], Any]


def _number(check: Callable[[float], bool]) -> Callable[[str], bool]:
    return lambda raw: check(parse_number(raw))


def _above_one(value: float) -> bool:
    return is_finite(value) and value > 1


def _choice(enum_cls: type) -> Callable[[str], bool]:
    values = {member.value for member in enum_cls}
    return lambda raw: raw in values


def _flag(raw: str) -> bool:
    return raw in ("true", "false")


def _number_param(key: str, field: str, check: Callable[[float], bool]) -> QueryParam:
    return QueryParam(key, field, _number(check), parse_number)


def _enum_param(key: str, field: str, enum_cls: type) -> QueryParam:
    return QueryParam(key, field, _choice(enum_cls), enum_cls)


QUERY_PARAMS: Dict[str, List[QueryParam]] = {
    "sip": [
        _number_param("amount", "amount", is_positive),
        _enum_param("frequency", "frequency", Frequency),
        _number_param("duration", "years", is_positive),
        _number_param("return", "annual_rate", is_non_negative),
        _enum_param("timing", "timing", PaymentTiming),
        QueryParam("stepup", "step_up", _flag, lambda raw: raw == "true"),
        _enum_param("stepupFrequency", "step_up_frequency", Frequency),
        _number_param("stepupPercent", "step_up_percent", is_non_negative),
    ],
    "lumpsum": [
        _number_param("amount", "principal", is_positive),
        _number_param("duration", "years", is_positive),
        _number_param("return", "annual_rate", is_non_negative),
    ],
    "cagr": [
        _number_param("initial", "initial", is_positive),
        _number_param("final", "final", is_positive),
        _number_param("duration", "years", is_positive),
    ],
    "inflation": [
        _number_param("amount", "amount", is_positive),
        _number_param("rate", "inflation_rate", is_non_negative),
        _number_param("duration", "years", is_positive),
    ],
    "goal": [
        _number_param("goal", "goal", is_positive),
        _enum_param("frequency", "frequency", Frequency),
        _number_param("duration", "years", is_positive),
        _number_param("return", "annual_rate", is_non_negative),
        _number_param("inflation", "inflation_rate", is_non_negative),
    ],
    "multiplier": [
        _enum_param("mode", "mode", MultiplierMode),
        _number_param("principal", "principal", is_positive),
        _number_param("return", "annual_rate", is_positive),
        _number_param("multiplier", "multiplier", _above_one),
        _number_param("final", "final", is_positive),
    ],
}


def _params_for(calculator: str) -> List[QueryParam]:
    get_calculator(calculator)
    return QUERY_PARAMS[calculator]


def parse_query(calculator: str, query: str) -> Dict[str, str]:
    """
    Read a query string, keeping only parameters that pass validation.

    Args:
        calculator: Calculator name (e.g. "sip")
        query: Raw query string, with or without the leading "?"

    Returns:
        Accepted raw values keyed by query-string key
    """
    params = {param.key: param for param in _params_for(calculator)}
    accepted: Dict[str, str] = {}

    for key, raw in parse_qsl(query.lstrip("?"), keep_blank_values=True):
        param = params.get(key)
        if param is None:
            logger.debug("Ignoring unknown %s query parameter %r", calculator, key)
            continue
        if not param.accepts(raw):
            logger.debug("Dropping invalid %s query parameter %s=%r", calculator, key, raw)
            continue
        accepted[key] = raw

    return accepted


def to_input(calculator: str, params: Mapping[str, str]) -> BaseModel:
    """
    Build the calculator's input record from raw query values.

    Values are converted without validation, so invalid entries reach the
    engine and yield no result. Absent frequency and timing fall back to
    the configured defaults.
    """
    settings = get_settings()
    fields: Dict[str, Any] = {}

    for param in _params_for(calculator):
        if param.key in params:
            fields[param.field] = param.convert(params[param.key])

    if calculator in ("sip", "goal"):
        fields.setdefault("frequency", settings.default_frequency)
    if calculator == "sip":
        fields.setdefault("timing", settings.default_payment_timing)

    return get_calculator(calculator).input_model(**fields)


def format_param(value: Any) -> Optional[str]:
    """Render one value for a query string; None means omit it."""
    if value is None:
        return None
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        if float(value).is_integer():
            return str(int(value))
        return repr(float(value))
    text = str(value).strip()
    return text or None


def from_input(calculator: str, inputs: BaseModel) -> Dict[str, str]:
    """Collect an input record's fields as query values, skipping empty ones."""
    values: Dict[str, str] = {}
    for param in _params_for(calculator):
        rendered = format_param(getattr(inputs, param.field))
        if rendered is not None:
            values[param.key] = rendered
    return values


def build_query(calculator: str, params: Mapping[str, Any]) -> str:
    """Encode values keyed by query key, in the calculator's field order."""
    pairs = []
    for param in _params_for(calculator):
        rendered = format_param(params.get(param.key))
        if rendered is not None:
            pairs.append((param.key, rendered))
    return urlencode(pairs)


def share_url(calculator: str, inputs: BaseModel) -> str:
    """Absolute link that reopens the calculator with these inputs."""
    base = get_settings().base_url.rstrip("/")
    query = build_query(calculator, from_input(calculator, inputs))
    url = f"{base}/{calculator}"
    return f"{url}?{query}" if query else url
