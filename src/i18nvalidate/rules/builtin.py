"""Built-in validation rules.

Every rule is a function ``(value, param) -> bool`` returning True when the
value satisfies the rule. ``param`` is the raw text after ``=`` in the rule
tag (empty when the rule takes no parameter).
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Any, Callable, Sized

from i18nvalidate.errors import RuleParameterError

RuleFunc = Callable[[Any, str], bool]

# Patterns for common formats
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
URL_PATTERN = re.compile(r"^https?://[^\s]+$")
UUID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)
ALPHA_PATTERN = re.compile(r"^[a-zA-Z]+$")
NUMERIC_PATTERN = re.compile(r"^[-+]?[0-9]+(?:\.[0-9]+)?$")

NUMBER_TYPES = (int, float, Decimal)


def value_kind(value: Any) -> str:
    """Classify a value for kind-sensitive rules and messages.

    Returns:
        "number" for numeric values, "items" for collections, "string"
        for text and everything else.
    """
    if isinstance(value, NUMBER_TYPES):
        return "number"
    if isinstance(value, (str, bytes)) or value is None:
        return "string"
    if isinstance(value, Sized):
        return "items"
    return "string"


def is_empty(value: Any) -> bool:
    """True for None and for empty strings or collections."""
    if value is None:
        return True
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def _number_param(rule: str, param: str) -> float:
    try:
        return float(param)
    except ValueError:
        raise RuleParameterError(rule, param, "expected a number") from None


def _measure(rule: str, value: Any, param: str) -> tuple[float, float] | None:
    """Get the (measured, limit) pair compared by length-style rules."""
    if value is None:
        return None
    limit = _number_param(rule, param)
    if isinstance(value, NUMBER_TYPES):
        return float(value), limit
    if isinstance(value, Sized):
        return float(len(value)), limit
    return None


def _compare(rule: str, check: Callable[[float, float], bool]) -> RuleFunc:
    def rule_func(value: Any, param: str) -> bool:
        pair = _measure(rule, value, param)
        if pair is None:
            return False
        return check(*pair)

    rule_func.__name__ = f"rule_{rule}"
    return rule_func


def _matches(pattern: re.Pattern[str]) -> RuleFunc:
    def rule_func(value: Any, param: str) -> bool:
        return isinstance(value, str) and pattern.match(value) is not None

    return rule_func


def required(value: Any, param: str) -> bool:
    return not is_empty(value)


def numeric(value: Any, param: str) -> bool:
    if isinstance(value, NUMBER_TYPES) and not isinstance(value, bool):
        return True
    return isinstance(value, str) and NUMERIC_PATTERN.match(value) is not None


def oneof(value: Any, param: str) -> bool:
    options = param.split()
    if not options:
        raise RuleParameterError("oneof", param, "expected at least one option")
    if value is None:
        return False
    return str(value) in options


BUILTIN_RULES: dict[str, RuleFunc] = {
    "required": required,
    "email": _matches(EMAIL_PATTERN),
    "url": _matches(URL_PATTERN),
    "uuid": _matches(UUID_PATTERN),
    "alpha": _matches(ALPHA_PATTERN),
    "numeric": numeric,
    "min": _compare("min", lambda measured, limit: measured >= limit),
    "max": _compare("max", lambda measured, limit: measured <= limit),
    "len": _compare("len", lambda measured, limit: measured == limit),
    "gt": _compare("gt", lambda measured, limit: measured > limit),
    "gte": _compare("gte", lambda measured, limit: measured >= limit),
    "lt": _compare("lt", lambda measured, limit: measured < limit),
    "lte": _compare("lte", lambda measured, limit: measured <= limit),
    "oneof": oneof,
}

# Rules whose message depends on the kind of the checked value
KIND_SENSITIVE_RULES = frozenset({"min", "max", "len", "gt", "gte", "lt", "lte"})
