"""Rule engine: field rules on dataclass records and their messages."""

from i18nvalidate.rules.builtin import BUILTIN_RULES, RuleFunc, is_empty, value_kind
from i18nvalidate.rules.engine import (
    FieldViolation,
    RuleEngine,
    RuleSpec,
    TranslateFunc,
    default_translate,
    parse_rule_tag,
)
from i18nvalidate.rules.translations import DEFAULT_TRANSLATIONS, get_default_translations

__all__ = [
    "BUILTIN_RULES",
    "RuleFunc",
    "is_empty",
    "value_kind",
    "FieldViolation",
    "RuleEngine",
    "RuleSpec",
    "TranslateFunc",
    "default_translate",
    "parse_rule_tag",
    "DEFAULT_TRANSLATIONS",
    "get_default_translations",
]
