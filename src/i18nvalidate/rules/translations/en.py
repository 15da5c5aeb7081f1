"""Default English rule messages."""

from __future__ import annotations

from typing import TYPE_CHECKING

from i18nvalidate.translation.context import TranslationContext

if TYPE_CHECKING:
    from i18nvalidate.rules.engine import RuleEngine

MESSAGES: dict[str, str | dict[str, str]] = {
    "required": "{0} is a required field",
    "email": "{0} must be a valid email address",
    "url": "{0} must be a valid URL",
    "uuid": "{0} must be a valid UUID",
    "alpha": "{0} can only contain alphabetic characters",
    "numeric": "{0} must be a valid numeric value",
    "oneof": "{0} must be one of [{1}]",
    "min": {
        "string": "{0} must be at least {1} characters in length",
        "number": "{0} must be {1} or greater",
        "items": "{0} must contain at least {1} items",
    },
    "max": {
        "string": "{0} must be a maximum of {1} characters in length",
        "number": "{0} must be {1} or less",
        "items": "{0} must contain at maximum {1} items",
    },
    "len": {
        "string": "{0} must be {1} characters in length",
        "number": "{0} must be equal to {1}",
        "items": "{0} must contain {1} items",
    },
    "gt": {
        "string": "{0} must be greater than {1} characters in length",
        "number": "{0} must be greater than {1}",
        "items": "{0} must contain more than {1} items",
    },
    "gte": {
        "string": "{0} must be at least {1} characters in length",
        "number": "{0} must be {1} or greater",
        "items": "{0} must contain at least {1} items",
    },
    "lt": {
        "string": "{0} must be less than {1} characters in length",
        "number": "{0} must be less than {1}",
        "items": "{0} must contain less than {1} items",
    },
    "lte": {
        "string": "{0} must be at maximum {1} characters in length",
        "number": "{0} must be {1} or less",
        "items": "{0} must contain at maximum {1} items",
    },
}


def register_default_translations(engine: "RuleEngine", context: TranslationContext) -> None:
    """Register the English template of every built-in rule."""
    for rule, template in MESSAGES.items():
        engine.register_translation(rule, context, template)
