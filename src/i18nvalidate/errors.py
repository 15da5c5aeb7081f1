"""Exception hierarchy for i18nvalidate.

Errors fall into three groups:
- ConfigError: raised while building a Validator or loading configuration
- TranslationError: raised by the translation engine (message registration,
  template formatting)
- RuleEngineError: fatal rule engine failures (bad input, unknown rules)

Rule violations are not exceptions. ``Validator.validate`` returns them as a
``ValidationOutcome``; only ``Validator.check`` raises ``RecordValidationError``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

if TYPE_CHECKING:
    from i18nvalidate.outcome import ValidationOutcome


class I18nValidateError(Exception):
    """Base exception for i18nvalidate."""

    pass


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigError(I18nValidateError):
    """Base configuration error."""

    pass


class NoLocalesSuppliedError(ConfigError):
    """Raised when a Validator is built without any locale."""

    def __init__(self) -> None:
        super().__init__("at least one locale must be supplied")


class DefaultLocaleNotFoundError(ConfigError):
    """Raised when the default locale is not among the supplied locales."""

    def __init__(self, default_locale: str, available: Sequence[str]) -> None:
        self.default_locale = default_locale
        self.available = list(available)
        super().__init__(
            f"default language '{default_locale}' not found in supplied locales "
            f"({', '.join(self.available)})"
        )


class UnsupportedLocaleError(ConfigError):
    """Raised when a locale code has no built-in definition."""

    def __init__(self, locale_code: str, available: Sequence[str]) -> None:
        self.locale_code = locale_code
        self.available = list(available)
        super().__init__(
            f"Unsupported locale: {locale_code}. "
            f"Available: {', '.join(self.available)}"
        )


class ConfigSourceError(ConfigError):
    """Raised when a configuration source cannot be read or parsed."""

    pass


# =============================================================================
# Translation Errors
# =============================================================================


class TranslationError(I18nValidateError):
    """Base error of the translation engine."""

    pass


class RegistrationError(TranslationError):
    """Raised when a message id cannot be registered in a context."""

    def __init__(self, locale_code: str, key: str, reason: str) -> None:
        self.locale_code = locale_code
        self.key = key
        self.reason = reason
        super().__init__(
            f"cannot register '{key}' for locale '{locale_code}': {reason}"
        )


class MessageFormatError(TranslationError):
    """Raised when a template cannot be formatted with its parameters."""

    def __init__(self, key: str, template: str, error: Exception) -> None:
        self.key = key
        self.template = template
        super().__init__(f"cannot format message '{key}' ({template!r}): {error}")


# =============================================================================
# Rule Engine Errors
# =============================================================================


class RuleEngineError(I18nValidateError):
    """Base error for fatal rule engine failures."""

    pass


class InvalidValidationError(RuleEngineError):
    """Raised when the rule engine is given something that is not a record."""

    def __init__(self, value: Any) -> None:
        self.value_type = type(value)
        super().__init__(
            f"validation target must be a dataclass instance, "
            f"got {self.value_type.__name__}"
        )


class UnknownRuleError(RuleEngineError):
    """Raised when a field's rule tag names an unregistered rule."""

    def __init__(self, rule: str, record: str, field: str) -> None:
        self.rule = rule
        self.record = record
        self.field = field
        super().__init__(
            f"undefined validation rule '{rule}' on field '{record}.{field}'"
        )


class RuleParameterError(RuleEngineError):
    """Raised when a rule parameter cannot be interpreted."""

    def __init__(self, rule: str, param: str, reason: str) -> None:
        self.rule = rule
        self.param = param
        super().__init__(f"bad parameter {param!r} for rule '{rule}': {reason}")


# =============================================================================
# Validation Failure
# =============================================================================


class RecordValidationError(I18nValidateError):
    """Raised by ``Validator.check`` when a record has rule violations.

    The string form is the translated messages joined with ``"; "``.
    """

    def __init__(self, outcome: "ValidationOutcome") -> None:
        self.outcome = outcome
        super().__init__(str(outcome))

    @property
    def translated(self) -> dict[str, str]:
        """Namespace -> translated message mapping."""
        return self.outcome.translated
