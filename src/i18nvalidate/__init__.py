"""i18nvalidate - Localized Validation Error Messages for Dataclass Records.

Field rules and per-locale display names are declared in dataclass metadata.
The Validator evaluates the rules and returns error messages in the
requested language, with field names replaced by their display names.

Example:
    from dataclasses import dataclass, field
    from i18nvalidate import LocaleEntry, Validator

    @dataclass
    class User:
        FirstName: str = field(
            default="",
            metadata={"validate": "required", "trans": "en:First Name;pt:Primeiro Nome"},
        )
        Email: str = field(
            default="",
            metadata={"validate": "required,email", "trans": "en:Email;pt:E-mail"},
        )

    validator = Validator("en", LocaleEntry.builtin("en"), LocaleEntry.builtin("pt"))

    outcome = validator.validate(User(), "pt")
    outcome["User.FirstName"]  # "Primeiro Nome é obrigatório"
    str(outcome)               # all messages joined with "; "

    validator.validate(User("Daniel", "daniel@example.com"))  # None
"""

from i18nvalidate.errors import (
    ConfigError,
    ConfigSourceError,
    DefaultLocaleNotFoundError,
    I18nValidateError,
    InvalidValidationError,
    MessageFormatError,
    NoLocalesSuppliedError,
    RecordValidationError,
    RegistrationError,
    RuleEngineError,
    RuleParameterError,
    TranslationError,
    UnknownRuleError,
    UnsupportedLocaleError,
)
from i18nvalidate.locales import BUILTIN_LOCALES, Locale, get_locale, list_locales
from i18nvalidate.outcome import ValidationOutcome
from i18nvalidate.registry import TranslationRegistry, describe_record, parse_translation_spec
from i18nvalidate.resolver import resolve_context
from i18nvalidate.rules import FieldViolation, RuleEngine
from i18nvalidate.translation import (
    FileCatalogLoader,
    TranslationContext,
    UniversalTranslator,
)
from i18nvalidate.validator import LocaleEntry, Validator
from i18nvalidate.config import ValidatorConfig, build_validator, load_config
from i18nvalidate.batch import BatchReport, validate_frame, validate_rows

__version__ = "0.1.0"

__all__ = [
    # Core
    "Validator",
    "LocaleEntry",
    "ValidationOutcome",
    "TranslationRegistry",
    "describe_record",
    "parse_translation_spec",
    "resolve_context",
    # Collaborators
    "RuleEngine",
    "FieldViolation",
    "TranslationContext",
    "UniversalTranslator",
    "FileCatalogLoader",
    "Locale",
    "BUILTIN_LOCALES",
    "get_locale",
    "list_locales",
    # Configuration
    "ValidatorConfig",
    "build_validator",
    "load_config",
    # Batch
    "BatchReport",
    "validate_frame",
    "validate_rows",
    # Errors
    "I18nValidateError",
    "ConfigError",
    "ConfigSourceError",
    "NoLocalesSuppliedError",
    "DefaultLocaleNotFoundError",
    "UnsupportedLocaleError",
    "TranslationError",
    "RegistrationError",
    "MessageFormatError",
    "RuleEngineError",
    "InvalidValidationError",
    "UnknownRuleError",
    "RuleParameterError",
    "RecordValidationError",
]
