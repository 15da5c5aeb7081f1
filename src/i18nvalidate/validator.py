"""Record validation with translated error messages.

Example:
    from dataclasses import dataclass, field
    from i18nvalidate import LocaleEntry, Validator

    @dataclass
    class User:
        FirstName: str = field(
            default="",
            metadata={"validate": "required", "trans": "en:First Name;pt:Primeiro Nome"},
        )

    v = Validator("en", LocaleEntry.builtin("en"), LocaleEntry.builtin("pt"))
    outcome = v.validate(User(), "pt")
    outcome["User.FirstName"]  # "Primeiro Nome é obrigatório"
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from i18nvalidate.errors import (
    DefaultLocaleNotFoundError,
    NoLocalesSuppliedError,
    RecordValidationError,
    UnsupportedLocaleError,
)
from i18nvalidate.locales import Locale, get_locale
from i18nvalidate.outcome import ValidationOutcome
from i18nvalidate.registry import TranslationRegistry
from i18nvalidate.resolver import resolve_context
from i18nvalidate.rules.engine import RuleEngine
from i18nvalidate.rules.translations import DEFAULT_TRANSLATIONS, get_default_translations
from i18nvalidate.translation.context import TranslationContext
from i18nvalidate.translation.loader import RegisterTranslationsFunc
from i18nvalidate.translation.universal import UniversalTranslator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocaleEntry:
    """A locale together with the callback registering its rule messages.

    ``register_translations(engine, context)`` is called once while the
    Validator is built; any exception it raises aborts construction.
    """

    locale: Locale
    register_translations: RegisterTranslationsFunc

    @classmethod
    def builtin(cls, code: str) -> "LocaleEntry":
        """Entry for a built-in locale with its default rule messages.

        Raises:
            UnsupportedLocaleError: If the locale or its default messages
                are not built in
        """
        locale = get_locale(code)
        callback = get_default_translations(code)
        if callback is None:
            raise UnsupportedLocaleError(code, sorted(DEFAULT_TRANSLATIONS))
        return cls(locale=locale, register_translations=callback)

    @property
    def code(self) -> str:
        return self.locale.code


class Validator:
    """Validates records and translates their violations.

    A Validator instance is safe for concurrent use by multiple threads.
    """

    def __init__(
        self,
        default_locale: str,
        *entries: LocaleEntry,
        engine: RuleEngine | None = None,
    ):
        """Initialize validator.

        Args:
            default_locale: Locale used when none (or an unknown one) is requested
            *entries: Supported locales with their rule message callbacks
            engine: Rule engine (default: a new RuleEngine)

        Raises:
            NoLocalesSuppliedError: If no entry is given
            DefaultLocaleNotFoundError: If no entry matches default_locale
        """
        if not entries:
            raise NoLocalesSuppliedError()

        fallback = next((e for e in entries if e.locale.code == default_locale), None)
        if fallback is None:
            raise DefaultLocaleNotFoundError(default_locale, [e.code for e in entries])

        self.engine = engine or RuleEngine()
        self.translator = UniversalTranslator(
            fallback.locale, *(e.locale for e in entries)
        )

        contexts: dict[str, TranslationContext] = {}
        for entry in entries:
            context, found = self.translator.get_translator(entry.code)
            if not found:
                continue
            contexts[entry.code] = context
            entry.register_translations(self.engine, context)

        self._default_locale = default_locale
        self._contexts: Mapping[str, TranslationContext] = MappingProxyType(contexts)
        self._registry = TranslationRegistry(self._contexts)

        logger.debug(
            "Validator ready: default=%s, locales=%s",
            default_locale,
            ", ".join(self._contexts),
        )

    @property
    def default_locale(self) -> str:
        return self._default_locale

    @property
    def locales(self) -> list[str]:
        """Configured locale codes."""
        return list(self._contexts.keys())

    @property
    def contexts(self) -> Mapping[str, TranslationContext]:
        """Read-only locale code -> translation context mapping."""
        return self._contexts

    @property
    def registry(self) -> TranslationRegistry:
        return self._registry

    def context_for(self, locale: str | None = None) -> TranslationContext:
        """The context ``validate`` would use for a requested locale."""
        return resolve_context(locale, self._default_locale, self._contexts)

    def validate(self, data: Any, locale: str | None = None) -> ValidationOutcome | None:
        """Validate a record and translate its violations.

        Args:
            data: Dataclass instance (None is accepted and always valid)
            locale: Requested locale; unknown codes use the default locale

        Returns:
            None if there are no violations, otherwise a ValidationOutcome

        Raises:
            RegistrationError: If a field display name cannot be registered
            RuleEngineError: If the rule engine cannot evaluate data
        """
        if data is None:
            return None

        self._registry.ensure_registered(data)
        context = self.context_for(locale)

        violations = self.engine.evaluate(data)
        if not violations:
            return None

        translated: dict[str, str] = {}
        for violation in violations:
            message = self.engine.render(violation, context)
            field_name = context.lookup(violation.message_id)
            if field_name:
                message = message.replace(violation.field, field_name, 1)
            translated[violation.namespace] = message

        return ValidationOutcome(violations=violations, translated=translated)

    def check(self, data: Any, locale: str | None = None) -> None:
        """Validate a record, raising on violations.

        Raises:
            RecordValidationError: If the record has violations
        """
        outcome = self.validate(data, locale)
        if outcome is not None:
            raise RecordValidationError(outcome)
