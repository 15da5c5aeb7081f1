"""Multi-locale coordinator.

``UniversalTranslator`` owns one ``TranslationContext`` per supported locale
and hands out the fallback context for codes it does not know.
"""

from __future__ import annotations

import logging

from i18nvalidate.locales import Locale
from i18nvalidate.translation.context import TranslationContext

logger = logging.getLogger(__name__)


class UniversalTranslator:
    """Coordinates translation contexts across locales.

    The contexts are created eagerly at construction and never replaced.

    Example:
        uni = UniversalTranslator(get_locale("en"), get_locale("en"), get_locale("pt"))
        ctx, found = uni.get_translator("pt")
    """

    def __init__(self, fallback: Locale, *supported: Locale):
        """Initialize translator.

        Args:
            fallback: Locale used when a requested one is not supported
            *supported: Supported locales (duplicates are ignored)
        """
        self._contexts: dict[str, TranslationContext] = {}
        for locale in (fallback, *supported):
            if locale.code not in self._contexts:
                self._contexts[locale.code] = TranslationContext(locale)
        self._fallback = self._contexts[fallback.code]

    @property
    def fallback(self) -> TranslationContext:
        """The fallback context."""
        return self._fallback

    @property
    def locales(self) -> list[str]:
        """Supported locale codes in registration order."""
        return list(self._contexts.keys())

    def get_translator(self, locale_code: str) -> tuple[TranslationContext, bool]:
        """Get the context for a locale.

        Args:
            locale_code: Locale code

        Returns:
            (context, found). When not found, context is the fallback.
        """
        context = self._contexts.get(locale_code)
        if context is None:
            return self._fallback, False
        return context, True

    def find_translator(self, *locale_codes: str) -> tuple[TranslationContext, bool]:
        """Get the context for the first supported code.

        Args:
            *locale_codes: Candidate codes in order of preference

        Returns:
            (context, found). When none match, context is the fallback.
        """
        for code in locale_codes:
            context = self._contexts.get(code)
            if context is not None:
                return context, True
        logger.debug("No supported locale among %s, using fallback", locale_codes)
        return self._fallback, False

    def __contains__(self, locale_code: str) -> bool:
        return locale_code in self._contexts

    def __len__(self) -> int:
        return len(self._contexts)
