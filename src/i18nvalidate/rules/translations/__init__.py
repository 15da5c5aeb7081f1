"""Default rule message translations, one module per language."""

from __future__ import annotations

from i18nvalidate.rules.translations import en, ko, pt
from i18nvalidate.translation.loader import RegisterTranslationsFunc

DEFAULT_TRANSLATIONS: dict[str, RegisterTranslationsFunc] = {
    "en": en.register_default_translations,
    "pt": pt.register_default_translations,
    "ko": ko.register_default_translations,
}


def get_default_translations(locale_code: str) -> RegisterTranslationsFunc | None:
    """Get the default rule translations for a locale.

    Regional codes fall back to their language ("pt_BR" -> "pt").
    """
    callback = DEFAULT_TRANSLATIONS.get(locale_code)
    if callback is None:
        language = locale_code.replace("-", "_").split("_")[0].lower()
        callback = DEFAULT_TRANSLATIONS.get(language)
    return callback


__all__ = ["DEFAULT_TRANSLATIONS", "get_default_translations", "en", "ko", "pt"]
