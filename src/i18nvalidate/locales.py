"""Locale definitions.

A ``Locale`` names a locale code and how to display it. Translation contexts
are keyed by ``Locale.code``; two locales with the same code are equal.

Example:
    from i18nvalidate.locales import get_locale

    pt = get_locale("pt")
    pt.native_name  # "Português"
"""

from __future__ import annotations

from dataclasses import dataclass, field

from i18nvalidate.errors import UnsupportedLocaleError


@dataclass(frozen=True)
class Locale:
    """A locale code with its English and native display names.

    Missing names default to the code.
    """

    code: str
    name: str = field(default="", compare=False)
    native_name: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if not self.name:
            object.__setattr__(self, "name", self.code)
        if not self.native_name:
            object.__setattr__(self, "native_name", self.name)

    def __str__(self) -> str:
        return self.code


# Built-in locale definitions
BUILTIN_LOCALES: dict[str, Locale] = {
    "en": Locale("en", "English", "English"),
    "en_US": Locale("en_US", "English (US)", "English (US)"),
    "en_GB": Locale("en_GB", "English (UK)", "English (UK)"),
    "pt": Locale("pt", "Portuguese", "Português"),
    "pt_BR": Locale("pt_BR", "Portuguese (Brazil)", "Português (Brasil)"),
    "pt_PT": Locale("pt_PT", "Portuguese (Portugal)", "Português (Portugal)"),
    "ko": Locale("ko", "Korean", "한국어"),
    "ko_KR": Locale("ko_KR", "Korean (Korea)", "한국어 (대한민국)"),
    "es": Locale("es", "Spanish", "Español"),
    "de": Locale("de", "German", "Deutsch"),
    "fr": Locale("fr", "French", "Français"),
    "ja": Locale("ja", "Japanese", "日本語"),
    "ar": Locale("ar", "Arabic", "العربية"),
}


def get_locale(code: str) -> Locale:
    """Get a built-in locale by code.

    Args:
        code: Locale code

    Returns:
        The built-in Locale

    Raises:
        UnsupportedLocaleError: If no built-in locale has this code
    """
    try:
        return BUILTIN_LOCALES[code]
    except KeyError:
        raise UnsupportedLocaleError(code, sorted(BUILTIN_LOCALES)) from None


def list_locales() -> list[str]:
    """List built-in locale codes."""
    return sorted(BUILTIN_LOCALES.keys())
