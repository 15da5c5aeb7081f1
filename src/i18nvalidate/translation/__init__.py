"""Translation engine: per-locale contexts, the multi-locale coordinator
and catalog file loading."""

from i18nvalidate.translation.context import TranslationContext
from i18nvalidate.translation.universal import UniversalTranslator
from i18nvalidate.translation.loader import (
    FileCatalogLoader,
    RegisterTranslationsFunc,
    flatten_messages,
    load_catalog_file,
)

__all__ = [
    "TranslationContext",
    "UniversalTranslator",
    "FileCatalogLoader",
    "RegisterTranslationsFunc",
    "flatten_messages",
    "load_catalog_file",
]
