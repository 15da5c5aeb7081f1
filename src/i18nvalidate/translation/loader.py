"""Message catalog files.

Catalogs are JSON or YAML documents mapping message ids to text. Nested
mappings are flattened with dots, so a catalog can declare field display
names by record type:

    # messages_pt.yaml
    required: "{0} precisa ser preenchido"
    min:
      string: "{0} precisa de pelo menos {1} caracteres"
    Address:
      City: Cidade

Top-level keys naming a rule known to the engine replace that rule's
template; every other key is added to the context as-is.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Mapping

import yaml

from i18nvalidate.errors import ConfigSourceError
from i18nvalidate.translation.context import TranslationContext

if TYPE_CHECKING:
    from i18nvalidate.rules.engine import RuleEngine

logger = logging.getLogger(__name__)

RegisterTranslationsFunc = Callable[["RuleEngine", TranslationContext], None]

CATALOG_SUFFIXES = (".yaml", ".yml", ".json")


def load_catalog_file(path: str | Path) -> dict[str, Any]:
    """Load a catalog document.

    Args:
        path: JSON (.json) or YAML (.yaml, .yml) file

    Returns:
        The parsed mapping (empty for an empty document)

    Raises:
        ConfigSourceError: If the file cannot be read or is not a mapping
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix == ".json":
                data = json.load(f)
            elif path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                raise ConfigSourceError(f"Unsupported catalog format: {path}")
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigSourceError(f"Failed to load catalog {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigSourceError(f"Catalog {path} must contain a mapping")
    return data


def flatten_messages(data: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten nested mappings into dotted message ids."""
    flat: dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten_messages(value, full_key))
        else:
            flat[full_key] = str(value)
    return flat


class FileCatalogLoader:
    """Loads ``<prefix><locale>`` catalogs from a directory.

    YAML files take precedence over JSON when both exist for a locale.
    """

    def __init__(self, directory: str | Path, prefix: str = "messages_"):
        self.directory = Path(directory)
        self.prefix = prefix

    def catalog_path(self, locale_code: str) -> Path | None:
        """Path of the locale's catalog file, or None if there is none."""
        candidates = (
            self.directory / f"{self.prefix}{locale_code}{suffix}"
            for suffix in CATALOG_SUFFIXES
        )
        return next((path for path in candidates if path.is_file()), None)

    def supports(self, locale_code: str) -> bool:
        """Check if a catalog file exists for the locale."""
        return self.catalog_path(locale_code) is not None

    def load(self, locale_code: str) -> dict[str, Any] | None:
        """Load the catalog for a locale, or None if there is no file."""
        path = self.catalog_path(locale_code)
        if path is None:
            return None
        logger.debug("Loading catalog %s for locale %s", path, locale_code)
        return load_catalog_file(path)

    def register(self, engine: "RuleEngine", context: TranslationContext) -> None:
        """Apply the catalog of the context's locale.

        Matches the ``register_translations`` callback signature of
        ``LocaleEntry``.
        """
        data = self.load(context.locale_code)
        if not data:
            return

        for key, value in data.items():
            if engine.has_rule(key) and isinstance(value, (str, Mapping)):
                engine.register_translation(key, context, value, override=True)
            elif isinstance(value, Mapping):
                for sub_key, text in flatten_messages(value, key).items():
                    context.add(sub_key, text, override=True)
            else:
                context.add(key, str(value), override=True)

    def wrap(self, base: RegisterTranslationsFunc | None) -> RegisterTranslationsFunc:
        """Chain a base callback with this catalog's overrides.

        Args:
            base: Callback run first (typically default rule translations)

        Returns:
            Callback running ``base`` then ``register``
        """

        def register_translations(
            engine: "RuleEngine", context: TranslationContext
        ) -> None:
            if base is not None:
                base(engine, context)
            self.register(engine, context)

        return register_translations
