"""Configuration for building validators.

Sources are merged in priority order (later overrides earlier):

    defaults -> configuration file (YAML or JSON) -> environment variables

Environment variables:
    I18NVALIDATE_DEFAULT_LOCALE=en
    I18NVALIDATE_LOCALES=en,pt,ko
    I18NVALIDATE_CATALOG_DIR=./catalogs
    I18NVALIDATE_LOG_LEVEL=DEBUG

Usage:
    >>> from i18nvalidate.config import build_validator, load_config
    >>> config = load_config("i18nvalidate.yaml")
    >>> validator = build_validator(config)
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from i18nvalidate.errors import ConfigError, ConfigSourceError, UnsupportedLocaleError
from i18nvalidate.locales import get_locale
from i18nvalidate.rules.engine import RuleEngine
from i18nvalidate.rules.translations import DEFAULT_TRANSLATIONS, get_default_translations
from i18nvalidate.translation.loader import FileCatalogLoader
from i18nvalidate.validator import LocaleEntry, Validator

logger = logging.getLogger(__name__)

ENV_PREFIX = "I18NVALIDATE_"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class ValidatorConfig:
    """Settings for ``build_validator``.

    Attributes:
        default_locale: Locale used when none or an unknown one is requested
        locales: Configured locale codes (the default is added if missing)
        catalog_dir: Directory of ``messages_<locale>`` catalog overrides
        log_level: Level for the ``i18nvalidate`` logger
    """

    default_locale: str = "en"
    locales: tuple[str, ...] = ("en",)
    catalog_dir: Path | None = None
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        errors = []
        if not self.default_locale:
            errors.append("default_locale must not be empty")
        if self.log_level.upper() not in _LOG_LEVELS:
            errors.append(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        if errors:
            raise ConfigError(f"Configuration validation failed: {', '.join(errors)}")

    @property
    def all_locales(self) -> tuple[str, ...]:
        """Configured locales with the default locale first."""
        rest = (code for code in self.locales if code != self.default_locale)
        return tuple(dict.fromkeys((self.default_locale, *rest)))

    def merge(self, values: Mapping[str, Any]) -> "ValidatorConfig":
        """Return a copy with recognized keys of ``values`` applied."""
        changes: dict[str, Any] = {}
        if values.get("default_locale"):
            changes["default_locale"] = str(values["default_locale"])
        if values.get("locales"):
            changes["locales"] = _parse_locales(values["locales"])
        if values.get("catalog_dir"):
            changes["catalog_dir"] = Path(values["catalog_dir"])
        if values.get("log_level"):
            changes["log_level"] = str(values["log_level"]).upper()
        return replace(self, **changes) if changes else self

    def with_locale(self, code: str) -> "ValidatorConfig":
        """Return a copy that also configures ``code``."""
        if code in self.all_locales:
            return self
        return replace(self, locales=(*self.locales, code))

    @classmethod
    def from_file(cls, path: str | Path) -> "ValidatorConfig":
        """Load configuration from a YAML or JSON file."""
        return cls().merge(read_config_file(path))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ValidatorConfig":
        """Load configuration from ``I18NVALIDATE_*`` environment variables."""
        return cls().merge(read_env(environ))

    def to_dict(self) -> dict[str, Any]:
        return {
            "default_locale": self.default_locale,
            "locales": list(self.locales),
            "catalog_dir": str(self.catalog_dir) if self.catalog_dir else None,
            "log_level": self.log_level,
        }


def _parse_locales(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        parts = value.split(",")
    elif isinstance(value, (list, tuple)):
        parts = [str(v) for v in value]
    else:
        raise ConfigError(f"locales must be a list or comma-separated string, got {value!r}")
    # Duplicates dropped, first occurrence wins
    return tuple(dict.fromkeys(p.strip() for p in parts if p.strip()))


def read_config_file(path: str | Path) -> dict[str, Any]:
    """Read a configuration file into a dictionary.

    Raises:
        ConfigSourceError: If the file is missing, unreadable or malformed
    """
    path = Path(path)
    if not path.exists():
        raise ConfigSourceError(f"Configuration file not found: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content)
        elif path.suffix == ".json":
            data = json.loads(content)
        else:
            raise ConfigSourceError(f"Unsupported configuration format: {path.suffix}")
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigSourceError(f"Failed to load {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigSourceError(f"Configuration file {path} must contain a mapping")
    return data


def read_env(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Collect ``I18NVALIDATE_*`` variables as lower-case keys."""
    environ = os.environ if environ is None else environ
    return {
        key[len(ENV_PREFIX):].lower(): value
        for key, value in environ.items()
        if key.startswith(ENV_PREFIX) and value
    }


def load_config(path: str | Path | None = None, use_env: bool = True) -> ValidatorConfig:
    """Load configuration from defaults, an optional file and the environment.

    Args:
        path: Optional YAML or JSON configuration file
        use_env: Apply ``I18NVALIDATE_*`` environment overrides

    Returns:
        The merged configuration
    """
    config = ValidatorConfig()
    if path is not None:
        config = config.merge(read_config_file(path))
    if use_env:
        config = config.merge(read_env())
    return config


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Attach a stream handler to the ``i18nvalidate`` logger."""
    package_logger = logging.getLogger("i18nvalidate")
    package_logger.setLevel(level.upper())
    if not any(isinstance(h, logging.StreamHandler) for h in package_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        package_logger.addHandler(handler)
    return package_logger


def build_validator(
    config: ValidatorConfig | None = None,
    engine: RuleEngine | None = None,
) -> Validator:
    """Build a Validator from configuration.

    Every configured locale must be built in and have default rule
    messages. Catalog files in ``catalog_dir`` are applied on top.

    Raises:
        UnsupportedLocaleError: If a configured locale is not built in
        ConfigSourceError: If a catalog file is malformed
    """
    config = config or ValidatorConfig()
    loader = FileCatalogLoader(config.catalog_dir) if config.catalog_dir else None

    entries = []
    for code in config.all_locales:
        locale = get_locale(code)
        callback = get_default_translations(code)
        if callback is None:
            raise UnsupportedLocaleError(code, sorted(DEFAULT_TRANSLATIONS))
        if loader is not None:
            callback = loader.wrap(callback)
        entries.append(LocaleEntry(locale=locale, register_translations=callback))

    logger.info("Building validator for locales %s", ", ".join(config.all_locales))
    return Validator(config.default_locale, *entries, engine=engine)


__all__ = [
    "ENV_PREFIX",
    "ValidatorConfig",
    "build_validator",
    "configure_logging",
    "load_config",
    "read_config_file",
    "read_env",
]
