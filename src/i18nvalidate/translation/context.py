"""Per-locale translation context.

A ``TranslationContext`` stores message templates for one locale. Two kinds
of entries share the same table:
- rule templates registered by the rule engine (e.g. "required")
- field display names registered from record metadata (e.g. "User.FirstName")
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Iterator

from i18nvalidate.errors import MessageFormatError, RegistrationError
from i18nvalidate.locales import Locale

logger = logging.getLogger(__name__)


class TranslationContext:
    """Thread-safe message table for a single locale.

    Example:
        ctx = TranslationContext(get_locale("pt"))
        ctx.add("required", "{0} é obrigatório")
        ctx.translate("required", "Nome")  # "Nome é obrigatório"
    """

    def __init__(self, locale: Locale):
        self.locale = locale
        self._messages: dict[str, str] = {}
        self._lock = threading.RLock()

    @property
    def locale_code(self) -> str:
        """Code of the locale this context translates into."""
        return self.locale.code

    def add(self, key: str, text: str, override: bool = False) -> None:
        """Register a message.

        Re-adding an identical message is a no-op.

        Args:
            key: Message id
            text: Message template or display name
            override: Replace an existing, different message

        Raises:
            RegistrationError: If the key is empty, or already holds a
                different message and override is False
        """
        if not key:
            raise RegistrationError(self.locale_code, key, "message id is empty")

        with self._lock:
            existing = self._messages.get(key)
            if existing is not None and existing != text and not override:
                raise RegistrationError(
                    self.locale_code,
                    key,
                    f"conflicting translation already registered ({existing!r})",
                )
            self._messages[key] = text

    def lookup(self, key: str) -> str | None:
        """Get a registered message, or None."""
        with self._lock:
            return self._messages.get(key)

    def translate(self, key: str, *params: Any) -> str:
        """Format a registered template with positional parameters.

        Templates use ``{0}``, ``{1}``... placeholders.

        Raises:
            KeyError: If the key is not registered
            MessageFormatError: If the template does not accept the parameters
        """
        template = self.lookup(key)
        if template is None:
            raise KeyError(key)
        try:
            return template.format(*params)
        except (IndexError, KeyError, ValueError) as e:
            raise MessageFormatError(key, template, e) from e

    def keys(self) -> list[str]:
        """Get all message ids."""
        with self._lock:
            return list(self._messages.keys())

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._messages

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __repr__(self) -> str:
        return f"TranslationContext({self.locale_code!r}, messages={len(self)})"
