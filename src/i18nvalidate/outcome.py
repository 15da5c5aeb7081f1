"""Result of a failed validation."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterator

from i18nvalidate.rules.engine import FieldViolation


@dataclass
class ValidationOutcome:
    """Rule violations of one record, with translated messages.

    Attributes:
        violations: The untranslated violations reported by the rule engine
        translated: Field namespace (e.g. "User.FirstName") -> translated
            message. One entry per violated namespace.
    """

    violations: list[FieldViolation] = field(default_factory=list)
    translated: dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        """Translated messages joined with "; " (order not guaranteed)."""
        return "; ".join(self.translated.values())

    def __len__(self) -> int:
        return len(self.translated)

    def __iter__(self) -> Iterator[str]:
        return iter(self.translated)

    def __contains__(self, namespace: object) -> bool:
        return namespace in self.translated

    def __getitem__(self, namespace: str) -> str:
        return self.translated[namespace]

    @property
    def namespaces(self) -> list[str]:
        """Violated field namespaces."""
        return list(self.translated.keys())

    def message_for(self, namespace: str) -> str | None:
        """Translated message of a field namespace, or None."""
        return self.translated.get(namespace)

    def violations_for(self, namespace: str) -> list[FieldViolation]:
        """Raw violations of a field namespace."""
        return [v for v in self.violations if v.namespace == namespace]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "errors": dict(self.translated),
            "violations": [v.to_dict() for v in self.violations],
        }

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)
