"""Field display-name registration.

Record fields declare their display names per locale in metadata:

    @dataclass
    class User:
        first_name: str = field(
            default="",
            metadata={"validate": "required", "trans": "en:First Name;pt:Primeiro Nome"},
        )

Before a record type is validated for the first time, ``TranslationRegistry``
walks its fields (and the fields of nested record types) and registers each
display name under ``TypeName.FieldName`` in the matching locale context.
Each type is walked once per registry. A caller racing on a type's first use
waits for the walk in progress, so it never sees a partially registered type.
Nested fields whose annotation cannot be resolved (for example a forward
reference to a class defined inside a function) are followed through the
records they hold at validation time.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import logging
import sys
import threading
import types
import typing
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Mapping, Union

from i18nvalidate.translation.context import TranslationContext

logger = logging.getLogger(__name__)

TRANSLATION_TAG = "trans"


def parse_translation_spec(spec: str) -> list[tuple[str, str]]:
    """Parse a field translation spec.

    Grammar: ``code ":" name (";" code ":" name)*``. Whitespace around tokens
    is trimmed and fragments without ``:`` are dropped.

    Example:
        parse_translation_spec("en:First Name; pt:Primeiro Nome")
        # -> [("en", "First Name"), ("pt", "Primeiro Nome")]
    """
    pairs = []
    for part in spec.split(";"):
        code, sep, name = part.strip().partition(":")
        if not sep:
            continue
        pairs.append((code.strip(), name.strip()))
    return pairs


# =============================================================================
# Record Descriptors
# =============================================================================


@dataclass(frozen=True)
class FieldDescriptor:
    """Translation-relevant facts about one record field.

    ``unresolved`` marks a string annotation that could not be evaluated; the
    nested record type of such a field is only known from runtime values.
    """

    name: str
    translations: tuple[tuple[str, str], ...] = ()
    nested: type | None = None
    unresolved: bool = False


@dataclass(frozen=True)
class RecordDescriptor:
    """Translation-relevant facts about a record type."""

    record_type: type
    fields: tuple[FieldDescriptor, ...]

    @property
    def name(self) -> str:
        return self.record_type.__name__

    @property
    def unresolved_fields(self) -> tuple[FieldDescriptor, ...]:
        return tuple(f for f in self.fields if f.unresolved)


def _is_record_type(candidate: Any) -> bool:
    return isinstance(candidate, type) and dataclasses.is_dataclass(candidate)


def _is_record(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


_SEQUENCE_ORIGINS = (list, tuple, collections.abc.Sequence)


def _strip_optional(annotation: Any) -> Any:
    origin = typing.get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        non_none = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(non_none) == 1:
            return non_none[0]
    return annotation


def _nested_record_type(annotation: Any) -> type | None:
    """Resolve the record type behind Optional and sequence wrappers.

    Handles ``X``, ``Optional[X]``, ``list[X]``, ``tuple[X, ...]``,
    ``Optional[list[X]]`` and ``list[Optional[X]]``.
    """
    candidate = _strip_optional(annotation)
    if typing.get_origin(candidate) in _SEQUENCE_ORIGINS:
        args = typing.get_args(candidate)
        candidate = _strip_optional(args[0]) if args else None
    return candidate if _is_record_type(candidate) else None


def _field_annotations(record_type: type) -> dict[str, Any]:
    """Evaluated field annotations.

    Falls back to evaluating each field on its own when the class as a whole
    cannot be resolved, so one bad forward reference only leaves that
    field's annotation as a string.
    """
    try:
        return typing.get_type_hints(record_type)
    except (NameError, TypeError, AttributeError, SyntaxError) as e:
        logger.debug("Resolving annotations of %s per field: %s", record_type.__name__, e)

    module = sys.modules.get(record_type.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    localns = {record_type.__name__: record_type}

    annotations: dict[str, Any] = {}
    for f in dataclasses.fields(record_type):
        annotation = f.type
        if isinstance(annotation, str):
            try:
                annotation = eval(annotation, globalns, localns)
            except (NameError, TypeError, AttributeError, SyntaxError):
                logger.debug(
                    "Unresolved annotation %s.%s: %r",
                    record_type.__name__,
                    f.name,
                    annotation,
                )
        annotations[f.name] = annotation
    return annotations


@lru_cache(maxsize=None)
def describe_record(record_type: type, tag_name: str = TRANSLATION_TAG) -> RecordDescriptor:
    """Build the descriptor of a dataclass type (cached per type).

    Raises:
        TypeError: If record_type is not a dataclass type
    """
    if not _is_record_type(record_type):
        raise TypeError(f"{record_type!r} is not a dataclass type")

    annotations = _field_annotations(record_type)
    fields = []
    for f in dataclasses.fields(record_type):
        annotation = annotations.get(f.name)
        fields.append(
            FieldDescriptor(
                name=f.name,
                translations=tuple(parse_translation_spec(f.metadata.get(tag_name, ""))),
                nested=_nested_record_type(annotation),
                unresolved=isinstance(annotation, str),
            )
        )
    return RecordDescriptor(record_type=record_type, fields=tuple(fields))


@lru_cache(maxsize=None)
def _has_unresolved_fields(record_type: type, tag_name: str = TRANSLATION_TAG) -> bool:
    """True if the type, or a record type nested in it, has unresolved fields."""
    seen: set[type] = set()
    pending = [record_type]
    while pending:
        current = pending.pop()
        if current in seen:
            continue
        seen.add(current)
        descriptor = describe_record(current, tag_name)
        if descriptor.unresolved_fields:
            return True
        pending.extend(f.nested for f in descriptor.fields if f.nested is not None)
    return False


def _nested_records(value: Any) -> list[Any]:
    if _is_record(value):
        return [value]
    if isinstance(value, (list, tuple)):
        return [item for item in value if _is_record(item)]
    return []


# =============================================================================
# Registry
# =============================================================================


class TranslationRegistry:
    """Registers record field display names into locale contexts.

    Owns the set of record types already processed. The set only grows.
    """

    def __init__(
        self,
        contexts: Mapping[str, TranslationContext],
        tag_name: str = TRANSLATION_TAG,
    ):
        """Initialize registry.

        Args:
            contexts: Locale code -> context to register display names into
            tag_name: Metadata key holding a field's translation spec
        """
        self._contexts = contexts
        self.tag_name = tag_name
        self._registered: set[type] = set()
        self._lock = threading.Lock()
        self._walk_lock = threading.Lock()

    @property
    def registered_types(self) -> frozenset[type]:
        """Record types already processed."""
        with self._lock:
            return frozenset(self._registered)

    def is_registered(self, record_type: type) -> bool:
        with self._lock:
            return record_type in self._registered

    def ensure_registered(self, value: Any) -> None:
        """Register the display names of a record's type, once per type.

        Nested record types are found from field annotations. For fields
        whose annotation cannot be resolved, the types of the nested records
        actually held by ``value`` are registered instead.

        Args:
            value: Dataclass instance or type; anything else is ignored

        Raises:
            RegistrationError: If a context rejects a display name. The type
                stays marked as registered and is not walked again.
        """
        if value is None:
            return

        record_type = value if isinstance(value, type) else type(value)
        if not _is_record_type(record_type):
            return

        self._register_type(record_type)
        if not isinstance(value, type) and _has_unresolved_fields(record_type, self.tag_name):
            self._register_runtime(value, set())

    def _register_type(self, record_type: type) -> None:
        if self.is_registered(record_type):
            return

        with self._walk_lock:
            # Another caller may have finished the walk while we waited
            if self.is_registered(record_type):
                return

            logger.debug("Registering field translations for %s", record_type.__name__)
            try:
                self._walk(record_type, set())
            except Exception:
                logger.warning(
                    "Field translation registration failed for %s; "
                    "the type will not be walked again",
                    record_type.__name__,
                )
                raise
            finally:
                with self._lock:
                    self._registered.add(record_type)

    def _register_runtime(self, record: Any, seen: set[int]) -> None:
        if id(record) in seen:
            return
        seen.add(id(record))

        for field in describe_record(type(record), self.tag_name).fields:
            if not field.unresolved and field.nested is None:
                continue
            for item in _nested_records(getattr(record, field.name, None)):
                if field.unresolved:
                    self._register_type(type(item))
                self._register_runtime(item, seen)

    def _walk(self, record_type: type, visited: set[type]) -> None:
        if record_type in visited:
            return
        visited.add(record_type)

        descriptor = describe_record(record_type, self.tag_name)
        for field in descriptor.fields:
            for locale_code, display_name in field.translations:
                context = self._contexts.get(locale_code)
                if context is not None:
                    context.add(f"{descriptor.name}.{field.name}", display_name, override=True)

            if field.nested is not None:
                self._walk(field.nested, visited)
