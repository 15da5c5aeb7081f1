"""Rule engine for dataclass records.

Rules are declared per field in dataclass metadata:

    @dataclass
    class User:
        name: str = field(default="", metadata={"validate": "required,min=2"})
        email: str = field(default="", metadata={"validate": "omitempty,email"})

``RuleEngine.evaluate`` walks a record (including nested records and lists
of records) and reports one ``FieldViolation`` per failing field.
``RuleEngine.render`` turns a violation into text through a translation
context.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from i18nvalidate.errors import InvalidValidationError, UnknownRuleError
from i18nvalidate.rules.builtin import BUILTIN_RULES, RuleFunc, is_empty, value_kind
from i18nvalidate.translation.context import TranslationContext

logger = logging.getLogger(__name__)

OMITEMPTY = "omitempty"


@dataclass(frozen=True)
class RuleSpec:
    """A single rule parsed from a field's rule tag."""

    name: str
    param: str = ""


def parse_rule_tag(tag: str) -> tuple[RuleSpec, ...]:
    """Parse a rule tag such as ``"required,min=3,oneof=a b"``."""
    specs = []
    for part in tag.split(","):
        part = part.strip()
        if not part:
            continue
        name, _, param = part.partition("=")
        specs.append(RuleSpec(name.strip(), param.strip()))
    return tuple(specs)


@dataclass(frozen=True)
class FieldViolation:
    """A field that failed one of its rules.

    Attributes:
        namespace: Fully-qualified field path (e.g. "User.Address.City")
        field: The field's own name (e.g. "City")
        owner: Name of the record type declaring the field (e.g. "Address")
        rule: Name of the failed rule
        param: Rule parameter text
        value: The offending value
        kind: "string", "number" or "items"
    """

    namespace: str
    field: str
    owner: str
    rule: str
    param: str = ""
    value: Any = None
    kind: str = "string"

    @property
    def message_id(self) -> str:
        """Message id of the field's display name (``Owner.Field``)."""
        return f"{self.owner}.{self.field}"

    def __str__(self) -> str:
        return (
            f"Key: '{self.namespace}' Error:Field validation for "
            f"'{self.field}' failed on the '{self.rule}' tag"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "namespace": self.namespace,
            "field": self.field,
            "owner": self.owner,
            "rule": self.rule,
            "param": self.param,
            "kind": self.kind,
        }


TranslateFunc = Callable[[TranslationContext, FieldViolation], str]


@dataclass(frozen=True)
class _FieldRules:
    name: str
    rules: tuple[RuleSpec, ...]
    omitempty: bool


def default_translate(context: TranslationContext, violation: FieldViolation) -> str:
    """Format the most specific template registered for a violation.

    Looks up ``rule-kind`` first, then ``rule``. The template receives the
    field name as ``{0}`` and the rule parameter as ``{1}``.
    """
    for key in (f"{violation.rule}-{violation.kind}", violation.rule):
        if key in context:
            return context.translate(key, violation.field, violation.param)
    return str(violation)


class RuleEngine:
    """Evaluates field rules on dataclass records.

    Compiled rule tables are cached per record class. The engine is safe
    for concurrent use once its rules and translations are registered.
    """

    def __init__(
        self,
        rules: Mapping[str, RuleFunc] | None = None,
        tag_name: str = "validate",
    ):
        """Initialize engine.

        Args:
            rules: Extra rules, merged over the built-in ones
            tag_name: Metadata key holding a field's rule tag
        """
        self.tag_name = tag_name
        self._rules: dict[str, RuleFunc] = dict(BUILTIN_RULES)
        if rules:
            self._rules.update(rules)
        self._compiled: dict[type, tuple[_FieldRules, ...]] = {}
        self._translations: dict[tuple[str, str], TranslateFunc] = {}
        self._lock = threading.RLock()

    # -------------------------------------------------------------------------
    # Rules
    # -------------------------------------------------------------------------

    def register_rule(self, name: str, func: RuleFunc) -> None:
        """Register a custom rule.

        Raises:
            ValueError: If the name is empty or reserved
        """
        if not name or name == OMITEMPTY:
            raise ValueError(f"Invalid rule name: {name!r}")
        with self._lock:
            self._rules[name] = func
            # Tables compiled earlier may have rejected this rule
            self._compiled.clear()

    def has_rule(self, name: str) -> bool:
        """Check if a rule is registered."""
        return name in self._rules

    @property
    def rules(self) -> list[str]:
        """Registered rule names."""
        return sorted(self._rules.keys())

    # -------------------------------------------------------------------------
    # Translations
    # -------------------------------------------------------------------------

    def register_translation(
        self,
        rule: str,
        context: TranslationContext,
        template: str | Mapping[str, str],
        override: bool = False,
        translate: TranslateFunc | None = None,
    ) -> None:
        """Register a rule's message template for a context.

        Args:
            rule: Rule name
            context: Target translation context
            template: Template, or ``{kind: template}`` for kind-sensitive
                rules (stored as ``rule-kind``)
            override: Replace existing templates
            translate: Custom render function (default: ``default_translate``)

        Raises:
            RegistrationError: If the context rejects a template
        """
        if isinstance(template, Mapping):
            for kind, text in template.items():
                context.add(f"{rule}-{kind}", text, override)
        else:
            context.add(rule, template, override)

        with self._lock:
            self._translations[(context.locale_code, rule)] = (
                translate or default_translate
            )

    def render(self, violation: FieldViolation, context: TranslationContext) -> str:
        """Render a violation in the context's language.

        Falls back to the untranslated ``str(violation)`` when the rule has
        no translation for the context's locale.
        """
        translate = self._translations.get((context.locale_code, violation.rule))
        if translate is None:
            return str(violation)
        return translate(context, violation)

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def evaluate(self, data: Any) -> list[FieldViolation]:
        """Evaluate all rules of a record.

        Args:
            data: Dataclass instance

        Returns:
            Violations, at most one per field

        Raises:
            InvalidValidationError: If data is not a dataclass instance
            UnknownRuleError: If a rule tag names an unregistered rule
            RuleParameterError: If a rule parameter is malformed
        """
        if not dataclasses.is_dataclass(data) or isinstance(data, type):
            raise InvalidValidationError(data)

        violations: list[FieldViolation] = []
        self._walk(data, type(data).__name__, violations)
        return violations

    def _walk(self, record: Any, namespace: str, out: list[FieldViolation]) -> None:
        owner = type(record).__name__
        for field_rules in self._compile(type(record)):
            value = getattr(record, field_rules.name)
            field_ns = f"{namespace}.{field_rules.name}"

            if field_rules.rules:
                violation = self._check_field(field_rules, value, field_ns, owner)
                if violation is not None:
                    out.append(violation)

            if dataclasses.is_dataclass(value) and not isinstance(value, type):
                self._walk(value, field_ns, out)
            elif isinstance(value, (list, tuple)):
                for index, item in enumerate(value):
                    if dataclasses.is_dataclass(item) and not isinstance(item, type):
                        self._walk(item, f"{field_ns}[{index}]", out)

    def _check_field(
        self,
        field_rules: _FieldRules,
        value: Any,
        namespace: str,
        owner: str,
    ) -> FieldViolation | None:
        if field_rules.omitempty and is_empty(value):
            return None

        for spec in field_rules.rules:
            if not self._rules[spec.name](value, spec.param):
                return FieldViolation(
                    namespace=namespace,
                    field=field_rules.name,
                    owner=owner,
                    rule=spec.name,
                    param=spec.param,
                    value=value,
                    kind=value_kind(value),
                )
        return None

    def _compile(self, cls: type) -> tuple[_FieldRules, ...]:
        compiled = self._compiled.get(cls)
        if compiled is not None:
            return compiled

        with self._lock:
            compiled = self._compiled.get(cls)
            if compiled is not None:
                return compiled

            table = []
            for f in dataclasses.fields(cls):
                specs = parse_rule_tag(f.metadata.get(self.tag_name, ""))
                rules = tuple(s for s in specs if s.name != OMITEMPTY)
                for spec in rules:
                    if spec.name not in self._rules:
                        raise UnknownRuleError(spec.name, cls.__name__, f.name)
                table.append(
                    _FieldRules(
                        name=f.name,
                        rules=rules,
                        omitempty=len(rules) != len(specs),
                    )
                )

            compiled = tuple(table)
            self._compiled[cls] = compiled
            logger.debug("Compiled %d field rule sets for %s", len(compiled), cls.__name__)
            return compiled
