"""Default Portuguese rule messages."""

from __future__ import annotations

from typing import TYPE_CHECKING

from i18nvalidate.translation.context import TranslationContext

if TYPE_CHECKING:
    from i18nvalidate.rules.engine import RuleEngine

MESSAGES: dict[str, str | dict[str, str]] = {
    "required": "{0} é obrigatório",
    "email": "{0} deve ser um endereço de e-mail válido",
    "url": "{0} deve ser uma URL válida",
    "uuid": "{0} deve ser um UUID válido",
    "alpha": "{0} deve conter apenas caracteres alfabéticos",
    "numeric": "{0} deve ser um valor numérico válido",
    "oneof": "{0} deve ser um de [{1}]",
    "min": {
        "string": "{0} deve ter pelo menos {1} caracteres",
        "number": "{0} deve ser {1} ou superior",
        "items": "{0} deve conter pelo menos {1} itens",
    },
    "max": {
        "string": "{0} deve ter no máximo {1} caracteres",
        "number": "{0} deve ser {1} ou menor",
        "items": "{0} deve conter no máximo {1} itens",
    },
    "len": {
        "string": "{0} deve ter {1} caracteres",
        "number": "{0} deve ser igual a {1}",
        "items": "{0} deve conter {1} itens",
    },
    "gt": {
        "string": "{0} deve ter mais de {1} caracteres",
        "number": "{0} deve ser maior que {1}",
        "items": "{0} deve conter mais de {1} itens",
    },
    "gte": {
        "string": "{0} deve ter pelo menos {1} caracteres",
        "number": "{0} deve ser {1} ou superior",
        "items": "{0} deve conter pelo menos {1} itens",
    },
    "lt": {
        "string": "{0} deve ter menos de {1} caracteres",
        "number": "{0} deve ser menor que {1}",
        "items": "{0} deve conter menos de {1} itens",
    },
    "lte": {
        "string": "{0} deve ter no máximo {1} caracteres",
        "number": "{0} deve ser {1} ou menor",
        "items": "{0} deve conter no máximo {1} itens",
    },
}


def register_default_translations(engine: "RuleEngine", context: TranslationContext) -> None:
    """Register the Portuguese template of every built-in rule."""
    for rule, template in MESSAGES.items():
        engine.register_translation(rule, context, template)
