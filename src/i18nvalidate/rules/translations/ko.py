"""Default Korean rule messages."""

from __future__ import annotations

from typing import TYPE_CHECKING

from i18nvalidate.translation.context import TranslationContext

if TYPE_CHECKING:
    from i18nvalidate.rules.engine import RuleEngine

MESSAGES: dict[str, str | dict[str, str]] = {
    "required": "{0} 필드는 필수입니다",
    "email": "{0}은(는) 유효한 이메일 주소여야 합니다",
    "url": "{0}은(는) 유효한 URL이어야 합니다",
    "uuid": "{0}은(는) 유효한 UUID여야 합니다",
    "alpha": "{0}은(는) 알파벳 문자만 포함할 수 있습니다",
    "numeric": "{0}은(는) 유효한 숫자 값이어야 합니다",
    "oneof": "{0}은(는) [{1}] 중 하나여야 합니다",
    "min": {
        "string": "{0}은(는) 최소 {1}자 이상이어야 합니다",
        "number": "{0}은(는) {1} 이상이어야 합니다",
        "items": "{0}은(는) 최소 {1}개의 항목을 포함해야 합니다",
    },
    "max": {
        "string": "{0}은(는) 최대 {1}자까지 가능합니다",
        "number": "{0}은(는) {1} 이하여야 합니다",
        "items": "{0}은(는) 최대 {1}개의 항목만 포함할 수 있습니다",
    },
    "len": {
        "string": "{0}은(는) {1}자여야 합니다",
        "number": "{0}은(는) {1}와(과) 같아야 합니다",
        "items": "{0}은(는) {1}개의 항목을 포함해야 합니다",
    },
    "gt": {
        "string": "{0}은(는) {1}자보다 길어야 합니다",
        "number": "{0}은(는) {1}보다 커야 합니다",
        "items": "{0}은(는) {1}개보다 많은 항목을 포함해야 합니다",
    },
    "gte": {
        "string": "{0}은(는) 최소 {1}자 이상이어야 합니다",
        "number": "{0}은(는) {1} 이상이어야 합니다",
        "items": "{0}은(는) 최소 {1}개의 항목을 포함해야 합니다",
    },
    "lt": {
        "string": "{0}은(는) {1}자보다 짧아야 합니다",
        "number": "{0}은(는) {1}보다 작아야 합니다",
        "items": "{0}은(는) {1}개보다 적은 항목을 포함해야 합니다",
    },
    "lte": {
        "string": "{0}은(는) 최대 {1}자까지 가능합니다",
        "number": "{0}은(는) {1} 이하여야 합니다",
        "items": "{0}은(는) 최대 {1}개의 항목만 포함할 수 있습니다",
    },
}


def register_default_translations(engine: "RuleEngine", context: TranslationContext) -> None:
    """Register the Korean template of every built-in rule."""
    for rule, template in MESSAGES.items():
        engine.register_translation(rule, context, template)
