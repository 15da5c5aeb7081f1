"""Active locale selection."""

from __future__ import annotations

import logging
from typing import Mapping

from i18nvalidate.translation.context import TranslationContext

logger = logging.getLogger(__name__)


def resolve_context(
    requested: str | None,
    default: str,
    contexts: Mapping[str, TranslationContext],
) -> TranslationContext:
    """Pick the translation context for a request.

    Unknown or missing locale codes silently resolve to the default locale,
    which must be present in ``contexts``.

    Args:
        requested: Requested locale code; None or "" means not supplied
        default: Default locale code
        contexts: Configured locale code -> context

    Returns:
        The requested context, or the default one
    """
    if requested:
        context = contexts.get(requested)
        if context is not None:
            return context
        logger.debug("Locale %r not configured, falling back to %r", requested, default)
    return contexts[default]
