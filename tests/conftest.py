"""Shared fixtures for i18nvalidate tests."""

from __future__ import annotations

import pytest

from i18nvalidate import LocaleEntry, Validator


@pytest.fixture
def validator() -> Validator:
    """Validator configured with English (default) and Portuguese."""
    return Validator("en", LocaleEntry.builtin("en"), LocaleEntry.builtin("pt"))
