"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    make_catalog,
    make_language_tag,
    make_message_definition,
    make_signals,
    make_translator,
)

__all__ = [
    "make_catalog",
    "make_language_tag",
    "make_message_definition",
    "make_signals",
    "make_translator",
]
