"""Shared fixtures for the lokal test suite."""

from pathlib import Path

import pytest

from lokal.logging import configure_logging

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True, scope="session")
def silence_logging():
    """Install the quiet test logging configuration once per session."""
    configure_logging()


@pytest.fixture
def fixture_locales():
    """Directory holding the shipped locale trees (simple, lan1, lan2)."""
    return FIXTURES_DIR / "locales"
