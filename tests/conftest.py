"""
Shared pytest fixtures for the diffexpr tests.

This module provides:
- Isolation from DIFFEXPR_* environment settings and the settings cache
- Restoration of root logging after tests that configure it
- Common expression fixtures
"""

import logging
import os

import pytest

from diffexpr import Expression, Parser
from diffexpr.config import get_settings
from diffexpr.logging import StructuredFormatter, TextFormatter
from diffexpr.parser.parser import default_parser


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Run every test with default settings and a fresh shared parser."""
    for name in list(os.environ):
        if name.startswith("DIFFEXPR_"):
            monkeypatch.delenv(name)
    get_settings.cache_clear()
    default_parser.cache_clear()
    yield
    get_settings.cache_clear()
    default_parser.cache_clear()


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Remove the handlers installed by setup_logging() during a test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, (TextFormatter, StructuredFormatter)):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def parser():
    """Parser with the default context."""
    return Parser()


@pytest.fixture
def x():
    """The real variable x."""
    return Expression("x")


@pytest.fixture
def y():
    """The real variable y."""
    return Expression("y")

