"""Pytest configuration and shared fixtures for klaw-fallible tests."""

import logging

import pytest
from klaw_fallible import reset
from klaw_fallible._logging import clear_log_hooks


@pytest.fixture(autouse=True)
def fresh_config():
    """Start every test from an unset configuration."""
    reset()
    yield
    reset()


@pytest.fixture
def restore_logging():
    """Restore root logger handlers, level and hooks after a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    clear_log_hooks()
    yield root
    clear_log_hooks()
    root.handlers[:] = handlers
    root.setLevel(level)
