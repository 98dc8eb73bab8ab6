"""Pytest configuration and shared fixtures for errorkit tests."""

from __future__ import annotations

import os
from collections.abc import Iterator
from unittest.mock import patch

import pytest
from errorkit._config import reset
from errorkit._logging import clear_log_hooks, reset_logging


@pytest.fixture(autouse=True)
def clean_config() -> Iterator[None]:
    """Run every test against a fresh configuration and no ERRORKIT_* variables."""
    env = {k: v for k, v in os.environ.items() if not k.startswith('ERRORKIT_')}
    with patch.dict(os.environ, env, clear=True):
        reset()
        clear_log_hooks()
        reset_logging()
        yield
        reset()
        clear_log_hooks()
        reset_logging()


@pytest.fixture
def handler_calls() -> list[BaseException]:
    """List collecting every error passed to a handler."""
    return []


@pytest.fixture
def record(handler_calls: list[BaseException]):
    """Handler that records the errors it receives."""
    return handler_calls.append
