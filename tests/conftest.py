"""Shared fixtures for polyresult tests."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import pytest
from polyresult import add_log_hook, clear_log_hooks, configure_logging
from polyresult._config import _reset

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def reset_config() -> Generator[None]:
    """Forget any configuration set by init() before and after the test."""
    _reset()
    yield
    _reset()


@pytest.fixture
def log_events() -> Generator[list[dict[str, Any]]]:
    """Capture log entries emitted at DEBUG and above through a log hook."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level

    events: list[dict[str, Any]] = []
    clear_log_hooks()
    configure_logging(level='DEBUG', json_output=True)
    add_log_hook(events.append)
    yield events

    clear_log_hooks()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
