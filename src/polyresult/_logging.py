"""Structured logging for polyresult.

Every module logs through ``get_logger(__name__)``: a structlog BoundLogger
wrapping the stdlib logger of that name. Records therefore obey stdlib levels
and handlers, and the ``polyresult`` logger carries a NullHandler, so the
library prints nothing until the application configures logging.

``configure_logging`` is a convenience for applications and tests: it routes
structlog and plain stdlib records through one ProcessorFormatter, rendering
JSON or console lines on stderr.

Events emitted by the library (all DEBUG unless noted):

    pending settled       a Pending or Deferred settled (kind, value_type)
    exception captured    try_catch/wrap/from_awaitable caught (exc_type, mapped)
    all_ settled          all_ chose its result (size, pending, ok)
    adapter registered    a to_outcome adapter was added (adapter, type)
    polyresult configured init() ran (INFO)
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

__all__ = [
    'add_log_hook',
    'clear_log_hooks',
    'configure_logging',
    'get_logger',
    'remove_log_hook',
]

type LogHook = Callable[[dict[str, Any]], None]

logging.getLogger('polyresult').addHandler(logging.NullHandler())


def _entry_processors() -> list[Any]:
    """Processors that turn a call into a log entry, for structlog and stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.stdlib.ExtraAdder(),
        _run_hooks,
    ]


def _bound_processors() -> list[Any]:
    # filter_by_level first: dropped events never reach hooks
    return [
        structlog.stdlib.filter_by_level,
        *_entry_processors(),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger bound to the stdlib logger of the same name.

    Args:
        name: Logger name, usually ``__name__``.

    Returns:
        A structlog BoundLogger that respects stdlib levels and handlers.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_bound_processors(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def configure_logging(
    level: str = 'INFO',
    *,
    json_output: bool = True,
) -> None:
    """Send structlog and stdlib records to stderr through one formatter.

    Replaces the root logger's handlers and sets its level.

    Args:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL").
            Unknown names fall back to INFO.
        json_output: If True, emit JSON lines. If False, use console output,
            colored when stderr is a terminal.
    """
    structlog.configure(
        processors=_bound_processors(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    renderer: Any
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_entry_processors(),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.getLevelNamesMapping().get(level.upper(), logging.INFO))


# (hook, event names it wants or None for all)
_hooks: list[tuple[LogHook, frozenset[str] | None]] = []


def add_log_hook(hook: LogHook, *, events: Iterable[str] | None = None) -> None:
    """Call hook with a copy of every log entry that passes the level filter.

    Useful for counting captured exceptions or forwarding entries elsewhere.
    A hook that raises is skipped for that entry.

    Args:
        hook: Receives the entry dict (``event``, ``level``, ``logger`` and the
            event's own fields).
        events: Only call hook for entries whose ``event`` is one of these.

    Example:
        ```python
        captured = []
        add_log_hook(captured.append, events={'exception captured'})
        ```
    """
    remove_log_hook(hook)
    _hooks.append((hook, frozenset(events) if events is not None else None))


def remove_log_hook(hook: LogHook) -> None:
    """Unregister hook. Unknown hooks are ignored."""
    _hooks[:] = [entry for entry in _hooks if entry[0] != hook]


def clear_log_hooks() -> None:
    """Unregister every hook."""
    _hooks.clear()


def _run_hooks(_logger: Any, _method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for hook, wanted in list(_hooks):
        if wanted is not None and event_dict.get('event') not in wanted:
            continue
        try:
            hook(event_dict.copy())
        except Exception:
            continue
    return event_dict
