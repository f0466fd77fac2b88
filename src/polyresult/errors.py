"""Exceptions raised by the library itself.

These are defects in how the algebra is used (wrong input shapes), never
domain failures: domain failures travel as ``Failure`` values.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    'NoAdapterError',
    'NotAnOutcomeError',
    'NotOutcomeLikeError',
    'PolyresultError',
]


class PolyresultError(Exception):
    """Base class for exceptions raised by polyresult."""


class NotAnOutcomeError(PolyresultError, TypeError):
    """A combinator received or settled to something that is not Success/Failure."""

    def __init__(self, value: Any, context: str | None = None) -> None:
        self.value = value
        self.context = context
        msg = f'Expected Success or Failure, got {type(value).__name__}: {value!r}'
        if context:
            msg = f'{context}: {msg}'
        super().__init__(msg)


class NotOutcomeLikeError(PolyresultError, TypeError):
    """A value could not be normalized into an Outcome."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(
            f"Cannot convert {type(value).__name__} to an Outcome: expected 'ok' "
            f"with 'value' (ok=True) or 'error' (ok=False), got {value!r}"
        )


class NoAdapterError(PolyresultError, TypeError):
    """Raised when no adapter is registered for a type and no default exists."""

    def __init__(self, adapter_name: str, value_type: type) -> None:
        self.adapter_name = adapter_name
        self.value_type = value_type
        super().__init__(f"No '{adapter_name}' adapter for type '{value_type.__name__}'")
