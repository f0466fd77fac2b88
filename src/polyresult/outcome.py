"""Outcome type: Success[T] | Failure[E] for explicit error handling."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal, TypeIs

import msgspec

__all__ = [
    'Failure',
    'Outcome',
    'Success',
    'failure',
    'is_failure',
    'is_outcome',
    'is_outcome_like',
    'is_success',
    'success',
]


class Success[T](msgspec.Struct, frozen=True, gc=False):
    """Success variant of an Outcome containing a value of type T.

    Examples:
        >>> Success(42)
        Success(value=42)
        >>> Success(42).ok
        True
        >>> Success(1) == Success(1)
        True
    """

    value: T

    @property
    def ok(self) -> Literal[True]:
        """Discriminant, always True for Success."""
        return True


class Failure[E](msgspec.Struct, frozen=True, gc=False):
    """Failure variant of an Outcome containing an error of type E.

    The error can be any value: a string code, a struct, an exception.

    Examples:
        >>> Failure('not found')
        Failure(error='not found')
        >>> Failure('not found').ok
        False
    """

    error: E

    @property
    def ok(self) -> Literal[False]:
        """Discriminant, always False for Failure."""
        return False


type Outcome[T, E] = Success[T] | Failure[E]


def success[T](value: T) -> Success[T]:
    """Wrap a value in Success."""
    return Success(value)


def failure[E](error: E) -> Failure[E]:
    """Wrap an error in Failure."""
    return Failure(error)


def is_outcome(value: object) -> TypeIs[Success[Any] | Failure[Any]]:
    """Return True if value is a Success or Failure built by this library."""
    return isinstance(value, Success | Failure)


def is_success(value: object) -> TypeIs[Success[Any]]:
    """Return True if value is a Success."""
    return isinstance(value, Success)


def is_failure(value: object) -> TypeIs[Failure[Any]]:
    """Return True if value is a Failure."""
    return isinstance(value, Failure)


def is_outcome_like(value: object) -> bool:
    """Check whether a value structurally looks like an Outcome.

    A value is outcome-like when its ``ok`` field is exactly ``True`` and it
    has a ``value`` field, or exactly ``False`` and it has an ``error`` field.
    Fields are read as mapping keys for mappings and as attributes otherwise.

    Args:
        value: Any object, including None.

    Returns:
        True if ``from_`` can normalize the value without a custom adapter.

    Examples:
        >>> is_outcome_like({'ok': True, 'value': 1})
        True
        >>> is_outcome_like({'ok': 1, 'value': 1})
        False
        >>> is_outcome_like(None)
        False
    """
    if isinstance(value, Success | Failure):
        return True
    try:
        return _has_outcome_fields(value)
    except Exception:  # a raising property or __getitem__ means not outcome-like
        return False


def _has_outcome_fields(value: object) -> bool:
    if isinstance(value, Mapping):
        flag = value.get('ok')
        if flag is True:
            return 'value' in value
        if flag is False:
            return 'error' in value
        return False
    flag = getattr(value, 'ok', None)
    if flag is True:
        return hasattr(value, 'value')
    if flag is False:
        return hasattr(value, 'error')
    return False
