"""Pending values: the await-contract predicate, Pending and Deferred.

A pending value is anything awaitable. Combinators accept any awaitable as a
subject, and produce the explicit types defined here when their result is
pending: ``Deferred`` for results that settle to an Outcome, ``Pending`` for
``match``, whose handlers may return anything.

Example:
    ```python
    async def fetch_user(id: int) -> Outcome[User, str]: ...

    deferred = map(fetch_user(1), lambda user: user.name)
    assert is_pending(deferred)
    assert await deferred == Success('ada')
    ```
"""

from __future__ import annotations

import inspect
import types
from collections.abc import Awaitable, Generator
from typing import Any

import aiologic
import anyio

from polyresult._logging import get_logger
from polyresult.outcome import Failure, Outcome, Success

__all__ = ['Deferred', 'MaybeDeferred', 'Pending', 'is_pending', 'settle']

_log = get_logger(__name__)


def is_pending(value: object) -> bool:
    """Return True if value exposes the await contract.

    The type must define a callable ``__await__``; a non-callable attribute
    of that name does not count. Generator-based coroutines flagged with
    ``types.coroutine`` are also pending. Never raises.

    Examples:
        >>> async def later(): ...
        >>> coro = later()
        >>> is_pending(coro)
        True
        >>> coro.close()
        >>> is_pending(Success(1))
        False
        >>> is_pending(None)
        False
    """
    if value is None or isinstance(value, Success | Failure):
        return False
    await_ = getattr(type(value), '__await__', None)
    if await_ is not None:
        return callable(await_)
    if isinstance(value, types.GeneratorType):
        return bool(value.gi_code.co_flags & inspect.CO_ITERABLE_COROUTINE)
    return False


async def settle(value: Any) -> Any:
    """Await value until what it settles to is no longer pending.

    An ``async def`` that returns another chain settles to a Deferred, not to
    an Outcome; awaiting in a loop flattens any depth of such nesting.
    Non-pending values are returned as they are.
    """
    while is_pending(value):
        value = await value
    return value


class Pending[V]:
    """An awaitable that settles exactly once and caches its settlement.

    Wraps any awaitable. The first await drives the wrapped awaitable; later
    awaits get the cached value, or the cached exception re-raised. Several
    tasks may await the same Pending concurrently: one drives, the others
    wait on an aiologic.Lock.

    Cancelling the task that drives the settlement does not cancel the wrapped
    awaitable: the drive is shielded, so the other awaiters still get the
    result, and the cancelled task sees its cancellation once it finishes.

    Note:
        Coroutines are lazy: nothing runs until the Pending is awaited.
    """

    __slots__ = ('_awaitable', '_error', '_lock', '_settled', '_value')

    def __init__(self, awaitable: Awaitable[V]) -> None:
        """Create a Pending from an awaitable.

        Args:
            awaitable: An awaitable producing V.
        """
        self._awaitable = awaitable
        self._lock = aiologic.Lock()
        self._settled = False
        self._value: V | None = None
        self._error: BaseException | None = None

    async def _settle(self) -> V:
        if not self._settled:
            async with self._lock:
                if not self._settled:
                    await self._drive()
        if self._error is not None:
            raise self._error
        return self._value  # type: ignore[return-value]

    async def _drive(self) -> None:
        with anyio.CancelScope(shield=True):
            try:
                self._value = await self._awaitable
            except anyio.get_cancelled_exc_class():
                # cancelled from inside the awaitable: not a settlement, leave it unsettled
                raise
            except BaseException as exc:
                self._error = exc
            self._settled = True
            self._awaitable = None  # type: ignore[assignment]
        if self._error is None:
            _log.debug('pending settled', kind=type(self).__name__, value_type=type(self._value).__name__)

    def __await__(self) -> Generator[Any, Any, V]:
        return self._settle().__await__()

    def done(self) -> bool:
        """Return True once the wrapped awaitable has settled."""
        return self._settled

    def __repr__(self) -> str:
        if not self._settled:
            return f'{type(self).__name__}(<pending>)'
        if self._error is not None:
            return f'{type(self).__name__}(<raised {self._error!r}>)'
        return f'{type(self).__name__}({self._value!r})'


class Deferred[T, E](Pending[Outcome[T, E]]):
    """A pending computation that settles to exactly one Outcome.

    Combinators return a Deferred whenever their result is pending.

    Example:
        ```python
        async def example():
            deferred = Deferred.from_success(5)
            assert await deferred == Success(5)
        ```
    """

    __slots__ = ()

    @classmethod
    def from_outcome(cls, outcome: Outcome[T, E]) -> Deferred[T, E]:
        """Create a Deferred that settles to an already known Outcome."""

        async def _outcome() -> Outcome[T, E]:
            return outcome

        return cls(_outcome())

    @classmethod
    def from_success(cls, value: T) -> Deferred[T, E]:
        """Create a Deferred that settles to Success(value)."""
        return cls.from_outcome(Success(value))

    @classmethod
    def from_failure(cls, error: E) -> Deferred[T, E]:
        """Create a Deferred that settles to Failure(error)."""
        return cls.from_outcome(Failure(error))


type MaybeDeferred[T, E] = Outcome[T, E] | Awaitable[Outcome[T, E]]
