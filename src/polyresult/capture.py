"""Capture boundary: turn raised exceptions into Failure values.

try_catch, wrap and from_awaitable are the only places where polyresult
catches exceptions. Everywhere else an exception is a defect and propagates.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, overload

import wrapt

from polyresult._config import get_config
from polyresult._logging import get_logger
from polyresult.outcome import Failure, Success
from polyresult.pending import Deferred, is_pending, settle

__all__ = ['from_awaitable', 'try_catch', 'wrap']

_log = get_logger(__name__)

type ErrorMapper = Callable[[BaseException], Any]


def _catchable(exceptions: tuple[type[BaseException], ...] | None) -> tuple[type[BaseException], ...]:
    return exceptions if exceptions is not None else get_config().capture


def _failure_from(exc: BaseException, on_error: ErrorMapper | None) -> Failure[Any]:
    _log.debug('exception captured', exc_type=type(exc).__name__, mapped=on_error is not None)
    if on_error is None:
        return Failure(exc)
    return Failure(on_error(exc))


async def _settle_captured(
    awaitable: Awaitable[Any],
    on_error: ErrorMapper | None,
    catch: tuple[type[BaseException], ...],
) -> Success[Any] | Failure[Any]:
    try:
        value = await settle(awaitable)
    except catch as e:
        return _failure_from(e, on_error)
    return Success(value)


def try_catch(
    fn: Callable[[], Any],
    on_error: ErrorMapper | None = None,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Any:
    """Call fn and capture what it raises as a Failure.

    Args:
        fn: Zero-argument callable. May return a plain value or an awaitable.
        on_error: Maps the captured exception to the Failure error. Without
            it the exception itself is the error.
        exceptions: Exception types to capture. Defaults to the configured
            capture set, ``(Exception,)`` unless changed with ``init()``.

    Returns:
        Success(value) or Failure(error); if fn returned an awaitable, a
        Deferred settling to one of them.

    Example:
        ```python
        try_catch(lambda: int('42'))
        # Success(value=42)

        try_catch(lambda: int('x'), lambda e: 'NOT_A_NUMBER')
        # Failure(error='NOT_A_NUMBER')
        ```
    """
    catch = _catchable(exceptions)
    try:
        out = fn()
    except catch as e:
        return _failure_from(e, on_error)
    if is_pending(out):
        return Deferred(_settle_captured(out, on_error, catch))
    return Success(out)


def from_awaitable(
    awaitable: Awaitable[Any],
    on_error: ErrorMapper | None = None,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Deferred[Any, Any]:
    """Turn an awaitable of a plain value into a Deferred outcome.

    Args:
        awaitable: Any awaitable, such as a coroutine or an asyncio Task.
        on_error: Maps a captured exception to the Failure error.
        exceptions: Exception types to capture, as for ``try_catch``.

    Returns:
        A Deferred settling to Success(value) or Failure(error).
    """
    return Deferred(_settle_captured(awaitable, on_error, _catchable(exceptions)))


@overload
def wrap[F: Callable[..., Any]](fn: F, on_error: ErrorMapper | None = None) -> Callable[..., Any]: ...


@overload
def wrap(
    fn: None = None,
    on_error: ErrorMapper | None = None,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]: ...


def wrap(
    fn: Callable[..., Any] | None = None,
    on_error: ErrorMapper | None = None,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Any:
    """Decorator making a function return Outcomes instead of raising.

    The wrapped function keeps fn's signature. Each call behaves like
    ``try_catch(lambda: fn(*args, **kwargs), on_error)``, so async functions
    return a Deferred.

    Can be used with or without arguments:
        @wrap
        def risky(): ...

        @wrap(on_error=str, exceptions=(ValueError,))
        def specific(): ...

        safe_parse = wrap(json.loads, str)

    Args:
        fn: The function to wrap (when used without parentheses).
        on_error: Maps a captured exception to the Failure error.
        exceptions: Exception types to capture, as for ``try_catch``.

    Returns:
        The wrapped function, or a decorator when fn is None.

    Example:
        ```python
        @wrap
        def divide(a: int, b: int) -> float:
            return a / b

        divide(10, 2)
        # Success(value=5.0)
        divide(10, 0)
        # Failure(error=ZeroDivisionError('division by zero'))
        ```
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[..., Any],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Any:
        return try_catch(lambda: wrapped(*args, **kwargs), on_error, exceptions=exceptions)

    if fn is not None:
        return wrapper(fn)
    return wrapper
