"""pipe() for threading a value through data-last combinators."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, overload

__all__ = ['pipe']


@overload
def pipe[T](value: T, /) -> T: ...
@overload
def pipe[T, T1](value: T, fn1: Callable[[T], T1], /) -> T1: ...
@overload
def pipe[T, T1, T2](value: T, fn1: Callable[[T], T1], fn2: Callable[[T1], T2], /) -> T2: ...
@overload
def pipe[T, T1, T2, T3](
    value: T, fn1: Callable[[T], T1], fn2: Callable[[T1], T2], fn3: Callable[[T2], T3], /
) -> T3: ...
@overload
def pipe[T, T1, T2, T3, T4](
    value: T,
    fn1: Callable[[T], T1],
    fn2: Callable[[T1], T2],
    fn3: Callable[[T2], T3],
    fn4: Callable[[T3], T4],
    /,
) -> T4: ...
@overload
def pipe(value: Any, /, *fns: Callable[[Any], Any]) -> Any: ...


def pipe(value: Any, /, *fns: Callable[[Any], Any]) -> Any:
    """Thread a value through functions, left to right.

    ``pipe(x, f, g)`` is ``g(f(x))``. Nothing is wrapped or unwrapped: each
    data-last combinator decides for itself whether its input is pending,
    so a pipeline that starts with an awaitable ends with a Deferred.

    Args:
        value: The initial value.
        *fns: Unary functions to apply in order.

    Returns:
        The result of the last function, or value if there are none.

    Example:
        ```python
        pipe(success(5), map(lambda x: x + 1), map(str))
        # Success(value='6')

        await pipe(fetch_user(1), map(lambda user: user.name))
        # Success(value='ada')
        ```
    """
    current = value
    for fn in fns:
        current = fn(current)
    return current
