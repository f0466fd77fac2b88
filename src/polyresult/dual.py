"""dual(): one function, two calling conventions.

A combinator built with ``dual(2, body)`` can be called data-first,
``combinator(subject, fn)``, or data-last, ``combinator(fn)(subject)``. The
convention is chosen by counting the arguments of each call: at least
``arity`` arguments runs the body, fewer returns a function of the subject.

Counting is all it does, so ``map(success(1))`` is a data-last call that
returns a function. Use ``.data_first`` and ``.data_last`` when a call site
must not depend on the count.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any

__all__ = ['Dual', 'dual']


class Dual:
    """A callable supporting data-first and data-last invocation.

    Attributes:
        arity: Number of arguments of the data-first form, subject included.
    """

    __slots__ = ('__dict__', '_body', 'arity')

    def __init__(self, arity: int, body: Callable[..., Any], name: str | None = None) -> None:
        if arity not in (2, 3):
            msg = f'dual() supports arity 2 or 3, got {arity}'
            raise ValueError(msg)
        self.arity = arity
        self._body = body
        functools.update_wrapper(self, body)
        if name is not None:
            self.__name__ = self.__qualname__ = name

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        if len(args) + len(kwargs) >= self.arity:
            return self._body(*args, **kwargs)
        return self.data_last(*args, **kwargs)

    def data_first(self, subject: Any, *args: Any, **kwargs: Any) -> Any:
        """Call the body on subject now, whatever the argument count."""
        return self._body(subject, *args, **kwargs)

    def data_last(self, *args: Any, **kwargs: Any) -> Callable[[Any], Any]:
        """Return a function that applies the body to a subject later."""
        body = self._body

        def apply(subject: Any) -> Any:
            return body(subject, *args, **kwargs)

        apply.__name__ = apply.__qualname__ = f'{self.__name__}(...)'
        return apply

    def __repr__(self) -> str:
        return f'<dual {self.__name__} arity={self.arity}>'


def dual(arity: int, body: Callable[..., Any], name: str | None = None) -> Dual:
    """Build a function callable both data-first and data-last.

    Args:
        arity: Arguments of the data-first form, subject included (2 or 3).
        body: The data-first implementation, subject as first parameter.
        name: Public name, when body is a private helper. Defaults to body's name.

    Returns:
        A Dual wrapping body.

    Raises:
        ValueError: If arity is not 2 or 3.

    Example:
        ```python
        add = dual(2, lambda x, y: x + y)
        add(1, 2)
        # 3
        add(2)(1)
        # 3
        ```
    """
    return Dual(arity, body, name)
