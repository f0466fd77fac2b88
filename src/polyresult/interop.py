"""Normalizing foreign result shapes into Outcome.

``to_outcome`` dispatches on the type of its argument to a registered
adapter. Adapters ship for Success/Failure and for mappings with
``ok``/``value``/``error`` keys; any other object is inspected for ``ok``,
``value`` and ``error`` attributes. Register adapters for your own result
types once, at import time.

Example:
    ```python
    @to_outcome.register(requests.Response)
    def _response(resp: requests.Response) -> Outcome[bytes, int]:
        return success(resp.content) if resp.ok else failure(resp.status_code)

    from_(requests.get(url))
    ```
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import Any

import wrapt

from polyresult._logging import get_logger
from polyresult.errors import NoAdapterError, NotAnOutcomeError, NotOutcomeLikeError
from polyresult.outcome import Failure, Success
from polyresult.pending import Deferred, is_pending, settle

__all__ = ['Adapter', 'adapter', 'from_', 'register_adapter', 'to_outcome']

_log = get_logger(__name__)


class Adapter(wrapt.ObjectProxy):
    """A function dispatching on the type of its first argument.

    Implementations are looked up by exact type, then along the MRO, then by
    isinstance against the registered types (which covers ABCs such as
    Mapping). Without a match the default function is called; an Adapter
    created without a default raises NoAdapterError.

    Attributes:
        _self_name: Name of the adapter function.
        _self_default: Fallback implementation, or None.
        _self_registry: Registered implementations by type.
    """

    def __init__(self, default_fn: Callable[..., Any], *, has_default: bool = True) -> None:
        super().__init__(default_fn)
        self._self_name = default_fn.__name__
        self._self_default = default_fn if has_default else None
        self._self_registry: dict[type, Callable[..., Any]] = {}

    def register(self, type_: type) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register an implementation for type_ (and its subclasses).

        Example:
            ```python
            @to_outcome.register(MyResult)
            def _my_result(value: MyResult) -> Outcome[Any, Any]:
                return success(value.payload) if value.good else failure(value.reason)
            ```
        """

        def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
            self._self_registry[type_] = fn
            _log.debug('adapter registered', adapter=self._self_name, type=type_.__name__)
            return fn

        return decorator

    def dispatch(self, value_type: type) -> Callable[..., Any] | None:
        """Return the implementation used for value_type, or None."""
        registry = self._self_registry
        if value_type in registry:
            return registry[value_type]
        for base in value_type.__mro__[1:]:
            if base in registry:
                return registry[base]
        for registered, fn in registry.items():
            if issubclass(value_type, registered):
                return fn
        return None

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        if not args:
            msg = f'{self._self_name}() requires at least one argument'
            raise TypeError(msg)
        fn = self.dispatch(type(args[0]))
        if fn is not None:
            return fn(*args, **kwargs)
        if self._self_default is not None:
            return self._self_default(*args, **kwargs)
        raise NoAdapterError(self._self_name, type(args[0]))

    def __repr__(self) -> str:
        return f'<adapter {self._self_name} with {len(self._self_registry)} registrations>'


def adapter(fn: Callable[..., Any] | None = None, *, has_default: bool = True) -> Any:
    """Decorator to create an Adapter from a function.

    With ``has_default=False`` the decorated function only supplies the name
    and signature, and unregistered types raise NoAdapterError.
    """
    if fn is None:
        return lambda f: Adapter(f, has_default=has_default)
    return Adapter(fn, has_default=has_default)


def _from_fields(value: Any, ok: Any, read: Callable[[str], Any], has: Callable[[str], bool]) -> Any:
    if ok is True and has('value'):
        return Success(read('value'))
    if ok is False and has('error'):
        return Failure(read('error'))
    raise NotOutcomeLikeError(value)


@adapter
def to_outcome(value: Any) -> Success[Any] | Failure[Any]:
    """Normalize an outcome-like value into a Success or Failure.

    Reads the ``ok``, ``value`` and ``error`` attributes of objects with no
    registered adapter. ``ok`` must be exactly True or False.

    Raises:
        NotOutcomeLikeError: If value is not outcome-like.
    """
    return _from_fields(
        value,
        getattr(value, 'ok', None),
        lambda name: getattr(value, name),
        lambda name: hasattr(value, name),
    )


@to_outcome.register(Success)
def _success(value: Success[Any]) -> Success[Any]:
    return Success(value.value)


@to_outcome.register(Failure)
def _failure(value: Failure[Any]) -> Failure[Any]:
    return Failure(value.error)


@to_outcome.register(Mapping)
def _mapping(value: Mapping[str, Any]) -> Success[Any] | Failure[Any]:
    return _from_fields(value, value.get('ok'), value.__getitem__, value.__contains__)


def register_adapter(type_: type, fn: Callable[[Any], Any]) -> None:
    """Register fn as the to_outcome adapter for type_.

    Equivalent to decorating fn with ``@to_outcome.register(type_)``.
    """
    to_outcome.register(type_)(fn)


def _checked(value: Any) -> Success[Any] | Failure[Any]:
    out = to_outcome(value)
    if not isinstance(out, Success | Failure):
        raise NotAnOutcomeError(out, f'to_outcome adapter for {type(value).__name__}')
    return out


async def _from_settled(awaitable: Awaitable[Any]) -> Success[Any] | Failure[Any]:
    return _checked(await settle(awaitable))


def from_(value: Any) -> Any:
    """Bring an outcome-like value, or an awaitable of one, into the algebra.

    Args:
        value: A Success/Failure, anything ``to_outcome`` can normalize, or
            an awaitable settling to one of those.

    Returns:
        An Outcome, or a Deferred of one for pending input.

    Raises:
        NotOutcomeLikeError: If value (or its settlement) cannot be normalized.

    Example:
        ```python
        from_({'ok': True, 'value': 1})
        # Success(value=1)

        await from_(fetch_json())  # settles to {'ok': False, 'error': 'gone'}
        # Failure(error='gone')
        ```
    """
    if is_pending(value):
        return Deferred(_from_settled(value))
    return _checked(value)
