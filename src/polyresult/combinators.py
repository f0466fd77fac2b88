"""Color-polymorphic combinators over Outcome and pending outcomes.

Every combinator accepts an Outcome or an awaitable of one, and follows the
same rule: an immediate subject with an immediate transform gives an
immediate Outcome; a pending subject, or a transform returning a pending
value, gives a Deferred. Each combinator can be called data-first or
data-last (see ``polyresult.dual``).

Transforms are trusted: exceptions they raise propagate to the caller (or to
whoever awaits the Deferred). Use ``try_catch``/``wrap`` to turn exceptions
into Failures.

Example:
    ```python
    def validate(name: str) -> Outcome[str, str]:
        return failure('SHORT') if len(name) < 2 else success(name)

    flat_map(success('zu'), validate)
    # Success(value='zu')

    pipe(success('z'), flat_map(validate), map(str.upper))
    # Failure(error='SHORT')
    ```
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from polyresult.dual import dual
from polyresult.errors import NotAnOutcomeError
from polyresult.outcome import Failure, Success
from polyresult.pending import Deferred, Pending, is_pending, settle

__all__ = [
    'catch_error',
    'flat_map',
    'flat_map_error',
    'map',
    'map_error',
    'match',
    'tap',
    'tap_both',
    'tap_error',
]


def _expect_outcome(value: Any, context: str) -> Success[Any] | Failure[Any]:
    if isinstance(value, Success | Failure):
        return value
    raise NotAnOutcomeError(value, context)


def _copy(outcome: Success[Any] | Failure[Any]) -> Success[Any] | Failure[Any]:
    if isinstance(outcome, Success):
        return Success(outcome.value)
    return Failure(outcome.error)


async def _resume(subject: Awaitable[Any], step: Callable[[Any], Any]) -> Any:
    """Settle subject, apply step to the Outcome, settle whatever step returns."""
    return await settle(step(await settle(subject)))


async def _wrap_when_settled(awaitable: Awaitable[Any], variant: type[Success[Any]] | type[Failure[Any]]) -> Any:
    return variant(await settle(awaitable))


async def _flatten(awaitable: Awaitable[Any], context: str) -> Any:
    return _expect_outcome(await settle(awaitable), context)


async def _after(awaitable: Awaitable[Any], outcome: Success[Any] | Failure[Any]) -> Any:
    await settle(awaitable)
    return outcome


# ---------------------------------------------------------------------
# map family
# ---------------------------------------------------------------------


def _map(subject: Any, fn: Callable[[Any], Any]) -> Any:
    """Transform the Success value.

    Args:
        subject: Outcome or awaitable of an Outcome.
        fn: Called with the value if Success; may return a plain or pending value.

    Returns:
        Success(fn(value)), the Failure unchanged, or a Deferred of either.
    """
    if is_pending(subject):
        return Deferred(_resume(subject, lambda settled: _map(settled, fn)))
    outcome = _expect_outcome(subject, 'map')
    if isinstance(outcome, Failure):
        return Failure(outcome.error)
    out = fn(outcome.value)
    if is_pending(out):
        return Deferred(_wrap_when_settled(out, Success))
    return Success(out)


def _map_error(subject: Any, fn: Callable[[Any], Any]) -> Any:
    """Transform the Failure error.

    Args:
        subject: Outcome or awaitable of an Outcome.
        fn: Called with the error if Failure; may return a plain or pending value.

    Returns:
        Failure(fn(error)), the Success unchanged, or a Deferred of either.
    """
    if is_pending(subject):
        return Deferred(_resume(subject, lambda settled: _map_error(settled, fn)))
    outcome = _expect_outcome(subject, 'map_error')
    if isinstance(outcome, Success):
        return Success(outcome.value)
    out = fn(outcome.error)
    if is_pending(out):
        return Deferred(_wrap_when_settled(out, Failure))
    return Failure(out)


def _catch_error(subject: Any, fn: Callable[[Any], Any]) -> Any:
    """Recover from a Failure by mapping its error to a Success value.

    Args:
        subject: Outcome or awaitable of an Outcome.
        fn: Called with the error if Failure; its return value becomes the Success value.

    Returns:
        Always a Success (or a Deferred of one).
    """
    if is_pending(subject):
        return Deferred(_resume(subject, lambda settled: _catch_error(settled, fn)))
    outcome = _expect_outcome(subject, 'catch_error')
    if isinstance(outcome, Success):
        return Success(outcome.value)
    out = fn(outcome.error)
    if is_pending(out):
        return Deferred(_wrap_when_settled(out, Success))
    return Success(out)


# ---------------------------------------------------------------------
# flat_map family
# ---------------------------------------------------------------------


def _flat_map(subject: Any, fn: Callable[[Any], Any]) -> Any:
    """Chain a computation returning an Outcome (also known as and_then or bind).

    Args:
        subject: Outcome or awaitable of an Outcome.
        fn: Called with the value if Success; returns an Outcome or an awaitable of one.

    Returns:
        What fn returned (flattened), the Failure unchanged, or a Deferred of either.
    """
    if is_pending(subject):
        return Deferred(_resume(subject, lambda settled: _flat_map(settled, fn)))
    outcome = _expect_outcome(subject, 'flat_map')
    if isinstance(outcome, Failure):
        return Failure(outcome.error)
    out = fn(outcome.value)
    if is_pending(out):
        return Deferred(_flatten(out, 'flat_map transform'))
    return _expect_outcome(out, 'flat_map transform')


def _flat_map_error(subject: Any, fn: Callable[[Any], Any]) -> Any:
    """Recover from a Failure with a computation returning an Outcome.

    Args:
        subject: Outcome or awaitable of an Outcome.
        fn: Called with the error if Failure; returns an Outcome or an awaitable of one.

    Returns:
        What fn returned (flattened), the Success unchanged, or a Deferred of either.
    """
    if is_pending(subject):
        return Deferred(_resume(subject, lambda settled: _flat_map_error(settled, fn)))
    outcome = _expect_outcome(subject, 'flat_map_error')
    if isinstance(outcome, Success):
        return Success(outcome.value)
    out = fn(outcome.error)
    if is_pending(out):
        return Deferred(_flatten(out, 'flat_map_error transform'))
    return _expect_outcome(out, 'flat_map_error transform')


# ---------------------------------------------------------------------
# tap family
# ---------------------------------------------------------------------


def _tap_with(subject: Any, fn: Callable[[Any], Any], channel: str, context: str) -> Any:
    if is_pending(subject):
        return Deferred(_resume(subject, lambda settled: _tap_with(settled, fn, channel, context)))
    outcome = _expect_outcome(subject, context)
    passthrough = _copy(outcome)
    if channel == 'value' and isinstance(outcome, Success):
        out = fn(outcome.value)
    elif channel == 'error' and isinstance(outcome, Failure):
        out = fn(outcome.error)
    elif channel == 'both':
        out = fn(outcome)
    else:
        return passthrough
    if is_pending(out):
        return Deferred(_after(out, passthrough))
    return passthrough


def _tap(subject: Any, fn: Callable[[Any], Any]) -> Any:
    """Call fn with the Success value for its side effect.

    The Outcome is returned unchanged. If fn returns an awaitable, the result
    is a Deferred that awaits it first. Exceptions from fn propagate.
    """
    return _tap_with(subject, fn, 'value', 'tap')


def _tap_error(subject: Any, fn: Callable[[Any], Any]) -> Any:
    """Call fn with the Failure error for its side effect.

    The Outcome is returned unchanged. If fn returns an awaitable, the result
    is a Deferred that awaits it first. Exceptions from fn propagate.
    """
    return _tap_with(subject, fn, 'error', 'tap_error')


def _tap_both(subject: Any, fn: Callable[[Any], Any]) -> Any:
    """Call fn with the whole Outcome, Success or Failure, for its side effect."""
    return _tap_with(subject, fn, 'both', 'tap_both')


# ---------------------------------------------------------------------
# match
# ---------------------------------------------------------------------


def _match(subject: Any, on_success: Callable[[Any], Any], on_failure: Callable[[Any], Any]) -> Any:
    """Consume an Outcome with one handler per variant.

    Args:
        subject: Outcome or awaitable of an Outcome.
        on_success: Called with the value if Success.
        on_failure: Called with the error if Failure.

    Returns:
        The handler's return value as is, or, for a pending subject, a
        Pending settling to the handler's (awaited) return value.
    """
    if is_pending(subject):
        return Pending(_resume(subject, lambda settled: _match(settled, on_success, on_failure)))
    outcome = _expect_outcome(subject, 'match')
    if isinstance(outcome, Success):
        return on_success(outcome.value)
    return on_failure(outcome.error)


map = dual(2, _map, 'map')  # noqa: A001
map_error = dual(2, _map_error, 'map_error')
catch_error = dual(2, _catch_error, 'catch_error')
flat_map = dual(2, _flat_map, 'flat_map')
flat_map_error = dual(2, _flat_map_error, 'flat_map_error')
tap = dual(2, _tap, 'tap')
tap_error = dual(2, _tap_error, 'tap_error')
tap_both = dual(2, _tap_both, 'tap_both')
match = dual(3, _match, 'match')


