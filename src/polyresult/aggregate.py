"""all_(): combine many outcomes into one."""

from __future__ import annotations

from collections.abc import Awaitable, Iterable
from typing import Any

import anyio

from polyresult._logging import get_logger
from polyresult.errors import NotAnOutcomeError
from polyresult.outcome import Failure, Success
from polyresult.pending import Deferred, is_pending, settle

__all__ = ['all_']

_log = get_logger(__name__)


def _collect(outcomes: list[Any]) -> Success[list[Any]] | Failure[Any]:
    """Return the lowest-index Failure, or Success of all values in order."""
    values: list[Any] = []
    for index, outcome in enumerate(outcomes):
        if isinstance(outcome, Failure):
            return Failure(outcome.error)
        if not isinstance(outcome, Success):
            raise NotAnOutcomeError(outcome, f'all_ element {index}')
        values.append(outcome.value)
    return Success(values)


async def _collect_pending(items: list[Any]) -> Success[list[Any]] | Failure[Any]:
    settled: list[Any] = list(items)
    pending = [i for i, item in enumerate(items) if is_pending(item)]

    async with anyio.create_task_group() as tg:

        async def settle_one(i: int, aw: Awaitable[Any]) -> None:
            settled[i] = await settle(aw)

        for i in pending:
            tg.start_soon(settle_one, i, items[i])

    result = _collect(settled)
    _log.debug('all_ settled', size=len(items), pending=len(pending), ok=result.ok)
    return result


def all_(items: Iterable[Any]) -> Any:
    """Combine outcomes into a single Outcome of a list.

    Returns ``Success([v0, v1, ...])`` in input order if every element is a
    Success, otherwise the Failure with the lowest input index.

    Immediate inputs give an immediate Outcome. If any element is pending, a
    Deferred is returned: on await, the pending elements are awaited
    concurrently and the result is chosen only once all have settled, so the
    order in which they finish never changes it.

    Note:
        An exception raised while awaiting an element is re-raised inside an
        ExceptionGroup, as anyio task groups do.

    Args:
        items: Outcomes and/or awaitables of outcomes.

    Returns:
        An Outcome, or a Deferred of one.

    Example:
        ```python
        all_([success(1), success(2)])
        # Success(value=[1, 2])

        all_([success(1), failure('e'), failure('f')])
        # Failure(error='e')
        ```
    """
    materialized = list(items)
    if not any(is_pending(item) for item in materialized):
        return _collect(materialized)
    return Deferred(_collect_pending(materialized))
