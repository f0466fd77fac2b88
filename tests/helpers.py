"""Awaitable helpers for tests of pending values."""

from __future__ import annotations

from typing import Any

import anyio


async def later[T](value: T, delay: float = 0) -> T:
    """Return value after yielding to the event loop."""
    await anyio.sleep(delay)
    return value


async def raise_later(exc: BaseException, delay: float = 0) -> Any:
    """Raise exc after yielding to the event loop."""
    await anyio.sleep(delay)
    raise exc
