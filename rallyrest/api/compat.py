"""Error-first callback adapter over the coroutine API."""

from __future__ import annotations

import functools
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

T = TypeVar("T")

ResultCallback = Callable[[BaseException | None, Any], None]


async def callbackify(awaitable: Awaitable[T], callback: ResultCallback | None = None) -> T:
    """Await ``awaitable`` and also report the outcome to ``callback``.

    The callback is invoked as ``callback(error, None)`` or
    ``callback(None, result)``. The outcome is still returned or raised.
    """
    if callback is None:
        return await awaitable
    try:
        result = await awaitable
    except Exception as e:
        callback(e, None)
        raise
    callback(None, result)
    return result


def with_callback(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """Give an async method an optional ``callback`` keyword argument."""

    @functools.wraps(func)
    async def wrapper(*args: Any, callback: ResultCallback | None = None, **kwargs: Any) -> T:
        return await callbackify(func(*args, **kwargs), callback)

    return wrapper
