"""Small helpers shared by the execution engine."""

from __future__ import annotations

import inspect
from typing import Any


async def maybe_await(value: Any) -> Any:
    """Await *value* if it is awaitable, otherwise return it unchanged.

    Lets every user callable (hook, middleware, handler) be either a plain
    function or a coroutine function.
    """
    if inspect.isawaitable(value):
        return await value
    return value
