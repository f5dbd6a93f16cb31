"""Middleware engine -- run a command's middleware chain against a shared context."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Iterable, Optional

from clade._utils import maybe_await
from clade.execution.context import MiddlewareContext

if TYPE_CHECKING:
    from clade.tree.command import Command


async def execute_middleware(
    middlewares: Iterable[Callable[..., Any]],
    command: Command,
    context: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """Run *middlewares* in order and return the execution context.

    Each middleware receives a :class:`~clade.execution.context.MiddlewareContext`
    and must ``await ctx.next()`` to hand over to the next one. A middleware
    that returns without calling ``next`` ends the chain early; the command
    itself still runs. ``ctx.halt()`` raises
    :class:`~clade.exceptions.HaltError`, which stops the whole command.

    Args:
        middlewares: Callables, usually ``async def`` functions.
        command: The command being executed.
        context: The context dict to mutate; a new one is created if omitted.

    Returns:
        The (same) context dict after the chain finished.
    """
    chain = list(middlewares)
    if context is None:
        context = {}
    cursor = 0

    async def next_() -> None:
        nonlocal cursor
        if cursor >= len(chain):
            return
        middleware = chain[cursor]
        cursor += 1
        await maybe_await(middleware(MiddlewareContext(command=command, context=context, next=next_)))

    await next_()
    return context
