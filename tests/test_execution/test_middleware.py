"""Tests for the middleware chain."""

from __future__ import annotations

import pytest

from clade.definition import CommandDefinition
from clade.exceptions import HaltError
from clade.execution.middleware import execute_middleware
from clade.tree.command import create_command


@pytest.fixture
def command():
    return create_command(CommandDefinition(name="run"))


class TestExecuteMiddleware:
    """Middleware run in order against one shared context."""

    async def test_empty_chain_returns_new_context(self, command):
        assert await execute_middleware([], command) == {}

    async def test_order_and_shared_context(self, command):
        order = []

        async def first(ctx):
            order.append("first:before")
            ctx.context["user"] = "alice"
            await ctx.next()
            order.append("first:after")

        async def second(ctx):
            order.append(f"second:{ctx.context['user']}")
            await ctx.next()

        context = await execute_middleware([first, second], command)
        assert context == {"user": "alice"}
        assert order == ["first:before", "second:alice", "first:after"]

    async def test_given_context_is_mutated_in_place(self, command):
        context = {"existing": 1}

        async def add(ctx):
            ctx.context["added"] = 2
            await ctx.next()

        result = await execute_middleware([add], command, context)
        assert result is context
        assert context == {"existing": 1, "added": 2}

    async def test_not_calling_next_stops_chain(self, command):
        order = []

        def stopper(ctx):
            order.append("stopper")

        def never(ctx):
            order.append("never")

        await execute_middleware([stopper, never], command)
        assert order == ["stopper"]

    async def test_sync_middleware_returning_next_coroutine(self, command):
        order = []

        def sync(ctx):
            order.append("sync")
            return ctx.next()

        def last(ctx):
            order.append("last")

        await execute_middleware([sync, last], command)
        assert order == ["sync", "last"]

    async def test_halt_raises(self, command):
        def halting(ctx):
            ctx.halt()

        with pytest.raises(HaltError):
            await execute_middleware([halting], command)

    async def test_middleware_sees_command(self, command):
        seen = []

        async def look(ctx):
            seen.append(ctx.command.name)

        await execute_middleware([look], command)
        assert seen == ["run"]
