"""Tests for the per-command pipeline."""

from __future__ import annotations

from typing import Optional

import pytest
from pydantic import BaseModel

from clade.definition import CliDefinition, CommandDefinition, ExtraneousOptions, GlobalOption
from clade.exceptions import InvalidOptionsError, InvalidPositionalError
from clade.execution.command import execute_command
from clade.plugins.base import define_plugin
from clade.schema import option
from clade.tree.cli import create_cli


class CountOptions(BaseModel):
    count: int = option(1, aliases="c")


async def _single(definition: CommandDefinition, plugins=()):
    cli = await create_cli(CliDefinition(name="tool", command=definition, plugins=list(plugins)))
    return cli, cli.command


class TestPipeline:
    """Stages run in order and feed the handler."""

    async def test_handler_receives_validated_input(self, calls):
        def handler(ctx):
            calls.append((ctx.positional, ctx.options, ctx.command.name, ctx.cli.name))

        cli, command = await _single(CommandDefinition(positional=int, options=CountOptions, handler=handler))
        await execute_command(command, ["5", "-c", "2"], cli)
        assert calls == [(5, {"count": 2}, "root", "tool")]

    async def test_empty_command_gets_empty_options(self, calls):
        cli, command = await _single(CommandDefinition(handler=lambda ctx: calls.append((ctx.positional, ctx.options))))
        await execute_command(command, [], cli)
        assert calls == [(None, {})]

    async def test_async_handler(self, calls):
        async def handler(ctx):
            calls.append("async")

        cli, command = await _single(CommandDefinition(handler=handler))
        await execute_command(command, [], cli)
        assert calls == ["async"]

    async def test_no_handler_is_fine(self):
        cli, command = await _single(CommandDefinition())
        await execute_command(command, [], cli)

    async def test_stage_order(self, calls):
        async def middleware(ctx):
            calls.append("middleware")
            ctx.context["from_middleware"] = True
            await ctx.next()

        def option_handler(ctx):
            calls.append(("option", ctx.context.get("from_middleware")))

        def pre(ctx):
            calls.append(("pre", ctx.positional, ctx.options, ctx.raw_options))

        def handler(ctx):
            calls.append(("handler", ctx.context))

        cli, command = await _single(
            CommandDefinition(
                positional=str,
                middleware=[middleware],
                bequeath_options=[GlobalOption(name="flag", handler=option_handler)],
                handler=handler,
            ),
            plugins=[define_plugin("p", on_pre_command_execution=pre)],
        )
        await execute_command(command, ["x", "--flag"], cli)
        assert calls == [
            "middleware",
            ("option", True),
            ("pre", "x", {"flag": True}, {"flag": True}),
            ("handler", {"from_middleware": True}),
        ]


class TestHooks:
    """Pre and after hooks around the handler."""

    async def test_global_then_command_plugins(self, make_recorder, calls):
        cli = await create_cli(
            CliDefinition(
                name="tool",
                plugins=[make_recorder("global")],
                command=CommandDefinition(
                    plugins=[lambda: make_recorder("local")],
                    handler=lambda ctx: calls.append(("handler", "run")),
                ),
            )
        )
        calls.clear()
        await execute_command(cli.command, [], cli)
        assert calls == [
            ("global", "pre"),
            ("local", "pre"),
            ("handler", "run"),
            ("global", "after"),
            ("local", "after"),
        ]

    async def test_command_plugins_created_per_execution(self):
        created = []

        def factory():
            plugin = define_plugin("local")()
            created.append(plugin)
            return plugin

        cli, command = await _single(CommandDefinition(plugins=[factory]))
        await execute_command(command, [], cli)
        await execute_command(command, [], cli)
        assert len(created) == 2
        assert created[0] is not created[1]

    async def test_after_hooks_run_on_failure_with_error(self, calls):
        def handler(ctx):
            raise ValueError("handler broke")

        cli, command = await _single(
            CommandDefinition(handler=handler),
            plugins=[define_plugin("p", on_after_command_execution=lambda ctx: calls.append(ctx.error))],
        )
        with pytest.raises(ValueError, match="handler broke"):
            await execute_command(command, [], cli)
        assert len(calls) == 1
        assert isinstance(calls[0], ValueError)

    async def test_pre_hook_failure_skips_handler(self, calls):
        def pre(ctx):
            raise RuntimeError("pre broke")

        cli, command = await _single(
            CommandDefinition(handler=lambda ctx: calls.append("handler")),
            plugins=[
                define_plugin("p", on_pre_command_execution=pre, on_after_command_execution=lambda ctx: calls.append("after"))
            ],
        )
        with pytest.raises(RuntimeError, match="pre broke"):
            await execute_command(command, [], cli)
        assert calls == ["after"]

    async def test_after_hook_failure_does_not_mask_success(self, calls):
        def after(ctx):
            raise RuntimeError("after broke")

        cli, command = await _single(
            CommandDefinition(handler=lambda ctx: calls.append("handler")),
            plugins=[define_plugin("p", on_after_command_execution=after)],
        )
        await execute_command(command, [], cli)
        assert calls == ["handler"]


class TestHalt:
    """halt() ends the execution without an error."""

    @pytest.mark.parametrize("where", ["middleware", "option", "handler"])
    async def test_halt_from_any_stage(self, where, calls):
        def middleware(ctx):
            if where == "middleware":
                ctx.halt()
            return ctx.next()

        def option_handler(ctx):
            if where == "option":
                ctx.halt()

        def handler(ctx):
            calls.append("handler")
            if where == "handler":
                ctx.halt()
            calls.append("after-halt")

        cli, command = await _single(
            CommandDefinition(
                middleware=[middleware],
                bequeath_options=[GlobalOption(name="go", handler=option_handler)],
                handler=handler,
            ),
            plugins=[define_plugin("p", on_after_command_execution=lambda ctx: calls.append(("after", ctx.error)))],
        )
        await execute_command(command, ["--go"], cli)

        expected_handler = ["handler"] if where == "handler" else []
        assert calls == [*expected_handler, ("after", None)]


class TestValidationFailures:
    async def test_invalid_option_before_handler(self, calls):
        cli, command = await _single(
            CommandDefinition(options=CountOptions, handler=lambda ctx: calls.append("handler"))
        )
        with pytest.raises(InvalidOptionsError):
            await execute_command(command, ["--count", "invalid"], cli)
        assert calls == []

    async def test_missing_positional(self):
        cli, command = await _single(CommandDefinition(positional=str))
        with pytest.raises(InvalidPositionalError):
            await execute_command(command, [], cli)

    async def test_unknown_option_throws_by_default(self):
        cli, command = await _single(CommandDefinition(options=CountOptions))
        with pytest.raises(InvalidOptionsError, match="--bogus"):
            await execute_command(command, ["--bogus"], cli)

    async def test_filter_out_drops_unknown(self, calls):
        cli, command = await _single(
            CommandDefinition(
                options=CountOptions,
                extraneous_options=ExtraneousOptions.FILTER_OUT,
                handler=lambda ctx: calls.append(ctx.options),
            )
        )
        await execute_command(command, ["--bogus", "-c", "4"], cli)
        assert calls == [{"count": 4}]

    async def test_pass_through_keeps_unknown(self, calls):
        cli, command = await _single(
            CommandDefinition(
                options=CountOptions,
                extraneous_options="pass-through",
                handler=lambda ctx: calls.append(ctx.options),
            )
        )
        await execute_command(command, ["--bogus", "yes"], cli)
        assert calls == [{"count": 1, "bogus": "yes"}]

    async def test_inherited_option_is_not_extraneous(self, calls):
        cli = await create_cli(
            CliDefinition(
                name="tool",
                command=CommandDefinition(
                    bequeath_options=[GlobalOption(name="verbose", schema=Optional[bool])],
                    commands=[CommandDefinition(name="sub", handler=lambda ctx: calls.append(ctx.options))],
                ),
            )
        )
        await execute_command(cli.command.children["sub"], ["--verbose"], cli)
        assert calls == [{"verbose": True}]
