"""End-to-end scenarios: definition in, exit code and side effects out."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from clade import (
    CliDefinition,
    CommandDefinition,
    ExtraneousOptions,
    GlobalOption,
    create_cli,
    define_plugin,
    execute_cli,
    option,
)
from clade.std import std_pack


class TestGreetScenario:
    """The greet CLI from conftest driven through execute_cli."""

    async def test_options_are_parsed_and_coerced(self, greet_cli_definition, calls):
        cli = await create_cli(greet_cli_definition)
        assert await execute_cli(cli, ["greet", "Alice", "--verbose", "--count", "3"]) == 0
        assert calls == [("greet", "Alice", {"verbose": True, "count": 3})]

    async def test_path_alias_and_short_options(self, greet_cli_definition, calls):
        cli = await create_cli(greet_cli_definition)
        await execute_cli(cli, ["g", "Alice", "-v", "-c", "2"])
        assert calls == [("greet", "Alice", {"verbose": True, "count": 2})]

    async def test_invalid_count_fails(self, greet_cli_definition, calls, capsys):
        cli = await create_cli(greet_cli_definition)
        assert await execute_cli(cli, ["greet", "Alice", "--count", "invalid"]) == 2
        assert calls == []
        assert "option --count" in capsys.readouterr().err

    async def test_missing_positional_fails(self, greet_cli_definition, capsys):
        cli = await create_cli(greet_cli_definition)
        assert await execute_cli(cli, ["greet"]) == 2
        assert "positional argument" in capsys.readouterr().err

    async def test_unknown_option_lists_available(self, greet_cli_definition, capsys):
        cli = await create_cli(greet_cli_definition)
        assert await execute_cli(cli, ["greet", "Alice", "--colour", "red"]) == 2
        err = capsys.readouterr().err
        assert err.startswith("Error: Unknown options provided: --colour.\nAvailable options:")

    async def test_bequeathed_option_reaches_descendants(self, greet_cli_definition, calls):
        cli = await create_cli(greet_cli_definition)
        await execute_cli(cli, ["sub", "--debug"])
        assert calls == [("sub", None, {"debug": True}, {"debug": True})]


class TestLifecycle:
    async def test_hooks_around_handler(self, make_recorder, calls):
        cli = await create_cli(
            CliDefinition(
                name="tool",
                plugins=[make_recorder("audit")],
                command=CommandDefinition(handler=lambda ctx: calls.append("handler")),
            )
        )
        await execute_cli(cli, [])
        assert calls == [
            ("audit", "init"),
            ("audit", "pre"),
            "handler",
            ("audit", "after"),
            ("audit", "destroy"),
        ]

    async def test_after_hook_sees_error(self, calls):
        def after(ctx):
            calls.append(type(ctx.error).__name__)

        def handler(ctx):
            raise ValueError("bad")

        cli = await create_cli(
            CliDefinition(
                name="tool",
                plugins=[define_plugin("watch", on_after_command_execution=after)],
                command=CommandDefinition(handler=handler),
            )
        )
        assert await execute_cli(cli, []) == 1
        assert calls == ["ValueError"]

    async def test_halting_middleware(self, calls):
        def stop(ctx):
            calls.append("stop")
            ctx.halt()

        cli = await create_cli(
            CliDefinition(
                name="tool",
                command=CommandDefinition(middleware=[stop], handler=lambda ctx: calls.append("handler")),
            )
        )
        assert await execute_cli(cli, []) == 0
        assert calls == ["stop"]


class TestExtraneousPolicies:
    """FILTER_OUT drops unknown options, PASS_THROUGH hands them to the handler."""

    class Options(BaseModel):
        name: Optional[str] = option(None, aliases="n")

    async def _run(self, policy, calls):
        cli = await create_cli(
            CliDefinition(
                name="tool",
                command=CommandDefinition(
                    options=self.Options,
                    extraneous_options=policy,
                    handler=lambda ctx: calls.append(dict(ctx.options)),
                ),
            )
        )
        return await execute_cli(cli, ["-n", "x", "--extra", "1"])

    async def test_filter_out(self, calls):
        assert await self._run(ExtraneousOptions.FILTER_OUT, calls) == 0
        assert calls == [{"name": "x"}]

    async def test_pass_through(self, calls):
        assert await self._run(ExtraneousOptions.PASS_THROUGH, calls) == 0
        assert calls == [{"name": "x", "extra": "1"}]

    async def test_throw(self, calls):
        assert await self._run(ExtraneousOptions.THROW, calls) == 2
        assert calls == []


async def test_std_pack_cli(isolated_config, capsys):
    async def deploy(ctx):
        if not ctx.context["dry_run"]:
            print(f"deploying {ctx.positional}")

    cli = await create_cli(
        CliDefinition(
            name="shipit",
            version="0.9.0",
            plugins=[std_pack],
            command=CommandDefinition(
                commands=[CommandDefinition(name="deploy", positional=str, handler=deploy)],
                bequeath_options=[GlobalOption(name="region", schema=Optional[str])],
            ),
        )
    )
    assert await execute_cli(cli, ["deploy", "web", "--dry-run"]) == 0
    assert await execute_cli(cli, ["deploy", "web", "--region", "eu"]) == 0
    assert await execute_cli(cli, ["--version"]) == 0
    assert capsys.readouterr().out == "deploying web\nshipit 0.9.0\n"


async def test_own_aliases_win_under_std_pack(greet_cli_definition, isolated_config, calls):
    greet_cli_definition.plugins = [std_pack]
    cli = await create_cli(greet_cli_definition)
    assert await execute_cli(cli, ["greet", "Alice", "-v", "-c", "3"]) == 0
    assert calls == [("greet", "Alice", {"verbose": True, "count": 3})]
