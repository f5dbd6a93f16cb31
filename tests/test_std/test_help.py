"""Tests for help rendering and HelpPlugin."""

from __future__ import annotations

from typing import Optional

import pytest

from clade.definition import CliDefinition, CommandDefinition, GlobalOption
from clade.exceptions import CladeError
from clade.execution.cli import execute_cli
from clade.exit_codes import EXIT_INVALID_USAGE, EXIT_SUCCESS
from clade.schema import FieldSchema
from clade.std.help import HelpPlugin, lookup_command, render_help
from clade.tree.cli import create_cli


@pytest.fixture
async def help_cli(greet_cli_definition):
    greet_cli_definition.plugins = [HelpPlugin]
    return await create_cli(greet_cli_definition)


class TestHelpPlugin:
    """HelpPlugin adds --help/-h and the help command."""

    async def test_extends_root(self, help_cli):
        assert "help" in help_cli.command.children
        assert "help" in help_cli.command.bequeath_options

    async def test_installs_default_root(self, capsys):
        cli = await create_cli(CliDefinition(name="tool", plugins=[HelpPlugin]))
        assert await execute_cli(cli, []) == EXIT_SUCCESS
        assert capsys.readouterr().out.startswith("Usage: tool <command> [options]\n")

    async def test_help_option_halts(self, help_cli, calls, capsys):
        assert await execute_cli(help_cli, ["greet", "-h"]) == EXIT_SUCCESS
        assert calls == []
        assert capsys.readouterr().out.startswith("Usage: tool greet <positional> [options]\n")

    async def test_help_option_false_does_not_halt(self, help_cli, calls):
        await execute_cli(help_cli, ["greet", "Bob", "--no-help"])
        assert calls[0][0] == "greet"

    async def test_help_command_for_subcommand(self, help_cli, capsys):
        assert await execute_cli(help_cli, ["help", "greet"]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "Greet someone" in out
        assert "Aliases: g, greet" in out
        assert "  --count, -c" in out

    async def test_help_command_unknown(self, help_cli, capsys):
        assert await execute_cli(help_cli, ["help", "nope"]) == EXIT_INVALID_USAGE
        assert capsys.readouterr().err == "Error: Command 'nope' not found\n"

    async def test_user_help_command_kept(self, capsys):
        custom = CommandDefinition(name="help", handler=lambda ctx: print("custom"))
        cli = await create_cli(
            CliDefinition(name="tool", plugins=[HelpPlugin], command=CommandDefinition(commands=[custom]))
        )
        await execute_cli(cli, ["help"])
        assert capsys.readouterr().out == "custom\n"


class TestRenderHelp:
    async def test_root_overview(self, help_cli, capsys):
        render_help(help_cli)
        out = capsys.readouterr().out
        assert "Version: 1.2.3" in out
        assert "Commands:" in out
        assert "greet (g, greet)" in out
        assert "--debug" in out
        assert out.rstrip().endswith('Use "tool help <command>" for more information about a command.')

    async def test_deprecated_option_marked(self, capsys):
        cli = await create_cli(
            CliDefinition(
                name="tool",
                command=CommandDefinition(commands=[CommandDefinition(name="old", deprecated=True)]),
            )
        )
        render_help(cli)
        assert "[deprecated: This command is deprecated]" in capsys.readouterr().out


class TestLookupCommand:
    async def test_nested_lookup(self, help_cli):
        assert lookup_command(help_cli, "g").name == "greet"

    async def test_missing(self, help_cli):
        with pytest.raises(CladeError) as exc_info:
            lookup_command(help_cli, "missing")
        assert exc_info.value.exit_code == EXIT_INVALID_USAGE


async def test_help_lists_only_usable_aliases(greet_cli_definition, capsys):
    greet_cli_definition.plugins = [HelpPlugin]
    greet_cli_definition.command.bequeath_options.append(
        GlobalOption(name="config", schema=FieldSchema.of(Optional[str], None, aliases="c"))
    )
    cli = await create_cli(greet_cli_definition)
    await execute_cli(cli, ["help", "greet"])
    lines = capsys.readouterr().out.splitlines()
    assert any(line.startswith("  --count, -c ") for line in lines)
    assert any(line.rstrip() == "  --config" for line in lines)
