"""Tests for the plugin packs."""

from __future__ import annotations

from clade.definition import CliDefinition, CommandDefinition
from clade.execution.cli import execute_cli
from clade.std import base_pack, std_pack
from clade.tree.cli import create_cli


async def test_base_pack_plugins():
    cli = await create_cli(CliDefinition(name="tool", version="1.0", plugins=[base_pack]))
    assert cli.plugins.names() == ["help", "version"]
    assert set(cli.command.children) == {"help", "version"}


async def test_std_pack_options(isolated_config, calls):
    def handler(ctx):
        calls.append({key: ctx.context[key] for key in ("verbosity", "dry_run", "config")})

    cli = await create_cli(
        CliDefinition(
            name="tool",
            version="1.0",
            plugins=[std_pack],
            command=CommandDefinition(commands=[CommandDefinition(name="run", handler=handler)]),
        )
    )
    assert cli.plugins.names() == ["help", "version", "verbose", "dry-run", "config"]
    assert set(cli.command.bequeath_options) == {"help", "version", "verbose", "dry_run", "config"}

    assert await execute_cli(cli, ["run", "-VV", "-n"]) == 0
    assert calls == [{"verbosity": 2, "dry_run": True, "config": {}}]
