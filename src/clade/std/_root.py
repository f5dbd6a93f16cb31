"""Helpers the standard plugins use to rework the root command during ``on_init``."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Iterable

from clade.definition import CommandDefinition, GlobalOption
from clade.tree.command import create_command

if TYPE_CHECKING:
    from clade.tree.cli import Cli


def default_root_definition() -> CommandDefinition:
    """The root installed when a CLI declares none: it renders the CLI help."""
    from clade.std.help import help_handler

    return CommandDefinition(name="root", paths=[], handler=help_handler)


def extend_root_command(
    cli: Cli,
    *,
    bequeath_options: Iterable[GlobalOption] = (),
    commands: Iterable[CommandDefinition] = (),
) -> None:
    """Rebuild ``cli.command`` with extra bequeathed options and subcommands.

    Options and subcommands already present by name are left alone, so a
    plugin registered twice (``replace=True``) or a user-declared ``help``
    command is not duplicated. A default root is installed first when the
    CLI has none.
    """
    base = cli.command.definition if cli.command is not None else default_root_definition()

    existing_options = {option.name for option in base.bequeath_options}
    existing_commands = {child.name for child in base.commands}

    definition = dataclasses.replace(
        base,
        bequeath_options=[
            *base.bequeath_options,
            *(o for o in bequeath_options if o.name not in existing_options),
        ],
        commands=[
            *base.commands,
            *(c for c in commands if c.name not in existing_commands),
        ],
    )
    cli.command = create_command(definition)
    cli.manifest.command = cli.command.manifest
