"""Help rendering, the ``--help`` option, the ``help`` command, and :class:`HelpPlugin`."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from clade import output
from clade.definition import CommandDefinition, GlobalOption
from clade.exceptions import CladeError
from clade.exit_codes import EXIT_INVALID_USAGE
from clade.execution.router import find_command
from clade.manifest import get_global_option_manifest
from clade.models import OptionManifest
from clade.plugins.base import Plugin
from clade.schema import FieldSchema
from clade.std._root import extend_root_command

if TYPE_CHECKING:
    from clade.execution.context import HandlerContext, OptionHandlerContext
    from clade.plugins.hooks import PluginContext
    from clade.tree.cli import Cli
    from clade.tree.command import Command


# ------------------------------------------------------------------ #
# Rendering
# ------------------------------------------------------------------ #


def render_help(cli: Cli, command: Optional[Command] = None) -> None:
    """Print help for *command* (the CLI overview when omitted or root) to stdout."""
    if command is None or command is cli.command:
        _render_root_help(cli)
    else:
        _render_command_help(cli, command)


def _render_root_help(cli: Cli) -> None:
    root = cli.command
    manifest = cli.manifest

    output.print_data(f"Usage: {_usage(cli, root, [])}")
    output.print_data("")
    if manifest.version:
        output.print_data(f"Version: {manifest.version}")
    if manifest.deprecated:
        output.print_data(f"Deprecated: {_message(manifest.deprecated, 'This CLI is deprecated')}")
    if manifest.description:
        output.print_data(manifest.description)

    if root is not None:
        _render_sections(root)

    if manifest.details:
        output.print_data("")
        output.print_data(manifest.details)
    if root is not None and root.children:
        output.print_data("")
        output.print_data(f'Use "{cli.name} help <command>" for more information about a command.')


def _render_command_help(cli: Cli, command: Command) -> None:
    manifest = command.manifest
    path = _command_path(cli.command, command) if cli.command is not None else [command.name]

    output.print_data(f"Usage: {_usage(cli, command, path)}")
    output.print_data("")
    if manifest.description:
        output.print_data(manifest.description)
    if manifest.paths and manifest.paths != [manifest.name]:
        output.print_data(f"Aliases: {', '.join(manifest.paths)}")
    if manifest.deprecated:
        output.print_data(f"Deprecated: {_message(manifest.deprecated, 'This command is deprecated')}")
    if manifest.details:
        output.print_data(manifest.details)

    _render_sections(command)

    if manifest.examples:
        output.print_data("")
        output.print_data("Examples:")
        for example in manifest.examples:
            output.print_data(f"  {example}")


def _render_sections(command: Command) -> None:
    manifest = command.manifest

    if manifest.positional is not None:
        positional = manifest.positional
        description = positional.description or "(any)"
        if positional.deprecated:
            description += f" [deprecated: {_message(positional.deprecated, 'This argument is deprecated')}]"
        output.print_data("")
        output.print_table(["Argument", "Description"], [["<positional>", description]], title="Positional")

    if command.children:
        rows = []
        for child in command.children.values():
            child_manifest = child.manifest
            name = child_manifest.name
            if child_manifest.paths and child_manifest.paths != [name]:
                name += f" ({', '.join(child_manifest.paths)})"
            description = child_manifest.description or ""
            if child_manifest.deprecated:
                description += f" [deprecated: {_message(child_manifest.deprecated, 'This command is deprecated')}]"
            rows.append([name, description.strip()])
        output.print_data("")
        output.print_table(["Command", "Description"], rows, title="Commands")

    own_names = {o.name for o in manifest.options}
    alias_map = command.get_alias_map()
    options = [
        *manifest.options,
        *(
            get_global_option_manifest(o).model_copy(update={"aliases": alias_map.get(o.name, [])})
            for o in command.bequeath_options.values()
            if o.name not in own_names
        ),
    ]
    if options:
        output.print_data("")
        output.print_table(["Option", "Description"], [_option_row(o) for o in options], title="Options")


def _option_row(option: OptionManifest) -> list[str]:
    flags = "--" + option.name.replace("_", "-")
    if option.aliases:
        flags += ", " + ", ".join(f"-{alias}" for alias in option.aliases)
    description = option.description or ""
    if option.deprecated:
        description += f" [deprecated: {_message(option.deprecated, 'This option is deprecated')}]"
    return [flags, description.strip()]


def _usage(cli: Cli, command: Optional[Command], path: list[str]) -> str:
    parts = [cli.name, *path]
    if command is not None:
        if command.children:
            parts.append("<command>")
        if command.positional_schema is not None:
            parts.append("<positional>")
        if command.options_schema is not None or command.bequeath_options:
            parts.append("[options]")
    return " ".join(parts)


def _command_path(root: Command, target: Command) -> list[str]:
    for child in root.children.values():
        if child is target:
            return [child.name]
        sub_path = _command_path(child, target)
        if sub_path:
            return [child.name, *sub_path]
    return []


def _message(deprecated: Any, default: str) -> str:
    return deprecated if isinstance(deprecated, str) else default


def lookup_command(cli: Cli, name: str) -> Command:
    """Find a command by name or path token anywhere in the tree.

    Raises:
        CladeError: If no command matches (exit code 2).
    """
    root = cli.command
    if root is not None:
        if root.name == name or name in root.paths:
            return root
        found = find_command(root, name)
        if found is not None:
            return found
    raise CladeError(f"Command '{name}' not found", exit_code=EXIT_INVALID_USAGE)


# ------------------------------------------------------------------ #
# Option, command, plugin
# ------------------------------------------------------------------ #


def help_handler(ctx: HandlerContext) -> None:
    """Handler of the ``help [command]`` command and of the default root."""
    if ctx.positional:
        render_help(ctx.cli, lookup_command(ctx.cli, ctx.positional))
    else:
        render_help(ctx.cli)


def _help_option_handler(ctx: OptionHandlerContext) -> None:
    if ctx.value:
        render_help(ctx.cli, ctx.command)
        ctx.halt()


help_option = GlobalOption(
    name="help",
    schema=FieldSchema.of(Optional[bool], None, description="Show help", aliases=["h"]),
    handler=_help_option_handler,
)

help_command = CommandDefinition(
    name="help",
    description="Show help",
    positional=FieldSchema.of(Optional[str], None, description="Command name to show help for"),
    handler=help_handler,
)


class HelpPlugin(Plugin):
    """Adds ``--help``/``-h`` to every command and a ``help [command]`` subcommand.

    When the CLI declares no root command, a root that renders the CLI help
    is installed.
    """

    @property
    def name(self) -> str:
        return "help"

    @property
    def description(self) -> str:
        return "Show help for the CLI and its commands"

    def on_init(self, ctx: PluginContext) -> None:
        extend_root_command(ctx.cli, bequeath_options=[help_option], commands=[help_command])
