"""The ``--version`` option, the ``version`` command, and :class:`VersionPlugin`."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from clade import output
from clade.definition import CommandDefinition, GlobalOption
from clade.exceptions import CladeError
from clade.plugins.base import Plugin
from clade.schema import FieldSchema
from clade.std._root import extend_root_command

if TYPE_CHECKING:
    from clade.execution.context import HandlerContext, OptionHandlerContext
    from clade.plugins.hooks import PluginContext
    from clade.tree.cli import Cli


def show_version(cli: Cli) -> None:
    """Print ``<name> <version>`` to stdout.

    Raises:
        CladeError: If the CLI declares no version.
    """
    if not cli.version:
        raise CladeError("Version is not set")
    output.print_data(f"{cli.name} {cli.version}")


def _version_option_handler(ctx: OptionHandlerContext) -> None:
    if ctx.value:
        show_version(ctx.cli)
        ctx.halt()


def _version_handler(ctx: HandlerContext) -> None:
    show_version(ctx.cli)


version_option = GlobalOption(
    name="version",
    schema=FieldSchema.of(Optional[bool], None, description="Show version", aliases=["v"]),
    handler=_version_option_handler,
)

version_command = CommandDefinition(
    name="version",
    description="Show version",
    handler=_version_handler,
)


class VersionPlugin(Plugin):
    """Adds ``--version``/``-v`` to every command and a ``version`` subcommand."""

    @property
    def name(self) -> str:
        return "version"

    @property
    def description(self) -> str:
        return "Show the CLI version"

    def on_init(self, ctx: PluginContext) -> None:
        extend_root_command(ctx.cli, bequeath_options=[version_option], commands=[version_command])
