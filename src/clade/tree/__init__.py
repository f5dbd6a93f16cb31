"""Command tree and CLI construction.

* :func:`~clade.tree.command.create_command` -- definition -> :class:`~clade.tree.command.Command` tree.
* :func:`~clade.tree.cli.create_cli` -- definition -> initialised :class:`~clade.tree.cli.Cli`.
"""

from clade.tree.cli import Cli, create_cli
from clade.tree.command import Command, create_command

__all__ = ["Cli", "Command", "create_cli", "create_command"]
