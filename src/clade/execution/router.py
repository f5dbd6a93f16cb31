"""Command resolver -- walk the command tree along argv path tokens."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from clade.tree.cli import Cli
    from clade.tree.command import Command

logger = logging.getLogger(__name__)

OPTION_PREFIX = "-"


@dataclass
class CommandMatch:
    """Result of :func:`resolve_command`."""

    command: Command
    remaining_argv: list[str] = field(default_factory=list)


def resolve_command(cli: Cli, argv: list[str]) -> Optional[CommandMatch]:
    """Find the command addressed by the leading path tokens of *argv*.

    Starting at the root, each token that does not start with ``-`` is
    matched against the current node's children (first child whose
    ``paths`` contain it, declaration order). Descent stops at the first
    option token or the first token that matches no child; that token and
    everything after it is returned as ``remaining_argv``.

    Returns:
        The deepest matched command and the unconsumed argv, or ``None``
        when the CLI has no root command.
    """
    if cli.command is None:
        return None

    command = cli.command
    index = 0
    while index < len(argv) and not argv[index].startswith(OPTION_PREFIX):
        child = command.find_child(argv[index])
        if child is None:
            break
        command = child
        index += 1

    logger.debug("Resolved %r to command '%s'", argv[:index], command.name)
    return CommandMatch(command=command, remaining_argv=list(argv[index:]))


def find_command(root: Command, name: str) -> Optional[Command]:
    """Depth-first search of *root*'s descendants by name or path token.

    Direct children are checked before deeper levels.
    """
    for child in root.children.values():
        if child.name == name or name in child.paths:
            return child
    for child in root.children.values():
        found = find_command(child, name)
        if found is not None:
            return found
    return None
