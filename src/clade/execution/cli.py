"""Top-level CLI executor.

:func:`execute_cli` resolves argv to a command, runs it, reports any
escaping error on stderr and returns a process exit code. Global plugins'
``on_destroy`` hooks run afterwards in every case.

:func:`run_cli` is the synchronous entry point used by console scripts::

    def main() -> None:
        run_cli(CliDefinition(name="greeter", command=...))
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Optional, Sequence, Union

from clade import output
from clade.definition import CliDefinition
from clade.execution.command import execute_command
from clade.execution.report import report_error
from clade.execution.router import resolve_command
from clade.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INVALID_USAGE, EXIT_SUCCESS
from clade.tree.cli import Cli, create_cli

logger = logging.getLogger(__name__)


async def execute_cli(cli: Cli, args: Optional[Sequence[str]] = None) -> int:
    """Run *cli* against *args* (defaults to ``sys.argv[1:]``).

    Returns:
        ``EXIT_SUCCESS`` on success or halt, ``EXIT_INVALID_USAGE`` when no
        command could be resolved, otherwise the ``exit_code`` of the error
        that escaped the command (``EXIT_GENERIC_FAILURE`` for exceptions
        that do not carry one).
    """
    argv = list(sys.argv[1:] if args is None else args)
    command = None
    try:
        if cli.definition.deprecated:
            output.deprecation(_message(cli.definition.deprecated, "This CLI is deprecated"))

        match = resolve_command(cli, argv)
        if match is None:
            output.error("No command found")
            return EXIT_INVALID_USAGE

        command = match.command
        if command.deprecated:
            output.deprecation(_message(command.deprecated, "This command is deprecated"))

        await execute_command(command, match.remaining_argv, cli)
        return EXIT_SUCCESS
    except Exception as exc:
        logger.debug("Command failed", exc_info=True)
        report_error(exc, command)
        return getattr(exc, "exit_code", EXIT_GENERIC_FAILURE)
    finally:
        await cli.plugins.get_hook_runner().run_destroy(cli)


def run_cli(
    cli: Union[Cli, CliDefinition],
    args: Optional[Sequence[str]] = None,
) -> None:
    """Build (if needed) and execute a CLI, then exit the process with its code."""

    async def _main() -> int:
        instance = cli if isinstance(cli, Cli) else await create_cli(cli)
        return await execute_cli(instance, args)

    sys.exit(asyncio.run(_main()))


def _message(deprecated: object, default: str) -> str:
    return deprecated if isinstance(deprecated, str) else default
