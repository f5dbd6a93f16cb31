"""Command executor -- run one resolved command through the full pipeline.

Pipeline, in order:

1. Collect plugins: the CLI's global plugins followed by the command's own.
2. Parse argv with the command's combined alias map.
3. Run middleware against a fresh execution context.
4. Apply the extraneous-option policy.
5. Run bequeathed-option handlers.
6. Validate positional, then options.
7. Run ``on_pre_command_execution`` hooks.
8. Run the handler.

``on_after_command_execution`` hooks always run, on success, on halt, and
on failure (with ``HookContext.error`` set). A halt ends the execution
normally; any other exception propagates unchanged after the after-hooks.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from clade import output
from clade._utils import maybe_await
from clade.exceptions import HaltError
from clade.execution.context import HandlerContext
from clade.execution.middleware import execute_middleware
from clade.execution.parser import parse_args
from clade.execution.validate import (
    check_extraneous_options,
    run_bequeathed_options,
    validate_options,
    validate_positional,
)
from clade.plugins.base import create_plugin
from clade.plugins.hooks import HookContext, HookRunner

if TYPE_CHECKING:
    from clade.tree.cli import Cli
    from clade.tree.command import Command

logger = logging.getLogger(__name__)


async def execute_command(command: Command, args: Sequence[str], cli: Cli) -> None:
    """Execute *command* with the argv tail *args*.

    Raises:
        InvalidSchemaError: On unknown options or validation failures.
        Exception: Anything raised by middleware, option handlers,
            pre-hooks, or the handler.
    """
    plugins = [*cli.plugins, *(create_plugin(d) for d in command.plugins)]
    runner = HookRunner(plugins)

    parsed = parse_args(args, command.get_alias_map())
    logger.debug(
        "Executing '%s' with positional=%r options=%r",
        command.name,
        parsed.positional,
        parsed.options,
    )

    hook_ctx = HookContext(cli=cli, command=command.definition, node=command)

    try:
        await execute_middleware(command.middleware, command, hook_ctx.context)

        hook_ctx.raw_options = check_extraneous_options(parsed.options, command)
        await run_bequeathed_options(command, hook_ctx.raw_options, cli, hook_ctx.context)

        hook_ctx.positional = validate_positional(command, parsed.positional)
        hook_ctx.options = validate_options(command, hook_ctx.raw_options)

        await runner.run_pre_command_execution(hook_ctx)

        if command.handler is not None:
            await maybe_await(
                command.handler(
                    HandlerContext(
                        positional=hook_ctx.positional,
                        options=hook_ctx.options,
                        context=hook_ctx.context,
                        command=command,
                        cli=cli,
                    )
                )
            )
    except HaltError:
        output.debug(f"Command '{command.name}' halted")
    except Exception as exc:
        hook_ctx.error = exc
        raise
    finally:
        await runner.run_after_command_execution(hook_ctx)
