"""Execution engine -- from argv to a handled command.

* :mod:`~clade.execution.router` -- resolve argv path tokens to a command.
* :mod:`~clade.execution.parser` -- tokenize the remaining argv.
* :mod:`~clade.execution.validate` -- extraneous-option policy, bequeathed
  options, positional and options validation.
* :mod:`~clade.execution.middleware` -- the middleware chain.
* :mod:`~clade.execution.command` -- the per-command pipeline and hooks.
* :mod:`~clade.execution.cli` -- the top-level executor and ``run_cli``.
"""

from clade.execution.cli import execute_cli, run_cli
from clade.execution.command import execute_command
from clade.execution.context import HandlerContext, MiddlewareContext, OptionHandlerContext
from clade.execution.middleware import execute_middleware
from clade.execution.parser import ParsedArgs, parse_args
from clade.execution.report import report_error
from clade.execution.router import CommandMatch, find_command, resolve_command

__all__ = [
    "CommandMatch",
    "HandlerContext",
    "MiddlewareContext",
    "OptionHandlerContext",
    "ParsedArgs",
    "execute_cli",
    "execute_command",
    "execute_middleware",
    "find_command",
    "parse_args",
    "report_error",
    "resolve_command",
]
