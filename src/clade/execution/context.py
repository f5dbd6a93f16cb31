"""Context objects handed to middleware, option handlers, and command handlers.

All three carry the same per-execution ``context`` dict: middleware fills
it, bequeathed-option handlers extend it, and the command handler reads it.
:class:`MiddlewareContext` and :class:`OptionHandlerContext` expose
:meth:`halt` to stop the rest of the pipeline without an error.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Awaitable, Callable, NoReturn

from clade.definition import GlobalOption
from clade.exceptions import halt as _halt

if TYPE_CHECKING:
    from clade.tree.cli import Cli
    from clade.tree.command import Command


class _Haltable:
    def halt(self) -> NoReturn:
        """Stop the remaining pipeline for this command execution."""
        _halt()


@dataclass
class MiddlewareContext(_Haltable):
    """Argument of every middleware.

    Attributes:
        command: The command being executed.
        context: The shared execution context (mutate it in place).
        next: Coroutine function running the rest of the chain. Not awaiting
            it stops the chain silently.
    """

    command: Command
    context: dict[str, Any]
    next: Callable[[], Awaitable[None]]


@dataclass
class OptionHandlerContext(_Haltable):
    """Argument of a bequeathed option's handler.

    Attributes:
        value: The option value, validated by the option's schema if any.
        option: The bequeathed option being handled.
        command: The command being executed (not necessarily the one that
            declared the option).
        cli: The running CLI.
        context: The shared execution context.
    """

    value: Any
    option: GlobalOption
    command: Command
    cli: Cli
    context: dict[str, Any] = field(default_factory=dict)


@dataclass
class HandlerContext(_Haltable):
    """Argument of a command handler.

    Attributes:
        positional: Validated positional value (``None`` when the command
            declares no positional schema).
        options: Validated options mapping.
        context: The shared execution context.
        command: The command being executed.
        cli: The running CLI.
    """

    positional: Any
    options: dict[str, Any]
    context: dict[str, Any]
    command: Command
    cli: Cli

