"""Exception hierarchy for clade.

All errors raised by the framework inherit from :class:`CladeError`, which
carries an ``exit_code`` attribute mapped to a constant from
:mod:`clade.exit_codes`. The top-level executor in
:func:`clade.execution.cli.execute_cli` catches every escaping exception,
reports it, and returns the matching code.

:class:`HaltError` is deliberately *not* part of this hierarchy: it is the
control signal raised by :func:`halt` and is swallowed by
:func:`~clade.execution.command.execute_command`.

Subclass hierarchy::

    CladeError (exit 1)
    +-- InvalidSchemaError      (exit 2)
    |   +-- InvalidPositionalError
    |   +-- InvalidOptionsError
    |       +-- InvalidOptionError
    +-- DuplicateNameError      (exit 1)
    +-- PluginError             (exit 10)
    +-- ConfigError             (exit 1)

    HaltError (control flow, never reported)
"""

from __future__ import annotations

from typing import Any, NoReturn, Optional, Sequence

from clade.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_PLUGIN_ERROR,
)


class CladeError(Exception):
    """Base exception for all clade errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidSchemaError(CladeError):
    """Raised when a value fails schema validation.

    Args:
        message: Summary of the failure.
        issues: The structured issues reported by the schema engine, as
            returned by :meth:`pydantic.ValidationError.errors`. Each issue
            is a dict with at least ``loc`` and ``msg`` keys. May be empty
            when the failure is not tied to a field (e.g. unknown options).
    """

    exit_code = EXIT_INVALID_USAGE

    def __init__(self, message: str, issues: Optional[Sequence[dict[str, Any]]] = None):
        super().__init__(message)
        self.issues: list[dict[str, Any]] = list(issues or [])


class InvalidPositionalError(InvalidSchemaError):
    """Raised when the positional argument fails validation."""


class InvalidOptionsError(InvalidSchemaError):
    """Raised for unknown options or when the options map fails validation."""


class InvalidOptionError(InvalidOptionsError):
    """Raised when a single option (e.g. a bequeathed one) fails validation.

    Subclasses :class:`InvalidOptionsError` so callers catching option
    failures in general also see single-option ones.
    """

    def __init__(
        self,
        message: str,
        issues: Optional[Sequence[dict[str, Any]]] = None,
        option_name: Optional[str] = None,
    ):
        super().__init__(message, issues)
        self.option_name = option_name


class DuplicateNameError(CladeError):
    """Raised when two sibling commands (or bequeathed options) share a name."""


class PluginError(CladeError):
    """Raised when a plugin fails to register or a plugin factory is invalid."""

    exit_code = EXIT_PLUGIN_ERROR


class ConfigError(CladeError):
    """Raised for configuration problems (unreadable files, invalid JSON, failed validation)."""


class HaltError(Exception):
    """Control signal that stops the current command execution.

    Raised by :func:`halt` from middleware, option handlers, or command
    handlers. It is not a failure: the executor treats it as a successful
    early exit while still running after-execution and destroy hooks.
    """

    def __init__(self) -> None:
        super().__init__("Command execution halted")


def halt() -> NoReturn:
    """Stop the remaining pipeline of the current command execution."""
    raise HaltError()
