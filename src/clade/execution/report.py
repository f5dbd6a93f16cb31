"""Human-readable reporting of errors escaping a command execution."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from clade import output
from clade.exceptions import InvalidOptionError, InvalidPositionalError, InvalidSchemaError
from clade.manifest import get_global_option_manifest

if TYPE_CHECKING:
    from clade.tree.command import Command


def report_error(error: BaseException, command: Optional[Command] = None) -> None:
    """Print *error* to stderr.

    Schema errors are expanded to one line per issue, naming the positional
    argument or the option (with its description when it has one)::

        Schema error:
          option --count: How many times to greet: Input should be a valid integer
    """
    if isinstance(error, InvalidSchemaError) and error.issues:
        _report_schema_error(error, command)
    else:
        output.error(str(error) or type(error).__name__)


def _report_schema_error(error: InvalidSchemaError, command: Optional[Command]) -> None:
    output.detail("Schema error:")
    for issue in error.issues:
        loc = [str(part) for part in issue.get("loc", ())]
        if isinstance(error, InvalidOptionError) and error.option_name:
            loc = [error.option_name, *loc]

        if isinstance(error, InvalidPositionalError):
            label = "positional argument"
            if loc:
                label += f" {'.'.join(loc)}"
            description = _positional_description(command)
        elif not loc:
            label = "options"
            description = None
        else:
            name = ".".join(loc)
            label = f"option --{name.replace('_', '-')}"
            description = _option_description(command, loc[0])

        if description:
            label = f"{label}: {description}"
        output.detail(f"  {label}: {issue.get('msg', '')}")


def _positional_description(command: Optional[Command]) -> Optional[str]:
    if command is None or command.manifest.positional is None:
        return None
    return command.manifest.positional.description


def _option_description(command: Optional[Command], name: str) -> Optional[str]:
    if command is None:
        return None
    for manifest in command.manifest.options:
        if manifest.name == name:
            return manifest.description
    option: Any = command.bequeath_options.get(name)
    if option is not None:
        return get_global_option_manifest(option).description
    return None
