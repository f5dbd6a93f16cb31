"""Validation pipeline -- turn raw parsed argv into validated handler input.

The stages run in this order inside
:func:`~clade.execution.command.execute_command`:

1. :func:`check_extraneous_options` -- apply the command's extraneous-option
   policy against own options, bequeathed options, and their aliases.
2. :func:`run_bequeathed_options` -- validate every bequeathed option that
   is present and invoke its handler (which may halt).
3. :func:`validate_positional` -- validate the first positional token.
4. :func:`validate_options` -- validate the options against the command's
   schema, recombining pass-through extras, and warn about deprecated
   options in use.

Schema failures surface as :class:`~clade.exceptions.InvalidPositionalError`
or :class:`~clade.exceptions.InvalidOptionsError` carrying the pydantic
issues.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Sequence

from pydantic import BaseModel, ValidationError

from clade import output
from clade._utils import maybe_await
from clade.definition import ExtraneousOptions
from clade.exceptions import InvalidOptionError, InvalidOptionsError, InvalidPositionalError
from clade.execution.context import OptionHandlerContext
from clade.schema import Schema, as_schema

if TYPE_CHECKING:
    from clade.tree.cli import Cli
    from clade.tree.command import Command

logger = logging.getLogger(__name__)


def format_option_name(name: str) -> str:
    """Render an option key the way it is typed (``dry_run`` -> ``--dry-run``, ``c`` -> ``-c``)."""
    if len(name) == 1:
        return f"-{name}"
    return "--" + name.replace("_", "-")


def get_valid_option_names(command: Command) -> set[str]:
    """Own option names, bequeathed option names, and all their aliases."""
    names = command.get_option_names() | set(command.bequeath_options)
    for aliases in command.get_alias_map().values():
        names.update(aliases)
    return names


def check_extraneous_options(
    raw_options: dict[str, Any],
    command: Command,
    policy: Optional[ExtraneousOptions] = None,
) -> dict[str, Any]:
    """Apply the extraneous-option policy to *raw_options*.

    Args:
        raw_options: Options as returned by the parser.
        command: The resolved command.
        policy: Overrides ``command.extraneous_options``.

    Returns:
        ``THROW`` and ``PASS_THROUGH`` return the options unchanged;
        ``FILTER_OUT`` returns only the known ones.

    Raises:
        InvalidOptionsError: Under ``THROW``, listing the unknown options and
            the accepted ones.
    """
    policy = ExtraneousOptions(policy or command.extraneous_options)
    valid = get_valid_option_names(command)
    unknown = [key for key in raw_options if key not in valid]

    if not unknown:
        return dict(raw_options)

    if policy is ExtraneousOptions.THROW:
        unknown_list = ", ".join(format_option_name(key) for key in unknown)
        known = _describe_known_options(command)
        if known:
            message = f"Unknown options provided: {unknown_list}.\nAvailable options: {', '.join(known)}"
        else:
            message = f"Unknown options provided: {unknown_list}. This command does not accept any options."
        raise InvalidOptionsError(message)

    if policy is ExtraneousOptions.FILTER_OUT:
        logger.debug("Dropping unknown options %s", unknown)
        return {key: value for key, value in raw_options.items() if key in valid}

    return dict(raw_options)


async def run_bequeathed_options(
    command: Command,
    options: dict[str, Any],
    cli: Cli,
    context: dict[str, Any],
) -> None:
    """Validate and handle every bequeathed option present in *options*.

    Options run in the order of ``command.bequeath_options`` (inherited
    first). A handler may call ``ctx.halt()`` to stop the command.

    Raises:
        InvalidOptionError: If a present option fails its schema.
        HaltError: If a handler halts.
    """
    for name, option in command.bequeath_options.items():
        if name not in options:
            continue
        value = options[name]
        schema = as_schema(option.schema)
        if schema is not None:
            try:
                value = schema.parse(value)
            except ValueError as exc:
                raise InvalidOptionError(
                    f"Invalid value for option {format_option_name(name)}: {_summarize(exc)}",
                    _issues(exc),
                    option_name=name,
                ) from exc
        if option.handler is not None:
            logger.debug("Running handler of bequeathed option '%s'", name)
            await maybe_await(
                option.handler(
                    OptionHandlerContext(
                        value=value,
                        option=option,
                        command=command,
                        cli=cli,
                        context=context,
                    )
                )
            )


def validate_positional(command: Command, positional_args: Sequence[str]) -> Any:
    """Validate the first positional token against the command's positional schema.

    Returns:
        The parsed value, or ``None`` when no positional schema is declared.

    Raises:
        InvalidPositionalError: If the value fails the schema.
    """
    schema = command.positional_schema
    if schema is None:
        return None

    raw = positional_args[0] if positional_args else None
    if raw is not None:
        deprecated = schema.get_deprecated()
        if deprecated:
            output.deprecation(_deprecation_message(deprecated, "This positional argument is deprecated"))

    try:
        return schema.parse(raw)
    except ValueError as exc:
        raise InvalidPositionalError(
            f"Invalid positional argument: {_summarize(exc)}", _issues(exc)
        ) from exc


def validate_options(
    command: Command,
    options: dict[str, Any],
    policy: Optional[ExtraneousOptions] = None,
) -> dict[str, Any]:
    """Validate *options* (already filtered by :func:`check_extraneous_options`).

    Without an options schema the map is returned unchanged. With one, the
    keys the schema declares are parsed; under ``PASS_THROUGH`` the unknown
    keys are merged back in, unvalidated.

    Raises:
        InvalidOptionsError: If the declared options fail the schema.
    """
    policy = ExtraneousOptions(policy or command.extraneous_options)
    schema = command.options_schema
    shape = schema.get_shape() if schema is not None else None

    _warn_deprecated_options(options, shape or {}, command)

    if schema is None:
        return dict(options)

    valid = get_valid_option_names(command)
    in_schema = {key: value for key, value in options.items() if shape and key in shape}
    extras = {}
    if policy is ExtraneousOptions.PASS_THROUGH:
        extras = {key: value for key, value in options.items() if key not in valid}

    try:
        parsed = schema.parse(in_schema)
    except ValueError as exc:
        raise InvalidOptionsError(f"Invalid options: {_summarize(exc)}", _issues(exc)) from exc

    if isinstance(parsed, BaseModel):
        parsed = parsed.model_dump()
    return {**parsed, **extras}


def _warn_deprecated_options(
    options: dict[str, Any], shape: dict[str, Schema], command: Command
) -> None:
    used: list[tuple[str, Optional[Schema]]] = [
        (name, sub_schema) for name, sub_schema in shape.items() if name in options
    ]
    used += [
        (name, as_schema(option.schema))
        for name, option in command.bequeath_options.items()
        if name in options and name not in shape
    ]
    for name, schema in used:
        deprecated = schema.get_deprecated() if schema is not None else None
        if deprecated:
            message = _deprecation_message(deprecated, "This option is deprecated")
            output.deprecation(f"{format_option_name(name)}: {message}")


def _describe_known_options(command: Command) -> list[str]:
    alias_map = command.get_alias_map()
    described = []
    for name in [*sorted(command.get_option_names(), key=_shape_order(command)), *command.bequeath_options]:
        aliases = alias_map.get(name)
        if aliases:
            described.append(f"{format_option_name(name)} ({', '.join('-' + a for a in aliases)})")
        else:
            described.append(format_option_name(name))
    return list(dict.fromkeys(described))


def _shape_order(command: Command):
    shape = command.options_schema.get_shape() if command.options_schema else None
    order = {name: index for index, name in enumerate(shape or ())}
    return lambda name: order.get(name, len(order))


def _deprecation_message(deprecated: Any, default: str) -> str:
    return deprecated if isinstance(deprecated, str) else default


def _issues(exc: ValueError) -> list[dict[str, Any]]:
    if isinstance(exc, ValidationError):
        return list(exc.errors(include_url=False))
    return []


def _summarize(exc: ValueError) -> str:
    if not isinstance(exc, ValidationError):
        return str(exc)
    parts = []
    for issue in exc.errors(include_url=False):
        loc = ".".join(str(part) for part in issue.get("loc", ()))
        parts.append(f"{loc}: {issue['msg']}" if loc else issue["msg"])
    return "; ".join(parts)
