"""Declarative definitions: the user-facing surface of clade.

A CLI is declared as plain dataclasses and turned into runtime objects by
:func:`~clade.tree.cli.create_cli`:

* :class:`CliDefinition` -- the top-level program (name, version, root
  command, global plugins).
* :class:`CommandDefinition` -- one node of the command tree, with its
  positional/options schemas, children, bequeathed options, plugins,
  middleware, and handler.
* :class:`GlobalOption` -- a *bequeathed* option, visible to the command
  declaring it and to all of its descendants.
* :class:`PluginPack` -- a named bundle of plugin definitions, flattened at
  CLI construction time.

Example::

    from pydantic import BaseModel
    from clade import CliDefinition, CommandDefinition, option

    class GreetOptions(BaseModel):
        count: int = option(1, aliases="c")

    greet = CommandDefinition(
        name="greet",
        paths=["g", "greet"],
        positional=str,
        options=GreetOptions,
        handler=lambda ctx: print(ctx.positional * ctx.options["count"]),
    )

    cli_definition = CliDefinition(
        name="hello",
        version="1.0.0",
        command=CommandDefinition(commands=[greet]),
    )
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

Deprecation = Union[bool, str, None]


class ExtraneousOptions(str, enum.Enum):
    """Policy for options a command does not declare.

    ``THROW`` rejects them with :class:`~clade.exceptions.InvalidOptionsError`,
    ``FILTER_OUT`` silently drops them, and ``PASS_THROUGH`` keeps them
    (unvalidated) in the options handed to the command handler.
    """

    THROW = "throw"
    FILTER_OUT = "filter-out"
    PASS_THROUGH = "pass-through"


@dataclass
class GlobalOption:
    """An option bequeathed by a command to itself and all its descendants.

    Attributes:
        name: Canonical option name (``--name`` on the command line).
        schema: Optional schema-like object (see :func:`~clade.schema.as_schema`)
            used to validate the raw value and to read aliases/description.
        handler: Optional callable invoked with an
            :class:`~clade.execution.context.OptionHandlerContext` whenever
            the option is present. May be a coroutine function.
    """

    name: str
    schema: Any = None
    handler: Optional[Callable[..., Any]] = None


@dataclass
class CommandDefinition:
    """Declarative description of a command node.

    A root command omits ``name`` and is built as ``"root"``. ``paths``
    lists the routing tokens matched by the resolver and defaults to
    ``[name]``.
    """

    name: str = "root"
    paths: Optional[list[str]] = None
    description: Optional[str] = None
    details: Optional[str] = None
    deprecated: Deprecation = None
    positional: Any = None
    options: Any = None
    middleware: list[Callable[..., Any]] = field(default_factory=list)
    examples: list[str] = field(default_factory=list)
    extraneous_options: Union[ExtraneousOptions, str] = ExtraneousOptions.THROW
    plugins: list[Any] = field(default_factory=list)
    commands: list["CommandDefinition"] = field(default_factory=list)
    bequeath_options: list[GlobalOption] = field(default_factory=list)
    handler: Optional[Callable[..., Any]] = None


@dataclass
class PluginPack:
    """A named bundle of plugin definitions (factories, instances, or nested packs)."""

    name: str
    plugins: list[Any] = field(default_factory=list)


@dataclass
class CliDefinition:
    """Declarative description of a whole CLI program.

    Attributes:
        plugins: Global plugin definitions -- :class:`~clade.plugins.base.Plugin`
            factories (a ``Plugin`` subclass qualifies), ready ``Plugin``
            instances, or :class:`PluginPack` bundles.
        discover_plugins: Also load plugins registered under the
            ``clade.plugins`` entry-point group.
        enabled_plugins: When non-empty, only these discovered plugins load.
        disabled_plugins: Discovered plugins to skip.
    """

    name: str
    version: Optional[str] = None
    description: Optional[str] = None
    details: Optional[str] = None
    deprecated: Deprecation = None
    command: Optional[CommandDefinition] = None
    plugins: list[Any] = field(default_factory=list)
    discover_plugins: bool = False
    enabled_plugins: list[str] = field(default_factory=list)
    disabled_plugins: list[str] = field(default_factory=list)
