"""clade -- Declarative command trees with validated arguments and plugins.

A CLI is declared as a tree of :class:`CommandDefinition` objects, each with
optional pydantic positional/options schemas, bequeathed options inherited
by descendants, middleware, and plugins hooking into the command lifecycle.

Typical usage::

    from pydantic import BaseModel
    from clade import CliDefinition, CommandDefinition, option, run_cli
    from clade.std import std_pack

    class GreetOptions(BaseModel):
        count: int = option(1, aliases="c")

    def greet(ctx):
        for _ in range(ctx.options["count"]):
            print(f"Hello, {ctx.positional}!")

    run_cli(CliDefinition(
        name="hello",
        version="1.0.0",
        plugins=[std_pack],
        command=CommandDefinition(commands=[
            CommandDefinition(name="greet", positional=str, options=GreetOptions, handler=greet),
        ]),
    ))

Modules:
    definition: Dataclasses making up the declarative surface.
    schema: Adapter over pydantic schemas and the ``option()`` field helper.
    tree: Runtime command nodes and the CLI builder.
    execution: Router, parser, validation, middleware and executors.
    plugins: Plugin base class, hook runner and registry.
    std: Standard plugins (help, version, verbose, dry-run, config) and packs.
    config: Config file locations and JSON loading.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes.
    output: stdout/stderr formatting with Rich support.
"""

__version__ = "0.1.0"

from clade.definition import (
    CliDefinition,
    CommandDefinition,
    ExtraneousOptions,
    GlobalOption,
    PluginPack,
)
from clade.exceptions import (
    CladeError,
    ConfigError,
    DuplicateNameError,
    HaltError,
    InvalidOptionError,
    InvalidOptionsError,
    InvalidPositionalError,
    InvalidSchemaError,
    PluginError,
    halt,
)
from clade.execution import (
    HandlerContext,
    MiddlewareContext,
    OptionHandlerContext,
    execute_cli,
    execute_command,
    execute_middleware,
    parse_args,
    resolve_command,
)
from clade.execution.cli import run_cli
from clade.manifest import get_manifest
from clade.plugins import HookContext, Plugin, PluginContext, define_plugin
from clade.schema import FieldSchema, ModelSchema, Schema, as_schema, option
from clade.tree import Cli, Command, create_cli, create_command

__all__ = [
    "Cli",
    "CladeError",
    "CliDefinition",
    "Command",
    "CommandDefinition",
    "ConfigError",
    "DuplicateNameError",
    "ExtraneousOptions",
    "FieldSchema",
    "GlobalOption",
    "HaltError",
    "HandlerContext",
    "HookContext",
    "InvalidOptionError",
    "InvalidOptionsError",
    "InvalidPositionalError",
    "InvalidSchemaError",
    "MiddlewareContext",
    "ModelSchema",
    "OptionHandlerContext",
    "Plugin",
    "PluginContext",
    "PluginError",
    "PluginPack",
    "Schema",
    "as_schema",
    "create_cli",
    "create_command",
    "define_plugin",
    "execute_cli",
    "execute_command",
    "execute_middleware",
    "get_manifest",
    "halt",
    "option",
    "parse_args",
    "resolve_command",
    "run_cli",
]
