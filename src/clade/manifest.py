"""Manifest extraction -- derive serialisable descriptors from definitions.

Every extractor reads a definition (or a schema) through the
:mod:`clade.schema` adapter and returns one of the Pydantic models in
:mod:`clade.models`. :func:`get_manifest` dispatches on the object type so
help renderers and other introspection tools can stay generic.
"""

from __future__ import annotations

from functools import singledispatch
from typing import Any, Iterable, Optional

from clade.definition import CliDefinition, CommandDefinition, GlobalOption
from clade.models import (
    CliManifest,
    CommandManifest,
    OptionManifest,
    PositionalManifest,
)
from clade.schema import Schema, as_schema


def get_option_manifest(name: str, schema: Any) -> OptionManifest:
    """Describe the option *name* validated by *schema* (which may be ``None``)."""
    adapter = as_schema(schema)
    if adapter is None:
        return OptionManifest(name=name)
    return OptionManifest(
        name=name,
        description=adapter.get_description(),
        details=adapter.get_details(),
        aliases=adapter.get_aliases() or [],
        deprecated=adapter.get_deprecated(),
    )


def get_options_manifest(schema: Any) -> list[OptionManifest]:
    """Describe every field of an object-like options schema, in declaration order."""
    adapter = as_schema(schema)
    shape = adapter.get_shape() if adapter is not None else None
    if not shape:
        return []
    return [get_option_manifest(name, sub_schema) for name, sub_schema in shape.items()]


def get_positional_manifest(schema: Any) -> Optional[PositionalManifest]:
    adapter = as_schema(schema)
    if adapter is None:
        return None
    return PositionalManifest(
        description=adapter.get_description(),
        details=adapter.get_details(),
        deprecated=adapter.get_deprecated(),
    )


def get_global_option_manifest(option: GlobalOption) -> OptionManifest:
    return get_option_manifest(option.name, option.schema)


def get_command_manifest(definition: CommandDefinition) -> CommandManifest:
    """Describe *definition* and, recursively, its child commands."""
    return CommandManifest(
        name=definition.name,
        paths=list(definition.paths) if definition.paths is not None else [definition.name],
        description=definition.description,
        details=definition.details,
        examples=list(definition.examples),
        deprecated=definition.deprecated,
        positional=get_positional_manifest(definition.positional),
        options=get_options_manifest(definition.options),
        bequeath_options=[get_global_option_manifest(o) for o in definition.bequeath_options],
        commands=[get_command_manifest(child) for child in definition.commands],
    )


def get_cli_manifest(
    definition: CliDefinition, plugins: Iterable[Any] = ()
) -> CliManifest:
    """Describe a CLI.

    Args:
        definition: The CLI definition.
        plugins: Instantiated plugins (anything with a ``manifest``
            attribute) to list in the manifest.
    """
    return CliManifest(
        name=definition.name,
        version=definition.version,
        description=definition.description,
        details=definition.details,
        deprecated=definition.deprecated,
        command=get_command_manifest(definition.command) if definition.command else None,
        plugins=[plugin.manifest for plugin in plugins],
    )


@singledispatch
def get_manifest(obj: Any) -> Any:
    """Return the manifest of any definition or runtime object.

    Runtime objects (commands, CLIs, plugins) already carry a ``manifest``
    attribute, which is returned as-is.

    Raises:
        TypeError: If *obj* has no known manifest.
    """
    manifest = getattr(obj, "manifest", None)
    if manifest is None:
        raise TypeError(f"Cannot derive a manifest from {type(obj).__name__}")
    return manifest


@get_manifest.register
def _(obj: CliDefinition) -> CliManifest:
    return get_cli_manifest(obj)


@get_manifest.register
def _(obj: CommandDefinition) -> CommandManifest:
    return get_command_manifest(obj)


@get_manifest.register
def _(obj: GlobalOption) -> OptionManifest:
    return get_global_option_manifest(obj)


@get_manifest.register
def _(obj: Schema) -> PositionalManifest:
    manifest = get_positional_manifest(obj)
    assert manifest is not None
    return manifest

