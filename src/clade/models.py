"""Canonical Pydantic models for clade manifests.

A *manifest* is the serialisable description of a definition: names,
help text, aliases, and deprecation markers, without any callables or
schemas attached. Manifests are used for introspection and help
rendering, never for execution. They are produced by the extractors in
:mod:`clade.manifest`.

All models use Pydantic v2; ``model_dump()`` yields plain JSON-compatible
data.
"""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, Field

Deprecation = Union[bool, str, None]


class PluginManifest(BaseModel):
    """Descriptor of a plugin, keyed by its unique ``name``."""

    name: str
    version: str = "0.1.0"
    description: str = ""


class OptionManifest(BaseModel):
    """Descriptor of one option (command-declared or bequeathed)."""

    name: str
    description: Optional[str] = None
    details: Optional[str] = None
    aliases: list[str] = Field(default_factory=list)
    deprecated: Deprecation = None


class PositionalManifest(BaseModel):
    """Descriptor of a command's positional argument."""

    description: Optional[str] = None
    details: Optional[str] = None
    deprecated: Deprecation = None


class CommandManifest(BaseModel):
    """Descriptor of a command node and, recursively, its children."""

    name: str
    paths: list[str] = Field(default_factory=list)
    description: Optional[str] = None
    details: Optional[str] = None
    examples: list[str] = Field(default_factory=list)
    deprecated: Deprecation = None
    positional: Optional[PositionalManifest] = None
    options: list[OptionManifest] = Field(default_factory=list)
    bequeath_options: list[OptionManifest] = Field(default_factory=list)
    commands: list[CommandManifest] = Field(default_factory=list)


class CliManifest(BaseModel):
    """Descriptor of a whole CLI program."""

    name: str
    version: Optional[str] = None
    description: Optional[str] = None
    details: Optional[str] = None
    deprecated: Deprecation = None
    command: Optional[CommandManifest] = None
    plugins: list[PluginManifest] = Field(default_factory=list)
