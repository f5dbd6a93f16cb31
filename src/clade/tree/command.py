"""Build runtime command nodes from :class:`~clade.definition.CommandDefinition`.

:func:`create_command` walks a definition tree once, at CLI construction
time, and produces a tree of :class:`Command` nodes:

1. Coerce the positional and options schemas through
   :func:`~clade.schema.as_schema`.
2. Merge the inherited bequeathed options with the definition's own (own
   entries win on a name collision) into ``bequeath_options``.
3. Recurse into ``definition.commands``, handing the merged options down so
   every descendant sees the whole inherited chain.
4. Index children by name in declaration order; a repeated name raises
   :class:`~clade.exceptions.DuplicateNameError`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator, Optional

from clade.definition import CommandDefinition, ExtraneousOptions, GlobalOption
from clade.exceptions import DuplicateNameError
from clade.manifest import get_command_manifest
from clade.models import CommandManifest
from clade.schema import Schema, as_schema, get_alias_map


@dataclass
class Command:
    """A runtime node of the command tree.

    Nodes are immutable by convention once built; plugins that need a
    different tree build a new one with :func:`create_command` and assign it
    to ``cli.command`` during ``on_init``.
    """

    definition: CommandDefinition
    manifest: CommandManifest
    name: str
    paths: list[str]
    positional_schema: Optional[Schema] = None
    options_schema: Optional[Schema] = None
    handler: Optional[Callable[..., Any]] = None
    children: dict[str, "Command"] = field(default_factory=dict)
    bequeath_options: dict[str, GlobalOption] = field(default_factory=dict)
    plugins: list[Any] = field(default_factory=list)
    middleware: list[Callable[..., Any]] = field(default_factory=list)
    deprecated: Any = None
    extraneous_options: ExtraneousOptions = ExtraneousOptions.THROW

    def find_child(self, token: str) -> Optional["Command"]:
        """Return the first child (declaration order) whose paths contain *token*."""
        for child in self.children.values():
            if token in child.paths:
                return child
        return None

    def iter_tree(self) -> Iterator["Command"]:
        """Yield this node and every descendant, depth first."""
        yield self
        for child in self.children.values():
            yield from child.iter_tree()

    def get_option_names(self) -> set[str]:
        """Names of the options this command declares itself."""
        shape = self.options_schema.get_shape() if self.options_schema else None
        return set(shape or ())

    def get_alias_map(self) -> dict[str, list[str]]:
        """Combined alias map: own option aliases plus bequeathed-option aliases.

        Own options claim their names and aliases first. A bequeathed option
        sharing an own option's name adds its aliases to that entry. A
        bequeathed alias that is already claimed is dropped, so ``-c`` stays
        with an own ``count`` even when an ancestor bequeaths ``config``
        with alias ``c``; the bequeathed option remains reachable by its
        long name.
        """
        alias_map = get_alias_map(self.options_schema)
        claimed = self.get_option_names() | set(self.bequeath_options)
        for aliases in alias_map.values():
            claimed.update(aliases)
        for name, option in self.bequeath_options.items():
            schema = as_schema(option.schema)
            declared = (schema.get_aliases() if schema is not None else None) or []
            aliases = [alias for alias in declared if alias not in claimed]
            if aliases:
                alias_map[name] = [*alias_map.get(name, []), *aliases]
                claimed.update(aliases)
        return alias_map

    def __repr__(self) -> str:
        return f"Command(name={self.name!r}, paths={self.paths!r}, children={list(self.children)!r})"


def create_command(
    definition: CommandDefinition,
    inherited_bequeath: Iterable[GlobalOption] = (),
) -> Command:
    """Build a :class:`Command` tree from *definition*.

    Args:
        definition: The command (or root command) definition.
        inherited_bequeath: Bequeathed options declared by ancestors, closest
            ancestor last.

    Returns:
        The runtime node, with children built recursively.

    Raises:
        DuplicateNameError: If two children share a name or one definition
            bequeaths the same option name twice.
    """
    bequeath = _merge_bequeath_options(inherited_bequeath, definition.bequeath_options)

    node = Command(
        definition=definition,
        manifest=get_command_manifest(definition),
        name=definition.name,
        paths=list(definition.paths) if definition.paths is not None else [definition.name],
        positional_schema=as_schema(definition.positional),
        options_schema=as_schema(definition.options),
        handler=definition.handler,
        bequeath_options=bequeath,
        plugins=list(definition.plugins),
        middleware=list(definition.middleware),
        deprecated=definition.deprecated,
        extraneous_options=ExtraneousOptions(definition.extraneous_options),
    )

    for child_definition in definition.commands:
        if child_definition.name in node.children:
            raise DuplicateNameError(
                f"Command '{node.name}' already has a subcommand named '{child_definition.name}'"
            )
        node.children[child_definition.name] = create_command(
            child_definition, bequeath.values()
        )

    return node


def _merge_bequeath_options(
    inherited: Iterable[GlobalOption], own: Iterable[GlobalOption]
) -> dict[str, GlobalOption]:
    merged = {option.name: option for option in inherited}
    seen: set[str] = set()
    for option in own:
        if option.name in seen:
            raise DuplicateNameError(f"Bequeathed option '{option.name}' is declared twice")
        seen.add(option.name)
        merged[option.name] = option
    return merged
