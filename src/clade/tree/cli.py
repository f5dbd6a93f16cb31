"""CLI builder -- turn a :class:`~clade.definition.CliDefinition` into a :class:`Cli`.

:func:`create_cli` is the construction phase of a CLI:

1. Build the optional root command tree (:func:`~clade.tree.command.create_command`).
2. Expand plugin packs, instantiate every global plugin, and register it
   in a :class:`~clade.plugins.manager.PluginManager` (duplicate names fail).
3. Optionally discover entry-point plugins.
4. Run every plugin's ``on_init`` hook sequentially, in registration order.
   Hooks own the :class:`Cli` exclusively during this phase and may replace
   ``cli.command`` wholesale.

Construction is atomic: if any step fails the error propagates and no
:class:`Cli` is returned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from clade.definition import CliDefinition
from clade.manifest import get_cli_manifest
from clade.models import CliManifest
from clade.plugins.manager import PluginManager
from clade.tree.command import Command, create_command

logger = logging.getLogger(__name__)


@dataclass
class Cli:
    """A runtime CLI: manifest, root command, and global plugin registry."""

    definition: CliDefinition
    manifest: CliManifest
    command: Optional[Command]
    plugins: PluginManager

    @property
    def name(self) -> str:
        return self.manifest.name

    @property
    def version(self) -> Optional[str]:
        return self.manifest.version


async def create_cli(definition: CliDefinition) -> Cli:
    """Build a :class:`Cli` and run its plugins' ``on_init`` hooks.

    Args:
        definition: The declarative CLI definition.

    Returns:
        The fully initialised CLI.

    Raises:
        DuplicateNameError: If the command tree has sibling name collisions.
        PluginError: If two global plugins share a name or a definition is
            not a valid plugin factory.
        Exception: Whatever an ``on_init`` hook raised, after logging it.
    """
    command = create_command(definition.command) if definition.command else None

    plugins = PluginManager()
    plugins.register_all(definition.plugins)
    if definition.discover_plugins:
        plugins.discover(definition.enabled_plugins, definition.disabled_plugins)

    cli = Cli(
        definition=definition,
        manifest=get_cli_manifest(definition, plugins),
        command=command,
        plugins=plugins,
    )

    await plugins.get_hook_runner().run_init(cli)
    logger.debug("Created CLI '%s' with plugins %s", cli.name, plugins.names())
    return cli
