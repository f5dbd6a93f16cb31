"""Plugin manager -- the global plugin registry of a CLI.

This module contains :class:`PluginManager`, which keeps the CLI's global
plugins in registration order, keyed by plugin name, and hands out a
lazily-cached :class:`~clade.plugins.hooks.HookRunner` over them.

Registration policy: a name may be registered only once. Registering a
duplicate raises :class:`~clade.exceptions.PluginError` unless
``replace=True`` is passed, in which case the new plugin takes the old
one's slot (and therefore its position in hook order).

Plugins can also be discovered from Python entry points in the
``clade.plugins`` group. Third-party packages register them in their
``pyproject.toml``::

    [project.entry-points."clade.plugins"]
    my-plugin = "my_package.plugin:MyPlugin"
"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Any, Iterable, Iterator, Optional

from clade.definition import PluginPack
from clade.exceptions import PluginError
from clade.plugins.base import Plugin, create_plugin
from clade.plugins.hooks import HookRunner

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "clade.plugins"
"""The entry-point group name used for plugin discovery."""


def expand_packs(definitions: Iterable[Any]) -> list[Any]:
    """Flatten :class:`~clade.definition.PluginPack` bundles (recursively) in order."""
    flat: list[Any] = []
    for definition in definitions:
        if isinstance(definition, PluginPack):
            logger.debug("Expanding plugin pack '%s'", definition.name)
            flat.extend(expand_packs(definition.plugins))
        else:
            flat.append(definition)
    return flat


class PluginManager:
    """Ordered registry of global plugins, keyed by name.

    Iterating the manager yields plugins in registration order, which is
    the order every hook phase runs in.

    Example:
        Typical usage::

            manager = PluginManager()
            manager.register(HelpPlugin())
            runner = manager.get_hook_runner()
    """

    def __init__(self) -> None:
        self._plugins: dict[str, Plugin] = {}
        self._hook_runner: Optional[HookRunner] = None

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, plugin: Plugin, replace: bool = False) -> Plugin:
        """Add *plugin* to the registry.

        Args:
            plugin: The plugin instance to register.
            replace: Overwrite a plugin already registered under the same
                name instead of failing.

        Returns:
            The registered plugin.

        Raises:
            PluginError: If the name is taken and *replace* is false.
        """
        name = plugin.name
        if name in self._plugins and not replace:
            raise PluginError(f"Plugin '{name}' is already registered")
        self._plugins[name] = plugin
        self._hook_runner = None
        logger.debug("Registered plugin '%s' v%s", name, plugin.version)
        return plugin

    def register_all(self, definitions: Iterable[Any]) -> list[Plugin]:
        """Instantiate and register plugin definitions, expanding packs first."""
        return [self.register(create_plugin(d)) for d in expand_packs(definitions)]

    def unregister(self, name: str) -> Plugin:
        try:
            plugin = self._plugins.pop(name)
        except KeyError:
            raise PluginError(f"Plugin '{name}' is not registered") from None
        self._hook_runner = None
        return plugin

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def discover(
        self,
        enabled: Iterable[str] = (),
        disabled: Iterable[str] = (),
    ) -> list[str]:
        """Discover and register plugins from the ``clade.plugins`` entry points.

        When *enabled* is non-empty only those entry points load; otherwise
        every entry point not in *disabled* loads.

        Returns:
            The names of the entry points that were registered. Entry points
            that fail to load are logged as warnings and skipped.
        """
        loaded_names: list[str] = []
        enabled_set = set(enabled)
        disabled_set = set(disabled)

        for ep in importlib.metadata.entry_points(group=ENTRY_POINT_GROUP):
            name = ep.name
            if enabled_set and name not in enabled_set:
                logger.debug("Plugin '%s' not in enabled list, skipping", name)
                continue
            if name in disabled_set:
                logger.debug("Plugin '%s' is disabled, skipping", name)
                continue

            try:
                self.register(create_plugin(ep.load()))
                loaded_names.append(name)
            except Exception as exc:
                logger.warning("Failed to load plugin '%s': %s", name, exc)

        return loaded_names

    # ------------------------------------------------------------------
    # Querying
    # ------------------------------------------------------------------

    def get_plugin(self, name: str) -> Plugin:
        """Retrieve a registered plugin by name.

        Raises:
            PluginError: If no plugin with the given *name* is registered.
        """
        try:
            return self._plugins[name]
        except KeyError:
            raise PluginError(f"Plugin '{name}' is not registered") from None

    def names(self) -> list[str]:
        return list(self._plugins)

    def list_plugins(self) -> list[dict[str, str]]:
        """List registered plugins as ``name``/``version``/``description`` dicts."""
        return [plugin.manifest.model_dump() for plugin in self._plugins.values()]

    def __iter__(self) -> Iterator[Plugin]:
        return iter(list(self._plugins.values()))

    def __len__(self) -> int:
        return len(self._plugins)

    def __contains__(self, name: object) -> bool:
        return name in self._plugins

    # ------------------------------------------------------------------
    # Hook runner
    # ------------------------------------------------------------------

    def get_hook_runner(self) -> HookRunner:
        """Return a :class:`~clade.plugins.hooks.HookRunner` over all registered plugins.

        The runner is cached and invalidated whenever the registry changes.
        """
        if self._hook_runner is None:
            self._hook_runner = HookRunner(list(self._plugins.values()))
        return self._hook_runner
