"""Plugin system for clade -- plugin base class, lifecycle hooks, registry.

Key classes:

* :class:`Plugin` -- Abstract base class that all plugins extend.
* :class:`PluginManager` -- Ordered, name-keyed registry of global plugins.
* :class:`HookRunner` -- Executes one hook phase across plugins in order.
* :class:`PluginContext` / :class:`HookContext` -- Objects handed to hooks.

Example:
    Registering a function-style plugin::

        audit = define_plugin(
            "audit",
            on_after_command_execution=lambda ctx: log.info("ran %s", ctx.command.name),
        )
        CliDefinition(name="tool", plugins=[audit])
"""

from clade.plugins.base import FunctionPlugin, Plugin, create_plugin, define_plugin
from clade.plugins.hooks import HookContext, HookRunner, PluginContext
from clade.plugins.manager import ENTRY_POINT_GROUP, PluginManager, expand_packs

__all__ = [
    "ENTRY_POINT_GROUP",
    "FunctionPlugin",
    "HookContext",
    "HookRunner",
    "Plugin",
    "PluginContext",
    "PluginManager",
    "create_plugin",
    "define_plugin",
    "expand_packs",
]
