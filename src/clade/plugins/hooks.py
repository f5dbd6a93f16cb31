"""Hook contexts and the runner that drives the plugin lifecycle.

This module provides three components:

* :class:`PluginContext` -- passed to ``on_init`` and ``on_destroy``.
* :class:`HookContext` -- passed to ``on_pre_command_execution`` and
  ``on_after_command_execution``. Fields are progressively filled as the
  command pipeline advances.
* :class:`HookRunner` -- executes one hook phase across an ordered list of
  plugins, applying that phase's error policy.

Error policy per phase:

* ``on_init`` and ``on_pre_command_execution`` -- the first failure is
  logged with the plugin name and re-raised, aborting the phase. A
  ``halt()`` from a pre hook propagates without being logged as a failure.
* ``on_after_command_execution`` and ``on_destroy`` -- every failure is
  logged and swallowed so one plugin can neither mask the original outcome
  nor prevent the remaining plugins from running.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Optional

from clade._utils import maybe_await
from clade.exceptions import HaltError
from clade.plugins.base import Plugin

if TYPE_CHECKING:
    from clade.definition import CommandDefinition
    from clade.tree.cli import Cli
    from clade.tree.command import Command

logger = logging.getLogger(__name__)


@dataclass
class PluginContext:
    """Context for CLI-level hooks.

    Attributes:
        cli: The CLI under construction (``on_init``) or being torn down
            (``on_destroy``). ``on_init`` hooks may replace ``cli.command``.
        plugin: The plugin whose hook is running.
    """

    cli: Cli
    plugin: Optional[Plugin] = None


@dataclass
class HookContext:
    """Context for command-level hooks.

    Attributes:
        cli: The running CLI.
        command: Definition of the command being executed.
        node: The runtime :class:`~clade.tree.command.Command` node.
        plugin: The plugin whose hook is running.
        context: The execution context shared with middleware, option
            handlers, and the command handler.
        raw_options: Parsed options after the extraneous-option policy,
            before schema validation.
        positional: Validated positional value.
        options: Validated options.
        error: For after-hooks, the exception that failed the execution,
            otherwise ``None``.
    """

    cli: Cli
    command: CommandDefinition
    node: Command
    plugin: Optional[Plugin] = None
    context: dict[str, Any] = field(default_factory=dict)
    raw_options: dict[str, Any] = field(default_factory=dict)
    positional: Any = None
    options: dict[str, Any] = field(default_factory=dict)
    error: Optional[BaseException] = None


class HookRunner:
    """Executes plugin hooks across plugins in registration order.

    The runner holds an immutable snapshot of the plugin list it was created
    with.
    """

    def __init__(self, plugins: list[Plugin]) -> None:
        self._plugins = list(plugins)

    @property
    def plugins(self) -> list[Plugin]:
        return list(self._plugins)

    async def run_init(self, cli: Cli) -> None:
        """Run ``on_init`` sequentially; the first failure is logged and re-raised."""
        for plugin in self._plugins:
            try:
                await maybe_await(plugin.on_init(PluginContext(cli=cli, plugin=plugin)))
            except Exception as exc:
                logger.error("Plugin '%s' on_init hook failed: %s", plugin.name, exc)
                raise

    async def run_pre_command_execution(self, ctx: HookContext) -> None:
        """Run ``on_pre_command_execution``; the first failure is logged and re-raised."""
        for plugin in self._plugins:
            try:
                await maybe_await(plugin.on_pre_command_execution(replace(ctx, plugin=plugin)))
            except HaltError:
                raise
            except Exception as exc:
                logger.error(
                    "Plugin '%s' on_pre_command_execution hook failed: %s", plugin.name, exc
                )
                raise

    async def run_after_command_execution(self, ctx: HookContext) -> None:
        """Run ``on_after_command_execution`` for every plugin, swallowing failures."""
        for plugin in self._plugins:
            try:
                await maybe_await(plugin.on_after_command_execution(replace(ctx, plugin=plugin)))
            except Exception as exc:
                logger.error(
                    "Plugin '%s' on_after_command_execution hook failed: %s", plugin.name, exc
                )

    async def run_destroy(self, cli: Cli) -> None:
        """Run ``on_destroy`` for every plugin, swallowing failures."""
        for plugin in self._plugins:
            try:
                await maybe_await(plugin.on_destroy(PluginContext(cli=cli, plugin=plugin)))
            except Exception as exc:
                logger.error("Plugin '%s' on_destroy hook failed: %s", plugin.name, exc)
