"""Abstract base class for clade plugins.

Every plugin must subclass :class:`Plugin` and implement the :attr:`name`
property. The lifecycle hooks (``on_init``, ``on_pre_command_execution``,
``on_after_command_execution``, ``on_destroy``) are optional -- default
implementations are no-ops so plugins only override what they need. Each
hook may be a plain method or a coroutine method.

A *plugin definition* is a zero-argument factory returning a
:class:`Plugin`. A ``Plugin`` subclass is itself such a factory, and
:func:`define_plugin` builds one from plain callables. Global plugins are
created once per CLI; command-level plugins are created fresh on every
execution of their command.

Example:
    Minimal plugin implementation::

        class TimingPlugin(Plugin):
            @property
            def name(self) -> str:
                return "timing"

            def on_pre_command_execution(self, ctx):
                ctx.context["started"] = time.monotonic()

            def on_after_command_execution(self, ctx):
                elapsed = time.monotonic() - ctx.context.get("started", 0)
                logger.info("%s took %.2fs", ctx.command.name, elapsed)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Optional

from clade.exceptions import PluginError
from clade.models import PluginManifest

if TYPE_CHECKING:
    from clade.plugins.hooks import HookContext, PluginContext


class Plugin(ABC):
    """Base class for all clade plugins.

    The plugin lifecycle is:

    1. Instantiation -- the factory is called with no arguments.
    2. :meth:`on_init` -- called once during CLI construction (global
       plugins only). May replace ``ctx.cli.command``.
    3. :meth:`on_pre_command_execution` -- before each command handler.
    4. :meth:`on_after_command_execution` -- after each command, always.
    5. :meth:`on_destroy` -- once when the CLI finishes (global plugins only).

    See Also:
        :class:`~clade.plugins.hooks.HookRunner` for the error policy of
        each phase.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the unique plugin name used for registration and logging."""
        ...

    @property
    def version(self) -> str:
        return "0.1.0"

    @property
    def description(self) -> str:
        return ""

    @property
    def manifest(self) -> PluginManifest:
        return PluginManifest(name=self.name, version=self.version, description=self.description)

    def on_init(self, ctx: PluginContext) -> Any:
        """Called once while the CLI is being built.

        Errors raised here abort CLI construction.
        """

    def on_pre_command_execution(self, ctx: HookContext) -> Any:
        """Called after argument validation and before the command handler.

        Errors raised here abort the command (after-hooks still run).
        """

    def on_after_command_execution(self, ctx: HookContext) -> Any:
        """Called after every command execution, whatever its outcome.

        ``ctx.error`` holds the exception that failed the execution, or
        ``None``. Errors raised here are logged and swallowed.
        """

    def on_destroy(self, ctx: PluginContext) -> Any:
        """Called once when the CLI finishes. Errors are logged and swallowed."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


class FunctionPlugin(Plugin):
    """A :class:`Plugin` whose hooks are plain callables.

    Built by :func:`define_plugin`; each hook receives the same context
    object the corresponding :class:`Plugin` method would.
    """

    def __init__(
        self,
        name: str,
        on_init: Optional[Callable[..., Any]] = None,
        on_pre_command_execution: Optional[Callable[..., Any]] = None,
        on_after_command_execution: Optional[Callable[..., Any]] = None,
        on_destroy: Optional[Callable[..., Any]] = None,
    ) -> None:
        self._name = name
        self._hooks = {
            "on_init": on_init,
            "on_pre_command_execution": on_pre_command_execution,
            "on_after_command_execution": on_after_command_execution,
            "on_destroy": on_destroy,
        }

    @property
    def name(self) -> str:
        return self._name

    def _call(self, hook: str, ctx: Any) -> Any:
        fn = self._hooks[hook]
        if fn is None:
            return None
        return fn(ctx)

    def on_init(self, ctx: PluginContext) -> Any:
        return self._call("on_init", ctx)

    def on_pre_command_execution(self, ctx: HookContext) -> Any:
        return self._call("on_pre_command_execution", ctx)

    def on_after_command_execution(self, ctx: HookContext) -> Any:
        return self._call("on_after_command_execution", ctx)

    def on_destroy(self, ctx: PluginContext) -> Any:
        return self._call("on_destroy", ctx)


def define_plugin(
    name: str,
    *,
    on_init: Optional[Callable[..., Any]] = None,
    on_pre_command_execution: Optional[Callable[..., Any]] = None,
    on_after_command_execution: Optional[Callable[..., Any]] = None,
    on_destroy: Optional[Callable[..., Any]] = None,
) -> Callable[[], Plugin]:
    """Return a plugin factory whose hooks are the given callables.

    Every call of the returned factory produces a new :class:`FunctionPlugin`.
    """

    def factory() -> Plugin:
        return FunctionPlugin(
            name,
            on_init=on_init,
            on_pre_command_execution=on_pre_command_execution,
            on_after_command_execution=on_after_command_execution,
            on_destroy=on_destroy,
        )

    factory.__name__ = f"{name}_plugin"
    return factory


def create_plugin(definition: Any) -> Plugin:
    """Instantiate a plugin from its definition.

    Args:
        definition: A zero-argument factory returning a :class:`Plugin`
            (including a ``Plugin`` subclass), or a ``Plugin`` instance,
            which is returned unchanged.

    Raises:
        PluginError: If *definition* is neither, or the factory does not
            return a ``Plugin``.
    """
    if isinstance(definition, Plugin):
        return definition
    if not callable(definition):
        raise PluginError(f"Invalid plugin definition: {definition!r}")
    plugin = definition()
    if not isinstance(plugin, Plugin):
        raise PluginError(
            f"Plugin factory {definition!r} returned {type(plugin).__name__}, expected Plugin"
        )
    return plugin
