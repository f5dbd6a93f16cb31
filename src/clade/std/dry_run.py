"""The ``--dry-run`` option and :class:`DryRunPlugin`."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from clade.definition import GlobalOption
from clade.plugins.base import Plugin
from clade.schema import FieldSchema
from clade.std._root import extend_root_command

if TYPE_CHECKING:
    from clade.execution.context import OptionHandlerContext
    from clade.plugins.hooks import HookContext, PluginContext


def _dry_run_option_handler(ctx: OptionHandlerContext) -> None:
    ctx.context["dry_run"] = bool(ctx.value)


dry_run_option = GlobalOption(
    name="dry_run",
    schema=FieldSchema.of(
        Optional[bool],
        None,
        description="Execute without side effects (no disk writes or API calls)",
        aliases=["n"],
    ),
    handler=_dry_run_option_handler,
)


class DryRunPlugin(Plugin):
    """Adds ``--dry-run``/``-n`` to every command; sets ``context["dry_run"]``."""

    @property
    def name(self) -> str:
        return "dry-run"

    def on_init(self, ctx: PluginContext) -> None:
        extend_root_command(ctx.cli, bequeath_options=[dry_run_option])

    def on_pre_command_execution(self, ctx: HookContext) -> None:
        ctx.context.setdefault("dry_run", False)
