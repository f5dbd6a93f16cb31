"""The ``--verbose`` option and :class:`VerbosePlugin`.

The option is counted: ``-V`` is 1, ``-VV`` or ``-V -V`` is 2, and
``--verbose=3`` is 3. Its handler stores in the execution context:

* ``verbosity`` -- the level as an ``int``.
* ``verbose`` -- ``verbosity > 0``.
* ``log`` -- a :class:`logging.Logger` whose level follows the verbosity
  (1 -> ``INFO``, 2 and above -> ``DEBUG``), unless a middleware already
  put one there.

From level 2 on, engine debug lines printed through :mod:`clade.output` are
shown as well.

Without the option the plugin still fills in level 0 before the handler runs.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

from clade.definition import GlobalOption
from clade.output import OutputManager, get_output, set_output
from clade.plugins.base import Plugin
from clade.schema import FieldSchema
from clade.std._root import extend_root_command

if TYPE_CHECKING:
    from clade.execution.context import OptionHandlerContext
    from clade.plugins.hooks import HookContext, PluginContext

LOGGER_NAME = "clade.verbose"


def coerce_verbosity(raw: Any) -> int:
    """Turn a raw parsed ``--verbose`` value into a verbosity level."""
    if raw is None or raw is False:
        return 0
    if raw is True:
        return 1
    if isinstance(raw, list):
        return len(raw)
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        try:
            return int(raw)
        except ValueError:
            return 1 if raw else 0
    return 1


def create_verbose_logger(verbosity: int) -> logging.Logger:
    """Return the ``clade.verbose`` logger configured for *verbosity*.

    Records go to stderr; level 0 only lets warnings through.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if verbosity >= 2:
        logger.setLevel(logging.DEBUG)
    elif verbosity == 1:
        logger.setLevel(logging.INFO)
    else:
        logger.setLevel(logging.WARNING)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    return logger


def enable_debug_output() -> None:
    """Replace the global output manager with one that shows ``debug`` lines."""
    current = get_output()
    if not current.is_verbose:
        set_output(OutputManager(format=current.format, no_color=current.no_color, verbose=True))


def _verbose_option_handler(ctx: OptionHandlerContext) -> None:
    verbosity = coerce_verbosity(ctx.value)
    ctx.context["verbosity"] = verbosity
    ctx.context["verbose"] = verbosity > 0
    if "log" not in ctx.context:
        ctx.context["log"] = create_verbose_logger(verbosity)
    if verbosity >= 2:
        enable_debug_output()


verbose_option = GlobalOption(
    name="verbose",
    schema=FieldSchema.of(
        Any,
        None,
        description="Increase verbosity (-V, -VV, -VVV)",
        aliases=["V"],
    ),
    handler=_verbose_option_handler,
)


class VerbosePlugin(Plugin):
    """Adds the counted ``--verbose``/``-V`` option to every command."""

    @property
    def name(self) -> str:
        return "verbose"

    @property
    def description(self) -> str:
        return "Verbosity level and logger in the execution context"

    def on_init(self, ctx: PluginContext) -> None:
        extend_root_command(ctx.cli, bequeath_options=[verbose_option])

    def on_pre_command_execution(self, ctx: HookContext) -> None:
        if "verbosity" not in ctx.context:
            ctx.context["verbosity"] = 0
            ctx.context["verbose"] = False
        if "log" not in ctx.context:
            ctx.context["log"] = create_verbose_logger(ctx.context["verbosity"])
