"""The ``--config`` option and :class:`ConfigPlugin`.

Before each command the plugin looks for one JSON config file, in order:

1. **explicit** -- the path given with ``--config``/``-c``.
2. **local** -- ``<cwd>/<cli-name>.config.json`` (or ``default_filename``).
3. **global** -- see :func:`~clade.config.get_global_config_path`.

The first file that exists, parses, and validates wins; files are not
merged with each other. A file that fails to parse or validate produces a
warning and the search falls through to the next one. The winning file is
merged over ``default_config`` and stored in the execution context::

    context["config"]        # the merged (and validated) configuration
    context["config_files"]  # [{"path": ..., "scope": "local"}] or []
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from pydantic import BaseModel, ValidationError

from clade import output
from clade.config import deep_merge, get_global_config_path, get_local_config_path, read_config_file
from clade.definition import GlobalOption
from clade.exceptions import ConfigError
from clade.plugins.base import Plugin
from clade.schema import FieldSchema
from clade.std._root import extend_root_command

if TYPE_CHECKING:
    from clade.plugins.hooks import HookContext, PluginContext

config_option = GlobalOption(
    name="config",
    schema=FieldSchema.of(
        Optional[str], None, description="Path for a configuration file", aliases=["c"]
    ),
)


def _format_issues(exc: ValidationError) -> str:
    return "\n".join(
        f"  - {'.'.join(str(p) for p in issue['loc']) or 'root'}: {issue['msg']}"
        for issue in exc.errors(include_url=False)
    )


class ConfigPlugin(Plugin):
    """Loads a JSON config file into ``context["config"]`` before each command.

    Args:
        default_config: Base configuration; file values take precedence.
        default_filename: File name used for the local lookup instead of
            ``<cli-name>.config.json``.
        schema: Pydantic model the merged configuration must satisfy. The
            stored config is the validated model dumped back to a dict.
    """

    def __init__(
        self,
        default_config: Optional[dict[str, Any]] = None,
        default_filename: Optional[str] = None,
        schema: Optional[type[BaseModel]] = None,
    ) -> None:
        self._default_config = dict(default_config or {})
        self._default_filename = default_filename
        self._schema = schema

    @property
    def name(self) -> str:
        return "config"

    @property
    def description(self) -> str:
        return "Load JSON configuration files"

    def on_init(self, ctx: PluginContext) -> None:
        extend_root_command(ctx.cli, bequeath_options=[config_option])

    def on_pre_command_execution(self, ctx: HookContext) -> None:
        cli_name = ctx.cli.name
        explicit = ctx.raw_options.get("config")
        if isinstance(explicit, list):
            explicit = explicit[-1]

        candidates: list[tuple[Path, str]] = []
        if isinstance(explicit, str) and explicit:
            candidates.append((Path(explicit).resolve(), "explicit"))
        candidates.append((get_local_config_path(cli_name, self._default_filename), "local"))
        candidates.append((get_global_config_path(cli_name), "global"))

        for path, scope in candidates:
            config = self._try_load(path)
            if config is not None:
                output.debug(f"Loaded {scope} config from {path}")
                ctx.context["config"] = config
                ctx.context["config_files"] = [{"path": str(path), "scope": scope}]
                return

        try:
            config = self._validate(self._default_config)
        except ValidationError as exc:
            raise ConfigError(
                f"Configuration validation failed for default_config:\n{_format_issues(exc)}"
            ) from exc
        ctx.context["config"] = config
        ctx.context["config_files"] = []

    def _try_load(self, path: Path) -> Optional[dict[str, Any]]:
        """Return the merged config from *path*, or ``None`` to fall through."""
        try:
            data = read_config_file(path)
        except ConfigError as exc:
            output.warning(f"{exc}\nFalling back to next config file in precedence order.")
            return None
        if data is None:
            return None
        if not isinstance(data, dict):
            output.warning(
                f"Configuration file at {path} must contain a JSON object.\n"
                "Falling back to next config file in precedence order."
            )
            return None

        try:
            return self._validate(deep_merge(self._default_config, data))
        except ValidationError as exc:
            output.warning(
                f"Configuration file at {path} failed validation:\n{_format_issues(exc)}\n"
                "Falling back to next config file in precedence order."
            )
            return None

    def _validate(self, config: dict[str, Any]) -> dict[str, Any]:
        if self._schema is None:
            return config
        return self._schema.model_validate(config).model_dump()
