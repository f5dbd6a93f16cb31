"""Configuration file locations and loading helpers.

This module backs the standard config plugin
(:class:`~clade.std.config.ConfigPlugin`) and is usable on its own:

* **Local config** -- ``<cwd>/<cli-name>.config.json`` (or a custom file
  name). See :func:`get_local_config_path`.
* **Global config** -- XDG Base Directory compliant on Linux/BSD,
  ``%APPDATA%`` on Windows, ``~/.<cli-name>/`` elsewhere. See
  :func:`get_global_config_path`.
* **Reading** -- :func:`read_config_file` parses one JSON file, treating an
  empty file as ``{}`` and a missing one as ``None``.
* **Merging** -- :func:`deep_merge` overlays one mapping onto another,
  recursing into nested mappings.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from clade.exceptions import ConfigError

_CONFIG_FILENAME = "config.json"


# --- Path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_local_config_path(cli_name: str, filename: Optional[str] = None) -> Path:
    """Return the project-local config path, resolved against the current directory.

    Args:
        cli_name: The CLI's manifest name.
        filename: Overrides the default ``<cli-name>.config.json``.
    """
    return Path.cwd() / (filename or f"{cli_name}.config.json")


def get_global_config_path(cli_name: str) -> Path:
    """Return the user-global config path. The file is not created.

    On Linux/BSD: ``$XDG_CONFIG_HOME/<cli-name>/config.json`` (default
    ``~/.config/<cli-name>/config.json``).
    On Windows: ``%APPDATA%\\<cli-name>\\config.json``.
    Elsewhere: ``~/.<cli-name>/config.json``.
    """
    if _is_xdg_platform():
        return _xdg_base("XDG_CONFIG_HOME", (".config",)) / cli_name / _CONFIG_FILENAME
    if platform.system() == "Windows":
        return _xdg_base("APPDATA", ("AppData", "Roaming")) / cli_name / _CONFIG_FILENAME
    return Path.home() / f".{cli_name}" / _CONFIG_FILENAME


# --- Reading & merging ---


def read_config_file(path: Union[str, Path]) -> Optional[Any]:
    """Read and parse a JSON config file.

    Returns:
        The parsed JSON value, ``{}`` for an empty (or whitespace-only) file,
        or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file cannot be read or is not valid JSON.
    """
    path = Path(path)
    if not path.is_file():
        return None
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read config file at {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file at {path}: {exc}") from exc


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Return a new dict with *override* merged over *base*, recursing into nested dicts.

    Neither argument is mutated. Non-mapping values in *override* replace
    those in *base*.
    """
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged
