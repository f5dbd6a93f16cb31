"""Shared test fixtures for clade.

Provides reusable fixtures for building CLIs, isolating config lookups, and
managing output state. These fixtures are automatically discovered by
pytest and available to all test modules without explicit imports.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import pytest
from pydantic import BaseModel

from clade.definition import CliDefinition, CommandDefinition, GlobalOption
from clade.output import OutputFormat, OutputManager, reset_output, set_output
from clade.plugins.base import Plugin
from clade.schema import option


# ---------------------------------------------------------------------------
# Output state
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _plain_output_between_tests():
    """Install a plain, colourless OutputManager for every test.

    The OutputManager caches its consoles at creation time. A fresh plain
    manager per test writes through ``print`` so ``capsys`` sees exactly
    the text users would.
    """
    reset_output()
    set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Config isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate config lookups to a temporary directory.

    Points ``XDG_CONFIG_HOME`` and ``APPDATA`` at ``tmp_path / "config"``,
    forces the XDG code path, and changes the working directory to
    ``tmp_path / "work"`` so local config files land there.

    Returns:
        The tmp_path root directory.
    """
    config_dir = tmp_path / "config"
    work_dir = tmp_path / "work"
    config_dir.mkdir()
    work_dir.mkdir()

    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_dir))
    monkeypatch.setenv("APPDATA", str(config_dir))
    monkeypatch.setattr("clade.config._is_xdg_platform", lambda: True)
    monkeypatch.chdir(work_dir)
    return tmp_path


# ---------------------------------------------------------------------------
# Definitions
# ---------------------------------------------------------------------------


class GreetOptions(BaseModel):
    """Options of the greet command."""

    verbose: Optional[bool] = option(None, description="Talk more", aliases=["v"])
    count: int = option(1, description="How many times to greet", aliases="c")


class RecordingPlugin(Plugin):
    """Plugin appending ``(plugin name, hook)`` tuples to a shared list."""

    def __init__(self, name: str, calls: list[tuple[str, str]]) -> None:
        self._name = name
        self.calls = calls

    @property
    def name(self) -> str:
        return self._name

    def on_init(self, ctx):
        self.calls.append((self._name, "init"))

    def on_pre_command_execution(self, ctx):
        self.calls.append((self._name, "pre"))

    def on_after_command_execution(self, ctx):
        self.calls.append((self._name, "after"))

    def on_destroy(self, ctx):
        self.calls.append((self._name, "destroy"))


@pytest.fixture
def calls() -> list[Any]:
    """A fresh list handlers and plugins can record into."""
    return []


@pytest.fixture
def greet_cli_definition(calls: list[Any]) -> CliDefinition:
    """A small CLI: root bequeathing ``--debug``, with ``greet`` and ``sub``."""

    def greet(ctx):
        calls.append(("greet", ctx.positional, dict(ctx.options)))

    def sub(ctx):
        calls.append(("sub", ctx.positional, dict(ctx.options), dict(ctx.context)))

    def on_debug(ctx):
        ctx.context["debug"] = ctx.value

    return CliDefinition(
        name="tool",
        version="1.2.3",
        command=CommandDefinition(
            bequeath_options=[GlobalOption(name="debug", schema=Optional[bool], handler=on_debug)],
            commands=[
                CommandDefinition(
                    name="greet",
                    paths=["g", "greet"],
                    description="Greet someone",
                    positional=str,
                    options=GreetOptions,
                    handler=greet,
                ),
                CommandDefinition(name="sub", handler=sub),
            ],
        ),
    )


@pytest.fixture
def make_recorder(calls: list[Any]):
    """Factory building :class:`RecordingPlugin` instances sharing ``calls``."""

    def _make(name: str) -> RecordingPlugin:
        return RecordingPlugin(name, calls)

    return _make
