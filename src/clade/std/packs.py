"""Ready-made plugin packs."""

from clade.definition import PluginPack
from clade.std.config import ConfigPlugin
from clade.std.dry_run import DryRunPlugin
from clade.std.help import HelpPlugin
from clade.std.verbose import VerbosePlugin
from clade.std.version import VersionPlugin

base_pack = PluginPack(name="base", plugins=[HelpPlugin, VersionPlugin])
"""``--help``, ``--version`` and their commands."""

std_pack = PluginPack(
    name="std",
    plugins=[HelpPlugin, VersionPlugin, VerbosePlugin, DryRunPlugin, ConfigPlugin],
)
"""Everything in :data:`base_pack` plus verbose, dry-run and config."""
