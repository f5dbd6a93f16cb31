"""Standard plugins, commands and packs.

Plugins (pass the classes as plugin definitions):

* :class:`HelpPlugin` -- ``--help``/``-h`` and ``help [command]``.
* :class:`VersionPlugin` -- ``--version``/``-v`` and ``version``.
* :class:`VerbosePlugin` -- counted ``--verbose``/``-V``.
* :class:`DryRunPlugin` -- ``--dry-run``/``-n``.
* :class:`ConfigPlugin` -- ``--config``/``-c`` and JSON config loading.

Packs: :data:`base_pack` (help, version) and :data:`std_pack` (all of the
above).
"""

from clade.execution.router import find_command
from clade.std.config import ConfigPlugin, config_option
from clade.std.dry_run import DryRunPlugin, dry_run_option
from clade.std.help import HelpPlugin, help_command, help_option, render_help
from clade.std.packs import base_pack, std_pack
from clade.std.verbose import VerbosePlugin, coerce_verbosity, verbose_option
from clade.std.version import VersionPlugin, show_version, version_command, version_option

__all__ = [
    "ConfigPlugin",
    "DryRunPlugin",
    "HelpPlugin",
    "VerbosePlugin",
    "VersionPlugin",
    "base_pack",
    "coerce_verbosity",
    "config_option",
    "dry_run_option",
    "find_command",
    "help_command",
    "help_option",
    "render_help",
    "show_version",
    "std_pack",
    "verbose_option",
    "version_command",
    "version_option",
]
