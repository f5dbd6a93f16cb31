"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~clade.exceptions.CladeError` subclass.
:func:`~clade.execution.cli.execute_cli` returns one of these codes so the
caller decides how to terminate the process.

Example::

    $ mytool greet --count nope
    $ echo $?
    2   # EXIT_INVALID_USAGE -- the option failed validation
"""

EXIT_SUCCESS = 0
"""The command completed successfully (or was halted on purpose)."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""No command matched, or the arguments failed validation."""

EXIT_PLUGIN_ERROR = 10
"""A plugin failed to register, initialise, or execute a hook."""
