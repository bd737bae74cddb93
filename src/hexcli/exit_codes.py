"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~hexcli.exceptions.HexError` subclass.
CI scripts can inspect the exit code to tell a bad invocation from a
rejected key without parsing stderr.

Example::

    $ hexcli organization auth acme --key bad
    $ echo $?
    3   # EXIT_AUTH_FAILURE -- the key was rejected
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_AUTH_FAILURE = 3
"""Authentication failed or a key could not be generated."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""
