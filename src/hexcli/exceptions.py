"""Exception hierarchy for hexcli.

All exceptions inherit from :class:`HexError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`hexcli.exit_codes`.
The top-level error handler in :func:`hexcli.app.main` catches
``HexError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    HexError (exit 1)
    +-- InvalidUsageError                  (exit 2)
    +-- AuthError                          (exit 3)
    |   +-- AuthenticationValidationError  (exit 3)
    +-- ConnectionError_                   (exit 6)
    +-- ConfigError                        (exit 1)
"""

from hexcli.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
)


class HexError(Exception):
    """Base exception for all hexcli errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`hexcli.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(HexError):
    """Raised for an unknown verb or a wrong number of positional arguments."""

    exit_code = EXIT_INVALID_USAGE


class AuthError(HexError):
    """Raised when authentication fails or a key cannot be generated."""

    exit_code = EXIT_AUTH_FAILURE


class AuthenticationValidationError(AuthError):
    """Raised when a key passed with ``--key`` is rejected by the repository."""


class ConnectionError_(HexError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class ConfigError(HexError):
    """Raised for configuration problems (unreadable file, invalid JSON, bad values)."""

    exit_code = EXIT_GENERIC_FAILURE
