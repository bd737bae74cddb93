"""hexcli -- command-line client for the hex.pm package repository.

The package currently ships the ``organization`` command group, which
authorizes, deauthorizes, lists, and pre-generates access keys for private
package organizations. Organization keys are stored in the local config
file alongside other repository credentials.

Typical workflow::

    hexcli organization key acme          # pre-generate a key (prints it)
    hexcli organization auth acme --key K # authorize on a CI server
    hexcli organization list              # show authorized organizations

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models for the config file and parsed commands.
    config: XDG-aware configuration and the repository credential store.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
