"""Organization commands -- manage keys for private package organizations.

Provides the ``hexcli organization`` command, which authorizes,
deauthorizes, lists, and pre-generates keys for organizations hosted on the
repository service. Organization keys only grant read access to the
organization's repository and are stored locally under the repository
identifier ``hexpm:<organization>``.

Authorizing your user account already gives access to all of your
organizations; this command is mainly meant for CI and build systems that
need an organization without a user.

Typical workflow::

    hexcli organization key acme             # on a dev machine, prints KEY
    hexcli organization auth acme --key KEY  # on the CI server
    hexcli organization list
    hexcli organization deauth acme

The verb and its arguments are decoded once by :func:`parse_command` into
one of the :data:`~hexcli.models.OrganizationCommand` variants and then
executed by :func:`run_command`.
"""

from __future__ import annotations

from typing import Optional

import typer

from hexcli.client import APIClient
from hexcli.client.auth import validate_repository_key
from hexcli.client.keys import generate_organization_key
from hexcli.config import RepoStore, resolve_config
from hexcli.exceptions import HexError, InvalidUsageError
from hexcli.models import (
    DEFAULT_REPO_URL,
    AuthCommand,
    DeauthCommand,
    HexConfig,
    KeyCommand,
    ListCommand,
    OrganizationCommand,
    RepoConfig,
)
from hexcli.output import debug, error, print_data

REPO_PREFIX = "hexpm"

USAGE = """Invalid arguments, expected one of:

hexcli organization auth ORGANIZATION
hexcli organization deauth ORGANIZATION
hexcli organization list
"""


def organization_command(
    args: Optional[list[str]] = typer.Argument(
        None, metavar="COMMAND [ORGANIZATION]", help="auth, deauth, key, or list."
    ),
    key: Optional[str] = typer.Option(
        None,
        "--key",
        help="Pre-generated key to authorize with (auth only). "
        "If omitted, a new key is generated with your account credentials.",
    ),
    key_name: Optional[str] = typer.Option(
        None,
        "--key-name",
        help="Name for a generated key. Defaults to the machine's hostname.",
    ),
) -> None:
    """Manage authorized organizations.

    Example::

        hexcli organization auth acme [--key KEY] [--key-name NAME]
        hexcli organization deauth acme
        hexcli organization key acme [--key-name NAME]
        hexcli organization list
    """
    try:
        command = parse_command(args or [], key=key, key_name=key_name)
        config = resolve_config()
        with RepoStore.open() as repos:
            run_command(command, repos, config)
    except HexError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def parse_command(
    args: list[str],
    key: Optional[str] = None,
    key_name: Optional[str] = None,
) -> OrganizationCommand:
    """Decode positional *args* and options into a command variant.

    Raises:
        InvalidUsageError: For an unknown verb, a wrong argument count, or
            an empty organization name.
    """
    if len(args) == 2 and args[1]:
        verb, name = args
        if verb == "auth":
            return AuthCommand(name=name, key=key, key_name=key_name)
        if verb == "deauth":
            return DeauthCommand(name=name)
        if verb == "key":
            return KeyCommand(name=name, key_name=key_name)
    elif args == ["list"]:
        return ListCommand()

    raise InvalidUsageError(USAGE)


def run_command(
    command: OrganizationCommand,
    repos: RepoStore,
    config: HexConfig,
) -> None:
    """Execute a decoded command against *repos*."""
    if isinstance(command, AuthCommand):
        auth(repos, config, command.name, key=command.key, key_name=command.key_name)
    elif isinstance(command, DeauthCommand):
        deauth(repos, command.name)
    elif isinstance(command, KeyCommand):
        key(config, command.name, key_name=command.key_name)
    elif isinstance(command, ListCommand):
        list_organizations(repos)
    else:  # pragma: no cover
        raise TypeError(f"Unknown organization command: {command!r}")


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


def create_client(config: HexConfig) -> APIClient:
    """Return an unopened API client for *config*."""
    return APIClient(config)


def repo_name(organization: str) -> str:
    """Return the repository identifier an organization's key is stored under."""
    return f"{REPO_PREFIX}:{organization}"


def auth(
    repos: RepoStore,
    config: HexConfig,
    name: str,
    key: Optional[str] = None,
    key_name: Optional[str] = None,
) -> None:
    """Store a key for organization *name*, replacing any previous one.

    A given *key* is validated against the organization's repository first;
    otherwise a new key is generated with the user's account key.

    Raises:
        AuthenticationValidationError: If *key* is rejected.
        AuthError: If a key cannot be generated.
    """
    with create_client(config) as client:
        if key is not None:
            validate_repository_key(client, name, key)
        else:
            key = generate_organization_key(client, config, name, key_name)

    repos.put(
        repo_name(name),
        RepoConfig(auth_key=key, url=f"{DEFAULT_REPO_URL}/repos/{name}"),
    )
    debug(f'Authorized organization "{name}"')


def deauth(repos: RepoStore, name: str) -> None:
    """Forget the key of organization *name*. Unknown names are ignored."""
    repos.delete(repo_name(name))
    debug(f'Deauthorized organization "{name}"')


def key(config: HexConfig, name: str, key_name: Optional[str] = None) -> None:
    """Generate a key for organization *name* and print it to stdout."""
    with create_client(config) as client:
        secret = generate_organization_key(client, config, name, key_name)
    print_data(secret)


def list_organizations(repos: RepoStore) -> None:
    """Print the name of every organization with a stored key."""
    for name in repos.list():
        parts = name.split(":", 1)
        if len(parts) == 2 and parts[0] == REPO_PREFIX:
            print_data(parts[1])
