"""HTTP client module for hexcli.

Wraps :mod:`httpx` for calls to the repository service's HTTP API.

Modules:
    :mod:`~hexcli.client.api_client` -- :class:`APIClient`, the blocking
    client used by every command.
    :mod:`~hexcli.client.auth` -- key validation against a repository.
    :mod:`~hexcli.client.keys` -- organization key generation.
    :mod:`~hexcli.client.response` -- rendering failed calls to stderr.

Example::

    from hexcli.client import APIClient

    with APIClient(config) as client:
        resp = client.get("/auth", params={"domain": "repository", "resource": "acme"})
"""

from hexcli.client.api_client import APIClient

__all__ = ["APIClient"]
