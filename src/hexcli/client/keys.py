"""Organization key generation.

Keys are created with the user's own account key, scoped to read the
organization's repository, and returned as the secret the repository
accepts in its ``authorization`` header. The secret is only shown once by
the API; callers either store it or print it.
"""

from __future__ import annotations

import socket
from typing import Optional
from urllib.parse import quote

from hexcli.client.api_client import APIClient
from hexcli.client.response import extract_response_data, print_error_result
from hexcli.exceptions import AuthError
from hexcli.models import HexConfig


def repository_key_name(organization: str, key_name: Optional[str] = None) -> str:
    """Build the label stored with a generated key.

    Defaults to the machine's hostname so that keys can be told apart in
    the account's key list.
    """
    prefix = key_name or socket.gethostname()
    return f"{prefix}-repository-{organization}"


def generate_organization_key(
    client: APIClient,
    config: HexConfig,
    organization: str,
    key_name: Optional[str] = None,
) -> str:
    """Create a new key for *organization* and return its secret.

    Args:
        client: An open :class:`APIClient`.
        config: Resolved config; ``api_key`` authenticates the request.
        organization: Organization name.
        key_name: Optional label prefix (see :func:`repository_key_name`).

    Raises:
        AuthError: If no account key is configured or the API does not
            answer ``201 Created``.
        ConnectionError_: On network or timeout errors.
    """
    if not config.api_key:
        raise AuthError(
            "No authenticated user found. Authenticate with your account "
            "or set HEX_API_KEY"
        )

    response = client.post(
        f"/orgs/{quote(organization, safe='')}/keys",
        json_body={
            "name": repository_key_name(organization, key_name),
            "permissions": [{"domain": "repository", "resource": organization}],
        },
        auth_key=config.api_key,
    )

    data = extract_response_data(response)
    if response.status_code != 201 or not isinstance(data, dict) or "secret" not in data:
        print_error_result(response)
        raise AuthError("Generation of key failed")

    return str(data["secret"])
