"""Key validation against an organization repository."""

from __future__ import annotations

import httpx

from hexcli.client.api_client import APIClient
from hexcli.client.response import print_error_result
from hexcli.exceptions import AuthenticationValidationError, ConnectionError_

VALIDATION_FAILED_MESSAGE = (
    "Failed to authenticate against organization repository with given key"
)


def check_auth(
    client: APIClient,
    domain: str,
    resource: str,
    key: str,
) -> httpx.Response:
    """Ask the API whether *key* grants access to ``domain``/``resource``.

    The endpoint answers ``2xx`` when it does and ``401``/``403`` when it
    does not. The response is returned unchecked.

    Raises:
        ConnectionError_: On network or timeout errors.
    """
    return client.get(
        "/auth",
        params={"domain": domain, "resource": resource},
        auth_key=key,
    )


def validate_repository_key(client: APIClient, name: str, key: str) -> None:
    """Check that *key* can read the repository of organization *name*.

    Only a status in ``200..299`` counts as success. On anything else the
    error detail is printed to stderr first.

    Raises:
        AuthenticationValidationError: If the key is rejected or the request
            could not be sent.
    """
    try:
        response = check_auth(client, "repository", name, key)
    except ConnectionError_ as exc:
        print_error_result(exc)
        raise AuthenticationValidationError(VALIDATION_FAILED_MESSAGE) from exc

    if not 200 <= response.status_code <= 299:
        print_error_result(response)
        raise AuthenticationValidationError(VALIDATION_FAILED_MESSAGE)
