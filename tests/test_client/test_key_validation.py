"""Tests for validating a key against an organization repository."""

from __future__ import annotations

import httpx
import pytest

from hexcli.client.api_client import APIClient
from hexcli.client.auth import (
    VALIDATION_FAILED_MESSAGE,
    check_auth,
    validate_repository_key,
)
from hexcli.exceptions import AuthenticationValidationError, AuthError
from hexcli.models import HexConfig


def _client(handler) -> APIClient:
    return APIClient(HexConfig(), transport=httpx.MockTransport(handler))


def _status(status: int, **kwargs):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, **kwargs)

    return handler


class TestCheckAuth:
    def test_query_and_key(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(204)

        with _client(handler) as client:
            response = check_auth(client, "repository", "acme", "org-key")

        assert response.status_code == 204
        assert seen[0].method == "GET"
        assert seen[0].url.path == "/api/auth"
        assert dict(seen[0].url.params) == {"domain": "repository", "resource": "acme"}
        assert seen[0].headers["authorization"] == "org-key"


class TestValidateRepositoryKey:
    @pytest.mark.parametrize("status", [200, 204, 299])
    def test_2xx_accepted(self, quiet_output, status: int) -> None:
        with _client(_status(status)) as client:
            validate_repository_key(client, "acme", "org-key")

    @pytest.mark.parametrize("status", [300, 401, 403, 404, 500])
    def test_other_status_rejected(self, plain_output, capsys, status: int) -> None:
        with _client(_status(status, json={"message": "invalid key"})) as client:
            with pytest.raises(AuthenticationValidationError) as excinfo:
                validate_repository_key(client, "acme", "bad")

        assert str(excinfo.value) == VALIDATION_FAILED_MESSAGE
        err = capsys.readouterr().err
        assert "invalid key" in err
        assert f"HTTP status code: {status}" in err

    def test_request_error_rejected(self, plain_output, capsys) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with _client(handler) as client:
            with pytest.raises(AuthenticationValidationError):
                validate_repository_key(client, "acme", "org-key")

        assert "connection refused" in capsys.readouterr().err

    def test_is_an_auth_error(self) -> None:
        assert issubclass(AuthenticationValidationError, AuthError)
        assert AuthenticationValidationError("x").exit_code == 3
