"""Shared test fixtures for hexcli.

Provides reusable fixtures for isolated config environments, output state,
a fake repository API served through :class:`httpx.MockTransport`, and a
CLI runner. These fixtures are automatically discovered by pytest.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from hexcli.client import APIClient
from hexcli.models import HexConfig
from hexcli.output import OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches a reference to sys.stderr at creation time.
    When Typer's CliRunner redirects the streams during a test, the cached
    reference becomes stale once the test finishes.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path so
    that tests never touch real user config, and clears every HEX_*
    environment variable.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("hexcli.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for var in ["HEX_HOME", "HEX_API_URL", "HEX_API_KEY", "HEX_HTTP_TIMEOUT"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def config_file(isolated_config: Path) -> Path:
    """Path of the config file inside the isolated config directory."""
    return isolated_config / "config" / "hexcli" / "config.json"


@pytest.fixture
def write_config(config_file: Path) -> Callable[[dict[str, Any]], None]:
    """Return a helper that writes raw JSON to the isolated config file."""

    def _write(data: dict[str, Any]) -> None:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        config_file.write_text(json.dumps(data, indent=2), encoding="utf-8")

    return _write


@pytest.fixture
def read_config(config_file: Path) -> Callable[[], dict[str, Any]]:
    """Return a helper that reads the isolated config file as JSON."""

    def _read() -> dict[str, Any]:
        return json.loads(config_file.read_text(encoding="utf-8"))

    return _read


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet, colourless output manager for the test."""
    output = OutputManager(no_color=True, quiet=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def plain_output() -> OutputManager:
    """Install a colourless output manager so stderr text can be asserted on."""
    output = OutputManager(no_color=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# Fake repository API
# ---------------------------------------------------------------------------


class FakeAPI:
    """Scriptable stand-in for the repository service.

    ``auth_status`` is returned by ``GET /auth``; ``key_status`` and
    ``key_body`` by ``POST /orgs/<org>/keys``. Every request is recorded in
    :attr:`requests`.
    """

    def __init__(self) -> None:
        self.auth_status = 204
        self.auth_body: Any = None
        self.key_status = 201
        self.key_body: Any = {"name": "generated", "secret": "generated-secret"}
        self.raise_error: Exception | None = None
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raise_error is not None:
            raise self.raise_error

        if request.method == "GET" and request.url.path.endswith("/auth"):
            if self.auth_body is None:
                return httpx.Response(self.auth_status)
            return httpx.Response(self.auth_status, json=self.auth_body)

        if request.method == "POST" and request.url.path.endswith("/keys"):
            return httpx.Response(self.key_status, json=self.key_body)

        return httpx.Response(404, json={"status": 404, "message": "Page not found"})

    def client(self, config: HexConfig) -> APIClient:
        return APIClient(config, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_api(monkeypatch: pytest.MonkeyPatch) -> FakeAPI:
    """Route every API client created by the organization command to a FakeAPI."""
    api = FakeAPI()
    monkeypatch.setattr("hexcli.commands.organization.create_client", api.client)
    return api


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
