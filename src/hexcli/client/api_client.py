"""Synchronous HTTP client for the repository service API.

This module provides :class:`APIClient`, a thin wrapper over
:class:`httpx.Client` that layers on:

- **Base URL and timeout** from the resolved :class:`~hexcli.models.HexConfig`.
- **Key auth** -- the API expects the raw key in the ``authorization``
  header (no ``Bearer`` prefix). Each request picks its own key, since key
  validation and key generation authenticate with different keys.
- **Error mapping** -- network-level failures become
  :class:`~hexcli.exceptions.ConnectionError_`. HTTP status codes are
  returned to the caller untouched, because every endpoint used here has
  its own notion of success.

Requests are never retried.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from hexcli import __version__
from hexcli.exceptions import ConnectionError_
from hexcli.models import HexConfig
from hexcli.output import debug


class APIClient:
    """Synchronous HTTP client for API calls.

    Must be used as a context manager so that the underlying transport is
    properly opened and closed.

    Args:
        config: The resolved config providing ``api_url`` and
            ``http_timeout``.
        transport: Optional httpx transport, e.g. an
            :class:`httpx.MockTransport` in tests.

    Example::

        with APIClient(config) as client:
            response = client.get("/auth", auth_key=key)
    """

    def __init__(
        self,
        config: HexConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> APIClient:
        self._client = httpx.Client(
            base_url=self._config.api_url.rstrip("/"),
            timeout=self._config.http_timeout,
            follow_redirects=True,
            transport=self._transport,
            headers={
                "Accept": "application/json",
                "User-Agent": f"hexcli/{__version__}",
            },
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    def request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        json_body: Optional[Any] = None,
        auth_key: Optional[str] = None,
    ) -> httpx.Response:
        """Send a request and return the response whatever its status.

        Args:
            method: HTTP method (GET, POST, DELETE, ...).
            path: URL path appended to ``api_url``.
            params: Query parameters.
            json_body: JSON-serialisable body.
            auth_key: Key sent verbatim as the ``authorization`` header.

        Returns:
            The :class:`httpx.Response` from the server.

        Raises:
            ConnectionError_: On network or timeout errors.
        """
        assert self._client is not None, "Client not initialised -- use as context manager"

        headers: dict[str, str] = {}
        if auth_key:
            headers["authorization"] = auth_key

        kwargs: dict[str, Any] = {
            "method": method,
            "url": path,
            "headers": headers,
            "params": params,
        }
        if json_body is not None:
            kwargs["json"] = json_body

        debug(f"{method.upper()} {self._config.api_url.rstrip('/')}{path}")
        try:
            response = self._client.request(**kwargs)
        except httpx.HTTPError as exc:
            raise ConnectionError_(f"Request to {path} failed: {exc}") from exc

        debug(f"HTTP {response.status_code} {response.reason_phrase or ''}".rstrip())
        return response

    def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Send a GET request. ``kwargs`` are forwarded to :meth:`request`."""
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> httpx.Response:
        """Send a POST request. ``kwargs`` are forwarded to :meth:`request`."""
        return self.request("POST", path, **kwargs)
