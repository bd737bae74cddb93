"""Canonical Pydantic models shared across all hexcli modules.

The models fall into two groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`RepoConfig` and :class:`HexConfig`.

**Command models** -- the closed set of ``organization`` invocations, decoded
once from ``argv`` by :func:`~hexcli.commands.organization.parse_command`:
    :class:`AuthCommand`, :class:`DeauthCommand`, :class:`KeyCommand`, and
    :class:`ListCommand`, unioned as :data:`OrganizationCommand`.
"""

from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_API_URL = "https://hex.pm/api"
DEFAULT_REPO_URL = "https://repo.hex.pm"


# --- Configuration ---


class RepoConfig(BaseModel):
    """A stored repository credential.

    Records are keyed in :attr:`HexConfig.repos` by repository identifier,
    for organizations ``"hexpm:<organization>"``. Other commands may write
    records under other keys; unknown fields are preserved.

    Example::

        RepoConfig(
            auth_key="3c1f...",
            url="https://repo.hex.pm/repos/acme",
        )
    """

    model_config = ConfigDict(extra="allow")

    auth_key: Optional[str] = Field(
        default=None, description="Key sent as the authorization header"
    )
    url: Optional[str] = Field(default=None, description="Repository base URL")
    public_key: Optional[str] = Field(
        default=None, description="PEM public key used to verify the registry"
    )


class HexConfig(BaseModel):
    """The local config file (``<config_dir>/config.json``).

    Environment variables (``HEX_API_URL``, ``HEX_API_KEY``,
    ``HEX_HTTP_TIMEOUT``) take precedence over the values stored here; see
    :func:`~hexcli.config.resolve_config`.
    """

    model_config = ConfigDict(extra="allow")

    api_url: str = Field(default=DEFAULT_API_URL, description="Base URL of the HTTP API")
    api_key: Optional[str] = Field(
        default=None, description="The user's own account key"
    )
    http_timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    repos: dict[str, RepoConfig] = Field(default_factory=dict)


# --- Organization commands ---


class AuthCommand(BaseModel):
    """``organization auth NAME [--key KEY] [--key-name LABEL]``."""

    kind: Literal["auth"] = "auth"
    name: str = Field(min_length=1)
    key: Optional[str] = None
    key_name: Optional[str] = None


class DeauthCommand(BaseModel):
    """``organization deauth NAME``."""

    kind: Literal["deauth"] = "deauth"
    name: str = Field(min_length=1)


class KeyCommand(BaseModel):
    """``organization key NAME [--key-name LABEL]``."""

    kind: Literal["key"] = "key"
    name: str = Field(min_length=1)
    key_name: Optional[str] = None


class ListCommand(BaseModel):
    """``organization list``."""

    kind: Literal["list"] = "list"


OrganizationCommand = Union[AuthCommand, DeauthCommand, KeyCommand, ListCommand]
