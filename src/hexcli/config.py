"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for hexcli:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.hexcli/`` on macOS and Windows. ``HEX_HOME`` overrides the config
  directory. See :func:`get_config_dir` and :func:`get_data_dir`.
* **Config file** -- A single :class:`~hexcli.models.HexConfig` JSON file
  holding the API settings, the user's account key, and every stored
  repository credential.
* **Precedence resolution** -- :func:`resolve_config` layers environment
  variables over the config file and defaults.
* **Repository store** -- :class:`RepoStore` is the handle commands use to
  read and modify the ``repos`` mapping. It is opened at command start and
  flushed on a clean exit only.

The config file holds secrets, so writes go through :func:`_atomic_write`
(temp file, ``0o600``, fsync, rename).
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from hexcli.exceptions import ConfigError
from hexcli.models import HexConfig, RepoConfig
from hexcli.output import debug

_APP_NAME = "hexcli"
_CONFIG_FILENAME = "config.json"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    ``$HEX_HOME`` wins when set. Otherwise on Linux/BSD:
    ``$XDG_CONFIG_HOME/hexcli/`` (default ``~/.config/hexcli/``), and on
    macOS/Windows: ``~/.hexcli/``.

    Returns:
        Absolute path to the configuration directory (guaranteed to exist).
    """
    hex_home = os.environ.get("HEX_HOME", "")
    if hex_home:
        path = Path(hex_home).expanduser()
    elif _is_xdg_platform():
        base = _xdg_base("XDG_CONFIG_HOME", (".config",))
        path = base / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/hexcli/`` (default ``~/.local/share/hexcli/``).
    On macOS/Windows: ``~/.hexcli/logs/``.
    """
    if _is_xdg_platform():
        base = _xdg_base("XDG_DATA_HOME", (".local", "share"))
        path = base / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


def config_path() -> Path:
    """Path to the config file."""
    return get_config_dir() / _CONFIG_FILENAME


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. Permissions are
    restricted to ``0o600`` before any content is written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        os.chmod(tmp_path, 0o600)
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close below
        os.replace(tmp_path, path)
    except BaseException:
        # Clean up the temp file on any error (including KeyboardInterrupt).
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Config file ---


def load_config() -> HexConfig:
    """Load the config file exactly as stored on disk.

    Returns:
        The deserialised :class:`~hexcli.models.HexConfig`. If the file does
        not exist, a default instance is returned.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = config_path()
    if not path.is_file():
        return HexConfig()
    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text)
        return HexConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc


def save_config(config: HexConfig) -> None:
    """Persist the config file atomically to disk."""
    data = config.model_dump(mode="json", exclude_none=True)
    _atomic_write(config_path(), json.dumps(data, indent=2) + "\n")


def resolve_config() -> HexConfig:
    """Resolve the effective config.

    Precedence (high to low):
        1. Environment variables (``HEX_API_URL``, ``HEX_API_KEY``,
           ``HEX_HTTP_TIMEOUT``)
        2. Config file (``<config_dir>/config.json``)
        3. Defaults

    The returned object is a copy and must not be saved back to disk, since
    that would persist values that came from the environment.

    Raises:
        ConfigError: If the file is invalid or ``HEX_HTTP_TIMEOUT`` is not a
            positive number.
    """
    config = load_config().model_copy(deep=True)

    env_api_url = os.environ.get("HEX_API_URL")
    if env_api_url:
        config.api_url = env_api_url

    env_api_key = os.environ.get("HEX_API_KEY")
    if env_api_key:
        config.api_key = env_api_key

    env_timeout = os.environ.get("HEX_HTTP_TIMEOUT")
    if env_timeout:
        try:
            timeout = float(env_timeout)
        except ValueError:
            timeout = 0.0
        if timeout <= 0:
            raise ConfigError(
                f"HEX_HTTP_TIMEOUT must be a positive number, got {env_timeout!r}"
            )
        config.http_timeout = timeout

    return config


# --- Repository credential store ---


class RepoStore:
    """Handle on the ``repos`` mapping of the config file.

    Changes are kept in memory until :meth:`flush`. Used as a context
    manager the store flushes when the block exits cleanly and discards
    pending changes when it raises, so a failed command never writes a
    partial update. After :meth:`close` every read and write raises
    :class:`ConfigError`.

    Args:
        config: The config as loaded from disk (not the env-resolved copy).

    Example::

        with RepoStore.open() as repos:
            repos.put("hexpm:acme", RepoConfig(auth_key="k"))
    """

    def __init__(self, config: HexConfig) -> None:
        self._config = config
        self._repos: dict[str, RepoConfig] = dict(config.repos)
        self._dirty = False
        self._closed = False

    @classmethod
    def open(cls) -> RepoStore:
        """Load the config file and return a store over its ``repos``."""
        return cls(load_config())

    def __enter__(self) -> RepoStore:
        return self

    def __exit__(self, exc_type: object, *args: object) -> None:
        if exc_type is None:
            self.flush()
        self.close()

    def get(self, name: str) -> Optional[RepoConfig]:
        """Return the record stored under *name*, or ``None``."""
        self._check_open()
        return self._repos.get(name)

    def put(self, name: str, repo: RepoConfig) -> None:
        """Create or replace the record stored under *name*."""
        self._check_open()
        self._repos[name] = repo
        self._dirty = True

    def delete(self, name: str) -> None:
        """Remove the record stored under *name*. Absent names are ignored."""
        self._check_open()
        if self._repos.pop(name, None) is not None:
            self._dirty = True

    def list(self) -> list[str]:
        """Return every repository identifier in store order."""
        self._check_open()
        return list(self._repos)

    def flush(self) -> None:
        """Write pending changes to disk. A no-op when nothing changed."""
        self._check_open()
        if not self._dirty:
            return
        self._config.repos = dict(self._repos)
        save_config(self._config)
        self._dirty = False
        debug(f"Wrote {len(self._repos)} repo(s) to {config_path()}")

    def close(self) -> None:
        """Discard unflushed changes and make the store unusable."""
        self._closed = True

    def _check_open(self) -> None:
        if self._closed:
            raise ConfigError("Repository store is closed")
