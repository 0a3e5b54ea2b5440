"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for api-consumer:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.api-consumer/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Server config** -- A single :class:`~api_consumer.models.ServerConfig`
  JSON file storing server defaults (request timeout, concurrency limit,
  advertised tools). See :func:`load_server_config` and
  :func:`save_server_config`.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, and the config file into the effective
  configuration.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`) to prevent data loss on crash or power failure.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from api_consumer.exceptions import ConfigError
from api_consumer.models import ServerConfig

_APP_NAME = "api-consumer"
_CONFIG_FILENAME = "config.json"

ENV_CONFIG = "API_CONSUMER_CONFIG"
ENV_TIMEOUT = "API_CONSUMER_TIMEOUT"
ENV_MAX_CONCURRENT_REQUESTS = "API_CONSUMER_MAX_CONCURRENT_REQUESTS"


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

    On Linux/BSD: ``$XDG_CONFIG_HOME/api-consumer/`` (default
    ``~/.config/api-consumer/``). On macOS/Windows: ``~/.api-consumer/``.

    Returns:
        Absolute path to the configuration directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        base = _xdg_base("XDG_CONFIG_HOME", (".config",))
        path = base / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/api-consumer/`` (default
    ``~/.local/share/api-consumer/``). On macOS/Windows:
    ``~/.api-consumer/logs/``.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        base = _xdg_base("XDG_DATA_HOME", (".local", "share"))
        path = base / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is guaranteed to be an atomic rename on POSIX systems.
    On success the temp file is renamed over *path*; on any failure the temp
    file is cleaned up.
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


# --- Server config ---


def config_path() -> Path:
    """Path to the server config file.

    ``$API_CONSUMER_CONFIG`` overrides the default location inside
    :func:`get_config_dir`.
    """
    override = os.environ.get(ENV_CONFIG)
    if override:
        return Path(override).expanduser()
    return get_config_dir() / _CONFIG_FILENAME


def load_server_config() -> ServerConfig:
    """Load the server configuration file.

    Returns:
        The deserialised :class:`~api_consumer.models.ServerConfig`. If the
        file does not exist, a default instance is returned.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = config_path()
    if not path.is_file():
        return ServerConfig()
    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text)
        return ServerConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc


def save_server_config(config: ServerConfig) -> Path:
    """Persist the server configuration atomically to disk.

    Args:
        config: The configuration to save.

    Returns:
        The path written.
    """
    path = config_path()
    data = config.model_dump(mode="json")
    _atomic_write(path, json.dumps(data, indent=2) + "\n")
    return path


# --- Precedence resolution ---


def resolve_config(
    cli_timeout: Optional[int] = None,
    cli_max_concurrent_requests: Optional[int] = None,
) -> ServerConfig:
    """Resolve the effective server config.

    Precedence (high to low):
        1. CLI flags (``cli_timeout``, ``cli_max_concurrent_requests``)
        2. Environment variables (``API_CONSUMER_TIMEOUT``,
           ``API_CONSUMER_MAX_CONCURRENT_REQUESTS``)
        3. Config file (``~/.config/api-consumer/config.json``)
        4. Defaults

    Raises:
        ConfigError: If the config file is invalid, or an override is not a
            positive integer.
    """
    # 4 + 3. Defaults are filled in by the model
    config = load_server_config()
    overrides: dict[str, Any] = {}

    # 2. Environment variables
    env_timeout = os.environ.get(ENV_TIMEOUT)
    if env_timeout:
        overrides["timeout"] = _env_int(ENV_TIMEOUT, env_timeout)
    env_concurrency = os.environ.get(ENV_MAX_CONCURRENT_REQUESTS)
    if env_concurrency:
        overrides["max_concurrent_requests"] = _env_int(
            ENV_MAX_CONCURRENT_REQUESTS, env_concurrency
        )

    # 1. CLI flags
    if cli_timeout is not None:
        overrides["timeout"] = cli_timeout
    if cli_max_concurrent_requests is not None:
        overrides["max_concurrent_requests"] = cli_max_concurrent_requests

    if not overrides:
        return config
    try:
        return ServerConfig.model_validate({**config.model_dump(), **overrides})
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration override: {exc}") from exc


def _env_int(name: str, value: str) -> int:
    """Parse an integer environment variable, raising ConfigError on junk."""
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigError(f"Environment variable {name} must be an integer, got {value!r}") from exc
