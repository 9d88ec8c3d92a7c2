"""Configuration storage, profile resolution and credential sources.

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.infinispan-rest/`` elsewhere. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- one :class:`~infinispan_rest.models.GlobalConfig`
  JSON file holding the default profile and output format.
* **Profiles** -- one JSON file per server, deserialised into a
  :class:`~infinispan_rest.models.Profile`.
* **Precedence** -- :func:`resolve_profile` merges CLI flags, ``ISPN_*``
  environment variables and stored profiles into the effective target.
* **Credentials** -- :func:`resolve_credential` reads the password from an
  env var, a file, an interactive prompt or a literal.

Writes go through :func:`_atomic_write` (temp file + rename) so a crash never
leaves a half-written profile behind.
"""

from __future__ import annotations

import getpass
import json
import os
import platform
import sys
import tempfile
from pathlib import Path
from typing import Optional

from infinispan_rest.exceptions import ConfigError, InvalidUsageError
from infinispan_rest.models import AuthConfig, GlobalConfig, Profile

_APP_NAME = "infinispan-rest"
_CONFIG_FILENAME = "config.json"

ENV_PROFILE = "ISPN_PROFILE"
ENV_BASE_URL = "ISPN_BASE_URL"
ENV_USERNAME = "ISPN_USERNAME"
ENV_PASSWORD = "ISPN_PASSWORD"


# --- Paths ---


def _is_xdg_platform() -> bool:
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from *env_var*, falling back under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    return Path.home().joinpath(*default_segments)


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/infinispan-rest/`` (default
    ``~/.config/infinispan-rest/``). Elsewhere: ``~/.infinispan-rest/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory used for crash logs, creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/infinispan-rest/`` (default
    ``~/.local/share/infinispan-rest/``). Elsewhere: ``~/.infinispan-rest/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_profiles_dir() -> Path:
    path = get_config_dir() / "profiles"
    path.mkdir(parents=True, exist_ok=True)
    return path


def _atomic_write(path: Path, data: str) -> None:
    """Write *data* to *path* via a temp file in the same directory and ``os.replace``."""
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
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


def _read_json(path: Path, what: str) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid {what} at {path}: {exc}") from exc


# --- Global config ---


def load_global_config() -> GlobalConfig:
    """Load the global configuration, or defaults when the file is missing.

    Raises:
        ConfigError: If the file exists but is not valid JSON or fails
            validation.
    """
    path = get_config_dir() / _CONFIG_FILENAME
    if not path.is_file():
        return GlobalConfig()
    data = _read_json(path, "global config")
    try:
        return GlobalConfig.model_validate(data)
    except ValueError as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    data = config.model_dump(mode="json")
    _atomic_write(get_config_dir() / _CONFIG_FILENAME, json.dumps(data, indent=2) + "\n")


# --- Profiles ---


def _profile_path(name: str) -> Path:
    """Return the file backing profile *name*.

    Raises:
        InvalidUsageError: If *name* is empty, starts with a dot, or contains a
            path separator.
    """
    if not name or name.startswith(".") or "/" in name or "\\" in name:
        raise InvalidUsageError(
            f"Invalid profile name '{name}' (no path separators or leading dots)"
        )
    return get_profiles_dir() / f"{name}.json"


def list_profiles() -> list[str]:
    """Return stored profile names, sorted alphabetically."""
    return sorted(p.stem for p in get_profiles_dir().glob("*.json") if p.is_file())


def profile_exists(name: str) -> bool:
    return _profile_path(name).is_file()


def load_profile(name: str) -> Profile:
    """Load and validate a stored profile.

    Raises:
        ConfigError: If the profile does not exist or cannot be parsed.
    """
    path = _profile_path(name)
    if not path.is_file():
        raise ConfigError(f"Profile '{name}' not found at {path}")
    data = _read_json(path, f"profile '{name}'")
    try:
        return Profile.model_validate(data)
    except ValueError as exc:
        raise ConfigError(f"Invalid profile '{name}' at {path}: {exc}") from exc


def save_profile(profile: Profile) -> None:
    data = profile.model_dump(mode="json")
    _atomic_write(_profile_path(profile.name), json.dumps(data, indent=2) + "\n")


def delete_profile(name: str) -> None:
    """Delete a stored profile.

    Raises:
        ConfigError: If the profile does not exist.
    """
    path = _profile_path(name)
    if not path.is_file():
        raise ConfigError(f"Profile '{name}' not found at {path}")
    path.unlink()


# --- Precedence resolution ---


def resolve_profile(
    cli_profile: Optional[str] = None,
    cli_base_url: Optional[str] = None,
    cli_username: Optional[str] = None,
    cli_password: Optional[str] = None,
) -> Profile:
    """Work out which server to talk to and with which credentials.

    Precedence (high to low):
        1. CLI flags
        2. Environment variables (``ISPN_PROFILE``, ``ISPN_BASE_URL``,
           ``ISPN_USERNAME``, ``ISPN_PASSWORD``)
        3. The stored profile (explicitly named, or the global
           ``default_profile``)
        4. Defaults (``http://localhost:11222``, no credentials)

    Returns:
        The effective :class:`~infinispan_rest.models.Profile`. It is not
        saved to disk.
    """
    name = cli_profile or os.environ.get(ENV_PROFILE) or load_global_config().default_profile
    profile = load_profile(name) if name else Profile(name="default")

    base_url = cli_base_url or os.environ.get(ENV_BASE_URL)
    if base_url:
        profile = profile.model_copy(update={"base_url": base_url})

    username = cli_username or os.environ.get(ENV_USERNAME)
    if cli_password is not None:
        source: Optional[str] = f"literal:{cli_password}"
    elif os.environ.get(ENV_PASSWORD) is not None:
        source = f"env:{ENV_PASSWORD}"
    else:
        source = None

    if username or source:
        current = profile.auth
        if username is None and current is None:
            raise ConfigError(
                f"A password was supplied without a username (use --username or {ENV_USERNAME})"
            )
        auth = AuthConfig(
            username=username or current.username,
            source=source or (current.source if current else "prompt"),
        )
        profile = profile.model_copy(update={"auth": auth})

    return profile


# --- Credential sources ---


def resolve_credential(source: str) -> str:
    """Resolve a password from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``os.environ["VAR_NAME"]``
        - ``"file:/path/to/file"`` -- reads the file, stripped of whitespace
        - ``"prompt"`` -- asks interactively (requires a TTY)
        - ``"literal:VALUE"`` -- uses ``VALUE`` as-is

    Raises:
        ConfigError: If the source cannot be resolved.
    """
    if source.startswith("env:"):
        var_name = source[4:]
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigError(f"Environment variable '{var_name}' is not set (source: {source})")
        return value

    if source.startswith("file:"):
        path = Path(source[5:]).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    if source == "prompt":
        if not sys.stdin.isatty():
            raise ConfigError("Cannot prompt for a password: stdin is not a TTY (source: prompt)")
        return getpass.getpass("Password: ")

    if source.startswith("literal:"):
        return source[8:]

    raise ConfigError(f"Unknown credential source format: {source}")
