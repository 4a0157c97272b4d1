"""Typed configuration loading and access.

Two sources feed a run:
- dotsetup.toml (optional): release index URL, retry policy, script location.
- The process environment, captured once at startup into EnvSettings and
  passed explicitly from there on (nothing writes back to os.environ).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_float, get_int, get_str, get_table

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_INDEX_URL",
    "DEFAULT_SCRIPT_BASE_URL",
    "Config",
    "ConfigError",
    "EnvSettings",
    "IndexConfig",
    "InstallConfig",
    "RetryConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "dotsetup.toml"

DEFAULT_INDEX_URL = (
    "https://dotnetcli.azureedge.net/dotnet/release-metadata/releases-index.json"
)
DEFAULT_SCRIPT_BASE_URL = "https://dot.net/v1"

DEFAULT_MAX_RETRIES = 3
DEFAULT_BACKOFF = 1.0


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class IndexConfig:
    """Release index location."""

    url: str = DEFAULT_INDEX_URL


@dataclass(frozen=True, slots=True)
class RetryConfig:
    """Retry policy for release index fetches.

    Attributes:
        max_retries: Retries after the first attempt (0 disables retrying)
        backoff: Base delay in seconds, doubled after each failed attempt
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    backoff: float = DEFAULT_BACKOFF

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError(f"retry.max_retries must be >= 0, got {self.max_retries}")
        if self.backoff < 0:
            raise ValueError(f"retry.backoff must be >= 0, got {self.backoff}")


@dataclass(frozen=True, slots=True)
class InstallConfig:
    """Installer script location.

    script_dir holds dotnet-install.sh / dotnet-install.ps1. When unset, the
    scripts are downloaded from script_base_url and cached.
    """

    script_dir: str | None = None
    script_base_url: str = DEFAULT_SCRIPT_BASE_URL


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    index: IndexConfig = field(default_factory=IndexConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)
    install: InstallConfig = field(default_factory=InstallConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        index: StrDict = get_table(data, "index") or {}
        retry: StrDict = get_table(data, "retry") or {}
        install: StrDict = get_table(data, "install") or {}

        max_retries = get_int(retry, "max_retries")
        backoff = get_float(retry, "backoff")

        return cls(
            index=IndexConfig(url=get_str(index, "url") or DEFAULT_INDEX_URL),
            retry=RetryConfig(
                max_retries=DEFAULT_MAX_RETRIES if max_retries is None else max_retries,
                backoff=DEFAULT_BACKOFF if backoff is None else backoff,
            ),
            install=InstallConfig(
                script_dir=get_str(install, "script_dir"),
                script_base_url=get_str(install, "script_base_url") or DEFAULT_SCRIPT_BASE_URL,
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to dotsetup.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config if the file exists, else return the defaults.

    A file that exists but is invalid is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)


def _env_str(environ: Mapping[str, str], key: str) -> str | None:
    value = environ.get(key)
    return value if value else None


def _env_path(environ: Mapping[str, str], key: str) -> Path | None:
    value = _env_str(environ, key)
    return Path(value) if value else None


@dataclass(frozen=True, slots=True)
class EnvSettings:
    """Snapshot of the environment variables a run depends on.

    Attributes:
        install_dir: DOTNET_INSTALL_DIR if pre-set (authoritative override)
        program_files: PROGRAMFILES (Windows default root)
        home: HOME (macOS default root)
        https_proxy: https_proxy (Windows installer passthrough)
        no_proxy: no_proxy (Windows installer passthrough)
        github_env: GITHUB_ENV file for exported variables
        github_path: GITHUB_PATH file for PATH additions
        github_output: GITHUB_OUTPUT file for step outputs
    """

    install_dir: str | None = None
    program_files: str | None = None
    home: str | None = None
    https_proxy: str | None = None
    no_proxy: str | None = None
    github_env: Path | None = None
    github_path: Path | None = None
    github_output: Path | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EnvSettings:
        env = os.environ if environ is None else environ
        return cls(
            install_dir=_env_str(env, "DOTNET_INSTALL_DIR"),
            program_files=_env_str(env, "PROGRAMFILES"),
            home=_env_str(env, "HOME"),
            https_proxy=_env_str(env, "https_proxy"),
            no_proxy=_env_str(env, "no_proxy"),
            github_env=_env_path(env, "GITHUB_ENV"),
            github_path=_env_path(env, "GITHUB_PATH"),
            github_output=_env_path(env, "GITHUB_OUTPUT"),
        )
