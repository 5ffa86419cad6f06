"""Typed configuration loading and access.

Settings are layered, later layers winning:

1. built-in defaults
2. ``[sync]`` table of an optional ``orgsync.toml``
3. environment (``MAX_PARALLEL_JOBS``, ``ORGSYNC_GIT_TIMEOUT``, ``GITHUB_API_URL``)
4. command-line options

The GitHub token is read from ``GITHUB_TOKEN`` only and never stored in
the config file.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_int, get_str, get_str_list, get_table

__all__ = [
    "SyncConfig",
    "ConfigError",
    "load_config",
    "load_config_if_present",
    "read_token",
    "CONFIG_FILENAME",
    "DEFAULT_API_URL",
    "DEFAULT_BRANCHES",
    "DEFAULT_GIT_TIMEOUT_SECONDS",
    "DEFAULT_MAX_PARALLEL_JOBS",
    "TOKEN_ENV",
    "JOBS_ENV",
    "TIMEOUT_ENV",
    "API_URL_ENV",
]

# -----------------------------------------------------------------------------
# Defaults
# -----------------------------------------------------------------------------

CONFIG_FILENAME = "orgsync.toml"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_BRANCHES = ("main", "master")
DEFAULT_GIT_TIMEOUT_SECONDS = 600.0
DEFAULT_MAX_PARALLEL_JOBS = 5

TOKEN_ENV = "GITHUB_TOKEN"
JOBS_ENV = "MAX_PARALLEL_JOBS"
TIMEOUT_ENV = "ORGSYNC_GIT_TIMEOUT"
API_URL_ENV = "GITHUB_API_URL"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when configuration cannot be loaded or is invalid."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class SyncConfig:
    """Resolved settings for one run.

    Attributes:
        exclude: Repository names never synchronized (exact, case-sensitive)
        branches: Branch names tried in order before pulling
        max_parallel_jobs: Concurrency cap for repository operations
        git_timeout: Seconds allowed for one clone or pull
        api_url: GitHub REST API base URL
    """

    exclude: frozenset[str] = frozenset()
    branches: tuple[str, ...] = DEFAULT_BRANCHES
    max_parallel_jobs: int = DEFAULT_MAX_PARALLEL_JOBS
    git_timeout: float = DEFAULT_GIT_TIMEOUT_SECONDS
    api_url: str = DEFAULT_API_URL

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> SyncConfig:
        """Create a config from parsed TOML. Missing keys keep defaults."""
        sync: StrDict = get_table(data, "sync") or {}

        exclude = get_str_list(sync, "exclude") or []
        branches = get_str_list(sync, "branches") or list(DEFAULT_BRANCHES)
        jobs = get_int(sync, "max_parallel_jobs")
        timeout = sync.get("git_timeout")

        return cls(
            exclude=frozenset(exclude),
            branches=tuple(branches),
            max_parallel_jobs=DEFAULT_MAX_PARALLEL_JOBS if jobs is None else jobs,
            git_timeout=float(timeout)
            if isinstance(timeout, (int, float)) and not isinstance(timeout, bool)
            else DEFAULT_GIT_TIMEOUT_SECONDS,
            api_url=get_str(sync, "api_url") or DEFAULT_API_URL,
        )

    def with_environment(self, env: Mapping[str, str]) -> Result[SyncConfig, ConfigError]:
        """Apply environment overrides.

        Args:
            env: Environment mapping (usually ``os.environ``)

        Returns:
            Ok(SyncConfig) or Err(ConfigError) for malformed values
        """
        config = self

        raw_jobs = env.get(JOBS_ENV, "").strip()
        if raw_jobs:
            try:
                jobs = int(raw_jobs)
            except ValueError:
                return Err(ConfigError(f"{JOBS_ENV} must be an integer, got {raw_jobs!r}"))
            config = replace(config, max_parallel_jobs=jobs)

        raw_timeout = env.get(TIMEOUT_ENV, "").strip()
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                return Err(ConfigError(f"{TIMEOUT_ENV} must be a number, got {raw_timeout!r}"))
            config = replace(config, git_timeout=timeout)

        api_url = env.get(API_URL_ENV, "").strip()
        if api_url:
            config = replace(config, api_url=api_url)

        return config.validate()

    def with_overrides(
        self,
        *,
        max_parallel_jobs: int | None = None,
        exclude: Iterable[str] = (),
    ) -> Result[SyncConfig, ConfigError]:
        """Apply command-line overrides. Extra excludes are added, not replaced."""
        config = self
        if max_parallel_jobs is not None:
            config = replace(config, max_parallel_jobs=max_parallel_jobs)
        extra = frozenset(name.strip() for name in exclude if name.strip())
        if extra:
            config = replace(config, exclude=config.exclude | extra)
        return config.validate()

    def validate(self) -> Result[SyncConfig, ConfigError]:
        if self.max_parallel_jobs < 1:
            return Err(
                ConfigError(f"max parallel jobs must be at least 1, got {self.max_parallel_jobs}")
            )
        if self.git_timeout <= 0:
            return Err(ConfigError(f"git timeout must be positive, got {self.git_timeout}"))
        if not self.branches:
            return Err(ConfigError("at least one branch name is required"))
        return Ok(self)


def read_token(env: Mapping[str, str]) -> str | None:
    """Return the GitHub token from the environment, or None if unset/blank."""
    token = env.get(TOKEN_ENV, "").strip()
    return token or None


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
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


def load_config(path: Path) -> Result[SyncConfig, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to orgsync.toml

    Returns:
        Ok(SyncConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        config = SyncConfig.from_dict(result.value)
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))

    match config.validate():
        case Err(error):
            return Err(ConfigError(error.message, path=path))
        case Ok(valid):
            return Ok(valid)


def load_config_if_present(path: Path) -> Result[SyncConfig, ConfigError]:
    """Load config from file, or return defaults if the file doesn't exist."""
    if not path.exists():
        return Ok(SyncConfig())
    return load_config(path)
