"""Typed release configuration.

The configuration lives in ``release.toml`` at the project root:

    [release]
    repository = "owner/project"
    version = "1.2.3"
    only_from_master = true
    fail_on_uncommitted_changes = true

    [artifacts]
    app = "build/libs/app.jar"

Only ``repository`` is needed to publish; every other key has a default.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_float, get_str, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "ReleaseConfiguration",
    "VERSION_ENV_VAR",
    "find_config",
    "load_config",
    "resolve_version",
]

CONFIG_FILE_NAME = "release.toml"
VERSION_ENV_VAR = "GHREL_PUBLISH_VERSION"

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_REMOTE = "origin"
DEFAULT_MAIN_BRANCH = "master"
DEFAULT_TOKEN_ENV = "GITHUB_TOKEN"
DEFAULT_TIMEOUT_SECONDS = 60.0

_STRING_KEYS = ("repository", "version", "api_url", "remote", "main_branch", "token_env")
_BOOL_KEYS = ("only_from_master", "fail_on_uncommitted_changes", "legacy_branch_name")


def _check_types(data: Mapping[str, object], release: Mapping[str, object]) -> None:
    """Raise ValueError for any known key present with the wrong TOML type."""
    for section in ("release", "artifacts"):
        if section in data and get_table(data, section) is None:
            raise ValueError(f"[{section}] must be a table")

    for key in _STRING_KEYS:
        if key in release and not isinstance(release[key], str):
            raise ValueError(f"{key} must be a string, got {type(release[key]).__name__}")
    for key in _BOOL_KEYS:
        if key in release and not isinstance(release[key], bool):
            raise ValueError(f"{key} must be true or false, got {release[key]!r}")

    timeout = release.get("timeout_seconds")
    if timeout is not None and (isinstance(timeout, bool) or not isinstance(timeout, int | float)):
        raise ValueError(f"timeout_seconds must be a number, got {timeout!r}")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be found, read or parsed."""

    message: str
    path: Path | None = None


def _empty_artifacts() -> dict[str, Path]:
    return {}


@dataclass(frozen=True, slots=True)
class ReleaseConfiguration:
    """Release options for a single invocation.

    Attributes:
        artifacts: Artifact name -> file path (relative to the project root)
        only_from_master: Refuse to release from any branch but ``main_branch``
        fail_on_uncommitted_changes: Refuse to release from a dirty tree
        repository: GitHub ``owner/name`` slug
        version: Version to release, unless overridden on the command line
        api_url: Base URL of the GitHub REST API
        remote: Git remote that receives the pushed tags
        main_branch: Branch name the ``only_from_master`` gate expects
        token_env: Environment variable holding the API token
        timeout_seconds: Timeout applied to each HTTP request
        legacy_branch_name: Name release branches ``/releases/<version>``
    """

    artifacts: Mapping[str, Path] = field(default_factory=_empty_artifacts)
    only_from_master: bool = True
    fail_on_uncommitted_changes: bool = True
    repository: str | None = None
    version: str | None = None
    api_url: str = DEFAULT_API_URL
    remote: str = DEFAULT_REMOTE
    main_branch: str = DEFAULT_MAIN_BRANCH
    token_env: str = DEFAULT_TOKEN_ENV
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    legacy_branch_name: bool = False

    @property
    def releases_endpoint(self) -> str | None:
        """Full URL of the create-release endpoint, None without a repository."""
        if self.repository is None:
            return None
        return f"{self.api_url.rstrip('/')}/repos/{self.repository}/releases"

    def token(self) -> str | None:
        """Read the API token from the environment (not cached)."""
        value = os.environ.get(self.token_env, "").strip()
        return value or None

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ReleaseConfiguration:
        """Create a configuration from parsed TOML.

        Raises:
            ValueError: if a value has the wrong shape
        """
        release: StrDict = get_table(data, "release") or {}
        artifacts_tbl: StrDict = get_table(data, "artifacts") or {}
        _check_types(data, release)

        artifacts: dict[str, Path] = {}
        for name, raw in artifacts_tbl.items():
            if not isinstance(raw, str) or not raw.strip():
                raise ValueError(f"artifact '{name}' must be a non-empty path string")
            artifacts[name] = Path(raw.strip())

        repository = get_str(release, "repository")
        if repository is not None:
            owner, sep, name = repository.partition("/")
            if not sep or not owner or not name or "/" in name:
                raise ValueError(f"repository must be 'owner/name', got '{repository}'")

        timeout = get_float(release, "timeout_seconds")
        if timeout is not None and timeout <= 0:
            raise ValueError("timeout_seconds must be positive")

        only_from_master = get_bool(release, "only_from_master")
        fail_on_dirty = get_bool(release, "fail_on_uncommitted_changes")
        legacy = get_bool(release, "legacy_branch_name")

        return cls(
            artifacts=artifacts,
            only_from_master=True if only_from_master is None else only_from_master,
            fail_on_uncommitted_changes=True if fail_on_dirty is None else fail_on_dirty,
            repository=repository,
            version=get_str(release, "version"),
            api_url=get_str(release, "api_url") or DEFAULT_API_URL,
            remote=get_str(release, "remote") or DEFAULT_REMOTE,
            main_branch=get_str(release, "main_branch") or DEFAULT_MAIN_BRANCH,
            token_env=get_str(release, "token_env") or DEFAULT_TOKEN_ENV,
            timeout_seconds=timeout or DEFAULT_TIMEOUT_SECONDS,
            legacy_branch_name=bool(legacy),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, converting read and syntax errors."""
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


def load_config(path: Path) -> Result[ReleaseConfiguration, ConfigError]:
    """Load and validate a release configuration file.

    Args:
        path: Path to release.toml

    Returns:
        Ok(ReleaseConfiguration) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(ReleaseConfiguration.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config: {e}", path=path))


def find_config(start: Path) -> Result[Path, ConfigError]:
    """Walk up from ``start`` to the first directory holding release.toml."""
    start = start.resolve()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            return Ok(candidate)
    return Err(ConfigError(f"{CONFIG_FILE_NAME} not found in {start} or any parent"))


def resolve_version(config: ReleaseConfiguration, override: str | None = None) -> str | None:
    """Pick the version to release.

    Precedence: explicit override, then $GHREL_PUBLISH_VERSION, then the
    ``version`` key of the configuration.
    """
    for candidate in (override, os.environ.get(VERSION_ENV_VAR), config.version):
        if candidate is not None and candidate.strip():
            return candidate.strip()
    return None
