from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from ghrel.core.config import ReleaseConfiguration, find_config, load_config
from ghrel.core.errors import ErrorCode
from ghrel.core.result import Err
from ghrel.git.repository import Repository
from ghrel.http.client import HttpClient, RealHttpClient
from ghrel.output.console import ConsoleProtocol, RichConsole
from ghrel.release.contracts import VersionControl

CONFIG_ENV_VAR = "GHREL_CONFIG"


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config: ReleaseConfiguration
    repo: VersionControl
    http: HttpClient
    console: ConsoleProtocol


def _config_path() -> Path:
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        return Path(explicit).expanduser().resolve()

    found = find_config(Path.cwd())
    if isinstance(found, Err):
        typer.echo(f"error: {found.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))
    return found.value


def build_context() -> CLIContext:
    path = _config_path()
    config_result = load_config(path)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))

    config = config_result.value
    root = path.parent
    return CLIContext(
        root=root,
        config=config,
        repo=Repository(root),
        http=RealHttpClient(timeout=config.timeout_seconds),
        console=RichConsole(),
    )
