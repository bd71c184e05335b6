"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn, TypeVar

import typer

from ghrel.core.config import resolve_version
from ghrel.core.errors import ErrorCode
from ghrel.core.result import Err, Ok, Result
from ghrel.output.errors import print_release_error, release_error_exit_code
from ghrel.release.errors import InvalidInput, ReleaseError
from ghrel.services.preflight import validate

if TYPE_CHECKING:
    from ghrel.cli.context import CLIContext


T = TypeVar("T")


def exit_on_error(result: Result[T, ReleaseError], ctx: CLIContext) -> None:
    """Render the error and exit with its code if ``result`` is Err."""
    if isinstance(result, Err):
        print_release_error(result.error, ctx.console)
        raise typer.Exit(code=release_error_exit_code(result.error))


def exit_with_code(code: int) -> NoReturn:
    raise typer.Exit(code=code)


def require_version(ctx: CLIContext, override: str | None) -> str:
    """Version from --release-version, $GHREL_PUBLISH_VERSION or release.toml."""
    version = resolve_version(ctx.config, override)
    if version is None:
        error = InvalidInput(
            message="no release version given",
            hint="Pass --release-version or set version in release.toml",
        )
        print_release_error(error, ctx.console)
        exit_with_code(int(ErrorCode.USER_ERROR))
    return version


def run_pre_checks(ctx: CLIContext) -> Result[None, ReleaseError]:
    """Pipeline handler for the pre-flight gate."""
    ctx.console.header("Pre-flight checks")
    result = validate(ctx.config, ctx.repo)
    if isinstance(result, Err):
        return result
    ctx.console.success("repository is eligible for a release")
    return Ok(None)
