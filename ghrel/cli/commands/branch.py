"""create-release-branch command."""

from __future__ import annotations

import typer

from ghrel.cli.commands._helpers import exit_on_error, require_version, run_pre_checks
from ghrel.cli.context import build_context
from ghrel.core.result import Err, Ok, Result
from ghrel.release.errors import ReleaseError
from ghrel.services.branch import create_release_branch as create_branch
from ghrel.services.pipeline import CREATE_RELEASE_BRANCH, PRE_CHECKS, run_pipeline


def create_release_branch(
    release_version: str | None = typer.Option(
        None,
        "--release-version",
        "-r",
        help="Version to branch (defaults to release.toml / $GHREL_PUBLISH_VERSION)",
    ),
) -> None:
    """Create the releases/<version> branch at HEAD."""
    ctx = build_context()
    version = require_version(ctx, release_version)

    def branch() -> Result[None, ReleaseError]:
        created = create_branch(
            config=ctx.config,
            repo=ctx.repo,
            version=version,
            skip_checks=True,
        )
        if isinstance(created, Err):
            return created
        ctx.console.success(f"branch {created.value} created")
        return Ok(None)

    result = run_pipeline(
        CREATE_RELEASE_BRANCH,
        {
            PRE_CHECKS: lambda: run_pre_checks(ctx),
            CREATE_RELEASE_BRANCH: branch,
        },
    )
    exit_on_error(result, ctx)
