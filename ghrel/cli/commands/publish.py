"""publish command - run pre-checks, resolve the artifact, publish the release."""

from __future__ import annotations

from pathlib import Path

import typer

from ghrel.cli.commands._helpers import exit_on_error, require_version, run_pre_checks
from ghrel.cli.context import build_context
from ghrel.core.result import Err, Ok, Result
from ghrel.output.console import Style
from ghrel.release.errors import InvalidInput, ReleaseError
from ghrel.release.model import Artifact
from ghrel.services.artifact import resolve_artifact
from ghrel.services.pipeline import BUILD, PRE_CHECKS, PUBLISH, run_pipeline
from ghrel.services.publish import publish as publish_release


def publish(
    release_version: str | None = typer.Option(
        None,
        "--release-version",
        "-r",
        help="Version to publish (defaults to release.toml / $GHREL_PUBLISH_VERSION)",
    ),
    artifact: str | None = typer.Option(
        None,
        "--artifact",
        "-a",
        help="Name of the artifact from the [artifacts] table",
    ),
    file: Path | None = typer.Option(
        None,
        "--file",
        "-f",
        help="Upload this file instead of a configured artifact",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be sent; no release, no tag",
    ),
) -> None:
    """Create the GitHub release, upload the artifact, tag and push."""
    ctx = build_context()
    version = require_version(ctx, release_version)
    resolved: list[Artifact] = []

    def build() -> Result[None, ReleaseError]:
        ctx.console.header("Artifact")
        found = resolve_artifact(ctx.config, ctx.root, name=artifact, path=file)
        if isinstance(found, Err):
            return found
        resolved.append(found.value)
        ctx.console.success(f"{found.value.name}: {found.value.path} ({found.value.size} bytes)")
        return Ok(None)

    def run_publish() -> Result[None, ReleaseError]:
        if not resolved:
            return Err(InvalidInput(message="artifact was not resolved before publish"))
        ctx.console.header(f"Publish v{version}")
        report = publish_release(
            config=ctx.config,
            repo=ctx.repo,
            http=ctx.http,
            version=version,
            artifact=resolved[0],
            console=ctx.console,
            dry_run=dry_run,
            skip_checks=True,
        )
        if isinstance(report, Err):
            return report
        if report.value.dry_run:
            ctx.console.print("dry run: nothing was published", Style.DIM)
        else:
            ctx.console.success(f"released {report.value.tag} at {report.value.commit[:12]}")
        return Ok(None)

    result = run_pipeline(
        PUBLISH,
        {
            PRE_CHECKS: lambda: run_pre_checks(ctx),
            BUILD: build,
            PUBLISH: run_publish,
        },
    )
    exit_on_error(result, ctx)
