from __future__ import annotations

import os
from pathlib import Path

import typer

from ghrel import __version__
from ghrel.cli.commands.branch import create_release_branch
from ghrel.cli.commands.pre_checks import publish_pre_checks
from ghrel.cli.commands.publish import publish
from ghrel.cli.commands.tasks import tasks
from ghrel.cli.context import CONFIG_ENV_VAR
from ghrel.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command("publish-pre-checks")(publish_pre_checks)
app.command("create-release-branch")(create_release_branch)
app.command()(publish)
app.command()(tasks)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to release.toml (default: search upward from the current directory)",
    ),
) -> None:
    """Tag and publish GitHub releases for a build artifact."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if config is not None:
        path = config.expanduser()
        if not path.is_file():
            typer.echo(f"error: config file not found: {path}", err=True)
            raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))
        os.environ[CONFIG_ENV_VAR] = str(path.resolve())


def main() -> None:
    app()
