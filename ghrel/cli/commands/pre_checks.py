"""publish-pre-checks command - run the release gate on its own."""

from __future__ import annotations

from ghrel.cli.commands._helpers import exit_on_error, run_pre_checks
from ghrel.cli.context import build_context
from ghrel.services.pipeline import PRE_CHECKS, run_pipeline


def publish_pre_checks() -> None:
    """Check branch and working-tree policy without changing anything."""
    ctx = build_context()
    result = run_pipeline(PRE_CHECKS, {PRE_CHECKS: lambda: run_pre_checks(ctx)})
    exit_on_error(result, ctx)
