"""Pre-flight gate run before any state-mutating release step."""

from __future__ import annotations

from ghrel.core.config import ReleaseConfiguration
from ghrel.core.result import Err, Ok, Result
from ghrel.release.contracts import VersionControl
from ghrel.release.errors import PolicyViolation, PreflightError


def validate(config: ReleaseConfiguration, repo: VersionControl) -> Result[None, PreflightError]:
    """Check that the repository is eligible for a release.

    The branch restriction is checked before cleanliness. Both are read
    from git at call time.
    """
    if config.only_from_master:
        branch = repo.current_branch()
        if isinstance(branch, Err):
            return branch
        if branch.value != config.main_branch:
            return Err(
                PolicyViolation(
                    reason="branch restriction",
                    message=(
                        f"releases can only be created from '{config.main_branch}' "
                        f"(current: '{branch.value}')"
                    ),
                    hint="Set only_from_master = false in release.toml to disable this check",
                )
            )

    if config.fail_on_uncommitted_changes:
        clean = repo.is_clean()
        if isinstance(clean, Err):
            return clean
        if not clean.value:
            return Err(
                PolicyViolation(
                    reason="dirty working tree",
                    message="releases cannot be created with uncommitted or untracked files",
                    hint=(
                        "Commit or stash your changes, or set "
                        "fail_on_uncommitted_changes = false in release.toml"
                    ),
                )
            )

    return Ok(None)
