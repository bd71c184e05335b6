from __future__ import annotations

from ghrel.core.config import ReleaseConfiguration
from ghrel.core.result import Err, Ok, Result
from ghrel.release.contracts import VersionControl
from ghrel.release.errors import InvalidInput, ReleaseError
from ghrel.services.preflight import validate

RELEASE_BRANCH_PREFIX = "releases/"


def release_branch_name(version: str, *, legacy: bool = False) -> str:
    """``releases/<version>``; ``legacy`` keeps the historical leading slash."""
    name = f"{RELEASE_BRANCH_PREFIX}{version}"
    return f"/{name}" if legacy else name


def create_release_branch(
    *,
    config: ReleaseConfiguration,
    repo: VersionControl,
    version: str,
    skip_checks: bool = False,
) -> Result[str, ReleaseError]:
    """Run the pre-flight gate, then create the release branch at HEAD.

    ``skip_checks`` is for callers that already ran the gate in the same
    invocation (the task pipeline).

    Returns:
        Ok(branch name) on success
    """
    version = version.strip()
    if not version:
        return Err(InvalidInput(message="release version is empty"))

    if not skip_checks:
        gate = validate(config, repo)
        if isinstance(gate, Err):
            return gate

    name = release_branch_name(version, legacy=config.legacy_branch_name)
    created = repo.create_branch(name)
    if isinstance(created, Err):
        return created
    return Ok(name)
