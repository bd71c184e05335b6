from __future__ import annotations

import pytest

from ghrel.core.config import ReleaseConfiguration
from ghrel.core.result import Err, Ok
from ghrel.release.errors import PolicyViolation, VcsAccessError
from ghrel.services.preflight import validate
from ghrel.test._fakes import FakeRepo


@pytest.mark.parametrize("branch", ["develop", "main", "releases/1.0.0", "HEAD", "Master"])
def test_only_from_master_rejects_other_branches(branch: str) -> None:
    result = validate(ReleaseConfiguration(), FakeRepo(branch=branch))

    assert isinstance(result, Err)
    assert isinstance(result.error, PolicyViolation)
    assert result.error.reason == "branch restriction"
    assert branch in result.error.message


def test_only_from_master_accepts_master() -> None:
    result = validate(ReleaseConfiguration(), FakeRepo(branch="master"))
    assert result == Ok(None)


def test_branch_restriction_can_be_disabled() -> None:
    config = ReleaseConfiguration(only_from_master=False)
    repo = FakeRepo(branch="feature/x")

    assert validate(config, repo) == Ok(None)
    assert ("current_branch",) not in repo.ops


def test_main_branch_is_configurable() -> None:
    config = ReleaseConfiguration(main_branch="main")

    assert validate(config, FakeRepo(branch="main")) == Ok(None)
    assert isinstance(validate(config, FakeRepo(branch="master")), Err)


def test_dirty_tree_is_rejected() -> None:
    result = validate(ReleaseConfiguration(), FakeRepo(clean=False))

    assert isinstance(result, Err)
    assert isinstance(result.error, PolicyViolation)
    assert result.error.reason == "dirty working tree"


def test_dirty_tree_allowed_when_check_disabled() -> None:
    config = ReleaseConfiguration(fail_on_uncommitted_changes=False)
    repo = FakeRepo(clean=False)

    assert validate(config, repo) == Ok(None)
    assert ("is_clean",) not in repo.ops


def test_branch_is_checked_before_cleanliness() -> None:
    repo = FakeRepo(branch="develop", clean=False)
    result = validate(ReleaseConfiguration(), repo)

    assert isinstance(result, Err)
    assert isinstance(result.error, PolicyViolation)
    assert result.error.reason == "branch restriction"
    assert ("is_clean",) not in repo.ops


def test_unreadable_repository_is_access_error() -> None:
    result = validate(ReleaseConfiguration(), FakeRepo(unreadable=True))

    assert isinstance(result, Err)
    assert isinstance(result.error, VcsAccessError)


def test_validate_has_no_side_effects() -> None:
    repo = FakeRepo()
    validate(ReleaseConfiguration(), repo)
    assert repo.writes() == []
