"""Git operations module.

Usage:
    from ghrel.git import Repository

    repo = Repository(Path("/path/to/repo"))
    branch = repo.current_branch()
    if branch.is_ok():
        print(f"Branch: {branch.unwrap()}")
"""

from ghrel.git.repository import (
    GitStatus,
    Repository,
    StatusEntry,
)

__all__ = [
    "GitStatus",
    "Repository",
    "StatusEntry",
]
