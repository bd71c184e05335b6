"""Cross-layer contracts for the release workflow."""

from __future__ import annotations

from typing import Protocol

from ghrel.core.result import Result
from ghrel.release.errors import RemoteApiError, VcsAccessError, VcsWriteError


class VersionControl(Protocol):
    """What the workflow needs from version control.

    ``ghrel.git.Repository`` is the production implementation.
    """

    def current_branch(self) -> Result[str, VcsAccessError]: ...

    def is_clean(self) -> Result[bool, VcsAccessError]: ...

    def head_commit(self) -> Result[str, VcsAccessError]: ...

    def create_branch(self, name: str) -> Result[None, VcsWriteError]: ...

    def create_annotated_tag(self, name: str, message: str) -> Result[None, VcsWriteError]: ...

    def push_tags(self, remote: str) -> Result[None, RemoteApiError]: ...
