"""Git repository abstraction.

This module provides the Repository class: the read side used by the
pre-flight checks (branch, cleanliness, HEAD) and the few writes the
release workflow needs (branch, annotated tag, tag push).

Every git invocation is checked by exit code. Output is only read for
well-delimited tokens (a branch name, a commit hash, porcelain status lines).

Usage:
    repo = Repository(Path("/path/to/repo"))

    match repo.state():
        case Ok(state):
            print(f"{state.current_branch} @ {state.head_commit}")
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from ghrel.core.result import Err, Ok, Result
from ghrel.platform.process import ProcessError
from ghrel.platform.process import run as run_process
from ghrel.release.errors import RemoteApiError, VcsAccessError, VcsWriteError
from ghrel.release.model import RepositoryState

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

_DETACHED_HEAD_EXIT = 1

_COMMIT_RE = re.compile(r"^(?:[0-9a-f]{40}|[0-9a-f]{64})$")

__all__ = [
    "GitStatus",
    "Repository",
    "StatusEntry",
]


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """A single entry in git status.

    Attributes:
        xy: Two-character status code (e.g., "M ", " M", "??")
        path: File path
    """

    xy: str
    path: str

    @property
    def is_staged(self) -> bool:
        """True if file has staged changes."""
        return self.xy != "??" and self.xy[0] != " "

    @property
    def is_unstaged(self) -> bool:
        """True if file has unstaged changes."""
        return self.xy != "??" and self.xy[1] != " "

    @property
    def is_untracked(self) -> bool:
        """True if file is untracked."""
        return self.xy == "??"


@dataclass(frozen=True, slots=True)
class GitStatus:
    """Parsed ``git status --porcelain=v1`` output."""

    entries: tuple[StatusEntry, ...] = field(default_factory=tuple)

    @property
    def is_clean(self) -> bool:
        """True if there are no staged, unstaged or untracked files."""
        return len(self.entries) == 0

    @property
    def has_uncommitted_changes(self) -> bool:
        return any(e.is_staged or e.is_unstaged for e in self.entries)

    @property
    def untracked(self) -> list[StatusEntry]:
        return [e for e in self.entries if e.is_untracked]

    @property
    def modified(self) -> list[StatusEntry]:
        return [e for e in self.entries if not e.is_untracked]


class Repository:
    """Git repository abstraction.

    All methods that can fail return Result types. Nothing is cached: each
    call asks git again, so checks always reflect the tree at time of use.

    Attributes:
        path: Path to the repository root (or any directory inside it)
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    # -------------------------------------------------------------------------
    # Read side
    # -------------------------------------------------------------------------

    def status(self) -> Result[GitStatus, VcsAccessError]:
        """Run ``git status --porcelain=v1`` and parse the entries.

        Untracked files are always listed, whatever ``status.showUntrackedFiles`` says.
        """
        result = self._run(["status", "--porcelain=v1", "--untracked-files=normal"])
        if isinstance(result, Err):
            return Err(_access_error("status", result.error))
        return Ok(_parse_status(result.value))

    def is_clean(self) -> Result[bool, VcsAccessError]:
        """True if there are no modifications and no untracked files."""
        return self.status().map(lambda st: st.is_clean)

    def current_branch(self) -> Result[str, VcsAccessError]:
        """Current branch name; ``"HEAD"`` when detached.

        ``symbolic-ref`` names the branch even when a tag shares its name.
        With ``-q`` a detached HEAD exits 1 and prints nothing.
        """
        result = self._run(["symbolic-ref", "--short", "-q", "HEAD"])
        if isinstance(result, Err):
            if result.error.returncode == _DETACHED_HEAD_EXIT and not result.error.stderr.strip():
                return Ok("HEAD")
            return Err(_access_error("symbolic-ref --short HEAD", result.error))

        branch = result.value.strip()
        if not branch:
            return Err(
                VcsAccessError(
                    command="symbolic-ref --short HEAD",
                    message="git returned an empty branch name",
                )
            )
        return Ok(branch)

    def head_commit(self) -> Result[str, VcsAccessError]:
        """Full (unabbreviated) hash of the HEAD commit."""
        result = self._run(["rev-parse", "--verify", "HEAD"])
        if isinstance(result, Err):
            return Err(_access_error("rev-parse --verify HEAD", result.error))

        sha = result.value.strip()
        if not _COMMIT_RE.match(sha):
            return Err(
                VcsAccessError(
                    command="rev-parse --verify HEAD",
                    message=f"unexpected commit hash: {sha!r}",
                )
            )
        return Ok(sha)

    def state(self) -> Result[RepositoryState, VcsAccessError]:
        """Read branch, cleanliness and HEAD in one go."""
        branch = self.current_branch()
        if isinstance(branch, Err):
            return branch

        status = self.status()
        if isinstance(status, Err):
            return status

        head = self.head_commit()
        if isinstance(head, Err):
            return head

        st = status.value
        return Ok(
            RepositoryState(
                current_branch=branch.value,
                has_uncommitted_changes=st.has_uncommitted_changes,
                has_untracked_files=bool(st.untracked),
                head_commit=head.value,
            )
        )

    # -------------------------------------------------------------------------
    # Write side
    # -------------------------------------------------------------------------

    def create_branch(self, name: str) -> Result[None, VcsWriteError]:
        """Create branch ``name`` at HEAD without checking it out."""
        result = self._run(["branch", name])
        if isinstance(result, Err):
            return Err(
                VcsWriteError(
                    command=f"branch {name}",
                    message=f"failed to create branch '{name}'",
                    hint=result.error.detail,
                )
            )
        return Ok(None)

    def create_annotated_tag(self, name: str, message: str) -> Result[None, VcsWriteError]:
        """Create annotated tag ``name`` on HEAD."""
        result = self._run(["tag", "-a", name, "-m", message])
        if isinstance(result, Err):
            return Err(
                VcsWriteError(
                    command=f"tag -a {name}",
                    message=f"failed to create tag '{name}'",
                    hint=result.error.detail,
                )
            )
        return Ok(None)

    def push_tags(self, remote: str) -> Result[None, RemoteApiError]:
        """Push all tags to ``remote``. Credentials come from git's own config."""
        result = self._run(["push", remote, "--tags"])
        if isinstance(result, Err):
            return Err(
                RemoteApiError(
                    message=f"failed to push tags to '{remote}'",
                    hint=result.error.detail,
                )
            )
        return Ok(None)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        timeout = (
            _GIT_NETWORK_TIMEOUT_SECONDS
            if command in {"fetch", "pull", "push"}
            else _GIT_TIMEOUT_SECONDS
        )
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)


def _access_error(command: str, error: ProcessError) -> VcsAccessError:
    return VcsAccessError(
        command=command,
        message=f"cannot read git repository: {error.detail}",
        hint="Run from inside a git work tree with git on PATH",
    )


def _parse_status(output: str) -> GitStatus:
    entries: list[StatusEntry] = []
    for line in output.splitlines():
        entry = _parse_entry(line)
        if entry:
            entries.append(entry)
    return GitStatus(entries=tuple(entries))


def _parse_entry(line: str) -> StatusEntry | None:
    """Parse ``XY path`` (``?? path`` for untracked files)."""
    if len(line) < 4 or line.startswith("##"):
        return None
    return StatusEntry(xy=line[:2], path=line[3:])
