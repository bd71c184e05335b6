from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ghrel.core.structured import StrDict

TAG_PREFIX = "v"


def tag_for(version: str) -> str:
    return f"{TAG_PREFIX}{version}"


@dataclass(frozen=True, slots=True)
class RepositoryState:
    """Snapshot of the working tree, read fresh for each check."""

    current_branch: str
    has_uncommitted_changes: bool
    has_untracked_files: bool
    head_commit: str

    @property
    def is_clean(self) -> bool:
        return not (self.has_uncommitted_changes or self.has_untracked_files)


@dataclass(frozen=True, slots=True)
class ReleaseRequest:
    tag_name: str
    name: str
    target_commitish: str
    body: str
    draft: bool = False
    prerelease: bool = False

    @classmethod
    def for_version(cls, version: str, commit: str) -> ReleaseRequest:
        tag = tag_for(version)
        return cls(
            tag_name=tag,
            name=tag,
            target_commitish=commit,
            body=f"Release {tag}",
        )

    def to_payload(self) -> StrDict:
        return {
            "tag_name": self.tag_name,
            "name": self.name,
            "target_commitish": self.target_commitish,
            "body": self.body,
            "draft": self.draft,
            "prerelease": self.prerelease,
        }


@dataclass(frozen=True, slots=True)
class ReleaseResponse:
    assets_url: str


@dataclass(frozen=True, slots=True)
class Artifact:
    name: str
    path: Path
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True, slots=True)
class PublishReport:
    """What a successful (or dry) publish did."""

    tag: str
    commit: str
    assets_url: str | None
    dry_run: bool = False
