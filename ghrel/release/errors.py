"""Error types for the release workflow.

Errors are plain frozen dataclasses returned inside ``Err``. Each carries a
``message`` and an optional ``hint`` so view code can render any of them
without knowing where it came from.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from ghrel.core.config import ConfigError

PolicyReason = Literal["branch restriction", "dirty working tree"]


@dataclass(frozen=True, slots=True)
class PolicyViolation:
    """A pre-flight gate refused the release. Fixable by the user."""

    reason: PolicyReason
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class VcsAccessError:
    """The local repository could not be read."""

    command: str
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class VcsWriteError:
    """A local git write (branch, tag) failed."""

    command: str
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class RemoteApiError:
    """The remote answered unexpectedly, or rejected a push.

    ``status`` is the HTTP status code when one was received.
    """

    message: str
    status: int | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class NetworkError:
    """Transport-level failure: DNS, refused connection, timeout, TLS."""

    url: str
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class ArtifactMissing:
    """The build artifact to upload could not be resolved or read."""

    message: str
    path: Path | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class InvalidInput:
    """Bad arguments: empty version, unknown task, missing repository slug."""

    message: str
    hint: str | None = None


PreflightError = PolicyViolation | VcsAccessError

ReleaseError = (
    PolicyViolation
    | VcsAccessError
    | VcsWriteError
    | RemoteApiError
    | NetworkError
    | ArtifactMissing
    | InvalidInput
    | ConfigError
)
