"""Release domain types shared by the git, http, services and cli layers."""

from ghrel.release.errors import (
    ArtifactMissing,
    InvalidInput,
    NetworkError,
    PolicyViolation,
    PreflightError,
    ReleaseError,
    RemoteApiError,
    VcsAccessError,
    VcsWriteError,
)
from ghrel.release.model import (
    Artifact,
    PublishReport,
    ReleaseRequest,
    ReleaseResponse,
    RepositoryState,
    tag_for,
)

__all__ = [
    # errors
    "ArtifactMissing",
    "InvalidInput",
    "NetworkError",
    "PolicyViolation",
    "PreflightError",
    "ReleaseError",
    "RemoteApiError",
    "VcsAccessError",
    "VcsWriteError",
    # model
    "Artifact",
    "PublishReport",
    "ReleaseRequest",
    "ReleaseResponse",
    "RepositoryState",
    "tag_for",
]
