"""Resolve the build artifact to upload.

The build itself is not ghrel's concern: by the time ``publish`` runs the
artifact must already exist on disk. This module picks which file to upload
and reads it exactly once.
"""

from __future__ import annotations

from pathlib import Path

from ghrel.core.config import ReleaseConfiguration
from ghrel.core.result import Err, Ok, Result
from ghrel.release.errors import ArtifactMissing
from ghrel.release.model import Artifact


def resolve_artifact(
    config: ReleaseConfiguration,
    root: Path,
    *,
    name: str | None = None,
    path: Path | None = None,
) -> Result[Artifact, ArtifactMissing]:
    """Select and read the artifact.

    Selection order:
    1. ``path`` given explicitly
    2. ``name`` looked up in ``config.artifacts``
    3. the only entry of ``config.artifacts``

    Relative paths are resolved against ``root``.
    """
    if path is not None:
        return _read(path.name, _absolute(path, root))

    configured = dict(config.artifacts)
    if name is not None:
        if name not in configured:
            known = ", ".join(sorted(configured)) or "none configured"
            return Err(
                ArtifactMissing(
                    message=f"unknown artifact '{name}'",
                    hint=f"Known artifacts: {known}",
                )
            )
        return _read(name, _absolute(configured[name], root))

    if not configured:
        return Err(
            ArtifactMissing(
                message="no artifact to upload",
                hint="Add an [artifacts] table to release.toml or pass --file",
            )
        )
    if len(configured) > 1:
        return Err(
            ArtifactMissing(
                message="several artifacts configured; pick one",
                hint=f"Pass --artifact with one of: {', '.join(sorted(configured))}",
            )
        )

    (only_name, only_path), = configured.items()
    return _read(only_name, _absolute(only_path, root))


def _absolute(path: Path, root: Path) -> Path:
    path = path.expanduser()
    return path if path.is_absolute() else root / path


def _read(name: str, path: Path) -> Result[Artifact, ArtifactMissing]:
    if not path.is_file():
        return Err(
            ArtifactMissing(
                message=f"artifact '{name}' not found",
                path=path,
                hint="Run the build before publishing",
            )
        )
    try:
        content = path.read_bytes()
    except OSError as e:
        return Err(ArtifactMissing(message=f"cannot read artifact '{name}': {e}", path=path))
    return Ok(Artifact(name=name, path=path, content=content))
