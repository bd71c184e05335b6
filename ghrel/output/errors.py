"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ghrel.core.config import ConfigError
from ghrel.core.errors import ErrorCode
from ghrel.output.console import Style
from ghrel.release.errors import (
    ArtifactMissing,
    InvalidInput,
    NetworkError,
    PolicyViolation,
    ReleaseError,
    RemoteApiError,
    VcsAccessError,
    VcsWriteError,
)

if TYPE_CHECKING:
    from ghrel.output.console import ConsoleProtocol

__all__ = ["print_release_error", "release_error_exit_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    """Print a release error with its hint, if any."""
    match error:
        case PolicyViolation(reason=reason, message=message):
            console.error(f"{message} ({reason})")
        case VcsAccessError(command=command, message=message) | VcsWriteError(
            command=command, message=message
        ):
            console.error(message)
            console.print(f"git {command}", Style.DIM)
        case RemoteApiError(message=message, status=status):
            if status is not None:
                console.error(f"{message} (HTTP {status})")
            else:
                console.error(message)
        case NetworkError(url=url, message=message):
            console.error(f"network error: {message}")
            console.print(url, Style.DIM)
        case ArtifactMissing(message=message, path=path):
            console.error(message)
            if path is not None:
                console.print(str(path), Style.DIM)
        case InvalidInput(message=message):
            console.error(message)
        case ConfigError(message=message):
            console.error(message)

    hint = getattr(error, "hint", None)
    if hint:
        console.print(f"hint: {hint}", Style.DIM)


def release_error_exit_code(error: ReleaseError) -> int:
    """Get exit code for a release error."""
    match error:
        case PolicyViolation() | InvalidInput():
            return int(ErrorCode.USER_ERROR)
        case ConfigError():
            return int(ErrorCode.CONFIG_ERROR)
        case VcsAccessError() | VcsWriteError():
            return int(ErrorCode.VCS_ERROR)
        case RemoteApiError() | NetworkError():
            return int(ErrorCode.NETWORK_ERROR)
        case ArtifactMissing():
            return int(ErrorCode.IO_ERROR)
    return int(ErrorCode.USER_ERROR)
