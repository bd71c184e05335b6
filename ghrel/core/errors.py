"""Process exit codes.

Each release error maps to one of these codes so that build scripts and CI
jobs can tell a policy refusal from a network outage.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    The numeric values are part of the CLI contract and must stay stable:
    - 0: Success
    - 1: User error (policy gate refused, bad arguments)
    - 2: Configuration error (missing or invalid release.toml)
    - 3: Version control error (git unreadable, tag/branch creation failed)
    - 4: Network error (transport failure, unexpected API response)
    - 5: I/O error (artifact missing or unreadable)
    """

    OK = 0
    USER_ERROR = 1
    CONFIG_ERROR = 2
    VCS_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
