"""Process exit codes.

The numeric values are part of the command-line contract and must stay
stable:

- 0: every repository synchronized
- 1: user error (missing organization, missing token, bad option)
- 3: the run completed but one or more repositories failed
- 4: the repository listing could not be fetched
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the orgsync command."""

    OK = 0
    USER_ERROR = 1
    SYNC_FAILED = 3
    NETWORK_ERROR = 4

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK
