"""Process exit codes.

The release script contract only distinguishes success from failure: help,
dry-run and a completed release exit 0, every aborted stage exits 1. The
failing stage is identified by the printed message, not by the code.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the relkit CLI. Values are part of the CLI contract."""

    OK = 0
    FAILURE = 1

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
