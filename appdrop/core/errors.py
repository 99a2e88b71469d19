"""Process exit codes.

The numeric values are part of the CLI contract and must stay stable:
- 0: success
- 1: generic failure (external tool missing or failed)
- 2: usage error (no project, bad input, missing project configuration)
- 3: a required secret is not set
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    FAILURE = 1
    USAGE_ERROR = 2
    MISSING_ENV = 3
