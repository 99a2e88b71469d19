"""Result types for project checks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class CheckStatus(Enum):
    OK = auto()
    """Check passed."""

    WARNING = auto()
    """Release can proceed, but something optional is off."""

    ERROR = auto()
    """Release is blocked until this is fixed."""


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Outcome of a single check.

    Attributes:
        name: What was checked (e.g. "project", "entitlements")
        status: Passed, warned or failed
        message: Human-readable result
        hint: Fix command or URL, shown for non-OK results
    """

    name: str
    status: CheckStatus
    message: str
    hint: str | None = None

    @property
    def is_error(self) -> bool:
        return self.status == CheckStatus.ERROR

    @classmethod
    def success(cls, name: str, message: str) -> CheckResult:
        return cls(name=name, status=CheckStatus.OK, message=message)

    @classmethod
    def warning(cls, name: str, message: str, hint: str | None = None) -> CheckResult:
        return cls(name=name, status=CheckStatus.WARNING, message=message, hint=hint)

    @classmethod
    def error(cls, name: str, message: str, hint: str | None = None) -> CheckResult:
        return cls(name=name, status=CheckStatus.ERROR, message=message, hint=hint)
