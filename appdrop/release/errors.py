"""Error payloads for release planning.

Every payload exposes ``message`` and ``hint`` so the output layer can
render any of them the same way.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class NotFoundError:
    """No recognizable project, or an explicit manifest path is absent."""

    message: str
    path: Path | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class ConfigurationError:
    """Artifacts the plan requires are still missing after overrides."""

    message: str
    missing: tuple[str, ...] = ()
    hint: str | None = "Run `appdrop doctor --fix`."


@dataclass(frozen=True, slots=True)
class ValidationError:
    """Malformed input to an argument builder or a publish option."""

    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class ToolMissingError:
    """A required external binary is not on PATH."""

    tool: str
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class FixError:
    """A project file could not be written by `doctor --fix`."""

    message: str
    hint: str | None = None


PlanError = NotFoundError | ConfigurationError | ValidationError
