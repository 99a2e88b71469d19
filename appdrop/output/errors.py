"""Error presentation and exit-code mapping."""

from __future__ import annotations

from typing import TYPE_CHECKING

from appdrop.core.config import ConfigError
from appdrop.core.env import MissingEnvError
from appdrop.core.errors import ErrorCode
from appdrop.output.console import Style
from appdrop.platform.process import ProcessError
from appdrop.release.errors import (
    ConfigurationError,
    FixError,
    NotFoundError,
    ToolMissingError,
    ValidationError,
)

if TYPE_CHECKING:
    from appdrop.output.console import ConsoleProtocol

__all__ = ["AppdropError", "error_exit_code", "print_error"]

AppdropError = (
    NotFoundError
    | ConfigurationError
    | ValidationError
    | ToolMissingError
    | MissingEnvError
    | ConfigError
    | ProcessError
    | FixError
)


def print_error(error: AppdropError, console: ConsoleProtocol) -> None:
    match error:
        case ConfigurationError(missing=missing, hint=hint):
            console.error(error.message)
            for item in missing:
                console.print(f"  missing: {item}", Style.DIM)
            if hint:
                console.print(f"hint: {hint}", Style.DIM)
        case ProcessError(stderr=stderr):
            console.error(error.message)
            if stderr.strip():
                console.print(stderr.strip(), Style.DIM)
        case _:
            console.error(error.message)
            if error.hint:
                console.print(f"hint: {error.hint}", Style.DIM)


def error_exit_code(error: AppdropError) -> int:
    match error:
        case NotFoundError() | ConfigurationError() | ValidationError() | ConfigError():
            return int(ErrorCode.USAGE_ERROR)
        case MissingEnvError():
            return int(ErrorCode.MISSING_ENV)
        case ToolMissingError() | ProcessError() | FixError():
            return int(ErrorCode.FAILURE)
    return int(ErrorCode.FAILURE)
