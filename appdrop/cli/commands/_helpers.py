"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer

from appdrop.output.errors import AppdropError, error_exit_code, print_error

if TYPE_CHECKING:
    from appdrop.cli.context import CLIContext


def fail(error: AppdropError, ctx: CLIContext) -> NoReturn:
    """Print ``error`` and exit with its mapped code."""
    print_error(error, ctx.console)
    raise typer.Exit(code=error_exit_code(error))
