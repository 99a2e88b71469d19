from __future__ import annotations

from pathlib import Path

import typer

from appdrop import __version__
from appdrop.cli.commands.doctor_cmd import doctor
from appdrop.cli.commands.publish_cmd import publish
from appdrop.cli.commands.release_cmd import release
from appdrop.cli.context import GlobalOptions
from appdrop.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="appdrop - zero-config macOS release CLI",
)


app.command()(release)
app.command()(publish)
app.command()(doctor)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Show version and exit.",
    ),
    root: Path | None = typer.Option(
        None,
        "--root",
        help="Project root (defaults to the current directory)",
    ),
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Errors only"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose output"),
) -> None:
    del version

    if root is not None and not root.expanduser().is_dir():
        typer.echo(f"error: --root '{root}' is not a directory", err=True)
        raise typer.Exit(code=int(ErrorCode.USAGE_ERROR))

    ctx.obj = GlobalOptions(root=root, quiet=quiet, verbose=verbose)


def main() -> None:
    app()
