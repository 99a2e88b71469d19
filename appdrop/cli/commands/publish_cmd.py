"""Publish command - create a GitHub release with assets."""

from __future__ import annotations

import typer

from appdrop.cli.commands._helpers import fail
from appdrop.cli.context import build_context, global_options
from appdrop.core.result import Err
from appdrop.release.args import PublishOptions
from appdrop.services.publish import PublishService


def publish(
    ctx: typer.Context,
    tag: str | None = typer.Option(None, "--tag", help="Release tag"),
    title: str | None = typer.Option(None, "--title", help="Release title"),
    notes: str | None = typer.Option(None, "--notes", help="Release notes"),
    notes_file: str | None = typer.Option(None, "--notes-file", help="Release notes file"),
    asset: list[str] = typer.Option(
        [], "--asset", help="Release asset (repeatable)", show_default=False
    ),
    draft: bool = typer.Option(False, "--draft", help="Create a draft release"),
    prerelease: bool = typer.Option(False, "--prerelease", help="Mark release as prerelease"),
    dry_run: bool = typer.Option(False, "-n", "--dry-run", help="Print the gh command only"),
) -> None:
    """Create a GitHub release with assets."""
    cli = build_context(global_options(ctx))

    service = PublishService(root=cli.root, console=cli.console)
    result = service.publish(
        tag=tag,
        options=PublishOptions(
            title=title,
            notes=notes,
            notes_file=notes_file,
            assets=asset,
            draft=draft,
            prerelease=prerelease,
        ),
        dry_run=dry_run,
    )
    if isinstance(result, Err):
        fail(result.error, cli)
