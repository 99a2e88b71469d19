"""Doctor command - check project configuration for issues."""

from __future__ import annotations

from pathlib import Path

import typer

from appdrop.cli.commands._helpers import fail
from appdrop.cli.context import CLIContext, build_context, global_options, resolve_update_tools_dir
from appdrop.core.errors import ErrorCode
from appdrop.core.result import Err
from appdrop.output.console import Style
from appdrop.services.checks import CheckResult, CheckStatus
from appdrop.services.doctor import DoctorService


def doctor(
    ctx: typer.Context,
    scheme: str | None = typer.Option(None, "--scheme", help="Override scheme"),
    project: str | None = typer.Option(None, "--project", help="Override xcodeproj"),
    executable: str | None = typer.Option(
        None, "--executable", help="Override CLI executable name (Swift Package only)"
    ),
    sparkle_bin: Path | None = typer.Option(
        None, "--sparkle-bin", help="Directory with sign_update and generate_appcast"
    ),
    fix: bool = typer.Option(False, "--fix", help="Apply project fixes"),
) -> None:
    """Check project configuration for issues."""
    cli = build_context(global_options(ctx))
    config = cli.config

    service = DoctorService(
        root=cli.root,
        update_tools_dir=resolve_update_tools_dir(sparkle_bin, root=cli.root, config=config),
        home=cli.home,
    )
    run_kwargs = {
        "scheme": scheme or config.project.scheme,
        "project": project or config.project.project,
        "executable": executable or config.project.executable,
    }
    report = service.run(**run_kwargs)

    if fix and report.project is not None:
        fixed = service.fix(report.project)
        if isinstance(fixed, Err):
            fail(fixed.error, cli)
        for path in fixed.value:
            cli.console.success(f"created {path}")
        if fixed.value:
            report = service.run(**run_kwargs)

    cli.console.print(f"root: {cli.root}", Style.DIM)
    _print_results(cli, report.results)

    if report.has_errors():
        raise typer.Exit(code=int(ErrorCode.USAGE_ERROR))


def _print_results(cli: CLIContext, results: list[CheckResult]) -> None:
    console = cli.console
    console.header("Project")
    for r in results:
        console.print(f"{r.name}: {r.message}", _style_for_status(r.status))
        if r.hint and r.status != CheckStatus.OK:
            console.print(f"hint: {r.hint}", Style.DIM)


def _style_for_status(status: CheckStatus) -> Style:
    if status == CheckStatus.OK:
        return Style.SUCCESS
    if status == CheckStatus.WARNING:
        return Style.WARNING
    return Style.ERROR
