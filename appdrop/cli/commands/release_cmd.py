"""Release command - detect, plan and prepare a macOS release."""

from __future__ import annotations

import json
from pathlib import Path

import typer

from appdrop.cli.commands._helpers import fail
from appdrop.cli.context import CLIContext, build_context, global_options, resolve_update_tools_dir
from appdrop.core.result import Err
from appdrop.output.console import Style
from appdrop.services.release import (
    PlannedStep,
    ReleasePlan,
    ReleaseRequest,
    ReleaseService,
    enabled_stages,
    planned_steps,
)


def release(
    ctx: typer.Context,
    scheme: str | None = typer.Option(None, "--scheme", help="Override scheme"),
    project: str | None = typer.Option(None, "--project", help="Override xcodeproj"),
    executable: str | None = typer.Option(
        None, "--executable", help="Override CLI executable name (Swift Package only)"
    ),
    output: str | None = typer.Option(None, "--output", help="Output directory"),
    sparkle_bin: Path | None = typer.Option(
        None, "--sparkle-bin", help="Directory with sign_update and generate_appcast"
    ),
    no_dmg: bool = typer.Option(False, "--no-dmg", help="Skip DMG creation"),
    no_notarize: bool = typer.Option(False, "--no-notarize", help="Skip notarization"),
    no_sparkle: bool = typer.Option(False, "--no-sparkle", help="Skip Sparkle signing + appcast"),
    dry_run: bool = typer.Option(False, "-n", "--dry-run", help="Print pipeline only"),
    json_output: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Build, sign, notarize, and package your macOS app or CLI."""
    cli = build_context(global_options(ctx), json_output=json_output)
    config = cli.config

    request = ReleaseRequest(
        root=cli.root,
        scheme=scheme or config.project.scheme,
        project=project or config.project.project,
        executable=executable or config.project.executable,
        output_dir=output or config.release.output_dir,
        build_dir=config.release.build_dir,
        update_tools_dir=resolve_update_tools_dir(sparkle_bin, root=cli.root, config=config),
        no_dmg=no_dmg,
        no_sparkle=no_sparkle,
        no_notarize=no_notarize,
    )
    service = ReleaseService(console=cli.console, home=cli.home)

    plan_r = service.plan(request)
    if isinstance(plan_r, Err):
        fail(plan_r.error, cli)
    plan = plan_r.value

    if json_output:
        typer.echo(json.dumps(plan.to_dict(), indent=2))
    else:
        _print_plan(cli, plan)

    if dry_run:
        _print_steps(cli, planned_steps(plan))
        return

    prepared = service.prepare(plan, dotenv_path=cli.root / ".env")
    if isinstance(prepared, Err):
        fail(prepared.error, cli)

    _print_steps(cli, service.steps_for(plan, prepared.value))
    cli.console.info("Release pipeline execution not implemented yet.")


def _print_plan(cli: CLIContext, plan: ReleasePlan) -> None:
    console = cli.console
    pipeline = plan.pipeline
    console.print(f"Project: {plan.project.project_path}")
    console.print(f"Scheme: {plan.project.scheme}")
    if plan.project.executable_name:
        console.print(f"Executable: {plan.project.executable_name}")
    console.print(
        f"Pipeline: build={_flag(pipeline.build_app or pipeline.build_cli)} "
        f"dmg={_flag(pipeline.create_dmg)} zip={_flag(pipeline.create_zip)} "
        f"sparkle={_flag(pipeline.sparkle)}"
    )
    console.print(f"Stages: {', '.join(enabled_stages(pipeline)) or 'none'}", Style.DIM)
    console.print(f"Output: {pipeline.output_dir}", Style.DIM)
    if pipeline.missing_entitlements:
        console.warning("entitlements file not found")
    if pipeline.missing_info_plist:
        console.warning("Info.plist not found")


def _print_steps(cli: CLIContext, steps: list[PlannedStep]) -> None:
    if not steps:
        return
    cli.console.header("Steps")
    for step in steps:
        cli.console.print(step.command_line, Style.DIM)


def _flag(value: bool) -> str:
    return "true" if value else "false"
