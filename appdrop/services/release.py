"""Release planning service.

Ties detection, resolution and overrides together into a ``ReleasePlan``,
then checks that the plan can run: required artifacts present and every
secret the plan needs available in the environment.
"""

from __future__ import annotations

import shlex
from collections.abc import MutableMapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from appdrop.core.env import MissingEnvError, load_env
from appdrop.core.result import Err, Ok, Result
from appdrop.output.console import ConsoleProtocol
from appdrop.release.args import archive_args, export_args, swift_build_args
from appdrop.release.constants import SIGNING_IDENTITY_VAR, TOOLCHAIN_INSTALL_ROOTS
from appdrop.release.errors import ConfigurationError, NotFoundError
from appdrop.release.model import (
    DetectionOptions,
    PipelineDescriptor,
    ProjectDescriptor,
    ProjectType,
)
from appdrop.release.overrides import apply_overrides
from appdrop.release.pipeline import resolve_pipeline
from appdrop.release.project import resolve_project
from appdrop.release.requirements import required_secrets, validate_pipeline


@dataclass(frozen=True, slots=True)
class ReleaseRequest:
    root: Path
    scheme: str | None = None
    project: str | None = None
    executable: str | None = None
    output_dir: str | None = None
    build_dir: str | None = None
    update_tools_dir: Path | None = None
    no_dmg: bool = False
    no_sparkle: bool = False
    no_notarize: bool = False


@dataclass(frozen=True, slots=True)
class PlannedStep:
    tool: str
    args: tuple[str, ...]

    @property
    def command_line(self) -> str:
        return shlex.join([self.tool, *self.args])


@dataclass(frozen=True, slots=True)
class ReleasePlan:
    project: ProjectDescriptor
    pipeline: PipelineDescriptor

    def to_dict(self) -> dict[str, object]:
        return {"project": self.project.to_dict(), "pipeline": self.pipeline.to_dict()}


def enabled_stages(pipeline: PipelineDescriptor) -> list[str]:
    """Human-readable names of the stages a plan runs, in execution order."""
    flags = (
        ("build app", pipeline.build_app),
        ("sign app", pipeline.sign_app),
        ("notarize app", pipeline.notarize_app),
        ("create dmg", pipeline.create_dmg),
        ("notarize dmg", pipeline.notarize_dmg),
        ("sign update", pipeline.sparkle),
        ("generate appcast", pipeline.generate_appcast),
        ("build cli", pipeline.build_cli),
        ("sign cli", pipeline.sign_cli),
        ("create zip", pipeline.create_zip),
        ("notarize zip", pipeline.notarize_zip),
    )
    return [name for name, enabled in flags if enabled]


def planned_steps(plan: ReleasePlan, *, identity: str | None = None) -> list[PlannedStep]:
    """Tool invocations for the build stages of ``plan``."""
    project = plan.project
    pipeline = plan.pipeline
    steps: list[PlannedStep] = []

    if project.type == ProjectType.XCODE_APP and pipeline.build_app:
        archive = pipeline.build_dir / f"{project.name}.xcarchive"
        steps.append(
            PlannedStep(
                tool="xcodebuild",
                args=tuple(
                    archive_args(project, pipeline.build_dir / "DerivedData", archive, identity)
                ),
            )
        )
        steps.append(
            PlannedStep(
                tool="xcodebuild",
                args=tuple(
                    export_args(
                        archive,
                        pipeline.build_dir / "export",
                        pipeline.build_dir / "ExportOptions.plist",
                    )
                ),
            )
        )

    if project.type == ProjectType.SWIFT_CLI and pipeline.build_cli:
        executable = pipeline.executable_name or project.name
        for arch in pipeline.architectures:
            steps.append(PlannedStep(tool="swift", args=tuple(swift_build_args(executable, arch))))

    return steps


class ReleaseService:
    """Plan and prepare a release for one checkout."""

    def __init__(
        self,
        *,
        console: ConsoleProtocol,
        home: Path | None = None,
        install_roots: Sequence[Path] = TOOLCHAIN_INSTALL_ROOTS,
    ) -> None:
        self._console = console
        self._home = home
        self._install_roots = tuple(install_roots)

    def plan(self, request: ReleaseRequest) -> Result[ReleasePlan, NotFoundError]:
        project_r = resolve_project(
            request.root,
            scheme=request.scheme,
            project_path=request.project,
            executable=request.executable,
        )
        if isinstance(project_r, Err):
            return project_r
        project = project_r.value
        self._console.debug(f"detected {project.type} project: {project.project_path}")

        pipeline = resolve_pipeline(
            project,
            DetectionOptions(
                output_dir=request.output_dir,
                build_dir=request.build_dir,
                update_tools_dir=request.update_tools_dir,
            ),
            home=self._home,
            install_roots=self._install_roots,
        )
        if pipeline.update_toolchain is not None:
            self._console.debug(f"update toolchain: {pipeline.update_toolchain.sign_tool.parent}")
        elif pipeline.sparkle_signing_enabled and not request.no_sparkle:
            self._console.warning(
                "Info.plist declares an update feed but sign_update/generate_appcast "
                "were not found; skipping update signing"
            )

        pipeline = apply_overrides(
            pipeline,
            no_dmg=request.no_dmg,
            no_sparkle=request.no_sparkle,
            no_notarize=request.no_notarize,
        )
        return Ok(ReleasePlan(project=project, pipeline=pipeline))

    def prepare(
        self,
        plan: ReleasePlan,
        *,
        environ: MutableMapping[str, str] | None = None,
        dotenv_path: Path | None = None,
    ) -> Result[dict[str, str], ConfigurationError | MissingEnvError]:
        """Validate ``plan`` and load the secrets it needs.

        Returns:
            Ok(name -> value) for every required secret.
        """
        valid = validate_pipeline(plan.pipeline)
        if isinstance(valid, Err):
            return valid

        names = required_secrets(plan.pipeline)
        self._console.debug(f"required secrets: {', '.join(sorted(names))}")
        return load_env(names, environ=environ, dotenv_path=dotenv_path)

    def steps_for(self, plan: ReleasePlan, secrets: dict[str, str]) -> list[PlannedStep]:
        return planned_steps(plan, identity=secrets.get(SIGNING_IDENTITY_VAR))
