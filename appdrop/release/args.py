"""Argument vectors for external release tools.

The returned lists exclude the program name; callers prepend
``xcodebuild``, ``swift`` or ``gh``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from appdrop.core.result import Err, Ok, Result
from appdrop.release.errors import ValidationError
from appdrop.release.model import ProjectDescriptor


def _empty_assets() -> list[str]:
    return []


@dataclass(frozen=True, slots=True)
class PublishOptions:
    title: str | None = None
    notes: str | None = None
    notes_file: str | None = None
    assets: Sequence[str] = field(default_factory=_empty_assets)
    draft: bool = False
    prerelease: bool = False


def archive_args(
    project: ProjectDescriptor,
    derived_data: Path,
    archive_path: Path,
    identity: str | None = None,
) -> list[str]:
    """``xcodebuild`` arguments that archive the project's scheme.

    Signing settings are only passed when an identity is given; otherwise
    the project's own signing configuration applies.
    """
    args = [
        "-project",
        str(project.project_path),
        "-scheme",
        project.scheme,
        "-configuration",
        "Release",
        "-derivedDataPath",
        str(derived_data),
        "-archivePath",
        str(archive_path),
        "archive",
    ]
    if identity:
        args.extend(["CODE_SIGN_STYLE=Manual", f"CODE_SIGN_IDENTITY={identity}"])
    return args


def export_args(archive_path: Path, export_dir: Path, export_options: Path) -> list[str]:
    return [
        "-exportArchive",
        "-archivePath",
        str(archive_path),
        "-exportPath",
        str(export_dir),
        "-exportOptionsPlist",
        str(export_options),
    ]


def swift_build_args(executable: str, arch: str) -> list[str]:
    return ["build", "-c", "release", "--arch", arch, "--product", executable]


def publish_args(tag: str, options: PublishOptions) -> Result[list[str], ValidationError]:
    """``gh`` arguments that create a release for ``tag``.

    The title defaults to the tag and the notes to ``Release <tag>`` only
    when they are not given; an empty string is passed through as is.
    Assets are appended last, in the given order.
    """
    if not options.assets:
        return Err(ValidationError(message="At least one --asset is required."))

    if options.notes and options.notes_file:
        return Err(ValidationError(message="Use either --notes or --notes-file, not both."))

    args = ["release", "create", tag, "--title", tag if options.title is None else options.title]
    if options.notes_file:
        args.extend(["--notes-file", options.notes_file])
    else:
        notes = f"Release {tag}" if options.notes is None else options.notes
        args.extend(["--notes", notes])

    if options.draft:
        args.append("--draft")
    if options.prerelease:
        args.append("--prerelease")

    args.extend(options.assets)
    return Ok(args)
