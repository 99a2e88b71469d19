"""Pipeline resolution: from a detected project to capability flags.

The default Xcode plan always runs the full app pipeline (build, sign,
notarize, DMG, notarize DMG). The update feed is signed and an appcast
generated only when Info.plist declares the feed keys *and* the update
toolchain is installed. Swift packages get the CLI pipeline: a binary per
architecture, signed, zipped and notarized.

Resolution reads the filesystem but no environment variables; the caller
passes the toolchain directory and home directory explicitly.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from appdrop.release.artifacts import (
    entitlements_file_name,
    has_update_feed_keys,
    locate_entitlements,
    locate_info_plist,
    locate_update_toolchain,
)
from appdrop.release.constants import (
    CLI_ARCHITECTURES,
    DEFAULT_BUILD_DIR,
    DEFAULT_OUTPUT_DIR,
    TOOLCHAIN_INSTALL_ROOTS,
)
from appdrop.release.model import (
    DetectionOptions,
    PipelineDescriptor,
    ProjectDescriptor,
    ProjectType,
)


def resolve_pipeline(
    project: ProjectDescriptor,
    options: DetectionOptions | None = None,
    *,
    home: Path | None = None,
    install_roots: Sequence[Path] = TOOLCHAIN_INSTALL_ROOTS,
) -> PipelineDescriptor:
    """Resolve the release plan for ``project``.

    Args:
        project: Detected project.
        options: Output/build directories and explicit toolchain directory.
        home: Home directory whose ``.local/bin`` is searched for the toolchain.
        install_roots: Package-manager roots searched for versioned toolchains.
    """
    options = options or DetectionOptions()
    output_dir = (project.root / (options.output_dir or DEFAULT_OUTPUT_DIR)).resolve()
    build_dir = (project.root / (options.build_dir or DEFAULT_BUILD_DIR)).resolve()

    if project.type == ProjectType.SWIFT_CLI:
        return _cli_pipeline(project, output_dir, build_dir)

    info_plist = locate_info_plist(project.root)
    entitlements = locate_entitlements(project.root, entitlements_file_name(project.name))

    signing_enabled = has_update_feed_keys(info_plist) if info_plist is not None else False
    toolchain = locate_update_toolchain(
        options.update_tools_dir, home=home, install_roots=install_roots
    )
    sparkle = signing_enabled and toolchain is not None

    return PipelineDescriptor(
        project_type=ProjectType.XCODE_APP,
        output_dir=output_dir,
        build_dir=build_dir,
        build_app=True,
        sign_app=True,
        notarize_app=True,
        create_dmg=True,
        notarize_dmg=True,
        sparkle_signing_enabled=signing_enabled,
        sparkle_tools_available=toolchain is not None,
        sparkle=sparkle,
        generate_appcast=sparkle,
        entitlements_path=entitlements,
        info_plist_path=info_plist,
        missing_entitlements=entitlements is None,
        missing_info_plist=signing_enabled and info_plist is None,
        update_toolchain=toolchain,
    )


def _cli_pipeline(
    project: ProjectDescriptor, output_dir: Path, build_dir: Path
) -> PipelineDescriptor:
    # A CLI binary has no Info.plist or entitlements requirement, and the
    # update feed is an app-only stage.
    return PipelineDescriptor(
        project_type=ProjectType.SWIFT_CLI,
        output_dir=output_dir,
        build_dir=build_dir,
        build_cli=True,
        sign_cli=True,
        create_zip=True,
        notarize_zip=True,
        executable_name=project.executable_name,
        architectures=CLI_ARCHITECTURES,
    )
