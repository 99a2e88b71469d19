"""Tests for pipeline resolution."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from appdrop.release.model import (
    DetectionOptions,
    PipelineDescriptor,
    ProjectDescriptor,
    ProjectType,
)
from appdrop.release.pipeline import resolve_pipeline

FEED_PLIST = "<plist><key>SUFeedURL</key><key>SUPublicEDKey</key></plist>"


def _app(
    root: Path,
    name: str = "MyApp",
    *,
    plist: str | None = FEED_PLIST,
    entitlements: bool = True,
) -> ProjectDescriptor:
    (root / f"{name}.xcodeproj").mkdir(parents=True)
    sources = root / name
    sources.mkdir()
    if plist is not None:
        (sources / "Info.plist").write_text(plist, encoding="utf-8")
    if entitlements:
        (sources / f"{name}.entitlements").write_text("<plist/>", encoding="utf-8")
    return ProjectDescriptor(
        root=root,
        project_path=root / f"{name}.xcodeproj",
        scheme=name,
        name=name,
        type=ProjectType.XCODE_APP,
    )


def _cli(root: Path, executable: str = "mycli") -> ProjectDescriptor:
    root.mkdir(parents=True, exist_ok=True)
    return ProjectDescriptor(
        root=root,
        project_path=root / "Package.swift",
        scheme="tools",
        name="tools",
        type=ProjectType.SWIFT_CLI,
        executable_name=executable,
    )


def _tools(directory: Path) -> Path:
    directory.mkdir(parents=True)
    (directory / "sign_update").write_text("", encoding="utf-8")
    (directory / "generate_appcast").write_text("", encoding="utf-8")
    return directory


def _resolve(project: ProjectDescriptor, tools: Path | None = None) -> PipelineDescriptor:
    return resolve_pipeline(
        project,
        DetectionOptions(update_tools_dir=tools),
        home=project.root.parent / "home",
        install_roots=(),
    )


def _app_flags(p: PipelineDescriptor) -> tuple[bool, ...]:
    return (p.build_app, p.sign_app, p.notarize_app, p.create_dmg, p.notarize_dmg)


def _cli_flags(p: PipelineDescriptor) -> tuple[bool, ...]:
    return (p.build_cli, p.sign_cli, p.create_zip, p.notarize_zip)


class TestXcodeApp:
    def test_update_feed_enabled_with_keys_and_tools(self, tmp_path: Path) -> None:
        project = _app(tmp_path / "app")
        tools = _tools(tmp_path / "tools")

        pipeline = _resolve(project, tools)

        assert pipeline.project_type == ProjectType.XCODE_APP
        assert _app_flags(pipeline) == (True,) * 5
        assert pipeline.sparkle_signing_enabled
        assert pipeline.sparkle_tools_available
        assert pipeline.sparkle
        assert pipeline.generate_appcast
        assert pipeline.update_toolchain is not None
        assert not pipeline.missing_entitlements
        assert not pipeline.missing_info_plist
        assert _cli_flags(pipeline) == (False,) * 4
        assert pipeline.architectures == ()

    def test_update_feed_disabled_when_tools_missing(self, tmp_path: Path) -> None:
        project = _app(tmp_path / "app")

        pipeline = _resolve(project, tmp_path / "missing-tools")

        assert pipeline.sparkle_signing_enabled
        assert not pipeline.sparkle_tools_available
        assert not pipeline.sparkle
        assert not pipeline.generate_appcast

    def test_removing_tools_only_changes_update_flags(self, tmp_path: Path) -> None:
        project = _app(tmp_path / "app")
        with_tools = _resolve(project, _tools(tmp_path / "tools"))
        without_tools = _resolve(project, tmp_path / "missing-tools")

        assert replace(
            with_tools,
            sparkle=False,
            generate_appcast=False,
            sparkle_tools_available=False,
            update_toolchain=None,
        ) == without_tools

    def test_update_feed_disabled_without_keys(self, tmp_path: Path) -> None:
        project = _app(tmp_path / "app", plist="<plist></plist>")

        pipeline = _resolve(project, _tools(tmp_path / "tools"))

        assert not pipeline.sparkle_signing_enabled
        assert pipeline.sparkle_tools_available
        assert not pipeline.sparkle
        assert not pipeline.generate_appcast

    def test_missing_info_plist_is_not_required(self, tmp_path: Path) -> None:
        project = _app(tmp_path / "app", plist=None)

        pipeline = _resolve(project)

        assert pipeline.info_plist_path is None
        assert not pipeline.sparkle_signing_enabled
        assert not pipeline.missing_info_plist

    def test_flags_missing_entitlements(self, tmp_path: Path) -> None:
        project = _app(tmp_path / "app", entitlements=False)

        pipeline = _resolve(project)

        assert pipeline.missing_entitlements
        assert pipeline.entitlements_path is None

    def test_records_artifact_paths(self, tmp_path: Path) -> None:
        project = _app(tmp_path / "app")

        pipeline = _resolve(project)

        assert pipeline.info_plist_path == tmp_path / "app" / "MyApp" / "Info.plist"
        assert pipeline.entitlements_path == tmp_path / "app" / "MyApp" / "MyApp.entitlements"


class TestSwiftCli:
    def test_cli_pipeline(self, tmp_path: Path) -> None:
        pipeline = _resolve(_cli(tmp_path / "tools-repo"))

        assert pipeline.project_type == ProjectType.SWIFT_CLI
        assert _cli_flags(pipeline) == (True,) * 4
        assert pipeline.architectures == ("arm64", "x86_64")
        assert pipeline.executable_name == "mycli"
        assert _app_flags(pipeline) == (False,) * 5
        assert not pipeline.sparkle
        assert not pipeline.missing_entitlements
        assert not pipeline.missing_info_plist

    def test_ignores_app_artifacts(self, tmp_path: Path) -> None:
        root = tmp_path / "tools-repo"
        root.mkdir()
        (root / "Info.plist").write_text(FEED_PLIST, encoding="utf-8")

        pipeline = _resolve(_cli(root), _tools(tmp_path / "tools"))

        assert pipeline.info_plist_path is None
        assert not pipeline.sparkle_signing_enabled
        assert pipeline.update_toolchain is None


class TestDirectories:
    def test_defaults(self, tmp_path: Path) -> None:
        pipeline = _resolve(_cli(tmp_path / "repo"))

        assert pipeline.output_dir == (tmp_path / "repo" / "build" / "release").resolve()
        assert pipeline.build_dir == (tmp_path / "repo" / "build").resolve()

    def test_relative_and_absolute_overrides(self, tmp_path: Path) -> None:
        project = _cli(tmp_path / "repo")
        absolute = tmp_path / "elsewhere"

        pipeline = resolve_pipeline(
            project,
            DetectionOptions(output_dir="dist", build_dir=str(absolute)),
            install_roots=(),
        )

        assert pipeline.output_dir == (tmp_path / "repo" / "dist").resolve()
        assert pipeline.build_dir == absolute.resolve()


def test_to_dict_uses_camel_case(tmp_path: Path) -> None:
    data = _resolve(_cli(tmp_path / "repo")).to_dict()

    assert data["projectType"] == "swift-cli"
    assert data["buildCli"] is True
    assert data["architectures"] == ["arm64", "x86_64"]
    assert data["updateToolchain"] is None
