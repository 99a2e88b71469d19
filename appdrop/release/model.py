from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path


class ProjectType(StrEnum):
    XCODE_APP = "xcode-app"
    SWIFT_CLI = "swift-cli"


@dataclass(frozen=True, slots=True)
class ProjectDescriptor:
    """The buildable unit found in a checkout.

    Resolved once per run and never mutated afterwards.
    """

    root: Path
    project_path: Path
    scheme: str
    name: str
    type: ProjectType
    # Only set for swift-cli projects.
    executable_name: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "root": str(self.root),
            "projectPath": str(self.project_path),
            "scheme": self.scheme,
            "name": self.name,
            "type": str(self.type),
            "executableName": self.executable_name,
        }


@dataclass(frozen=True, slots=True)
class UpdateToolchain:
    sign_tool: Path
    feed_tool: Path


@dataclass(frozen=True, slots=True)
class DetectionOptions:
    """Inputs to pipeline resolution besides the project itself.

    Relative directories are resolved against the project root.
    """

    output_dir: str | Path | None = None
    build_dir: str | Path | None = None
    update_tools_dir: Path | None = None


@dataclass(frozen=True, slots=True)
class PipelineDescriptor:
    """The resolved release plan as a set of capability flags.

    Only the group matching ``project_type`` may have true flags; the other
    group's booleans are all false.
    """

    project_type: ProjectType
    output_dir: Path
    build_dir: Path

    # Xcode app group
    build_app: bool = False
    sign_app: bool = False
    notarize_app: bool = False
    create_dmg: bool = False
    notarize_dmg: bool = False
    sparkle_signing_enabled: bool = False
    sparkle_tools_available: bool = False
    sparkle: bool = False
    generate_appcast: bool = False
    entitlements_path: Path | None = None
    info_plist_path: Path | None = None
    missing_entitlements: bool = False
    missing_info_plist: bool = False

    # Swift CLI group
    build_cli: bool = False
    sign_cli: bool = False
    create_zip: bool = False
    notarize_zip: bool = False
    executable_name: str | None = None
    architectures: tuple[str, ...] = ()

    update_toolchain: UpdateToolchain | None = None

    @property
    def notarizes(self) -> bool:
        return self.notarize_app or self.notarize_dmg or self.notarize_zip

    def to_dict(self) -> dict[str, object]:
        toolchain: dict[str, str] | None = None
        if self.update_toolchain is not None:
            toolchain = {
                "signTool": str(self.update_toolchain.sign_tool),
                "feedTool": str(self.update_toolchain.feed_tool),
            }
        return {
            "projectType": str(self.project_type),
            "outputDir": str(self.output_dir),
            "buildDir": str(self.build_dir),
            "buildApp": self.build_app,
            "signApp": self.sign_app,
            "notarizeApp": self.notarize_app,
            "createDmg": self.create_dmg,
            "notarizeDmg": self.notarize_dmg,
            "sparkleSigningEnabled": self.sparkle_signing_enabled,
            "sparkleToolsAvailable": self.sparkle_tools_available,
            "sparkle": self.sparkle,
            "generateAppcast": self.generate_appcast,
            "entitlementsPath": _opt_str(self.entitlements_path),
            "infoPlistPath": _opt_str(self.info_plist_path),
            "missingEntitlements": self.missing_entitlements,
            "missingInfoPlist": self.missing_info_plist,
            "buildCli": self.build_cli,
            "signCli": self.sign_cli,
            "createZip": self.create_zip,
            "notarizeZip": self.notarize_zip,
            "executableName": self.executable_name,
            "architectures": list(self.architectures),
            "updateToolchain": toolchain,
        }


def _opt_str(path: Path | None) -> str | None:
    return None if path is None else str(path)
