"""Project configuration checks (``appdrop doctor``)."""

from __future__ import annotations

import plistlib
from collections.abc import MutableMapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from appdrop.core.env import DOTENV_FILE_NAME, load_env
from appdrop.core.result import Err, Ok, Result
from appdrop.platform.files import atomic_write_text
from appdrop.release.artifacts import (
    entitlements_file_name,
    has_update_feed_keys,
    locate_entitlements,
    locate_info_plist,
    locate_update_toolchain,
)
from appdrop.release.constants import REQUIRED_ENV_VARS, TOOLCHAIN_INSTALL_ROOTS
from appdrop.release.errors import FixError, NotFoundError
from appdrop.release.model import ProjectDescriptor, ProjectType
from appdrop.release.project import resolve_project
from appdrop.release.swift_package import describe_package
from appdrop.services.checks import CheckResult

_FIX_HINT = "Run: appdrop doctor --fix"
_TOOLCHAIN_HINT = "Install Sparkle: brew install --cask sparkle (or set SPARKLE_BIN)"

# Hardened runtime is enabled by the build settings; the file only needs to
# exist for signing. Keys here are the usual Developer ID defaults.
DEFAULT_ENTITLEMENTS: dict[str, bool] = {
    "com.apple.security.cs.allow-jit": False,
    "com.apple.security.cs.allow-unsigned-executable-memory": False,
    "com.apple.security.cs.disable-library-validation": False,
}


def _empty_results() -> list[CheckResult]:
    return []


@dataclass(frozen=True, slots=True)
class DoctorReport:
    project: ProjectDescriptor | None
    results: list[CheckResult] = field(default_factory=_empty_results)

    def has_errors(self) -> bool:
        return any(r.is_error for r in self.results)


class DoctorService:
    def __init__(
        self,
        *,
        root: Path,
        update_tools_dir: Path | None = None,
        home: Path | None = None,
        install_roots: Sequence[Path] = TOOLCHAIN_INSTALL_ROOTS,
        environ: MutableMapping[str, str] | None = None,
    ) -> None:
        self._root = root
        self._update_tools_dir = update_tools_dir
        self._home = home
        self._install_roots = tuple(install_roots)
        self._environ = environ

    def run(
        self,
        *,
        scheme: str | None = None,
        project: str | None = None,
        executable: str | None = None,
    ) -> DoctorReport:
        project_r = resolve_project(
            self._root, scheme=scheme, project_path=project, executable=executable
        )
        if isinstance(project_r, Err):
            return DoctorReport(project=None, results=[_project_error(project_r.error)])

        descriptor = project_r.value
        results = [
            CheckResult.success("project", f"{descriptor.type}: {descriptor.project_path}")
        ]
        if descriptor.type == ProjectType.XCODE_APP:
            results.extend(self._check_xcode_app(descriptor))
        else:
            results.extend(self._check_swift_package(descriptor))
        results.append(self._check_secrets())
        return DoctorReport(project=descriptor, results=results)

    def fix(self, project: ProjectDescriptor) -> Result[list[Path], FixError]:
        """Create missing files the release requires.

        Returns:
            Ok(paths written), empty when nothing needed fixing.
        """
        if project.type != ProjectType.XCODE_APP:
            return Ok([])

        file_name = entitlements_file_name(project.name)
        if locate_entitlements(project.root, file_name) is not None:
            return Ok([])

        # Xcode keeps target files in a folder named after the target.
        target_dir = project.root / project.name
        path = (target_dir if target_dir.is_dir() else project.root) / file_name
        content = plistlib.dumps(DEFAULT_ENTITLEMENTS, sort_keys=True).decode("utf-8")
        try:
            atomic_write_text(path, content)
        except OSError as e:
            return Err(FixError(message=f"failed to write {path}: {e}", hint=str(path.parent)))
        return Ok([path])

    def _check_xcode_app(self, project: ProjectDescriptor) -> list[CheckResult]:
        results: list[CheckResult] = []

        file_name = entitlements_file_name(project.name)
        entitlements = locate_entitlements(project.root, file_name)
        if entitlements is None:
            results.append(CheckResult.error("entitlements", f"{file_name}: missing", _FIX_HINT))
        else:
            results.append(CheckResult.success("entitlements", str(entitlements)))

        info_plist = locate_info_plist(project.root)
        if info_plist is None:
            results.append(
                CheckResult.warning(
                    "Info.plist",
                    "not found (update feed disabled)",
                    "Xcode may generate it; add SUFeedURL and SUPublicEDKey to enable updates",
                )
            )
            return results
        results.append(CheckResult.success("Info.plist", str(info_plist)))

        if not has_update_feed_keys(info_plist):
            results.append(CheckResult.success("update feed", "not configured"))
            return results

        toolchain = locate_update_toolchain(
            self._update_tools_dir, home=self._home, install_roots=self._install_roots
        )
        if toolchain is None:
            results.append(
                CheckResult.warning(
                    "update feed",
                    "enabled, but sign_update/generate_appcast not found",
                    _TOOLCHAIN_HINT,
                )
            )
        else:
            results.append(
                CheckResult.success("update feed", f"enabled ({toolchain.sign_tool.parent})")
            )
        return results

    def _check_swift_package(self, project: ProjectDescriptor) -> list[CheckResult]:
        executable = project.executable_name or project.name
        results = [CheckResult.success("executable", executable)]

        described = describe_package(project.root)
        if isinstance(described, Err):
            results.append(
                CheckResult.warning(
                    "manifest",
                    "could not cross-check Package.swift with swift package describe",
                    described.error.hint,
                )
            )
            return results

        description = described.value
        if executable not in description.executable_targets:
            available = ", ".join(description.executable_targets) or "none"
            results.append(
                CheckResult.warning(
                    "manifest",
                    f"executable '{executable}' is not an executable target (found: {available})",
                    "Pass --executable or set [project].executable in appdrop.toml",
                )
            )
        else:
            results.append(CheckResult.success("manifest", f"package {description.name}"))
        return results

    def _check_secrets(self) -> CheckResult:
        loaded = load_env(
            REQUIRED_ENV_VARS,
            environ=self._environ,
            dotenv_path=self._root / DOTENV_FILE_NAME,
        )
        if isinstance(loaded, Err):
            return CheckResult.warning(
                "secrets",
                f"not set: {', '.join(loaded.error.names)}",
                loaded.error.hint,
            )
        return CheckResult.success("secrets", "all set")


def _project_error(error: NotFoundError) -> CheckResult:
    return CheckResult.error("project", error.message, error.hint)
