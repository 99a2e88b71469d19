"""Project detection.

Resolution order:
1. An explicit ``.xcodeproj`` path always wins.
2. ``Package.swift`` at the root selects a Swift Package executable.
3. Otherwise the first ``*.xcodeproj`` directly under the root, in
   directory-listing order.
"""

from __future__ import annotations

import os
from pathlib import Path

from appdrop.core.result import Err, Ok, Result
from appdrop.release.constants import SWIFT_PACKAGE_MANIFEST, XCODE_PROJECT_SUFFIX
from appdrop.release.errors import NotFoundError
from appdrop.release.model import ProjectDescriptor, ProjectType
from appdrop.release.swift_package import read_package_manifest


def resolve_project(
    root: Path,
    *,
    scheme: str | None = None,
    project_path: str | Path | None = None,
    executable: str | None = None,
) -> Result[ProjectDescriptor, NotFoundError]:
    """Resolve exactly one buildable project under ``root``.

    Args:
        root: Checkout directory.
        scheme: Scheme/name override (Xcode projects).
        project_path: Explicit ``.xcodeproj`` path, absolute or relative to root.
        executable: Executable name override (Swift packages).

    Returns:
        Ok(ProjectDescriptor), or Err(NotFoundError) when nothing is found or
        the explicit manifest does not exist.
    """
    root = Path(root).resolve()

    if project_path is not None and str(project_path).endswith(XCODE_PROJECT_SUFFIX):
        resolved = (root / project_path).resolve()
        if not resolved.exists():
            return Err(NotFoundError(message=f"Project not found at {resolved}", path=resolved))
        return Ok(_xcode_project(root, resolved, scheme))

    package_swift = root / SWIFT_PACKAGE_MANIFEST
    if package_swift.is_file():
        return Ok(resolve_swift_package(root, package_swift, executable=executable))

    try:
        entries = os.listdir(root)
    except OSError as e:
        return Err(NotFoundError(message=f"Cannot read project root: {e}", path=root))

    candidates = [entry for entry in entries if entry.endswith(XCODE_PROJECT_SUFFIX)]
    if not candidates:
        return Err(
            NotFoundError(
                message="No Package.swift or .xcodeproj found in repo root",
                path=root,
                hint="Run appdrop from the project root or pass --project",
            )
        )
    return Ok(_xcode_project(root, root / candidates[0], scheme))


def resolve_swift_package(
    root: Path,
    package_swift: Path,
    *,
    executable: str | None = None,
) -> ProjectDescriptor:
    manifest = read_package_manifest(package_swift)
    name = manifest.name or root.name
    return ProjectDescriptor(
        root=root,
        project_path=package_swift,
        scheme=name,
        name=name,
        type=ProjectType.SWIFT_CLI,
        executable_name=executable or manifest.executable_target or name,
    )


def _xcode_project(root: Path, project_path: Path, scheme: str | None) -> ProjectDescriptor:
    name = scheme or project_path.name.removesuffix(XCODE_PROJECT_SUFFIX)
    return ProjectDescriptor(
        root=root,
        project_path=project_path,
        scheme=name,
        name=name,
        type=ProjectType.XCODE_APP,
    )
