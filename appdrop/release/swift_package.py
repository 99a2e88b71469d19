"""Swift Package manifest helpers.

``read_package_manifest`` scrapes ``Package.swift`` textually: the first
``name:`` literal is taken as the package name and the first
``.executableTarget(name:`` literal as the executable. A match inside a
comment or an unrelated string is picked up too. ``describe_package`` asks
SwiftPM for the structured description instead; ``doctor`` uses it to flag
manifests where the two disagree.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path

from appdrop.core.result import Err, Ok, Result
from appdrop.core.structured import as_str_dict, get_list, get_str
from appdrop.platform.process import ProcessError
from appdrop.platform.process import run as run_process

_NAME_RE = re.compile(r"""name:\s*["']([^"']+)["']""")
_EXECUTABLE_TARGET_RE = re.compile(r"""\.executableTarget\s*\(\s*name:\s*["']([^"']+)["']""")

_DESCRIBE_TIMEOUT_SECONDS = 120.0


@dataclass(frozen=True, slots=True)
class PackageManifest:
    name: str | None
    executable_target: str | None


@dataclass(frozen=True, slots=True)
class PackageDescription:
    name: str
    executable_targets: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ManifestError:
    message: str
    hint: str | None = None


def parse_package_manifest(content: str) -> PackageManifest:
    name = _NAME_RE.search(content)
    executable = _EXECUTABLE_TARGET_RE.search(content)
    return PackageManifest(
        name=name.group(1) if name else None,
        executable_target=executable.group(1) if executable else None,
    )


def read_package_manifest(path: Path) -> PackageManifest:
    return parse_package_manifest(path.read_text(encoding="utf-8", errors="replace"))


def describe_package(root: Path) -> Result[PackageDescription, ProcessError | ManifestError]:
    """Describe the package at ``root`` with ``swift package describe``.

    Returns:
        Ok(PackageDescription) with every executable target in manifest
        order, Err(ProcessError) when swift fails, Err(ManifestError) when
        its output is not the expected JSON.
    """
    result = run_process(
        ["swift", "package", "describe", "--type", "json"],
        cwd=root,
        timeout=_DESCRIBE_TIMEOUT_SECONDS,
    )
    if isinstance(result, Err):
        return result

    try:
        obj: object = json.loads(result.value)
    except json.JSONDecodeError as e:
        return Err(ManifestError(message=f"swift package describe returned invalid JSON: {e}"))

    data = as_str_dict(obj)
    if data is None:
        return Err(ManifestError(message="unexpected payload from swift package describe"))

    name = get_str(data, "name")
    if name is None:
        return Err(ManifestError(message="missing package name in swift package describe"))

    executables: list[str] = []
    for item in get_list(data, "targets") or []:
        target = as_str_dict(item)
        if target is None:
            continue
        target_name = get_str(target, "name")
        if target_name is not None and get_str(target, "type") == "executable":
            executables.append(target_name)

    return Ok(PackageDescription(name=name, executable_targets=tuple(executables)))


def swift_build_path(root: Path, arch: str) -> Path:
    """Release output directory of ``swift build --arch <arch>``."""
    return root / ".build" / f"{arch}-apple-macosx" / "release"


def built_binary_path(root: Path, arch: str, executable: str) -> Path:
    return swift_build_path(root, arch) / executable
