"""Locating release artifacts in a checkout and on the machine.

Searches walk the tree depth-first in directory-listing order and return
the first match. The order is whatever the filesystem reports, so when a
checkout holds several candidates (e.g. one Info.plist per target) the
match is stable on a given machine but not across filesystems.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator, Sequence
from pathlib import Path

from appdrop.release.constants import (
    ENTITLEMENTS_SUFFIX,
    FEED_TOOL_NAME,
    IGNORED_DIR_NAMES,
    INFO_PLIST_NAME,
    SIGN_TOOL_NAME,
    TOOLCHAIN_INSTALL_ROOTS,
    UPDATE_FEED_KEYS,
    USER_TOOLS_SUBDIR,
)
from appdrop.release.model import UpdateToolchain

__all__ = [
    "entitlements_file_name",
    "has_update_feed_keys",
    "locate_entitlements",
    "locate_info_plist",
    "locate_update_toolchain",
    "toolchain_candidates",
    "walk_files",
]


def walk_files(root: Path, predicate: Callable[[str], bool]) -> Iterator[Path]:
    """Yield files under ``root`` whose full path satisfies ``predicate``.

    Ignored directories are skipped by name; symlinked directories are not
    followed.
    """
    try:
        with os.scandir(root) as it:
            entries = list(it)
    except OSError:
        return

    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            if entry.name in IGNORED_DIR_NAMES:
                continue
            yield from walk_files(Path(entry.path), predicate)
        elif entry.is_file() and predicate(entry.path):
            yield Path(entry.path)


def _first(root: Path, suffix: str) -> Path | None:
    return next(walk_files(root, lambda p: p.endswith(suffix)), None)


def locate_info_plist(root: Path) -> Path | None:
    return _first(root, INFO_PLIST_NAME)


def entitlements_file_name(project_name: str) -> str:
    return f"{project_name}{ENTITLEMENTS_SUFFIX}"


def locate_entitlements(root: Path, file_name: str) -> Path | None:
    return _first(root, file_name)


def has_update_feed_keys(info_plist: Path) -> bool:
    """Return True if the raw manifest text contains every update-feed key.

    This is a substring check, not a plist parse: keys inside comments or
    string values count as present.
    """
    try:
        content = info_plist.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return False
    return all(key in content for key in UPDATE_FEED_KEYS)


def toolchain_candidates(
    explicit_dir: Path | None = None,
    *,
    home: Path | None = None,
    install_roots: Sequence[Path] = TOOLCHAIN_INSTALL_ROOTS,
) -> list[Path]:
    """Directories searched for the update toolchain, in priority order.

    An explicit directory is the only candidate. Otherwise the user-local
    tool directory comes first, then ``<root>/<version>/bin`` for each
    existing install root, greatest version name first.
    """
    if explicit_dir is not None:
        return [explicit_dir]

    candidates: list[Path] = []
    if home is not None:
        candidates.append(home / USER_TOOLS_SUBDIR)

    for base in install_roots:
        if not base.is_dir():
            continue
        try:
            versions = sorted(os.listdir(base), reverse=True)
        except OSError:
            continue
        candidates.extend(base / version / "bin" for version in versions)
    return candidates


def locate_update_toolchain(
    explicit_dir: Path | None = None,
    *,
    home: Path | None = None,
    install_roots: Sequence[Path] = TOOLCHAIN_INSTALL_ROOTS,
) -> UpdateToolchain | None:
    """Find a directory holding both the signing and feed-generator tools."""
    for candidate in toolchain_candidates(explicit_dir, home=home, install_roots=install_roots):
        sign_tool = candidate / SIGN_TOOL_NAME
        feed_tool = candidate / FEED_TOOL_NAME
        if sign_tool.is_file() and feed_tool.is_file():
            return UpdateToolchain(sign_tool=sign_tool.absolute(), feed_tool=feed_tool.absolute())
    return None
