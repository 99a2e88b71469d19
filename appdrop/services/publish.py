"""GitHub release publishing through the ``gh`` CLI."""

from __future__ import annotations

import os
import shutil
from collections.abc import Mapping, Sequence
from dataclasses import replace
from pathlib import Path

from appdrop.core.env import load_env
from appdrop.core.result import Err, Ok, Result
from appdrop.output.console import ConsoleProtocol, Style
from appdrop.platform.process import ProcessError
from appdrop.platform.process import run as run_process
from appdrop.platform.process import run_streaming
from appdrop.release.args import PublishOptions, publish_args
from appdrop.release.constants import (
    DEFAULT_OUTPUT_DIR,
    GITHUB_REF_NAME_VAR,
    PUBLISH_ASSET_NAMES,
    PUBLISH_ASSET_SUFFIXES,
)
from appdrop.release.errors import ToolMissingError, ValidationError

_GIT_TIMEOUT_SECONDS = 30.0

PublishError = ValidationError | ToolMissingError | ProcessError


def resolve_publish_assets(assets: Sequence[str], root: Path) -> list[str]:
    """Return ``assets`` unchanged, or the release artifacts in the output dir.

    Without explicit assets, ``<root>/build/release`` is scanned for DMG, PKG
    and ZIP files plus ``appcast.xml``, sorted by name.
    """
    if assets:
        return list(assets)

    release_dir = root / DEFAULT_OUTPUT_DIR
    if not release_dir.is_dir():
        return []

    selected = [
        entry
        for entry in os.listdir(release_dir)
        if entry.endswith(PUBLISH_ASSET_SUFFIXES) or entry in PUBLISH_ASSET_NAMES
    ]
    return [str(release_dir / entry) for entry in sorted(selected)]


def resolve_tag(
    explicit: str | None,
    *,
    root: Path,
    environ: Mapping[str, str] | None = None,
) -> Result[str, ValidationError]:
    """Pick the release tag: explicit, then CI ref name, then the tag at HEAD."""
    if explicit:
        return Ok(explicit)

    env = os.environ if environ is None else environ
    ref_name = env.get(GITHUB_REF_NAME_VAR)
    if ref_name:
        return Ok(ref_name)

    described = run_process(
        ["git", "describe", "--tags", "--exact-match"],
        cwd=root,
        timeout=_GIT_TIMEOUT_SECONDS,
    )
    if isinstance(described, Ok) and described.value.strip():
        return Ok(described.value.strip())

    return Err(ValidationError(message="Missing release tag. Pass --tag or set GITHUB_REF_NAME."))


def ensure_gh_available() -> Result[None, ToolMissingError]:
    if shutil.which("gh") is None:
        return Err(
            ToolMissingError(
                tool="gh",
                message="GitHub CLI not found. Install gh to use appdrop publish.",
                hint="https://cli.github.com/",
            )
        )
    return Ok(None)


class PublishService:
    """Create a GitHub release with the built artifacts attached."""

    def __init__(self, *, root: Path, console: ConsoleProtocol) -> None:
        self._root = root
        self._console = console

    def publish(
        self,
        *,
        tag: str | None,
        options: PublishOptions,
        dry_run: bool = False,
        environ: Mapping[str, str] | None = None,
    ) -> Result[list[str], PublishError]:
        """Create the release; returns the ``gh`` argument vector used.

        On dry run the vector is built and printed but ``gh`` is not run.
        """
        if environ is None:
            # Picks up GH_TOKEN and friends from .env; nothing is required.
            load_env((), dotenv_path=self._root / ".env")

        tag_r = resolve_tag(tag, root=self._root, environ=environ)
        if isinstance(tag_r, Err):
            return tag_r
        resolved_tag = tag_r.value

        assets = resolve_publish_assets(options.assets, self._root)
        args_r = publish_args(resolved_tag, replace(options, assets=assets))
        if isinstance(args_r, Err):
            return args_r
        args = args_r.value

        self._console.print(f"gh {' '.join(args)}", Style.DIM)
        if dry_run:
            return Ok(args)

        gh = ensure_gh_available()
        if isinstance(gh, Err):
            return gh

        self._console.info(f"Creating GitHub release {resolved_tag}")
        ran = run_streaming(["gh", *args], cwd=self._root)
        if isinstance(ran, Err):
            return ran
        self._console.success(f"published {resolved_tag}")
        return Ok(args)
