"""Tests for GitHub release publishing."""

from __future__ import annotations

from pathlib import Path

import pytest

from appdrop.core.result import Err, Ok
from appdrop.output.console import MockConsole, Style
from appdrop.platform.process import ProcessError
from appdrop.release.args import PublishOptions
from appdrop.release.errors import ToolMissingError, ValidationError
from appdrop.services import publish as publish_mod
from appdrop.services.publish import PublishService, resolve_publish_assets, resolve_tag


def _release_dir(root: Path, *names: str) -> Path:
    release_dir = root / "build" / "release"
    release_dir.mkdir(parents=True)
    for name in names:
        (release_dir / name).write_text("", encoding="utf-8")
    return release_dir


def _no_git(monkeypatch: pytest.MonkeyPatch) -> list[list[str]]:
    calls: list[list[str]] = []

    def fake_run(cmd: list[str], *, cwd: Path, timeout: float | None = None):
        del cwd
        del timeout
        calls.append(cmd)
        return Err(ProcessError(tuple(cmd), 128, "", "fatal: no tag exactly matches"))

    monkeypatch.setattr(publish_mod, "run_process", fake_run)
    return calls


class TestAssets:
    def test_explicit_assets_unchanged(self, tmp_path: Path) -> None:
        _release_dir(tmp_path, "App.dmg")

        assert resolve_publish_assets(["b.zip", "a.zip"], tmp_path) == ["b.zip", "a.zip"]

    def test_detects_release_artifacts_sorted(self, tmp_path: Path) -> None:
        release_dir = _release_dir(
            tmp_path, "appcast.xml", "MyApp.dmg", "notes.txt", "MyApp.pkg", "mycli.zip"
        )

        assert resolve_publish_assets([], tmp_path) == [
            str(release_dir / "MyApp.dmg"),
            str(release_dir / "MyApp.pkg"),
            str(release_dir / "appcast.xml"),
            str(release_dir / "mycli.zip"),
        ]

    def test_no_release_dir(self, tmp_path: Path) -> None:
        assert resolve_publish_assets([], tmp_path) == []


class TestTag:
    def test_explicit_tag(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        calls = _no_git(monkeypatch)

        assert resolve_tag("v1.2.3", root=tmp_path, environ={"GITHUB_REF_NAME": "v0"}) == Ok(
            "v1.2.3"
        )
        assert calls == []

    def test_ci_ref_name(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _no_git(monkeypatch)

        assert resolve_tag(None, root=tmp_path, environ={"GITHUB_REF_NAME": "v2.0.0"}) == Ok(
            "v2.0.0"
        )

    def test_tag_at_head(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_run(cmd: list[str], *, cwd: Path, timeout: float | None = None):
            del cwd
            del timeout
            assert cmd == ["git", "describe", "--tags", "--exact-match"]
            return Ok("v3.1.0\n")

        monkeypatch.setattr(publish_mod, "run_process", fake_run)

        assert resolve_tag(None, root=tmp_path, environ={}) == Ok("v3.1.0")

    def test_missing_tag(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        calls = _no_git(monkeypatch)

        result = resolve_tag(None, root=tmp_path, environ={})

        assert isinstance(result, Err)
        assert result.error.message == "Missing release tag. Pass --tag or set GITHUB_REF_NAME."
        assert len(calls) == 1


class TestPublish:
    def test_dry_run_prints_command(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _release_dir(tmp_path, "MyApp.dmg")
        _no_git(monkeypatch)

        def fail_streaming(*_args: object, **_kwargs: object):
            raise AssertionError("gh must not run on dry run")

        monkeypatch.setattr(publish_mod, "run_streaming", fail_streaming)
        console = MockConsole()

        result = PublishService(root=tmp_path, console=console).publish(
            tag="v1.0.0",
            options=PublishOptions(),
            dry_run=True,
            environ={},
        )

        assert isinstance(result, Ok)
        assert result.value[-1] == str(tmp_path / "build" / "release" / "MyApp.dmg")
        assert console.outputs[0].style == Style.DIM
        assert console.outputs[0].message.startswith("gh release create v1.0.0 --title v1.0.0")

    def test_missing_assets(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _no_git(monkeypatch)

        result = PublishService(root=tmp_path, console=MockConsole()).publish(
            tag="v1.0.0", options=PublishOptions(), environ={}
        )

        assert isinstance(result, Err)
        assert isinstance(result.error, ValidationError)

    def test_gh_missing(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _no_git(monkeypatch)
        monkeypatch.setattr(publish_mod.shutil, "which", lambda _name: None)

        result = PublishService(root=tmp_path, console=MockConsole()).publish(
            tag="v1.0.0", options=PublishOptions(assets=["a.dmg"]), environ={}
        )

        assert isinstance(result, Err)
        assert isinstance(result.error, ToolMissingError)
        assert result.error.message == "GitHub CLI not found. Install gh to use appdrop publish."

    def test_runs_gh(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _no_git(monkeypatch)
        monkeypatch.setattr(publish_mod.shutil, "which", lambda _name: "/usr/bin/gh")
        calls: list[list[str]] = []

        def fake_streaming(cmd: list[str], cwd: Path, env: dict[str, str] | None = None):
            del env
            assert cwd == tmp_path
            calls.append(cmd)
            return Ok(None)

        monkeypatch.setattr(publish_mod, "run_streaming", fake_streaming)
        console = MockConsole()

        result = PublishService(root=tmp_path, console=console).publish(
            tag=None,
            options=PublishOptions(assets=["a.dmg"], draft=True),
            environ={"GITHUB_REF_NAME": "v4.0.0"},
        )

        assert isinstance(result, Ok)
        assert calls == [
            [
                "gh",
                "release",
                "create",
                "v4.0.0",
                "--title",
                "v4.0.0",
                "--notes",
                "Release v4.0.0",
                "--draft",
                "a.dmg",
            ]
        ]
        assert console.find("OK published v4.0.0")

    def test_gh_failure_is_returned(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _no_git(monkeypatch)
        monkeypatch.setattr(publish_mod.shutil, "which", lambda _name: "/usr/bin/gh")
        error = ProcessError(("gh", "release", "create"), 1, "", "")
        monkeypatch.setattr(publish_mod, "run_streaming", lambda *_a, **_k: Err(error))

        result = PublishService(root=tmp_path, console=MockConsole()).publish(
            tag="v1", options=PublishOptions(assets=["a.dmg"]), environ={}
        )

        assert result == Err(error)
