"""Tests for artifact and toolchain lookup."""

from __future__ import annotations

from pathlib import Path

from appdrop.release.artifacts import (
    entitlements_file_name,
    has_update_feed_keys,
    locate_entitlements,
    locate_info_plist,
    locate_update_toolchain,
    toolchain_candidates,
    walk_files,
)

FEED_PLIST = """<?xml version="1.0" encoding="UTF-8"?>
<plist version="1.0">
<dict>
    <key>SUFeedURL</key>
    <string>https://example.com/appcast.xml</string>
    <key>SUPublicEDKey</key>
    <string>abc=</string>
</dict>
</plist>
"""


def _touch(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def _tools(directory: Path) -> Path:
    _touch(directory / "sign_update")
    _touch(directory / "generate_appcast")
    return directory


class TestWalk:
    def test_skips_ignored_directories(self, tmp_path: Path) -> None:
        for ignored in (".git", "node_modules", ".build", "Pods"):
            _touch(tmp_path / ignored / "Info.plist")

        assert locate_info_plist(tmp_path) is None

    def test_finds_nested_file(self, tmp_path: Path) -> None:
        plist = _touch(tmp_path / "MyApp" / "Resources" / "Info.plist")

        assert locate_info_plist(tmp_path) == plist

    def test_suffix_match(self, tmp_path: Path) -> None:
        _touch(tmp_path / "MyApp" / "Other-Info.plist")

        found = locate_info_plist(tmp_path)
        assert found is not None
        assert found.name == "Other-Info.plist"

    def test_does_not_follow_directory_symlinks(self, tmp_path: Path) -> None:
        outside = tmp_path / "outside"
        _touch(outside / "Info.plist")
        root = tmp_path / "root"
        root.mkdir()
        (root / "linked").symlink_to(outside, target_is_directory=True)

        assert list(walk_files(root, lambda _p: True)) == []

    def test_missing_root_yields_nothing(self, tmp_path: Path) -> None:
        assert list(walk_files(tmp_path / "missing", lambda _p: True)) == []


def test_locate_entitlements(tmp_path: Path) -> None:
    path = _touch(tmp_path / "MyApp" / "MyApp.entitlements")

    assert entitlements_file_name("MyApp") == "MyApp.entitlements"
    assert locate_entitlements(tmp_path, "MyApp.entitlements") == path
    assert locate_entitlements(tmp_path, "Other.entitlements") is None


class TestUpdateFeedKeys:
    def test_both_keys_present(self, tmp_path: Path) -> None:
        assert has_update_feed_keys(_touch(tmp_path / "Info.plist", FEED_PLIST))

    def test_one_key_missing(self, tmp_path: Path) -> None:
        content = FEED_PLIST.replace("SUPublicEDKey", "SUOtherKey")
        assert not has_update_feed_keys(_touch(tmp_path / "Info.plist", content))

    def test_substring_check_counts_comments(self, tmp_path: Path) -> None:
        content = "<plist><!-- SUFeedURL SUPublicEDKey --></plist>"
        assert has_update_feed_keys(_touch(tmp_path / "Info.plist", content))

    def test_unreadable_file(self, tmp_path: Path) -> None:
        assert not has_update_feed_keys(tmp_path / "missing.plist")


class TestToolchain:
    def test_explicit_dir_is_the_only_candidate(self, tmp_path: Path) -> None:
        home = tmp_path / "home"
        _tools(home / ".local" / "bin")

        explicit = tmp_path / "explicit"
        assert toolchain_candidates(explicit, home=home, install_roots=()) == [explicit]
        assert locate_update_toolchain(explicit, home=home, install_roots=()) is None

    def test_explicit_dir_with_tools(self, tmp_path: Path) -> None:
        tools = _tools(tmp_path / "tools")

        toolchain = locate_update_toolchain(tools, install_roots=())

        assert toolchain is not None
        assert toolchain.sign_tool == (tools / "sign_update").absolute()
        assert toolchain.feed_tool == (tools / "generate_appcast").absolute()

    def test_both_tools_required(self, tmp_path: Path) -> None:
        tools = tmp_path / "tools"
        _touch(tools / "sign_update")

        assert locate_update_toolchain(tools, install_roots=()) is None

    def test_candidate_order(self, tmp_path: Path) -> None:
        home = tmp_path / "home"
        cask = tmp_path / "Caskroom" / "sparkle"
        (cask / "2.5.0").mkdir(parents=True)
        (cask / "2.6.4").mkdir(parents=True)

        candidates = toolchain_candidates(
            home=home, install_roots=(cask, tmp_path / "absent")
        )

        assert candidates == [
            home / ".local" / "bin",
            cask / "2.6.4" / "bin",
            cask / "2.5.0" / "bin",
        ]

    def test_user_dir_wins_over_install_roots(self, tmp_path: Path) -> None:
        home = tmp_path / "home"
        _tools(home / ".local" / "bin")
        cask = tmp_path / "Caskroom" / "sparkle"
        _tools(cask / "2.6.4" / "bin")

        toolchain = locate_update_toolchain(home=home, install_roots=(cask,))

        assert toolchain is not None
        assert toolchain.sign_tool.parent == (home / ".local" / "bin").absolute()

    def test_newest_installed_version_first(self, tmp_path: Path) -> None:
        cask = tmp_path / "Caskroom" / "sparkle"
        _tools(cask / "2.5.0" / "bin")
        _tools(cask / "2.6.4" / "bin")

        toolchain = locate_update_toolchain(home=tmp_path / "nohome", install_roots=(cask,))

        assert toolchain is not None
        assert toolchain.feed_tool.parent.parent.name == "2.6.4"
