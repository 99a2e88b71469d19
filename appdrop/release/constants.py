"""Well-known names, paths and defaults used when planning a release."""

from __future__ import annotations

from pathlib import Path

DEFAULT_OUTPUT_DIR = "build/release"
DEFAULT_BUILD_DIR = "build"

XCODE_PROJECT_SUFFIX = ".xcodeproj"
SWIFT_PACKAGE_MANIFEST = "Package.swift"
INFO_PLIST_NAME = "Info.plist"
ENTITLEMENTS_SUFFIX = ".entitlements"

# Directory names never descended into when searching a checkout.
IGNORED_DIR_NAMES = frozenset({".git", "node_modules", ".build", "Pods"})

# Both keys must appear in Info.plist for the update feed to be enabled.
UPDATE_FEED_KEYS = ("SUFeedURL", "SUPublicEDKey")

# Update toolchain (Sparkle)
SIGN_TOOL_NAME = "sign_update"
FEED_TOOL_NAME = "generate_appcast"
USER_TOOLS_SUBDIR = Path(".local") / "bin"
TOOLCHAIN_INSTALL_ROOTS: tuple[Path, ...] = (
    Path("/opt/homebrew/Caskroom/sparkle"),
    Path("/usr/local/Caskroom/sparkle"),
)

CLI_ARCHITECTURES: tuple[str, ...] = ("arm64", "x86_64")

# Secrets
SIGNING_IDENTITY_VAR = "DEVELOPER_ID_APPLICATION"
NOTARY_KEY_ID_VAR = "APP_STORE_CONNECT_KEY_ID"
NOTARY_PRIVATE_KEY_VAR = "APP_STORE_CONNECT_PRIVATE_KEY"
UPDATE_FEED_KEY_VAR = "SPARKLE_PRIVATE_KEY"

# Every secret a full app release can need; `doctor` reports the unset ones.
REQUIRED_ENV_VARS: tuple[str, ...] = (
    SIGNING_IDENTITY_VAR,
    NOTARY_KEY_ID_VAR,
    NOTARY_PRIVATE_KEY_VAR,
    UPDATE_FEED_KEY_VAR,
)

SPARKLE_BIN_VAR = "SPARKLE_BIN"
GITHUB_REF_NAME_VAR = "GITHUB_REF_NAME"

# Files picked up by `publish` when no --asset is given.
PUBLISH_ASSET_SUFFIXES = (".dmg", ".pkg", ".zip")
PUBLISH_ASSET_NAMES = frozenset({"appcast.xml"})
