"""Release planning domain.

- project: detect the buildable unit in a checkout
- swift_package: Package.swift scraping and `swift package describe`
- artifacts: locate Info.plist, entitlements and the update toolchain
- pipeline: resolve the capability flags of a release plan
- overrides: downgrade a resolved plan on user request
- requirements: validate a plan and list the secrets it needs
- args: argument vectors for xcodebuild, swift and gh
"""

from __future__ import annotations
