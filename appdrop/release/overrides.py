"""User overrides that downgrade a resolved plan.

Each transform only ever turns flags off, so they commute and are
idempotent: applying ``--no-dmg`` then ``--no-sparkle`` gives the same
plan as the reverse order, and applying either twice changes nothing.
"""

from __future__ import annotations

from dataclasses import replace

from appdrop.release.model import PipelineDescriptor


def disable_packaging(pipeline: PipelineDescriptor) -> PipelineDescriptor:
    """Skip the DMG, and with it DMG notarization and the appcast."""
    return replace(pipeline, create_dmg=False, notarize_dmg=False, generate_appcast=False)


def disable_update_feed(pipeline: PipelineDescriptor) -> PipelineDescriptor:
    """Skip update-feed signing and appcast generation.

    Info.plist is only required to carry the feed keys, so once the feed is
    off a missing Info.plist no longer blocks the release. Missing
    entitlements still do, since the app is still signed.
    """
    return replace(
        pipeline,
        sparkle=False,
        generate_appcast=False,
        sparkle_signing_enabled=False,
        missing_info_plist=False,
    )


def disable_notarization(pipeline: PipelineDescriptor) -> PipelineDescriptor:
    return replace(pipeline, notarize_app=False, notarize_dmg=False, notarize_zip=False)


def apply_overrides(
    pipeline: PipelineDescriptor,
    *,
    no_dmg: bool = False,
    no_sparkle: bool = False,
    no_notarize: bool = False,
) -> PipelineDescriptor:
    """Apply the selected overrides in the CLI's fixed order."""
    if no_dmg:
        pipeline = disable_packaging(pipeline)
    if no_sparkle:
        pipeline = disable_update_feed(pipeline)
    if no_notarize:
        pipeline = disable_notarization(pipeline)
    return pipeline
