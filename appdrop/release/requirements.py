"""Plan validation and the secrets a plan needs."""

from __future__ import annotations

from appdrop.core.result import Err, Ok, Result
from appdrop.release.constants import (
    NOTARY_KEY_ID_VAR,
    NOTARY_PRIVATE_KEY_VAR,
    SIGNING_IDENTITY_VAR,
    UPDATE_FEED_KEY_VAR,
)
from appdrop.release.errors import ConfigurationError
from appdrop.release.model import PipelineDescriptor, ProjectType


def missing_artifacts(pipeline: PipelineDescriptor) -> tuple[str, ...]:
    missing: list[str] = []
    if pipeline.missing_entitlements:
        missing.append("entitlements")
    if pipeline.missing_info_plist:
        missing.append("Info.plist")
    return tuple(missing)


def validate_pipeline(pipeline: PipelineDescriptor) -> Result[None, ConfigurationError]:
    """Fail when an Xcode app plan still lacks required artifacts.

    Swift CLI plans are always valid here.
    """
    if pipeline.project_type != ProjectType.XCODE_APP:
        return Ok(None)

    missing = missing_artifacts(pipeline)
    if missing:
        return Err(
            ConfigurationError(
                message=f"Missing project configuration: {', '.join(missing)}",
                missing=missing,
            )
        )
    return Ok(None)


def required_secrets(pipeline: PipelineDescriptor) -> frozenset[str]:
    names = {SIGNING_IDENTITY_VAR}
    if pipeline.notarizes:
        names.update((NOTARY_KEY_ID_VAR, NOTARY_PRIVATE_KEY_VAR))
    if pipeline.sparkle:
        names.add(UPDATE_FEED_KEY_VAR)
    return frozenset(names)
