"""
Version reconciliation.

The API offers no atomic "upsert" for app store versions, and rejects a
create in two different ways:

- 409 DUPLICATE when a version with this exact string already exists,
- 409 "cannot create a new version of the App in the current state" when
  another version of the platform is already on its way through review.

reconcile_version folds create, find and in-place upgrade into one call that
returns a version ID ready for localizations and builds.
"""
import logging
from typing import List, Optional

from app_store.api import AppStoreApi
from app_store.errors import (
    AppStoreConnectError,
    NoActiveVersionError,
    NotFoundError,
    is_duplicate,
    is_version_state_conflict,
)
from app_store.models import ACTIVE_STATES, AppStoreVersion, Platform, VersionState

# Preferred states when several versions carry the same string
EXISTING_VERSION_PRIORITY = (
    VersionState.PREPARE_FOR_SUBMISSION.value,
    VersionState.WAITING_FOR_REVIEW.value,
    VersionState.IN_REVIEW.value,
    VersionState.PENDING_DEVELOPER_RELEASE.value,
    VersionState.DEVELOPER_REJECTED.value,
    VersionState.REJECTED.value,
)


def _matching(versions: List[AppStoreVersion], platform: Platform, version_string: str) -> List[AppStoreVersion]:
    return [v for v in versions if v.platform == platform.value and v.version_string == version_string]


def find_version(api: AppStoreApi, app_id: str, platform: Platform, version_string: str) -> Optional[AppStoreVersion]:
    """Return the version with exactly this string on this platform, or None."""
    matches = _matching(api.list_versions(app_id), platform, version_string)
    for state in EXISTING_VERSION_PRIORITY:
        for version in matches:
            if version.state == state:
                return version
    return matches[0] if matches else None


def find_existing_version(api: AppStoreApi, app_id: str, platform: Platform, version_string: str) -> str:
    """
    Look up the version a duplicate conflict pointed at.

    Raises:
        NotFoundError: if the listing disagrees with the conflict
    """
    version = find_version(api, app_id, platform, version_string)
    if version is None:
        raise NotFoundError(
            f"Could not find existing version {version_string} for platform {platform.value}"
        )
    return version.id


def find_active_version(api: AppStoreApi, app_id: str, platform: Platform) -> Optional[AppStoreVersion]:
    """Return the first version of the platform in an active state, or None."""
    for version in api.list_versions(app_id, platform=platform):
        if version.platform == platform.value and version.state in ACTIVE_STATES:
            return version
    return None


def find_prepared_version(api: AppStoreApi, app_id: str, platform: Platform) -> Optional[AppStoreVersion]:
    """Return the version of the platform waiting in PREPARE_FOR_SUBMISSION, or None."""
    versions = api.list_versions(
        app_id,
        platform=platform,
        states=[VersionState.PREPARE_FOR_SUBMISSION.value],
    )
    for version in versions:
        if version.platform == platform.value and version.state == VersionState.PREPARE_FOR_SUBMISSION.value:
            return version
    return None


def upgrade_active_version(api: AppStoreApi, app_id: str, platform: Platform, version_string: str) -> str:
    """
    Rewrite the version string of the platform's active version.

    Raises:
        NoActiveVersionError: if no version is in an active state
    """
    logging.info("   🔍 Finding active version to update...")
    active = find_active_version(api, app_id, platform)
    if active is None:
        raise NoActiveVersionError(
            f"Cannot find active version to update for platform {platform.display_name}"
        )

    logging.info(f"   Found active version {active.version_string} (ID: {active.id})")
    logging.info(f"   🔄 Updating version number from {active.version_string} to {version_string}...")
    api.update_version_string(active.id, version_string)
    logging.info(f"   ✓ Version number updated to {version_string}")
    return active.id


def reconcile_version(api: AppStoreApi, app_id: str, platform: Platform, version_string: str) -> str:
    """
    Ensure exactly one app store version with this string exists and return its ID.

    Args:
        api: Typed App Store Connect endpoints
        app_id: App Store Connect app ID
        platform: Platform of the version
        version_string: Version string, e.g. "1.2.0"

    Returns:
        ID of the created, found or upgraded version

    Raises:
        NotFoundError: the API reported a duplicate that the listing does not contain
        NoActiveVersionError: the API refused a new version but none is active
        AppStoreConnectError: any other API failure
    """
    try:
        version = api.create_version(app_id, platform, version_string)
    except AppStoreConnectError as e:
        if is_duplicate(e):
            logging.info("   Version already exists, finding it...")
            return find_existing_version(api, app_id, platform, version_string)
        if is_version_state_conflict(e):
            logging.warning("   Cannot create new version - an active version already exists")
            return upgrade_active_version(api, app_id, platform, version_string)
        raise

    logging.info(f"   Created version {version_string} (ID: {version.id})")
    return version.id
