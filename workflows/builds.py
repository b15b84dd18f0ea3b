import logging
from datetime import datetime, timezone
from typing import Optional

from app_store.api import AppStoreApi
from app_store.models import Build, Platform

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _uploaded(build: Build) -> datetime:
    if build.uploaded_date is None:
        return _OLDEST
    if build.uploaded_date.tzinfo is None:
        return build.uploaded_date.replace(tzinfo=timezone.utc)
    return build.uploaded_date


def select_newest_build(api: AppStoreApi, app_id: str, platform: Platform) -> Optional[Build]:
    """
    Return the most recently uploaded build of the app for this platform, or None.

    The API is asked to sort by upload date; the result is sorted again
    locally so an ignored sort parameter cannot pick an older build.
    """
    builds = api.list_builds(app_id, platform)
    if not builds:
        return None

    newest = sorted(builds, key=_uploaded, reverse=True)[0]
    logging.info(f"  Found build version: {newest.version} for platform: {platform.display_name}")
    return newest


def assign_build(api: AppStoreApi, version_id: str, build_id: str) -> None:
    """Link the build to the version. API errors propagate unchanged."""
    api.assign_build(version_id, build_id)
