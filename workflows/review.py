"""
Review submission.

Apple only accepts one app store version per review submission, and a
submission is scoped to one platform, so each platform gets its own.
"""
import logging

from app_store.api import AppStoreApi
from app_store.errors import AppStoreConnectError, BuildMissingError, is_build_missing
from app_store.models import OPEN_SUBMISSION_STATES, Platform


def find_or_create_review_submission(api: AppStoreApi, app_id: str, platform: Platform) -> str:
    """Reuse the platform's open review submission, or create one."""
    existing = api.list_review_submissions(app_id, platform, list(OPEN_SUBMISSION_STATES))
    for submission in existing:
        if submission.state in OPEN_SUBMISSION_STATES:
            logging.info(f"    Found existing review submission with ID: {submission.id}")
            return submission.id

    submission = api.create_review_submission(app_id, platform)
    logging.info(f"    Created review submission with ID: {submission.id}")
    return submission.id


def submit_version(
    api: AppStoreApi,
    app_id: str,
    platform: Platform,
    version_id: str,
    version_string: str | None = None,
) -> str:
    """
    Add the version to the platform's review submission.

    Returns:
        ID of the review submission the version was added to

    Raises:
        BuildMissingError: the version has no build attached
        AppStoreConnectError: any other API failure
    """
    submission_id = find_or_create_review_submission(api, app_id, platform)

    logging.info("    Adding version as review item...")
    try:
        api.create_review_submission_item(submission_id, version_id)
    except AppStoreConnectError as e:
        if is_build_missing(e):
            raise BuildMissingError(
                f"Build missing for {platform.display_name} version {version_string or version_id}",
                version_string=version_string,
            ) from e
        raise
    return submission_id
