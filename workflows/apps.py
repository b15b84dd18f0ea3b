import logging

from app_store.api import AppStoreApi
from app_store.errors import NotFoundError


def resolve_app_id(api: AppStoreApi, identifier: str) -> str:
    """
    Map an App ID or a bundle ID to the App Store Connect app ID.

    Identifiers containing a dot are bundle IDs and are looked up remotely;
    anything else is already an app ID and is returned unchanged.

    Raises:
        NotFoundError: if no app has exactly this bundle ID
    """
    if "." not in identifier:
        return identifier

    logging.info(f"🔍 Resolving bundle ID '{identifier}' to App ID...")
    matches = [app for app in api.find_apps_by_bundle_id(identifier) if app.bundle_id == identifier]
    if not matches:
        raise NotFoundError(f"No app found with bundle ID '{identifier}'")

    app_id = matches[0].id
    logging.info(f"✓ Found App ID: {app_id}")
    return app_id
