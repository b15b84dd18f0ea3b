import logging
from typing import Callable, Dict, List

from app_store.api import AppStoreApi
from app_store.credentials import CredentialStore, load_credentials
from app_store.errors import AscError
from app_store.helpers import get_app_store_client
from app_store.models import Platform
from utils import Settings


def open_store(settings: Settings) -> CredentialStore:
    return CredentialStore(settings.secrets_file)


def open_api(settings: Settings) -> AppStoreApi:
    """Load this invocation's credentials and wrap an authenticated client."""
    credentials = load_credentials(open_store(settings))
    mode = "individual" if credentials.is_individual_key else "team"
    logging.info(f"🔑 Retrieved credentials from credential store ({mode} key)")
    client = get_app_store_client(credentials, timeout=settings.request_timeout)
    return AppStoreApi(client)


def for_each_platform(platforms: List[Platform], step: Callable[[Platform], None]) -> Dict[Platform, AscError]:
    """
    Run ``step`` for every platform in order.

    A failure on one platform is logged and recorded; the remaining
    platforms are still attempted.

    Returns:
        Failures keyed by platform, empty when every platform succeeded
    """
    failures: Dict[Platform, AscError] = {}
    for platform in platforms:
        try:
            step(platform)
        except AscError as e:
            logging.error(f"✗ {platform.display_name}: {e}")
            failures[platform] = e
    return failures


def report_failures(platforms: List[Platform], failures: Dict[Platform, AscError]) -> int:
    """Log a per-platform summary and return the command's exit code."""
    if not failures:
        return 0

    logging.info(f"{'=' * 60}")
    logging.info("Summary:")
    for platform in platforms:
        if platform in failures:
            logging.info(f"  {platform.display_name}: failed - {failures[platform]}")
        else:
            logging.info(f"  {platform.display_name}: ok")
    logging.info(f"{'=' * 60}")
    return 1
