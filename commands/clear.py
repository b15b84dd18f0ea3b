import logging

from app_store.credentials import ACCOUNTS
from app_store.errors import AscError
from commands import common


def run(args, settings) -> int:
    """Remove all stored credentials."""
    store = common.open_store(settings)
    logging.info("🗑️  Removing stored credentials...")

    failed = [account for account in ACCOUNTS if not store.delete(account)]
    for account in failed:
        logging.warning(f"Could not remove {account} from credential store")

    if failed:
        raise AscError("Failed to remove some credentials from credential store")

    logging.info("✓ All credentials successfully removed")
    return 0
