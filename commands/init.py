"""
Store App Store Connect API credentials.

Usage:
    asc init --keyID <key id> --privateKeyFile AuthKey_XXXX.p8 [--issuerID <issuer id>]

Without --issuerID the key is used as an individual API key.
"""
import logging
from pathlib import Path

from app_store.credentials import ISSUER_ID, KEY_ID, PRIVATE_KEY, strip_pem
from app_store.errors import AscError, UsageError
from commands import common


def run(args, settings) -> int:
    key_file = Path(args.privateKeyFile).expanduser()
    if not key_file.is_file():
        raise UsageError(f"Private key file not found at: {args.privateKeyFile}")

    private_key = strip_pem(key_file.read_text(encoding="utf-8"))

    store = common.open_store(settings)
    if args.issuerID:
        if not store.put(ISSUER_ID, args.issuerID):
            raise AscError(f"Failed to store {ISSUER_ID} in credential store")
    elif not store.delete(ISSUER_ID):
        raise AscError(f"Failed to remove {ISSUER_ID} from credential store")

    if not store.put(KEY_ID, args.keyID):
        raise AscError(f"Failed to store {KEY_ID} in credential store")

    if not store.put(PRIVATE_KEY, private_key):
        raise AscError(f"Failed to store {PRIVATE_KEY} in credential store")

    mode = "team" if args.issuerID else "individual"
    logging.info(f"✓ Credentials ({mode} key) successfully stored in {store.path}")
    return 0
