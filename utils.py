import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

DEFAULT_SECRETS_FILE = Path("~/.config/asc/secrets.json")
DEFAULT_REQUEST_TIMEOUT = 60


@dataclass(frozen=True)
class Settings:
    secrets_file: Path
    log_level: str
    request_timeout: int


def _request_timeout() -> int:
    raw = os.getenv("ASC_REQUEST_TIMEOUT")
    if raw:
        try:
            timeout = int(raw)
            if timeout > 0:
                return timeout
        except ValueError:
            pass
    return DEFAULT_REQUEST_TIMEOUT


def load_settings() -> Settings:
    """
    Read the runtime settings from the environment.

    Environment Variables:
        ASC_SECRETS_FILE: Path of the credential store file
        ASC_LOG_LEVEL: Logging level name (default: INFO)
        ASC_REQUEST_TIMEOUT: HTTP timeout in seconds (default: 60)
    """
    secrets_file = Path(os.getenv("ASC_SECRETS_FILE", str(DEFAULT_SECRETS_FILE))).expanduser()
    log_level = os.getenv("ASC_LOG_LEVEL", "INFO").upper()
    return Settings(
        secrets_file=secrets_file,
        log_level=log_level,
        request_timeout=_request_timeout(),
    )


def get(dictionary: Dict[str, Any], *keys: str | int, default: Any = None) -> Any:
    """
    Get a value from a nested dictionary using a list of keys.
    If the key is not found, return the default value.
    """
    for key in keys:
        try:
            dictionary = dictionary[key]
        except (KeyError, TypeError, IndexError):
            return default
    return dictionary


def setup_logging(level: str = "INFO"):
    """
    Set up logging for the command line tool.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(levelname)s │ %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
