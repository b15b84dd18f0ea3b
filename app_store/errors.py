"""
Exception classes for the App Store Connect helper.
"""
from typing import Any, Dict, List, Optional

import requests

from utils import get

STATE_CONFLICT_MARKER = "cannot create a new version of the app in the current state"


class AscError(Exception):
    """Base exception class for every failure reported to the user."""


class UsageError(AscError):
    """Raised when command line input is invalid. Detected before any remote call."""


class CredentialsMissingError(AscError):
    """Raised when a required secret is absent from the credential store."""


class NotFoundError(AscError):
    """Raised when an app, version or other resource cannot be found."""


class NoActiveVersionError(AscError):
    """Raised when no version in an active state exists to be upgraded."""


class BuildMissingError(AscError):
    """Raised when a version cannot be submitted because no build is attached."""

    def __init__(self, message: str, version_string: Optional[str] = None):
        super().__init__(message)
        self.version_string = version_string


class AppStoreConnectError(AscError):
    """
    Raised for any non-2xx response or transport failure of the App Store Connect API.

    Args:
        message: Human readable summary
        status: HTTP status code, None for transport failures
        errors: JSON:API ``errors`` array from the response body
        text: Raw response body
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
        text: str = "",
    ):
        super().__init__(message)
        self.status = status
        self.errors = errors or []
        self.text = text

    @classmethod
    def from_response(cls, response: requests.Response) -> "AppStoreConnectError":
        try:
            body = response.json()
        except ValueError:
            body = None
        errors = body.get("errors") if isinstance(body, dict) else None
        if not isinstance(errors, list):
            errors = []
        return cls(
            f"API Error {response.status_code}: {response.text}",
            status=response.status_code,
            errors=errors,
            text=response.text or "",
        )

    @property
    def codes(self) -> List[str]:
        return [str(e.get("code") or "") for e in self.errors if isinstance(e, dict)]

    @property
    def details(self) -> List[str]:
        return [str(e.get("detail") or "") for e in self.errors if isinstance(e, dict)]


def is_duplicate(err: AppStoreConnectError) -> bool:
    """True when the remote refused a create because an identical resource exists."""
    if err.status != 409:
        return False
    if any("DUPLICATE" in code for code in err.codes):
        return True
    # Last resort for payloads without a machine readable code
    return "DUPLICATE" in err.text


def is_version_state_conflict(err: AppStoreConnectError) -> bool:
    """True when the remote refused a new version because an active one already exists."""
    if err.status != 409:
        return False
    if any(STATE_CONFLICT_MARKER in detail.lower() for detail in err.details):
        return True
    return STATE_CONFLICT_MARKER in err.text.lower()


def is_build_missing(err: AppStoreConnectError) -> bool:
    """True when a review submission item was rejected for lack of an attached build."""
    if err.status not in (409, 422):
        return False
    for error in err.errors:
        if not isinstance(error, dict):
            continue
        fields = (
            error.get("code"),
            error.get("detail"),
            get(error, "source", "pointer"),
            error.get("meta"),
        )
        if any("build" in str(field).lower() for field in fields if field):
            return True
    return False
