"""
Typed views on the JSON:API resources this tool reads.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from app_store.errors import UsageError
from utils import get


class Platform(str, Enum):
    IOS = "IOS"
    MAC_OS = "MAC_OS"
    TV_OS = "TV_OS"
    VISION_OS = "VISION_OS"

    @property
    def display_name(self) -> str:
        return {
            Platform.IOS: "iOS",
            Platform.MAC_OS: "macOS",
            Platform.TV_OS: "tvOS",
            Platform.VISION_OS: "visionOS",
        }[self]

    @property
    def cli_name(self) -> str:
        return self.display_name.lower()


PLATFORM_CHOICES = {
    "ios": [Platform.IOS],
    "macos": [Platform.MAC_OS],
    "both": [Platform.IOS, Platform.MAC_OS],
}


def parse_platforms(value: str) -> List[Platform]:
    """
    Map the ``--platform`` option to the platforms to process, in processing order.

    Raises:
        UsageError: if the value is not ios, macos or both
    """
    try:
        return list(PLATFORM_CHOICES[value.strip().lower()])
    except KeyError:
        raise UsageError("Invalid platform. Use 'ios', 'macos', or 'both'") from None


class VersionState(str, Enum):
    PREPARE_FOR_SUBMISSION = "PREPARE_FOR_SUBMISSION"
    WAITING_FOR_REVIEW = "WAITING_FOR_REVIEW"
    IN_REVIEW = "IN_REVIEW"
    PENDING_DEVELOPER_RELEASE = "PENDING_DEVELOPER_RELEASE"
    DEVELOPER_REJECTED = "DEVELOPER_REJECTED"
    REJECTED = "REJECTED"
    READY_FOR_SALE = "READY_FOR_SALE"


ACTIVE_STATES = frozenset({
    VersionState.PREPARE_FOR_SUBMISSION.value,
    VersionState.WAITING_FOR_REVIEW.value,
    VersionState.IN_REVIEW.value,
    VersionState.PENDING_DEVELOPER_RELEASE.value,
})


class ReviewSubmissionState(str, Enum):
    READY_FOR_REVIEW = "READY_FOR_REVIEW"
    WAITING_FOR_REVIEW = "WAITING_FOR_REVIEW"
    IN_REVIEW = "IN_REVIEW"
    UNRESOLVED_ISSUES = "UNRESOLVED_ISSUES"
    CANCELING = "CANCELING"
    COMPLETING = "COMPLETING"
    COMPLETE = "COMPLETE"


OPEN_SUBMISSION_STATES = (
    ReviewSubmissionState.READY_FOR_REVIEW.value,
    ReviewSubmissionState.WAITING_FOR_REVIEW.value,
    ReviewSubmissionState.IN_REVIEW.value,
)


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


@dataclass
class App:
    id: str
    name: str
    bundle_id: str

    @classmethod
    def from_resource(cls, item: Dict[str, Any]) -> "App":
        return cls(
            id=item["id"],
            name=get(item, "attributes", "name", default="Unknown"),
            bundle_id=get(item, "attributes", "bundleId", default="Unknown"),
        )


@dataclass
class AppStoreVersion:
    id: str
    version_string: Optional[str]
    platform: Optional[str]
    state: Optional[str]
    build_id: Optional[str] = None
    build_version: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.state in ACTIVE_STATES

    @classmethod
    def from_resource(cls, item: Dict[str, Any]) -> "AppStoreVersion":
        attrs = item.get("attributes") or {}
        return cls(
            id=item["id"],
            version_string=attrs.get("versionString"),
            platform=attrs.get("platform"),
            state=attrs.get("appStoreState"),
            build_id=get(item, "relationships", "build", "data", "id"),
        )


@dataclass
class VersionLocalization:
    id: str
    locale: str
    whats_new: Optional[str] = None

    @classmethod
    def from_resource(cls, item: Dict[str, Any]) -> "VersionLocalization":
        return cls(
            id=item["id"],
            locale=get(item, "attributes", "locale", default=""),
            whats_new=get(item, "attributes", "whatsNew"),
        )


@dataclass
class Build:
    id: str
    version: Optional[str]
    uploaded_date: Optional[datetime]

    @classmethod
    def from_resource(cls, item: Dict[str, Any]) -> "Build":
        return cls(
            id=item["id"],
            version=get(item, "attributes", "version"),
            uploaded_date=_parse_timestamp(get(item, "attributes", "uploadedDate")),
        )


@dataclass
class ReviewSubmission:
    id: str
    platform: Optional[str]
    state: Optional[str]

    @classmethod
    def from_resource(cls, item: Dict[str, Any]) -> "ReviewSubmission":
        return cls(
            id=item["id"],
            platform=get(item, "attributes", "platform"),
            state=get(item, "attributes", "state"),
        )
