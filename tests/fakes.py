"""
In-memory stand-in for AppStoreApi.

Enforces the same uniqueness and state rules the live API does and fails
with the same 409 payloads.
"""
from __future__ import annotations

import json
from datetime import datetime
from itertools import count

from app_store.errors import AppStoreConnectError
from app_store.models import (
    ACTIVE_STATES,
    App,
    AppStoreVersion,
    Build,
    Platform,
    ReviewSubmission,
    VersionLocalization,
)

DUPLICATE_ERROR = {
    "status": "409",
    "code": "ENTITY_ERROR.ATTRIBUTE.INVALID.DUPLICATE",
    "title": "The provided entity includes an attribute with a value that has already been used",
    "detail": "The version number has been previously used.",
    "source": {"pointer": "/data/attributes/versionString"},
}

STATE_CONFLICT_ERROR = {
    "status": "409",
    "code": "ENTITY_ERROR.RELATIONSHIP.INVALID",
    "title": "The provided entity includes a relationship with an invalid value",
    "detail": "You cannot create a new version of the App in the current state.",
    "source": {"pointer": "/data/relationships/app"},
}

BUILD_MISSING_ERROR = {
    "status": "409",
    "code": "STATE_ERROR.ENTITY_STATE_INVALID",
    "title": "appStoreVersions with id is not in valid state.",
    "detail": "This resource cannot be reviewed, please check associated errors to see why.",
    "meta": {"associatedErrors": {"/v1/appStoreVersions/": [{"code": "ENTITY_ERROR.RELATIONSHIP.REQUIRED.BUILD", "detail": "You must select a build."}]}},
}


def api_error(status: int, *errors: dict) -> AppStoreConnectError:
    text = json.dumps({"errors": list(errors)})
    return AppStoreConnectError(f"API Error {status}: {text}", status=status, errors=list(errors), text=text)


class FakeAppStoreApi:

    def __init__(self):
        self._ids = count(1)
        self.apps: list[App] = []
        self.versions: dict[str, dict] = {}
        self.localizations: dict[str, dict] = {}
        self.builds: list[dict] = []
        self.submissions: dict[str, dict] = {}
        self.submission_items: list[tuple[str, str]] = []
        self.calls: list[str] = []
        # method name -> exception raised on the next call
        self.fail_next: dict[str, Exception] = {}

    def _next_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._ids)}"

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail_next:
            raise self.fail_next.pop(name)

    # seeding -----------------------------------------------------------

    def add_app(self, app_id: str, bundle_id: str, name: str = "My App") -> None:
        self.apps.append(App(id=app_id, name=name, bundle_id=bundle_id))

    def add_version(self, app_id: str, platform: Platform, version_string: str, state: str, build_id: str | None = None) -> str:
        version_id = self._next_id("ver")
        self.versions[version_id] = {
            "app_id": app_id,
            "platform": platform.value,
            "version_string": version_string,
            "state": state,
            "build_id": build_id,
        }
        return version_id

    def add_build(self, app_id: str, platform: Platform, version: str, uploaded: str) -> str:
        build_id = self._next_id("build")
        self.builds.append({
            "id": build_id,
            "app_id": app_id,
            "platform": platform.value,
            "version": version,
            "uploaded": datetime.fromisoformat(uploaded),
        })
        return build_id

    def add_submission(self, app_id: str, platform: Platform, state: str) -> str:
        submission_id = self._next_id("sub")
        self.submissions[submission_id] = {"app_id": app_id, "platform": platform.value, "state": state}
        return submission_id

    def localizations_for(self, version_id: str) -> list[dict]:
        return [loc for loc in self.localizations.values() if loc["version_id"] == version_id]

    # AppStoreApi -------------------------------------------------------

    def list_apps(self) -> list[App]:
        self._record("list_apps")
        return list(self.apps)

    def find_apps_by_bundle_id(self, bundle_id: str) -> list[App]:
        self._record("find_apps_by_bundle_id")
        return [app for app in self.apps if app.bundle_id == bundle_id]

    def _version(self, version_id: str) -> AppStoreVersion:
        v = self.versions[version_id]
        build_version = next((b["version"] for b in self.builds if b["id"] == v["build_id"]), None)
        return AppStoreVersion(
            id=version_id,
            version_string=v["version_string"],
            platform=v["platform"],
            state=v["state"],
            build_id=v["build_id"],
            build_version=build_version,
        )

    def create_version(self, app_id: str, platform: Platform, version_string: str) -> AppStoreVersion:
        self._record("create_version")
        same_platform = [v for v in self.versions.values() if v["app_id"] == app_id and v["platform"] == platform.value]
        if any(v["version_string"] == version_string for v in same_platform):
            raise api_error(409, DUPLICATE_ERROR)
        if any(v["state"] in ACTIVE_STATES for v in same_platform):
            raise api_error(409, STATE_CONFLICT_ERROR)
        version_id = self.add_version(app_id, platform, version_string, "PREPARE_FOR_SUBMISSION")
        return self._version(version_id)

    def list_versions(self, app_id, platform=None, states=None, include_build=False) -> list[AppStoreVersion]:
        self._record("list_versions")
        result = []
        for version_id, v in self.versions.items():
            if v["app_id"] != app_id:
                continue
            if platform is not None and v["platform"] != platform.value:
                continue
            if states and v["state"] not in states:
                continue
            result.append(self._version(version_id))
        return result

    def update_version_string(self, version_id: str, version_string: str) -> None:
        self._record("update_version_string")
        self.versions[version_id]["version_string"] = version_string

    def list_localizations(self, version_id: str) -> list[VersionLocalization]:
        self._record("list_localizations")
        return [
            VersionLocalization(id=loc_id, locale=loc["locale"], whats_new=loc["whats_new"])
            for loc_id, loc in self.localizations.items()
            if loc["version_id"] == version_id
        ]

    def create_localization(self, version_id: str, locale: str, whats_new: str) -> VersionLocalization:
        self._record("create_localization")
        if any(loc["locale"] == locale for loc in self.localizations_for(version_id)):
            raise api_error(409, dict(DUPLICATE_ERROR, detail="Localization already exists."))
        loc_id = self._next_id("loc")
        self.localizations[loc_id] = {"version_id": version_id, "locale": locale, "whats_new": whats_new}
        return VersionLocalization(id=loc_id, locale=locale, whats_new=whats_new)

    def update_localization(self, localization_id: str, whats_new: str) -> None:
        self._record("update_localization")
        self.localizations[localization_id]["whats_new"] = whats_new

    def list_builds(self, app_id: str, platform: Platform, limit: int = 10) -> list[Build]:
        self._record("list_builds")
        # Insertion order: the fake ignores the sort parameter
        return [
            Build(id=b["id"], version=b["version"], uploaded_date=b["uploaded"])
            for b in self.builds
            if b["app_id"] == app_id and b["platform"] == platform.value
        ][:limit]

    def assign_build(self, version_id: str, build_id: str) -> None:
        self._record("assign_build")
        self.versions[version_id]["build_id"] = build_id

    def list_review_submissions(self, app_id: str, platform: Platform, states: list[str]) -> list[ReviewSubmission]:
        self._record("list_review_submissions")
        return [
            ReviewSubmission(id=sub_id, platform=s["platform"], state=s["state"])
            for sub_id, s in self.submissions.items()
            if s["app_id"] == app_id and s["platform"] == platform.value and s["state"] in states
        ][:1]

    def create_review_submission(self, app_id: str, platform: Platform) -> ReviewSubmission:
        self._record("create_review_submission")
        sub_id = self.add_submission(app_id, platform, "READY_FOR_REVIEW")
        return ReviewSubmission(id=sub_id, platform=platform.value, state="READY_FOR_REVIEW")

    def create_review_submission_item(self, submission_id: str, version_id: str) -> str:
        self._record("create_review_submission_item")
        if not self.versions[version_id]["build_id"]:
            raise api_error(409, BUILD_MISSING_ERROR)
        self.submission_items.append((submission_id, version_id))
        return self._next_id("item")
