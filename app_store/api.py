"""
Typed App Store Connect endpoints used by the release workflows.

Workflows only talk to AppStoreApi, so they can run against an in-memory
stand-in without any network access.
"""
from typing import Dict, List, Optional

from app_store.helpers import AppStoreClient
from app_store.models import (
    App,
    AppStoreVersion,
    Build,
    Platform,
    ReviewSubmission,
    VersionLocalization,
)
from utils import get


def _relationship(resource_type: str, resource_id: str) -> Dict:
    return {"data": {"type": resource_type, "id": resource_id}}


class AppStoreApi:

    def __init__(self, client: AppStoreClient):
        self.client = client

    # ------------------------------------------------------------------
    # apps
    # ------------------------------------------------------------------

    def list_apps(self) -> List[App]:
        items = self.client.get_paginated("/v1/apps", params={"fields[apps]": "name,bundleId"})
        return [App.from_resource(item) for item in items]

    def find_apps_by_bundle_id(self, bundle_id: str) -> List[App]:
        response = self.client.get("/v1/apps", {
            "filter[bundleId]": bundle_id,
            "fields[apps]": "name,bundleId",
            "limit": 10,
        })
        return [App.from_resource(item) for item in response.get("data", [])]

    # ------------------------------------------------------------------
    # versions
    # ------------------------------------------------------------------

    def create_version(self, app_id: str, platform: Platform, version_string: str) -> AppStoreVersion:
        payload = {
            "data": {
                "type": "appStoreVersions",
                "attributes": {
                    "platform": platform.value,
                    "versionString": version_string,
                },
                "relationships": {
                    "app": _relationship("apps", app_id),
                },
            }
        }
        response = self.client.post("/v1/appStoreVersions", payload)
        return AppStoreVersion.from_resource(response["data"])

    def list_versions(
        self,
        app_id: str,
        platform: Optional[Platform] = None,
        states: Optional[List[str]] = None,
        include_build: bool = False,
    ) -> List[AppStoreVersion]:
        """
        List the app store versions of an app, newest first as returned by the API.

        Args:
            app_id: App Store Connect app ID
            platform: Restrict to one platform
            states: Restrict to these appStoreState values
            include_build: Resolve the linked build's version label from ``included``
        """
        params: Dict = {
            "fields[appStoreVersions]": "versionString,platform,appStoreState,build",
            "limit": 200,
        }
        if platform is not None:
            params["filter[platform]"] = platform.value
        if states:
            params["filter[appStoreState]"] = ",".join(states)
        if include_build:
            params["include"] = "build"
            params["fields[builds]"] = "version,uploadedDate"

        response = self.client.get(f"/v1/apps/{app_id}/appStoreVersions", params)

        build_versions = {
            item["id"]: get(item, "attributes", "version")
            for item in response.get("included", [])
            if item.get("type") == "builds"
        }

        versions = []
        for item in response.get("data", []):
            version = AppStoreVersion.from_resource(item)
            if version.build_id:
                version.build_version = build_versions.get(version.build_id)
            versions.append(version)
        return versions

    def update_version_string(self, version_id: str, version_string: str) -> None:
        payload = {
            "data": {
                "type": "appStoreVersions",
                "id": version_id,
                "attributes": {"versionString": version_string},
            }
        }
        self.client.patch(f"/v1/appStoreVersions/{version_id}", payload)

    # ------------------------------------------------------------------
    # localizations
    # ------------------------------------------------------------------

    def list_localizations(self, version_id: str) -> List[VersionLocalization]:
        response = self.client.get(
            f"/v1/appStoreVersions/{version_id}/appStoreVersionLocalizations",
            {"fields[appStoreVersionLocalizations]": "locale,whatsNew", "limit": 200},
        )
        return [VersionLocalization.from_resource(item) for item in response.get("data", [])]

    def create_localization(self, version_id: str, locale: str, whats_new: str) -> VersionLocalization:
        payload = {
            "data": {
                "type": "appStoreVersionLocalizations",
                "attributes": {
                    "locale": locale,
                    "whatsNew": whats_new,
                },
                "relationships": {
                    "appStoreVersion": _relationship("appStoreVersions", version_id),
                },
            }
        }
        response = self.client.post("/v1/appStoreVersionLocalizations", payload)
        return VersionLocalization.from_resource(response["data"])

    def update_localization(self, localization_id: str, whats_new: str) -> None:
        payload = {
            "data": {
                "type": "appStoreVersionLocalizations",
                "id": localization_id,
                "attributes": {"whatsNew": whats_new},
            }
        }
        self.client.patch(f"/v1/appStoreVersionLocalizations/{localization_id}", payload)

    # ------------------------------------------------------------------
    # builds
    # ------------------------------------------------------------------

    def list_builds(self, app_id: str, platform: Platform, limit: int = 10) -> List[Build]:
        response = self.client.get("/v1/builds", {
            "filter[app]": app_id,
            "filter[preReleaseVersion.platform]": platform.value,
            "sort": "-uploadedDate",
            "fields[builds]": "version,uploadedDate",
            "limit": limit,
        })
        return [Build.from_resource(item) for item in response.get("data", [])]

    def assign_build(self, version_id: str, build_id: str) -> None:
        self.client.patch(
            f"/v1/appStoreVersions/{version_id}/relationships/build",
            {"data": {"type": "builds", "id": build_id}},
        )

    # ------------------------------------------------------------------
    # review submissions
    # ------------------------------------------------------------------

    def list_review_submissions(self, app_id: str, platform: Platform, states: List[str]) -> List[ReviewSubmission]:
        response = self.client.get("/v1/reviewSubmissions", {
            "filter[app]": app_id,
            "filter[platform]": platform.value,
            "filter[state]": ",".join(states),
            "limit": 1,
        })
        return [ReviewSubmission.from_resource(item) for item in response.get("data", [])]

    def create_review_submission(self, app_id: str, platform: Platform) -> ReviewSubmission:
        payload = {
            "data": {
                "type": "reviewSubmissions",
                "attributes": {"platform": platform.value},
                "relationships": {
                    "app": _relationship("apps", app_id),
                },
            }
        }
        response = self.client.post("/v1/reviewSubmissions", payload)
        return ReviewSubmission.from_resource(response["data"])

    def create_review_submission_item(self, submission_id: str, version_id: str) -> str:
        payload = {
            "data": {
                "type": "reviewSubmissionItems",
                "relationships": {
                    "reviewSubmission": _relationship("reviewSubmissions", submission_id),
                    "appStoreVersion": _relationship("appStoreVersions", version_id),
                },
            }
        }
        response = self.client.post("/v1/reviewSubmissionItems", payload)
        return response["data"]["id"]
