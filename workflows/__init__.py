from workflows.apps import resolve_app_id
from workflows.builds import assign_build, select_newest_build
from workflows.localizations import ReleaseNotes, parse_hints, upsert_localization, upsert_release_notes
from workflows.review import submit_version
from workflows.versions import find_prepared_version, find_version, reconcile_version

__all__ = [
    "ReleaseNotes",
    "assign_build",
    "find_prepared_version",
    "find_version",
    "parse_hints",
    "reconcile_version",
    "resolve_app_id",
    "select_newest_build",
    "submit_version",
    "upsert_localization",
    "upsert_release_notes",
]
