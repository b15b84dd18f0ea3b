"""
Create or update an app store version and its release notes.

Usage:
    asc version <appID|bundleID> <version> --hint '{"german": "…", "english": "…"}'
    asc version <appID|bundleID> <version> --hintGerman "…" --hintEnglish "…"

Each platform is reconciled and localized completely before the next one
starts. A failing platform does not stop the others.
"""
import logging

from app_store.models import Platform, parse_platforms
from commands import common
from workflows import parse_hints, reconcile_version, resolve_app_id, upsert_release_notes


def run(args, settings) -> int:
    # Usage errors must surface before any remote call
    notes = parse_hints(args.hint, args.hintGerman, args.hintEnglish)
    platforms = parse_platforms(args.platform)

    api = common.open_api(settings)
    app_id = resolve_app_id(api, args.appID)

    logging.info(f"📱 Creating/updating version {args.version} for app {app_id}...")

    def process(platform: Platform) -> None:
        logging.info(f"Creating/finding {platform.display_name} version...")
        version_id = reconcile_version(api, app_id, platform, args.version)
        logging.info(f"✓ {platform.display_name} version ID: {version_id}")

        logging.info(f"📝 Updating {platform.display_name} release notes...")
        upsert_release_notes(api, version_id, notes)

    failures = common.for_each_platform(platforms, process)
    if not failures:
        logging.info("✓ Successfully updated versions with release notes")
    return common.report_failures(platforms, failures)
