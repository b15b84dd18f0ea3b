import logging

from app_store.errors import BuildMissingError
from app_store.models import Platform, parse_platforms
from commands import common
from workflows import find_prepared_version, resolve_app_id, submit_version


def run(args, settings) -> int:
    """Submit the PREPARE_FOR_SUBMISSION version of each platform for review."""
    platforms = parse_platforms(args.platform)

    api = common.open_api(settings)
    app_id = resolve_app_id(api, args.appID)

    submitted: list[tuple[Platform, str]] = []

    def process(platform: Platform) -> None:
        logging.info(f"📱 Processing {platform.display_name}...")
        logging.info("🔍 Finding version in PREPARE_FOR_SUBMISSION state...")
        version = find_prepared_version(api, app_id, platform)
        if version is None:
            logging.warning(f"No version found in PREPARE_FOR_SUBMISSION state for {platform.display_name}")
            return

        logging.info(f"  Found version: {version.version_string} (ID: {version.id})")
        logging.info(f"📤 Submitting {platform.display_name} version {version.version_string}...")
        try:
            submit_version(api, app_id, platform, version.id, version.version_string)
        except BuildMissingError:
            print(f"❌ Error: Build missing for {platform.display_name} version {version.version_string}")
            print(f"   Check: asc select-build {args.appID} {version.version_string} --platform {platform.cli_name}")
            raise
        submitted.append((platform, version.version_string))

    failures = common.for_each_platform(platforms, process)

    if submitted:
        print("\n✅ Successfully submitted for review:")
        for platform, version_string in submitted:
            print(f"   • {platform.display_name}: {version_string}")
    elif not failures:
        print("\n❌ No versions ready for submission")

    return common.report_failures(platforms, failures)
