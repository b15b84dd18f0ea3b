import logging

from app_store.models import Platform, parse_platforms
from commands import common
from workflows import assign_build, find_version, resolve_app_id, select_newest_build


def run(args, settings) -> int:
    """Attach the newest uploaded build to the given version on each platform."""
    platforms = parse_platforms(args.platform)

    api = common.open_api(settings)
    app_id = resolve_app_id(api, args.appID)

    def process(platform: Platform) -> None:
        logging.info(f"📱 Processing {platform.display_name}...")

        logging.info(f"🔍 Finding version {args.version}...")
        version = find_version(api, app_id, platform, args.version)
        if version is None:
            logging.warning(f"Version {args.version} not found for platform {platform.display_name}")
            return

        logging.info(f"🔍 Finding newest build for {platform.display_name}...")
        build = select_newest_build(api, app_id, platform)
        if build is None:
            logging.warning(f"No builds found for this app and platform {platform.display_name}")
            return

        logging.info("🔗 Assigning build to version...")
        assign_build(api, version.id, build.id)
        logging.info(f"✓ Successfully assigned newest build to version {args.version} for {platform.display_name}")

    failures = common.for_each_platform(platforms, process)
    return common.report_failures(platforms, failures)
