from app_store.models import Platform
from commands import common
from workflows import resolve_app_id

SHOWN_PLATFORMS = (Platform.IOS, Platform.MAC_OS)


def run(args, settings) -> int:
    """Print the versions of every platform with their state and selected build."""
    api = common.open_api(settings)
    app_id = resolve_app_id(api, args.appID)

    for platform in SHOWN_PLATFORMS:
        print(f"\n{platform.display_name} Versions:")
        versions = [
            v for v in api.list_versions(app_id, platform=platform, include_build=True)
            if v.platform == platform.value and v.version_string and v.state
        ]
        if not versions:
            print("  No versions found")
            continue

        for version in versions:
            print(f"  Version: {version.version_string}")
            print(f"  State: {version.state}")
            print(f"  Build: {version.build_version or 'Not selected'}")
            print("")
    return 0
