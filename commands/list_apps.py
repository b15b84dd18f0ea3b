import logging

from commands import common


def run(args, settings) -> int:
    """Print every app the API key can see."""
    api = common.open_api(settings)

    logging.info("📱 Fetching apps from App Store Connect...")
    apps = api.list_apps()

    if not apps:
        print("No apps found in your account.")
        return 0

    print(f"Found {len(apps)} app(s):\n")
    for app in apps:
        print(f"📦 {app.name}")
        print(f"   App ID: {app.id}")
        print(f"   Bundle ID: {app.bundle_id}")
        print("")
    return 0
