import argparse
import logging
import sys

from app_store.errors import AscError, UsageError
from commands import COMMANDS
from utils import load_settings, setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="asc",
        description="AppStoreConnect Helper - Manage your App Store Connect versions",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("init", help="Initialize App Store Connect credentials")
    p.add_argument("--issuerID", help="The issuer ID from App Store Connect (omit for an individual key)")
    p.add_argument("--keyID", required=True, help="The key ID from App Store Connect")
    p.add_argument("--privateKeyFile", required=True, help="Path to the private key file (.p8)")

    p = sub.add_parser("version", help="Create or update an app version with release notes")
    p.add_argument("appID", help="The App ID or Bundle ID from App Store Connect")
    p.add_argument("version", help="The version string (e.g., 1.0.0)")
    p.add_argument("--hintGerman", help="German release notes")
    p.add_argument("--hintEnglish", help="English release notes")
    p.add_argument("--hint", help="JSON string with 'german' and 'english' keys containing release notes")
    p.add_argument("--platform", default="both", help="Platform (ios, macos, or both)")

    p = sub.add_parser("show", help="Display current versions and builds for an app")
    p.add_argument("appID", help="The App ID or Bundle ID from App Store Connect")

    p = sub.add_parser("select-build", help="Select newest build for submission")
    p.add_argument("appID", help="The App ID or Bundle ID from App Store Connect")
    p.add_argument("version", help="The version string to select a build for (e.g., 1.0.0)")
    p.add_argument("--platform", default="both", help="Platform (ios, macos, or both)")

    p = sub.add_parser("submit", help="Submit version for Apple review")
    p.add_argument("appID", help="The App ID or Bundle ID from App Store Connect")
    p.add_argument("--platform", default="both", help="Platform (ios, macos, or both)")

    sub.add_parser("list-apps", help="List all apps in your App Store Connect account")
    sub.add_parser("clear", help="Remove all stored credentials")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = load_settings()
    setup_logging(settings.log_level)

    try:
        return COMMANDS[args.command].run(args, settings)
    except UsageError as e:
        logging.error(f"❌ {e}")
        return 2
    except AscError as e:
        logging.error(f"❌ Error: {e}")
        return 1


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
