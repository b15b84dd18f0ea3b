import json
import logging
from dataclasses import dataclass
from typing import Optional

from app_store.api import AppStoreApi
from app_store.errors import UsageError

GERMAN = "de-DE"
ENGLISH = "en-US"


@dataclass(frozen=True)
class ReleaseNotes:
    german: str
    english: str

    def by_locale(self) -> dict[str, str]:
        return {GERMAN: self.german, ENGLISH: self.english}


def parse_hints(hint_json: Optional[str], hint_german: Optional[str], hint_english: Optional[str]) -> ReleaseNotes:
    """
    Build the release notes from either ``--hint`` JSON or the two discrete options.

    The JSON form wins when both are given.

    Raises:
        UsageError: malformed JSON, missing keys, or no hints at all
    """
    if hint_json is not None:
        try:
            data = json.loads(hint_json)
        except ValueError:
            raise UsageError("Invalid JSON format. Expected object with 'german' and 'english' keys") from None
        if not isinstance(data, dict):
            raise UsageError("Invalid JSON format. Expected object with 'german' and 'english' keys")

        german = data.get("german")
        english = data.get("english")
        if not isinstance(german, str) or not isinstance(english, str):
            raise UsageError("JSON must contain 'german' and 'english' string keys")
        return ReleaseNotes(german=german, english=english)

    if hint_german is None or hint_english is None:
        raise UsageError("Either provide --hint with JSON, or both --hintGerman and --hintEnglish")
    return ReleaseNotes(german=hint_german, english=hint_english)


def upsert_localization(api: AppStoreApi, version_id: str, locale: str, whats_new: str) -> None:
    """Create the locale's release notes, or overwrite them if the locale already exists."""
    existing = next(
        (loc for loc in api.list_localizations(version_id) if loc.locale == locale),
        None,
    )
    if existing is not None:
        api.update_localization(existing.id, whats_new)
        logging.info(f"✓ Updated {locale} localization")
    else:
        api.create_localization(version_id, locale, whats_new)
        logging.info(f"✓ Created {locale} localization")


def upsert_release_notes(api: AppStoreApi, version_id: str, notes: ReleaseNotes) -> None:
    for locale, text in notes.by_locale().items():
        upsert_localization(api, version_id, locale, text)
