"""Daily check-in ledger: at most one mood record per local calendar day."""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Sequence

from .models import MoodRecord, date_key, local_today
from .storage import KeyValueStore

logger = logging.getLogger(__name__)

MOODS_KEY = "moods"


def sentiment_proxy(note: str) -> int:
    """Placeholder mood score: note length modulo 10.

    This is not a sentiment model; it only gives each check-in a stable
    number until a real scorer exists.
    """

    return len(note) % 10


def has_checked_in_today(ledger: Iterable[MoodRecord], today: date) -> bool:
    key = date_key(today)
    return any(record.date == key for record in ledger)


def submit_check_in(ledger: Sequence[MoodRecord], today: date, note: str) -> list[MoodRecord]:
    if not note.strip():
        return list(ledger)
    key = date_key(today)
    record = MoodRecord(date=key, score=sentiment_proxy(note), note=note)
    # 同じ日の記録は置き換える (1日1件)
    return [existing for existing in ledger if existing.date != key] + [record]


class CheckInLedger:
    """Store-backed ledger owning the ``moods`` key."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def records(self) -> list[MoodRecord]:
        raw = self._store.get(MOODS_KEY, [])
        if not isinstance(raw, list):
            logger.warning("Ignoring non-list value under %r", MOODS_KEY)
            return []
        records: list[MoodRecord] = []
        seen: set[str] = set()
        # 同じ日付が重複した場合は後に書かれた方を残す
        for item in reversed(raw):
            record = MoodRecord.from_dict(item)
            if record is None or record.date in seen:
                continue
            seen.add(record.date)
            records.append(record)
        records.reverse()
        return records

    def has_checked_in(self, today: date | None = None) -> bool:
        return has_checked_in_today(self.records(), today or local_today())

    def submit(self, note: str, today: date | None = None) -> MoodRecord | None:
        if not note.strip():
            logger.debug("Rejected empty check-in note")
            return None
        day = today or local_today()
        updated = submit_check_in(self.records(), day, note)
        self._store.set(MOODS_KEY, [record.to_dict() for record in updated])
        logger.info("Check-in saved for %s", date_key(day))
        return updated[-1]
