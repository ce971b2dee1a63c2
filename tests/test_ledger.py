"""Tests for the daily check-in ledger."""

from __future__ import annotations

from datetime import date, timedelta

from mindlink.ledger import (
    MOODS_KEY,
    CheckInLedger,
    has_checked_in_today,
    sentiment_proxy,
    submit_check_in,
)
from mindlink.models import MoodRecord
from mindlink.storage import MemoryStore

TODAY = date(2026, 3, 10)


# ---- pure functions ----


def test_sentiment_proxy_is_length_mod_10():
    assert sentiment_proxy("hello") == 5
    assert sentiment_proxy("a" * 23) == 3


def test_submit_creates_record_for_today():
    ledger = submit_check_in([], TODAY, "feeling fine")
    assert ledger == [MoodRecord(date="2026-03-10", score=2, note="feeling fine")]


def test_submit_empty_note_is_noop():
    existing = [MoodRecord("2026-03-09", 1, "x")]
    assert submit_check_in(existing, TODAY, "   ") == existing


def test_submit_replaces_same_day():
    ledger = submit_check_in([], TODAY, "first")
    ledger = submit_check_in(ledger, TODAY, "second try")
    assert len(ledger) == 1
    assert ledger[0].note == "second try"


def test_submit_keeps_other_days():
    ledger = [MoodRecord("2026-03-09", 1, "yesterday")]
    ledger = submit_check_in(ledger, TODAY, "today")
    assert [r.date for r in ledger] == ["2026-03-09", "2026-03-10"]


def test_has_checked_in_today():
    ledger = [MoodRecord("2026-03-10", 1, "x")]
    assert has_checked_in_today(ledger, TODAY)
    assert not has_checked_in_today(ledger, TODAY + timedelta(days=1))


# ---- store-backed ledger ----


def test_repeated_submissions_leave_one_record(memory_store):
    ledger = CheckInLedger(memory_store)
    for note in ("a", "bb", "ccc", "dddd"):
        ledger.submit(note, today=TODAY)
    records = ledger.records()
    assert len(records) == 1
    assert records[0].note == "dddd"
    assert records[0].score == 4


def test_submit_persists_as_plain_dicts(memory_store):
    CheckInLedger(memory_store).submit("hi", today=TODAY)
    assert memory_store.get(MOODS_KEY) == [{"date": "2026-03-10", "score": 2, "note": "hi"}]


def test_submit_empty_returns_none_and_writes_nothing(memory_store):
    assert CheckInLedger(memory_store).submit("  ", today=TODAY) is None
    assert memory_store.get(MOODS_KEY) is None


def test_has_checked_in(memory_store):
    ledger = CheckInLedger(memory_store)
    assert not ledger.has_checked_in(TODAY)
    ledger.submit("ok", today=TODAY)
    assert ledger.has_checked_in(TODAY)


def test_records_skip_malformed_entries(memory_store):
    memory_store.set(
        MOODS_KEY,
        [
            {"date": "2026-03-09", "score": 1, "note": "fine"},
            {"date": "not-a-date", "score": 1, "note": "bad"},
            "garbage",
            {"score": 2},
            {"date": "2026-03-09", "score": 9, "note": "newer"},
        ],
    )
    records = CheckInLedger(memory_store).records()
    assert records == [MoodRecord("2026-03-09", 9, "newer")]


def test_records_keep_order_when_deduplicating(memory_store):
    memory_store.set(
        MOODS_KEY,
        [
            {"date": "2026-03-07", "score": 1, "note": "old"},
            {"date": "2026-03-08", "score": 2, "note": "middle"},
            {"date": "2026-03-07", "score": 3, "note": "rewritten"},
        ],
    )
    records = CheckInLedger(memory_store).records()
    assert [(r.date, r.note) for r in records] == [("2026-03-08", "middle"), ("2026-03-07", "rewritten")]


def test_records_infinite_score_defaults_to_zero():
    store = MemoryStore({MOODS_KEY: '[{"date": "2026-05-20", "score": 1e999, "note": "x"}]'})
    assert CheckInLedger(store).records() == [MoodRecord("2026-05-20", 0, "x")]


def test_records_non_list_value_is_empty(memory_store):
    memory_store.set(MOODS_KEY, {"date": "2026-03-09"})
    assert CheckInLedger(memory_store).records() == []


def test_records_survive_corrupt_file(file_store):
    file_store.data_dir.mkdir(parents=True)
    file_store.path_for(MOODS_KEY).write_text("[{", encoding="utf-8")
    ledger = CheckInLedger(file_store)
    assert ledger.records() == []
    ledger.submit("fresh start", today=TODAY)
    assert len(ledger.records()) == 1
