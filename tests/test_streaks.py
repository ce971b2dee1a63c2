"""Tests for streak counting and badge unlocks."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from mindlink.models import MoodRecord
from mindlink.streaks import compute_badges, compute_streak

D = date(2026, 5, 20)


def _ledger(*offsets: int) -> list[MoodRecord]:
    return [MoodRecord((D - timedelta(days=o)).isoformat(), 5, "note") for o in offsets]


def _badge(badges, label):
    return next(b for b in badges if b.label == label)


# ---- compute_streak ----


def test_empty_ledger_is_zero():
    assert compute_streak([], D) == 0


def test_today_and_yesterday_with_gap_before():
    assert compute_streak(_ledger(0, 1, 3), D) == 2


def test_missing_today_keeps_prior_days():
    assert compute_streak(_ledger(1, 2), D) == 2


def test_missing_today_and_yesterday_is_zero():
    assert compute_streak(_ledger(2, 3, 4), D) == 0


def test_only_today():
    assert compute_streak(_ledger(0), D) == 1


def test_capped_at_window():
    assert compute_streak(_ledger(*range(45)), D) == 30


def test_custom_window():
    assert compute_streak(_ledger(*range(10)), D, window_days=7) == 7


def test_zero_window():
    assert compute_streak(_ledger(0, 1), D, window_days=0) == 0


def test_crosses_month_boundary():
    ledger = [MoodRecord(day, 1, "x") for day in ("2026-03-01", "2026-02-28", "2026-02-27")]
    assert compute_streak(ledger, date(2026, 3, 1)) == 3


def test_future_records_are_ignored():
    assert compute_streak(_ledger(-1, 0), D) == 1


@pytest.mark.parametrize("removed", [1, 2, 3, 4])
def test_removing_a_day_never_increases_streak(removed):
    full = list(range(6))
    before = compute_streak(_ledger(*full), D)
    after = compute_streak(_ledger(*[o for o in full if o != removed]), D)
    assert after <= before
    assert after == removed


# ---- compute_badges ----


def test_badges_fixed_order_and_labels():
    labels = [b.label for b in compute_badges(0, 0)]
    assert labels == ["3-Day Check-in Streak", "5 Total Check-ins", "First Community Post", "7-Day Streak"]


def test_first_post_badge_always_unlocked():
    assert _badge(compute_badges(0, 0), "First Community Post").unlocked


def test_streak_thresholds():
    assert not _badge(compute_badges(2, 0), "3-Day Check-in Streak").unlocked
    assert _badge(compute_badges(3, 0), "3-Day Check-in Streak").unlocked
    assert not _badge(compute_badges(6, 0), "7-Day Streak").unlocked
    assert _badge(compute_badges(7, 0), "7-Day Streak").unlocked


def test_total_checkins_unlocks_at_five():
    assert not _badge(compute_badges(0, 4), "5 Total Check-ins").unlocked
    assert _badge(compute_badges(0, 5), "5 Total Check-ins").unlocked


def test_badges_are_idempotent():
    assert compute_badges(4, 5) == compute_badges(4, 5)
