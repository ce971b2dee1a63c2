from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from .models import MoodRecord

DEFAULT_WINDOW_DAYS = 30


@dataclass(frozen=True)
class Badge:
    label: str
    unlocked: bool


def compute_streak(
    ledger: Iterable[MoodRecord],
    today: date,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> int:
    """Count consecutive checked-in days walking back from ``today``.

    A missing record for today itself does not break the chain, so a streak
    built on previous days stays visible until the day is over. Any gap
    after that stops the count.
    """

    days = {record.date for record in ledger}
    streak = 0
    for offset in range(max(0, window_days)):
        candidate = (today - timedelta(days=offset)).isoformat()
        if candidate in days:
            streak += 1
        elif offset > 0:
            break
    return streak


def compute_badges(streak: int, ledger_size: int) -> list[Badge]:
    return [
        Badge("3-Day Check-in Streak", streak >= 3),
        Badge("5 Total Check-ins", ledger_size >= 5),
        # コミュニティ投稿の実績はまだ集計していないため常に解放
        Badge("First Community Post", True),
        Badge("7-Day Streak", streak >= 7),
    ]
