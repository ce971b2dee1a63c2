from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Literal

DEFAULT_HANDLE = "@mango-owl"


def local_today() -> date:
    # 日付キーはローカルタイムゾーン基準で扱う
    return datetime.now().astimezone().date()


def date_key(day: date) -> str:
    return day.isoformat()


@dataclass(frozen=True)
class MoodRecord:
    date: str
    score: int
    note: str

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "score": self.score,
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, payload: Any) -> "MoodRecord | None":
        if not isinstance(payload, dict):
            return None
        day = payload.get("date")
        if not isinstance(day, str):
            return None
        try:
            date.fromisoformat(day)
        except ValueError:
            return None
        try:
            score = int(payload.get("score", 0))
        except (TypeError, ValueError, OverflowError):
            score = 0
        note = payload.get("note", "")
        return cls(date=day, score=score, note=note if isinstance(note, str) else str(note))


@dataclass
class Profile:
    anonymous_handle: str = DEFAULT_HANDLE
    notifications: bool = True

    def to_dict(self) -> dict:
        return {
            "anonymousHandle": self.anonymous_handle,
            "notifications": self.notifications,
        }

    @classmethod
    def from_dict(cls, payload: Any) -> "Profile":
        if not isinstance(payload, dict):
            return cls()
        handle = payload.get("anonymousHandle")
        if not isinstance(handle, str) or not handle.strip():
            handle = DEFAULT_HANDLE
        notifications = payload.get("notifications", True)
        return cls(
            anonymous_handle=handle,
            notifications=notifications if isinstance(notifications, bool) else True,
        )


@dataclass
class ForumPost:
    id: int
    handle: str
    text: str
    up: int = 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "handle": self.handle,
            "text": self.text,
            "up": self.up,
        }

    @classmethod
    def from_dict(cls, payload: Any) -> "ForumPost | None":
        if not isinstance(payload, dict) or "id" not in payload:
            return None
        try:
            post_id = int(payload["id"])
            up = int(payload.get("up", 0))
        except (TypeError, ValueError, OverflowError):
            return None
        return cls(
            id=post_id,
            handle=str(payload.get("handle", DEFAULT_HANDLE)),
            text=str(payload.get("text", "")),
            up=up,
        )


ChatRole = Literal["user", "ai"]


@dataclass
class ChatMessage:
    role: ChatRole
    text: str
    image_url: str | None = None
    created_at: str = field(default_factory=lambda: datetime.now().astimezone().replace(microsecond=0).isoformat())
