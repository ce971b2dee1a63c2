"""Profile, forum and mission state, each on its own store key."""

from __future__ import annotations

import logging
import random
import time

from .catalog import MINDFUL_MISSIONS
from .models import ForumPost, Profile
from .storage import KeyValueStore

logger = logging.getLogger(__name__)

PROFILE_KEY = "profile"
POSTS_KEY = "posts"
MISSIONS_KEY = "missions"

SEED_POSTS = (ForumPost(id=1, handle="@hopeful-sparrow", text="Exam stress is high!", up=12),)

_HANDLE_ADJECTIVES = ("mango", "quiet", "hopeful", "gentle", "sunny", "brave", "calm", "misty")
_HANDLE_ANIMALS = ("owl", "sparrow", "otter", "fox", "panda", "heron", "koala", "finch")


def random_handle(rng: random.Random | None = None) -> str:
    rng = rng or random.Random()
    return f"@{rng.choice(_HANDLE_ADJECTIVES)}-{rng.choice(_HANDLE_ANIMALS)}"


def normalize_handle(text: str) -> str | None:
    cleaned = "-".join(text.strip().split())
    if not cleaned.lstrip("@"):
        return None
    return cleaned if cleaned.startswith("@") else f"@{cleaned}"


class ProfileRepository:
    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def load(self) -> Profile:
        return Profile.from_dict(self._store.get(PROFILE_KEY))

    def save(self, profile: Profile) -> None:
        self._store.set(PROFILE_KEY, profile.to_dict())

    def set_handle(self, text: str) -> Profile:
        profile = self.load()
        handle = normalize_handle(text)
        if handle is None:
            return profile
        profile.anonymous_handle = handle
        self.save(profile)
        return profile

    def set_notifications(self, enabled: bool) -> Profile:
        profile = self.load()
        profile.notifications = bool(enabled)
        self.save(profile)
        return profile

    def regenerate_handle(self, rng: random.Random | None = None) -> Profile:
        profile = self.load()
        profile.anonymous_handle = random_handle(rng)
        self.save(profile)
        return profile


class CommunityBoard:
    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def posts(self) -> list[ForumPost]:
        raw = self._store.get(POSTS_KEY)
        if raw is None:
            return list(SEED_POSTS)
        if not isinstance(raw, list):
            return []
        return [post for post in (ForumPost.from_dict(item) for item in raw) if post is not None]

    def submit(self, handle: str, text: str, now_ms: int | None = None) -> ForumPost | None:
        if not text.strip():
            return None
        post_id = now_ms if now_ms is not None else int(time.time() * 1000)
        post = ForumPost(id=post_id, handle=handle, text=text.strip(), up=0)
        # 新しい投稿は先頭に表示する
        self._save([post, *self.posts()])
        logger.info("Posted to community board as %s", handle)
        return post

    def upvote(self, post_id: int) -> ForumPost | None:
        posts = self.posts()
        for post in posts:
            if post.id == post_id:
                post.up += 1
                self._save(posts)
                return post
        return None

    def _save(self, posts: list[ForumPost]) -> None:
        self._store.set(POSTS_KEY, [post.to_dict() for post in posts])


class MissionTracker:
    def __init__(self, store: KeyValueStore) -> None:
        self._store = store
        self._known_ids = {mission.id for mission in MINDFUL_MISSIONS}

    def completed(self) -> list[str]:
        raw = self._store.get(MISSIONS_KEY, [])
        if not isinstance(raw, list):
            return []
        return [item for item in raw if isinstance(item, str)]

    def is_completed(self, mission_id: str) -> bool:
        return mission_id in self.completed()

    def complete(self, mission_id: str) -> bool:
        if mission_id not in self._known_ids:
            logger.debug("Unknown mission id: %r", mission_id)
            return False
        done = self.completed()
        if mission_id in done:
            return False
        self._store.set(MISSIONS_KEY, [*done, mission_id])
        return True
