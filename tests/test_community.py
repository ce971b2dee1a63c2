"""Tests for profile, forum and mission state."""

from __future__ import annotations

import random

from mindlink.community import (
    MISSIONS_KEY,
    POSTS_KEY,
    PROFILE_KEY,
    CommunityBoard,
    MissionTracker,
    ProfileRepository,
    normalize_handle,
    random_handle,
)
from mindlink.ledger import MOODS_KEY, CheckInLedger
from mindlink.models import DEFAULT_HANDLE
from mindlink.storage import MemoryStore

# ---- profile ----


def test_profile_defaults(memory_store):
    profile = ProfileRepository(memory_store).load()
    assert profile.anonymous_handle == DEFAULT_HANDLE
    assert profile.notifications is True


def test_profile_serialized_with_original_field_names(memory_store):
    ProfileRepository(memory_store).set_notifications(False)
    assert memory_store.get(PROFILE_KEY) == {"anonymousHandle": DEFAULT_HANDLE, "notifications": False}


def test_set_handle_normalizes(memory_store):
    profile = ProfileRepository(memory_store).set_handle("  quiet owl ")
    assert profile.anonymous_handle == "@quiet-owl"


def test_set_blank_handle_is_ignored(memory_store):
    repo = ProfileRepository(memory_store)
    repo.set_handle("@calm-fox")
    assert repo.set_handle("  @ ").anonymous_handle == "@calm-fox"


def test_normalize_handle():
    assert normalize_handle("@ok") == "@ok"
    assert normalize_handle("") is None


def test_random_handle_is_deterministic_with_seed():
    assert random_handle(random.Random(4)) == random_handle(random.Random(4))
    assert random_handle(random.Random(4)).startswith("@")


def test_profile_edit_does_not_touch_moods(memory_store):
    CheckInLedger(memory_store).submit("today was okay")
    before = memory_store.get(MOODS_KEY)
    ProfileRepository(memory_store).set_notifications(False)
    assert memory_store.get(MOODS_KEY) == before


def test_corrupt_profile_falls_back(memory_store):
    memory_store.set(PROFILE_KEY, ["not", "a", "profile"])
    assert ProfileRepository(memory_store).load().anonymous_handle == DEFAULT_HANDLE


# ---- community board ----


def test_board_seeded_when_empty(memory_store):
    posts = CommunityBoard(memory_store).posts()
    assert [p.handle for p in posts] == ["@hopeful-sparrow"]
    assert posts[0].up == 12


def test_submit_prepends_post(memory_store):
    board = CommunityBoard(memory_store)
    post = board.submit("@me", "  hello all  ", now_ms=1700000000000)
    assert post.id == 1700000000000
    assert post.text == "hello all"
    assert [p.id for p in board.posts()] == [1700000000000, 1]


def test_submit_blank_is_noop(memory_store):
    assert CommunityBoard(memory_store).submit("@me", "   ") is None
    assert memory_store.get(POSTS_KEY) is None


def test_upvote(memory_store):
    board = CommunityBoard(memory_store)
    assert board.upvote(1).up == 13
    assert board.posts()[0].up == 13
    assert board.upvote(999) is None



def test_posts_skip_entries_with_infinite_numbers():
    raw = (
        '[{"id": 1e999, "handle": "@x", "text": "a"},'
        ' {"id": 2, "handle": "@y", "text": "b", "up": 1e999},'
        ' {"id": 3, "handle": "@z", "text": "c", "up": 4}]'
    )
    store = MemoryStore({POSTS_KEY: raw})
    assert [p.id for p in CommunityBoard(store).posts()] == [3]


# ---- missions ----


def test_complete_mission_once(memory_store):
    tracker = MissionTracker(memory_store)
    assert tracker.complete("m2")
    assert not tracker.complete("m2")
    assert memory_store.get(MISSIONS_KEY) == ["m2"]
    assert tracker.is_completed("m2")


def test_unknown_mission_rejected(memory_store):
    assert not MissionTracker(memory_store).complete("m9")
    assert memory_store.get(MISSIONS_KEY) is None
