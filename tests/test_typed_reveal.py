"""Tests for the typed text reveal."""

from __future__ import annotations

import pytest

from mindlink.ui.typed_reveal import TypedTextReveal


@pytest.fixture()
def reveal(qapp):
    reveal = TypedTextReveal("Hello", interval_ms=5)
    yield reveal
    reveal.stop()


def test_reveals_full_message_then_stops(reveal, wait_until):
    seen = []
    reveal.text_changed.connect(seen.append)
    reveal.set_checked_in(False)
    assert wait_until(lambda: reveal.is_complete)
    assert not reveal.is_running
    assert seen == ["", "H", "He", "Hel", "Hell", "Hello"]


def test_never_reveals_past_end(reveal, wait, wait_until):
    reveal.set_checked_in(False)
    wait_until(lambda: reveal.is_complete)
    wait(40)
    assert reveal.displayed_text == "Hello"


def test_checked_in_stops_reveal(reveal, wait):
    reveal.set_checked_in(False)
    reveal.set_checked_in(True)
    assert not reveal.is_running
    shown = reveal.displayed_text
    wait(40)
    assert reveal.displayed_text == shown


def test_already_checked_in_never_starts(reveal):
    reveal.set_checked_in(True)
    assert not reveal.is_running
    assert reveal.displayed_text == ""


def test_gate_reopening_restarts_from_empty(reveal, wait_until):
    reveal.set_checked_in(False)
    wait_until(lambda: reveal.is_complete)
    reveal.set_checked_in(True)
    reveal.set_checked_in(False)
    assert reveal.displayed_text == ""
    assert reveal.is_running


def test_repeated_open_gate_does_not_restart(reveal, wait_until):
    reveal.set_checked_in(False)
    wait_until(lambda: reveal.is_complete)
    reveal.set_checked_in(False)
    assert reveal.displayed_text == "Hello"
    assert not reveal.is_running


def test_stop_mid_reveal_is_safe_and_idempotent(reveal, wait_until):
    reveal.set_checked_in(False)
    wait_until(lambda: len(reveal.displayed_text) >= 2)
    reveal.stop()
    reveal.stop()
    assert not reveal.is_running


def test_reset_allows_restart(reveal, wait_until):
    reveal.set_checked_in(False)
    wait_until(lambda: reveal.is_complete)
    reveal.reset()
    reveal.set_checked_in(False)
    assert reveal.is_running


def test_empty_message_finishes_immediately(qapp):
    reveal = TypedTextReveal("", interval_ms=5)
    finished = []
    reveal.finished.connect(lambda: finished.append(True))
    reveal.set_checked_in(False)
    assert finished == [True]
    assert not reveal.is_running
