"""Tests for the chorded keymap matcher."""

import pytest

from fold_editor.core.keymap import (
    DEFAULT_KEYMAP,
    GROUP_HINT,
    LEADER,
    KeymapMatcher,
    lookup,
)
from fold_editor.protocols import SchedulerProtocol
from tests.unit.fakes import FakeScheduler

TRIE = {"a": {"b": "X"}, "c": "Y"}


@pytest.fixture
def fired() -> list[str]:
    return []


@pytest.fixture
def matcher(scheduler: FakeScheduler, fired: list[str]) -> KeymapMatcher:
    return KeymapMatcher(TRIE, fired.append, scheduler=scheduler, timeout_ms=1000)


def test_fake_scheduler_satisfies_protocol(scheduler: FakeScheduler) -> None:
    assert isinstance(scheduler, SchedulerProtocol)


def test_single_key_fires(matcher: KeymapMatcher, fired: list[str]) -> None:
    assert matcher.feed("c") == "Y"
    assert fired == ["Y"]
    assert matcher.buffer == ()


def test_chord_fires_on_last_key(matcher: KeymapMatcher, fired: list[str]) -> None:
    assert matcher.feed("a") is None
    assert matcher.buffer == ("a",)
    assert matcher.feed("b") == "X"
    assert fired == ["X"]
    assert matcher.buffer == ()


def test_dead_end_resets_then_fresh_sequence_works(
    matcher: KeymapMatcher, fired: list[str]
) -> None:
    matcher.feed("a")
    assert matcher.feed("z") is None
    assert matcher.buffer == ()
    assert fired == []
    assert matcher.feed("c") == "Y"
    assert fired == ["Y"]


def test_dead_end_is_not_retried_token_by_token(
    matcher: KeymapMatcher, fired: list[str]
) -> None:
    # "a" then "c": "c" alone would fire, but the whole buffer is discarded.
    matcher.feed("a")
    assert matcher.feed("c") is None
    assert fired == []


def test_unknown_root_key_resets(matcher: KeymapMatcher, fired: list[str]) -> None:
    assert matcher.feed("q") is None
    assert matcher.buffer == ()
    assert fired == []


def test_cancel_key_clears_buffer(
    matcher: KeymapMatcher, scheduler: FakeScheduler, fired: list[str]
) -> None:
    matcher.feed("a")
    assert matcher.feed("Escape") is None
    assert matcher.buffer == ()
    assert scheduler.live == []
    matcher.feed("b")
    assert fired == []


def test_timeout_clears_partial_chord(matcher: KeymapMatcher, scheduler: FakeScheduler) -> None:
    resets: list[bool] = []
    matcher.on_reset = lambda: resets.append(True)
    matcher.feed("a")
    scheduler.advance(0.999)
    assert matcher.buffer == ("a",)
    scheduler.advance(0.002)
    assert matcher.buffer == ()
    assert resets == [True]
    assert not matcher.pending


def test_each_key_rearms_a_single_timer(
    scheduler: FakeScheduler, fired: list[str]
) -> None:
    matcher = KeymapMatcher(
        {"a": {"b": {"c": "ABC"}}}, fired.append, scheduler=scheduler, timeout_ms=1000
    )
    matcher.feed("a")
    scheduler.advance(0.8)
    matcher.feed("b")
    assert len(scheduler.live) == 1
    # The first timer would have fired here; the buffer must survive.
    scheduler.advance(0.5)
    assert matcher.buffer == ("a", "b")
    assert matcher.feed("c") == "ABC"


def test_resolution_cancels_timer(matcher: KeymapMatcher, scheduler: FakeScheduler) -> None:
    matcher.feed("a")
    matcher.feed("b")
    assert scheduler.live == []
    assert not matcher.pending


def test_late_callback_from_replaced_timer_is_ignored(
    matcher: KeymapMatcher, scheduler: FakeScheduler
) -> None:
    matcher.feed("a")
    stale = scheduler.timers[0]
    matcher.cancel()
    matcher.feed("a")
    # A scheduler that fails to honour cancel() still cannot reset the new chord.
    stale.callback()
    assert matcher.buffer == ("a",)


def test_default_keymap_leader_chords(scheduler: FakeScheduler, fired: list[str]) -> None:
    matcher = KeymapMatcher(DEFAULT_KEYMAP, fired.append, scheduler=scheduler)
    for key in (LEADER, "c", "a", LEADER, "c", "f", "j", "k", "f2"):
        matcher.feed(key)
    assert fired == ["toggleFold", "foldAll", "moveDown", "moveUp", "nextBookmark"]


def test_hints_follow_the_buffer(scheduler: FakeScheduler, fired: list[str]) -> None:
    matcher = KeymapMatcher(DEFAULT_KEYMAP, fired.append, scheduler=scheduler)
    matcher.feed(LEADER)
    assert matcher.hints() == {
        "c": GROUP_HINT,
        "s": "toggleSearch",
        "z": "toggleZen",
        "b": "toggleFilter",
    }
    matcher.feed("c")
    assert matcher.hints() == {"a": "toggleFold", "f": "foldAll", "o": "unfoldAll"}


def test_lookup() -> None:
    assert lookup(TRIE, ["a", "b"]) == "X"
    assert lookup(TRIE, ["a"]) == {"b": "X"}
    assert lookup(TRIE, ["c", "d"]) is None
    assert lookup(TRIE, []) == TRIE
