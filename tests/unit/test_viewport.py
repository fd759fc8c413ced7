"""Tests for the virtualized viewport window."""

from fold_editor.core.viewport import compute_window


def test_window_at_top() -> None:
    window = compute_window(100, 22, 0, 440, overscan=3)
    assert window.start == 0
    assert window.end == 23
    assert window.total_height == 2200
    assert window.offset_y == 0
    assert list(window.indices) == list(range(24))


def test_window_scrolled_applies_overscan_both_sides() -> None:
    window = compute_window(100, 22, 220, 440, overscan=3)
    assert window.start == 7
    assert window.end == 33
    assert window.offset_y == 7 * 22


def test_window_clamps_to_last_item() -> None:
    window = compute_window(100, 22, 2100, 440, overscan=3)
    assert window.end == 99
    assert window.start == 92
    assert window.stop == 100


def test_window_scrolled_past_the_end_stays_in_bounds() -> None:
    window = compute_window(10, 22, 10_000, 440, overscan=3)
    assert 0 <= window.start <= window.end == 9


def test_empty_list() -> None:
    window = compute_window(0, 22, 0, 440)
    assert window.start == 0
    assert len(window) == 0
    assert list(window.indices) == []
    assert window.total_height == 0


def test_zero_height_viewport() -> None:
    window = compute_window(100, 22, 0, 0, overscan=3)
    assert window.start == 0
    assert window.end == 3


def test_non_positive_item_height_is_empty() -> None:
    assert len(compute_window(10, 0, 0, 100)) == 0
