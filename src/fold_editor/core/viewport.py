"""Virtualized window: which rows to render for a scroll position."""

import math
from dataclasses import dataclass

from fold_editor.config import OVERSCAN


@dataclass(frozen=True)
class ViewportWindow:
    """Rows ``start`` up to (excluding) ``stop`` plus the layout offsets."""

    start: int
    stop: int
    total_height: int
    offset_y: int

    @property
    def end(self) -> int:
        """Last rendered index (inclusive); ``start - 1`` when empty."""
        return self.stop - 1

    @property
    def indices(self) -> range:
        return range(self.start, self.stop)

    def __len__(self) -> int:
        return self.stop - self.start


def compute_window(
    item_count: int,
    item_height: int,
    scroll_top: float,
    viewport_height: float,
    overscan: int = OVERSCAN,
) -> ViewportWindow:
    """Compute the index range to render.

    ``start = max(0, floor(s / h) - O)`` and ``end = min(N - 1, ceil((s + H) / h) + O)``,
    clamped so the range stays inside ``[0, N)`` for any input.
    """
    item_count = max(0, item_count)
    if item_height <= 0 or item_count == 0:
        return ViewportWindow(start=0, stop=0, total_height=0, offset_y=0)

    scroll_top = max(0.0, scroll_top)
    viewport_height = max(0.0, viewport_height)
    overscan = max(0, overscan)

    end = min(item_count - 1, math.ceil((scroll_top + viewport_height) / item_height) + overscan)
    start = min(max(0, math.floor(scroll_top / item_height) - overscan), end)
    return ViewportWindow(
        start=start,
        stop=end + 1,
        total_height=item_count * item_height,
        offset_y=start * item_height,
    )
