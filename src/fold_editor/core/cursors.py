"""Multi-cursor navigation over the current projection.

Cursors are addressed by node id. Vertical moves resolve against the
visible lines; parent/child moves follow the forest structure and ignore
fold state. Every function returns a new ``(cursors, active)`` pair and
degrades to a no-op on stale ids, empty sets and out-of-range indexes.
"""

from loguru import logger

from fold_editor.core.tree.flatten import Projection
from fold_editor.core.tree.navigation import find_first_child, find_parent
from fold_editor.models.node import Cursor, Forest

Cursors = tuple[Cursor, ...]


def active_node_id(cursors: Cursors, active: int) -> str | None:
    """Node id under the active cursor, or None when there is none."""
    if 0 <= active < len(cursors):
        return cursors[active].node_id
    return None


def _replace_at(cursors: Cursors, index: int, node_id: str) -> Cursors:
    return (*cursors[:index], Cursor(node_id=node_id), *cursors[index + 1 :])


def move_cursor(
    cursors: Cursors, active: int, node_id: str, *, offset: int = 0, index: int | None = None
) -> Cursors:
    """Place cursor ``index`` (default: the active one) on ``node_id``."""
    target = active if index is None else index
    if not 0 <= target < len(cursors):
        return cursors
    return (*cursors[:target], Cursor(node_id=node_id, offset=offset), *cursors[target + 1 :])


def _step(cursors: Cursors, active: int, projection: Projection, delta: int) -> Cursors:
    node_id = active_node_id(cursors, active)
    line = projection.index_of(node_id)
    if line < 0:
        if node_id is not None:
            logger.debug("Cursor on {} is not visible, move ignored", node_id)
        return cursors
    target = projection.node_id_at(line + delta)
    if target is None:
        return cursors
    return _replace_at(cursors, active, target)


def move_down(cursors: Cursors, active: int, projection: Projection) -> Cursors:
    """Move the active cursor to the next visible line."""
    return _step(cursors, active, projection, 1)


def move_up(cursors: Cursors, active: int, projection: Projection) -> Cursors:
    """Move the active cursor to the previous visible line."""
    return _step(cursors, active, projection, -1)


def go_to_parent(cursors: Cursors, active: int, forest: Forest) -> Cursors:
    """Move the active cursor to its node's parent. No-op at a root."""
    node_id = active_node_id(cursors, active)
    if node_id is None:
        return cursors
    parent = find_parent(forest, node_id)
    if parent is None:
        return cursors
    return _replace_at(cursors, active, parent.id)


def go_to_first_child(cursors: Cursors, active: int, forest: Forest) -> Cursors:
    """Move the active cursor to its node's first child.

    Does not unfold: the child may be hidden until its parent is unfolded.
    """
    node_id = active_node_id(cursors, active)
    if node_id is None:
        return cursors
    child = find_first_child(forest, node_id)
    if child is None:
        return cursors
    return _replace_at(cursors, active, child.id)


def add_cursor(cursors: Cursors, active: int, cursor: Cursor) -> tuple[Cursors, int]:
    """Append a cursor; the active index is kept."""
    return (*cursors, cursor), active


def remove_cursor(cursors: Cursors, active: int, index: int) -> tuple[Cursors, int]:
    """Remove cursor ``index`` and clamp the active index back into range."""
    if not 0 <= index < len(cursors):
        return cursors, active
    remaining = cursors[:index] + cursors[index + 1 :]
    if index < active:
        active -= 1
    return remaining, max(0, min(active, len(remaining) - 1))


def set_cursors(cursors: Cursors) -> tuple[Cursors, int]:
    """Replace the whole set. The active index always resets to 0."""
    return tuple(cursors), 0


def set_active_cursor(cursors: Cursors, active: int, index: int) -> int:
    """Select cursor ``index`` as active; out-of-range indexes are ignored."""
    return index if 0 <= index < len(cursors) else active
