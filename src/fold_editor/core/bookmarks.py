"""Bookmark registry with cyclic next/previous navigation."""

from collections.abc import Iterator, Mapping

from fold_editor.models.node import Bookmark

Bookmarks = tuple[Bookmark, ...]


def toggle_bookmark(bookmarks: Bookmarks, node_id: str, current_line: int) -> Bookmarks:
    """Remove the bookmark on ``node_id`` if there is one, else append one."""
    if any(b.node_id == node_id for b in bookmarks):
        return remove_bookmark(bookmarks, node_id)
    return (*bookmarks, Bookmark(node_id=node_id, line=current_line))


def remove_bookmark(bookmarks: Bookmarks, node_id: str) -> Bookmarks:
    return tuple(b for b in bookmarks if b.node_id != node_id)


def _resolved(
    bookmarks: Bookmarks, line_of: Mapping[str, int] | None
) -> Iterator[tuple[Bookmark, int]]:
    """Yield ``(bookmark, line)`` in registry order.

    With ``line_of`` the live line is looked up and bookmarks on nodes that
    are not visible are skipped (left in the registry). Without it the line
    captured at creation is used.
    """
    for bookmark in bookmarks:
        if line_of is None:
            yield bookmark, bookmark.line
        elif bookmark.node_id in line_of:
            yield bookmark, line_of[bookmark.node_id]


def next_bookmark(
    bookmarks: Bookmarks, current_line: int, line_of: Mapping[str, int] | None = None
) -> Bookmark | None:
    """Return the first bookmark below ``current_line``, wrapping to the first one.

    Returns None when no bookmark can be resolved.
    """
    candidates = list(_resolved(bookmarks, line_of))
    if not candidates:
        return None
    for bookmark, line in candidates:
        if line > current_line:
            return bookmark
    return candidates[0][0]


def prev_bookmark(
    bookmarks: Bookmarks, current_line: int, line_of: Mapping[str, int] | None = None
) -> Bookmark | None:
    """Return the last bookmark above ``current_line``, wrapping to the last one."""
    candidates = list(_resolved(bookmarks, line_of))
    if not candidates:
        return None
    for bookmark, line in reversed(candidates):
        if line < current_line:
            return bookmark
    return candidates[-1][0]
