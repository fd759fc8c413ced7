"""Derived per-row view state for the rendered window."""

from dataclasses import dataclass

from fold_editor.core.cursors import active_node_id
from fold_editor.core.state.reducer import projection_of
from fold_editor.core.tree.flatten import Projection
from fold_editor.core.viewport import ViewportWindow
from fold_editor.models.node import FlattenedLine
from fold_editor.models.state import EditorState


@dataclass(frozen=True)
class RenderRow:
    """One visible line with the flags the host needs to draw it."""

    line: FlattenedLine
    is_cursor: bool
    is_active: bool
    is_bookmarked: bool
    is_search_result: bool
    relative_number: int


def visible_rows(
    state: EditorState, window: ViewportWindow, projection: Projection | None = None
) -> tuple[RenderRow, ...]:
    """Build render rows for every index in ``window``.

    ``relative_number`` is the distance to the active cursor's line, or the
    absolute line index when the active cursor is not visible.
    """
    projection = projection or projection_of(state)
    cursor_ids = {c.node_id for c in state.cursors}
    bookmark_ids = {b.node_id for b in state.bookmarks}
    active_id = active_node_id(state.cursors, state.active_cursor)
    active_line = projection.index_of(active_id)

    rows: list[RenderRow] = []
    for index in window.indices:
        if index >= len(projection):
            break
        line = projection.lines[index]
        node_id = line.node.id
        rows.append(
            RenderRow(
                line=line,
                is_cursor=node_id in cursor_ids,
                is_active=node_id == active_id,
                is_bookmarked=node_id in bookmark_ids,
                is_search_result=node_id in state.search_results,
                relative_number=abs(index - active_line) if active_line >= 0 else index,
            )
        )
    return tuple(rows)
