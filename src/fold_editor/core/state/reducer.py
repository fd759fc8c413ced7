"""The single writer of editor state: ``reduce(state, action) -> state``.

The reducer is total and pure. Actions that reference missing nodes or
out-of-range indexes, and actions of unknown type, return the state unchanged.
"""

from collections.abc import Callable
from dataclasses import replace
from typing import Any

from loguru import logger

from fold_editor.core import bookmarks as bm
from fold_editor.core import cursors as cur
from fold_editor.core.search.searcher import search_nodes
from fold_editor.core.state import actions as a
from fold_editor.core.tree.flatten import Projection, project
from fold_editor.core.tree.fold import fold_all, toggle_fold, unfold_all, unfold_to_nodes
from fold_editor.models.node import Cursor
from fold_editor.models.state import EditorState


def projection_of(state: EditorState) -> Projection:
    """The visible lines for ``state``: fold-aware, then filtered."""
    return project(state.forest, state.filter_text)


def _active_line(state: EditorState, projection: Projection) -> int:
    return projection.index_of(cur.active_node_id(state.cursors, state.active_cursor))


def _move_cursor(state: EditorState, action: a.MoveCursor) -> EditorState:
    cursors = cur.move_cursor(
        state.cursors,
        state.active_cursor,
        action.node_id,
        offset=action.offset,
        index=action.index,
    )
    return replace(state, cursors=cursors)


def _add_cursor(state: EditorState, action: a.AddCursor) -> EditorState:
    cursors, active = cur.add_cursor(state.cursors, state.active_cursor, action.cursor)
    return replace(state, cursors=cursors, active_cursor=active)


def _remove_cursor(state: EditorState, action: a.RemoveCursor) -> EditorState:
    cursors, active = cur.remove_cursor(state.cursors, state.active_cursor, action.index)
    return replace(state, cursors=cursors, active_cursor=active)


def _set_cursors(state: EditorState, action: a.SetCursors) -> EditorState:
    cursors, active = cur.set_cursors(action.cursors)
    return replace(state, cursors=cursors, active_cursor=active)


def _set_active_cursor(state: EditorState, action: a.SetActiveCursor) -> EditorState:
    active = cur.set_active_cursor(state.cursors, state.active_cursor, action.index)
    return replace(state, active_cursor=active)


def _set_mode(state: EditorState, action: a.SetMode) -> EditorState:
    if action.mode not in ("normal", "insert"):
        logger.debug("Ignoring unknown mode {!r}", action.mode)
        return state
    return replace(state, mode=action.mode)


def _set_search(state: EditorState, action: a.SetSearch) -> EditorState:
    if not action.query:
        return replace(state, search_query="", search_results=frozenset())
    results = search_nodes(state.forest, action.query)
    # Every hit is made visible by unfolding the path down to it.
    forest = unfold_to_nodes(state.forest, results)
    return replace(state, search_query=action.query, search_results=results, forest=forest)


def _toggle_bookmark(state: EditorState, action: a.ToggleBookmark) -> EditorState:
    node_id = action.node_id or cur.active_node_id(state.cursors, state.active_cursor)
    if node_id is None:
        return state
    line = projection_of(state).index_of(node_id)
    return replace(state, bookmarks=bm.toggle_bookmark(state.bookmarks, node_id, line))


def _jump_to_bookmark(state: EditorState, *, forward: bool) -> EditorState:
    if not state.bookmarks:
        return state
    projection = projection_of(state)
    find = bm.next_bookmark if forward else bm.prev_bookmark
    target = find(state.bookmarks, _active_line(state, projection), projection.line_of)
    if target is None:
        logger.debug("No bookmark is visible, jump ignored")
        return state
    cursors, active = cur.set_cursors((Cursor(node_id=target.node_id),))
    return replace(state, cursors=cursors, active_cursor=active)


def _set_indent_size(state: EditorState, action: a.SetIndentSize) -> EditorState:
    if action.indent_size < 1:
        logger.debug("Ignoring indent size {!r}", action.indent_size)
        return state
    return replace(state, indent_size=action.indent_size)


def _restore_session(state: EditorState, action: a.RestoreSession) -> EditorState:
    cursors, active = cur.set_cursors(action.cursors)
    return replace(state, cursors=cursors, active_cursor=active, bookmarks=tuple(action.bookmarks))


_HANDLERS: dict[type, Callable[[EditorState, Any], EditorState]] = {
    a.SetTree: lambda s, act: replace(s, forest=act.forest),
    a.MoveCursor: _move_cursor,
    a.AddCursor: _add_cursor,
    a.RemoveCursor: _remove_cursor,
    a.SetCursors: _set_cursors,
    a.SetActiveCursor: _set_active_cursor,
    a.SetMode: _set_mode,
    a.PushKey: lambda s, act: replace(s, key_buffer=(*s.key_buffer, act.key)),
    a.ClearKeyBuffer: lambda s, act: replace(s, key_buffer=()),
    a.ToggleFold: lambda s, act: replace(s, forest=toggle_fold(s.forest, act.node_id)),
    a.FoldAll: lambda s, act: replace(s, forest=fold_all(s.forest)),
    a.UnfoldAll: lambda s, act: replace(s, forest=unfold_all(s.forest)),
    a.UnfoldToNode: lambda s, act: replace(s, forest=unfold_to_nodes(s.forest, (act.node_id,))),
    a.SetSearch: _set_search,
    a.SetSearchResults: lambda s, act: replace(s, search_results=frozenset(act.results)),
    a.AddBookmark: lambda s, act: replace(s, bookmarks=(*s.bookmarks, act.bookmark)),
    a.RemoveBookmark: lambda s, act: replace(
        s, bookmarks=bm.remove_bookmark(s.bookmarks, act.node_id)
    ),
    a.SetBookmarks: lambda s, act: replace(s, bookmarks=tuple(act.bookmarks)),
    a.ToggleBookmark: _toggle_bookmark,
    a.NextBookmark: lambda s, act: _jump_to_bookmark(s, forward=True),
    a.PrevBookmark: lambda s, act: _jump_to_bookmark(s, forward=False),
    a.ToggleZenMode: lambda s, act: replace(s, zen_mode=not s.zen_mode),
    a.SetFilterText: lambda s, act: replace(s, filter_text=act.text),
    a.SetShowFilter: lambda s, act: replace(s, show_filter=act.show),
    a.SetShowSearch: lambda s, act: replace(s, show_search=act.show),
    a.MoveUp: lambda s, act: replace(
        s, cursors=cur.move_up(s.cursors, s.active_cursor, projection_of(s))
    ),
    a.MoveDown: lambda s, act: replace(
        s, cursors=cur.move_down(s.cursors, s.active_cursor, projection_of(s))
    ),
    a.GoToParent: lambda s, act: replace(
        s, cursors=cur.go_to_parent(s.cursors, s.active_cursor, s.forest)
    ),
    a.GoToFirstChild: lambda s, act: replace(
        s, cursors=cur.go_to_first_child(s.cursors, s.active_cursor, s.forest)
    ),
    a.SetIndentSize: _set_indent_size,
    a.SetExpandTab: lambda s, act: replace(s, expand_tab=act.expand_tab),
    a.SetLightHighlight: lambda s, act: replace(s, light_highlight=act.light_highlight),
    a.RestoreSession: _restore_session,
}


def reduce(state: EditorState, action: object) -> EditorState:
    """Apply one action and return the next state."""
    handler = _HANDLERS.get(type(action))
    if handler is None:
        logger.debug("Ignoring unknown action {!r}", action)
        return state
    return handler(state, action)
