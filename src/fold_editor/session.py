"""One open document: state, key handling, host messages and persistence."""

from collections.abc import Callable
from typing import Any

from loguru import logger

from fold_editor.config import EditorConfig, config_from_host
from fold_editor.core.cursors import active_node_id
from fold_editor.core.keymap import DEFAULT_KEYMAP, Keymap, KeymapMatcher
from fold_editor.core.state import actions as a
from fold_editor.core.state.reducer import projection_of, reduce
from fold_editor.core.tree.flatten import Projection
from fold_editor.core.tree.ids import IdGenerator
from fold_editor.core.tree.navigation import ancestor_at_depth, node_path
from fold_editor.core.tree.parser import parse, serialize
from fold_editor.core.view import RenderRow, visible_rows
from fold_editor.core.viewport import ViewportWindow, compute_window
from fold_editor.models.node import Bookmark, Cursor, TreeNode
from fold_editor.models.state import EditorState, initial_state
from fold_editor.protocols import SchedulerProtocol


class EditorSession:
    """Drive an ``EditorState`` from host text, config and key events.

    All changes go through ``dispatch``, which feeds the reducer one action
    at a time; the session itself only holds the latest state, the last
    loaded text and the key matcher.
    """

    def __init__(
        self,
        *,
        scheduler: SchedulerProtocol,
        config: EditorConfig | None = None,
        keymap: Keymap = DEFAULT_KEYMAP,
        ids: IdGenerator | None = None,
    ) -> None:
        self.config = config or EditorConfig()
        self.state: EditorState = initial_state(self.config)
        self.ids = ids or IdGenerator()
        self.text = ""
        self.matcher = KeymapMatcher(
            keymap,
            self.run_command,
            scheduler=scheduler,
            timeout_ms=self.config.key_timeout_ms,
            on_reset=lambda: self.dispatch(a.ClearKeyBuffer()),
        )
        self._commands: dict[str, Callable[[], a.Action | None]] = {
            "toggleFold": self._toggle_fold_at_cursor,
            "foldAll": a.FoldAll,
            "unfoldAll": a.UnfoldAll,
            "moveDown": a.MoveDown,
            "moveUp": a.MoveUp,
            "goToParent": a.GoToParent,
            "goToFirstChild": a.GoToFirstChild,
            "searchMode": lambda: a.SetShowSearch(True),
            "toggleSearch": lambda: a.SetShowSearch(not self.state.show_search),
            "toggleZen": a.ToggleZenMode,
            "toggleFilter": lambda: a.SetShowFilter(not self.state.show_filter),
            "toggleBookmark": a.ToggleBookmark,
            "nextBookmark": a.NextBookmark,
            "prevBookmark": a.PrevBookmark,
        }

    def dispatch(self, action: object) -> EditorState:
        """Apply ``action`` and return the new state."""
        self.state = reduce(self.state, action)
        return self.state

    # Derived view state

    @property
    def projection(self) -> Projection:
        return projection_of(self.state)

    @property
    def active_node_id(self) -> str | None:
        return active_node_id(self.state.cursors, self.state.active_cursor)

    def breadcrumbs(self) -> tuple[TreeNode, ...]:
        """Root-to-node chain for the active cursor."""
        node_id = self.active_node_id
        return node_path(self.state.forest, node_id) if node_id else ()

    def window(self, scroll_top: float, viewport_height: float) -> ViewportWindow:
        return compute_window(
            len(self.projection),
            self.config.line_height,
            scroll_top,
            viewport_height,
            self.config.overscan,
        )

    def rows(self, scroll_top: float, viewport_height: float) -> tuple[RenderRow, ...]:
        """Render rows for the current scroll position."""
        projection = self.projection
        window = compute_window(
            len(projection),
            self.config.line_height,
            scroll_top,
            viewport_height,
            self.config.overscan,
        )
        return visible_rows(self.state, window, projection)

    # Text and config

    def load_text(self, text: str) -> EditorState:
        """Reparse ``text`` into a fresh forest (new ids).

        Existing cursors and bookmarks are kept even if they went stale. When
        there is no cursor yet, one is seated on the first visible line.
        """
        self.text = text
        forest = parse(text, self.state.indent_size, self.state.expand_tab, ids=self.ids)
        self.dispatch(a.SetTree(forest))
        logger.debug("Loaded {} root nodes", len(forest))
        if not self.state.cursors:
            first = self.projection.node_id_at(0)
            if first is not None:
                self.dispatch(a.SetCursors((Cursor(node_id=first),)))
        return self.state

    def apply_config(self, config: EditorConfig) -> EditorState:
        """Adopt new options; reparse when the indentation settings changed."""
        reparse = (config.indent_size, config.expand_tab) != (
            self.state.indent_size,
            self.state.expand_tab,
        )
        self.config = config
        self.matcher.timeout_ms = config.key_timeout_ms
        self.dispatch(a.SetIndentSize(config.indent_size))
        self.dispatch(a.SetExpandTab(config.expand_tab))
        self.dispatch(a.SetLightHighlight(config.light_highlight))
        if reparse and self.text:
            self.load_text(self.text)
        return self.state

    def serialize(self) -> str:
        """Current forest as text, for writing back to the host document."""
        return serialize(self.state.forest, self.state.indent_size)

    def handle_message(self, message: dict[str, Any]) -> EditorState:
        """Handle a host message: ``update`` (new text) or ``config``."""
        kind = message.get("type")
        if kind == "update" and isinstance(message.get("content"), str):
            return self.load_text(message["content"])
        if kind == "config" and isinstance(message.get("config"), dict):
            return self.apply_config(config_from_host(message["config"], self.config))
        logger.debug("Ignoring host message {!r}", kind)
        return self.state

    # Input

    def handle_key(self, key: str) -> str | None:
        """Feed one key token; returns the command it completed, if any."""
        fired = self.matcher.feed(key)
        buffer = self.matcher.buffer
        if buffer:
            self.dispatch(a.PushKey(key))
        elif self.state.key_buffer:
            self.dispatch(a.ClearKeyBuffer())
        return fired

    def run_command(self, name: str) -> EditorState:
        """Run a keymap command by name. Unknown names are ignored."""
        make = self._commands.get(name)
        if make is None:
            logger.debug("Ignoring unknown command {!r}", name)
            return self.state
        action = make()
        if action is not None:
            self.dispatch(action)
        return self.state

    def _toggle_fold_at_cursor(self) -> a.Action | None:
        node_id = self.active_node_id
        return a.ToggleFold(node_id) if node_id else None

    def click(self, node_id: str, *, add: bool = False) -> EditorState:
        """Put the cursor on ``node_id``; with ``add``, add another cursor instead."""
        if add:
            return self.dispatch(a.AddCursor(Cursor(node_id=node_id)))
        return self.dispatch(a.SetCursors((Cursor(node_id=node_id),)))

    def toggle_guide(self, node_id: str, depth: int) -> EditorState:
        """Toggle the fold of the ancestor owning the indent guide at ``depth``."""
        owner = ancestor_at_depth(self.state.forest, node_id, depth)
        if owner is None:
            return self.state
        return self.dispatch(a.ToggleFold(owner.id))

    def search(self, query: str) -> EditorState:
        self.dispatch(a.SetSearch(query))
        return self.dispatch(a.SetShowSearch(False))

    def set_filter(self, text: str) -> EditorState:
        return self.dispatch(a.SetFilterText(text))

    # Persistence

    def snapshot(self) -> dict[str, Any]:
        """The persisted part of the session: cursors and bookmarks."""
        return {
            "cursors": [{"node_id": c.node_id, "offset": c.offset} for c in self.state.cursors],
            "bookmarks": [{"node_id": b.node_id, "line": b.line} for b in self.state.bookmarks],
        }

    def restore(self, data: dict[str, Any]) -> EditorState:
        """Restore cursors and bookmarks saved by ``snapshot``.

        Malformed entries are skipped; everything else keeps its default.
        """
        cursors = tuple(
            Cursor(node_id=entry["node_id"], offset=int(entry.get("offset", 0)))
            for entry in _entries(data.get("cursors"))
        )
        bookmarks = tuple(
            Bookmark(node_id=entry["node_id"], line=int(entry.get("line", -1)))
            for entry in _entries(data.get("bookmarks"))
        )
        return self.dispatch(a.RestoreSession(cursors=cursors, bookmarks=bookmarks))


def _entries(raw: Any) -> list[dict[str, Any]]:
    """Keep list items that are dicts with a string ``node_id`` and int-like fields."""
    if not isinstance(raw, list):
        return []
    valid: list[dict[str, Any]] = []
    for entry in raw:
        if not isinstance(entry, dict) or not isinstance(entry.get("node_id"), str):
            logger.debug("Skipping persisted entry {!r}", entry)
            continue
        if not all(_is_int(entry[k]) for k in ("offset", "line") if k in entry):
            logger.debug("Skipping persisted entry {!r}", entry)
            continue
        valid.append(entry)
    return valid


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
