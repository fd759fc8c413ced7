"""The aggregate editor state owned by the reducer."""

from dataclasses import dataclass
from typing import Literal

from fold_editor.config import EditorConfig
from fold_editor.models.node import Bookmark, Cursor, Forest

Mode = Literal["normal", "insert"]


@dataclass(frozen=True)
class EditorState:
    """Everything one open document session knows.

    Replaced wholesale by the reducer on every action; never mutated.
    """

    forest: Forest = ()
    cursors: tuple[Cursor, ...] = ()
    active_cursor: int = 0
    mode: Mode = "normal"
    key_buffer: tuple[str, ...] = ()
    search_query: str = ""
    search_results: frozenset[str] = frozenset()
    bookmarks: tuple[Bookmark, ...] = ()
    zen_mode: bool = False
    filter_text: str = ""
    show_search: bool = False
    show_filter: bool = False
    indent_size: int = 2
    expand_tab: bool = True
    light_highlight: bool = False


def initial_state(config: EditorConfig | None = None) -> EditorState:
    """Return the empty state for a new session."""
    config = config or EditorConfig()
    return EditorState(
        indent_size=config.indent_size,
        expand_tab=config.expand_tab,
        light_highlight=config.light_highlight,
    )
