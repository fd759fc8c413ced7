"""Tagged actions accepted by the reducer."""

from dataclasses import dataclass

from fold_editor.models.node import Bookmark, Cursor, Forest
from fold_editor.models.state import Mode


@dataclass(frozen=True)
class SetTree:
    forest: Forest


@dataclass(frozen=True)
class MoveCursor:
    node_id: str
    offset: int = 0
    index: int | None = None


@dataclass(frozen=True)
class AddCursor:
    cursor: Cursor


@dataclass(frozen=True)
class RemoveCursor:
    index: int


@dataclass(frozen=True)
class SetCursors:
    cursors: tuple[Cursor, ...]


@dataclass(frozen=True)
class SetActiveCursor:
    index: int


@dataclass(frozen=True)
class SetMode:
    mode: Mode


@dataclass(frozen=True)
class PushKey:
    key: str


@dataclass(frozen=True)
class ClearKeyBuffer:
    pass


@dataclass(frozen=True)
class ToggleFold:
    node_id: str


@dataclass(frozen=True)
class FoldAll:
    pass


@dataclass(frozen=True)
class UnfoldAll:
    pass


@dataclass(frozen=True)
class UnfoldToNode:
    node_id: str


@dataclass(frozen=True)
class SetSearch:
    """Store the query; a non-empty one also searches and reveals every hit."""

    query: str


@dataclass(frozen=True)
class SetSearchResults:
    results: frozenset[str]


@dataclass(frozen=True)
class AddBookmark:
    bookmark: Bookmark


@dataclass(frozen=True)
class RemoveBookmark:
    node_id: str


@dataclass(frozen=True)
class SetBookmarks:
    bookmarks: tuple[Bookmark, ...]


@dataclass(frozen=True)
class ToggleBookmark:
    """Toggle a bookmark on ``node_id``, or on the active cursor when None."""

    node_id: str | None = None


@dataclass(frozen=True)
class NextBookmark:
    pass


@dataclass(frozen=True)
class PrevBookmark:
    pass


@dataclass(frozen=True)
class ToggleZenMode:
    pass


@dataclass(frozen=True)
class SetFilterText:
    text: str


@dataclass(frozen=True)
class SetShowFilter:
    show: bool


@dataclass(frozen=True)
class SetShowSearch:
    show: bool


@dataclass(frozen=True)
class MoveUp:
    pass


@dataclass(frozen=True)
class MoveDown:
    pass


@dataclass(frozen=True)
class GoToParent:
    pass


@dataclass(frozen=True)
class GoToFirstChild:
    pass


@dataclass(frozen=True)
class SetIndentSize:
    indent_size: int


@dataclass(frozen=True)
class SetExpandTab:
    expand_tab: bool


@dataclass(frozen=True)
class SetLightHighlight:
    light_highlight: bool


@dataclass(frozen=True)
class RestoreSession:
    """Restore the persisted part of a session: cursors and bookmarks."""

    cursors: tuple[Cursor, ...]
    bookmarks: tuple[Bookmark, ...]


Action = (
    SetTree
    | MoveCursor
    | AddCursor
    | RemoveCursor
    | SetCursors
    | SetActiveCursor
    | SetMode
    | PushKey
    | ClearKeyBuffer
    | ToggleFold
    | FoldAll
    | UnfoldAll
    | UnfoldToNode
    | SetSearch
    | SetSearchResults
    | AddBookmark
    | RemoveBookmark
    | SetBookmarks
    | ToggleBookmark
    | NextBookmark
    | PrevBookmark
    | ToggleZenMode
    | SetFilterText
    | SetShowFilter
    | SetShowSearch
    | MoveUp
    | MoveDown
    | GoToParent
    | GoToFirstChild
    | SetIndentSize
    | SetExpandTab
    | SetLightHighlight
    | RestoreSession
)
