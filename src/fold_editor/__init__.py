"""Outline editor core: indentation tree, folding, cursors, bookmarks and key chords."""

from fold_editor.config import EditorConfig, load_config
from fold_editor.core.state.reducer import reduce
from fold_editor.core.tree.parser import parse, serialize
from fold_editor.models.node import Bookmark, Cursor, FlattenedLine, TreeNode
from fold_editor.models.state import EditorState
from fold_editor.protocols import SchedulerProtocol
from fold_editor.session import EditorSession

__all__ = [
    "Bookmark",
    "Cursor",
    "EditorConfig",
    "EditorSession",
    "EditorState",
    "FlattenedLine",
    "SchedulerProtocol",
    "TreeNode",
    "load_config",
    "parse",
    "reduce",
    "serialize",
]
