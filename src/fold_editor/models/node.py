"""Domain models for the outline tree and the positions addressed over it."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TreeNode:
    """A single line of the outline with its owned subtree.

    ``folded`` only has a visible effect when ``children`` is non-empty.
    """

    id: str
    text: str
    folded: bool = False
    children: tuple["TreeNode", ...] = ()


Forest = tuple[TreeNode, ...]


@dataclass(frozen=True)
class FlattenedLine:
    """A visible line of the projection."""

    node: TreeNode
    depth: int
    line: int


@dataclass(frozen=True)
class Cursor:
    """A cursor placed on a node. ``offset`` is reserved and always 0."""

    node_id: str
    offset: int = 0


@dataclass(frozen=True)
class Bookmark:
    """A marker on a node.

    ``line`` is the projection line at creation time. Navigation resolves
    the live line through the current projection and only falls back to
    this value when no projection is given.
    """

    node_id: str
    line: int = -1
