"""Parse indented text into a forest and serialize it back."""

import io

from fold_editor.core.tree.ids import IdGenerator
from fold_editor.models.node import Forest, TreeNode


class _Draft:
    """Mutable node used while the level stack is being built."""

    __slots__ = ("children", "id", "text")

    def __init__(self, node_id: str, text: str) -> None:
        self.id = node_id
        self.text = text
        self.children: list[_Draft] = []

    def freeze(self) -> TreeNode:
        return TreeNode(
            id=self.id,
            text=self.text,
            children=tuple(child.freeze() for child in self.children),
        )


def parse(
    text: str,
    indent_size: int = 2,
    expand_tab: bool = True,
    *,
    ids: IdGenerator | None = None,
) -> Forest:
    """Parse indented text into a forest.

    A line's level is ``leading_whitespace // indent_size``. Blank lines are
    skipped. Irregular indentation is never rejected: a deeper line becomes
    a child of the nearest shallower line above it.

    Args:
        text: Source text, one node per non-blank line.
        indent_size: Spaces per level; values below 1 are treated as 1.
        expand_tab: Replace each tab with ``indent_size`` spaces before measuring.
        ids: Id source. A fresh generator is used when omitted.

    Returns:
        Tuple of root nodes, all unfolded.
    """
    ids = ids or IdGenerator()
    indent_size = max(1, indent_size)
    tab = " " * indent_size

    roots: list[_Draft] = []
    stack: list[tuple[int, _Draft]] = []

    for raw_line in text.split("\n"):
        line = raw_line.rstrip("\r")
        if expand_tab:
            line = line.replace("\t", tab)
        if not line.strip():
            continue

        content = line.lstrip()
        level = (len(line) - len(content)) // indent_size

        while stack and stack[-1][0] >= level:
            stack.pop()

        draft = _Draft(ids.next_id(), content)
        if stack:
            stack[-1][1].children.append(draft)
        else:
            roots.append(draft)
        stack.append((level, draft))

    return tuple(draft.freeze() for draft in roots)


def serialize(forest: Forest, indent_size: int = 2) -> str:
    """Render a forest as indented text, one node per line.

    Fold state is ignored: folded subtrees are written out in full.
    """
    indent_size = max(1, indent_size)
    out = io.StringIO()

    # Explicit stack of (node, depth), pushed in reverse to keep pre-order.
    todo: list[tuple[TreeNode, int]] = [(node, 0) for node in reversed(forest)]
    while todo:
        node, depth = todo.pop()
        out.write(f"{' ' * (indent_size * depth)}{node.text}\n")
        todo.extend((child, depth + 1) for child in reversed(node.children))

    return out.getvalue()
