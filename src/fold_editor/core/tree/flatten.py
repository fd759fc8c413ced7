"""Flatten a forest into the ordered list of visible lines."""

from dataclasses import dataclass, field

from fold_editor.models.node import FlattenedLine, Forest, TreeNode


def flatten(forest: Forest) -> tuple[FlattenedLine, ...]:
    """Walk the forest in pre-order, skipping the children of folded nodes.

    Line indexes are assigned in visitation order starting at 0.
    """
    result: list[FlattenedLine] = []
    todo: list[tuple[TreeNode, int]] = [(node, 0) for node in reversed(forest)]
    while todo:
        node, depth = todo.pop()
        result.append(FlattenedLine(node=node, depth=depth, line=len(result)))
        if not node.folded:
            todo.extend((child, depth + 1) for child in reversed(node.children))
    return tuple(result)


def filter_lines(lines: tuple[FlattenedLine, ...], text: str) -> tuple[FlattenedLine, ...]:
    """Keep lines whose text contains ``text``, case-insensitively.

    Runs on the already flattened lines, so hidden descendants of folded
    nodes can never be matched. Surviving lines are renumbered from 0.
    An empty ``text`` keeps every line.
    """
    if not text:
        return lines
    needle = text.lower()
    kept = [line for line in lines if needle in line.node.text.lower()]
    return tuple(
        FlattenedLine(node=line.node, depth=line.depth, line=i) for i, line in enumerate(kept)
    )


@dataclass(frozen=True)
class Projection:
    """The visible lines plus a node-id -> line-index lookup."""

    lines: tuple[FlattenedLine, ...] = ()
    line_of: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_lines(cls, lines: tuple[FlattenedLine, ...]) -> "Projection":
        return cls(lines=lines, line_of={line.node.id: line.line for line in lines})

    def __len__(self) -> int:
        return len(self.lines)

    def index_of(self, node_id: str | None) -> int:
        """Line index of ``node_id``, or -1 when it is not visible."""
        if node_id is None:
            return -1
        return self.line_of.get(node_id, -1)

    def node_id_at(self, line: int) -> str | None:
        if 0 <= line < len(self.lines):
            return self.lines[line].node.id
        return None


def project(forest: Forest, filter_text: str = "") -> Projection:
    """Flatten ``forest`` and apply the optional line filter."""
    return Projection.from_lines(filter_lines(flatten(forest), filter_text))
