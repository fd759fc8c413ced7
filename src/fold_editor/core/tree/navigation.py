"""Tree navigation: node lookup, parents, first children, breadcrumbs."""

from dataclasses import dataclass, field

from fold_editor.models.node import Forest, TreeNode


@dataclass(frozen=True)
class TreeIndex:
    """Id-keyed lookup tables over one forest value.

    Built in a single pre-order pass; ``parent_of`` maps each node id to
    its parent id (None for roots).
    """

    nodes: dict[str, TreeNode] = field(default_factory=dict)
    parent_of: dict[str, str | None] = field(default_factory=dict)
    depth_of: dict[str, int] = field(default_factory=dict)

    @classmethod
    def build(cls, forest: Forest) -> "TreeIndex":
        index = cls()
        todo: list[tuple[TreeNode, str | None, int]] = [(n, None, 0) for n in reversed(forest)]
        while todo:
            node, parent_id, depth = todo.pop()
            index.nodes[node.id] = node
            index.parent_of[node.id] = parent_id
            index.depth_of[node.id] = depth
            todo.extend((child, node.id, depth + 1) for child in reversed(node.children))
        return index

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes


def find_node(forest: Forest, node_id: str) -> TreeNode | None:
    """Return the node with ``node_id``, searching folded subtrees too."""
    todo = list(reversed(forest))
    while todo:
        node = todo.pop()
        if node.id == node_id:
            return node
        todo.extend(reversed(node.children))
    return None


def find_parent(forest: Forest, node_id: str) -> TreeNode | None:
    """Return the structural parent of ``node_id``; None for roots and unknown ids."""
    index = TreeIndex.build(forest)
    parent_id = index.parent_of.get(node_id)
    return index.nodes[parent_id] if parent_id is not None else None


def find_first_child(forest: Forest, node_id: str) -> TreeNode | None:
    """Return the first child of ``node_id``; None for leaves and unknown ids."""
    node = find_node(forest, node_id)
    if node is None or not node.children:
        return None
    return node.children[0]


def node_path(forest: Forest, node_id: str) -> tuple[TreeNode, ...]:
    """Get the breadcrumb chain for a node.

    Returns nodes in order from the root down to the node itself, or an
    empty tuple when the id is not in the forest.
    """
    index = TreeIndex.build(forest)
    if node_id not in index:
        return ()

    path: list[TreeNode] = []
    current: str | None = node_id
    while current is not None:
        path.append(index.nodes[current])
        current = index.parent_of[current]
    return tuple(reversed(path))


def ancestor_at_depth(forest: Forest, node_id: str, depth: int) -> TreeNode | None:
    """Return the ancestor (or the node itself) sitting at ``depth``.

    Used to resolve which node an indent guide column belongs to.
    """
    path = node_path(forest, node_id)
    if not 0 <= depth < len(path):
        return None
    return path[depth]
