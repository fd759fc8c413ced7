"""Fold transforms: pure forest-to-forest functions.

Unchanged subtrees are returned as the same objects, and node ids are
never reassigned, so cursors and bookmarks survive any fold operation.
"""

from collections.abc import Callable, Collection
from dataclasses import replace

from fold_editor.models.node import Forest, TreeNode


def _map_forest(forest: Forest, fn: Callable[[TreeNode], TreeNode | None]) -> Forest:
    """Apply ``fn`` bottom-up; a None result keeps the node's own fields."""

    def visit(node: TreeNode) -> TreeNode:
        children = tuple(visit(child) for child in node.children)
        if any(new is not old for new, old in zip(children, node.children, strict=True)):
            node = replace(node, children=children)
        return fn(node) or node

    mapped = tuple(visit(node) for node in forest)
    if all(new is old for new, old in zip(mapped, forest, strict=True)):
        return forest
    return mapped


def toggle_fold(forest: Forest, node_id: str) -> Forest:
    """Flip ``folded`` on the node with ``node_id``; nothing else changes."""
    return _map_forest(
        forest, lambda node: replace(node, folded=not node.folded) if node.id == node_id else None
    )


def fold_all(forest: Forest) -> Forest:
    """Fold every node that has children; leaves end up unfolded."""

    def fold(node: TreeNode) -> TreeNode | None:
        wanted = bool(node.children)
        return replace(node, folded=wanted) if node.folded != wanted else None

    return _map_forest(forest, fold)


def unfold_all(forest: Forest) -> Forest:
    """Unfold every node."""
    return _map_forest(forest, lambda node: replace(node, folded=False) if node.folded else None)


def unfold_to_nodes(forest: Forest, target_ids: Collection[str]) -> Forest:
    """Unfold every ancestor of every node in ``target_ids``.

    The targets themselves keep their fold state. Unknown ids are ignored.
    """
    targets = set(target_ids)
    if not targets:
        return forest

    def visit(node: TreeNode) -> tuple[TreeNode, bool]:
        """Return the rewritten node and whether its subtree holds a target."""
        found_below = False
        children: list[TreeNode] = []
        for child in node.children:
            new_child, found = visit(child)
            children.append(new_child)
            found_below = found_below or found

        if found_below:
            new_children = tuple(children)
            if node.folded or any(
                new is not old for new, old in zip(new_children, node.children, strict=True)
            ):
                node = replace(node, folded=False, children=new_children)
        return node, found_below or node.id in targets

    mapped = tuple(visit(node)[0] for node in forest)
    if all(new is old for new, old in zip(mapped, forest, strict=True)):
        return forest
    return mapped


def unfold_to_node(forest: Forest, target_id: str) -> Forest:
    """Unfold every ancestor of ``target_id`` so it becomes visible."""
    return unfold_to_nodes(forest, (target_id,))
