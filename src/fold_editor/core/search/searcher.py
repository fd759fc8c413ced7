"""Substring search over every node of a forest."""

from fold_editor.models.node import Forest


def search_nodes(forest: Forest, query: str) -> frozenset[str]:
    """Return ids of nodes whose text contains ``query``, case-insensitively.

    Folded subtrees are searched too. This is a pure query: making the hits
    visible is left to the caller.

    Args:
        forest: The forest to search.
        query: Substring to look for. An empty query matches every node.

    Returns:
        Set of matching node ids.
    """
    needle = query.lower()
    hits: set[str] = set()
    todo = list(forest)
    while todo:
        node = todo.pop()
        if needle in node.text.lower():
            hits.add(node.id)
        todo.extend(node.children)
    return frozenset(hits)
