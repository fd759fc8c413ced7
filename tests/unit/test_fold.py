"""Tests for fold transforms."""

from fold_editor.core.tree.flatten import flatten
from fold_editor.core.tree.fold import (
    fold_all,
    toggle_fold,
    unfold_all,
    unfold_to_node,
    unfold_to_nodes,
)
from fold_editor.core.tree.navigation import TreeIndex, node_path
from fold_editor.models.node import Forest
from tests.unit.samples import by_text


def test_toggle_fold_flips_only_target(project_forest: Forest) -> None:
    backend = by_text(project_forest, "Backend")
    folded = toggle_fold(project_forest, backend.id)
    assert by_text(folded, "Backend").folded is True
    others = [n for n in TreeIndex.build(folded).nodes.values() if n.id != backend.id]
    assert not any(n.folded for n in others)


def test_toggle_fold_twice_is_identity(project_forest: Forest) -> None:
    backend = by_text(project_forest, "Backend")
    assert toggle_fold(toggle_fold(project_forest, backend.id), backend.id) == project_forest


def test_toggle_fold_shares_unrelated_subtrees(project_forest: Forest) -> None:
    backend = by_text(project_forest, "Backend")
    folded = toggle_fold(project_forest, backend.id)
    # "Notes" root and the "Frontend" subtree are reused as-is.
    assert folded[1] is project_forest[1]
    assert folded[0].children[1] is project_forest[0].children[1]
    assert folded[0] is not project_forest[0]


def test_toggle_fold_keeps_ids(project_forest: Forest) -> None:
    backend = by_text(project_forest, "Backend")
    folded = toggle_fold(project_forest, backend.id)
    assert set(TreeIndex.build(folded).nodes) == set(TreeIndex.build(project_forest).nodes)


def test_toggle_fold_unknown_id_returns_same_forest(project_forest: Forest) -> None:
    assert toggle_fold(project_forest, "missing") is project_forest


def test_fold_all_folds_only_parents(project_forest: Forest) -> None:
    folded = fold_all(project_forest)
    for node in TreeIndex.build(folded).nodes.values():
        assert node.folded == bool(node.children)


def test_fold_all_is_idempotent(project_forest: Forest) -> None:
    once = fold_all(project_forest)
    assert fold_all(once) == once
    assert fold_all(once) is once


def test_unfold_all_is_idempotent(project_forest: Forest) -> None:
    unfolded = unfold_all(fold_all(project_forest))
    assert unfold_all(unfolded) == unfolded
    assert unfolded == project_forest


def test_unfold_to_node_opens_every_ancestor(project_forest: Forest) -> None:
    folded = fold_all(project_forest)
    target = by_text(folded, "Database schema")
    opened = unfold_to_node(folded, target.id)

    ancestors = node_path(opened, target.id)[:-1]
    assert [n.text for n in ancestors] == ["Project", "Backend"]
    assert not any(n.folded for n in ancestors)
    assert target.id in {line.node.id for line in flatten(opened)}


def test_unfold_to_node_leaves_other_branches_folded(project_forest: Forest) -> None:
    folded = fold_all(project_forest)
    target = by_text(folded, "Database schema")
    opened = unfold_to_node(folded, target.id)
    assert by_text(opened, "Frontend").folded is True
    assert by_text(opened, "Notes").folded is True


def test_unfold_to_node_keeps_target_fold_state(project_forest: Forest) -> None:
    folded = fold_all(project_forest)
    backend = by_text(folded, "Backend")
    opened = unfold_to_node(folded, backend.id)
    assert by_text(opened, "Project").folded is False
    assert by_text(opened, "Backend").folded is True


def test_unfold_to_missing_node_is_unchanged(project_forest: Forest) -> None:
    folded = fold_all(project_forest)
    assert unfold_to_node(folded, "missing") is folded


def test_unfold_to_nodes_handles_several_targets(project_forest: Forest) -> None:
    folded = fold_all(project_forest)
    targets = [by_text(folded, "Login page").id, by_text(folded, "Meeting with api team").id]
    opened = unfold_to_nodes(folded, targets)
    visible = {line.node.id for line in flatten(opened)}
    assert set(targets) <= visible
    assert by_text(opened, "Backend").folded is True
