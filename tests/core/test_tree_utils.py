"""Tests for forest query helpers."""

from tests.test_utils.tab_builders import make_tabs

from tabnest.core.tree_builder import build_forest
from tabnest.core.tree_types import Group, SubGroup, TreeNode
from tabnest.core.tree_utils import (
    find_group_in_tree,
    find_parent_node,
    flatten_sub_group_tab_ids,
    iter_sub_groups,
    validate_forest,
)


def _forest() -> list[TreeNode]:
    groups = [
        Group(id=1, title="Work", color="blue", collapsed=False),
        Group(id=2, title="Docs", color="blue", collapsed=False),
        Group(id=3, title="Bugs", color="blue", collapsed=True),
        Group(id=4, title="Home", color="red", collapsed=False),
    ]
    return build_forest(make_tabs(1, 2, 2, 3, 4), groups, None)


def test_find_group_in_tree_top_level() -> None:
    location = find_group_in_tree(_forest(), 4)

    assert location is not None
    assert location.is_parent
    assert location.parent_id is None
    assert location.node.title == "Home"


def test_find_group_in_tree_sub_group() -> None:
    location = find_group_in_tree(_forest(), 3)

    assert location is not None
    assert not location.is_parent
    assert location.parent_id == 1
    assert isinstance(location.node, SubGroup)


def test_find_group_in_tree_missing() -> None:
    assert find_group_in_tree(_forest(), 99) is None


def test_find_parent_node_ignores_sub_groups() -> None:
    """Test only top-level nodes are returned."""
    forest = _forest()

    assert find_parent_node(forest, 1) is forest[0]
    assert find_parent_node(forest, 2) is None


def test_flatten_sub_group_tab_ids_keeps_order() -> None:
    assert flatten_sub_group_tab_ids(_forest()[0]) == [2, 3, 4]


def test_iter_sub_groups_pairs_with_parent() -> None:
    pairs = [(parent.group_id, sg.group_id) for parent, sg in iter_sub_groups(_forest())]

    assert pairs == [(1, 2), (1, 3)]


def test_validate_forest_accepts_built_forest() -> None:
    assert validate_forest(_forest()) == []


def test_validate_forest_reports_duplicates() -> None:
    """Test a group listed both as parent and sub-group is reported."""
    node = TreeNode(
        group_id=1,
        title="",
        color="blue",
        collapsed=False,
        tabs=[],
        sub_groups=[SubGroup(group_id=1, title="", color="blue", collapsed=False, tabs=[])],
    )

    problems = validate_forest([node])

    assert problems == ["Group 1 appears more than once (sub-group of 1)"]
