"""Tests for color-adjacency tree building."""

from tests.test_utils.tab_builders import make_tabs

from tabnest.core.tree_builder import build_forest
from tabnest.core.tree_types import Group, SubGroup, Tab, TreeNode


def _group(group_id: int, color: str, title: str = "") -> Group:
    return Group(id=group_id, title=title, color=color, collapsed=False)


def test_adjacent_same_color_group_becomes_sub_group() -> None:
    """Test the basic parent/sub-group layout."""
    tabs = make_tabs(1, 1, 2, 2)
    groups = [_group(1, "blue", "Work"), _group(2, "blue", "Docs")]

    forest = build_forest(tabs, groups, None)

    assert forest == [
        TreeNode(
            group_id=1,
            title="Work",
            color="blue",
            collapsed=False,
            tabs=tabs[:2],
            sub_groups=[
                SubGroup(group_id=2, title="Docs", color="blue", collapsed=False, tabs=tabs[2:])
            ],
        )
    ]


def test_different_colors_stay_top_level() -> None:
    """Test adjacent groups of different colors are siblings."""
    tabs = make_tabs(1, 2)
    forest = build_forest(tabs, [_group(1, "red"), _group(2, "blue")], None)

    assert [node.group_id for node in forest] == [1, 2]
    assert all(node.sub_groups == [] for node in forest)


def test_ungrouped_tab_breaks_adjacency() -> None:
    """Test same-colored groups separated by an ungrouped tab never merge."""
    tabs = make_tabs(1, None, 2)
    forest = build_forest(tabs, [_group(1, "blue"), _group(2, "blue")], None)

    assert [node.group_id for node in forest] == [1, 2]
    assert forest[1].sub_groups == []


def test_other_colored_group_breaks_adjacency() -> None:
    """Test a differently colored group between two blue groups keeps them apart."""
    tabs = make_tabs(1, 2, 3)
    groups = [_group(1, "blue"), _group(2, "red"), _group(3, "blue")]

    forest = build_forest(tabs, groups, None)

    assert [node.group_id for node in forest] == [1, 2, 3]


def test_sub_group_attaches_to_nearest_preceding_parent() -> None:
    """Test each sub-group lands under the most recent top-level node."""
    tabs = make_tabs(1, 2, 3, 4)
    groups = [_group(1, "blue"), _group(2, "blue"), _group(3, "red"), _group(4, "red")]

    forest = build_forest(tabs, groups, None)

    assert [node.group_id for node in forest] == [1, 3]
    assert [sg.group_id for sg in forest[0].sub_groups] == [2]
    assert [sg.group_id for sg in forest[1].sub_groups] == [4]


def test_chained_sub_groups_share_one_parent() -> None:
    """Test a run of same-colored groups nests only one level deep."""
    tabs = make_tabs(1, 2, 3)
    groups = [_group(1, "green"), _group(2, "green"), _group(3, "green")]

    forest = build_forest(tabs, groups, None)

    assert len(forest) == 1
    assert [sg.group_id for sg in forest[0].sub_groups] == [2, 3]


def test_group_on_first_tab_is_top_level() -> None:
    """Test a group starting at the first tab has nothing to nest under."""
    forest = build_forest(make_tabs(5), [_group(5, "blue")], None)

    assert [node.group_id for node in forest] == [5]


def test_holding_group_is_skipped() -> None:
    """Test the holding group never appears in the forest."""
    tabs = make_tabs(9, 9, 1, 2)
    groups = [_group(9, "grey"), _group(1, "blue"), _group(2, "blue")]

    forest = build_forest(tabs, groups, 9)

    assert [node.group_id for node in forest] == [1]
    assert [sg.group_id for sg in forest[0].sub_groups] == [2]


def test_holding_group_breaks_adjacency() -> None:
    """Test groups on either side of the holding group are not nested."""
    tabs = make_tabs(1, 9, 2)
    groups = [_group(1, "grey"), _group(9, "grey"), _group(2, "grey")]

    forest = build_forest(tabs, groups, 9)

    assert [node.group_id for node in forest] == [1, 2]


def test_tabs_of_unknown_groups_are_ignored() -> None:
    """Test tabs referring to groups the host did not report are skipped."""
    tabs = [Tab(id=1, index=0, group_id=42), Tab(id=2, index=1, group_id=None)]

    assert build_forest(tabs, [], None) == []


def test_build_is_deterministic() -> None:
    """Test building twice from the same input gives equal forests."""
    tabs = make_tabs(1, 2, None, 3, 4)
    groups = [_group(1, "blue"), _group(2, "blue"), _group(3, "red"), _group(4, "red")]

    assert build_forest(tabs, groups, None) == build_forest(tabs, groups, None)
