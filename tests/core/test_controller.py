"""Tests for collapse/expand transitions through the parking lot."""

import pytest
from tests.fakes.state_store import FakeStateStore
from tests.fakes.tab_host import FakeTabHost
from tests.test_utils.tab_builders import make_tabs, parent_with_sub_group_host, two_parents_host

from tabnest.core.controller import (
    CollapseExpandController,
    SubGroupFailure,
    TransitionKind,
    move_target_after,
)
from tabnest.core.errors import DuplicateArchive
from tabnest.core.parking_lot_utils import check_parking_lot, empty_parking_lot
from tabnest.core.snapshots import load_forest, save_forest
from tabnest.core.tree_types import Group


def _tab_ids(host: FakeTabHost, group_id: int | None = None) -> list[int]:
    return [t.id for t in host.query_tabs(group_id)]


def _controller(host: FakeTabHost) -> tuple[CollapseExpandController, FakeStateStore]:
    store = FakeStateStore()
    controller = CollapseExpandController(host, store)
    controller.rebuild()
    return controller, store


def test_collapse_parks_sub_group_tabs_in_holding_group() -> None:
    host = parent_with_sub_group_host()
    controller, store = _controller(host)
    host.update_group(1, collapsed=True)

    result = controller.collapse(1)

    assert result.kind is TransitionKind.COLLAPSE
    assert result.performed
    assert result.group_ids == [2]
    assert result.ok

    lot = controller.parking_lot.load()
    assert lot.holding_group_id == 3
    assert list(lot.archive) == [1]
    assert [sg.group_id for sg in lot.archive[1].sub_groups] == [2]

    assert _tab_ids(host) == [3, 4, 1, 2]
    assert _tab_ids(host, 3) == [3, 4]
    assert host.get_group(3) == Group(id=3, title="", color="grey", collapsed=True)

    forest = load_forest(store)
    assert [node.group_id for node in forest] == [1]
    assert forest[0].sub_groups == []
    assert forest[0].collapsed is True


def test_expand_restores_archived_sub_group_after_parent() -> None:
    host = parent_with_sub_group_host()
    controller, store = _controller(host)
    host.update_group(1, collapsed=True)
    controller.collapse(1)
    host.update_group(1, collapsed=False)

    result = controller.expand(1)

    assert result.kind is TransitionKind.EXPAND
    assert result.performed
    assert result.group_ids == [4]
    assert _tab_ids(host) == [1, 2, 3, 4]
    assert host.get_group(3) is None
    assert controller.parking_lot.load() == empty_parking_lot()

    restored = host.get_group(4)
    assert restored == Group(id=4, title="Docs", color="blue", collapsed=False)

    forest = load_forest(store)
    assert len(forest) == 1
    assert [(sg.title, sg.color) for sg in forest[0].sub_groups] == [("Docs", "blue")]
    assert [t.id for t in forest[0].sub_groups[0].tabs] == [3, 4]


def test_collapse_without_sub_groups_is_noop() -> None:
    """Test a parent with nothing to park leaves the host and archive alone."""
    host = FakeTabHost(
        tabs=make_tabs(1, 1),
        groups=[Group(id=1, title="Solo", color="blue", collapsed=True)],
    )
    controller, _ = _controller(host)

    result = controller.collapse(1)

    assert not result.performed
    assert host.mutations == []
    assert controller.parking_lot.load() == empty_parking_lot()


def test_collapse_unknown_parent_is_noop() -> None:
    host = parent_with_sub_group_host()
    controller, _ = _controller(host)

    assert not controller.collapse(99).performed
    assert not controller.collapse(2).performed
    assert host.mutations == []


def test_expand_without_archive_entry_is_noop() -> None:
    host = parent_with_sub_group_host()
    controller, _ = _controller(host)

    result = controller.expand(1)

    assert not result.performed
    assert host.mutations == []


def test_collapse_already_archived_parent_raises_before_host_changes() -> None:
    host = parent_with_sub_group_host()
    controller, store = _controller(host)
    forest_before = load_forest(store)
    controller.collapse(1)
    mutation_count = len(host.mutations)
    save_forest(store, forest_before)

    with pytest.raises(DuplicateArchive):
        controller.collapse(1)

    assert len(host.mutations) == mutation_count


def test_parents_share_one_holding_group() -> None:
    host = two_parents_host()
    controller, store = _controller(host)

    controller.collapse(1)
    controller.collapse(3)

    lot = controller.parking_lot.load()
    assert lot.holding_group_id == 5
    assert sorted(lot.archive) == [1, 3]
    assert _tab_ids(host, 5) == [2, 4]

    controller.expand(1)

    lot = controller.parking_lot.load()
    assert lot.holding_group_id == 5
    assert list(lot.archive) == [3]
    assert check_parking_lot(lot) == []
    assert _tab_ids(host) == [4, 1, 2, 3]

    forest = load_forest(store)
    assert [node.group_id for node in forest] == [1, 3]
    assert [sg.title for sg in forest[0].sub_groups] == ["Docs"]

    controller.expand(3)

    assert controller.parking_lot.load() == empty_parking_lot()
    assert _tab_ids(host) == [1, 2, 3, 4]
    forest = load_forest(store)
    assert [sg.title for node in forest for sg in node.sub_groups] == ["Docs", "Bills"]


def test_collapse_falls_back_to_one_sub_group_at_a_time() -> None:
    """Test a stale tab only fails its own sub-group."""
    host = FakeTabHost(
        tabs=make_tabs(1, 2, 3),
        groups=[
            Group(id=1, title="Work", color="blue", collapsed=False),
            Group(id=2, title="Docs", color="blue", collapsed=False),
            Group(id=3, title="Bugs", color="blue", collapsed=False),
        ],
        failing_tab_ids={3},
    )
    controller, _ = _controller(host)

    result = controller.collapse(1)

    assert result.performed
    assert result.group_ids == [2]
    assert not result.ok
    assert result.failures == [
        SubGroupFailure(
            group_id=3, title="Bugs", message="group_tabs failed: Simulated failure for tab(s) [3]"
        )
    ]
    archived = controller.parking_lot.retrieve(1)
    assert archived is not None
    assert [sg.group_id for sg in archived.sub_groups] == [2]


def test_holding_group_styling_failure_is_a_warning() -> None:
    host = parent_with_sub_group_host(failing_operations={"move_group"})
    controller, _ = _controller(host)

    result = controller.collapse(1)

    assert result.performed
    assert result.ok
    assert len(result.warnings) == 1
    assert controller.parking_lot.load().holding_group_id == 3


def test_expand_reports_sub_group_whose_tabs_were_closed() -> None:
    host = parent_with_sub_group_host()
    controller, _ = _controller(host)
    controller.collapse(1)
    host.strip.close_tab(3)
    host.strip.close_tab(4)

    result = controller.expand(1)

    assert result.performed
    assert result.group_ids == []
    assert [f.group_id for f in result.failures] == [2]
    assert controller.parking_lot.load() == empty_parking_lot()


def test_move_target_after() -> None:
    # Moving right: the group's own tabs vacate positions before the reference
    assert move_target_after(group_start=0, group_size=2, reference_index=3) == 2
    # Moving left: lands directly after the reference
    assert move_target_after(group_start=5, group_size=1, reference_index=2) == 3


def _shape(forest: list) -> list:
    return [
        (
            node.title,
            [(sg.title, sg.color, sg.collapsed, [t.id for t in sg.tabs]) for sg in node.sub_groups],
        )
        for node in forest
    ]


def test_collapse_expand_round_trip_restores_every_sub_group() -> None:
    """Test order, colors and collapsed flags survive collapse then expand of two parents."""
    host = FakeTabHost(
        tabs=make_tabs(None, 5, 6, 1, 1, 2, 2, 3, 4, 4),
        groups=[
            Group(id=5, title="Home", color="red", collapsed=False),
            Group(id=6, title="Bills", color="red", collapsed=False),
            Group(id=1, title="Work", color="blue", collapsed=False),
            Group(id=2, title="A", color="blue", collapsed=True),
            Group(id=3, title="B", color="blue", collapsed=False),
            Group(id=4, title="C", color="blue", collapsed=True),
        ],
    )
    store = FakeStateStore()
    controller = CollapseExpandController(host, store)
    before = _shape(controller.rebuild())

    assert before == [
        ("Home", [("Bills", "red", False, [3])]),
        (
            "Work",
            [
                ("A", "blue", True, [6, 7]),
                ("B", "blue", False, [8]),
                ("C", "blue", True, [9, 10]),
            ],
        ),
    ]

    controller.collapse(1)
    controller.collapse(5)

    lot = controller.parking_lot.load()
    assert lot.holding_group_id == 7
    assert list(lot.archive) == [1, 5]
    assert _tab_ids(host, 7) == [6, 7, 8, 9, 10, 3]

    controller.expand(1)

    lot = controller.parking_lot.load()
    assert list(lot.archive) == [5]
    assert check_parking_lot(lot) == []

    controller.expand(5)

    assert _shape(load_forest(store)) == before
    assert _tab_ids(host) == list(range(1, 11))
    assert controller.parking_lot.load() == empty_parking_lot()
