"""Collapse/expand transitions through the parking lot.

Collapsing a parent moves the tabs of all its sub-groups into the shared
holding group and archives the parent's snapshot. Expanding recreates each
archived sub-group next to the parent and releases the archive entry.

Sub-groups are handled independently: a host failure for one sub-group is
recorded in the result and the others still go ahead. Nothing is rolled back.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum

from tabnest.core.errors import DuplicateArchive, HostOperationFailed, SnapshotMissing
from tabnest.core.parking_lot import ParkingLotManager
from tabnest.core.snapshots import load_forest, save_forest
from tabnest.core.state_store.abc import StateStore
from tabnest.core.tab_host.abc import TabHost
from tabnest.core.tree_builder import build_forest
from tabnest.core.tree_types import Forest, SubGroup, TreeNode
from tabnest.core.tree_utils import find_parent_node, flatten_sub_group_tab_ids

logger = logging.getLogger(__name__)

HOLDING_GROUP_COLOR = "grey"


class TransitionKind(Enum):
    """Direction of a parent state change."""

    COLLAPSE = "collapse"
    EXPAND = "expand"


@dataclass(frozen=True)
class SubGroupFailure:
    """A sub-group that could not be parked or restored."""

    group_id: int
    title: str
    message: str


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of a collapse or expand.

    Fields:
        kind: Collapse or expand
        parent_id: Parent group the transition was requested for
        performed: False when the transition was a no-op
        group_ids: Sub-groups parked (collapse) or groups created (expand)
        failures: Sub-groups that failed, in sub-group order
        warnings: Non-fatal host problems (e.g. holding group styling)
    """

    kind: TransitionKind
    parent_id: int
    performed: bool
    group_ids: list[int] = field(default_factory=list)
    failures: list[SubGroupFailure] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class CollapseExpandController:
    """Runs collapse/expand transitions against a tab host and state store."""

    def __init__(
        self,
        host: TabHost,
        store: StateStore,
        *,
        holding_color: str = HOLDING_GROUP_COLOR,
    ) -> None:
        self._host = host
        self._store = store
        self._parking_lot = ParkingLotManager(store)
        self._holding_color = holding_color

    @property
    def parking_lot(self) -> ParkingLotManager:
        return self._parking_lot

    def rebuild(self) -> Forest:
        """Rebuild the forest from current host state and persist it."""
        holding_group_id = self._parking_lot.holding_group_id
        forest = build_forest(
            self._host.query_tabs(), self._host.query_groups(), holding_group_id
        )
        save_forest(self._store, forest)
        logger.debug("Rebuilt tab tree: %d top-level groups", len(forest))
        return forest

    # Collapse

    def collapse(self, parent_id: int) -> TransitionResult:
        """Park the sub-group tabs of parent_id in the holding group.

        No-op unless the last persisted tree has parent_id as a top-level
        group with at least one sub-group tab.

        Raises:
            DuplicateArchive: If parent_id is already archived
            StoreError: If persisted state cannot be read or written
        """
        try:
            parent = self._collapsible_parent(parent_id)
        except SnapshotMissing as e:
            logger.debug("Collapse of %d skipped: %s", parent_id, e)
            return _skipped(TransitionKind.COLLAPSE, parent_id)

        lot = self._parking_lot.load()
        if parent_id in lot.archive:
            raise DuplicateArchive(parent_id)

        warnings: list[str] = []
        holding_id, parked, failures = self._park_sub_groups(parent, lot.holding_group_id, warnings)

        if parked and holding_id is not None:
            snapshot = replace(parent, sub_groups=parked)
            self._parking_lot.archive(parent_id, snapshot, holding_group_id=holding_id)

        self.rebuild()
        return TransitionResult(
            kind=TransitionKind.COLLAPSE,
            parent_id=parent_id,
            performed=bool(parked),
            group_ids=[sg.group_id for sg in parked],
            failures=failures,
            warnings=warnings,
        )

    def _collapsible_parent(self, parent_id: int) -> TreeNode:
        parent = find_parent_node(load_forest(self._store), parent_id)
        if parent is None:
            raise SnapshotMissing(f"Group {parent_id} is not a top-level group in the tab tree")
        if not flatten_sub_group_tab_ids(parent):
            raise SnapshotMissing(f"Group {parent_id} has no sub-group tabs")
        return parent

    def _park_sub_groups(
        self, parent: TreeNode, holding_id: int | None, warnings: list[str]
    ) -> tuple[int | None, list[SubGroup], list[SubGroupFailure]]:
        sub_groups = [sg for sg in parent.sub_groups if sg.tabs]

        try:
            holding_id = self._move_to_holding(
                flatten_sub_group_tab_ids(parent), holding_id, warnings
            )
            return holding_id, sub_groups, []
        except HostOperationFailed as e:
            logger.warning(
                "Parking sub-groups of %d together failed (%s); parking one at a time",
                parent.group_id,
                e,
            )

        parked: list[SubGroup] = []
        failures: list[SubGroupFailure] = []
        for sub_group in sub_groups:
            try:
                holding_id = self._move_to_holding(
                    [t.id for t in sub_group.tabs], holding_id, warnings
                )
                parked.append(sub_group)
            except HostOperationFailed as e:
                logger.warning("Could not park sub-group %d: %s", sub_group.group_id, e)
                failures.append(
                    SubGroupFailure(sub_group.group_id, sub_group.title, str(e))
                )
        return holding_id, parked, failures

    def _move_to_holding(
        self, tab_ids: list[int], holding_id: int | None, warnings: list[str]
    ) -> int:
        """Group tabs into the holding group, creating it on first use.

        Only the grouping itself can fail; styling problems become warnings.
        """
        if holding_id is not None:
            self._host.group_tabs(tab_ids, holding_id)
            self._style_holding(holding_id, warnings, create=False)
            return holding_id

        new_id = self._host.group_tabs(tab_ids)
        logger.debug("Created holding group %d", new_id)
        self._style_holding(new_id, warnings, create=True)
        return new_id

    def _style_holding(self, holding_id: int, warnings: list[str], *, create: bool) -> None:
        try:
            if create:
                self._host.move_group(holding_id, 0)
                self._host.update_group(holding_id, color=self._holding_color, collapsed=True)
            else:
                self._host.update_group(holding_id, collapsed=True)
        except HostOperationFailed as e:
            logger.warning("Could not style holding group %d: %s", holding_id, e)
            warnings.append(f"Holding group {holding_id}: {e}")

    # Expand

    def expand(self, parent_id: int) -> TransitionResult:
        """Recreate the archived sub-groups of parent_id after the parent.

        No-op unless parent_id has an archive entry.

        Raises:
            StoreError: If persisted state cannot be read or written
        """
        snapshot = self._parking_lot.retrieve(parent_id)
        if snapshot is None:
            logger.debug("Expand of %d skipped: nothing archived", parent_id)
            return _skipped(TransitionKind.EXPAND, parent_id)

        created: list[int] = []
        failures: list[SubGroupFailure] = []
        warnings: list[str] = []
        reference_tab_id = self._parent_last_tab_id(snapshot)

        for sub_group in snapshot.sub_groups:
            try:
                new_id, last_tab_id = self._restore_sub_group(sub_group, reference_tab_id)
            except HostOperationFailed as e:
                logger.warning("Could not restore sub-group '%s': %s", sub_group.title, e)
                failures.append(
                    SubGroupFailure(sub_group.group_id, sub_group.title, str(e))
                )
                continue
            created.append(new_id)
            reference_tab_id = last_tab_id

        self._settle_holding(parent_id, warnings)
        self.rebuild()
        return TransitionResult(
            kind=TransitionKind.EXPAND,
            parent_id=parent_id,
            performed=True,
            group_ids=created,
            failures=failures,
            warnings=warnings,
        )

    def _parent_last_tab_id(self, snapshot: TreeNode) -> int | None:
        current = self._host.query_tabs(snapshot.group_id)
        if current:
            return current[-1].id
        if snapshot.tabs and self._host.get_tab(snapshot.tabs[-1].id) is not None:
            return snapshot.tabs[-1].id
        return None

    def _restore_sub_group(
        self, sub_group: SubGroup, reference_tab_id: int | None
    ) -> tuple[int, int]:
        live_ids = [t.id for t in sub_group.tabs if self._host.get_tab(t.id) is not None]
        if not live_ids:
            raise HostOperationFailed("restore", f"No tabs of sub-group '{sub_group.title}' remain")

        new_id = self._host.group_tabs(live_ids)
        self._host.update_group(
            new_id, title=sub_group.title, color=sub_group.color, collapsed=sub_group.collapsed
        )
        if reference_tab_id is not None:
            self._move_after(new_id, reference_tab_id)

        logger.debug("Restored sub-group '%s' as group %d", sub_group.title, new_id)
        return new_id, live_ids[-1]

    def _move_after(self, group_id: int, reference_tab_id: int) -> None:
        reference = self._host.get_tab(reference_tab_id)
        members = self._host.query_tabs(group_id)
        if reference is None or not members or reference.group_id == group_id:
            return

        target = move_target_after(members[0].index, len(members), reference.index)
        if target != members[0].index:
            self._host.move_group(group_id, target)

    def _settle_holding(self, parent_id: int, warnings: list[str]) -> None:
        holding_id = self._parking_lot.holding_group_id
        remaining = []
        if holding_id is not None and self._host.get_group(holding_id) is not None:
            remaining = self._host.query_tabs(holding_id)

        if not remaining:
            self._parking_lot.reset()
            return

        try:
            self._host.update_group(holding_id, collapsed=True)
        except HostOperationFailed as e:
            logger.warning("Could not collapse holding group %d: %s", holding_id, e)
            warnings.append(f"Holding group {holding_id}: {e}")

        lot = self._parking_lot.release(parent_id)
        if lot.holding_group_id is None:
            logger.warning(
                "Holding group %d still has %d tabs but no archived parent refers to them",
                holding_id,
                len(remaining),
            )


def move_target_after(group_start: int, group_size: int, reference_index: int) -> int:
    """Index to pass to move_group so a group starts right after a reference tab.

    move_group's index is the final position of the group's first tab, so a
    group moving rightwards has to account for its own tabs leaving the
    positions in front of the reference.
    """
    if group_start < reference_index:
        return reference_index - group_size + 1
    return reference_index + 1


def _skipped(kind: TransitionKind, parent_id: int) -> TransitionResult:
    return TransitionResult(kind=kind, parent_id=parent_id, performed=False)
