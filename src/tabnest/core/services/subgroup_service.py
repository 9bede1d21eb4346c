"""Process-wide sub-group service.

Subscribes to host notifications once, routes them through the event
classifier to the collapse/expand controller, and exposes the entry points
used by UI surfaces. Every notification and entry point runs serialized
through a SerialDispatcher.
"""

import logging
from dataclasses import dataclass

from tabnest.core.controller import CollapseExpandController, TransitionResult
from tabnest.core.event_classifier import DecisionKind, classify
from tabnest.core.events import (
    EventBus,
    GroupMoved,
    GroupUpdated,
    Job,
    SerialDispatcher,
    TabsChanged,
)
from tabnest.core.snapshots import load_forest
from tabnest.core.state_store.abc import StateStore
from tabnest.core.tab_host.abc import TabHost
from tabnest.core.tree_types import Forest, Group
from tabnest.core.tree_utils import find_group_in_tree, iter_sub_groups

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubGroupSummary:
    """One sub-group as listed by UI surfaces.

    parked is True for sub-groups of a collapsed parent whose tabs sit in the
    holding group; group_id is then the id the sub-group had before parking.
    """

    parent_id: int
    group_id: int
    title: str
    color: str
    collapsed: bool
    parked: bool
    tab_count: int


class SubGroupService:
    """Entry point tying host notifications to collapse/expand transitions."""

    def __init__(
        self,
        host: TabHost,
        store: StateStore,
        *,
        holding_color: str = "grey",
        dispatcher: SerialDispatcher | None = None,
    ) -> None:
        self._host = host
        self._store = store
        self._controller = CollapseExpandController(host, store, holding_color=holding_color)
        self._dispatcher = dispatcher if dispatcher is not None else SerialDispatcher()
        self._started = False
        self._last_transition: TransitionResult | None = None

    @property
    def controller(self) -> CollapseExpandController:
        return self._controller

    @property
    def dispatcher(self) -> SerialDispatcher:
        return self._dispatcher

    @property
    def last_transition(self) -> TransitionResult | None:
        """Result of the most recent collapse or expand, if any ran."""
        return self._last_transition

    # Lifecycle

    def start(self, bus: EventBus) -> None:
        """Subscribe to host notifications. Call once per process.

        Raises:
            RuntimeError: If already started
        """
        if self._started:
            raise RuntimeError("SubGroupService is already subscribed to an event bus")
        bus.subscribe(GroupUpdated, self.on_group_updated)
        bus.subscribe(GroupMoved, self.on_group_moved)
        bus.subscribe(TabsChanged, self.on_tabs_changed)
        self._started = True

    def initialize(self) -> Forest:
        """Reset the parking lot and rebuild the tree (process start)."""

        def run() -> Forest:
            self._controller.parking_lot.reset()
            return self._controller.rebuild()

        return self._dispatcher.run_exclusive(run)

    # Notification handlers

    def on_group_updated(self, event: GroupUpdated) -> None:
        self._dispatcher.submit(
            Job(
                description=f"group {event.group.id} updated",
                run=lambda: self.process_group_update(event.group),
            )
        )

    def on_group_moved(self, event: GroupMoved) -> None:
        self._dispatcher.submit(
            Job(
                description=f"group {event.group.id} moved",
                run=self._controller.rebuild,
                coalesce_key="rebuild",
            )
        )

    def on_tabs_changed(self, event: TabsChanged) -> None:
        self._dispatcher.submit(
            Job(
                description="tabs changed",
                run=self.process_tabs_changed,
                coalesce_key="tabs_changed",
            )
        )

    def process_group_update(self, group: Group) -> TransitionResult | None:
        """Classify a group update and act on it.

        Returns:
            The transition result for collapse/expand decisions, else None
        """
        decision = classify(
            group, load_forest(self._store), self._controller.parking_lot.load()
        )
        logger.debug("Group %d update classified as %s", group.id, decision.kind.value)

        if decision.kind is DecisionKind.REBUILD:
            self._controller.rebuild()
            return None
        if decision.kind is DecisionKind.COLLAPSE:
            return self._record(self._controller.collapse(group.id))
        if decision.kind is DecisionKind.EXPAND:
            return self._record(self._controller.expand(group.id))
        return None

    def process_tabs_changed(self) -> Forest:
        """Forget the parking lot if its holding group is gone, then rebuild."""
        lot = self._controller.parking_lot.load()
        if lot.holding_group_id is not None and self._host.get_group(lot.holding_group_id) is None:
            logger.warning(
                "Holding group %d no longer exists; dropping %d archived parent(s)",
                lot.holding_group_id,
                len(lot.archive),
            )
            self._controller.parking_lot.reset()
        return self._controller.rebuild()

    # UI entry points

    def create_sub_group(self, parent_group_id: int, title: str, insert_index: int) -> int | None:
        """Create a placeholder sub-group under a parent.

        The placeholder tab opens at insert_index, pushed past the parent's
        own tabs, and gets the parent's color so it classifies as a sub-group.

        Returns:
            Id of the new group, or None if the parent does not exist
        """

        def run() -> int | None:
            parent = self._host.get_group(parent_group_id)
            if parent is None:
                logger.debug("Cannot create sub-group: group %d not found", parent_group_id)
                return None

            position = insert_index
            parent_tabs = self._host.query_tabs(parent_group_id)
            if parent_tabs:
                position = max(insert_index, parent_tabs[-1].index + 1)

            tab = self._host.create_tab(position)
            group_id = self._host.group_tabs([tab.id])
            self._host.update_group(group_id, title=title, color=parent.color)
            logger.debug("Created sub-group '%s' (%d) under %d", title, group_id, parent_group_id)
            self._controller.rebuild()
            return group_id

        return self._dispatcher.run_exclusive(run)

    def toggle_sub_group(self, group_id: int) -> TransitionResult | None:
        """Flip a parent's collapsed flag and run the matching transition.

        A sub-group id resolves to its parent.

        Returns:
            The transition result, or None if the group does not exist
        """

        def run() -> TransitionResult | None:
            location = find_group_in_tree(load_forest(self._store), group_id)
            target = group_id
            if location is not None and location.parent_id is not None:
                target = location.parent_id

            group = self._host.get_group(target)
            if group is None:
                logger.debug("Cannot toggle: group %d not found", target)
                return None

            updated = self._host.update_group(target, collapsed=not group.collapsed)
            if updated.collapsed:
                return self._record(self._controller.collapse(target))
            return self._record(self._controller.expand(target))

        return self._dispatcher.run_exclusive(run)

    def list_sub_groups(self) -> list[SubGroupSummary]:
        """List visible sub-groups followed by parked ones."""
        summaries = [
            SubGroupSummary(
                parent_id=parent.group_id,
                group_id=sub_group.group_id,
                title=sub_group.title,
                color=sub_group.color,
                collapsed=sub_group.collapsed,
                parked=False,
                tab_count=len(sub_group.tabs),
            )
            for parent, sub_group in iter_sub_groups(load_forest(self._store))
        ]

        for parent_id, snapshot in self._controller.parking_lot.load().archive.items():
            for sub_group in snapshot.sub_groups:
                summaries.append(
                    SubGroupSummary(
                        parent_id=parent_id,
                        group_id=sub_group.group_id,
                        title=sub_group.title,
                        color=sub_group.color,
                        collapsed=sub_group.collapsed,
                        parked=True,
                        tab_count=len(sub_group.tabs),
                    )
                )
        return summaries

    def _record(self, result: TransitionResult) -> TransitionResult:
        if not result.performed:
            # Keep the recorded collapsed flag in step with the host
            self._controller.rebuild()
        self._last_transition = result
        return result
