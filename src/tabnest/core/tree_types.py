"""Data types for tab-group trees and the parking lot."""

from dataclasses import dataclass

# Browser tab-group color palette
GROUP_COLORS = frozenset(
    {"grey", "blue", "red", "yellow", "green", "pink", "purple", "cyan", "orange"}
)


@dataclass(frozen=True)
class Tab:
    """A single browser tab as reported by the tab host.

    Tab ids are host-assigned and may be reused after a tab is closed.
    """

    id: int
    index: int
    group_id: int | None  # None for ungrouped tabs


@dataclass(frozen=True)
class Group:
    """A browser tab group as reported by the tab host."""

    id: int
    title: str
    color: str
    collapsed: bool


@dataclass(frozen=True)
class SubGroup:
    """A group classified as nested under a top-level node."""

    group_id: int
    title: str
    color: str
    collapsed: bool
    tabs: list[Tab]


@dataclass(frozen=True)
class TreeNode:
    """A top-level group with its (single-level) sub-groups."""

    group_id: int
    title: str
    color: str
    collapsed: bool
    tabs: list[Tab]
    sub_groups: list[SubGroup]


# Ordered top-level nodes: the canonical current view of the tab strip
Forest = list[TreeNode]


@dataclass(frozen=True)
class ParkingLot:
    """Holding-group identity plus the snapshots needed to undo collapses.

    holding_group_id is None exactly when archive is empty.
    """

    holding_group_id: int | None
    archive: dict[int, TreeNode]  # Map parent group id → snapshot at collapse time
