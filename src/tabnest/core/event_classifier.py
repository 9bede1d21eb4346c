"""Decide how to react to a group update notification."""

from dataclasses import dataclass
from enum import Enum

from tabnest.core.tree_types import Forest, Group, ParkingLot
from tabnest.core.tree_utils import find_group_in_tree


class DecisionKind(Enum):
    REBUILD = "rebuild"
    IGNORE = "ignore"
    COLLAPSE = "collapse"
    EXPAND = "expand"


@dataclass(frozen=True)
class Decision:
    """What to do with a notification; group_id is set for collapse/expand."""

    kind: DecisionKind
    group_id: int | None = None


def classify(group: Group, last_forest: Forest, parking_lot: ParkingLot) -> Decision:
    """Classify a group update against the last persisted forest.

    Rules, first match wins:
    1. holding group's own updates are ignored
    2. unknown group → rebuild
    3. color changed → rebuild (color drives sub-group classification)
    4. sub-groups never collapse or expand on their own → ignore
    5. top-level group whose collapsed flag changed → collapse or expand
    6. anything else → ignore
    """
    if parking_lot.holding_group_id is not None and group.id == parking_lot.holding_group_id:
        return Decision(DecisionKind.IGNORE)

    location = find_group_in_tree(last_forest, group.id)
    if location is None:
        return Decision(DecisionKind.REBUILD)

    if location.node.color != group.color:
        return Decision(DecisionKind.REBUILD)

    if not location.is_parent:
        return Decision(DecisionKind.IGNORE)

    if location.node.collapsed != group.collapsed:
        if group.collapsed:
            return Decision(DecisionKind.COLLAPSE, group.id)
        return Decision(DecisionKind.EXPAND, group.id)

    return Decision(DecisionKind.IGNORE)
