"""Conversion between tree types and persisted JSON data.

The store holds two logical keys: TAB_TREE_KEY for the last built forest and
PARKING_LOT_KEY for the parking lot.
"""

from typing import Any

from tabnest.core.errors import StoreError
from tabnest.core.parking_lot_utils import empty_parking_lot
from tabnest.core.state_store.abc import StateStore
from tabnest.core.tree_types import Forest, ParkingLot, SubGroup, Tab, TreeNode

TAB_TREE_KEY = "tabTree"
PARKING_LOT_KEY = "parkingLot"


def tab_to_dict(tab: Tab) -> dict[str, Any]:
    return {"id": tab.id, "index": tab.index, "group_id": tab.group_id}


def tab_from_dict(data: dict[str, Any]) -> Tab:
    return Tab(id=int(data["id"]), index=int(data["index"]), group_id=data["group_id"])


def sub_group_to_dict(sub_group: SubGroup) -> dict[str, Any]:
    return {
        "group_id": sub_group.group_id,
        "title": sub_group.title,
        "color": sub_group.color,
        "collapsed": sub_group.collapsed,
        "tabs": [tab_to_dict(t) for t in sub_group.tabs],
    }


def sub_group_from_dict(data: dict[str, Any]) -> SubGroup:
    return SubGroup(
        group_id=int(data["group_id"]),
        title=str(data["title"]),
        color=str(data["color"]),
        collapsed=bool(data["collapsed"]),
        tabs=[tab_from_dict(t) for t in data["tabs"]],
    )


def node_to_dict(node: TreeNode) -> dict[str, Any]:
    data = sub_group_to_dict(
        SubGroup(
            group_id=node.group_id,
            title=node.title,
            color=node.color,
            collapsed=node.collapsed,
            tabs=node.tabs,
        )
    )
    data["sub_groups"] = [sub_group_to_dict(sg) for sg in node.sub_groups]
    return data


def node_from_dict(data: dict[str, Any]) -> TreeNode:
    base = sub_group_from_dict(data)
    return TreeNode(
        group_id=base.group_id,
        title=base.title,
        color=base.color,
        collapsed=base.collapsed,
        tabs=base.tabs,
        sub_groups=[sub_group_from_dict(sg) for sg in data.get("sub_groups", [])],
    )


def forest_to_data(forest: Forest) -> list[dict[str, Any]]:
    return [node_to_dict(node) for node in forest]


def forest_from_data(data: list[dict[str, Any]]) -> Forest:
    return [node_from_dict(node) for node in data]


def parking_lot_to_data(lot: ParkingLot) -> dict[str, Any]:
    # JSON object keys must be strings
    return {
        "holding_group_id": lot.holding_group_id,
        "archive": {str(pid): node_to_dict(node) for pid, node in lot.archive.items()},
    }


def parking_lot_from_data(data: dict[str, Any]) -> ParkingLot:
    holding = data.get("holding_group_id")
    return ParkingLot(
        holding_group_id=int(holding) if holding is not None else None,
        archive={int(pid): node_from_dict(node) for pid, node in data.get("archive", {}).items()},
    )


def load_forest(store: StateStore) -> Forest:
    """Load the last persisted forest (empty if never saved).

    Raises:
        StoreError: If the stored value is malformed
    """
    data = store.get(TAB_TREE_KEY)
    if data is None:
        return []

    try:
        return forest_from_data(data)
    except (KeyError, TypeError, ValueError) as e:
        raise StoreError(f"Malformed '{TAB_TREE_KEY}' value: {e}") from e


def save_forest(store: StateStore, forest: Forest) -> None:
    """Persist the forest under TAB_TREE_KEY."""
    store.set(TAB_TREE_KEY, forest_to_data(forest))


def load_parking_lot(store: StateStore) -> ParkingLot:
    """Load the parking lot (empty if never saved).

    Raises:
        StoreError: If the stored value is malformed
    """
    data = store.get(PARKING_LOT_KEY)
    if data is None:
        return empty_parking_lot()

    try:
        return parking_lot_from_data(data)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise StoreError(f"Malformed '{PARKING_LOT_KEY}' value: {e}") from e


def save_parking_lot(store: StateStore, lot: ParkingLot) -> None:
    """Persist the parking lot under PARKING_LOT_KEY."""
    store.set(PARKING_LOT_KEY, parking_lot_to_data(lot))
