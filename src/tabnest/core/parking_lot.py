"""Parking lot manager: holding-group identity and collapse archive."""

import logging

from tabnest.core.parking_lot_utils import archive_parent, empty_parking_lot, release_parent
from tabnest.core.snapshots import load_parking_lot, save_parking_lot
from tabnest.core.state_store.abc import StateStore
from tabnest.core.tree_types import ParkingLot, TreeNode

logger = logging.getLogger(__name__)


class ParkingLotManager:
    """Loads, updates and saves the parking lot through a StateStore.

    The holding group is a shared pool: once established it is reused by
    every later collapse until the manager is reset.
    """

    def __init__(self, store: StateStore) -> None:
        self._store = store

    def load(self) -> ParkingLot:
        """Return the committed parking lot."""
        return load_parking_lot(self._store)

    @property
    def holding_group_id(self) -> int | None:
        return self.load().holding_group_id

    def reset(self) -> None:
        """Forget the holding group and empty the archive."""
        logger.debug("Resetting parking lot")
        save_parking_lot(self._store, empty_parking_lot())

    def archive(
        self, parent_id: int, snapshot: TreeNode, *, holding_group_id: int | None = None
    ) -> ParkingLot:
        """Record a parent's snapshot.

        Args:
            parent_id: Collapsed parent group id
            snapshot: Parent node including its sub-groups
            holding_group_id: Holding group id, needed when establishing the pool

        Returns:
            The committed parking lot

        Raises:
            DuplicateArchive: If parent_id already has an entry
        """
        lot = archive_parent(self.load(), parent_id, snapshot, holding_group_id)
        save_parking_lot(self._store, lot)
        logger.debug(
            "Archived parent %d (%d sub-groups) in holding group %s",
            parent_id,
            len(snapshot.sub_groups),
            lot.holding_group_id,
        )
        return lot

    def retrieve(self, parent_id: int) -> TreeNode | None:
        """Return the archived snapshot for parent_id, or None."""
        return self.load().archive.get(parent_id)

    def release(self, parent_id: int) -> ParkingLot:
        """Drop parent_id's entry if present; no-op otherwise."""
        lot = self.load()
        new_lot = release_parent(lot, parent_id)
        if new_lot is lot:
            return lot

        save_parking_lot(self._store, new_lot)
        logger.debug("Released parent %d from parking lot", parent_id)
        return new_lot
