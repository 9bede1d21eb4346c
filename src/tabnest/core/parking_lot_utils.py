"""Pure business logic for parking lot state (immutable updates)."""

from tabnest.core.errors import DuplicateArchive
from tabnest.core.tree_types import ParkingLot, TreeNode


def empty_parking_lot() -> ParkingLot:
    """Return a parking lot with no holding group and no archive."""
    return ParkingLot(holding_group_id=None, archive={})


def archive_parent(
    lot: ParkingLot,
    parent_id: int,
    snapshot: TreeNode,
    holding_group_id: int | None = None,
) -> ParkingLot:
    """Return new ParkingLot with the parent's snapshot archived.

    Args:
        lot: Existing parking lot
        parent_id: Top-level group being collapsed
        snapshot: Parent node as it looked before collapse
        holding_group_id: Holding group to record; required when the lot has none yet

    Returns:
        New ParkingLot instance

    Raises:
        DuplicateArchive: If parent_id is already archived
        ValueError: If no holding group is known
    """
    if parent_id in lot.archive:
        raise DuplicateArchive(parent_id)

    holding = lot.holding_group_id if lot.holding_group_id is not None else holding_group_id
    if holding is None:
        raise ValueError("Cannot archive without a holding group")

    new_archive = dict(lot.archive)
    new_archive[parent_id] = snapshot
    return ParkingLot(holding_group_id=holding, archive=new_archive)


def release_parent(lot: ParkingLot, parent_id: int) -> ParkingLot:
    """Return new ParkingLot without the parent's entry.

    Releasing the last entry also forgets the holding group so that
    holding_group_id stays None exactly when the archive is empty.
    """
    if parent_id not in lot.archive:
        return lot

    new_archive = {pid: node for pid, node in lot.archive.items() if pid != parent_id}
    if not new_archive:
        return empty_parking_lot()

    return ParkingLot(holding_group_id=lot.holding_group_id, archive=new_archive)


def check_parking_lot(lot: ParkingLot) -> list[str]:
    """Describe violations of the holding-group/archive pairing (empty when valid)."""
    if lot.holding_group_id is None and lot.archive:
        return ["Archive has entries but no holding group is recorded"]
    if lot.holding_group_id is not None and not lot.archive:
        return [f"Holding group {lot.holding_group_id} recorded with an empty archive"]
    return []
