"""Exception types raised by tabnest operations."""


class TabNestError(Exception):
    """Base class for all tabnest errors."""


class HostOperationFailed(TabNestError):
    """A tab host call failed, usually because a tab or group id went stale."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation


class DuplicateArchive(TabNestError):
    """A parent was archived while an archive entry for it already existed."""

    def __init__(self, parent_id: int) -> None:
        super().__init__(f"Parent group {parent_id} is already archived in the parking lot")
        self.parent_id = parent_id


class SnapshotMissing(TabNestError):
    """No host or archive state exists for the requested transition.

    Treated as a benign no-op by the controller; never surfaces to callers.
    """


class StoreError(TabNestError):
    """Reading, decoding or writing persisted state failed."""
