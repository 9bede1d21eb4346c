"""In-memory fake implementation of the state store."""

import copy
from typing import Any

from tabnest.core.errors import StoreError
from tabnest.core.state_store.abc import StateStore


class FakeStateStore(StateStore):
    """In-memory fake implementation for testing.

    All state is provided via constructor. Values are deep-copied on the way
    in and out so callers cannot mutate committed state by accident.
    """

    def __init__(
        self,
        *,
        data: dict[str, Any] | None = None,
        failing_keys: set[str] | None = None,
    ) -> None:
        """Create FakeStateStore with pre-configured state.

        Args:
            data: Initial key → value mapping
            failing_keys: Keys whose set() raises StoreError (simulates write failure)
        """
        self._data = copy.deepcopy(data) if data else {}
        self._failing_keys = failing_keys or set()
        self._writes: list[str] = []

    @property
    def writes(self) -> list[str]:
        """Read-only access to the keys written, in order, for test assertions."""
        return self._writes

    @property
    def data(self) -> dict[str, Any]:
        """Snapshot of committed state for test assertions."""
        return copy.deepcopy(self._data)

    def get(self, key: str) -> Any | None:
        """Read a value from memory."""
        if key not in self._data:
            return None
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        """Write a value to memory.

        Raises:
            StoreError: If key was configured as failing
        """
        if key in self._failing_keys:
            raise StoreError(f"Simulated write failure for '{key}'")
        self._data[key] = copy.deepcopy(value)
        self._writes.append(key)
