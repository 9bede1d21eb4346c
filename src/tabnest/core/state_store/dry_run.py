"""Dry-run wrapper that reads through but never writes."""

from typing import Any

from tabnest.core.state_store.abc import StateStore


class DryRunStateStore(StateStore):
    """Wrapper that delegates reads and drops writes.

    Writes are remembered in memory so later reads in the same process see
    them, matching what a real run would have produced.
    """

    def __init__(self, wrapped: StateStore) -> None:
        """Create a dry-run wrapper around a StateStore implementation.

        Args:
            wrapped: The StateStore implementation to wrap
        """
        self._wrapped = wrapped
        self._pending: dict[str, Any] = {}

    def get(self, key: str) -> Any | None:
        """Read pending dry-run writes first, then the wrapped store."""
        if key in self._pending:
            return self._pending[key]
        return self._wrapped.get(key)

    def set(self, key: str, value: Any) -> None:
        """Remember the write without persisting it."""
        self._pending[key] = value
