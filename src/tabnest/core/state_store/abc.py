"""Key-value store abstraction for persisted tabnest state."""

from abc import ABC, abstractmethod
from typing import Any


class StateStore(ABC):
    """Abstract interface for persisted state.

    All implementations (real and fake) must implement this interface.
    Values are JSON-compatible (dicts, lists, strings, numbers, booleans, None).
    """

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Read a value.

        Args:
            key: Logical key (e.g., "tabTree")

        Returns:
            Stored value, or None if the key is absent

        Raises:
            StoreError: If the backing storage cannot be read
        """
        ...

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Write a value.

        Either the whole write succeeds or the previously committed state is kept.

        Raises:
            StoreError: If the backing storage cannot be written
        """
        ...
