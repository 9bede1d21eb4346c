"""JSON-file backed state store."""

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from tabnest.core.errors import StoreError
from tabnest.core.state_store.abc import StateStore


class JsonFileStateStore(StateStore):
    """Production store keeping every key in a single JSON document.

    Writes go to a temporary file in the same directory which then replaces
    the document, so a failed write leaves the last committed state intact.
    """

    def __init__(self, path: Path) -> None:
        """Initialize with the path of the JSON document."""
        self.path = path

    def get(self, key: str) -> Any | None:
        """Read a key from the JSON document."""
        return self._load().get(key)

    def set(self, key: str, value: Any) -> None:
        """Write a key by atomically replacing the JSON document."""
        data = self._load()
        data[key] = value

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as e:
            raise StoreError(f"Failed to write '{key}' to {self.path}: {e}") from e

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Failed to read state from {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise StoreError(f"State file {self.path} does not contain a JSON object")
        return data
