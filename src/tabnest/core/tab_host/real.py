"""Tab host backed by a JSON tab strip file."""

import json
from pathlib import Path

from tabnest.core.errors import HostOperationFailed
from tabnest.core.tab_host.abc import TabHost
from tabnest.core.tab_host.strip import TabStrip
from tabnest.core.tree_types import Group, Tab


class FileTabHost(TabHost):
    """Production implementation over a tab strip file.

    Every call reloads the file so edits made by other processes are picked
    up; every mutation writes the file back.
    """

    def __init__(self, strip_path: Path) -> None:
        """Initialize with the tab strip file path."""
        self.strip_path = strip_path

    def query_tabs(self, group_id: int | None = None) -> list[Tab]:
        return self._load().tabs(group_id)

    def query_groups(self) -> list[Group]:
        return self._load().groups()

    def get_tab(self, tab_id: int) -> Tab | None:
        return self._load().get_tab(tab_id)

    def get_group(self, group_id: int) -> Group | None:
        return self._load().get_group(group_id)

    def group_tabs(self, tab_ids: list[int], group_id: int | None = None) -> int:
        strip = self._load()
        result = strip.group_tabs(tab_ids, group_id)
        self._save(strip)
        return result

    def update_group(
        self,
        group_id: int,
        *,
        title: str | None = None,
        color: str | None = None,
        collapsed: bool | None = None,
    ) -> Group:
        strip = self._load()
        group = strip.update_group(group_id, title=title, color=color, collapsed=collapsed)
        self._save(strip)
        return group

    def move_group(self, group_id: int, index: int) -> None:
        strip = self._load()
        strip.move_group(group_id, index)
        self._save(strip)

    def create_tab(self, index: int) -> Tab:
        strip = self._load()
        tab = strip.create_tab(index)
        self._save(strip)
        return tab

    def _load(self) -> TabStrip:
        if not self.strip_path.exists():
            return TabStrip()

        try:
            data = json.loads(self.strip_path.read_text(encoding="utf-8"))
            return TabStrip.from_data(data)
        except (OSError, KeyError, TypeError, ValueError) as e:
            message = f"Cannot read tab strip {self.strip_path}: {e}"
            raise HostOperationFailed("load", message) from e

    def _save(self, strip: TabStrip) -> None:
        try:
            self.strip_path.parent.mkdir(parents=True, exist_ok=True)
            self.strip_path.write_text(json.dumps(strip.to_data(), indent=2), encoding="utf-8")
        except OSError as e:
            message = f"Cannot write tab strip {self.strip_path}: {e}"
            raise HostOperationFailed("save", message) from e
