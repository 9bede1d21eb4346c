"""In-memory model of a browser tab strip with tab-group rules.

Shared by FileTabHost and FakeTabHost so both follow the same grouping,
moving and cleanup behavior:

- Grouping into a new group places the tabs contiguously where the first
  listed tab was, pushed past any group it would otherwise split.
- Grouping into an existing group appends after that group's last tab.
- Groups left without tabs disappear.
- New groups are grey, untitled and expanded.
- move_group's index is the final position of the group's first tab.
"""

from dataclasses import dataclass, replace
from typing import Any

from tabnest.core.errors import HostOperationFailed
from tabnest.core.tree_types import GROUP_COLORS, Group, Tab

DEFAULT_GROUP_COLOR = "grey"


@dataclass(frozen=True)
class _Slot:
    tab_id: int
    group_id: int | None


class TabStrip:
    """Mutable tab strip; tab order is list order."""

    def __init__(
        self,
        tabs: list[Tab] | None = None,
        groups: list[Group] | None = None,
        *,
        next_tab_id: int | None = None,
        next_group_id: int | None = None,
    ) -> None:
        """Create a strip from tabs in strip order (Tab.index is ignored).

        Args:
            tabs: Tabs left to right
            groups: Groups referenced by the tabs; groups without tabs are dropped
            next_tab_id: Id for the next created tab (defaults to max id + 1)
            next_group_id: Id for the next created group (defaults to max id + 1)

        Raises:
            ValueError: If a tab references an unknown group or ids repeat
        """
        tabs = tabs or []
        groups = groups or []

        self._groups: dict[int, Group] = {g.id: g for g in groups}
        self._slots: list[_Slot] = []
        seen: set[int] = set()
        for tab in tabs:
            if tab.id in seen:
                raise ValueError(f"Duplicate tab id {tab.id}")
            if tab.group_id is not None and tab.group_id not in self._groups:
                raise ValueError(f"Tab {tab.id} references unknown group {tab.group_id}")
            seen.add(tab.id)
            self._slots.append(_Slot(tab_id=tab.id, group_id=tab.group_id))

        self._next_tab_id = next_tab_id if next_tab_id is not None else max(seen, default=0) + 1
        self._next_group_id = (
            next_group_id if next_group_id is not None else max(self._groups, default=0) + 1
        )
        self._prune_groups()

    # Queries

    def tabs(self, group_id: int | None = None) -> list[Tab]:
        result = [
            Tab(id=slot.tab_id, index=i, group_id=slot.group_id)
            for i, slot in enumerate(self._slots)
        ]
        if group_id is None:
            return result
        return [t for t in result if t.group_id == group_id]

    def groups(self) -> list[Group]:
        """Groups ordered by the position of their first tab."""
        ordered: list[Group] = []
        seen: set[int] = set()
        for slot in self._slots:
            if slot.group_id is not None and slot.group_id not in seen:
                seen.add(slot.group_id)
                ordered.append(self._groups[slot.group_id])
        return ordered

    def get_tab(self, tab_id: int) -> Tab | None:
        for i, slot in enumerate(self._slots):
            if slot.tab_id == tab_id:
                return Tab(id=slot.tab_id, index=i, group_id=slot.group_id)
        return None

    def get_group(self, group_id: int) -> Group | None:
        return self._groups.get(group_id)

    # Mutations

    def group_tabs(self, tab_ids: list[int], group_id: int | None = None) -> int:
        if not tab_ids:
            raise HostOperationFailed("group_tabs", "No tab ids given")

        tab_ids = list(dict.fromkeys(tab_ids))
        positions = {slot.tab_id: i for i, slot in enumerate(self._slots)}
        missing = [tid for tid in tab_ids if tid not in positions]
        if missing:
            raise HostOperationFailed("group_tabs", f"No tab with id(s) {missing}")
        if group_id is not None and group_id not in self._groups:
            raise HostOperationFailed("group_tabs", f"No group with id {group_id}")

        moving = set(tab_ids)
        remaining = [slot for slot in self._slots if slot.tab_id not in moving]

        if group_id is None:
            target = self._next_group_id
            self._next_group_id += 1
            self._groups[target] = Group(
                id=target, title="", color=DEFAULT_GROUP_COLOR, collapsed=False
            )
            anchor = positions[tab_ids[0]]
            insert_at = sum(1 for slot in self._slots[:anchor] if slot.tab_id not in moving)
            insert_at = _skip_past_group(remaining, insert_at)
        else:
            target = group_id
            member_positions = [i for i, slot in enumerate(remaining) if slot.group_id == target]
            if member_positions:
                insert_at = member_positions[-1] + 1
            else:
                first = next(i for i, slot in enumerate(self._slots) if slot.group_id == target)
                insert_at = sum(1 for slot in self._slots[:first] if slot.tab_id not in moving)

        placed = [_Slot(tab_id=tid, group_id=target) for tid in tab_ids]
        self._slots = remaining[:insert_at] + placed + remaining[insert_at:]
        self._prune_groups()
        return target

    def update_group(
        self,
        group_id: int,
        *,
        title: str | None = None,
        color: str | None = None,
        collapsed: bool | None = None,
    ) -> Group:
        group = self._groups.get(group_id)
        if group is None:
            raise HostOperationFailed("update_group", f"No group with id {group_id}")
        if color is not None and color not in GROUP_COLORS:
            raise HostOperationFailed("update_group", f"Invalid color '{color}'")

        updated = replace(
            group,
            title=group.title if title is None else title,
            color=group.color if color is None else color,
            collapsed=group.collapsed if collapsed is None else collapsed,
        )
        self._groups[group_id] = updated
        return updated

    def move_group(self, group_id: int, index: int) -> None:
        if group_id not in self._groups:
            raise HostOperationFailed("move_group", f"No group with id {group_id}")

        members = [slot for slot in self._slots if slot.group_id == group_id]
        remaining = [slot for slot in self._slots if slot.group_id != group_id]

        if index == -1:
            index = len(remaining)
        if index < 0:
            raise HostOperationFailed("move_group", f"Invalid index {index}")
        index = min(index, len(remaining))

        if _splits_group(remaining, index):
            raise HostOperationFailed(
                "move_group", f"Index {index} is inside group {remaining[index].group_id}"
            )

        self._slots = remaining[:index] + members + remaining[index:]

    def create_tab(self, index: int) -> Tab:
        if index < 0 or index > len(self._slots):
            index = len(self._slots)
        index = _skip_past_group(self._slots, index)

        tab_id = self._next_tab_id
        self._next_tab_id += 1
        self._slots.insert(index, _Slot(tab_id=tab_id, group_id=None))
        return Tab(id=tab_id, index=index, group_id=None)

    def close_tab(self, tab_id: int) -> None:
        """Remove a tab (as if the user closed it); unknown ids are ignored."""
        self._slots = [slot for slot in self._slots if slot.tab_id != tab_id]
        self._prune_groups()

    # Serialization

    def to_data(self) -> dict[str, Any]:
        return {
            "next_tab_id": self._next_tab_id,
            "next_group_id": self._next_group_id,
            "tabs": [{"id": s.tab_id, "group_id": s.group_id} for s in self._slots],
            "groups": [
                {"id": g.id, "title": g.title, "color": g.color, "collapsed": g.collapsed}
                for g in self._groups.values()
            ],
        }

    @staticmethod
    def from_data(data: dict[str, Any]) -> "TabStrip":
        return TabStrip(
            tabs=[
                Tab(id=int(t["id"]), index=i, group_id=t.get("group_id"))
                for i, t in enumerate(data.get("tabs", []))
            ],
            groups=[
                Group(
                    id=int(g["id"]),
                    title=str(g.get("title", "")),
                    color=str(g.get("color", DEFAULT_GROUP_COLOR)),
                    collapsed=bool(g.get("collapsed", False)),
                )
                for g in data.get("groups", [])
            ],
            next_tab_id=data.get("next_tab_id"),
            next_group_id=data.get("next_group_id"),
        )

    def _prune_groups(self) -> None:
        occupied = {slot.group_id for slot in self._slots if slot.group_id is not None}
        self._groups = {gid: g for gid, g in self._groups.items() if gid in occupied}


def _splits_group(slots: list[_Slot], index: int) -> bool:
    if index <= 0 or index >= len(slots):
        return False
    before = slots[index - 1].group_id
    return before is not None and before == slots[index].group_id


def _skip_past_group(slots: list[_Slot], index: int) -> int:
    """Advance index past the group it would otherwise split."""
    if not _splits_group(slots, index):
        return index
    group_id = slots[index].group_id
    while index < len(slots) and slots[index].group_id == group_id:
        index += 1
    return index
