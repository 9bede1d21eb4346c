"""No-op tab host wrapper for dry-run mode."""

from tabnest.core.output import user_output
from tabnest.core.tab_host.abc import TabHost
from tabnest.core.tree_types import Group, Tab

# Returned in place of ids the host would have assigned
DRY_RUN_ID = -1


class DryRunTabHost(TabHost):
    """No-op wrapper that prints mutations instead of performing them.

    Read-only operations are delegated to the wrapped implementation.

    Usage:
        real_host = FileTabHost(strip_path)
        noop_host = DryRunTabHost(real_host)

        # Prints a message instead of moving the group
        noop_host.move_group(12, 0)
    """

    def __init__(self, wrapped: TabHost) -> None:
        """Create a dry-run wrapper around a TabHost implementation.

        Args:
            wrapped: The TabHost implementation to wrap (usually FileTabHost)
        """
        self._wrapped = wrapped

    # Read-only operations: delegate to wrapped implementation

    def query_tabs(self, group_id: int | None = None) -> list[Tab]:
        return self._wrapped.query_tabs(group_id)

    def query_groups(self) -> list[Group]:
        return self._wrapped.query_groups()

    def get_tab(self, tab_id: int) -> Tab | None:
        return self._wrapped.get_tab(tab_id)

    def get_group(self, group_id: int) -> Group | None:
        return self._wrapped.get_group(group_id)

    # Mutations: print and skip

    def group_tabs(self, tab_ids: list[int], group_id: int | None = None) -> int:
        target = "a new group" if group_id is None else f"group {group_id}"
        user_output(f"[DRY RUN] Would group tabs {tab_ids} into {target}")
        return group_id if group_id is not None else DRY_RUN_ID

    def update_group(
        self,
        group_id: int,
        *,
        title: str | None = None,
        color: str | None = None,
        collapsed: bool | None = None,
    ) -> Group:
        changes = {
            key: value
            for key, value in (("title", title), ("color", color), ("collapsed", collapsed))
            if value is not None
        }
        user_output(f"[DRY RUN] Would update group {group_id}: {changes}")
        current = self._wrapped.get_group(group_id)
        if current is None:
            return Group(
                id=group_id,
                title=title or "",
                color=color or "grey",
                collapsed=bool(collapsed),
            )
        return Group(
            id=group_id,
            title=current.title if title is None else title,
            color=current.color if color is None else color,
            collapsed=current.collapsed if collapsed is None else collapsed,
        )

    def move_group(self, group_id: int, index: int) -> None:
        user_output(f"[DRY RUN] Would move group {group_id} to index {index}")

    def create_tab(self, index: int) -> Tab:
        user_output(f"[DRY RUN] Would open a new tab at index {index}")
        return Tab(id=DRY_RUN_ID, index=index, group_id=None)
