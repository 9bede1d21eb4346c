"""Tab host wrapper that retries mutations with backoff."""

from tabnest.core.retry import retry_with_backoff
from tabnest.core.tab_host.abc import TabHost
from tabnest.core.time.abc import Time
from tabnest.core.tree_types import Group, Tab


class RetryingTabHost(TabHost):
    """Wrapper that retries failed mutations before giving up.

    Read-only operations are delegated unchanged.

    Usage:
        host = RetryingTabHost(FileTabHost(path), RealTime(), max_attempts=3)
    """

    def __init__(
        self, wrapped: TabHost, time: Time, *, max_attempts: int, base_delay: float
    ) -> None:
        self._wrapped = wrapped
        self._retry = retry_with_backoff(time, max_attempts, base_delay)

    def query_tabs(self, group_id: int | None = None) -> list[Tab]:
        return self._wrapped.query_tabs(group_id)

    def query_groups(self) -> list[Group]:
        return self._wrapped.query_groups()

    def get_tab(self, tab_id: int) -> Tab | None:
        return self._wrapped.get_tab(tab_id)

    def get_group(self, group_id: int) -> Group | None:
        return self._wrapped.get_group(group_id)

    def group_tabs(self, tab_ids: list[int], group_id: int | None = None) -> int:
        return self._retry(self._wrapped.group_tabs)(tab_ids, group_id)

    def update_group(
        self,
        group_id: int,
        *,
        title: str | None = None,
        color: str | None = None,
        collapsed: bool | None = None,
    ) -> Group:
        return self._retry(self._wrapped.update_group)(
            group_id, title=title, color=color, collapsed=collapsed
        )

    def move_group(self, group_id: int, index: int) -> None:
        self._retry(self._wrapped.move_group)(group_id, index)

    def create_tab(self, index: int) -> Tab:
        return self._retry(self._wrapped.create_tab)(index)
