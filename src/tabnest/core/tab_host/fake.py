"""In-memory fake implementation of the tab host."""

from tabnest.core.errors import HostOperationFailed
from tabnest.core.tab_host.abc import TabHost
from tabnest.core.tab_host.strip import TabStrip
from tabnest.core.tree_types import Group, Tab


class FakeTabHost(TabHost):
    """In-memory fake implementation for testing.

    All state is provided via constructor. Mutations are applied to an
    in-memory TabStrip and recorded for assertions.

    Example:
        >>> host = FakeTabHost(
        ...     tabs=[Tab(1, 0, 10), Tab(2, 1, 20)],
        ...     groups=[Group(10, "a", "blue", False), Group(20, "b", "blue", False)],
        ... )
        >>> new_group_id = host.group_tabs([2])
        >>> assert host.mutations == [("group_tabs", (2,), None)]
    """

    def __init__(
        self,
        *,
        tabs: list[Tab] | None = None,
        groups: list[Group] | None = None,
        strip: TabStrip | None = None,
        failing_tab_ids: set[int] | None = None,
        failing_operations: set[str] | None = None,
        transient_failures: dict[str, int] | None = None,
    ) -> None:
        """Create FakeTabHost with pre-configured state.

        Args:
            tabs: Tabs in strip order (ignored when strip is given)
            groups: Groups referenced by tabs (ignored when strip is given)
            strip: Pre-built strip to operate on
            failing_tab_ids: group_tabs calls touching any of these tabs fail
            failing_operations: Mutation names that always fail (e.g. {"move_group"})
            transient_failures: Mutation name → number of initial calls that fail
        """
        self._strip = strip if strip is not None else TabStrip(tabs=tabs, groups=groups)
        self._failing_tab_ids = failing_tab_ids or set()
        self._failing_operations = failing_operations or set()
        self._transient_failures = dict(transient_failures or {})
        self._mutations: list[tuple] = []

    @property
    def strip(self) -> TabStrip:
        """Underlying strip, for test assertions and simulated user actions."""
        return self._strip

    @property
    def mutations(self) -> list[tuple]:
        """Read-only access to successful mutations for test assertions.

        Entries look like ("group_tabs", tab_ids, group_id),
        ("update_group", group_id, title, color, collapsed),
        ("move_group", group_id, index) and ("create_tab", index).
        """
        return self._mutations

    def query_tabs(self, group_id: int | None = None) -> list[Tab]:
        return self._strip.tabs(group_id)

    def query_groups(self) -> list[Group]:
        return self._strip.groups()

    def get_tab(self, tab_id: int) -> Tab | None:
        return self._strip.get_tab(tab_id)

    def get_group(self, group_id: int) -> Group | None:
        return self._strip.get_group(group_id)

    def group_tabs(self, tab_ids: list[int], group_id: int | None = None) -> int:
        self._check("group_tabs")
        stale = [tid for tid in tab_ids if tid in self._failing_tab_ids]
        if stale:
            raise HostOperationFailed("group_tabs", f"Simulated failure for tab(s) {stale}")
        result = self._strip.group_tabs(tab_ids, group_id)
        self._mutations.append(("group_tabs", tuple(tab_ids), group_id))
        return result

    def update_group(
        self,
        group_id: int,
        *,
        title: str | None = None,
        color: str | None = None,
        collapsed: bool | None = None,
    ) -> Group:
        self._check("update_group")
        group = self._strip.update_group(group_id, title=title, color=color, collapsed=collapsed)
        self._mutations.append(("update_group", group_id, title, color, collapsed))
        return group

    def move_group(self, group_id: int, index: int) -> None:
        self._check("move_group")
        self._strip.move_group(group_id, index)
        self._mutations.append(("move_group", group_id, index))

    def create_tab(self, index: int) -> Tab:
        self._check("create_tab")
        tab = self._strip.create_tab(index)
        self._mutations.append(("create_tab", index))
        return tab

    def _check(self, operation: str) -> None:
        if operation in self._failing_operations:
            raise HostOperationFailed(operation, "Simulated failure")
        remaining = self._transient_failures.get(operation, 0)
        if remaining > 0:
            self._transient_failures[operation] = remaining - 1
            raise HostOperationFailed(operation, "Simulated transient failure")
