"""Builders for common tab strip layouts used across tests."""

from tests.fakes.tab_host import FakeTabHost

from tabnest.core.tree_types import Group, Tab


def make_tabs(*group_ids: int | None) -> list[Tab]:
    """Create tabs 1..n in strip order, one per group id given."""
    return [Tab(id=i + 1, index=i, group_id=gid) for i, gid in enumerate(group_ids)]


def parent_with_sub_group_host(*, failing_operations: set[str] | None = None) -> FakeTabHost:
    """Work (1) with tabs 1-2 followed by its blue sub-group Docs (2) with tabs 3-4."""
    return FakeTabHost(
        tabs=make_tabs(1, 1, 2, 2),
        groups=[
            Group(id=1, title="Work", color="blue", collapsed=False),
            Group(id=2, title="Docs", color="blue", collapsed=False),
        ],
        failing_operations=failing_operations,
    )


def two_parents_host() -> FakeTabHost:
    """Blue Work (1) with sub-group Docs (2), then red Home (3) with sub-group Bills (4)."""
    return FakeTabHost(
        tabs=make_tabs(1, 2, 3, 4),
        groups=[
            Group(id=1, title="Work", color="blue", collapsed=False),
            Group(id=2, title="Docs", color="blue", collapsed=False),
            Group(id=3, title="Home", color="red", collapsed=False),
            Group(id=4, title="Bills", color="red", collapsed=False),
        ],
    )
