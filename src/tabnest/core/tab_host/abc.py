"""Tab host operations interface.

The tab host is the browser side of the system: it owns tabs and groups and
reports them in strip order. tabnest only reads them and issues grouping,
styling and move commands.

Architecture:
- TabHost: Abstract base class defining the interface
- FileTabHost: Implementation over a JSON tab strip file
- FakeTabHost: In-memory implementation for tests
- DryRunTabHost: Wrapper that reports mutations without performing them
"""

from abc import ABC, abstractmethod

from tabnest.core.tree_types import Group, Tab


class TabHost(ABC):
    """Abstract interface for tab host operations.

    All implementations (real and fake) must implement this interface.
    Failed mutations raise HostOperationFailed.
    """

    @abstractmethod
    def query_tabs(self, group_id: int | None = None) -> list[Tab]:
        """List tabs in strip order.

        Args:
            group_id: Only return tabs of this group when given

        Returns:
            Tabs ordered left to right
        """
        ...

    @abstractmethod
    def query_groups(self) -> list[Group]:
        """List all groups that currently hold tabs."""
        ...

    @abstractmethod
    def get_tab(self, tab_id: int) -> Tab | None:
        """Get a tab by id, or None if it no longer exists."""
        ...

    @abstractmethod
    def get_group(self, group_id: int) -> Group | None:
        """Get a group by id, or None if it no longer exists."""
        ...

    @abstractmethod
    def group_tabs(self, tab_ids: list[int], group_id: int | None = None) -> int:
        """Add tabs to a group, creating a new group when group_id is None.

        Args:
            tab_ids: Tabs to group, in the order they should appear
            group_id: Existing group to add to, or None for a new group

        Returns:
            Id of the group that now holds the tabs

        Raises:
            HostOperationFailed: If a tab or the group does not exist
        """
        ...

    @abstractmethod
    def update_group(
        self,
        group_id: int,
        *,
        title: str | None = None,
        color: str | None = None,
        collapsed: bool | None = None,
    ) -> Group:
        """Update group properties; None leaves a property unchanged.

        Returns:
            The updated group

        Raises:
            HostOperationFailed: If the group does not exist or color is invalid
        """
        ...

    @abstractmethod
    def move_group(self, group_id: int, index: int) -> None:
        """Move a group so its first tab lands at index (-1 for the end).

        Raises:
            HostOperationFailed: If the group does not exist or the target
                position is inside another group
        """
        ...

    @abstractmethod
    def create_tab(self, index: int) -> Tab:
        """Open a new ungrouped tab at index.

        Returns:
            The created tab
        """
        ...
