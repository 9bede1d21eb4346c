"""Pure query helpers over a built forest."""

from collections.abc import Iterator
from dataclasses import dataclass

from tabnest.core.tree_types import Forest, SubGroup, TreeNode


@dataclass(frozen=True)
class GroupLocation:
    """Where a group sits in a forest.

    parent_id is the owning top-level node for sub-groups and None otherwise.
    """

    node: TreeNode | SubGroup
    is_parent: bool
    parent_id: int | None


def find_group_in_tree(forest: Forest, group_id: int) -> GroupLocation | None:
    """Find a group either as a top-level node or as a sub-group.

    Args:
        forest: Forest to search
        group_id: Group id to find

    Returns:
        Location of the group, or None if it is not in the forest
    """
    for node in forest:
        if node.group_id == group_id:
            return GroupLocation(node=node, is_parent=True, parent_id=None)

    for node in forest:
        for sub_group in node.sub_groups:
            if sub_group.group_id == group_id:
                return GroupLocation(node=sub_group, is_parent=False, parent_id=node.group_id)

    return None


def find_parent_node(forest: Forest, group_id: int) -> TreeNode | None:
    """Return the top-level node with the given id, ignoring sub-groups."""
    for node in forest:
        if node.group_id == group_id:
            return node
    return None


def flatten_sub_group_tab_ids(node: TreeNode) -> list[int]:
    """Collect sub-group tab ids in sub-group order, then tab order."""
    return [tab.id for sub_group in node.sub_groups for tab in sub_group.tabs]


def iter_sub_groups(forest: Forest) -> Iterator[tuple[TreeNode, SubGroup]]:
    """Yield (parent, sub_group) pairs in forest order."""
    for node in forest:
        for sub_group in node.sub_groups:
            yield node, sub_group


def validate_forest(forest: Forest) -> list[str]:
    """Check that every group id appears at most once.

    Returns:
        Human-readable descriptions of violations (empty when valid)
    """
    problems: list[str] = []
    seen: set[int] = set()

    def note(group_id: int, where: str) -> None:
        if group_id in seen:
            problems.append(f"Group {group_id} appears more than once ({where})")
        seen.add(group_id)

    for node in forest:
        note(node.group_id, "top-level")
        for sub_group in node.sub_groups:
            note(sub_group.group_id, f"sub-group of {node.group_id}")

    return problems
