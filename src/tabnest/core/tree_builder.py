"""Classify tab groups into a two-level forest using color adjacency.

The tab host reports a flat, ordered tab strip. A group becomes a sub-group
when the tab immediately before its first tab belongs to a different group of
the same color; it is then attached to the most recently created top-level
node. Everything else starts a new top-level node.

Precondition (not verified): tabs arrive in strip order and the tabs of each
group are contiguous.
"""

from collections.abc import Sequence

from tabnest.core.tree_types import Forest, Group, SubGroup, Tab, TreeNode


def build_forest(
    tabs: Sequence[Tab],
    groups: Sequence[Group],
    holding_group_id: int | None,
) -> Forest:
    """Build the forest for a snapshot of the tab strip.

    Pure function: the result depends only on the arguments, never on a
    previously computed forest.

    Args:
        tabs: All tabs in host left-to-right order
        groups: All groups known to the host
        holding_group_id: Parking lot group to leave out, or None

    Returns:
        Top-level nodes in order of first appearance
    """
    group_map = {g.id: g for g in groups if g.id != holding_group_id}
    classified: set[int] = set()
    result: Forest = []

    for i, tab in enumerate(tabs):
        if tab.group_id is None or tab.group_id == holding_group_id:
            continue

        group = group_map.get(tab.group_id)
        if group is None or group.id in classified:
            continue
        classified.add(group.id)

        member_tabs = [t for t in tabs if t.group_id == group.id]
        prev_group = _preceding_group(tabs, i, group_map)

        if prev_group is not None and prev_group.color == group.color and result:
            parent = result[-1]
            parent.sub_groups.append(
                SubGroup(
                    group_id=group.id,
                    title=group.title,
                    color=group.color,
                    collapsed=group.collapsed,
                    tabs=member_tabs,
                )
            )
        else:
            result.append(
                TreeNode(
                    group_id=group.id,
                    title=group.title,
                    color=group.color,
                    collapsed=group.collapsed,
                    tabs=member_tabs,
                    sub_groups=[],
                )
            )

    return result


def _preceding_group(
    tabs: Sequence[Tab], position: int, group_map: dict[int, Group]
) -> Group | None:
    """Return the group of the tab just before `position` if it is another group."""
    if position == 0:
        return None

    prev_tab = tabs[position - 1]
    if prev_tab.group_id is None or prev_tab.group_id == tabs[position].group_id:
        return None

    return group_map.get(prev_tab.group_id)
