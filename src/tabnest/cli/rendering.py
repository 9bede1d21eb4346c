"""Terminal rendering of forests, tabs and transition results."""

import click

from tabnest.core.controller import TransitionKind, TransitionResult
from tabnest.core.tree_types import Forest, ParkingLot, SubGroup, Tab, TreeNode

# click.style names for browser group colors
_STYLE_COLORS = {
    "grey": "bright_black",
    "blue": "blue",
    "red": "red",
    "yellow": "yellow",
    "green": "green",
    "pink": "bright_magenta",
    "purple": "magenta",
    "cyan": "cyan",
    "orange": "bright_red",
}


def format_group_label(node: TreeNode | SubGroup) -> str:
    title = node.title or "(untitled)"
    label = click.style(title, fg=_STYLE_COLORS.get(node.color), bold=True)
    state = "collapsed" if node.collapsed else "expanded"
    return f"{label} [{node.group_id}] {node.color}, {state}, {_tab_count(node.tabs)}"


def render_forest(forest: Forest) -> list[str]:
    """Render a forest as tree lines, one node or sub-group per line."""
    lines: list[str] = []
    for node in forest:
        lines.append(format_group_label(node))
        for idx, sub_group in enumerate(node.sub_groups):
            is_last = idx == len(node.sub_groups) - 1
            prefix = "└──" if is_last else "├──"
            lines.append(f"{prefix} {format_group_label(sub_group)}")
    return lines


def render_parking_lot(lot: ParkingLot) -> list[str]:
    if lot.holding_group_id is None:
        return ["Parking lot is empty"]

    lines = [click.style(f"Holding group: {lot.holding_group_id}", fg="cyan", bold=True)]
    for parent_id, snapshot in lot.archive.items():
        lines.append(f"{snapshot.title or '(untitled)'} [{parent_id}]")
        for idx, sub_group in enumerate(snapshot.sub_groups):
            prefix = "└──" if idx == len(snapshot.sub_groups) - 1 else "├──"
            tab_ids = ", ".join(str(t.id) for t in sub_group.tabs)
            lines.append(f"{prefix} {sub_group.title or '(untitled)'} tabs: {tab_ids}")
    return lines


def render_transition(result: TransitionResult) -> list[str]:
    verb = "Collapsed" if result.kind is TransitionKind.COLLAPSE else "Expanded"
    if not result.performed and not result.failures:
        return [f"Nothing to {result.kind.value} for group {result.parent_id}"]

    lines = []
    if result.performed:
        noun = "sub-group" if len(result.group_ids) == 1 else "sub-groups"
        lines.append(
            click.style(f"✓ {verb} group {result.parent_id}", fg="green")
            + f" ({len(result.group_ids)} {noun})"
        )
    for failure in result.failures:
        lines.append(
            click.style("✗ ", fg="red")
            + f"{failure.title or '(untitled)'} [{failure.group_id}]: {failure.message}"
        )
    for warning in result.warnings:
        lines.append(click.style("! ", fg="yellow") + warning)
    return lines


def format_tab(tab: Tab) -> str:
    group = "-" if tab.group_id is None else str(tab.group_id)
    return f"{tab.index:>3}  tab {tab.id:<5} group {group}"


def _tab_count(tabs: list[Tab]) -> str:
    return f"{len(tabs)} tab" if len(tabs) == 1 else f"{len(tabs)} tabs"
