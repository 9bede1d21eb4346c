"""Commands that collapse or expand a parent group."""

import click

from tabnest.cli.ensure import Ensure
from tabnest.cli.output import user_output
from tabnest.cli.rendering import render_transition
from tabnest.core.context import TabNestContext
from tabnest.core.controller import TransitionResult
from tabnest.core.events import GroupUpdated


def _report(result: TransitionResult | None, group_id: int) -> None:
    if result is None:
        user_output(f"Group {group_id} updated; no transition ran")
        return
    for line in render_transition(result):
        user_output(line)
    Ensure.invariant(result.ok, f"{len(result.failures)} sub-group(s) failed")


def _set_collapsed(ctx: TabNestContext, group_id: int, collapsed: bool) -> None:
    with Ensure.no_tabnest_errors():
        group = Ensure.not_none(ctx.host.get_group(group_id), f"Group {group_id} not found")
        before = ctx.service.last_transition
        updated = ctx.host.update_group(group_id, collapsed=collapsed)
        ctx.bus.publish(GroupUpdated(updated))

    after = ctx.service.last_transition
    _report(after if after is not before else None, group.id)


@click.command("collapse")
@click.argument("group_id", type=int)
@click.pass_obj
def collapse_cmd(ctx: TabNestContext, group_id: int) -> None:
    """Collapse a group as the browser would, parking its sub-groups."""
    _set_collapsed(ctx, group_id, True)


@click.command("expand")
@click.argument("group_id", type=int)
@click.pass_obj
def expand_cmd(ctx: TabNestContext, group_id: int) -> None:
    """Expand a group as the browser would, restoring its sub-groups."""
    _set_collapsed(ctx, group_id, False)


@click.command("toggle")
@click.argument("group_id", type=int)
@click.pass_obj
def toggle_cmd(ctx: TabNestContext, group_id: int) -> None:
    """Flip a parent's collapsed state.

    A sub-group id toggles its parent.
    """
    with Ensure.no_tabnest_errors():
        result = ctx.service.toggle_sub_group(group_id)

    result = Ensure.not_none(result, f"Group {group_id} not found")
    _report(result, group_id)
