import click

from tabnest.cli.ensure import Ensure
from tabnest.cli.output import machine_output, user_output
from tabnest.core.context import TabNestContext


@click.command("create-subgroup")
@click.argument("parent_id", type=int)
@click.argument("title")
@click.option(
    "--index",
    type=int,
    default=0,
    show_default=True,
    help="Preferred strip position; never lands inside the parent.",
)
@click.pass_obj
def create_subgroup_cmd(ctx: TabNestContext, parent_id: int, title: str, index: int) -> None:
    """Create an empty sub-group TITLE under PARENT_ID.

    A placeholder tab is opened after the parent's tabs and grouped with the
    parent's color, so the new group nests under it.
    """
    Ensure.invariant(index >= 0, "--index must not be negative")

    with Ensure.no_tabnest_errors():
        group_id = ctx.service.create_sub_group(parent_id, title, index)

    group_id = Ensure.not_none(group_id, f"Group {parent_id} not found")
    user_output(click.style("✓ ", fg="green") + f"Created sub-group '{title}'")
    machine_output(str(group_id))
