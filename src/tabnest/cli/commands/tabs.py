import click

from tabnest.cli.ensure import Ensure
from tabnest.cli.output import machine_output, user_output
from tabnest.cli.rendering import format_tab
from tabnest.core.context import TabNestContext


@click.command("tabs")
@click.option("--group", "group_id", type=int, help="Only list tabs of this group.")
@click.pass_obj
def tabs_cmd(ctx: TabNestContext, group_id: int | None) -> None:
    """List tabs in strip order."""
    with Ensure.no_tabnest_errors():
        tabs = ctx.host.query_tabs(group_id)

    if not tabs:
        user_output("No tabs")
        return

    for tab in tabs:
        machine_output(format_tab(tab))
