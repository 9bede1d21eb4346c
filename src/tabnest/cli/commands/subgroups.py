import click
from rich.console import Console
from rich.table import Table

from tabnest.cli.ensure import Ensure
from tabnest.cli.output import user_output
from tabnest.core.context import TabNestContext


@click.command("subgroups")
@click.pass_obj
def subgroups_cmd(ctx: TabNestContext) -> None:
    """List sub-groups, visible ones first and then parked ones."""
    with Ensure.no_tabnest_errors():
        summaries = ctx.service.list_sub_groups()

    if not summaries:
        user_output("No sub-groups")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("parent", style="cyan", no_wrap=True)
    table.add_column("group", style="cyan", no_wrap=True)
    table.add_column("title", no_wrap=True)
    table.add_column("color", no_wrap=True)
    table.add_column("state", no_wrap=True)
    table.add_column("tabs", justify="right", no_wrap=True)

    for summary in summaries:
        if summary.parked:
            state = "[yellow]parked[/yellow]"
        elif summary.collapsed:
            state = "collapsed"
        else:
            state = "expanded"
        table.add_row(
            str(summary.parent_id),
            str(summary.group_id),
            summary.title or "[dim](untitled)[/dim]",
            summary.color,
            state,
            str(summary.tab_count),
        )

    # Output table to stderr (consistent with user_output convention)
    console = Console(stderr=True, width=200, force_terminal=True)
    console.print(table)
