import click

from tabnest.cli.ensure import Ensure
from tabnest.cli.output import user_output
from tabnest.core.context import TabNestContext
from tabnest.core.events import TabsChanged


@click.command("refresh")
@click.pass_obj
def refresh_cmd(ctx: TabNestContext) -> None:
    """Pick up tab changes made outside tabnest.

    Drops the parking lot if its holding group was closed, then rebuilds.
    """
    with Ensure.no_tabnest_errors():
        ctx.bus.publish(TabsChanged())

    user_output(click.style("✓ ", fg="green") + "Tab tree rebuilt")
