import click

from tabnest.cli.ensure import Ensure
from tabnest.cli.output import machine_output
from tabnest.cli.rendering import render_parking_lot
from tabnest.core.context import TabNestContext
from tabnest.core.parking_lot_utils import check_parking_lot


@click.command("parking-lot")
@click.pass_obj
def parking_lot_cmd(ctx: TabNestContext) -> None:
    """Show the holding group and the parents archived in it."""
    with Ensure.no_tabnest_errors():
        lot = ctx.service.controller.parking_lot.load()

    problems = check_parking_lot(lot)
    Ensure.invariant(not problems, "Parking lot is inconsistent: " + "; ".join(problems))

    for line in render_parking_lot(lot):
        machine_output(line)
