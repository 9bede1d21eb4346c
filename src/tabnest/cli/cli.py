import logging
import os

import click

from tabnest.cli.commands.create_subgroup import create_subgroup_cmd
from tabnest.cli.commands.init import init_cmd
from tabnest.cli.commands.parking_lot import parking_lot_cmd
from tabnest.cli.commands.refresh import refresh_cmd
from tabnest.cli.commands.subgroups import subgroups_cmd
from tabnest.cli.commands.tabs import tabs_cmd
from tabnest.cli.commands.transition import collapse_cmd, expand_cmd, toggle_cmd
from tabnest.cli.commands.tree import tree_cmd
from tabnest.cli.ensure import fail
from tabnest.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="tabnest")
@click.option("--dry-run", is_flag=True, help="Print host and state changes without making them.")
@click.pass_context
def cli(ctx: click.Context, dry_run: bool) -> None:
    """Nest browser tab groups and collapse them together."""
    # Enable debug logging if TABNEST_DEBUG environment variable is set
    if os.getenv("TABNEST_DEBUG"):
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        try:
            ctx.obj = create_context(dry_run=dry_run)
        except ValueError as e:
            fail(str(e))


cli.add_command(collapse_cmd)
cli.add_command(create_subgroup_cmd)
cli.add_command(expand_cmd)
cli.add_command(init_cmd)
cli.add_command(parking_lot_cmd)
cli.add_command(refresh_cmd)
cli.add_command(subgroups_cmd)
cli.add_command(tabs_cmd)
cli.add_command(toggle_cmd)
cli.add_command(tree_cmd)


def main() -> None:
    """CLI entry point used by the `tabnest` console script."""
    cli()
