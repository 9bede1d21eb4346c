import click

from tabnest.cli.ensure import Ensure
from tabnest.cli.output import user_output
from tabnest.core.context import TabNestContext
from tabnest.core.global_config import global_config_path, save_global_config


@click.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing config file.")
@click.pass_obj
def init_cmd(ctx: TabNestContext, force: bool) -> None:
    """Write the global config and reset tab tree state.

    Forgets every archived parent and rebuilds the tree from the current
    tab strip, as happens when the browser starts.
    """
    config_path = global_config_path()
    if config_path.exists() and not force:
        user_output(f"Config already exists: {config_path}")
    elif ctx.dry_run:
        user_output(f"[DRY RUN] Would write config to {config_path}")
    else:
        save_global_config(ctx.global_config, config_path)
        user_output(click.style("✓ ", fg="green") + f"Wrote config to {config_path}")

    with Ensure.no_tabnest_errors():
        forest = ctx.service.initialize()

    user_output(f"Tracking {len(forest)} top-level group(s)")
