import click

from tabnest.cli.ensure import Ensure
from tabnest.cli.output import machine_output, user_output
from tabnest.cli.rendering import render_forest
from tabnest.core.context import TabNestContext
from tabnest.core.tree_utils import validate_forest


@click.command("tree")
@click.option(
    "--check",
    is_flag=True,
    help="Validate the rebuilt tree and exit non-zero on problems.",
)
@click.pass_obj
def tree_cmd(ctx: TabNestContext, check: bool) -> None:
    """Show top-level groups with their sub-groups.

    The tree is rebuilt from the tab strip before it is shown.

    Example output:

    \b
        Work [1] blue, expanded, 2 tabs
        ├── Docs [2] blue, expanded, 2 tabs
        └── Bugs [3] blue, collapsed, 1 tab
    """
    with Ensure.no_tabnest_errors():
        forest = ctx.service.dispatcher.run_exclusive(ctx.service.controller.rebuild)

    if check:
        problems = validate_forest(forest)
        for problem in problems:
            user_output(click.style("✗ ", fg="red") + problem)
        Ensure.invariant(not problems, f"Tab tree has {len(problems)} problem(s)")
        user_output(click.style("✓ ", fg="green") + "Tab tree is consistent")
        return

    if not forest:
        user_output("No tab groups")
        return

    for line in render_forest(forest):
        machine_output(line)
