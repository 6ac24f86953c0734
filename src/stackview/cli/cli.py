import logging
from pathlib import Path

import click

from stackview.cli.commands.branch import branch_group
from stackview.cli.commands.stack_ops import (
    cleanup_cmd,
    delete_cmd,
    new_cmd,
    pr_cmd,
    pull_cmd,
    push_cmd,
    switch_cmd,
    sync_cmd,
    update_cmd,
)
from stackview.cli.commands.status import list_cmd, status_cmd
from stackview.core.config import StackViewConfig
from stackview.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="stackview")
@click.option(
    "--repo",
    "repos",
    multiple=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Repository root to operate on. Repeat to view several repositories.",
)
@click.pass_context
def cli(ctx: click.Context, repos: tuple[Path, ...]) -> None:
    """View and manage stacked branches through the stack CLI."""
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        config = StackViewConfig.from_env()
        if config.debug:
            logging.basicConfig(
                level=logging.DEBUG,
                format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            )
        ctx.obj = create_context(repos or (Path.cwd(),), config)
        ctx.call_on_close(ctx.obj.aggregator.dispose)


cli.add_command(status_cmd)
cli.add_command(list_cmd)
cli.add_command(new_cmd)
cli.add_command(sync_cmd)
cli.add_command(update_cmd)
cli.add_command(pull_cmd)
cli.add_command(push_cmd)
cli.add_command(delete_cmd)
cli.add_command(cleanup_cmd)
cli.add_command(switch_cmd)
cli.add_command(pr_cmd)
cli.add_command(branch_group)


def main() -> None:
    """CLI entry point used by the `stackview` console script."""
    cli()
