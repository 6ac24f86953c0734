"""Mutating stack commands.

Each command runs exactly one stack CLI invocation against the single open
repository (pass one --repo when several are configured).
"""

import click

from stackview.cli.output import error_output, machine_output, user_output
from stackview.cli.runner import run_operation
from stackview.core.context import StackViewContext
from stackview.integrations.stack_api.abc import UpdateStrategy

stack_option = click.option("--stack", "-s", "stack", required=True, help="Name of the stack.")
strategy_option = click.option(
    "--strategy",
    type=click.Choice([strategy.value for strategy in UpdateStrategy]),
    default=None,
    help="Merge or rebase when updating branches (stack CLI default when omitted).",
)


def _strategy(value: str | None) -> UpdateStrategy | None:
    return UpdateStrategy(value) if value is not None else None


@click.command("new")
@click.argument("name")
@click.option("--source-branch", required=True, help="Branch the stack is based on.")
@click.option("--branch", default=None, help="First branch to create or add to the stack.")
@click.pass_obj
def new_cmd(ctx: StackViewContext, name: str, source_branch: str, branch: str | None) -> None:
    """Create a new stack."""
    run_operation(ctx, lambda: ctx.aggregator.new_stack(name, source_branch, branch))
    user_output(f"Created stack '{name}'")


@click.command("sync")
@stack_option
@strategy_option
@click.pass_obj
def sync_cmd(ctx: StackViewContext, stack: str, strategy: str | None) -> None:
    """Pull, update and push every branch of a stack."""
    run_operation(
        ctx, lambda: ctx.aggregator.default_repository().sync(stack, _strategy(strategy))
    )
    user_output(f"Synced stack '{stack}'")


@click.command("update")
@stack_option
@strategy_option
@click.pass_obj
def update_cmd(ctx: StackViewContext, stack: str, strategy: str | None) -> None:
    """Update each branch of a stack with changes from its parent."""
    run_operation(
        ctx, lambda: ctx.aggregator.default_repository().update(stack, _strategy(strategy))
    )
    user_output(f"Updated stack '{stack}'")


@click.command("pull")
@stack_option
@click.pass_obj
def pull_cmd(ctx: StackViewContext, stack: str) -> None:
    """Pull remote changes for a stack."""
    run_operation(ctx, lambda: ctx.aggregator.default_repository().pull(stack))
    user_output(f"Pulled changes for stack '{stack}'")


@click.command("push")
@stack_option
@click.option("--force-with-lease", is_flag=True, help="Force push, refusing to clobber others.")
@click.pass_obj
def push_cmd(ctx: StackViewContext, stack: str, force_with_lease: bool) -> None:
    """Push every branch of a stack."""
    run_operation(
        ctx,
        lambda: ctx.aggregator.default_repository().push(
            stack, force_with_lease=force_with_lease
        ),
    )
    user_output(f"Pushed stack '{stack}'")


@click.command("delete")
@stack_option
@click.pass_obj
def delete_cmd(ctx: StackViewContext, stack: str) -> None:
    """Delete a stack."""
    run_operation(ctx, lambda: ctx.aggregator.default_repository().delete(stack))
    user_output(f"Deleted stack '{stack}'")


@click.command("cleanup")
@stack_option
@click.pass_obj
def cleanup_cmd(ctx: StackViewContext, stack: str) -> None:
    """Delete local branches of a stack that are gone from the remote."""
    run_operation(ctx, lambda: ctx.aggregator.default_repository().cleanup(stack))
    user_output(f"Cleaned up stack '{stack}'")


@click.command("switch")
@click.argument("branch")
@click.pass_obj
def switch_cmd(ctx: StackViewContext, branch: str) -> None:
    """Check out a branch."""
    run_operation(ctx, lambda: ctx.aggregator.default_repository().switch_to_branch(branch))
    user_output(f"Switched to branch '{branch}'")


@click.command("pr")
@stack_option
@click.argument("branch")
@click.option("--url-only", is_flag=True, help="Print the pull request URL instead of opening it.")
@click.pass_obj
def pr_cmd(ctx: StackViewContext, stack: str, branch: str, url_only: bool) -> None:
    """Open the pull request of a stack branch in the browser."""
    found = run_operation(
        ctx, lambda: ctx.aggregator.default_repository().get_branch_by_name(stack, branch)
    )
    if found is None:
        error_output(f"Branch '{branch}' is not part of stack '{stack}'")
        raise SystemExit(1)
    if found.pull_request is None:
        error_output(f"Branch '{branch}' has no pull request")
        raise SystemExit(1)

    pull_request = found.pull_request
    if url_only:
        machine_output(pull_request.url)
        return
    user_output(f"Opening #{pull_request.number} {pull_request.title}")
    click.launch(pull_request.url)
