"""Commands that change which branches belong to a stack."""

import click

from stackview.cli.commands.stack_ops import stack_option
from stackview.cli.output import user_output
from stackview.cli.runner import run_operation
from stackview.core.context import StackViewContext


@click.group("branch")
def branch_group() -> None:
    """Manage the branches of a stack."""
    pass


@branch_group.command("new")
@stack_option
@click.argument("name")
@click.option("--parent", required=True, help="Branch to build the new branch on.")
@click.pass_obj
def branch_new_cmd(ctx: StackViewContext, stack: str, name: str, parent: str) -> None:
    """Create a new branch in a stack."""
    run_operation(ctx, lambda: ctx.aggregator.default_repository().new_branch(stack, name, parent))
    user_output(f"Created branch '{name}' in stack '{stack}'")


@branch_group.command("add")
@stack_option
@click.argument("name")
@click.option("--parent", required=True, help="Branch the existing branch builds on.")
@click.pass_obj
def branch_add_cmd(ctx: StackViewContext, stack: str, name: str, parent: str) -> None:
    """Add an existing branch to a stack."""
    run_operation(ctx, lambda: ctx.aggregator.default_repository().add_branch(stack, name, parent))
    user_output(f"Added branch '{name}' to stack '{stack}'")


@branch_group.command("remove")
@stack_option
@click.argument("name")
@click.pass_obj
def branch_remove_cmd(ctx: StackViewContext, stack: str, name: str) -> None:
    """Remove a branch from a stack. The git branch is kept."""
    run_operation(ctx, lambda: ctx.aggregator.default_repository().remove_branch(stack, name))
    user_output(f"Removed branch '{name}' from stack '{stack}'")
