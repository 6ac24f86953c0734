"""Read-only commands: show stack status and list stacks."""

import json
from dataclasses import asdict

import click
from rich.console import Console

from stackview.cli.output import machine_output, user_output
from stackview.cli.rendering import print_rich_tree
from stackview.cli.runner import run_operation
from stackview.core.context import StackViewContext
from stackview.core.tree import pluralize
from stackview.core.tree_render import expand, render_tree


async def _load_forests(ctx: StackViewContext) -> dict[str, list[dict]]:
    result: dict[str, list[dict]] = {}
    for repository in ctx.aggregator.repositories:
        stacks = await repository.get_stacks()
        result[str(repository.path)] = [asdict(stack) for stack in stacks]
    return result


@click.command("status")
@click.option("--json", "as_json", is_flag=True, help="Print the stack forest as JSON.")
@click.option("--plain", is_flag=True, help="Print a plain text tree without styling.")
@click.pass_obj
def status_cmd(ctx: StackViewContext, as_json: bool, plain: bool) -> None:
    """Show every stack with branch and pull request status.

    Example:
        $ stackview status --plain
        feature-x  main  ⇆ origin/main (2 branches)
        ├─ a  2↓ 0↑ ⇆ origin/a
        └─ b  ⇆ origin/b
           └─ 1 commit ahead, 2 commits behind  2↓ 1↑ a

    Legend:
        N↓ M↑ = commits behind / ahead of the remote or parent
        ⇆     = remote tracking branch
    """
    if as_json:
        forests = run_operation(ctx, lambda: _load_forests(ctx))
        machine_output(json.dumps(forests, indent=2))
        return

    roots = run_operation(ctx, lambda: expand(ctx.aggregator))
    if not roots:
        user_output("No stacks found")
        return

    if plain:
        machine_output(render_tree(roots))
    else:
        print_rich_tree(roots, Console())


@click.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print summaries as JSON.")
@click.pass_obj
def list_cmd(ctx: StackViewContext, as_json: bool) -> None:
    """List stacks without loading branch status."""

    async def _load() -> dict[str, list[dict]]:
        result: dict[str, list[dict]] = {}
        for repository in ctx.aggregator.repositories:
            summaries = await repository.get_stack_summaries()
            result[str(repository.path)] = [asdict(summary) for summary in summaries]
        return result

    summaries_by_repo = run_operation(ctx, _load)
    if as_json:
        machine_output(json.dumps(summaries_by_repo, indent=2))
        return

    multi_repo = ctx.aggregator.is_multi_repo()
    for repo_path, summaries in summaries_by_repo.items():
        if multi_repo:
            machine_output(click.style(repo_path, bold=True))
        if not summaries:
            user_output("No stacks found")
            continue
        indent = "  " if multi_repo else ""
        for summary in summaries:
            count = summary["branch_count"]
            machine_output(
                f"{indent}{summary['name']}  {summary['source_branch']} "
                f"({count} {pluralize('branch', count)})"
            )
