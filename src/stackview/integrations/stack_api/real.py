"""Stack operations implemented on top of the stack CLI client."""

from pathlib import Path

from stackview.core.models import StackForest, StackSummary
from stackview.core.parsing import parse_stack_summaries, parse_stacks
from stackview.integrations.stack_api.abc import StackApi, UpdateStrategy
from stackview.integrations.stack_cli.abc import StackCli
from stackview.integrations.stack_cli.command import StackCommand


class RealStackApi(StackApi):
    """Production implementation that issues one stack CLI command per operation.

    Every command carries --working-dir for the repository and --json so the
    primary channel is machine readable.
    """

    def __init__(self, cli: StackCli, repo_root: Path) -> None:
        self._cli = cli
        self._repo_root = repo_root

    @property
    def repo_root(self) -> Path:
        return self._repo_root

    def _command(self, *operation: str) -> StackCommand:
        return StackCommand(operation=operation)

    def _finish(self, command: StackCommand) -> StackCommand:
        return command.with_option("--working-dir", str(self._repo_root)).with_switch("--json")

    async def get_stacks(self) -> StackForest:
        command = self._finish(self._command("status").with_switch("--all"))
        return parse_stacks(await self._cli.run_json(command))

    async def get_stack_summaries(self) -> tuple[StackSummary, ...]:
        command = self._finish(self._command("list"))
        return parse_stack_summaries(await self._cli.run_json(command))

    async def new_stack(self, name: str, source_branch: str, branch: str | None) -> None:
        command = (
            self._command("new")
            .with_option("--name", name)
            .with_option("--source-branch", source_branch)
        )
        if branch is not None:
            command = command.with_option("--branch", branch)
        await self._cli.run(self._finish(command.with_switch("--yes")))

    async def new_branch(self, stack: str, name: str, parent: str) -> None:
        command = (
            self._command("branch", "new")
            .with_option("--stack", stack)
            .with_option("--branch", name)
            .with_option("--parent", parent)
        )
        await self._cli.run(self._finish(command))

    async def add_branch(self, stack: str, name: str, parent: str) -> None:
        command = (
            self._command("branch", "add")
            .with_option("--stack", stack)
            .with_option("--branch", name)
            .with_option("--parent", parent)
        )
        await self._cli.run(self._finish(command))

    async def remove_branch(self, stack: str, name: str) -> None:
        command = (
            self._command("branch", "remove")
            .with_option("--stack", stack)
            .with_option("--branch", name)
            .with_switch("--yes")
        )
        await self._cli.run(self._finish(command))

    async def sync(self, stack: str, strategy: UpdateStrategy | None) -> None:
        command = self._command("sync").with_option("--stack", stack).with_switch("--yes")
        if strategy is not None:
            command = command.with_switch(f"--{strategy.value}")
        await self._cli.run(self._finish(command))

    async def update(self, stack: str, strategy: UpdateStrategy | None) -> None:
        command = self._command("update").with_option("--stack", stack)
        if strategy is not None:
            command = command.with_switch(f"--{strategy.value}")
        await self._cli.run(self._finish(command))

    async def pull(self, stack: str) -> None:
        await self._cli.run(self._finish(self._command("pull").with_option("--stack", stack)))

    async def push(self, stack: str, *, force_with_lease: bool) -> None:
        command = self._command("push").with_option("--stack", stack)
        if force_with_lease:
            command = command.with_switch("--force-with-lease")
        await self._cli.run(self._finish(command))

    async def delete(self, stack: str) -> None:
        command = self._command("delete").with_option("--stack", stack).with_switch("--yes")
        await self._cli.run(self._finish(command))

    async def cleanup(self, stack: str) -> None:
        command = self._command("cleanup").with_option("--stack", stack).with_switch("--yes")
        await self._cli.run(self._finish(command))

    async def switch_to_branch(self, branch: str) -> None:
        await self._cli.run(self._finish(self._command("switch").with_option("--branch", branch)))
