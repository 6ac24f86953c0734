"""Fake stack operations for testing.

FakeStackApi is an in-memory implementation that accepts pre-configured state
in its constructor. Construct instances directly with keyword arguments.
"""

from stackview.core.models import StackForest, StackSummary
from stackview.integrations.stack_api.abc import StackApi, UpdateStrategy


class FakeStackApi(StackApi):
    """In-memory fake implementation of stack operations.

    This class has NO public setup methods. All state is provided via
    constructor using keyword arguments with sensible defaults.
    Mutations are recorded in `mutations` as (operation, *args) tuples.
    """

    def __init__(
        self,
        *,
        stacks: StackForest = (),
        summaries: tuple[StackSummary, ...] | None = None,
        get_stacks_raises: Exception | None = None,
        summaries_raises: Exception | None = None,
        mutation_raises: Exception | None = None,
    ) -> None:
        """Create FakeStackApi with pre-configured state.

        Args:
            stacks: Forest returned by get_stacks()
            summaries: Summaries returned by get_stack_summaries(); derived from
                stacks when omitted
            get_stacks_raises: Exception to raise from get_stacks()
            summaries_raises: Exception to raise from get_stack_summaries()
            mutation_raises: Exception to raise from every mutating operation
        """
        self._stacks = stacks
        self._summaries = summaries
        self._get_stacks_raises = get_stacks_raises
        self._summaries_raises = summaries_raises
        self._mutation_raises = mutation_raises
        self._get_stacks_calls = 0
        self._summaries_calls = 0
        self._mutations: list[tuple[object, ...]] = []

    @property
    def get_stacks_calls(self) -> int:
        return self._get_stacks_calls

    @property
    def summaries_calls(self) -> int:
        return self._summaries_calls

    @property
    def mutations(self) -> list[tuple[object, ...]]:
        """Read-only copy of recorded mutations for test assertions."""
        return self._mutations.copy()

    async def get_stacks(self) -> StackForest:
        self._get_stacks_calls += 1
        if self._get_stacks_raises is not None:
            raise self._get_stacks_raises
        return self._stacks

    async def get_stack_summaries(self) -> tuple[StackSummary, ...]:
        self._summaries_calls += 1
        if self._summaries_raises is not None:
            raise self._summaries_raises
        if self._summaries is not None:
            return self._summaries
        return tuple(
            StackSummary(
                name=stack.name,
                source_branch=stack.source_branch.name,
                branch_count=len(stack.branches),
            )
            for stack in self._stacks
        )

    def _record(self, *mutation: object) -> None:
        self._mutations.append(mutation)
        if self._mutation_raises is not None:
            raise self._mutation_raises

    async def new_stack(self, name: str, source_branch: str, branch: str | None) -> None:
        self._record("new_stack", name, source_branch, branch)

    async def new_branch(self, stack: str, name: str, parent: str) -> None:
        self._record("new_branch", stack, name, parent)

    async def add_branch(self, stack: str, name: str, parent: str) -> None:
        self._record("add_branch", stack, name, parent)

    async def remove_branch(self, stack: str, name: str) -> None:
        self._record("remove_branch", stack, name)

    async def sync(self, stack: str, strategy: UpdateStrategy | None) -> None:
        self._record("sync", stack, strategy)

    async def update(self, stack: str, strategy: UpdateStrategy | None) -> None:
        self._record("update", stack, strategy)

    async def pull(self, stack: str) -> None:
        self._record("pull", stack)

    async def push(self, stack: str, *, force_with_lease: bool) -> None:
        self._record("push", stack, force_with_lease)

    async def delete(self, stack: str) -> None:
        self._record("delete", stack)

    async def cleanup(self, stack: str) -> None:
        self._record("cleanup", stack)

    async def switch_to_branch(self, branch: str) -> None:
        self._record("switch_to_branch", branch)
