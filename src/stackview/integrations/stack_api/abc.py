"""High-level stack operations interface.

This module provides a clean abstraction over stack CLI calls for one
repository. Reads return the status data model; mutations return nothing and
signal failure by raising.
"""

from abc import ABC, abstractmethod
from enum import Enum

from stackview.core.models import StackForest, StackSummary


class UpdateStrategy(str, Enum):
    """How the stack CLI brings branches up to date with their parents."""

    MERGE = "merge"
    REBASE = "rebase"


class StackApi(ABC):
    """Abstract interface for stack operations on a single repository.

    All implementations must implement this interface for testability.
    """

    @abstractmethod
    async def get_stacks(self) -> StackForest:
        """Fetch the full status of every stack (`stack status --all`)."""
        ...

    @abstractmethod
    async def get_stack_summaries(self) -> tuple[StackSummary, ...]:
        """Fetch the lightweight stack list (`stack list`) without branch status."""
        ...

    @abstractmethod
    async def new_stack(self, name: str, source_branch: str, branch: str | None) -> None:
        """Create a stack on top of source_branch, optionally with a first branch.

        Args:
            name: Name of the new stack
            source_branch: Branch the stack is based on
            branch: Optional branch to create or add as the first stack branch
        """
        ...

    @abstractmethod
    async def new_branch(self, stack: str, name: str, parent: str) -> None:
        """Create a new branch in a stack on top of parent."""
        ...

    @abstractmethod
    async def add_branch(self, stack: str, name: str, parent: str) -> None:
        """Add an existing branch to a stack on top of parent."""
        ...

    @abstractmethod
    async def remove_branch(self, stack: str, name: str) -> None:
        """Remove a branch from a stack (the git branch itself is kept)."""
        ...

    @abstractmethod
    async def sync(self, stack: str, strategy: UpdateStrategy | None) -> None:
        """Pull, update and push every branch of a stack."""
        ...

    @abstractmethod
    async def update(self, stack: str, strategy: UpdateStrategy | None) -> None:
        """Update each branch of a stack with changes from its parent."""
        ...

    @abstractmethod
    async def pull(self, stack: str) -> None:
        """Pull remote changes for every branch of a stack."""
        ...

    @abstractmethod
    async def push(self, stack: str, *, force_with_lease: bool) -> None:
        """Push every branch of a stack to the remote."""
        ...

    @abstractmethod
    async def delete(self, stack: str) -> None:
        """Delete a stack and any of its branches no longer on the remote."""
        ...

    @abstractmethod
    async def cleanup(self, stack: str) -> None:
        """Delete local branches of a stack that no longer exist on the remote."""
        ...

    @abstractmethod
    async def switch_to_branch(self, branch: str) -> None:
        """Check out a branch."""
        ...
