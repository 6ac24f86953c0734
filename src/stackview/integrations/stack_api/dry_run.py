"""No-op wrapper for stack operations."""

import logging

from stackview.core.models import StackForest, StackSummary
from stackview.integrations.stack_api.abc import StackApi, UpdateStrategy

logger = logging.getLogger(__name__)


class DryRunStackApi(StackApi):
    """No-op wrapper that prevents execution of mutating operations.

    Read-only operations are delegated to the wrapped implementation.
    Mutations are logged and return without running the stack CLI.

    Usage:
        real_api = RealStackApi(cli, repo_root)
        noop_api = DryRunStackApi(real_api)

        # Logs instead of running stack sync
        await noop_api.sync("feature-x", None)
    """

    def __init__(self, wrapped: StackApi) -> None:
        """Create a dry-run wrapper around a StackApi implementation.

        Args:
            wrapped: The StackApi implementation to wrap (usually RealStackApi)
        """
        self._wrapped = wrapped

    # Read-only operations: delegate to wrapped implementation

    async def get_stacks(self) -> StackForest:
        return await self._wrapped.get_stacks()

    async def get_stack_summaries(self) -> tuple[StackSummary, ...]:
        return await self._wrapped.get_stack_summaries()

    # Mutating operations: log instead of executing

    async def new_stack(self, name: str, source_branch: str, branch: str | None) -> None:
        logger.info("[dry-run] Would create stack '%s' from '%s'", name, source_branch)

    async def new_branch(self, stack: str, name: str, parent: str) -> None:
        logger.info("[dry-run] Would create branch '%s' on '%s' in '%s'", name, parent, stack)

    async def add_branch(self, stack: str, name: str, parent: str) -> None:
        logger.info("[dry-run] Would add branch '%s' on '%s' to '%s'", name, parent, stack)

    async def remove_branch(self, stack: str, name: str) -> None:
        logger.info("[dry-run] Would remove branch '%s' from '%s'", name, stack)

    async def sync(self, stack: str, strategy: UpdateStrategy | None) -> None:
        logger.info("[dry-run] Would sync stack '%s'", stack)

    async def update(self, stack: str, strategy: UpdateStrategy | None) -> None:
        logger.info("[dry-run] Would update stack '%s'", stack)

    async def pull(self, stack: str) -> None:
        logger.info("[dry-run] Would pull stack '%s'", stack)

    async def push(self, stack: str, *, force_with_lease: bool) -> None:
        logger.info("[dry-run] Would push stack '%s'", stack)

    async def delete(self, stack: str) -> None:
        logger.info("[dry-run] Would delete stack '%s'", stack)

    async def cleanup(self, stack: str) -> None:
        logger.info("[dry-run] Would clean up stack '%s'", stack)

    async def switch_to_branch(self, branch: str) -> None:
        logger.info("[dry-run] Would switch to branch '%s'", branch)
