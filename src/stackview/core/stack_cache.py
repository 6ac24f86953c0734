"""Per-repository cache of the stack forest.

States:
    Empty  -> Loaded  first successful fetch
    Loaded -> Empty   clear_cache()
    Loaded -> Loaded  refresh_stacks() replaces the value

Concurrent readers of an Empty cache share one in-flight fetch, so the stack
CLI runs once and every caller receives the same forest object. A failed fetch
leaves the cache Empty and the error propagates to every waiting caller.
clear_cache() never cancels an in-flight fetch, but later readers no longer
join it. A fetch that completes after the clear still populates the cache
(last write wins); a superseded fetch that fails leaves the cache alone.
"""

import asyncio
import logging

from stackview.core.models import Stack, StackBranch, StackForest, iter_stack_branches
from stackview.integrations.stack_api.abc import StackApi

logger = logging.getLogger(__name__)


class StackCache:
    """Holds the last fetched forest for one repository."""

    def __init__(self, api: StackApi) -> None:
        self._api = api
        self._stacks: StackForest | None = None
        self._inflight: asyncio.Task[StackForest] | None = None
        self._fetch_count = 0

    @property
    def is_loaded(self) -> bool:
        return self._stacks is not None

    @property
    def is_fetching(self) -> bool:
        return self._inflight is not None

    @property
    def fetch_count(self) -> int:
        """Number of fetches started, for diagnostics and tests."""
        return self._fetch_count

    async def get_stacks(self) -> StackForest:
        """Return the cached forest, fetching it first when the cache is Empty."""
        if self._stacks is not None:
            return self._stacks
        if self._inflight is None:
            self._inflight = asyncio.ensure_future(self._fetch())
        # shield: a cancelled caller must not cancel the fetch other callers share
        return await asyncio.shield(self._inflight)

    async def refresh_stacks(self) -> StackForest:
        """Fetch unconditionally and replace the cached forest."""
        task = asyncio.ensure_future(self._fetch())
        self._inflight = task
        return await asyncio.shield(task)

    def clear_cache(self) -> None:
        """Transition to Empty. Safe to call at any time, any number of times.

        A fetch already in flight is detached, not cancelled: the next read
        starts a fresh fetch instead of joining one that predates the clear.
        """
        if self._stacks is not None:
            logger.debug("Clearing stack cache")
        self._stacks = None
        self._inflight = None

    async def get_stack_by_name(self, name: str) -> Stack | None:
        for stack in await self.get_stacks():
            if stack.name == name:
                return stack
        return None

    async def get_branch_by_name(self, stack_name: str, branch_name: str) -> StackBranch | None:
        """Find a branch anywhere in a stack, including nested children."""
        stack = await self.get_stack_by_name(stack_name)
        if stack is None:
            return None
        for branch in iter_stack_branches(stack):
            if branch.name == branch_name:
                return branch
        return None

    async def _fetch(self) -> StackForest:
        self._fetch_count += 1
        current = asyncio.current_task()
        try:
            stacks = await self._api.get_stacks()
        except BaseException:
            # A superseded fetch must not wipe the forest a newer fetch loaded
            if self._inflight is current:
                self._stacks = None
            raise
        finally:
            if self._inflight is current:
                self._inflight = None
        self._stacks = stacks
        logger.debug("Loaded %d stacks", len(stacks))
        return stacks
