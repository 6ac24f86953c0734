"""Per-repository facade combining the stack API, its CLI client and cache.

This is the surface presentation code talks to for one repository. Every
mutation runs as its own stack CLI invocation and invalidates the cache when
it finishes, whether it succeeded or not: a failed command may still have
changed branches.
"""

import logging
from collections.abc import Callable
from pathlib import Path

from stackview.core.config import StackViewConfig
from stackview.core.events import Subscription
from stackview.core.models import Stack, StackBranch, StackForest, StackSummary
from stackview.core.stack_cache import StackCache
from stackview.integrations.stack_api.abc import StackApi, UpdateStrategy
from stackview.integrations.stack_api.dry_run import DryRunStackApi
from stackview.integrations.stack_api.real import RealStackApi
from stackview.integrations.stack_cli.abc import StackCli
from stackview.integrations.stack_cli.real import RealStackCli

logger = logging.getLogger(__name__)


class RepositoryStacks:
    """Stacks of one repository: reads, mutations, status and cache control."""

    def __init__(self, *, name: str, path: Path, api: StackApi, cli: StackCli) -> None:
        self._name = name
        self._path = path
        self._api = api
        self._cli = cli
        self._cache = StackCache(api)

    @staticmethod
    def open(path: Path, config: StackViewConfig, *, name: str | None = None) -> "RepositoryStacks":
        """Build the production stack for a repository root."""
        cli = RealStackCli(executable=config.executable, working_dir=path)
        api: StackApi = RealStackApi(cli, path)
        if config.dry_run:
            api = DryRunStackApi(api)
        return RepositoryStacks(name=name or path.name or str(path), path=path, api=api, cli=cli)

    @property
    def name(self) -> str:
        return self._name

    @property
    def path(self) -> Path:
        return self._path

    @property
    def cache(self) -> StackCache:
        return self._cache

    # Read surface

    async def get_stacks(self) -> StackForest:
        return await self._cache.get_stacks()

    async def get_stack_summaries(self) -> tuple[StackSummary, ...]:
        return await self._api.get_stack_summaries()

    async def get_stack_by_name(self, name: str) -> Stack | None:
        return await self._cache.get_stack_by_name(name)

    async def get_branch_by_name(self, stack: str, branch: str) -> StackBranch | None:
        return await self._cache.get_branch_by_name(stack, branch)

    # Cache control

    async def refresh(self) -> StackForest:
        return await self._cache.refresh_stacks()

    def clear_cache(self) -> None:
        self._cache.clear_cache()

    # Status

    def on_status(self, listener: Callable[[str], None]) -> Subscription:
        return self._cli.on_status(listener)

    # Mutation surface

    async def new_stack(self, name: str, source_branch: str, branch: str | None = None) -> None:
        try:
            await self._api.new_stack(name, source_branch, branch)
        finally:
            self._cache.clear_cache()

    async def new_branch(self, stack: str, name: str, parent: str) -> None:
        try:
            await self._api.new_branch(stack, name, parent)
        finally:
            self._cache.clear_cache()

    async def add_branch(self, stack: str, name: str, parent: str) -> None:
        try:
            await self._api.add_branch(stack, name, parent)
        finally:
            self._cache.clear_cache()

    async def remove_branch(self, stack: str, name: str) -> None:
        try:
            await self._api.remove_branch(stack, name)
        finally:
            self._cache.clear_cache()

    async def sync(self, stack: str, strategy: UpdateStrategy | None = None) -> None:
        try:
            await self._api.sync(stack, strategy)
        finally:
            self._cache.clear_cache()

    async def update(self, stack: str, strategy: UpdateStrategy | None = None) -> None:
        try:
            await self._api.update(stack, strategy)
        finally:
            self._cache.clear_cache()

    async def pull(self, stack: str) -> None:
        try:
            await self._api.pull(stack)
        finally:
            self._cache.clear_cache()

    async def push(self, stack: str, *, force_with_lease: bool = False) -> None:
        try:
            await self._api.push(stack, force_with_lease=force_with_lease)
        finally:
            self._cache.clear_cache()

    async def delete(self, stack: str) -> None:
        try:
            await self._api.delete(stack)
        finally:
            self._cache.clear_cache()

    async def cleanup(self, stack: str) -> None:
        try:
            await self._api.cleanup(stack)
        finally:
            self._cache.clear_cache()

    async def switch_to_branch(self, branch: str) -> None:
        try:
            await self._api.switch_to_branch(branch)
        finally:
            self._cache.clear_cache()

    def dispose(self) -> None:
        """Kill in-flight processes, drop status listeners and the cached forest."""
        logger.debug("Disposing repository %s", self._path)
        self._cli.dispose()
        self._cache.clear_cache()
