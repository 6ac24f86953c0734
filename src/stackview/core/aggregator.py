"""Compose several repositories into one addressable stack tree.

With one repository open the tree is flat (stacks at the root). With more
than one, each repository gets a RepositoryNode and its stacks sit beneath it.
Repository nodes only need stack counts, which come from the lightweight
stack list; the full forest is loaded when a repository node is expanded.

Every node handed out is recorded in an ownership map so operations on a node
are routed to the repository that produced it.
"""

import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from weakref import WeakKeyDictionary

from stackview.core.errors import RepositoryNotFoundError, StackViewError, UnknownNodeError
from stackview.core.events import EventChannel, Subscription
from stackview.core.repository import RepositoryStacks
from stackview.core.tree import (
    BranchNode,
    RepositoryNode,
    StackNode,
    TreeNode,
    branch_child_nodes,
    branch_nodes,
    stack_nodes,
)
from stackview.integrations.stack_api.abc import UpdateStrategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RepositoryStatus:
    """A Status message from the stack CLI, tagged with its repository."""

    repository: str
    message: str


class StackAggregator:
    """Routes reads and mutations to the repository that owns each node."""

    def __init__(self, repositories: Iterable[RepositoryStacks] = ()) -> None:
        self._repositories: dict[Path, RepositoryStacks] = {}
        self._subscriptions: dict[Path, Subscription] = {}
        self._owners: WeakKeyDictionary[TreeNode, RepositoryStacks] = WeakKeyDictionary()
        self._did_change: EventChannel[None] = EventChannel("did-change")
        self._status: EventChannel[RepositoryStatus] = EventChannel("status")
        for repository in repositories:
            self._attach(repository)

    # Repository management

    @property
    def repositories(self) -> list[RepositoryStacks]:
        return list(self._repositories.values())

    def is_multi_repo(self) -> bool:
        return len(self._repositories) > 1

    def repository(self, path: Path) -> RepositoryStacks:
        repository = self._repositories.get(path)
        if repository is None:
            raise RepositoryNotFoundError(str(path))
        return repository

    def default_repository(self) -> RepositoryStacks:
        """The only open repository; fails when zero or several are open."""
        if len(self._repositories) != 1:
            raise StackViewError(
                f"Expected exactly one open repository, found {len(self._repositories)}"
            )
        return next(iter(self._repositories.values()))

    def add_repository(self, repository: RepositoryStacks) -> None:
        if repository.path in self._repositories:
            logger.debug("Repository already open: %s", repository.path)
            return
        self._attach(repository)
        self._did_change.emit(None)

    def remove_repository(self, path: Path) -> None:
        if path not in self._repositories:
            return
        self._detach(path)
        self._did_change.emit(None)

    def set_repositories(self, repositories: Iterable[RepositoryStacks]) -> None:
        """Replace the open repositories, keeping those that stay open untouched."""
        incoming = {repository.path: repository for repository in repositories}
        for path in list(self._repositories):
            if path not in incoming:
                self._detach(path)
        for path, repository in incoming.items():
            existing = self._repositories.get(path)
            if existing is None:
                self._attach(repository)
            elif existing is not repository:
                # Keep the loaded cache of the repository already open
                repository.dispose()
        self._did_change.emit(None)

    def _attach(self, repository: RepositoryStacks) -> None:
        self._repositories[repository.path] = repository
        name = repository.name

        def _forward(message: str) -> None:
            self._status.emit(RepositoryStatus(repository=name, message=message))

        self._subscriptions[repository.path] = repository.on_status(_forward)

    def _detach(self, path: Path) -> None:
        repository = self._repositories.pop(path)
        subscription = self._subscriptions.pop(path, None)
        if subscription is not None:
            subscription.dispose()
        repository.dispose()

    # Events

    def on_did_change(self, listener: Callable[[None], None]) -> Subscription:
        """Fires when the tree should be re-read (repositories or stacks changed)."""
        return self._did_change.subscribe(listener)

    def on_status(self, listener: Callable[[RepositoryStatus], None]) -> Subscription:
        return self._status.subscribe(listener)

    # Tree

    def owner_of(self, node: TreeNode) -> RepositoryStacks:
        owner = self._owners.get(node)
        if owner is None:
            raise UnknownNodeError(f"Node was not produced by this aggregator: {node!r}")
        return owner

    def _record(self, nodes: list[TreeNode], owner: RepositoryStacks) -> list[TreeNode]:
        for node in nodes:
            self._owners[node] = owner
        return nodes

    async def get_children(self, node: TreeNode | None = None) -> list[TreeNode]:
        if node is None:
            return await self._root_children()

        owner = self.owner_of(node)
        if isinstance(node, RepositoryNode):
            return self._record(list(stack_nodes(await owner.get_stacks())), owner)
        if isinstance(node, StackNode):
            return self._record(list(branch_nodes(node.stack)), owner)
        if isinstance(node, BranchNode):
            return self._record(branch_child_nodes(node.stack, node.branch), owner)
        return []

    async def _root_children(self) -> list[TreeNode]:
        if not self._repositories:
            return []
        if not self.is_multi_repo():
            repository = self.default_repository()
            return self._record(list(stack_nodes(await repository.get_stacks())), repository)

        roots: list[TreeNode] = []
        for repository in self._repositories.values():
            try:
                count = len(await repository.get_stack_summaries())
            except StackViewError as e:
                logger.error("Failed to load stack summaries for %s: %s", repository.name, e)
                count = 0
            node = RepositoryNode(name=repository.name, path=repository.path, stack_count=count)
            self._owners[node] = repository
            roots.append(node)
        return roots

    # Cache control

    def clear_cache(self) -> None:
        for repository in self._repositories.values():
            repository.clear_cache()

    def refresh(self) -> None:
        """Invalidate every repository's cache and ask consumers to re-read."""
        self.clear_cache()
        self._did_change.emit(None)

    # Routed mutations

    async def new_stack(
        self,
        name: str,
        source_branch: str,
        branch: str | None = None,
        *,
        repository: Path | None = None,
    ) -> None:
        if repository is not None:
            target = self.repository(repository)
        else:
            target = self.default_repository()
        try:
            await target.new_stack(name, source_branch, branch)
        finally:
            self._did_change.emit(None)

    async def new_branch(self, node: StackNode | BranchNode, name: str) -> None:
        """Create a branch on top of the stack's source branch or the given branch."""
        stack, parent = _stack_and_parent(node)
        await self._mutate(node, lambda owner: owner.new_branch(stack, name, parent))

    async def add_branch(self, node: StackNode | BranchNode, name: str) -> None:
        stack, parent = _stack_and_parent(node)
        await self._mutate(node, lambda owner: owner.add_branch(stack, name, parent))

    async def remove_branch(self, node: BranchNode) -> None:
        stack, branch = node.stack.name, node.branch.name
        await self._mutate(node, lambda owner: owner.remove_branch(stack, branch))

    async def sync(self, node: StackNode, strategy: UpdateStrategy | None = None) -> None:
        await self._mutate(node, lambda owner: owner.sync(node.stack.name, strategy))

    async def update(self, node: StackNode, strategy: UpdateStrategy | None = None) -> None:
        await self._mutate(node, lambda owner: owner.update(node.stack.name, strategy))

    async def pull(self, node: StackNode) -> None:
        await self._mutate(node, lambda owner: owner.pull(node.stack.name))

    async def push(self, node: StackNode, *, force_with_lease: bool = False) -> None:
        await self._mutate(
            node, lambda owner: owner.push(node.stack.name, force_with_lease=force_with_lease)
        )

    async def delete(self, node: StackNode) -> None:
        await self._mutate(node, lambda owner: owner.delete(node.stack.name))

    async def cleanup(self, node: StackNode) -> None:
        await self._mutate(node, lambda owner: owner.cleanup(node.stack.name))

    async def switch_to(self, node: StackNode | BranchNode) -> None:
        """Check out a stack's source branch, or a branch that exists locally."""
        if isinstance(node, StackNode):
            branch = node.stack.source_branch.name
        elif node.branch.exists:
            branch = node.branch.name
        else:
            logger.info("Not switching to deleted branch %s", node.branch.name)
            return
        await self._mutate(node, lambda owner: owner.switch_to_branch(branch))

    async def _mutate(
        self, node: TreeNode, operation: Callable[[RepositoryStacks], Awaitable[None]]
    ) -> None:
        owner = self.owner_of(node)
        try:
            await operation(owner)
        finally:
            self._did_change.emit(None)

    def dispose(self) -> None:
        """Tear down every repository and drop all listeners."""
        for path in list(self._repositories):
            self._detach(path)
        self._owners = WeakKeyDictionary()
        self._did_change.clear()
        self._status.clear()


def _stack_and_parent(node: StackNode | BranchNode) -> tuple[str, str]:
    if isinstance(node, StackNode):
        return node.stack.name, node.stack.source_branch.name
    return node.stack.name, node.branch.name
