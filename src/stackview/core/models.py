"""Status data model for stacks reported by the stack CLI.

A forest is built fresh on every fetch and never mutated afterwards; a refresh
replaces the whole value. Ahead/behind pairs of (0, 0) mean "no divergence";
"unknown" is expressed by the enclosing optional field being None.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Commit:
    """Tip commit of a branch."""

    sha: str
    message: str


@dataclass(frozen=True)
class RemoteTrackingBranchStatus:
    """Divergence between a local branch and its remote counterpart.

    ahead/behind are only meaningful when exists is True and are zero otherwise.
    """

    name: str
    exists: bool
    ahead: int
    behind: int


@dataclass(frozen=True)
class Branch:
    """A branch as reported by the stack CLI.

    exists=False marks a "ghost" branch: removed locally but still tracked in
    stack metadata, typically pending cleanup.
    """

    name: str
    exists: bool
    tip: Commit | None
    remote_tracking_branch: RemoteTrackingBranchStatus | None


@dataclass(frozen=True)
class ParentBranchStatus:
    """Position of a branch relative to its immediate parent in the stack."""

    name: str
    ahead: int
    behind: int


@dataclass(frozen=True)
class GitHubPullRequest:
    """Pull request associated with a stack branch (already resolved upstream)."""

    number: int
    title: str
    url: str
    is_draft: bool


@dataclass(frozen=True)
class StackBranch(Branch):
    """Branch that belongs to a stack.

    children are the branches stacked directly on top of this one, in the
    order the stack CLI reported them.
    """

    pull_request: GitHubPullRequest | None = None
    parent: ParentBranchStatus | None = None
    children: tuple["StackBranch", ...] = ()


@dataclass(frozen=True)
class Stack:
    """Named stack of branches built on top of a source branch."""

    name: str
    source_branch: Branch
    branches: tuple[StackBranch, ...]


@dataclass(frozen=True)
class StackSummary:
    """Lightweight projection of a stack, used for counts."""

    name: str
    source_branch: str
    branch_count: int


# Read-only view of every stack in one repository.
StackForest = tuple[Stack, ...]


def iter_stack_branches(stack: Stack) -> list[StackBranch]:
    """Return every branch of a stack, depth first, in reported order.

    Branches that appear both in the top-level chain and as a child of another
    branch are only returned once.
    """
    seen: set[str] = set()
    result: list[StackBranch] = []

    def _visit(branch: StackBranch) -> None:
        if branch.name in seen:
            return
        seen.add(branch.name)
        result.append(branch)
        for child in branch.children:
            _visit(child)

    for branch in stack.branches:
        _visit(branch)
    return result
