"""Tree nodes for presenting stacks.

A node is one of RepositoryNode, StackNode, BranchNode, PullRequestNode or
StatusNode. Nodes are identity-hashed so the aggregator can key ownership on
them; present() dispatches over the node type to produce display data.
The relationship calculator is applied here, while building branch children.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import assert_never

from stackview.core.models import (
    Branch,
    GitHubPullRequest,
    RemoteTrackingBranchStatus,
    Stack,
    StackBranch,
    StackForest,
)
from stackview.core.relationships import (
    can_compare_to_parent,
    effective_behind_count,
    find_parent_branch,
)

ARROW_DOWN = "↓"
ARROW_UP = "↑"
ARROWS_SYNC = "⇆"


@dataclass(frozen=True, eq=False)
class RepositoryNode:
    """Repository root, only shown when more than one repository is open."""

    name: str
    path: Path
    stack_count: int


@dataclass(frozen=True, eq=False)
class StackNode:
    stack: Stack


@dataclass(frozen=True, eq=False)
class BranchNode:
    stack: Stack
    branch: StackBranch


@dataclass(frozen=True, eq=False)
class PullRequestNode:
    stack: Stack
    branch: StackBranch
    pull_request: GitHubPullRequest


@dataclass(frozen=True, eq=False)
class StatusNode:
    """Leaf describing how a branch relates to its parent."""

    stack: Stack
    branch: StackBranch
    label: str
    description: str
    warning: bool


TreeNode = RepositoryNode | StackNode | BranchNode | PullRequestNode | StatusNode


class Collapsible(Enum):
    NONE = "none"
    COLLAPSED = "collapsed"
    EXPANDED = "expanded"


@dataclass(frozen=True)
class TreeItemView:
    """Display data for one node, independent of any UI toolkit."""

    label: str
    description: str
    icon: str
    collapsible: Collapsible
    context_value: str
    tooltip: str | None = None


def pluralize(word: str, count: int) -> str:
    if count == 1:
        return word
    if word.endswith(("s", "x", "ch", "sh")):
        return f"{word}es"
    return f"{word}s"


def _remote_description(remote: RemoteTrackingBranchStatus | None) -> str:
    if remote is None:
        return ""
    if not remote.exists:
        return f"{ARROWS_SYNC} {remote.name} (deleted)"
    description = ""
    if remote.ahead > 0 or remote.behind > 0:
        description += f"{remote.behind}{ARROW_DOWN} {remote.ahead}{ARROW_UP} "
    return description + f"{ARROWS_SYNC} {remote.name}"


def top_level_branches(stack: Stack) -> list[StackBranch]:
    """Branches of a stack that are not nested as another branch's child."""
    nested = {child.name for branch in stack.branches for child in branch.children}
    return [branch for branch in stack.branches if branch.name not in nested]


def stack_nodes(forest: StackForest) -> list[StackNode]:
    return [StackNode(stack=stack) for stack in forest]


def branch_nodes(stack: Stack) -> list[BranchNode]:
    return [BranchNode(stack=stack, branch=branch) for branch in top_level_branches(stack)]


def relationship_status(stack: Stack, branch: StackBranch) -> StatusNode | None:
    """Describe a branch's position against its parent, if there is anything to say."""
    if not branch.exists:
        return StatusNode(
            stack=stack,
            branch=branch,
            label="Branch deleted locally",
            description="pending cleanup",
            warning=True,
        )

    remote = branch.remote_tracking_branch
    if remote is not None and not remote.exists:
        return StatusNode(
            stack=stack,
            branch=branch,
            label="Remote branch deleted",
            description=f"{remote.name} no longer exists",
            warning=True,
        )

    parent_branch: Branch | None = find_parent_branch(stack, branch)
    if branch.parent is None or parent_branch is None or not can_compare_to_parent(branch):
        return None

    behind = effective_behind_count(branch, parent_branch)
    ahead = branch.parent.ahead
    if behind == 0 and ahead == 0:
        return None

    parts: list[str] = []
    if ahead > 0:
        parts.append(f"{ahead} {pluralize('commit', ahead)} ahead")
    if behind > 0:
        parts.append(f"{behind} {pluralize('commit', behind)} behind")
    return StatusNode(
        stack=stack,
        branch=branch,
        label=", ".join(parts),
        description=f"{behind}{ARROW_DOWN} {ahead}{ARROW_UP} {parent_branch.name}",
        warning=behind > 0,
    )


def branch_child_nodes(stack: Stack, branch: StackBranch) -> list[TreeNode]:
    """Children of a branch: pull request, relationship status, stacked branches."""
    nodes: list[TreeNode] = []
    if branch.pull_request is not None:
        nodes.append(PullRequestNode(stack=stack, branch=branch, pull_request=branch.pull_request))
    status = relationship_status(stack, branch)
    if status is not None:
        nodes.append(status)
    nodes.extend(BranchNode(stack=stack, branch=child) for child in branch.children)
    return nodes


def present(node: TreeNode) -> TreeItemView:
    """Build display data for a node."""
    if isinstance(node, RepositoryNode):
        count_text = f"{node.stack_count} {pluralize('stack', node.stack_count)}"
        return TreeItemView(
            label=node.name,
            description=count_text,
            icon="repo",
            collapsible=Collapsible.COLLAPSED,
            context_value="repositoryRoot",
            tooltip=count_text,
        )

    if isinstance(node, StackNode):
        stack = node.stack
        description = stack.source_branch.name
        remote = _remote_description(stack.source_branch.remote_tracking_branch)
        if remote:
            description += f"  {remote}"
        count = len(stack.branches)
        description += f" ({count} {pluralize('branch', count)})"
        return TreeItemView(
            label=stack.name,
            description=description,
            icon="layers",
            collapsible=Collapsible.COLLAPSED if stack.branches else Collapsible.NONE,
            context_value="stack",
        )

    if isinstance(node, BranchNode):
        branch = node.branch
        has_children = bool(branch_child_nodes(node.stack, branch))
        if not branch.exists:
            return TreeItemView(
                label=branch.name,
                description="deleted",
                icon="trash",
                collapsible=Collapsible.EXPANDED if has_children else Collapsible.NONE,
                context_value="branch.deleted",
                tooltip=f"{branch.name} no longer exists locally",
            )
        tooltip = None
        if branch.tip is not None:
            tooltip = f"{branch.tip.sha[:7]} {branch.tip.message}"
        return TreeItemView(
            label=branch.name,
            description=_remote_description(branch.remote_tracking_branch),
            icon="git-branch",
            collapsible=Collapsible.EXPANDED if has_children else Collapsible.NONE,
            context_value="branch",
            tooltip=tooltip,
        )

    if isinstance(node, PullRequestNode):
        pr = node.pull_request
        return TreeItemView(
            label=f"#{pr.number} {pr.title}",
            description="draft" if pr.is_draft else "",
            icon="git-pull-request-draft" if pr.is_draft else "git-pull-request",
            collapsible=Collapsible.NONE,
            context_value="pullRequest",
            tooltip=pr.url,
        )

    if isinstance(node, StatusNode):
        return TreeItemView(
            label=node.label,
            description=node.description,
            icon="warning" if node.warning else "info",
            collapsible=Collapsible.NONE,
            context_value="status",
        )

    assert_never(node)
