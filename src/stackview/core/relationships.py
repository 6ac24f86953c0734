"""Pure functions deriving branch relationships from already-fetched status.

No I/O and no side effects; results depend only on the arguments.
"""

from stackview.core.models import Branch, Stack, StackBranch, iter_stack_branches


def can_compare_to_parent(branch: Branch) -> bool:
    """Check whether a branch can be meaningfully compared to its parent.

    A branch that no longer exists locally, or whose remote branch was
    deleted, cannot be compared until that is resolved.
    """
    if not branch.exists:
        return False
    remote = branch.remote_tracking_branch
    return remote is None or remote.exists


def effective_behind_count(branch: StackBranch, parent_branch: Branch) -> int:
    """Count commits a branch is behind, including its parent's remote staleness.

    This is the branch's behind count relative to its direct parent plus
    whatever the parent itself is behind on its remote.

    Args:
        branch: Branch to evaluate
        parent_branch: The branch referenced by branch.parent

    Returns:
        Non-negative commit count
    """
    behind = branch.parent.behind if branch.parent is not None else 0
    parent_remote = parent_branch.remote_tracking_branch
    if parent_remote is not None:
        behind += parent_remote.behind
    return behind


def find_parent_branch(stack: Stack, branch: StackBranch) -> Branch | None:
    """Resolve the branch that branch.parent refers to within a stack."""
    if branch.parent is None:
        return None
    parent_name = branch.parent.name
    if parent_name == stack.source_branch.name:
        return stack.source_branch
    for candidate in iter_stack_branches(stack):
        if candidate.name == parent_name:
            return candidate
    return None
