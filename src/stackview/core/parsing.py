"""Convert stack CLI JSON documents into the status data model.

The CLI speaks camelCase JSON. These functions only validate what the model
needs; unknown keys are ignored so newer CLI versions keep working.
"""

from typing import Any

from stackview.core.errors import ProtocolDecodeError
from stackview.core.models import (
    Branch,
    Commit,
    GitHubPullRequest,
    ParentBranchStatus,
    RemoteTrackingBranchStatus,
    Stack,
    StackBranch,
    StackForest,
    StackSummary,
)


def _require_dict(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ProtocolDecodeError(f"Expected object for {what}, got {type(value).__name__}")
    return value


def _require_str(data: dict[str, Any], key: str, what: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ProtocolDecodeError(f"Missing or invalid '{key}' in {what}")
    return value


def _read_count(data: dict[str, Any], key: str, what: str) -> int:
    value = data.get(key, 0)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ProtocolDecodeError(f"Invalid '{key}' in {what}: {value!r}")
    if value < 0:
        raise ProtocolDecodeError(f"Negative '{key}' in {what}: {value}")
    return value


def _parse_commit(value: Any) -> Commit | None:
    if value is None:
        return None
    data = _require_dict(value, "commit")
    return Commit(
        sha=_require_str(data, "sha", "commit"),
        message=str(data.get("message", "")),
    )


def _parse_remote(value: Any) -> RemoteTrackingBranchStatus | None:
    if value is None:
        return None
    data = _require_dict(value, "remote tracking branch")
    exists = bool(data.get("exists", False))
    what = "remote tracking branch"
    return RemoteTrackingBranchStatus(
        name=_require_str(data, "name", what),
        exists=exists,
        ahead=_read_count(data, "ahead", what) if exists else 0,
        behind=_read_count(data, "behind", what) if exists else 0,
    )


def _parse_parent(value: Any) -> ParentBranchStatus | None:
    if value is None:
        return None
    data = _require_dict(value, "parent branch status")
    name = data.get("name")
    if name is None and isinstance(data.get("branch"), dict):
        # Older CLI versions nest the full parent branch object
        name = data["branch"].get("name")
    if not isinstance(name, str):
        raise ProtocolDecodeError("Missing parent branch name")
    return ParentBranchStatus(
        name=name,
        ahead=_read_count(data, "ahead", "parent branch status"),
        behind=_read_count(data, "behind", "parent branch status"),
    )


def _parse_pull_request(value: Any) -> GitHubPullRequest | None:
    if value is None:
        return None
    data = _require_dict(value, "pull request")
    number = data.get("number")
    if isinstance(number, bool) or not isinstance(number, int):
        raise ProtocolDecodeError(f"Invalid pull request number: {number!r}")
    return GitHubPullRequest(
        number=number,
        title=str(data.get("title", "")),
        url=str(data.get("url", "")),
        is_draft=bool(data.get("isDraft", False)),
    )


def parse_branch(value: Any) -> Branch:
    """Parse a plain branch object (used for a stack's source branch)."""
    data = _require_dict(value, "branch")
    return Branch(
        name=_require_str(data, "name", "branch"),
        exists=bool(data.get("exists", True)),
        tip=_parse_commit(data.get("tip")),
        remote_tracking_branch=_parse_remote(data.get("remoteTrackingBranch")),
    )


def parse_stack_branch(value: Any) -> StackBranch:
    """Parse a stack branch, including its children recursively."""
    data = _require_dict(value, "stack branch")
    children_raw = data.get("children") or []
    if not isinstance(children_raw, list):
        raise ProtocolDecodeError("Expected list for branch children")
    base = parse_branch(data)
    return StackBranch(
        name=base.name,
        exists=base.exists,
        tip=base.tip,
        remote_tracking_branch=base.remote_tracking_branch,
        pull_request=_parse_pull_request(data.get("pullRequest")),
        parent=_parse_parent(data.get("parent")),
        children=tuple(parse_stack_branch(child) for child in children_raw),
    )


def parse_stack(value: Any) -> Stack:
    data = _require_dict(value, "stack")
    branches_raw = data.get("branches") or []
    if not isinstance(branches_raw, list):
        raise ProtocolDecodeError("Expected list for stack branches")
    return Stack(
        name=_require_str(data, "name", "stack"),
        source_branch=parse_branch(data.get("sourceBranch")),
        branches=tuple(parse_stack_branch(branch) for branch in branches_raw),
    )


def parse_stacks(payload: Any) -> StackForest:
    """Parse the `stack status --all --json` document.

    Args:
        payload: Decoded JSON, expected to be a list of stack objects

    Returns:
        Tuple of stacks in reported order

    Raises:
        ProtocolDecodeError: If the document does not have the expected shape
    """
    if not isinstance(payload, list):
        raise ProtocolDecodeError(
            f"Expected list of stacks, got {type(payload).__name__}"
        )
    return tuple(parse_stack(item) for item in payload)


def parse_stack_summaries(payload: Any) -> tuple[StackSummary, ...]:
    """Parse the `stack list --json` document: {"stacks": [...]}."""
    data = _require_dict(payload, "stack list")
    stacks_raw = data.get("stacks")
    if not isinstance(stacks_raw, list):
        raise ProtocolDecodeError("Expected 'stacks' list in stack list output")

    summaries: list[StackSummary] = []
    for item in stacks_raw:
        entry = _require_dict(item, "stack summary")
        source = entry.get("sourceBranch")
        if isinstance(source, dict):
            source = source.get("name")
        if not isinstance(source, str):
            raise ProtocolDecodeError("Missing 'sourceBranch' in stack summary")
        summaries.append(
            StackSummary(
                name=_require_str(entry, "name", "stack summary"),
                source_branch=source,
                branch_count=_read_count(entry, "branchCount", "stack summary"),
            )
        )
    return tuple(summaries)
