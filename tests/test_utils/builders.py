"""Builders for status model values used across tests."""

import json
from typing import Any

from stackview.core.models import (
    Branch,
    Commit,
    GitHubPullRequest,
    ParentBranchStatus,
    RemoteTrackingBranchStatus,
    Stack,
    StackBranch,
)


def make_remote(
    name: str, *, exists: bool = True, ahead: int = 0, behind: int = 0
) -> RemoteTrackingBranchStatus:
    return RemoteTrackingBranchStatus(name=name, exists=exists, ahead=ahead, behind=behind)


def make_branch(
    name: str,
    *,
    exists: bool = True,
    remote: RemoteTrackingBranchStatus | None = None,
    tip: Commit | None = None,
) -> Branch:
    return Branch(name=name, exists=exists, tip=tip, remote_tracking_branch=remote)


def make_stack_branch(
    name: str,
    *,
    exists: bool = True,
    remote: RemoteTrackingBranchStatus | None = None,
    tip: Commit | None = None,
    parent: ParentBranchStatus | None = None,
    pull_request: GitHubPullRequest | None = None,
    children: tuple[StackBranch, ...] = (),
) -> StackBranch:
    return StackBranch(
        name=name,
        exists=exists,
        tip=tip,
        remote_tracking_branch=remote,
        pull_request=pull_request,
        parent=parent,
        children=children,
    )


def make_stack(
    name: str, *, source: Branch | None = None, branches: tuple[StackBranch, ...] = ()
) -> Stack:
    return Stack(
        name=name,
        source_branch=source or make_branch("main", remote=make_remote("origin/main")),
        branches=branches,
    )


def feature_x_stack() -> Stack:
    """feature-x on main with a (2 behind its remote) and b (1 ahead of a)."""
    return make_stack(
        "feature-x",
        branches=(
            make_stack_branch(
                "a",
                remote=make_remote("origin/a", behind=2),
                parent=ParentBranchStatus(name="main", ahead=0, behind=0),
            ),
            make_stack_branch(
                "b",
                remote=make_remote("origin/b"),
                parent=ParentBranchStatus(name="a", ahead=1, behind=0),
            ),
        ),
    )


FEATURE_X_STATUS_JSON: list[dict[str, Any]] = [
    {
        "name": "feature-x",
        "sourceBranch": {
            "name": "main",
            "exists": True,
            "tip": {"sha": "0a1b2c3d4e", "message": "Initial commit"},
            "remoteTrackingBranch": {"name": "origin/main", "exists": True, "ahead": 0, "behind": 0},
        },
        "branches": [
            {
                "name": "a",
                "exists": True,
                "tip": {"sha": "1111111aaa", "message": "Add a"},
                "remoteTrackingBranch": {"name": "origin/a", "exists": True, "ahead": 0, "behind": 2},
                "parent": {"name": "main", "ahead": 0, "behind": 0},
                "children": [],
            },
            {
                "name": "b",
                "exists": True,
                "tip": {"sha": "2222222bbb", "message": "Add b"},
                "remoteTrackingBranch": {"name": "origin/b", "exists": True, "ahead": 0, "behind": 0},
                "parent": {"name": "a", "ahead": 1, "behind": 0},
                "pullRequest": {
                    "number": 42,
                    "title": "Add b",
                    "url": "https://github.com/example/repo/pull/42",
                    "isDraft": True,
                },
                "children": [],
            },
        ],
    }
]


def feature_x_status_output() -> str:
    return json.dumps(FEATURE_X_STATUS_JSON)
