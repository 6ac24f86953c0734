"""Tests for converting stack CLI JSON into the status model."""

import copy

import pytest

from stackview.core.errors import ProtocolDecodeError
from stackview.core.models import (
    Commit,
    GitHubPullRequest,
    ParentBranchStatus,
    RemoteTrackingBranchStatus,
)
from stackview.core.parsing import parse_stack_summaries, parse_stacks
from tests.test_utils.builders import FEATURE_X_STATUS_JSON


def test_parse_feature_x_structure() -> None:
    forest = parse_stacks(FEATURE_X_STATUS_JSON)

    assert len(forest) == 1
    stack = forest[0]
    assert stack.name == "feature-x"
    assert stack.source_branch.name == "main"
    assert stack.source_branch.tip == Commit(sha="0a1b2c3d4e", message="Initial commit")
    assert [branch.name for branch in stack.branches] == ["a", "b"]

    a, b = stack.branches
    assert a.remote_tracking_branch == RemoteTrackingBranchStatus(
        name="origin/a", exists=True, ahead=0, behind=2
    )
    assert b.parent == ParentBranchStatus(name="a", ahead=1, behind=0)
    assert b.pull_request == GitHubPullRequest(
        number=42,
        title="Add b",
        url="https://github.com/example/repo/pull/42",
        is_draft=True,
    )
    assert a.pull_request is None


def test_parse_nested_children() -> None:
    payload = copy.deepcopy(FEATURE_X_STATUS_JSON)
    a = payload[0]["branches"][0]
    a["children"] = [{"name": "a2", "exists": True, "parent": {"name": "a", "ahead": 3}}]

    stack = parse_stacks(payload)[0]

    child = stack.branches[0].children[0]
    assert child.name == "a2"
    assert child.parent == ParentBranchStatus(name="a", ahead=3, behind=0)
    assert child.children == ()


def test_deleted_remote_reports_zero_divergence() -> None:
    payload = copy.deepcopy(FEATURE_X_STATUS_JSON)
    payload[0]["branches"][0]["remoteTrackingBranch"] = {
        "name": "origin/a",
        "exists": False,
        "ahead": 4,
        "behind": 9,
    }

    a = parse_stacks(payload)[0].branches[0]

    assert a.remote_tracking_branch == RemoteTrackingBranchStatus(
        name="origin/a", exists=False, ahead=0, behind=0
    )


def test_legacy_parent_shape() -> None:
    payload = copy.deepcopy(FEATURE_X_STATUS_JSON)
    payload[0]["branches"][1]["parent"] = {"branch": {"name": "a"}, "ahead": 1, "behind": 0}

    b = parse_stacks(payload)[0].branches[1]

    assert b.parent == ParentBranchStatus(name="a", ahead=1, behind=0)


def test_negative_count_is_rejected() -> None:
    payload = copy.deepcopy(FEATURE_X_STATUS_JSON)
    payload[0]["branches"][1]["parent"]["behind"] = -1

    with pytest.raises(ProtocolDecodeError, match="Negative 'behind'"):
        parse_stacks(payload)


def test_boolean_count_is_rejected() -> None:
    payload = copy.deepcopy(FEATURE_X_STATUS_JSON)
    payload[0]["branches"][0]["remoteTrackingBranch"]["ahead"] = True

    with pytest.raises(ProtocolDecodeError):
        parse_stacks(payload)


def test_non_list_document_is_rejected() -> None:
    with pytest.raises(ProtocolDecodeError, match="Expected list of stacks"):
        parse_stacks({"stacks": []})


def test_missing_branch_name_is_rejected() -> None:
    payload = copy.deepcopy(FEATURE_X_STATUS_JSON)
    del payload[0]["branches"][0]["name"]

    with pytest.raises(ProtocolDecodeError, match="'name'"):
        parse_stacks(payload)


def test_empty_forest() -> None:
    assert parse_stacks([]) == ()


def test_parse_summaries_accepts_string_and_object_source() -> None:
    summaries = parse_stack_summaries(
        {
            "stacks": [
                {"name": "one", "sourceBranch": "main", "branchCount": 2},
                {"name": "two", "sourceBranch": {"name": "develop"}, "branchCount": 0},
            ]
        }
    )

    assert [(s.name, s.source_branch, s.branch_count) for s in summaries] == [
        ("one", "main", 2),
        ("two", "develop", 0),
    ]


def test_parse_summaries_requires_stacks_list() -> None:
    with pytest.raises(ProtocolDecodeError):
        parse_stack_summaries({"items": []})
