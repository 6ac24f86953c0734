"""Tests for the pure branch relationship functions."""

from stackview.core.models import ParentBranchStatus
from stackview.core.parsing import parse_stacks
from stackview.core.relationships import (
    can_compare_to_parent,
    effective_behind_count,
    find_parent_branch,
)
from tests.test_utils.builders import (
    FEATURE_X_STATUS_JSON,
    make_branch,
    make_remote,
    make_stack,
    make_stack_branch,
)


def test_cannot_compare_when_remote_deleted() -> None:
    branch = make_branch("a", remote=make_remote("origin/a", exists=False))

    assert can_compare_to_parent(branch) is False


def test_can_compare_without_remote() -> None:
    assert can_compare_to_parent(make_branch("a", remote=None)) is True


def test_cannot_compare_ghost_branch() -> None:
    assert can_compare_to_parent(make_branch("a", exists=False)) is False


def test_can_compare_with_existing_remote() -> None:
    assert can_compare_to_parent(make_branch("a", remote=make_remote("origin/a"))) is True


def test_effective_behind_adds_parent_remote_staleness() -> None:
    branch = make_stack_branch("b", parent=ParentBranchStatus(name="a", ahead=0, behind=2))
    parent = make_branch("a", remote=make_remote("origin/a", behind=3))

    assert effective_behind_count(branch, parent) == 5


def test_effective_behind_without_parent_remote() -> None:
    branch = make_stack_branch("b", parent=ParentBranchStatus(name="a", ahead=0, behind=4))

    assert effective_behind_count(branch, make_branch("a")) == 4


def test_effective_behind_without_parent_status() -> None:
    parent = make_branch("a", remote=make_remote("origin/a", behind=1))

    assert effective_behind_count(make_stack_branch("b"), parent) == 1


def test_feature_x_b_is_two_behind() -> None:
    stack = parse_stacks(FEATURE_X_STATUS_JSON)[0]
    a, b = stack.branches

    parent = find_parent_branch(stack, b)

    assert parent == a
    assert effective_behind_count(b, a) == 2


def test_find_parent_resolves_source_branch() -> None:
    stack = parse_stacks(FEATURE_X_STATUS_JSON)[0]

    assert find_parent_branch(stack, stack.branches[0]) is stack.source_branch


def test_find_parent_searches_nested_children() -> None:
    nested = make_stack_branch("c", parent=ParentBranchStatus(name="b", ahead=1, behind=0))
    b = make_stack_branch("b", children=(nested,))
    stack = make_stack("s", branches=(make_stack_branch("a", children=(b,)),))

    assert find_parent_branch(stack, nested) is b


def test_find_parent_unknown_name() -> None:
    branch = make_stack_branch("b", parent=ParentBranchStatus(name="gone", ahead=0, behind=0))
    stack = make_stack("s", branches=(branch,))

    assert find_parent_branch(stack, branch) is None
    assert find_parent_branch(stack, make_stack_branch("x")) is None
