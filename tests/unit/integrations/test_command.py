"""Tests for StackCommand argv construction."""

from stackview.integrations.stack_cli.command import StackCommand


def test_to_argv_orders_operation_options_then_switches() -> None:
    command = (
        StackCommand(operation=("branch", "new"))
        .with_switch("--json")
        .with_option("--stack", "feature-x")
        .with_option("--branch", "c")
    )

    assert command.to_argv("stack") == [
        "stack",
        "branch",
        "new",
        "--stack",
        "feature-x",
        "--branch",
        "c",
        "--json",
    ]
    assert command.name == "branch new"


def test_with_switch_does_not_duplicate() -> None:
    command = StackCommand(operation=("status",)).with_switch("--json").with_switch("--json")

    assert command.switches == ("--json",)


def test_option_returns_first_value() -> None:
    command = StackCommand(operation=("sync",)).with_option("--stack", "one")

    assert command.option("--stack") == "one"
    assert command.option("--missing") is None


def test_display_quotes_arguments() -> None:
    command = StackCommand(operation=("new",)).with_option("--name", "my stack")

    assert command.display("stack") == "stack new --name 'my stack'"


def test_builders_do_not_mutate_original() -> None:
    base = StackCommand(operation=("pull",))
    base.with_option("--stack", "x")

    assert base.options == ()
