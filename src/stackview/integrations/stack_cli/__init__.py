"""Process protocol client for the stack CLI."""

from stackview.integrations.stack_cli.abc import StackCli
from stackview.integrations.stack_cli.command import StackCommand
from stackview.integrations.stack_cli.fake import FakeStackCli
from stackview.integrations.stack_cli.real import RealStackCli

__all__ = ["FakeStackCli", "RealStackCli", "StackCli", "StackCommand"]
