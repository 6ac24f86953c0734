"""Abstract interface for running the stack CLI."""

import json
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from stackview.core.errors import ProtocolDecodeError
from stackview.core.events import Subscription
from stackview.integrations.stack_cli.command import StackCommand


class StackCli(ABC):
    """Process protocol client for the stack CLI.

    All implementations must implement this interface for testability.
    Status listeners are registered for the lifetime of the client, not for
    a single call.
    """

    @abstractmethod
    async def run(self, command: StackCommand) -> str:
        """Run one command and return everything it wrote to stdout.

        Raises:
            ProcessSpawnError: If the executable could not be started
            ProcessExecutionError: If the process exited with a non-zero code
        """
        ...

    @abstractmethod
    def on_status(self, listener: Callable[[str], None]) -> Subscription:
        """Register a listener for Status events observed on stderr."""
        ...

    @abstractmethod
    def dispose(self) -> None:
        """Release process handles and drop every status listener."""
        ...

    async def run_json(self, command: StackCommand) -> Any:
        """Run a command and decode stdout as a single JSON document.

        Raises:
            ProtocolDecodeError: If stdout is not valid JSON
        """
        output = await self.run(command)
        return decode_json_output(output)


def decode_json_output(output: str) -> Any:
    """Parse the primary channel as one JSON document.

    Line endings are stripped first; the CLI may wrap long documents.
    """
    text = output.replace("\r", "").replace("\n", "")
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ProtocolDecodeError(f"Invalid JSON from stack CLI: {e}", text=output) from e
