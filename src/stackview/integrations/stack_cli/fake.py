"""In-memory fake implementation of StackCli for testing."""

import asyncio
from collections.abc import Callable, Sequence

from stackview.core.events import EventChannel, Subscription
from stackview.integrations.stack_cli.abc import StackCli
from stackview.integrations.stack_cli.command import StackCommand

FakeResponse = str | Exception


class FakeStackCli(StackCli):
    """In-memory fake implementation for testing.

    All state is provided via constructor using keyword arguments.
    This class has NO public setup methods.
    """

    def __init__(
        self,
        *,
        responses: dict[str, FakeResponse | Sequence[FakeResponse]] | None = None,
        default_output: str = "{}",
        status_messages: dict[str, list[str]] | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        """Create FakeStackCli with pre-configured responses.

        Args:
            responses: Mapping of operation name (e.g. "status", "branch new") to
                stdout text or an exception to raise. A sequence is consumed one
                entry per call; its last entry repeats once exhausted.
            default_output: stdout for operations without a configured response
            status_messages: Mapping of operation name to Status messages emitted
                before the response is returned
            gate: When set, every call waits for this event before responding
        """
        self._responses: dict[str, list[FakeResponse]] = {}
        for name, response in (responses or {}).items():
            if isinstance(response, (str, Exception)):
                self._responses[name] = [response]
            else:
                self._responses[name] = list(response)
        self._default_output = default_output
        self._status_messages = status_messages or {}
        self._gate = gate
        self._status: EventChannel[str] = EventChannel("status")
        self._calls: list[StackCommand] = []
        self._disposed = False

    @property
    def calls(self) -> list[StackCommand]:
        """Read-only copy of every command run, for test assertions."""
        return self._calls.copy()

    @property
    def disposed(self) -> bool:
        return self._disposed

    def calls_for(self, name: str) -> list[StackCommand]:
        return [call for call in self._calls if call.name == name]

    def on_status(self, listener: Callable[[str], None]) -> Subscription:
        return self._status.subscribe(listener)

    async def run(self, command: StackCommand) -> str:
        self._calls.append(command)
        if self._gate is not None:
            await self._gate.wait()

        for message in self._status_messages.get(command.name, []):
            self._status.emit(message)

        response = self._next_response(command.name)
        if isinstance(response, Exception):
            raise response
        return response

    def _next_response(self, name: str) -> FakeResponse:
        queue = self._responses.get(name)
        if not queue:
            return self._default_output
        if len(queue) > 1:
            return queue.pop(0)
        return queue[0]

    def dispose(self) -> None:
        self._disposed = True
        self._status.clear()
