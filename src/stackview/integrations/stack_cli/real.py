"""Real stack CLI client using asyncio subprocesses.

stdout carries the terminal JSON payload and is buffered to completion.
stderr carries NDJSON events and is read concurrently in chunks so Status
events reach listeners while the process is still running.
"""

import asyncio
import logging
from collections.abc import Callable
from pathlib import Path

from stackview.core.errors import ProcessExecutionError, ProcessSpawnError
from stackview.core.events import EventChannel, Subscription
from stackview.integrations.stack_cli.abc import StackCli
from stackview.integrations.stack_cli.command import StackCommand
from stackview.integrations.stack_cli.protocol import CliEvent, LineBuffer, decode_line

logger = logging.getLogger(__name__)

# Events forwarded from the CLI get their own logger so they can be filtered
cli_logger = logging.getLogger("stackview.stack_cli")

_READ_CHUNK_SIZE = 4096


class RealStackCli(StackCli):
    """Production implementation that spawns the stack executable."""

    def __init__(self, *, executable: str, working_dir: Path | None = None) -> None:
        """Create a client.

        Args:
            executable: Name or path of the stack CLI binary
            working_dir: Working directory for spawned processes
        """
        self._executable = executable
        self._working_dir = working_dir
        self._status: EventChannel[str] = EventChannel("status")
        self._processes: set[asyncio.subprocess.Process] = set()

    @property
    def executable(self) -> str:
        return self._executable

    def on_status(self, listener: Callable[[str], None]) -> Subscription:
        return self._status.subscribe(listener)

    async def run(self, command: StackCommand) -> str:
        argv = command.to_argv(self._executable)
        command_line = command.display(self._executable)
        logger.info(command_line)

        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                cwd=str(self._working_dir) if self._working_dir is not None else None,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ProcessSpawnError(command_line, str(e)) from e

        self._processes.add(process)
        try:
            assert process.stdout is not None
            assert process.stderr is not None
            diagnostics = bytearray()
            stdout_bytes, _ = await asyncio.gather(
                process.stdout.read(),
                self._drain_stderr(process.stderr, diagnostics),
            )
            exit_code = await process.wait()
        finally:
            self._processes.discard(process)

        stdout = stdout_bytes.decode("utf-8", errors="replace")
        if stdout:
            logger.debug("%s stdout: %s", command.name, stdout.strip())

        if exit_code != 0:
            raise ProcessExecutionError(
                exit_code=exit_code,
                command_line=command_line,
                stderr=diagnostics.decode("utf-8", errors="replace"),
            )
        return stdout

    async def _drain_stderr(self, stream: asyncio.StreamReader, diagnostics: bytearray) -> None:
        # Reassembly state is private to this invocation
        buffer = LineBuffer()
        while True:
            chunk = await stream.read(_READ_CHUNK_SIZE)
            if not chunk:
                break
            diagnostics.extend(chunk)
            for line in buffer.feed(chunk):
                self._handle_line(line)

        dropped = buffer.discard()
        if dropped:
            logger.debug("Discarded %d bytes of unterminated stderr output", len(dropped))

    def _handle_line(self, line: str) -> None:
        decoded = decode_line(line)
        if not isinstance(decoded, CliEvent):
            cli_logger.info(decoded)
            return

        cli_logger.log(
            decoded.log_level.logging_level,
            "%s",
            decoded.message,
            extra={"category": decoded.category, "event_id": decoded.event_id},
        )
        if decoded.is_status:
            self._status.emit(decoded.message)

    def dispose(self) -> None:
        for process in list(self._processes):
            if process.returncode is None:
                logger.debug("Killing stack CLI process %s", process.pid)
                process.kill()
        self._processes.clear()
        self._status.clear()
