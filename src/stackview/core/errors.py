"""Error types raised by stackview.

Process errors come from the stack CLI client and are passed through the cache
and aggregator layers unchanged. Nothing in stackview retries automatically.
"""


class StackViewError(Exception):
    """Base class for all stackview errors."""


class ProcessSpawnError(StackViewError):
    """The stack CLI could not be started (missing executable, permissions).

    Raised before any output is produced, so nothing in the repository changed.
    """

    def __init__(self, command_line: str, reason: str) -> None:
        self.command_line = command_line
        self.reason = reason
        super().__init__(f"Failed to start '{command_line}': {reason}")


class ProcessExecutionError(StackViewError):
    """The stack CLI ran but exited with a non-zero code.

    Attributes:
        exit_code: Process exit code
        command_line: Quoted command line that was executed
        stderr: Everything the process wrote to its auxiliary channel
    """

    def __init__(self, exit_code: int, command_line: str, stderr: str) -> None:
        self.exit_code = exit_code
        self.command_line = command_line
        self.stderr = stderr
        message = f"Command failed with exit code {exit_code}: {command_line}"
        detail = stderr.strip()
        if detail:
            message += f"\n{detail}"
        super().__init__(message)


class ProtocolDecodeError(StackViewError):
    """The stack CLI produced output that is not the expected JSON document."""

    def __init__(self, message: str, text: str = "") -> None:
        self.text = text
        super().__init__(message)


class UnknownNodeError(StackViewError):
    """A tree node was not produced by the aggregator that received it."""


class RepositoryNotFoundError(StackViewError):
    """No open repository matches the requested path."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Repository not open: {path}")
