"""Run async stack operations from click commands with consistent error output.

Failures are reported so the user can tell "nothing changed" (the stack CLI
could not start, or answered with something unreadable) apart from "the stack
CLI ran and reported a failure", which comes with its diagnostic output.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import click

from stackview.cli.output import error_output, user_output
from stackview.core.aggregator import RepositoryStatus
from stackview.core.context import StackViewContext
from stackview.core.errors import (
    ProcessExecutionError,
    ProcessSpawnError,
    ProtocolDecodeError,
    StackViewError,
)

T = TypeVar("T")


def _print_status(status: RepositoryStatus, *, multi_repo: bool) -> None:
    prefix = f"[{status.repository}] " if multi_repo else ""
    user_output(click.style(f"{prefix}{status.message}", dim=True))


def run_operation(ctx: StackViewContext, operation: Callable[[], Awaitable[T]]) -> T:
    """Run an async operation, streaming status messages to stderr.

    Raises:
        SystemExit: With code 1 when the operation fails
    """
    aggregator = ctx.aggregator
    multi_repo = aggregator.is_multi_repo()
    subscription = aggregator.on_status(lambda status: _print_status(status, multi_repo=multi_repo))

    async def _run() -> T:
        return await operation()

    try:
        return asyncio.run(_run())
    except ProcessExecutionError as e:
        error_output(f"stack CLI failed with exit code {e.exit_code}")
        user_output(f"Command: {e.command_line}")
        if e.stderr.strip():
            user_output(e.stderr.strip())
        raise SystemExit(1) from e
    except ProcessSpawnError as e:
        error_output(f"Could not run the stack CLI ({e.reason}). Nothing was changed.")
        raise SystemExit(1) from e
    except ProtocolDecodeError as e:
        error_output(f"Unexpected output from the stack CLI: {e}")
        raise SystemExit(1) from e
    except StackViewError as e:
        error_output(str(e))
        raise SystemExit(1) from e
    finally:
        subscription.dispose()
