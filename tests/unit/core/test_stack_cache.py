"""Tests for StackCache single-flight loading and invalidation."""

import asyncio
from pathlib import Path

import pytest

from stackview.core.errors import ProcessExecutionError, ProtocolDecodeError
from stackview.core.models import StackForest
from stackview.core.stack_cache import StackCache
from stackview.integrations.stack_api.fake import FakeStackApi
from stackview.integrations.stack_api.real import RealStackApi
from stackview.integrations.stack_cli.fake import FakeStackCli
from tests.test_utils.builders import feature_x_stack, feature_x_status_output


def _cache_over_cli(cli: FakeStackCli) -> StackCache:
    return StackCache(RealStackApi(cli, Path("/repo")))


async def test_concurrent_readers_share_one_fetch() -> None:
    gate = asyncio.Event()
    cli = FakeStackCli(responses={"status": feature_x_status_output()}, gate=gate)
    cache = _cache_over_cli(cli)

    readers = [asyncio.ensure_future(cache.get_stacks()) for _ in range(5)]
    await asyncio.sleep(0)
    assert cache.is_fetching
    gate.set()
    results = await asyncio.gather(*readers)

    assert len(cli.calls_for("status")) == 1
    assert cache.fetch_count == 1
    assert all(result is results[0] for result in results)
    assert results[0][0].name == "feature-x"


async def test_loaded_cache_does_not_refetch(fake_api: FakeStackApi) -> None:
    cache = StackCache(fake_api)

    first = await cache.get_stacks()
    second = await cache.get_stacks()

    assert first is second
    assert fake_api.get_stacks_calls == 1
    assert cache.is_loaded


async def test_clear_cache_forces_refetch(fake_api: FakeStackApi) -> None:
    cache = StackCache(fake_api)
    await cache.get_stacks()

    cache.clear_cache()
    cache.clear_cache()

    assert not cache.is_loaded
    await cache.get_stacks()
    assert fake_api.get_stacks_calls == 2


def test_clear_cache_on_empty_cache_is_noop(fake_api: FakeStackApi) -> None:
    cache = StackCache(fake_api)

    cache.clear_cache()

    assert not cache.is_loaded
    assert fake_api.get_stacks_calls == 0


async def test_failed_fetch_leaves_cache_empty() -> None:
    error = ProcessExecutionError(1, "stack status --all --json", "error: branch not found")
    cli = FakeStackCli(responses={"status": error})
    cache = _cache_over_cli(cli)

    with pytest.raises(ProcessExecutionError, match="error: branch not found") as excinfo:
        await cache.get_stacks()

    assert excinfo.value.exit_code == 1
    assert not cache.is_loaded
    assert not cache.is_fetching


async def test_failure_reaches_every_waiting_reader() -> None:
    gate = asyncio.Event()
    error = ProcessExecutionError(1, "stack status", "error: branch not found")
    cli = FakeStackCli(responses={"status": error}, gate=gate)
    cache = _cache_over_cli(cli)

    readers = [asyncio.ensure_future(cache.get_stacks()) for _ in range(3)]
    await asyncio.sleep(0)
    gate.set()
    results = await asyncio.gather(*readers, return_exceptions=True)

    assert all(result is error for result in results)
    assert len(cli.calls_for("status")) == 1


async def test_next_read_after_failure_retries() -> None:
    cli = FakeStackCli(
        responses={"status": [ProcessExecutionError(1, "stack status", ""), feature_x_status_output()]}
    )
    cache = _cache_over_cli(cli)

    with pytest.raises(ProcessExecutionError):
        await cache.get_stacks()
    stacks = await cache.get_stacks()

    assert stacks[0].name == "feature-x"
    assert cache.fetch_count == 2


async def test_invalid_json_is_protocol_error() -> None:
    cache = _cache_over_cli(FakeStackCli(responses={"status": "not json"}))

    with pytest.raises(ProtocolDecodeError):
        await cache.get_stacks()

    assert not cache.is_loaded


async def test_clear_during_fetch_keeps_late_result() -> None:
    gate = asyncio.Event()
    cli = FakeStackCli(responses={"status": feature_x_status_output()}, gate=gate)
    cache = _cache_over_cli(cli)

    reader = asyncio.ensure_future(cache.get_stacks())
    await asyncio.sleep(0)
    cache.clear_cache()
    gate.set()
    await reader

    assert cache.is_loaded
    assert cache.fetch_count == 1


async def test_refresh_replaces_loaded_forest() -> None:
    cli = FakeStackCli(responses={"status": [feature_x_status_output(), "[]"]})
    cache = _cache_over_cli(cli)
    await cache.get_stacks()

    refreshed = await cache.refresh_stacks()

    assert refreshed == ()
    assert await cache.get_stacks() == ()
    assert cache.fetch_count == 2


async def test_lookup_by_name() -> None:
    cache = StackCache(FakeStackApi(stacks=(feature_x_stack(),)))

    stack = await cache.get_stack_by_name("feature-x")
    branch = await cache.get_branch_by_name("feature-x", "b")

    assert stack is not None
    assert branch is not None
    assert branch.name == "b"
    assert await cache.get_stack_by_name("missing") is None
    assert await cache.get_branch_by_name("feature-x", "missing") is None
    assert await cache.get_branch_by_name("missing", "b") is None


async def test_read_after_clear_starts_fresh_fetch() -> None:
    gate = asyncio.Event()
    cli = FakeStackCli(responses={"status": [feature_x_status_output(), "[]"]}, gate=gate)
    cache = _cache_over_cli(cli)

    stale_reader = asyncio.ensure_future(cache.get_stacks())
    await _settle()
    cache.clear_cache()
    fresh_reader = asyncio.ensure_future(cache.get_stacks())
    await _settle()
    gate.set()
    stale, fresh = await asyncio.gather(stale_reader, fresh_reader)

    assert len(cli.calls_for("status")) == 2
    assert cache.fetch_count == 2
    assert stale[0].name == "feature-x"
    assert fresh == ()


class _ControlledStackApi(FakeStackApi):
    """Each get_stacks() call waits on its own future, resolved by the test."""

    def __init__(self) -> None:
        super().__init__()
        self.pending: list[asyncio.Future[StackForest]] = []

    async def get_stacks(self) -> StackForest:
        future: asyncio.Future[StackForest] = asyncio.get_running_loop().create_future()
        self.pending.append(future)
        return await future


async def _settle() -> None:
    for _ in range(3):
        await asyncio.sleep(0)


async def test_superseded_failure_keeps_refreshed_forest() -> None:
    api = _ControlledStackApi()
    cache = StackCache(api)

    old_reader = asyncio.ensure_future(cache.get_stacks())
    await _settle()
    refresh = asyncio.ensure_future(cache.refresh_stacks())
    await _settle()
    assert len(api.pending) == 2

    api.pending[1].set_result((feature_x_stack(),))
    await refresh
    api.pending[0].set_exception(ProcessExecutionError(1, "stack status", "timed out"))
    with pytest.raises(ProcessExecutionError):
        await old_reader

    assert cache.is_loaded
    assert (await cache.get_stacks())[0].name == "feature-x"
