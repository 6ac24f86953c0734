"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from stackview.core.repository import RepositoryStacks
from stackview.integrations.stack_api.fake import FakeStackApi
from stackview.integrations.stack_cli.fake import FakeStackCli
from tests.test_utils.builders import feature_x_stack


@pytest.fixture
def fake_api() -> FakeStackApi:
    """FakeStackApi holding the feature-x stack."""
    return FakeStackApi(stacks=(feature_x_stack(),))


@pytest.fixture
def fake_cli() -> FakeStackCli:
    return FakeStackCli()


@pytest.fixture
def repository(fake_api: FakeStackApi, fake_cli: FakeStackCli) -> RepositoryStacks:
    """A single repository at /repo backed by fakes."""
    return RepositoryStacks(name="repo", path=Path("/repo"), api=fake_api, cli=fake_cli)
