"""Application context with dependency injection."""

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from stackview.core.aggregator import StackAggregator
from stackview.core.config import StackViewConfig
from stackview.core.repository import RepositoryStacks
from stackview.integrations.stack_api.abc import StackApi


@dataclass(frozen=True)
class StackViewContext:
    """Immutable context holding all dependencies for stackview operations.

    Created at CLI entry point and threaded through the application.
    """

    config: StackViewConfig
    aggregator: StackAggregator

    @staticmethod
    def for_test(
        *,
        apis: dict[Path, StackApi] | None = None,
        config: StackViewConfig | None = None,
    ) -> "StackViewContext":
        """Create a context backed by fakes.

        Args:
            apis: Mapping of repository root -> StackApi (FakeStackApi by default)
            config: Configuration; defaults to a non-debug, non-dry-run config

        Returns:
            StackViewContext whose repositories use the given APIs
        """
        from stackview.integrations.stack_api.fake import FakeStackApi
        from stackview.integrations.stack_cli.fake import FakeStackCli

        if apis is None:
            apis = {Path("/repo"): FakeStackApi()}
        repositories = [
            RepositoryStacks(name=path.name, path=path, api=api, cli=FakeStackCli())
            for path, api in apis.items()
        ]
        return StackViewContext(
            config=config or StackViewConfig(executable="stack", debug=False, dry_run=False),
            aggregator=StackAggregator(repositories),
        )


def create_context(repo_paths: Iterable[Path], config: StackViewConfig) -> StackViewContext:
    """Create the production context for the given repository roots."""
    repositories = [RepositoryStacks.open(path.resolve(), config) for path in repo_paths]
    return StackViewContext(config=config, aggregator=StackAggregator(repositories))
