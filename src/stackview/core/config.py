"""Configuration loaded from environment variables."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_EXECUTABLE = "stack"


def _env_flag(env: Mapping[str, str], name: str) -> bool:
    return env.get(name, "false").strip().lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class StackViewConfig:
    """Runtime configuration.

    Attributes:
        executable: Name or path of the stack CLI
        debug: Enable debug logging
        dry_run: Log mutating operations instead of running them
    """

    executable: str
    debug: bool
    dry_run: bool

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> "StackViewConfig":
        """Load configuration from environment variables."""
        source = os.environ if env is None else env
        return StackViewConfig(
            executable=source.get("STACKVIEW_EXECUTABLE", DEFAULT_EXECUTABLE) or DEFAULT_EXECUTABLE,
            debug=_env_flag(source, "STACKVIEW_DEBUG"),
            dry_run=_env_flag(source, "STACKVIEW_DRY_RUN"),
        )
