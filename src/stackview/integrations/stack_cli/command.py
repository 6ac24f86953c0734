"""Command line construction for the stack CLI."""

import shlex
from dataclasses import dataclass


@dataclass(frozen=True)
class StackCommand:
    """One invocation of the stack CLI.

    Attributes:
        operation: Subcommand words, e.g. ("branch", "new")
        options: Ordered (flag, value) pairs rendered as "--flag value"
        switches: Valueless flags such as "--yes"
    """

    operation: tuple[str, ...]
    options: tuple[tuple[str, str], ...] = ()
    switches: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        """Operation name used to key fake responses and log messages."""
        return " ".join(self.operation)

    def with_option(self, flag: str, value: str) -> "StackCommand":
        return StackCommand(
            operation=self.operation,
            options=(*self.options, (flag, value)),
            switches=self.switches,
        )

    def with_switch(self, switch: str) -> "StackCommand":
        if switch in self.switches:
            return self
        return StackCommand(
            operation=self.operation,
            options=self.options,
            switches=(*self.switches, switch),
        )

    def option(self, flag: str) -> str | None:
        """Return the value of the first occurrence of flag, if any."""
        for name, value in self.options:
            if name == flag:
                return value
        return None

    def to_argv(self, executable: str) -> list[str]:
        argv = [executable, *self.operation]
        for flag, value in self.options:
            argv.extend([flag, value])
        argv.extend(self.switches)
        return argv

    def display(self, executable: str) -> str:
        """Shell-quoted command line, safe to copy into a terminal."""
        return shlex.join(self.to_argv(executable))
