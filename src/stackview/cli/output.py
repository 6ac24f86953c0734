"""Output helpers for CLI commands with clear intent.

user_output writes progress, errors and human-facing text to stderr.
machine_output writes data meant for other programs to stdout.
"""

import click


def user_output(message: str = "", nl: bool = True) -> None:
    click.echo(message, err=True, nl=nl)


def machine_output(message: str = "", nl: bool = True) -> None:
    click.echo(message, nl=nl)


def error_output(message: str) -> None:
    """Write a message with the red "Error: " prefix used by every command."""
    user_output(click.style("Error: ", fg="red") + message)
