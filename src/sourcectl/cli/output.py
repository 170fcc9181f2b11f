"""Output utilities for CLI commands with clear intent.

user_output: human-facing messages, routed to stderr.
machine_output: data meant for other programs (JSON), routed to stdout.
"""

import click


def user_output(message: str = "") -> None:
    """Write a human-readable message to stderr."""
    click.echo(message, err=True)


def machine_output(message: str) -> None:
    """Write machine-readable output to stdout."""
    click.echo(message)
