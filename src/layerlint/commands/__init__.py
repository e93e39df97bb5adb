"""Subcommand modules for layerlint.

Provides register_commands() which uses deferred imports to keep
``layerlint --help`` fast as the codebase grows.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from layerlint.commands.check import check
    from layerlint.commands.explain import explain
    from layerlint.commands.lint import lint
    from layerlint.commands.rules import rules_cmd

    cli.add_command(lint)
    cli.add_command(check)
    cli.add_command(explain)
    cli.add_command(rules_cmd)
