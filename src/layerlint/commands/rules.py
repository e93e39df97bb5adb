"""Command: list rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from layerlint.commands._base import LintCommand

if TYPE_CHECKING:
    from layerlint.commands._context import AppContext


@click.command(
    name="rules",
    cls=LintCommand,
    examples="""\
  layerlint rules
  layerlint --verbose rules
  layerlint --json rules""",
)
@click.pass_obj
def rules_cmd(app: AppContext) -> None:
    """List built-in and plugin rules with their effective severity."""
    from layerlint.services.rules import RulesService

    app.emit(RulesService(app.project).list_rules())
