"""Command: structural-presence checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from layerlint.commands._base import LintCommand

if TYPE_CHECKING:
    from layerlint.commands._context import AppContext


@click.command(
    cls=LintCommand,
    examples="""\
  layerlint check
  layerlint check --rule feature-index-required
  layerlint --quiet check""",
)
@click.option("--rule", "rules", multiple=True, help="Only run this check (repeatable).")
@click.pass_obj
def check(app: AppContext, rules: tuple[str, ...]) -> None:
    """Check that features, modules and UI folders expose public entries."""
    from layerlint.services.structure import StructureService

    result = StructureService(app.project).check(app.gate, rules=list(rules) or None)
    app.emit(result, fail=result.fails_build())
