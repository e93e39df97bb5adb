"""Command: lint source files for boundary violations."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from layerlint.commands._base import LintCommand

if TYPE_CHECKING:
    from layerlint.commands._context import AppContext


@click.command(
    cls=LintCommand,
    examples="""\
  layerlint lint
  layerlint lint src/features/auth
  layerlint lint src/app/main.ts src/app/router.ts
  layerlint lint --rule app-imports --rule no-cross-unit-imports
  layerlint lint --min-severity error
  layerlint lint --no-structure --max-warnings 0
  layerlint --json lint > report.json""",
)
@click.argument("paths", nargs=-1, type=click.Path(path_type=Path))
@click.option("--rule", "rules", multiple=True, help="Only report this rule (repeatable).")
@click.option(
    "--min-severity",
    type=click.Choice(["warning", "error"]),
    default="warning",
    help="Hide violations below this severity.",
)
@click.option("--no-structure", is_flag=True, help="Skip the project-wide structural checks.")
@click.option(
    "--max-warnings",
    type=click.IntRange(min=-1),
    default=-1,
    show_default=True,
    help="Fail when more warnings than this are reported (-1: never).",
)
@click.pass_obj
def lint(
    app: AppContext,
    paths: tuple[Path, ...],
    rules: tuple[str, ...],
    min_severity: str,
    no_structure: bool,
    max_warnings: int,
) -> None:
    """Check imports in PATHS (default: the source root) against the layer policy."""
    from layerlint.services.lint import LintService

    result = LintService(app.project).lint(
        list(paths) or None,
        rules=list(rules) or None,
        min_severity=min_severity,
        gate=None if no_structure else app.gate,
    )
    app.emit(result, fail=result.fails_build(max_warnings=max_warnings))
