"""Command: explain how one import is resolved, classified and decided."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from layerlint.commands._base import LintCommand
from layerlint.domain.types import ImportKind

if TYPE_CHECKING:
    from layerlint.commands._context import AppContext


@click.command(
    cls=LintCommand,
    examples="""\
  layerlint explain @/features/payments/service --from src/features/auth/index.ts
  layerlint explain ../../shared/utils --from src/features/auth/components/Login.vue
  layerlint explain @/modules/auth --from src/stores/app.store.ts --kind reexport
  layerlint --json explain @/app/router --from src/features/cart/index.ts""",
)
@click.argument("specifier")
@click.option("--from", "from_file", required=True, help="File the import appears in.")
@click.option(
    "--kind",
    type=click.Choice([k.value for k in ImportKind]),
    default=ImportKind.STATIC.value,
    help="Import form to assume.",
)
@click.option("--type-only", is_flag=True, help="Treat the import as type-only.")
@click.pass_obj
def explain(app: AppContext, specifier: str, from_file: str, kind: str, type_only: bool) -> None:
    """Show how SPECIFIER, imported from --from, is resolved and decided."""
    from layerlint.services.explain import ExplainService

    app.emit(
        ExplainService(app.project).explain(
            specifier,
            from_file,
            kind=ImportKind(kind),
            type_only=type_only,
        )
    )
