"""Pluggy hook specifications for layerlint.

One setup-time hook lets plugins contribute rules; one post-run hook
observes each lint run. Both are called synchronously.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pluggy

if TYPE_CHECKING:
    from layerlint.domain.rules import Rule

PROJECT_NAME = "layerlint"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class LayerlintHookSpec:
    """Hook specifications for the layerlint plugin system."""

    @hookspec
    def register_rules(self) -> list[Rule] | None:
        """Return extra rules to register alongside the built-ins.

        Plugin rules with no reason codes are listed by ``layerlint rules``
        and may be disabled or re-graded in ``[rules]`` like any other.
        """

    @hookspec
    def post_lint(
        self,
        files_checked: int,
        violations: list[dict[str, Any]],
    ) -> None:
        """Called after a lint run with every reported violation."""
