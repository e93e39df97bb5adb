"""BaseService — abstract foundation for all layerlint services.

Every service receives a :class:`Project` at construction time. The
Project provides file discovery, reading, the engine config and the
plugin manager.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from layerlint.infrastructure.project import Project

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Subclasses implement the lint, structure and explain operations using
    the project for all file access.

    Usage::

        class LintService(BaseService):
            def lint(self, paths: list[Path] | None = None) -> ServiceResult:
                for path in self._project.find_sources(paths):
                    ...
    """

    def __init__(self, project: Project) -> None:
        self._project = project

    def _dispatch_post_lint(
        self,
        files_checked: int,
        violations: list[dict[str, Any]],
        warnings: list[str],
    ) -> None:
        """Notify plugins of a finished run. No-op if plugins not initialized.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        pm = self._project.plugin_manager
        if pm is None:
            return
        pm.notify_post_lint(files_checked, violations, warnings)
