"""StructureService — structural-presence checks.

Project-wide checks (public entry files for every feature, module,
``shared/ui`` and ``components`` folder) run at most once per session:
each is guarded by ``gate.try_enter(rule_id)``. The per-file
``stores-location`` check runs for every file it is handed.

Filesystem errors during a scan become warnings, never failures.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from layerlint.domain.imports import find_call_lines
from layerlint.domain.layers import is_in_stores_folder
from layerlint.domain.paths import canonicalize_anchor
from layerlint.infrastructure.project import find_index_file, read_source_file
from layerlint.services._helpers import (
    count_by_severity,
    enabled_rules,
    make_issue,
    sort_issues,
    unknown_rule_error,
)
from layerlint.services.base import BaseService
from layerlint.services.gate import SessionGate
from layerlint.services.result import ServiceResult
from layerlint.services.telemetry import count, trace_span, traced

logger = logging.getLogger(__name__)

STRUCTURE_RULES = (
    "feature-index-required",
    "module-index-required",
    "shared-ui-index-required",
    "components-index-required",
)
STORES_RULE = "stores-location"
STORE_FACTORY = "defineStore"


class StructureService(BaseService):
    """Checks that the folder layout exposes the expected public entries."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    def check(
        self,
        gate: SessionGate,
        *,
        rules: list[str] | None = None,
    ) -> ServiceResult:
        """Run the project-wide structural checks not yet run in this session,
        then the per-file store-location check over every source file."""
        warnings: list[str] = []
        registry = self._project.rule_registry(warnings)
        error = unknown_rule_error("check", registry, rules)
        if error is not None:
            return error
        severities = enabled_rules(registry, self._project.settings.rules, rules)
        issues, checks_run = self.run_checks(gate, severities, warnings)
        if STORES_RULE in severities:
            with trace_span(STORES_RULE):
                issues.extend(self.check_stores(self._project.find_sources(), severities, warnings))
            checks_run.append(STORES_RULE)
        issues = sort_issues(issues)
        errors, warns = count_by_severity(issues)
        return ServiceResult(
            ok=True,
            op="check",
            data={
                "issues": issues,
                "count": len(issues),
                "error_count": errors,
                "warning_count": warns,
                "checks_run": checks_run,
            },
            warnings=warnings,
        )

    def run_checks(
        self,
        gate: SessionGate,
        severities: dict[str, str],
        warnings: list[str],
    ) -> tuple[list[dict[str, Any]], list[str]]:
        """Run each enabled, not-yet-entered structural check.

        Returns ``(issues, rule ids that ran)``.
        """
        project = self._project.settings.project
        source_dir = self._project.source_dir
        checks = {
            "feature-index-required": lambda: self._unit_dirs(
                source_dir / project.features_container_name, warnings
            ),
            "module-index-required": lambda: self._unit_dirs(
                source_dir / project.modules_container_name, warnings
            ),
            "shared-ui-index-required": lambda: [
                source_dir / shared / project.ui_folder_name
                for shared in project.shared_folder_names
                if (source_dir / shared / project.ui_folder_name).is_dir()
            ],
            "components-index-required": lambda: self._named_dirs(
                source_dir, project.components_folder_name, warnings
            ),
        }

        issues: list[dict[str, Any]] = []
        checks_run: list[str] = []
        if not source_dir.is_dir():
            return issues, checks_run

        for rule_id in STRUCTURE_RULES:
            if rule_id not in severities:
                continue
            if not gate.try_enter(rule_id):
                logger.debug("Structural check %s already ran this session", rule_id)
                continue
            checks_run.append(rule_id)
            with trace_span(rule_id):
                for directory in checks[rule_id]():
                    count("directories")
                    issue = self._require_index(directory, rule_id, severities[rule_id], warnings)
                    if issue is not None:
                        issues.append(issue)
        return issues, checks_run

    def check_file(self, path: Path, text: str, severities: dict[str, str]) -> list[dict[str, Any]]:
        """Per-file checks: a store definition must live in a stores folder."""
        if STORES_RULE not in severities:
            return []
        config = self._project.config
        relative = self._project.relative(path)
        canonical = canonicalize_anchor(relative, config.source_root_name)
        if canonical is None or is_in_stores_folder(canonical, config):
            return []
        lines = find_call_lines(text, STORE_FACTORY, path.name)
        if not lines:
            return []
        return [
            make_issue(
                file=relative,
                line=lines[0],
                rule=STORES_RULE,
                severity=severities[STORES_RULE],
                message=(
                    f"{STORE_FACTORY}() must be called in a "
                    f"'{config.stores_folder_name}' folder"
                ),
            )
        ]

    def check_stores(
        self,
        paths: list[Path],
        severities: dict[str, str],
        warnings: list[str],
    ) -> list[dict[str, Any]]:
        """Run :meth:`check_file` over *paths*, reading each file."""
        issues: list[dict[str, Any]] = []
        for path in paths:
            try:
                text = read_source_file(path)
            except (OSError, UnicodeDecodeError) as exc:
                warnings.append(f"Could not read {self._project.relative(path)}: {exc}")
                continue
            issues.extend(self.check_file(path, text, severities))
        return issues

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_index(
        self,
        directory: Path,
        rule_id: str,
        severity: str,
        warnings: list[str],
    ) -> dict[str, Any] | None:
        if self._project.is_ignored(directory):
            return None
        index_names = self._project.settings.project.index_file_names
        try:
            if find_index_file(directory, index_names) is not None:
                return None
        except OSError as exc:
            warnings.append(f"Could not inspect {self._project.relative(directory)}: {exc}")
            return None
        return make_issue(
            file=self._project.relative(directory),
            rule=rule_id,
            severity=severity,
            message=(
                f"'{directory.name}' has no public entry; add one of: "
                + ", ".join(index_names)
            ),
        )

    def _unit_dirs(self, container: Path, warnings: list[str]) -> list[Path]:
        """Immediate subdirectories of a container folder."""
        if not container.is_dir():
            return []
        try:
            return sorted(p for p in container.iterdir() if p.is_dir())
        except OSError as exc:
            warnings.append(f"Could not list {self._project.relative(container)}: {exc}")
            return []

    def _named_dirs(self, root: Path, name: str, warnings: list[str]) -> list[Path]:
        """Every directory called *name* under *root*, skipping excluded dirs."""
        skip = frozenset(self._project.settings.discovery.exclude_dirs)
        found: list[Path] = []
        try:
            for path in root.rglob(name):
                if not path.is_dir():
                    continue
                if any(part in skip for part in path.relative_to(root).parts):
                    continue
                found.append(path)
        except OSError as exc:
            warnings.append(f"Could not scan {self._project.relative(root)}: {exc}")
        return sorted(found)
