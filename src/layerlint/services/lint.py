"""LintService — boundary diagnostics for a set of source files.

For every file: read, extract edges, decide each edge with the pure
policy engine, check the specifier's style, and keep the denied
decisions whose rule is enabled.
Structural checks run once per session through the host's gate.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from layerlint.domain.messages import render_message
from layerlint.domain.policy import evaluate_source
from layerlint.domain.rules import SEVERITY_ORDER, RuleRegistry
from layerlint.domain.style import check_style
from layerlint.domain.types import PolicyDecision
from layerlint.infrastructure.project import read_source_file
from layerlint.services._helpers import (
    count_by_severity,
    enabled_rules,
    make_issue,
    meets_severity,
    sort_issues,
    unknown_rule_error,
)
from layerlint.services.base import BaseService
from layerlint.services.gate import SessionGate
from layerlint.services.result import ErrorCode, ServiceResult
from layerlint.services.structure import StructureService
from layerlint.services.telemetry import count, trace_span, traced

logger = logging.getLogger(__name__)


class LintService(BaseService):
    """Runs the boundary policy over project files."""

    @traced
    def lint(
        self,
        paths: list[Path] | None = None,
        *,
        rules: list[str] | None = None,
        min_severity: str | None = None,
        gate: SessionGate | None = None,
    ) -> ServiceResult:
        """Lint *paths* (files or directories; default: the source root).

        Args:
            paths: Files or directories to lint.
            rules: Only report these rule ids.
            min_severity: Drop violations below this severity.
            gate: Session gate for structural checks; None skips them.
        """
        warnings: list[str] = []

        missing = [str(p) for p in paths or [] if not p.exists()]
        if missing:
            return ServiceResult.failure(
                "lint",
                ErrorCode.PATH_NOT_FOUND,
                f"Path does not exist: {missing[0]}",
                paths=missing,
            )

        if min_severity is not None and min_severity not in SEVERITY_ORDER:
            return ServiceResult.failure(
                "lint",
                ErrorCode.INVALID_SEVERITY,
                f"Unknown severity: {min_severity}",
                allowed=sorted(SEVERITY_ORDER),
            )

        registry = self._project.rule_registry(warnings)
        error = unknown_rule_error("lint", registry, rules)
        if error is not None:
            return error

        with trace_span("discover"):
            files = self._project.find_sources(paths)
        if not files:
            return ServiceResult.failure(
                "lint",
                ErrorCode.NO_FILES,
                "No lintable files found",
                paths=[str(p) for p in paths or [self._project.root]],
            )

        severities = enabled_rules(registry, self._project.settings.rules, rules)
        structure = StructureService(self._project)
        issues: list[dict[str, Any]] = []
        files_checked = 0

        with trace_span("evaluate"):
            for path in files:
                relative = self._project.relative(path)
                try:
                    text = read_source_file(path)
                except (OSError, UnicodeDecodeError) as exc:
                    logger.debug("Cannot read %s", path, exc_info=True)
                    warnings.append(f"Could not read {relative}: {exc}")
                    count("unreadable")
                    continue
                decisions = evaluate_source(relative, text, self._project.config, filename=path.name)
                if decisions is None:
                    logger.debug("Skipping %s: no script content", relative)
                    continue
                files_checked += 1
                count("files")
                count("edges", len(decisions))
                for decision in decisions:
                    for verdict in (decision, check_style(decision, self._project.config)):
                        issue = self._to_issue(verdict, relative, registry, severities)
                        if issue is not None:
                            issues.append(issue)
                issues.extend(structure.check_file(path, text, severities))

        if gate is not None:
            with trace_span("structure"):
                structural, _ = structure.run_checks(gate, severities, warnings)
                issues.extend(structural)

        issues = sort_issues([i for i in issues if meets_severity(i["severity"], min_severity)])
        errors, warns = count_by_severity(issues)

        self._dispatch_post_lint(files_checked, issues, warnings)

        return ServiceResult(
            ok=True,
            op="lint",
            data={
                "violations": issues,
                "count": len(issues),
                "error_count": errors,
                "warning_count": warns,
                "files_checked": files_checked,
            },
            warnings=warnings,
        )

    @staticmethod
    def _to_issue(
        decision: PolicyDecision | None,
        relative: str,
        registry: RuleRegistry,
        severities: dict[str, str],
    ) -> dict[str, Any] | None:
        if decision is None or decision.allowed or decision.reason is None:
            return None
        rule = registry.rule_for(decision.reason)
        if rule is None or rule.id not in severities:
            return None
        return make_issue(
            file=relative,
            line=decision.edge.line,
            rule=rule.id,
            severity=severities[rule.id],
            message=render_message(decision),
            reason=decision.reason.value,
            specifier=decision.edge.raw_specifier,
            target_layer=decision.target_layer.value,
            target_unit=decision.target_unit,
        )
