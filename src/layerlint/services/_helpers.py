"""Shared service-layer helper functions."""

from __future__ import annotations

from typing import Any

from layerlint.config.models import RulesConfig
from layerlint.domain.rules import SEVERITY_ORDER, RuleRegistry
from layerlint.services.result import ErrorCode, ServiceResult


def enabled_rules(
    registry: RuleRegistry,
    rules_config: RulesConfig,
    selected: list[str] | None = None,
) -> dict[str, str]:
    """Rule id → effective severity for every rule that should run.

    *selected* (``--rule``) narrows the set; ``[rules].enabled`` switches
    on opt-in rules; ``[rules].disabled`` removes rules; ``[rules].severity``
    re-grades them.
    """
    result: dict[str, str] = {}
    for rule in registry.all():
        if selected and rule.id not in selected:
            continue
        if not selected and not rule.default_enabled and rule.id not in rules_config.enabled:
            continue
        if rule.id in rules_config.disabled:
            continue
        severity = rules_config.severity.get(rule.id, rule.severity)
        if severity not in SEVERITY_ORDER:
            severity = rule.severity
        result[rule.id] = severity
    return result


def unknown_rule_error(
    op: str, registry: RuleRegistry, selected: list[str] | None
) -> ServiceResult | None:
    """``UNKNOWN_RULE`` failure when *selected* names an unregistered rule."""
    unknown = [r for r in selected or [] if registry.get(r) is None]
    if not unknown:
        return None
    return ServiceResult.failure(
        op,
        ErrorCode.UNKNOWN_RULE,
        f"Unknown rule: {unknown[0]}",
        rules=unknown,
        available=[r.id for r in registry.all()],
    )


def meets_severity(severity: str, minimum: str | None) -> bool:
    """True when *severity* is at or above *minimum* (None admits all)."""
    if minimum is None:
        return True
    return SEVERITY_ORDER.get(severity, 0) >= SEVERITY_ORDER.get(minimum, 0)


def make_issue(
    *,
    file: str,
    rule: str,
    severity: str,
    message: str,
    line: int | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """One reported violation, in the shape every renderer understands."""
    return {
        "file": file,
        "line": line,
        "rule": rule,
        "severity": severity,
        "message": message,
        **extra,
    }


def count_by_severity(issues: list[dict[str, Any]]) -> tuple[int, int]:
    """``(errors, warnings)`` in *issues*."""
    errors = sum(1 for i in issues if i["severity"] == "error")
    return errors, len(issues) - errors


def sort_issues(issues: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Stable report order: file, line, rule."""
    return sorted(issues, key=lambda i: (i["file"], i["line"] or 0, i["rule"]))
