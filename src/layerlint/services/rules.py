"""RulesService — the rule catalogue with the project's overrides applied."""

from __future__ import annotations

from layerlint.services._helpers import enabled_rules
from layerlint.services.base import BaseService
from layerlint.services.result import ServiceResult
from layerlint.services.telemetry import traced


class RulesService(BaseService):
    """Lists built-in and plugin rules."""

    @traced
    def list_rules(self) -> ServiceResult:
        warnings: list[str] = []
        registry = self._project.rule_registry(warnings)
        severities = enabled_rules(registry, self._project.settings.rules)
        rules = [
            {
                "id": rule.id,
                "description": rule.description,
                "category": rule.category,
                "severity": severities.get(rule.id, rule.severity),
                "enabled": rule.id in severities,
                "reasons": sorted(r.value for r in rule.reasons),
            }
            for rule in registry.all()
        ]
        return ServiceResult(
            ok=True,
            op="rules",
            data={"rules": rules, "count": len(rules)},
            warnings=warnings,
        )
