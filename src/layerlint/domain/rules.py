"""Rules — thin, named projections over the policy engine.

A rule owns a set of reason codes, a severity and a description. The
engine decides once per edge; :func:`rule_for` picks the rule that
reports a denied decision. Structural rules (``reasons`` empty) are
run by the structure service instead of per edge. Style rules are off
unless listed in ``[rules].enabled`` or selected with ``--rule``.
"""

from __future__ import annotations

from dataclasses import dataclass

from layerlint.domain.types import ReasonCode

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"

SEVERITY_ORDER: dict[str, int] = {SEVERITY_WARNING: 0, SEVERITY_ERROR: 1}


@dataclass(frozen=True)
class Rule:
    """A named rule and the reasons it reports."""

    id: str
    description: str
    reasons: frozenset[ReasonCode] = frozenset()
    severity: str = SEVERITY_ERROR
    default_enabled: bool = True
    category: str = "imports"


BUILTIN_RULES: tuple[Rule, ...] = (
    Rule(
        id="app-imports",
        description="app may import container units only through their public entry",
        reasons=frozenset({ReasonCode.DEEP_CONTAINER_IMPORT}),
    ),
    Rule(
        id="no-cross-unit-imports",
        description="features and modules must not import one another",
        reasons=frozenset({ReasonCode.CROSS_UNIT_IMPORT}),
    ),
    Rule(
        id="container-kind-isolation",
        description="features must not import modules directly",
        reasons=frozenset({ReasonCode.CROSS_CONTAINER_KIND_IMPORT}),
    ),
    Rule(
        id="no-upward-imports",
        description="features and modules must not import from app",
        reasons=frozenset({ReasonCode.UPWARD_IMPORT}),
    ),
    Rule(
        id="layer-escalation",
        description="support layers must not import from app",
        reasons=frozenset({ReasonCode.LAYER_ESCALATION}),
    ),
    Rule(
        id="layer-dependencies",
        description="support layers may only import the layers on their allow-list",
        reasons=frozenset({ReasonCode.UNAUTHORIZED_LAYER_DEPENDENCY}),
        severity=SEVERITY_WARNING,
    ),
    Rule(
        id="shared-imports",
        description="shared may only import from shared (enable with policy.strict_shared)",
        reasons=frozenset({ReasonCode.SHARED_LAYER_ESCAPE}),
    ),
    Rule(
        id="internal-imports-relative",
        description="imports within one unit, app or shared use relative paths",
        reasons=frozenset({ReasonCode.RELATIVE_IMPORT_REQUIRED}),
        default_enabled=False,
        category="style",
    ),
    Rule(
        id="cross-imports-alias",
        description="imports across units and layers use the project alias",
        reasons=frozenset({ReasonCode.ALIAS_IMPORT_REQUIRED}),
        default_enabled=False,
        category="style",
    ),
    Rule(
        id="feature-index-required",
        description="every feature folder exposes an index file",
        category="structure",
    ),
    Rule(
        id="module-index-required",
        description="every module folder exposes an index file",
        category="structure",
    ),
    Rule(
        id="shared-ui-index-required",
        description="shared/ui exposes an index file",
        category="structure",
    ),
    Rule(
        id="components-index-required",
        description="every components folder exposes an index file",
        severity=SEVERITY_WARNING,
        category="structure",
    ),
    Rule(
        id="stores-location",
        description="files calling defineStore live in a stores folder",
        category="structure",
    ),
)


class RuleRegistry:
    """Rules by id, with reason-code lookup."""

    def __init__(self, rules: tuple[Rule, ...] | list[Rule] = BUILTIN_RULES) -> None:
        self._rules: dict[str, Rule] = {}
        for rule in rules:
            self.add(rule)

    def add(self, rule: Rule, *, replace: bool = False) -> None:
        """Register *rule*; a reason code may belong to only one rule.

        An id that is already registered is rejected unless *replace* is set.
        """
        if rule.id in self._rules and not replace:
            msg = f"Rule {rule.id!r} is already registered"
            raise ValueError(msg)
        for existing in self._rules.values():
            if existing.id != rule.id and existing.reasons & rule.reasons:
                msg = f"Rule {rule.id!r} reuses reason codes of {existing.id!r}"
                raise ValueError(msg)
        self._rules[rule.id] = rule

    def get(self, rule_id: str) -> Rule | None:
        return self._rules.get(rule_id)

    def all(self) -> list[Rule]:
        return list(self._rules.values())

    def rule_for(self, reason: ReasonCode) -> Rule | None:
        """The rule that reports *reason*, if any."""
        for rule in self._rules.values():
            if reason in rule.reasons:
                return rule
        return None


def rule_for(reason: ReasonCode) -> Rule | None:
    """Built-in rule for *reason*."""
    return RuleRegistry().rule_for(reason)
