"""Boundary policy — a fixed, first-match-wins precedence table.

``decide`` is pure and stateless: each call looks only at the two
classifications, the edge, and the config. Pre-emptions (test files,
ignore and allow lists, type-only imports) are checked before the table.

Precedence:

1. target is shared                                   → allow
2. same container layer, same unit                    → allow
3. app → container: public entry or router exception  → allow, else DeepContainerImport
4. same container kind, different unit                → CrossUnitImport
5. feature → module (or the configured reverse)       → CrossContainerKindImport
6. container → app                                    → UpwardImport
7. support → app                                      → LayerEscalation
8. support → support/container outside the allow-list → UnauthorizedLayerDependency
8a. shared → anything but shared (``strict_shared``)  → SharedLayerEscape
9. default                                            → allow
"""

from __future__ import annotations

from layerlint.domain.imports import extract_imports
from layerlint.domain.layers import classify, is_route_entry, is_router_file, is_test_file
from layerlint.domain.paths import canonicalize_anchor, matches_any, resolve_specifier
from layerlint.domain.types import (
    BoundaryConfig,
    ContainerDirection,
    ImportEdge,
    Layer,
    LayerClassification,
    PolicyDecision,
    ReasonCode,
)


def _allow(edge: ImportEdge, source: LayerClassification, target: LayerClassification) -> PolicyDecision:
    return PolicyDecision(edge=edge, allowed=True, source=source, target=target)


def _deny(
    edge: ImportEdge,
    source: LayerClassification,
    target: LayerClassification,
    reason: ReasonCode,
) -> PolicyDecision:
    return PolicyDecision(edge=edge, allowed=False, source=source, target=target, reason=reason)


def is_preempted(
    source: LayerClassification,
    target: LayerClassification,
    edge: ImportEdge,
    config: BoundaryConfig,
) -> bool:
    """Edges that are allowed before the precedence table is consulted."""
    if is_test_file(source.path, config):
        return True
    if matches_any(source.path, config.ignore_patterns):
        return True
    if config.allow_list and (
        matches_any(edge.raw_specifier, config.allow_list)
        or matches_any(target.path, config.allow_list)
    ):
        return True
    return edge.type_only and config.ignore_type_imports


def _forbids_container_kind(source: Layer, target: Layer, direction: ContainerDirection) -> bool:
    forward = source is Layer.FEATURE and target is Layer.MODULE
    reverse = source is Layer.MODULE and target is Layer.FEATURE
    if direction is ContainerDirection.BOTH:
        return forward or reverse
    if direction is ContainerDirection.MODULE_TO_FEATURE:
        return reverse
    return forward


def decide(
    source: LayerClassification,
    target: LayerClassification,
    edge: ImportEdge,
    config: BoundaryConfig,
) -> PolicyDecision:
    """Decide whether *edge* (from *source* to *target*) is allowed."""
    if is_preempted(source, target, edge, config):
        return _allow(edge, source, target)

    # 1. shared is open to everyone
    if target.layer is Layer.SHARED:
        return _allow(edge, source, target)

    # 2. intra-unit, any depth
    if (
        source.is_container
        and source.layer is target.layer
        and source.unit_name is not None
        and source.unit_name == target.unit_name
    ):
        return _allow(edge, source, target)

    # 3. app may only reach a unit's public entry
    if source.layer is Layer.APP and target.is_container:
        if target.is_public_entry:
            return _allow(edge, source, target)
        if is_router_file(source.path, config) and is_route_entry(target, config):
            return _allow(edge, source, target)
        return _deny(edge, source, target, ReasonCode.DEEP_CONTAINER_IMPORT)

    # 4. units of one container kind are isolated from each other
    if source.is_container and source.layer is target.layer:
        return _deny(edge, source, target, ReasonCode.CROSS_UNIT_IMPORT)

    # 5. feature/module direction
    if _forbids_container_kind(source.layer, target.layer, config.container_kind_direction):
        return _deny(edge, source, target, ReasonCode.CROSS_CONTAINER_KIND_IMPORT)

    # 6. containers never reach back into app
    if source.is_container and target.layer is Layer.APP:
        return _deny(edge, source, target, ReasonCode.UPWARD_IMPORT)

    if source.is_support:
        # 7. support code never depends on app
        if target.layer is Layer.APP:
            return _deny(edge, source, target, ReasonCode.LAYER_ESCALATION)
        # 8. strict allow-list for everything else it may reach
        if target.is_support or target.is_container:
            allowed = config.support_dependencies.get(source.layer.value, ())
            if target.layer.value not in allowed:
                return _deny(edge, source, target, ReasonCode.UNAUTHORIZED_LAYER_DEPENDENCY)
            return _allow(edge, source, target)

    # 8a. opt-in: shared stays self-contained
    if config.strict_shared and source.layer is Layer.SHARED:
        return _deny(edge, source, target, ReasonCode.SHARED_LAYER_ESCAPE)

    # 9.
    return _allow(edge, source, target)


# ---------------------------------------------------------------------------
# Edge and file evaluation
# ---------------------------------------------------------------------------


def evaluate_edge(edge: ImportEdge, config: BoundaryConfig) -> PolicyDecision | None:
    """Resolve, classify and decide one edge.

    Returns None when either side cannot be canonicalized or classified
    (external packages, paths outside the source root): such edges are
    skipped, never reported.
    """
    anchor = canonicalize_anchor(edge.anchor_file, config.source_root_name)
    if anchor is None:
        return None
    target_path = resolve_specifier(
        anchor, edge.raw_specifier, config.source_root_name, config.alias_token
    )
    if target_path is None:
        return None
    source = classify(anchor, config)
    target = classify(target_path, config)
    if source is None or target is None:
        return None
    return decide(source, target, edge, config)


def evaluate_source(
    anchor_file: str,
    text: str,
    config: BoundaryConfig,
    *,
    filename: str | None = None,
) -> list[PolicyDecision] | None:
    """Extract every edge of one file and decide each resolvable one.

    Returns None for file types without script content, and only
    emits decisions for edges that could be evaluated.
    """
    edges = extract_imports(anchor_file, text, filename)
    if edges is None:
        return None
    decisions: list[PolicyDecision] = []
    for edge in edges:
        decision = evaluate_edge(edge, config)
        if decision is not None:
            decisions.append(decision)
    return decisions
