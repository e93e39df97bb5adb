"""Import style — relative inside an area, alias across areas.

An *area* is one feature or module unit, or a whole flat layer (app,
shared, each support layer). Files directly under the source root
(``other``) belong to no area and are never checked.

These checks look only at the specifier's form. They run on edges the
boundary policy has already resolved and classified, whatever its
verdict was.
"""

from __future__ import annotations

from layerlint.domain.layers import is_test_file
from layerlint.domain.paths import is_alias_specifier, matches_any
from layerlint.domain.types import (
    BoundaryConfig,
    Layer,
    LayerClassification,
    PolicyDecision,
    ReasonCode,
)


def import_area(classification: LayerClassification) -> tuple[Layer, str | None] | None:
    """The area *classification* belongs to, or None for ``other``."""
    if classification.layer is Layer.OTHER:
        return None
    if classification.is_container:
        return classification.layer, classification.unit_name
    return classification.layer, None


def check_style(decision: PolicyDecision, config: BoundaryConfig) -> PolicyDecision | None:
    """Denied decision when the specifier's form does not fit the edge.

    Same-area imports must be relative (``RelativeImportRequired``) and
    cross-area imports must use the alias (``AliasImportRequired``).
    Returns None when the form is fine or the anchor is exempt.
    """
    source, target, edge = decision.source, decision.target, decision.edge
    if is_test_file(source.path, config) or matches_any(source.path, config.ignore_patterns):
        return None
    source_area = import_area(source)
    target_area = import_area(target)
    if source_area is None or target_area is None:
        return None

    aliased = is_alias_specifier(edge.raw_specifier, config.alias_token)
    if source_area == target_area:
        reason = ReasonCode.RELATIVE_IMPORT_REQUIRED if aliased else None
    else:
        reason = None if aliased else ReasonCode.ALIAS_IMPORT_REQUIRED
    if reason is None:
        return None
    return PolicyDecision(edge=edge, allowed=False, source=source, target=target, reason=reason)
