"""Diagnostic message templates, one per reason code."""

from __future__ import annotations

from layerlint.domain.types import ImportKind, PolicyDecision, ReasonCode

MESSAGES: dict[ReasonCode, str] = {
    ReasonCode.DEEP_CONTAINER_IMPORT: (
        "app {verb} a {target_layer} internal file{target_unit_of}; "
        "import the {target_layer} public API instead: '{specifier}'"
    ),
    ReasonCode.CROSS_UNIT_IMPORT: (
        "{source_layer}{source_unit_suffix} must not {verb_base} from another "
        "{target_layer}{target_unit_suffix} ({target_layer}s are isolated): '{specifier}'"
    ),
    ReasonCode.CROSS_CONTAINER_KIND_IMPORT: (
        "{source_layer}{source_unit_suffix} must not {verb_base} "
        "{target_layer}{target_unit_suffix} directly: '{specifier}'"
    ),
    ReasonCode.UPWARD_IMPORT: (
        "{source_layer}{source_unit_suffix} must not {verb_base} from app: '{specifier}'"
    ),
    ReasonCode.LAYER_ESCALATION: (
        "{source_layer} code must not {verb_base} from a higher layer "
        "({target_layer}): '{specifier}'"
    ),
    ReasonCode.UNAUTHORIZED_LAYER_DEPENDENCY: (
        "{source_layer} may not depend on {target_layer}{target_unit_suffix}: '{specifier}'"
    ),
    ReasonCode.SHARED_LAYER_ESCAPE: (
        "shared code must only {verb_base} from shared (found {target_layer}): '{specifier}'"
    ),
    ReasonCode.RELATIVE_IMPORT_REQUIRED: (
        "{source_layer}{source_unit_suffix} {verb} its own code through the alias; "
        "use a relative path: '{specifier}'"
    ),
    ReasonCode.ALIAS_IMPORT_REQUIRED: (
        "{source_layer}{source_unit_suffix} must {verb_base} {target_layer}{target_unit_suffix} "
        "through the project alias, not a relative or absolute path: '{specifier}'"
    ),
}

_VERBS: dict[ImportKind, tuple[str, str]] = {
    ImportKind.STATIC: ("imports", "import"),
    ImportKind.DYNAMIC: ("lazily imports", "lazily import"),
    ImportKind.REEXPORT: ("re-exports", "re-export"),
}


def render_message(decision: PolicyDecision) -> str:
    """Fill the template for a denied *decision*.

    Allowed decisions have no message and render as an empty string.
    """
    if decision.allowed or decision.reason is None:
        return ""
    verb, verb_base = _VERBS[decision.edge.kind]
    target_unit = decision.target.unit_name or ""
    source_unit = decision.source.unit_name or ""
    return MESSAGES[decision.reason].format(
        verb=verb,
        verb_base=verb_base,
        specifier=decision.edge.raw_specifier,
        source_layer=decision.source.layer.value,
        source_unit_suffix=f" '{source_unit}'" if source_unit else "",
        target_layer=decision.target.layer.value,
        target_unit_suffix=f" '{target_unit}'" if target_unit else "",
        target_unit_of=f" of '{target_unit}'" if target_unit else "",
    )
