"""ExplainService — trace one import through resolve, classify, decide and style."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from layerlint.domain.layers import classify
from layerlint.domain.messages import render_message
from layerlint.domain.paths import canonicalize_anchor, resolve_specifier
from layerlint.domain.policy import decide, is_preempted
from layerlint.domain.style import check_style
from layerlint.domain.types import ImportEdge, ImportKind, LayerClassification
from layerlint.services.base import BaseService
from layerlint.services.result import ErrorCode, ServiceResult
from layerlint.services.telemetry import traced


def _classification_dict(classification: LayerClassification | None) -> dict[str, Any] | None:
    if classification is None:
        return None
    return {
        "layer": classification.layer.value,
        "path": classification.path,
        "unit": classification.unit_name,
        "public_entry": classification.is_public_entry,
        "subpath": classification.subpath,
    }


class ExplainService(BaseService):
    """Explains how the engine sees a single ``(file, specifier)`` pair."""

    @traced
    def explain(
        self,
        specifier: str,
        from_file: str,
        *,
        kind: ImportKind = ImportKind.STATIC,
        type_only: bool = False,
    ) -> ServiceResult:
        """Resolve *specifier* as if imported from *from_file* and decide it.

        *from_file* need not exist; a real path is made project-relative
        first. Every stage that yields nothing is reported as None.
        """
        if not specifier.strip():
            return ServiceResult.failure(
                "explain", ErrorCode.INVALID_SPECIFIER, "Specifier is empty"
            )

        config = self._project.config
        anchor_path = Path(from_file)
        anchor_file = (
            self._project.relative(anchor_path) if anchor_path.exists() else from_file
        )
        edge = ImportEdge(
            anchor_file=anchor_file,
            raw_specifier=specifier,
            kind=kind,
            type_only=type_only,
        )

        anchor = canonicalize_anchor(anchor_file, config.source_root_name)
        resolved = (
            resolve_specifier(anchor, specifier, config.source_root_name, config.alias_token)
            if anchor is not None
            else None
        )
        source = classify(anchor, config) if anchor is not None else None
        target = classify(resolved, config) if resolved is not None else None

        data: dict[str, Any] = {
            "specifier": specifier,
            "anchor": anchor,
            "resolved": resolved,
            "source": _classification_dict(source),
            "target": _classification_dict(target),
            "decision": None,
            "style": None,
        }
        if source is not None and target is not None:
            decision = decide(source, target, edge, config)
            registry = self._project.rule_registry()
            rule = registry.rule_for(decision.reason) if decision.reason else None
            data["decision"] = {
                "allowed": decision.allowed,
                "reason": decision.reason.value if decision.reason else None,
                "rule": rule.id if rule else None,
                "message": render_message(decision),
                "preempted": is_preempted(source, target, edge, config),
            }
            style = check_style(decision, config)
            if style is not None and style.reason is not None:
                style_rule = registry.rule_for(style.reason)
                data["style"] = {
                    "reason": style.reason.value,
                    "rule": style_rule.id if style_rule else None,
                    "message": render_message(style),
                }
        return ServiceResult(ok=True, op="explain", data=data)
