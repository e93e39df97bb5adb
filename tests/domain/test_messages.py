"""Tests for diagnostic message rendering."""

from __future__ import annotations

from layerlint.domain.layers import classify
from layerlint.domain.messages import MESSAGES, render_message
from layerlint.domain.policy import evaluate_edge
from layerlint.domain.types import (
    BoundaryConfig,
    ImportEdge,
    ImportKind,
    PolicyDecision,
    ReasonCode,
)

CONFIG = BoundaryConfig()


def _message(anchor: str, specifier: str, kind: ImportKind = ImportKind.STATIC) -> str:
    decision = evaluate_edge(
        ImportEdge(anchor_file=anchor, raw_specifier=specifier, kind=kind), CONFIG
    )
    assert decision is not None
    return render_message(decision)


class TestRenderMessage:
    def test_every_reason_has_a_template(self) -> None:
        assert set(MESSAGES) == set(ReasonCode)

    def test_cross_unit(self) -> None:
        message = _message("src/features/auth/index.ts", "@/features/payments/service")
        assert message == (
            "feature 'auth' must not import from another feature 'payments' "
            "(features are isolated): '@/features/payments/service'"
        )

    def test_deep_import(self) -> None:
        message = _message("src/app/main.ts", "@/features/payments/internal/helper")
        assert "internal file of 'payments'" in message
        assert message.startswith("app imports")

    def test_dynamic_verb(self) -> None:
        message = _message("src/app/main.ts", "@/features/cart/x", ImportKind.DYNAMIC)
        assert message.startswith("app lazily imports")

    def test_reexport_verb(self) -> None:
        message = _message("src/features/auth/index.ts", "@/features/cart", ImportKind.REEXPORT)
        assert "must not re-export from" in message

    def test_unauthorized_with_unit(self) -> None:
        message = _message("src/stores/app.store.ts", "@/modules/auth")
        assert message == "store may not depend on module 'auth': '@/modules/auth'"

    def test_unauthorized_without_unit(self) -> None:
        message = _message("src/components/Button.vue", "@/stores/app")
        assert message == "component may not depend on store: '@/stores/app'"

    def test_allowed_is_empty(self) -> None:
        assert _message("src/features/auth/a.ts", "@/shared/x") == ""

    def test_deep_import_without_unit(self) -> None:
        message = _message("src/app/main.ts", "@/features")
        assert message == (
            "app imports a feature internal file; "
            "import the feature public API instead: '@/features'"
        )

    def test_every_template_renders_without_units(self) -> None:
        source = classify("src/features", CONFIG)
        target = classify("src/modules", CONFIG)
        assert source is not None and target is not None
        edge = ImportEdge(anchor_file=source.path, raw_specifier="@/modules")
        for reason in ReasonCode:
            decision = PolicyDecision(
                edge=edge, allowed=False, source=source, target=target, reason=reason
            )
            assert "''" not in render_message(decision).replace("'@/modules'", ""), reason
