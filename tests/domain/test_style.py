"""Tests for import-style checks."""

from __future__ import annotations

import pytest

from layerlint.domain.layers import classify
from layerlint.domain.messages import render_message
from layerlint.domain.policy import evaluate_edge
from layerlint.domain.style import check_style, import_area
from layerlint.domain.types import BoundaryConfig, ImportEdge, Layer, ReasonCode

CONFIG = BoundaryConfig()


def _style(anchor: str, specifier: str, config: BoundaryConfig = CONFIG) -> ReasonCode | None:
    decision = evaluate_edge(ImportEdge(anchor_file=anchor, raw_specifier=specifier), config)
    assert decision is not None
    verdict = check_style(decision, config)
    return verdict.reason if verdict is not None else None


class TestImportArea:
    def test_container_unit(self) -> None:
        classification = classify("src/features/cart/a.ts", CONFIG)
        assert classification is not None
        assert import_area(classification) == (Layer.FEATURE, "cart")

    def test_flat_layer(self) -> None:
        classification = classify("src/shared/ui/Button.vue", CONFIG)
        assert classification is not None
        assert import_area(classification) == (Layer.SHARED, None)

    def test_other_has_no_area(self) -> None:
        classification = classify("src/main.ts", CONFIG)
        assert classification is not None
        assert import_area(classification) is None


class TestRelativeWithinArea:
    @pytest.mark.parametrize(
        ("anchor", "specifier"),
        [
            ("src/features/cart/components/Row.vue", "@/features/cart/store"),
            ("src/app/main.ts", "@/app/router"),
            ("src/shared/utils/a.ts", "@/shared/ui"),
            ("src/modules/auth/a.ts", "@/modules/auth/b"),
        ],
    )
    def test_alias_inside_area_flagged(self, anchor: str, specifier: str) -> None:
        assert _style(anchor, specifier) is ReasonCode.RELATIVE_IMPORT_REQUIRED

    def test_relative_inside_area_is_fine(self) -> None:
        assert _style("src/features/cart/components/Row.vue", "../store") is None

    def test_root_absolute_inside_area_is_fine(self) -> None:
        assert _style("src/app/main.ts", "/app/router") is None


class TestAliasAcrossAreas:
    @pytest.mark.parametrize(
        ("anchor", "specifier"),
        [
            ("src/features/auth/index.ts", "../../shared/utils"),
            ("src/features/auth/index.ts", "../payments"),
            ("src/app/main.ts", "/features/auth"),
            ("src/stores/cart.ts", "../services/api"),
        ],
    )
    def test_non_alias_across_areas_flagged(self, anchor: str, specifier: str) -> None:
        assert _style(anchor, specifier) is ReasonCode.ALIAS_IMPORT_REQUIRED

    def test_alias_across_areas_is_fine(self) -> None:
        assert _style("src/features/auth/index.ts", "@/shared/utils") is None

    def test_independent_of_boundary_verdict(self) -> None:
        # denied by the policy, and still checked for form
        assert _style("src/features/auth/index.ts", "../payments/service") is (
            ReasonCode.ALIAS_IMPORT_REQUIRED
        )


class TestExemptions:
    def test_other_layer_skipped(self) -> None:
        assert _style("src/main.ts", "./app/App.vue") is None

    def test_test_files_skipped(self) -> None:
        assert _style("src/features/auth/login.spec.ts", "../../shared/utils") is None

    def test_ignore_patterns(self) -> None:
        config = BoundaryConfig(ignore_patterns=("src/features/legacy/**",))
        assert _style("src/features/legacy/old.ts", "../../shared/utils", config) is None
        assert _style("src/features/legacy/old.ts", "../../shared/utils") is not None

    def test_custom_alias(self) -> None:
        config = BoundaryConfig(alias_token="~")
        assert _style("src/features/auth/index.ts", "~/shared/utils", config) is None
        assert _style("src/features/auth/a.ts", "~/features/auth/b", config) is (
            ReasonCode.RELATIVE_IMPORT_REQUIRED
        )


class TestStyleMessages:
    def test_relative_message(self) -> None:
        decision = evaluate_edge(
            ImportEdge(anchor_file="src/features/cart/a.ts", raw_specifier="@/features/cart/b"),
            CONFIG,
        )
        assert decision is not None
        verdict = check_style(decision, CONFIG)
        assert verdict is not None
        assert render_message(verdict) == (
            "feature 'cart' imports its own code through the alias; "
            "use a relative path: '@/features/cart/b'"
        )

    def test_alias_message(self) -> None:
        decision = evaluate_edge(
            ImportEdge(anchor_file="src/stores/cart.ts", raw_specifier="../services/api"),
            CONFIG,
        )
        assert decision is not None
        verdict = check_style(decision, CONFIG)
        assert verdict is not None
        assert render_message(verdict) == (
            "store must import service through the project alias, "
            "not a relative or absolute path: '../services/api'"
        )
