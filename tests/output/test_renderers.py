"""Tests for the Rich renderers and quiet mode."""

from __future__ import annotations

from typing import Any

from layerlint.output.renderers import render_quiet, render_result
from layerlint.services.result import ServiceError, ServiceResult


def _issue(
    file: str, line: int | None, rule: str, severity: str = "error", **extra: Any
) -> dict[str, Any]:
    return {
        "file": file,
        "line": line,
        "rule": rule,
        "severity": severity,
        "message": "msg",
        **extra,
    }


class TestRenderLint:
    def test_clean(self) -> None:
        result = ServiceResult(ok=True, op="lint", data={"violations": [], "files_checked": 3})
        assert render_result(result) == "OK  No boundary violations in 3 files."

    def test_grouped_by_file(self) -> None:
        result = ServiceResult(
            ok=True,
            op="lint",
            data={
                "violations": [
                    _issue("src/a.ts", 1, "r1"),
                    _issue("src/a.ts", 4, "r2", "warning"),
                    _issue("src/b.ts", 2, "r1"),
                ],
                "error_count": 2,
                "warning_count": 1,
            },
        )
        output = render_result(result)
        assert output.count("src/a.ts") == 1
        assert "warning" in output
        assert output.endswith("3 problems (2 errors, 1 warning)")

    def test_markup_in_message_is_literal(self) -> None:
        issue = _issue("src/a.ts", 1, "r1")
        issue["message"] = "'[bold]x[/bold]'"
        result = ServiceResult(ok=True, op="lint", data={"violations": [issue], "error_count": 1})
        assert "'[bold]x[/bold]'" in render_result(result)

    def test_verbose_reason_line(self) -> None:
        issue = _issue(
            "src/a.ts", 1, "r1", reason="CrossUnitImport", target_layer="feature", target_unit="cart"
        )
        result = ServiceResult(ok=True, op="lint", data={"violations": [issue], "error_count": 1})
        assert "reason=CrossUnitImport target=feature/cart" in render_result(result, verbose=True)


class TestRenderCheck:
    def test_clean_lists_checks(self) -> None:
        result = ServiceResult(
            ok=True, op="check", data={"issues": [], "checks_run": ["feature-index-required"]}
        )
        assert render_result(result) == (
            "OK  No structural issues found (checks: feature-index-required)."
        )

    def test_issue_without_line(self) -> None:
        result = ServiceResult(
            ok=True,
            op="check",
            data={"issues": [_issue("src/features/cart", None, "feature-index-required")]},
        )
        output = render_result(result)
        assert "src/features/cart" in output
        assert "   -  error" in output


class TestRenderExplain:
    def test_deny(self) -> None:
        result = ServiceResult(
            ok=True,
            op="explain",
            data={
                "specifier": "@/features/cart/x",
                "anchor": "src/app/main.ts",
                "resolved": "src/features/cart/x",
                "source": {"layer": "app", "unit": None, "subpath": "main.ts"},
                "target": {"layer": "feature", "unit": "cart", "subpath": "x"},
                "decision": {
                    "allowed": False,
                    "reason": "DeepContainerImport",
                    "rule": "app-imports",
                    "message": "app imports a feature internal file",
                    "preempted": False,
                },
            },
        )
        output = render_result(result)
        assert "specifier: @/features/cart/x" in output
        assert "feature 'cart' / x" in output
        assert "decision: deny DeepContainerImport app-imports" in output

    def test_unclassifiable(self) -> None:
        result = ServiceResult(
            ok=True,
            op="explain",
            data={"specifier": "vue", "source": None, "target": None, "decision": None},
        )
        output = render_result(result)
        assert "(not classifiable)" in output
        assert "none (import is not checked)" in output

    def test_style_line(self) -> None:
        result = ServiceResult(
            ok=True,
            op="explain",
            data={
                "specifier": "../payments",
                "source": {"layer": "feature", "unit": "auth"},
                "target": {"layer": "feature", "unit": "payments", "public_entry": True},
                "decision": {"allowed": False, "reason": "CrossUnitImport", "rule": "x"},
                "style": {
                    "reason": "AliasImportRequired",
                    "rule": "cross-imports-alias",
                    "message": "use the alias",
                },
            },
        )
        output = render_result(result)
        assert "style: AliasImportRequired cross-imports-alias" in output
        assert "    use the alias" in output


class TestRenderTelemetry:
    def test_span_tree_with_counts(self) -> None:
        telemetry = {
            "name": "LintService.lint",
            "duration_ms": 12.5,
            "counts": {"files": 2, "edges": 5},
            "children": [
                {"name": "discover", "duration_ms": 0.4},
                {"name": "evaluate", "duration_ms": 11.0, "counts": {"files": 2, "edges": 5}},
            ],
        }
        result = ServiceResult(
            ok=True, op="lint", data={"violations": []}, meta={"telemetry": telemetry}
        )
        lines = [line.strip() for line in render_result(result, verbose=True).splitlines()]
        assert "12.50ms  LintService.lint  (files=2, edges=5)" in lines
        assert "0.40ms  discover" in lines
        assert "11.00ms  evaluate  (files=2, edges=5)" in lines

    def test_hidden_without_verbose(self) -> None:
        result = ServiceResult(
            ok=True,
            op="lint",
            data={"violations": []},
            meta={"telemetry": {"name": "LintService.lint", "duration_ms": 1.0}},
        )
        assert "LintService.lint" not in render_result(result)


class TestRenderError:
    def test_error_line(self) -> None:
        result = ServiceResult(
            ok=False,
            op="lint",
            error=ServiceError(
                code="NO_FILES", message="No lintable files found", detail={"paths": ["."]}
            ),
        )
        assert render_result(result) == "ERROR  lint: No lintable files found"
        assert "detail:" in render_result(result, verbose=True)


class TestRenderGeneric:
    def test_unknown_op(self) -> None:
        result = ServiceResult(ok=True, op="custom", data={"n": 1, "items": [1, 2]})
        output = render_result(result)
        assert output.startswith("OK  custom")
        assert "n: 1" in output
        assert "items: [1,2]" in output


class TestRenderQuiet:
    def test_issues(self) -> None:
        issue = _issue("src/features/cart", None, "feature-index-required")
        result = ServiceResult(ok=True, op="check", data={"issues": [issue]})
        assert render_quiet(result) == "src/features/cart feature-index-required"

    def test_clean_is_empty(self) -> None:
        assert render_quiet(ServiceResult(ok=True, op="lint", data={"violations": []})) == ""

    def test_explain(self) -> None:
        deny = ServiceResult(
            ok=True, op="explain", data={"decision": {"allowed": False, "reason": "UpwardImport"}}
        )
        assert render_quiet(deny) == "deny UpwardImport"
        assert render_quiet(ServiceResult(ok=True, op="explain", data={"decision": None})) == "skipped"

    def test_error(self) -> None:
        result = ServiceResult(ok=False, op="lint", error=ServiceError(code="NO_FILES", message="boom"))
        assert render_quiet(result) == "ERROR: lint: boom"

    def test_generic(self) -> None:
        assert render_quiet(ServiceResult(ok=True, op="custom")) == "OK: custom"
