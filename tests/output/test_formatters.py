"""Tests for format_result output modes."""

from __future__ import annotations

import json

from layerlint.output.formatters import OutputSettings, format_result
from layerlint.services.result import ServiceError, ServiceResult

RESULT = ServiceResult(
    ok=True,
    op="lint",
    data={
        "violations": [
            {
                "file": "src/app/main.ts",
                "line": 2,
                "rule": "app-imports",
                "severity": "error",
                "message": "app imports a feature internal file of 'payments'",
            }
        ],
        "count": 1,
        "error_count": 1,
        "warning_count": 0,
        "files_checked": 4,
    },
)


class TestFormatResult:
    def test_json_mode(self) -> None:
        output = format_result(RESULT, settings=OutputSettings(json_output=True))
        parsed = json.loads(output)
        assert parsed["ok"] is True
        assert parsed["data"]["violations"][0]["rule"] == "app-imports"

    def test_json_wins_over_quiet(self) -> None:
        output = format_result(RESULT, settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(output)["op"] == "lint"

    def test_quiet_mode(self) -> None:
        output = format_result(RESULT, settings=OutputSettings(quiet=True))
        assert output == "src/app/main.ts:2 app-imports"

    def test_default_mode(self) -> None:
        output = format_result(RESULT)
        assert "src/app/main.ts" in output
        assert "1 problem (1 error, 0 warnings)" in output

    def test_error_json(self) -> None:
        result = ServiceResult(
            ok=False,
            op="lint",
            error=ServiceError(code="NO_FILES", message="No lintable files found"),
        )
        parsed = json.loads(format_result(result, settings=OutputSettings(json_output=True)))
        assert parsed["ok"] is False
        assert parsed["error"]["code"] == "NO_FILES"
