"""Tests for the explain CLI command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from layerlint.cli import cli


@pytest.mark.usefixtures("_isolated_project")
class TestExplainCommand:
    def test_denied(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            ["explain", "@/features/payments/service", "--from", "src/features/auth/index.ts"],
        )
        assert result.exit_code == 0
        assert "resolved: src/features/payments/service" in result.stdout
        assert "deny CrossUnitImport" in result.stdout
        assert "no-cross-unit-imports" in result.stdout

    def test_allowed(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["-q", "explain", "@/features/payments", "--from", "src/app/main.ts"]
        )
        assert result.stdout.strip() == "allow"

    def test_external(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "explain", "vue", "--from", "src/app/main.ts"])
        assert result.stdout.strip() == "skipped"

    def test_kind_and_type_only(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            [
                "--json",
                "explain",
                "@/features/payments/types",
                "--from",
                "src/features/auth/index.ts",
                "--kind",
                "reexport",
                "--type-only",
            ],
        )
        decision = json.loads(result.stdout)["data"]["decision"]
        assert decision["allowed"] is True
        assert decision["preempted"] is True

    def test_from_is_required(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["explain", "@/shared/x"])
        assert result.exit_code == 2

    def test_invalid_kind(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["explain", "x", "--from", "a.ts", "--kind", "weird"])
        assert result.exit_code == 2

    def test_empty_specifier(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["explain", "", "--from", "src/app/main.ts"])
        assert result.exit_code == 1
        assert "Specifier is empty" in result.stderr
