"""Tests for the rules CLI command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from layerlint.cli import cli


@pytest.mark.usefixtures("_isolated_project")
class TestRulesCommand:
    def test_table(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["rules"])
        assert result.exit_code == 0
        assert "no-cross-unit-imports" in result.stdout
        assert "stores-location" in result.stdout

    def test_quiet_lists_ids(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "rules"])
        ids = result.stdout.split()
        assert ids[0] == "app-imports"
        assert "layer-dependencies" in ids

    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "rules"])
        data = json.loads(result.stdout)
        assert data["op"] == "rules"
        assert data["data"]["count"] == len(data["data"]["rules"])

    def test_verbose_shows_reasons(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-v", "rules"])
        assert "Reasons" in result.stdout
