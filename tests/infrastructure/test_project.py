"""Tests for Project and file discovery."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from layerlint.config.settings import LayerlintSettings
from layerlint.domain.rules import Rule
from layerlint.infrastructure.project import (
    Project,
    find_index_file,
    find_source_files,
    read_source_file,
)
from layerlint.plugins import hookimpl

if TYPE_CHECKING:
    from tests.conftest import WriteTree


class TestFindSourceFiles:
    def test_filters_by_extension(self, write_tree: WriteTree) -> None:
        root = write_tree({"src/a.ts": "", "src/b.vue": "", "src/c.css": "", "src/d.md": ""})
        files = find_source_files(root, extensions=[".ts", ".vue"])
        assert [f.name for f in files] == ["a.ts", "b.vue"]

    def test_excludes_dirs(self, write_tree: WriteTree) -> None:
        root = write_tree({"src/a.ts": "", "node_modules/pkg/index.js": "", "src/dist/x.js": ""})
        files = find_source_files(root, extensions=[".ts", ".js"], exclude_dirs=["node_modules", "dist"])
        assert [f.relative_to(root).as_posix() for f in files] == ["src/a.ts"]

    def test_sorted(self, write_tree: WriteTree) -> None:
        root = write_tree({"z.ts": "", "a/b.ts": "", "m.ts": ""})
        files = find_source_files(root, extensions=[".ts"])
        assert files == sorted(files)


class TestHelpers:
    def test_read_source_file(self, tmp_path: Path) -> None:
        path = tmp_path / "a.ts"
        path.write_text("export const é = 1\n", encoding="utf-8")
        assert read_source_file(path) == "export const é = 1\n"

    def test_find_index_file_order(self, write_tree: WriteTree) -> None:
        root = write_tree({"unit/index.js": "", "unit/index.ts": ""})
        found = find_index_file(root / "unit", ["index.ts", "index.js"])
        assert found == root / "unit" / "index.ts"

    def test_find_index_file_missing(self, tmp_path: Path) -> None:
        assert find_index_file(tmp_path, ["index.ts"]) is None


class TestProject:
    def test_root_and_source_dir(self, project: Project, sample_root: Path) -> None:
        assert project.root == sample_root
        assert project.source_dir == sample_root / "src"

    def test_config_is_cached(self, project: Project) -> None:
        assert project.config is project.config
        assert project.config.source_root_name == "src"

    def test_relative(self, project: Project, sample_root: Path) -> None:
        assert project.relative(sample_root / "src" / "app" / "main.ts") == "src/app/main.ts"

    def test_relative_outside_root(
        self, project: Project, tmp_path_factory: pytest.TempPathFactory
    ) -> None:
        other = tmp_path_factory.mktemp("elsewhere") / "x.ts"
        assert project.relative(other) == other.resolve().as_posix()

    def test_find_sources_defaults_to_source_dir(self, project: Project) -> None:
        files = project.find_sources()
        assert len(files) == 10
        assert all(project.relative(f).startswith("src/") for f in files)

    def test_find_sources_falls_back_to_root(self, write_tree: WriteTree) -> None:
        root = write_tree({"app/main.ts": ""})
        project = Project(LayerlintSettings.from_cli(project_root=root))
        assert [p.name for p in project.find_sources()] == ["main.ts"]

    def test_find_sources_explicit_paths(self, project: Project, sample_root: Path) -> None:
        main = sample_root / "src" / "app" / "main.ts"
        files = project.find_sources([main, sample_root / "src" / "app", main])
        assert files == [main, sample_root / "src" / "app" / "router.ts"]

    def test_explicit_file_kept_whatever_suffix(self, project: Project, sample_root: Path) -> None:
        notes = sample_root / "notes.md"
        notes.write_text("# hi")
        assert project.find_sources([notes]) == [notes]

    def test_is_ignored(self, write_tree: WriteTree) -> None:
        root = write_tree({"layerlint.toml": '[policy]\nignore_patterns = ["src/legacy/**"]\n'})
        project = Project(LayerlintSettings.from_cli(project_root=root))
        assert project.is_ignored(root / "src" / "legacy" / "old.ts")
        assert not project.is_ignored(root / "src" / "app" / "main.ts")


class TestRuleRegistry:
    def test_builtins_without_plugins(self, project: Project) -> None:
        registry = project.rule_registry()
        assert registry.get("no-cross-unit-imports") is not None
        assert project.plugin_manager is None

    def test_local_plugin_rules(self, project: Project, sample_root: Path) -> None:
        plugin_dir = sample_root / ".layerlint" / "plugins"
        plugin_dir.mkdir(parents=True)
        (plugin_dir / "extra.py").write_text(
            "from layerlint.domain.rules import Rule\n"
            "from layerlint.plugins import hookimpl\n\n"
            "class Extra:\n"
            "    @hookimpl\n"
            "    def register_rules(self):\n"
            "        return [Rule(id='team-convention', description='d', category='structure')]\n"
        )
        names = project.init_plugins()
        assert any("Extra" in n for n in names)
        assert project.rule_registry().get("team-convention") is not None

    def test_clashing_plugin_rule_becomes_warning(self, project: Project) -> None:
        from layerlint.domain.types import ReasonCode

        class Clash:
            @hookimpl
            def register_rules(self) -> list[Rule]:
                return [
                    Rule(
                        id="mine",
                        description="d",
                        reasons=frozenset({ReasonCode.UPWARD_IMPORT}),
                    )
                ]

        project.init_plugins()
        assert project.plugin_manager is not None
        project.plugin_manager.register_plugin(Clash())
        warnings: list[str] = []
        registry = project.rule_registry(warnings)
        assert registry.get("mine") is None
        assert any("reuses reason codes" in w for w in warnings)

    def test_plugin_rule_cannot_shadow_builtin_id(self, project: Project) -> None:
        from layerlint.domain.types import ReasonCode

        class Shadow:
            @hookimpl
            def register_rules(self) -> list[Rule]:
                return [Rule(id="app-imports", description="plugin")]

        project.init_plugins()
        assert project.plugin_manager is not None
        project.plugin_manager.register_plugin(Shadow())
        warnings: list[str] = []
        registry = project.rule_registry(warnings)
        builtin = registry.rule_for(ReasonCode.DEEP_CONTAINER_IMPORT)
        assert builtin is not None
        assert builtin.id == "app-imports"
        assert builtin.description != "plugin"
        assert any("already registered" in w for w in warnings)
