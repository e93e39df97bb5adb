"""Project — the source tree being linted, plus its settings and plugins.

The Project is the single dependency injected into every service. It owns
file discovery and reading; the pure core in :mod:`layerlint.domain`
never touches the filesystem (correct dependency direction:
infrastructure -> domain).
"""

from __future__ import annotations

import logging
from functools import cached_property
from pathlib import Path
from typing import TYPE_CHECKING

from layerlint.domain.paths import matches_any
from layerlint.domain.rules import BUILTIN_RULES, RuleRegistry

if TYPE_CHECKING:
    from layerlint.config.settings import LayerlintSettings
    from layerlint.domain.types import BoundaryConfig
    from layerlint.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# File discovery
# ---------------------------------------------------------------------------


def find_source_files(
    root: Path,
    *,
    extensions: list[str] | tuple[str, ...],
    exclude_dirs: list[str] | tuple[str, ...] = (),
) -> list[Path]:
    """Discover lintable files under *root*, sorted.

    Skips any path with a component in *exclude_dirs* (``node_modules``,
    ``.git``, ...) and keeps only files whose suffix is in *extensions*.
    """
    skip = frozenset(exclude_dirs)
    wanted = frozenset(extensions)
    results: list[Path] = []
    for path in root.rglob("*"):
        if not path.is_file():
            continue
        if any(part in skip for part in path.relative_to(root).parts):
            continue
        if path.suffix in wanted:
            results.append(path)
    return sorted(results)


def read_source_file(path: Path) -> str:
    """Read a source file as UTF-8 text.

    Raises:
        OSError: if the file cannot be read.
        UnicodeDecodeError: if it is not valid UTF-8.
    """
    return path.read_text(encoding="utf-8")


def find_index_file(directory: Path, index_file_names: list[str] | tuple[str, ...]) -> Path | None:
    """Return the first public entry file present in *directory*, if any."""
    for name in index_file_names:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


# ---------------------------------------------------------------------------
# Project
# ---------------------------------------------------------------------------


class Project:
    """Filesystem view of the linted project.

    Constructed once at CLI startup from :class:`LayerlintSettings` and
    stored on the app context. Services receive the Project via their
    :class:`BaseService` constructor.
    """

    def __init__(self, settings: LayerlintSettings) -> None:
        self._settings = settings
        self._plugin_manager: PluginManager | None = None

    @property
    def root(self) -> Path:
        """The project root directory."""
        return self._settings.project_root

    @property
    def settings(self) -> LayerlintSettings:
        """The resolved settings for this project."""
        return self._settings

    @cached_property
    def config(self) -> BoundaryConfig:
        """The frozen engine config built from the settings."""
        return self._settings.boundary_config()

    @property
    def source_dir(self) -> Path:
        """``<root>/<source_root_name>``."""
        return self.root / self._settings.project.source_root_name

    @property
    def plugin_manager(self) -> PluginManager | None:
        """The plugin manager (None if not initialized)."""
        return self._plugin_manager

    def init_plugins(self) -> list[str]:
        """Create a PluginManager and discover plugins.

        Called by AppContext when the project is first accessed.
        """
        from layerlint.plugins.manager import LOCAL_PLUGIN_DIR, PluginManager

        pm = PluginManager()
        names = pm.discover_and_load(local_dir=self.root / LOCAL_PLUGIN_DIR)
        self._plugin_manager = pm
        return names

    def rule_registry(self, warnings: list[str] | None = None) -> RuleRegistry:
        """Built-in rules plus any contributed by plugins."""
        registry = RuleRegistry(BUILTIN_RULES)
        if self._plugin_manager is not None:
            for rule in self._plugin_manager.collect_rules(warnings):
                try:
                    registry.add(rule)
                except ValueError as exc:
                    logger.warning("Skipping plugin rule %s: %s", rule.id, exc)
                    if warnings is not None:
                        warnings.append(str(exc))
        return registry

    def relative(self, path: Path) -> str:
        """*path* relative to the project root (POSIX), or absolute if outside it."""
        resolved = path.resolve()
        try:
            return resolved.relative_to(self.root.resolve()).as_posix()
        except ValueError:
            return resolved.as_posix()

    def is_ignored(self, path: Path) -> bool:
        """True when *path* matches one of ``policy.ignore_patterns``."""
        return matches_any(self.relative(path), self.config.ignore_patterns)

    def find_sources(self, paths: list[Path] | None = None) -> list[Path]:
        """Expand *paths* (files or directories) into lintable files.

        With no paths, walks the source root (or the project root when the
        source root folder does not exist). Explicit files are kept
        whatever their suffix; unsupported ones simply yield no edges.
        """
        discovery = self._settings.discovery
        if not paths:
            paths = [self.source_dir if self.source_dir.is_dir() else self.root]

        found: dict[Path, None] = {}
        for path in paths:
            if path.is_file():
                found[path] = None
                continue
            for item in find_source_files(
                path,
                extensions=discovery.extensions,
                exclude_dirs=discovery.exclude_dirs,
            ):
                found[item] = None
        return list(found)
