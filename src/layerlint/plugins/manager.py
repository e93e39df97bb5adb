"""Plugin discovery and loading.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints,
plus local directory discovery from ``.layerlint/plugins/``.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from typing import Any

import pluggy

from layerlint.domain.rules import Rule
from layerlint.plugins.hookspecs import PROJECT_NAME, LayerlintHookSpec

ENTRYPOINT_GROUP = "layerlint.plugins"
LOCAL_PLUGIN_DIR = ".layerlint/plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(LayerlintHookSpec)
        self._loaded: bool = False

    def discover_and_load(self, *, local_dir: Path | None = None) -> list[str]:
        """Discover plugins from entry points and an optional local directory.

        Uses pluggy's native setuptools entry_point discovery for the
        ``layerlint.plugins`` group, then scans *local_dir* (typically
        ``.layerlint/plugins/``) for single-file Python plugins.

        Returns a list of loaded plugin names.
        """
        try:
            self._pm.load_setuptools_entrypoints(ENTRYPOINT_GROUP)
        except Exception:
            logger.warning("Failed to load entry-point plugins", exc_info=True)
        self._normalize_plugin_instances()
        if local_dir is not None:
            self._discover_local(local_dir)
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        """Unregister a plugin instance."""
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        """Access the hook relay for dispatching events."""
        return self._pm.hook

    def get_plugins(self) -> list[object]:
        """Return all registered plugins."""
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Hook dispatch
    # ------------------------------------------------------------------

    def collect_rules(self, warnings: list[str] | None = None) -> list[Rule]:
        """Gather rules contributed through ``register_rules``.

        A plugin that raises or returns something other than a list of
        :class:`Rule` is skipped with a warning.
        """
        rules: list[Rule] = []
        for plugin in self._pm.get_plugins():
            hook = getattr(plugin, "register_rules", None)
            if hook is None:
                continue
            plugin_name = self._pm.get_name(plugin) or plugin.__class__.__name__
            try:
                contributed = hook()
            except Exception:
                logger.warning("Failed to collect rules from plugin %s", plugin_name, exc_info=True)
                if warnings is not None:
                    warnings.append(f"Plugin {plugin_name} failed to register rules")
                continue
            if contributed is None:
                continue
            if not isinstance(contributed, list) or not all(isinstance(r, Rule) for r in contributed):
                logger.warning("Plugin %s returned non-Rule registrations", plugin_name)
                if warnings is not None:
                    warnings.append(f"Plugin {plugin_name} returned invalid rules")
                continue
            rules.extend(contributed)
        return rules

    def notify_post_lint(
        self,
        files_checked: int,
        violations: list[dict[str, Any]],
        warnings: list[str],
    ) -> None:
        """Call ``post_lint`` on every plugin; failures become warnings."""
        try:
            self._pm.hook.post_lint(files_checked=files_checked, violations=violations)
        except Exception:
            logger.debug("post_lint dispatch failed", exc_info=True)
            warnings.append("Plugin post_lint hook failed")

    # ------------------------------------------------------------------
    # Local directory discovery
    # ------------------------------------------------------------------

    def _discover_local(self, local_dir: Path) -> None:
        """Scan *local_dir* for single-file Python plugins.

        Each ``*.py`` file (excluding ``_``-prefixed names) is loaded as a
        module. Classes inside the module that carry pluggy hookimpl-decorated
        methods are instantiated and registered.

        Errors are logged as warnings but never raised: a broken local plugin
        must not stop a lint run.
        """
        if not local_dir.is_dir():
            return

        for py_file in sorted(local_dir.glob("*.py")):
            if py_file.name.startswith("_"):
                continue
            module_name = f"layerlint_local_plugin_{py_file.stem}"
            try:
                spec = importlib.util.spec_from_file_location(module_name, py_file)
                if spec is None or spec.loader is None:
                    logger.warning("Could not create module spec for %s", py_file)
                    continue
                module = importlib.util.module_from_spec(spec)
                sys.modules[module_name] = module
                spec.loader.exec_module(module)
            except Exception:
                logger.warning("Failed to load local plugin %s", py_file, exc_info=True)
                sys.modules.pop(module_name, None)
                continue

            for _attr_name, obj in inspect.getmembers(module, inspect.isclass):
                if obj.__module__ != module_name:
                    continue  # skip imported classes
                if not self._has_hook_impls(obj):
                    continue
                try:
                    instance = obj()
                    self.register_plugin(instance, name=f"{module_name}.{obj.__name__}")
                except Exception:
                    logger.warning(
                        "Failed to instantiate plugin class %s from %s",
                        obj.__name__,
                        py_file,
                        exc_info=True,
                    )

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            if not self._has_hook_impls(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any methods decorated with ``@hookimpl``.

        Pluggy's ``HookimplMarker("layerlint")`` sets a ``layerlint_impl``
        attribute on decorated methods.
        """
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, f"{PROJECT_NAME}_impl", None):
                return True
        return False
