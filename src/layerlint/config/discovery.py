"""Config file discovery and loading.

Walk-up finder locates layerlint.toml (or a pyproject.toml carrying a
``[tool.layerlint]`` table), similar to how git finds .git/.
Supports LAYERLINT_CONFIG env var and --config CLI flag overrides.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from layerlint.config.models import LayerlintConfig

CONFIG_FILENAME = "layerlint.toml"
PYPROJECT_FILENAME = "pyproject.toml"
CONFIG_ENV_VAR = "LAYERLINT_CONFIG"


def _has_tool_table(pyproject: Path) -> bool:
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return False
    return isinstance(data.get("tool", {}).get("layerlint"), dict)


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for a config file.

    In each directory ``layerlint.toml`` wins over ``pyproject.toml``;
    the latter only counts if it has a ``[tool.layerlint]`` table.
    Returns the path to the config file, or None if not found.
    Checks LAYERLINT_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        pyproject = current / PYPROJECT_FILENAME
        if pyproject.is_file() and _has_tool_table(pyproject):
            return pyproject
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def read_config_data(path: Path) -> dict[str, Any]:
    """Parse *path* and return the layerlint table.

    Raises:
        tomllib.TOMLDecodeError: if the file is not valid TOML.
    """
    data: dict[str, Any] = tomllib.loads(path.read_text(encoding="utf-8"))
    if path.name == PYPROJECT_FILENAME:
        table = data.get("tool", {}).get("layerlint", {})
        return table if isinstance(table, dict) else {}
    return data


def load_config(path: Path | None = None, cwd: Path | None = None) -> LayerlintConfig:
    """Load and validate config from a TOML file.

    If *path* is None, uses find_config(*cwd*) to discover the file.
    Returns default LayerlintConfig if no file is found.
    """
    if path is None:
        path = find_config(cwd)

    if path is None:
        return LayerlintConfig()

    return LayerlintConfig.model_validate(read_config_data(path))
