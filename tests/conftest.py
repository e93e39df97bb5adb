"""Shared pytest fixtures for layerlint tests."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from layerlint.config.settings import LayerlintSettings
from layerlint.infrastructure.project import Project
from layerlint.services.telemetry import disable_telemetry

WriteTree = Callable[[dict[str, str]], Path]

# A small project with one violation per headline rule:
#   app/main.ts           DeepContainerImport (line 2)
#   features/auth/index   CrossUnitImport (line 1)
#   stores/app.store.ts   UnauthorizedLayerDependency (warning)
SAMPLE_TREE: dict[str, str] = {
    "src/app/main.ts": (
        "import { auth } from '@/features/auth'\n"
        "import helper from '@/features/payments/internal/helper'\n"
    ),
    "src/app/router.ts": "import routes from '@/features/payments/routes'\n",
    "src/features/auth/index.ts": (
        "import { pay } from '@/features/payments/service'\n"
        "import { slug } from '../../shared/utils'\n"
        "export const auth = 1\n"
    ),
    "src/features/payments/index.ts": "export * from './service'\n",
    "src/features/payments/service.ts": "export const pay = 1\n",
    "src/features/payments/routes.ts": "export default []\n",
    "src/features/payments/internal/helper.ts": "export default 1\n",
    "src/shared/utils.ts": "import leftPad from 'left-pad'\nexport const slug = 1\n",
    "src/stores/app.store.ts": "import { useAuth } from '@/modules/auth'\n",
    "src/modules/auth/index.ts": "export const useAuth = 1\n",
}


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's LAYERLINT_* environment out of tests."""
    for key in list(os.environ):
        if key.startswith("LAYERLINT_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Iterator[None]:
    """`-v` enables telemetry and a CLI run binds the project root; undo both."""
    yield
    disable_telemetry()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def write_tree(tmp_path: Path) -> WriteTree:
    """Write ``{relative path: content}`` under tmp_path and return the root."""

    def _write(files: dict[str, str]) -> Path:
        for rel, content in files.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture
def sample_root(write_tree: WriteTree) -> Path:
    """Temporary project containing :data:`SAMPLE_TREE`."""
    return write_tree(SAMPLE_TREE)


@pytest.fixture
def project(sample_root: Path) -> Project:
    """Project over the sample tree with default settings."""
    return Project(LayerlintSettings.from_cli(project_root=sample_root))


@pytest.fixture
def _isolated_project(sample_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the sample project so the CLI discovers it.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command
    test classes.
    """
    monkeypatch.chdir(sample_root)
