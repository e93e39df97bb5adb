"""Tests for configuration models."""

import pytest
from pydantic import ValidationError

from layerlint.config.models import (
    DiscoveryConfig,
    LayerlintConfig,
    PolicyConfig,
    ProjectConfig,
    build_boundary_config,
)
from layerlint.domain.types import BoundaryConfig, ContainerDirection


class TestDefaults:
    def test_defaults_match_engine(self) -> None:
        """Empty sections flatten to the engine's own defaults."""
        assert build_boundary_config(ProjectConfig(), PolicyConfig()) == BoundaryConfig()

    def test_discovery_defaults(self) -> None:
        cfg = DiscoveryConfig()
        assert ".vue" in cfg.extensions
        assert "node_modules" in cfg.exclude_dirs

    def test_nested_sections(self) -> None:
        cfg = LayerlintConfig()
        assert cfg.project.ui_folder_name == "ui"
        assert cfg.rules.severity == {}


class TestValidation:
    def test_frozen(self) -> None:
        cfg = PolicyConfig()
        with pytest.raises(ValidationError):
            cfg.strict_shared = True  # type: ignore[misc]

    def test_direction_parsed(self) -> None:
        cfg = PolicyConfig.model_validate({"container_kind_direction": "module_to_feature"})
        assert cfg.container_kind_direction is ContainerDirection.MODULE_TO_FEATURE

    def test_bad_direction_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PolicyConfig.model_validate({"container_kind_direction": "sideways"})
