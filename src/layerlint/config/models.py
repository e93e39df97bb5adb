"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, layerlint.toml only contains
overrides. A conventional ``src/`` layout with ``@/`` aliases needs no
config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from layerlint.domain.types import DEFAULT_SUPPORT_DEPENDENCIES, BoundaryConfig, ContainerDirection

_DEFAULTS = BoundaryConfig()


# --- layerlint.toml sections ---


class ProjectConfig(BaseModel):
    """[project] section: how the source tree is laid out."""

    model_config = {"frozen": True}

    source_root_name: str = _DEFAULTS.source_root_name
    alias_token: str = _DEFAULTS.alias_token
    app_folder_name: str = _DEFAULTS.app_folder_name
    shared_folder_names: list[str] = Field(default_factory=lambda: list(_DEFAULTS.shared_folder_names))
    features_container_name: str = _DEFAULTS.features_container_name
    modules_container_name: str = _DEFAULTS.modules_container_name
    components_folder_name: str = _DEFAULTS.components_folder_name
    services_folder_name: str = _DEFAULTS.services_folder_name
    stores_folder_name: str = _DEFAULTS.stores_folder_name
    composables_folder_name: str = _DEFAULTS.composables_folder_name
    entities_folder_name: str = _DEFAULTS.entities_folder_name
    ui_folder_name: str = "ui"
    index_file_names: list[str] = Field(default_factory=lambda: list(_DEFAULTS.index_file_names))
    router_file: str = _DEFAULTS.router_file
    route_file_patterns: list[str] = Field(default_factory=lambda: list(_DEFAULTS.route_file_patterns))
    test_file_patterns: list[str] = Field(default_factory=lambda: list(_DEFAULTS.test_file_patterns))


class PolicyConfig(BaseModel):
    """[policy] section: exemptions and the support-layer allow-list."""

    model_config = {"frozen": True}

    ignore_patterns: list[str] = Field(default_factory=list)
    allow_list: list[str] = Field(default_factory=list)
    ignore_type_imports: bool = True
    strict_shared: bool = False
    container_kind_direction: ContainerDirection = ContainerDirection.FEATURE_TO_MODULE
    support_dependencies: dict[str, list[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_SUPPORT_DEPENDENCIES.items()}
    )


class RulesConfig(BaseModel):
    """[rules] section: enable opt-in rules, disable rules, or override their severity."""

    model_config = {"frozen": True}

    enabled: list[str] = Field(default_factory=list)
    disabled: list[str] = Field(default_factory=list)
    severity: dict[str, str] = Field(default_factory=dict)


class DiscoveryConfig(BaseModel):
    """[discovery] section: which files ``lint`` walks."""

    model_config = {"frozen": True}

    extensions: list[str] = Field(
        default_factory=lambda: [".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs", ".mts", ".cts", ".vue"]
    )
    exclude_dirs: list[str] = Field(
        default_factory=lambda: ["node_modules", ".git", "dist", "build", "coverage", ".nuxt", ".output"]
    )


class LayerlintConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    project: ProjectConfig = Field(default_factory=ProjectConfig)
    policy: PolicyConfig = Field(default_factory=PolicyConfig)
    rules: RulesConfig = Field(default_factory=RulesConfig)
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)


def build_boundary_config(project: ProjectConfig, policy: PolicyConfig) -> BoundaryConfig:
    """Flatten the [project] and [policy] sections into the engine's config."""
    return BoundaryConfig(
        source_root_name=project.source_root_name,
        alias_token=project.alias_token,
        app_folder_name=project.app_folder_name,
        shared_folder_names=tuple(project.shared_folder_names),
        features_container_name=project.features_container_name,
        modules_container_name=project.modules_container_name,
        components_folder_name=project.components_folder_name,
        services_folder_name=project.services_folder_name,
        stores_folder_name=project.stores_folder_name,
        composables_folder_name=project.composables_folder_name,
        entities_folder_name=project.entities_folder_name,
        index_file_names=tuple(project.index_file_names),
        router_file=project.router_file,
        route_file_patterns=tuple(project.route_file_patterns),
        test_file_patterns=tuple(project.test_file_patterns),
        ignore_patterns=tuple(policy.ignore_patterns),
        allow_list=tuple(policy.allow_list),
        ignore_type_imports=policy.ignore_type_imports,
        strict_shared=policy.strict_shared,
        container_kind_direction=policy.container_kind_direction,
        support_dependencies={k: tuple(v) for k, v in policy.support_dependencies.items()},
    )
