"""Core value types: layers, import edges, classifications, decisions.

All types are frozen so they can be shared freely between the extractor,
the classifier and the policy engine within one per-file pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class Layer(StrEnum):
    """Architectural layers recognized directly under the source root."""

    APP = "app"
    SHARED = "shared"
    FEATURE = "feature"
    MODULE = "module"
    COMPONENT = "component"
    SERVICE = "service"
    STORE = "store"
    COMPOSABLE = "composable"
    ENTITY = "entity"
    OTHER = "other"


CONTAINER_LAYERS: frozenset[Layer] = frozenset({Layer.FEATURE, Layer.MODULE})

SUPPORT_LAYERS: frozenset[Layer] = frozenset(
    {Layer.COMPONENT, Layer.COMPOSABLE, Layer.SERVICE, Layer.STORE, Layer.ENTITY}
)


class ImportKind(StrEnum):
    """How an import edge was declared."""

    STATIC = "static"
    DYNAMIC = "dynamic"
    REEXPORT = "reexport"


class ReasonCode(StrEnum):
    """Why an edge was denied."""

    DEEP_CONTAINER_IMPORT = "DeepContainerImport"
    CROSS_UNIT_IMPORT = "CrossUnitImport"
    CROSS_CONTAINER_KIND_IMPORT = "CrossContainerKindImport"
    UPWARD_IMPORT = "UpwardImport"
    LAYER_ESCALATION = "LayerEscalation"
    UNAUTHORIZED_LAYER_DEPENDENCY = "UnauthorizedLayerDependency"
    SHARED_LAYER_ESCAPE = "SharedLayerEscape"
    RELATIVE_IMPORT_REQUIRED = "RelativeImportRequired"
    ALIAS_IMPORT_REQUIRED = "AliasImportRequired"


class ContainerDirection(StrEnum):
    """Which feature/module direction is forbidden."""

    FEATURE_TO_MODULE = "feature_to_module"
    MODULE_TO_FEATURE = "module_to_feature"
    BOTH = "both"


DEFAULT_SUPPORT_DEPENDENCIES: dict[str, tuple[str, ...]] = {
    "component": ("component", "entity", "shared"),
    "composable": ("composable", "service", "store", "entity", "shared"),
    "service": ("service", "store", "entity", "shared"),
    "store": ("store", "entity", "shared"),
    "entity": ("entity", "shared"),
}


@dataclass(frozen=True)
class BoundaryConfig:
    """Everything the pure core needs to know about a project.

    Built from :class:`layerlint.config.settings.LayerlintSettings` by
    ``settings.boundary_config()``; tests construct it directly.
    Folder names are single path segments; ``source_root_name`` may span
    several segments (``"packages/web/src"``).
    """

    source_root_name: str = "src"
    alias_token: str = "@"
    app_folder_name: str = "app"
    shared_folder_names: tuple[str, ...] = ("shared", "lib")
    features_container_name: str = "features"
    modules_container_name: str = "modules"
    components_folder_name: str = "components"
    services_folder_name: str = "services"
    stores_folder_name: str = "stores"
    composables_folder_name: str = "composables"
    entities_folder_name: str = "entities"
    index_file_names: tuple[str, ...] = (
        "index",
        "index.ts",
        "index.js",
        "index.tsx",
        "index.jsx",
        "index.mts",
        "index.mjs",
    )
    router_file: str = "app/router"
    route_file_patterns: tuple[str, ...] = ("routes", "routes.*")
    test_file_patterns: tuple[str, ...] = (
        "**/__tests__/**",
        "**/tests/**",
        "**/test/**",
        "**/*.spec.*",
        "**/*.test.*",
    )
    ignore_patterns: tuple[str, ...] = ()
    allow_list: tuple[str, ...] = ()
    ignore_type_imports: bool = True
    strict_shared: bool = False
    container_kind_direction: ContainerDirection = ContainerDirection.FEATURE_TO_MODULE
    support_dependencies: dict[str, tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_SUPPORT_DEPENDENCIES)
    )


@dataclass(frozen=True)
class ImportEdge:
    """One import/export declaration found in a file."""

    anchor_file: str
    raw_specifier: str
    kind: ImportKind = ImportKind.STATIC
    line: int = 1
    type_only: bool = False


@dataclass(frozen=True)
class LayerClassification:
    """Where a canonical path sits in the architecture.

    ``subpath`` is the remainder after the unit segment for container
    layers and after the layer segment otherwise (``""`` when none).
    """

    layer: Layer
    path: str
    unit_name: str | None = None
    is_public_entry: bool = False
    subpath: str = ""

    @property
    def is_container(self) -> bool:
        return self.layer in CONTAINER_LAYERS

    @property
    def is_support(self) -> bool:
        return self.layer in SUPPORT_LAYERS


@dataclass(frozen=True)
class PolicyDecision:
    """Allow/deny verdict for one edge."""

    edge: ImportEdge
    allowed: bool
    source: LayerClassification
    target: LayerClassification
    reason: ReasonCode | None = None

    @property
    def target_layer(self) -> Layer:
        return self.target.layer

    @property
    def target_unit(self) -> str | None:
        return self.target.unit_name
