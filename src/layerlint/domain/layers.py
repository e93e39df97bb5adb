"""Layer classification — map a canonical path to its architectural layer.

The segment right after the source root selects the layer. Container
layers (features, modules) are split into named units by the following
segment; everything else is flat.
"""

from __future__ import annotations

from layerlint.domain.paths import matches_any, split_segments, strip_extension
from layerlint.domain.types import BoundaryConfig, LayerClassification, Layer


def layer_table(config: BoundaryConfig) -> dict[str, Layer]:
    """Folder name → layer for the first segment under the source root."""
    table: dict[str, Layer] = {
        config.app_folder_name: Layer.APP,
        config.features_container_name: Layer.FEATURE,
        config.modules_container_name: Layer.MODULE,
        config.components_folder_name: Layer.COMPONENT,
        config.services_folder_name: Layer.SERVICE,
        config.stores_folder_name: Layer.STORE,
        config.composables_folder_name: Layer.COMPOSABLE,
        config.entities_folder_name: Layer.ENTITY,
    }
    for name in config.shared_folder_names:
        table[name] = Layer.SHARED
    return table


def _root_end(segments: list[str], root: list[str]) -> int:
    """Index of the first segment after the first occurrence of *root*, or -1."""
    width = len(root)
    for start in range(len(segments) - width + 1):
        if segments[start : start + width] == root:
            return start + width
    return -1


def classify(canonical_path: str, config: BoundaryConfig) -> LayerClassification | None:
    """Classify *canonical_path*, or return None if it is not under the source root.

    The root on its own (``"src"``) is not classifiable either.
    """
    segments = split_segments(canonical_path)
    root = split_segments(config.source_root_name)
    if not root:
        return None
    start = _root_end(segments, root)
    if start == -1 or start >= len(segments):
        return None

    path = "/".join(segments)
    folder = segments[start]
    layer = layer_table(config).get(folder, Layer.OTHER)

    if layer in (Layer.FEATURE, Layer.MODULE):
        unit = segments[start + 1] if start + 1 < len(segments) else None
        subpath = "/".join(segments[start + 2 :])
        is_public = unit is not None and (subpath == "" or subpath in config.index_file_names)
        return LayerClassification(
            layer=layer,
            path=path,
            unit_name=unit,
            is_public_entry=is_public,
            subpath=subpath,
        )

    return LayerClassification(
        layer=layer,
        path=path,
        subpath="/".join(segments[start + 1 :]),
    )


def is_route_entry(classification: LayerClassification, config: BoundaryConfig) -> bool:
    """True when a feature target is one of its unit's route files (``features/x/routes``)."""
    if classification.layer is not Layer.FEATURE or classification.unit_name is None:
        return False
    return matches_any(classification.subpath, config.route_file_patterns)


def is_router_file(canonical_path: str, config: BoundaryConfig) -> bool:
    """True when *canonical_path* is the designated router (extension-insensitive)."""
    root = "/".join(split_segments(config.source_root_name))
    router = "/".join(split_segments(config.router_file))
    if not router:
        return False
    expected = f"{root}/{router}"
    return canonical_path == expected or strip_extension(canonical_path) == strip_extension(expected)


def is_test_file(canonical_path: str, config: BoundaryConfig) -> bool:
    """True when *canonical_path* matches one of the configured test-file globs."""
    return matches_any(canonical_path, config.test_file_patterns)


def is_in_stores_folder(canonical_path: str, config: BoundaryConfig) -> bool:
    """True when a directory of *canonical_path* under the root is a stores folder.

    Covers the root-level support layer (``src/stores``), nested shared
    stores (``src/shared/x/stores``) and unit-local stores
    (``src/features/cart/stores``).
    """
    segments = split_segments(canonical_path)
    start = _root_end(segments, split_segments(config.source_root_name))
    if start == -1:
        return False
    return config.stores_folder_name in segments[start:-1]
