"""Anchor resolution and artifact placement."""

from .anchor_resolver import AnchorResolver, is_root, rect_from, resolve_bounds, top_level_ancestor
from .artifact_registry import (
    ARTIFACT_TYPE_KEY,
    ARTIFACT_VERSION_KEY,
    artifact_frame_name,
    artifact_tags,
    find_existing_artifacts,
)
from .geometry import PlacementMethod, PlacementMode, PlacementResult, Point, Rect
from .placement_engine import PlacementEngine, PlacementOptions, place

__all__ = [
    "ARTIFACT_TYPE_KEY",
    "ARTIFACT_VERSION_KEY",
    "AnchorResolver",
    "PlacementEngine",
    "PlacementMethod",
    "PlacementMode",
    "PlacementOptions",
    "PlacementResult",
    "Point",
    "Rect",
    "artifact_frame_name",
    "artifact_tags",
    "find_existing_artifacts",
    "is_root",
    "place",
    "rect_from",
    "resolve_bounds",
    "top_level_ancestor",
]
