"""
Nexus Artifact Core

Turns free-form language-model output into typed, bounded artifacts and
computes where to place them on a 2-D canvas.

Author: Nexus EE Design Team
"""

import logging

from .adapters import ContentTableIgnoreRules, WorkAdapter
from .core import ConfigError, PipelineConfig
from .extraction import ExtractionResult, extract, extract_json_candidate
from .llm import OpenRouterChatTransport, TransportError
from .normalization import normalize
from .pipeline import ArtifactPipeline, PipelineResult, PlacementOutcome
from .placement import (
    AnchorResolver,
    PlacementEngine,
    PlacementMode,
    PlacementOptions,
    PlacementResult,
    Point,
    Rect,
    find_existing_artifacts,
    place,
    resolve_bounds,
    top_level_ancestor,
)
from .repair import RepairOrchestrator, RepairOutcome, RepairState
from .schemas import NormalizedSpec, SchemaKind
from .validation import ValidationResult, validate

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"

__all__ = [
    "AnchorResolver",
    "ArtifactPipeline",
    "ConfigError",
    "ContentTableIgnoreRules",
    "ExtractionResult",
    "NormalizedSpec",
    "OpenRouterChatTransport",
    "PipelineConfig",
    "PipelineResult",
    "PlacementEngine",
    "PlacementMode",
    "PlacementOptions",
    "PlacementOutcome",
    "PlacementResult",
    "Point",
    "Rect",
    "RepairOrchestrator",
    "RepairOutcome",
    "RepairState",
    "SchemaKind",
    "TransportError",
    "ValidationResult",
    "WorkAdapter",
    "extract",
    "extract_json_candidate",
    "find_existing_artifacts",
    "normalize",
    "place",
    "resolve_bounds",
    "top_level_ancestor",
    "validate",
]
