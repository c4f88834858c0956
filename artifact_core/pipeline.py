"""
Artifact Pipeline

Facade over the core stages:

    raw text -> extract -> validate / normalize -> renderer
    selected node -> top-level ancestor -> bounds -> placement -> renderer

Everything except ``process_with_repair`` is synchronous and pure with
respect to its inputs. The pipeline holds no per-request state, so one
instance can serve concurrent requests.

Usage:
    pipeline = ArtifactPipeline()
    result = pipeline.process(response_text, SchemaKind.SCORECARD)
    if result.spec is not None:
        render(result.spec)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from .adapters.work_adapter import WorkAdapter
from .core.config import PipelineConfig
from .core.log import resolve_logger
from .extraction.text_extractor import ExtractionResult, extract_payload
from .llm.transport import OpenRouterChatTransport
from .normalization.normalizer import normalize
from .placement.anchor_resolver import AnchorResolver
from .placement.geometry import PlacementMode, PlacementResult, Point, Rect
from .placement.placement_engine import PlacementEngine, PlacementOptions
from .repair.orchestrator import NO_JSON_FOUND, RepairOrchestrator, RepairOutcome
from .schemas.kinds import SchemaKind
from .schemas.models import NormalizedContentTable, NormalizedSpec
from .validation.validation_result import ValidationResult
from .validation.validator import validate

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """
    Outcome of one extract/validate/normalize pass.

    ``spec`` is None only when no JSON object could be extracted.
    """
    kind: SchemaKind
    extraction: ExtractionResult
    validation: ValidationResult = field(default_factory=ValidationResult)
    spec: Optional[NormalizedSpec] = None

    @property
    def ok(self) -> bool:
        return self.extraction.found and self.validation.ok


@dataclass
class PlacementOutcome:
    """Placement plus the anchor it was computed from (if any)."""
    result: PlacementResult
    anchor_node: Any = None
    anchor_rect: Optional[Rect] = None


class ArtifactPipeline:
    """
    Args:
        config: Pipeline configuration (defaults from the environment).
        adapter: Optional deployment-specific adapter.
        transport: Object with ``async send_chat(messages) -> str``; built
            lazily from ``config`` when repair is first needed.
        log: Optional logger (defaults to the module logger).
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        adapter: Optional[WorkAdapter] = None,
        transport: Any = None,
        log: Optional[logging.Logger] = None,
    ):
        self.config = config or PipelineConfig()
        self.adapter = adapter
        self.transport = transport
        self.log = resolve_logger(log, logger)
        self.anchor_resolver = AnchorResolver(log=log)
        self.placement_engine = PlacementEngine(log=log)

    # ------------------------------------------------------------------
    # Text -> artifact
    # ------------------------------------------------------------------

    def extract(self, text: str, kind: Optional[SchemaKind] = None) -> ExtractionResult:
        return extract_payload(text, strip_progress=(kind == SchemaKind.DESIGN_SPEC_V1))

    def normalize(self, decoded: Any, kind: SchemaKind) -> NormalizedSpec:
        spec = normalize(decoded, kind, log=self.log)
        if self.adapter is not None and isinstance(spec, NormalizedContentTable):
            spec = self.adapter.filter_content_table(spec)
        return spec

    def process(self, text: str, kind: SchemaKind) -> PipelineResult:
        """Extract, validate and normalize one response. Never raises for bad input."""
        kind = SchemaKind(kind)
        extraction = self.extract(text, kind)
        if not extraction.found:
            validation = ValidationResult()
            validation.error(NO_JSON_FOUND)
            return PipelineResult(kind=kind, extraction=extraction, validation=validation)

        validation = validate(extraction.decoded, kind, log=self.log)
        spec = self.normalize(extraction.decoded, kind)
        self.log.info(f"Processed {kind.value}: {validation.summary()}")
        return PipelineResult(kind=kind, extraction=extraction, validation=validation, spec=spec)

    async def process_with_repair(self, text: str, kind: SchemaKind = SchemaKind.SCORECARD) -> RepairOutcome:
        """Run the one-shot repair flow using the configured transport."""
        if self.transport is None:
            self.transport = OpenRouterChatTransport(self.config)
        orchestrator = RepairOrchestrator(self.transport.send_chat, config=self.config, log=self.log)
        outcome = await orchestrator.run(text, kind)
        if outcome.spec is not None and self.adapter is not None:
            if isinstance(outcome.spec, NormalizedContentTable):
                outcome.spec = self.adapter.filter_content_table(outcome.spec)
        return outcome

    # ------------------------------------------------------------------
    # Node -> placement
    # ------------------------------------------------------------------

    def place(
        self,
        node: Any,
        output_width: Optional[float] = None,
        output_height: float = 0.0,
        mode: PlacementMode = PlacementMode.LEFT,
        viewport_center: Optional[Point] = None,
    ) -> PlacementOutcome:
        """
        Place a new artifact next to the top-level ancestor of ``node``.

        Args:
            node: Selected scene node, or None for viewport placement.
            output_width: Artifact width (defaults to ``config.artifact_width``).
            output_height: Artifact height.
            mode: Placement mode relative to the anchor.
            viewport_center: Current viewport centre.
        """
        width = self.config.artifact_width if output_width is None else output_width
        options = PlacementOptions.from_config(self.config, mode)

        anchor_node = None
        anchor_rect = None
        if node is not None:
            anchor_node = self.anchor_resolver.top_level_ancestor(node)
            anchor_rect = self.anchor_resolver.resolve_bounds(anchor_node)

        result = self.placement_engine.place(
            anchor_rect, width, output_height, options, viewport_center
        )
        self.log.info(
            f"Placed {width:g}x{output_height:g} artifact at ({result.x:g}, {result.y:g}) "
            f"via {result.method.value}"
            + (f" ({result.reason})" if result.reason else "")
        )
        return PlacementOutcome(result=result, anchor_node=anchor_node, anchor_rect=anchor_rect)
