"""
Normalized artifact models.

These are the fully-populated, bounded structures the normalizer
produces and the renderer consumes. Attributes are snake_case; ``to_dict``
returns the camelCase wire shape with absent optional fields omitted, so
``normalize(spec.to_dict(), kind) == spec`` for any normalized ``spec``.
"""

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Dict, List, Optional, Union

from .kinds import (
    CONTENT_TABLE_TYPE,
    CONTENT_TABLE_VERSION,
    DESIGN_SPEC_TYPE,
    DESIGN_SPEC_VERSION,
    DISCOVERY_TYPE,
    DISCOVERY_VERSION,
    SchemaKind,
)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _to_wire(value: Any) -> Any:
    if isinstance(value, WireModel):
        return value.to_dict()
    if isinstance(value, list):
        return [_to_wire(v) for v in value]
    if isinstance(value, dict):
        return {k: _to_wire(v) for k, v in value.items()}
    return value


class WireModel:
    """Mixin giving dataclasses a camelCase ``to_dict``.

    A field can override its wire name with ``metadata={"wire": ...}``.
    """

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            out[f.metadata.get("wire", _camel(f.name))] = _to_wire(value)
        return out


# ============================================================================
# Scorecard
# ============================================================================

@dataclass
class NormalizedScorecard(WireModel):
    """Design critique scorecard."""
    KIND: ClassVar[SchemaKind] = SchemaKind.SCORECARD

    score: Union[int, float] = 0
    summary: str = ""
    wins: List[str] = field(default_factory=list)
    fixes: List[str] = field(default_factory=list)
    checklist: Optional[List[str]] = None
    notes: Optional[List[str]] = None

    @property
    def truncation_notice(self) -> Optional[str]:
        return None


# ============================================================================
# Deceptive report
# ============================================================================

@dataclass
class DeceptiveFinding(WireModel):
    category: str
    severity: str
    description: str
    why_deceptive: str = ""
    user_harm: str = ""
    remediation: str = ""
    evidence: Optional[str] = None


@dataclass
class DimensionCheck(WireModel):
    dimension: str
    passed: bool  # True means no issues found in this dimension


@dataclass
class NormalizedDeceptiveReport(WireModel):
    """
    Dark and deceptive UX report.

    Attributes:
        summary: One-paragraph overview.
        overall_severity: None, Low, Medium or High.
        findings: Individual deceptive patterns found.
        dimensions_checklist: Exactly one entry per required dimension,
            in canonical order.
    """
    KIND: ClassVar[SchemaKind] = SchemaKind.DECEPTIVE_REPORT

    summary: str = ""
    overall_severity: str = "None"
    findings: List[DeceptiveFinding] = field(default_factory=list)
    dimensions_checklist: List[DimensionCheck] = field(default_factory=list)

    @property
    def truncation_notice(self) -> Optional[str]:
        return None


# ============================================================================
# DesignSpecV1
# ============================================================================

@dataclass
class DesignIntent(WireModel):
    """Structured reading of what the user asked for."""
    app_type: Optional[str] = None
    tone: Optional[str] = None
    keywords: Optional[List[str]] = None
    primary_color: Optional[str] = None
    accent_colors: Optional[List[str]] = None
    avoid_colors: Optional[List[str]] = None
    theme: Optional[str] = None
    fidelity: Optional[str] = None
    density: Optional[str] = None
    screen_archetypes: Optional[List[str]] = None


@dataclass
class DesignMeta(WireModel):
    title: str
    user_request: Optional[str] = None
    run_id: Optional[str] = None
    intent: Optional[DesignIntent] = None
    truncation_notice: Optional[str] = None


@dataclass
class DeviceSpec(WireModel):
    kind: str
    width: Union[int, float]
    height: Union[int, float]
    platform: Optional[str] = None


@dataclass
class RenderIntent(WireModel):
    fidelity: str
    style_keywords: Optional[List[str]] = None
    brand_tone: Optional[str] = None
    density: Optional[str] = None


@dataclass
class ScreenLayout(WireModel):
    direction: str
    padding: Union[int, float, Dict[str, Union[int, float]]]
    gap: Union[int, float]


@dataclass
class DesignBlock:
    """One renderable block. ``props`` holds the type-specific fields."""
    type: str
    props: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": self.type}
        out.update(_to_wire(self.props))
        return out


@dataclass
class Screen(WireModel):
    name: str
    layout: ScreenLayout
    blocks: List[DesignBlock] = field(default_factory=list)


@dataclass
class NormalizedDesignSpec:
    """DesignSpecV1: a small set of screens to render onto the canvas."""
    KIND: ClassVar[SchemaKind] = SchemaKind.DESIGN_SPEC_V1

    meta: DesignMeta
    device: DeviceSpec
    render_intent: RenderIntent
    screens: List[Screen] = field(default_factory=list)

    @property
    def truncation_notice(self) -> Optional[str]:
        return self.meta.truncation_notice

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": DESIGN_SPEC_TYPE,
            "version": DESIGN_SPEC_VERSION,
            "meta": self.meta.to_dict(),
            "canvas": {"device": self.device.to_dict()},
            "render": {"intent": self.render_intent.to_dict()},
            "screens": [s.to_dict() for s in self.screens],
        }


# ============================================================================
# DiscoverySpecV1
# ============================================================================

@dataclass
class DiscoveryMeta(WireModel):
    title: str
    user_request: Optional[str] = None
    run_id: Optional[str] = None
    truncation_notice: Optional[str] = None


@dataclass
class ProblemFrame(WireModel):
    what: str = ""
    who: str = ""
    why: str = ""
    success: str = ""


@dataclass
class RiskItem(WireModel):
    id: str
    type: str
    description: str
    impact: Optional[str] = None


@dataclass
class HypothesisItem(WireModel):
    id: str
    hypothesis: str
    experiment: Optional[str] = None
    status: Optional[str] = None


@dataclass
class DecisionEntry(WireModel):
    timestamp: str
    decision: str
    rationale: Optional[str] = None
    context: Optional[str] = None


@dataclass
class AsyncTask(WireModel):
    owner_role: str
    task: str
    due_in_hours: Optional[Union[int, float]] = None


@dataclass
class NormalizedDiscoverySpec(WireModel):
    """
    DiscoverySpecV1: a framed problem with risks, hypotheses and follow-ups.

    Attributes:
        meta: Title (at most 48 characters) and traceability fields.
        problem_frame: What, who, why and success criteria.
        risks_and_assumptions: At most 12 entries.
        hypotheses_and_experiments: At most 12 entries.
        decision_log: At most 20 entries.
        async_tasks: At most 6 entries.
    """
    KIND: ClassVar[SchemaKind] = SchemaKind.DISCOVERY_SPEC_V1

    meta: DiscoveryMeta
    problem_frame: ProblemFrame = field(default_factory=ProblemFrame)
    risks_and_assumptions: List[RiskItem] = field(default_factory=list)
    hypotheses_and_experiments: List[HypothesisItem] = field(default_factory=list)
    decision_log: List[DecisionEntry] = field(default_factory=list)
    async_tasks: List[AsyncTask] = field(default_factory=list)

    @property
    def truncation_notice(self) -> Optional[str]:
        return self.meta.truncation_notice

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": DISCOVERY_TYPE, "version": DISCOVERY_VERSION}
        out.update(super().to_dict())
        return out


# ============================================================================
# ContentTableV1
# ============================================================================

@dataclass
class TableSource(WireModel):
    page_id: str
    page_name: str
    selection_node_id: str
    selection_name: str


@dataclass
class TableMeta(WireModel):
    content_model: str
    content_stage: str
    ada_status: str
    legal_status: str
    last_updated: str
    version: str
    root_node_id: str
    root_node_name: str
    root_node_url: str


@dataclass
class ComponentRef(WireModel):
    kind: str
    name: str
    key: Optional[str] = None
    variant_properties: Optional[Dict[str, str]] = None


@dataclass
class FieldRef(WireModel):
    label: str
    path: str


@dataclass
class ItemContent(WireModel):
    type: str
    value: str


@dataclass
class ItemMeta(WireModel):
    visible: bool = True
    locked: bool = False


@dataclass
class ContentItem(WireModel):
    id: str
    node_id: str
    node_url: str
    component: ComponentRef
    field: FieldRef
    content: ItemContent
    meta: ItemMeta
    text_layer_name: Optional[str] = None
    notes: Optional[str] = None
    content_key: Optional[str] = None
    jira_ticket: Optional[str] = None
    ada_notes: Optional[str] = None
    error_message: Optional[str] = None
    design_system: Optional[Dict[str, Any]] = None


@dataclass
class NormalizedContentTable(WireModel):
    """Universal content table: one row per text layer in the selection."""
    KIND: ClassVar[SchemaKind] = SchemaKind.CONTENT_TABLE_V1

    generated_at_iso: str = field(metadata={"wire": "generatedAtISO"})
    source: TableSource
    meta: TableMeta
    items: List[ContentItem] = field(default_factory=list)
    design_system_by_node_id: Optional[Dict[str, Any]] = None

    @property
    def truncation_notice(self) -> Optional[str]:
        return None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": CONTENT_TABLE_TYPE, "version": CONTENT_TABLE_VERSION}
        out.update(super().to_dict())
        return out


NormalizedSpec = Union[
    NormalizedScorecard,
    NormalizedDeceptiveReport,
    NormalizedDesignSpec,
    NormalizedDiscoverySpec,
    NormalizedContentTable,
]
