"""Schema kinds, value domains and normalized artifact models."""

from .kinds import REQUIRED_DIMENSIONS, SchemaKind
from .models import (
    AsyncTask,
    ComponentRef,
    ContentItem,
    DeceptiveFinding,
    DecisionEntry,
    DesignBlock,
    DesignIntent,
    DesignMeta,
    DeviceSpec,
    DimensionCheck,
    DiscoveryMeta,
    FieldRef,
    HypothesisItem,
    ItemContent,
    ItemMeta,
    NormalizedContentTable,
    NormalizedDeceptiveReport,
    NormalizedDesignSpec,
    NormalizedDiscoverySpec,
    NormalizedScorecard,
    NormalizedSpec,
    ProblemFrame,
    RenderIntent,
    RiskItem,
    Screen,
    ScreenLayout,
    TableMeta,
    TableSource,
)

__all__ = [
    "REQUIRED_DIMENSIONS",
    "SchemaKind",
    "AsyncTask",
    "ComponentRef",
    "ContentItem",
    "DeceptiveFinding",
    "DecisionEntry",
    "DesignBlock",
    "DesignIntent",
    "DesignMeta",
    "DeviceSpec",
    "DimensionCheck",
    "DiscoveryMeta",
    "FieldRef",
    "HypothesisItem",
    "ItemContent",
    "ItemMeta",
    "NormalizedContentTable",
    "NormalizedDeceptiveReport",
    "NormalizedDesignSpec",
    "NormalizedDiscoverySpec",
    "NormalizedScorecard",
    "NormalizedSpec",
    "ProblemFrame",
    "RenderIntent",
    "RiskItem",
    "Screen",
    "ScreenLayout",
    "TableMeta",
    "TableSource",
]
