"""
Schema kinds and their closed value domains.

Every schema the pipeline understands is a member of ``SchemaKind``.
Validator and normalizer dispatch through tables keyed by this enum, and
both read their ceilings, enumerations and defaults from this module so
the two never drift apart.
"""

from enum import Enum
from typing import Dict, Tuple


class SchemaKind(str, Enum):
    """Closed set of artifact schemas."""
    SCORECARD = "scorecard"
    DECEPTIVE_REPORT = "deceptive_report"
    DESIGN_SPEC_V1 = "design_spec_v1"
    DISCOVERY_SPEC_V1 = "discovery_spec_v1"
    CONTENT_TABLE_V1 = "content_table_v1"


# ============================================================================
# Scorecard
# ============================================================================

SCORE_MIN = 0
SCORE_MAX = 100
SCORECARD_KEYS = ("score", "overallScore", "summary", "wins", "fixes", "checklist", "notes")

# ============================================================================
# Deceptive report
# ============================================================================

OVERALL_SEVERITIES = ("None", "Low", "Medium", "High")
FINDING_SEVERITIES = ("Low", "Medium", "High")
DEFAULT_FINDING_SEVERITY = "Medium"
SEVERITY_RANK: Dict[str, int] = {"None": 0, "Low": 1, "Medium": 2, "High": 3}

REQUIRED_DIMENSIONS: Tuple[str, ...] = (
    "Forced Action",
    "Nagging",
    "Obstruction",
    "Sneaking",
    "Interface Interference",
    "False Urgency/Scarcity",
    "Confirmshaming",
    "Trick Questions",
    "Hidden Subscription/Roach Motel",
    "Misleading Defaults",
)

DECEPTIVE_REPORT_KEYS = ("summary", "overallSeverity", "findings", "dimensionsChecklist")
FINDING_TEXT_FIELDS = ("category", "description", "whyDeceptive", "userHarm", "remediation")

# ============================================================================
# DesignSpecV1
# ============================================================================

DESIGN_SPEC_TYPE = "designScreens"
DESIGN_SPEC_VERSION = 1
DESIGN_SPEC_KEYS = ("type", "version", "meta", "canvas", "render", "screens")

MAX_SCREENS = 5
DEFAULT_DESIGN_TITLE = "Screens"
SCREENS_TRUNCATION_NOTICE = f"Generated {MAX_SCREENS} screens. Ask for more to continue."

DEVICE_KINDS = ("mobile", "tablet", "desktop")
DEFAULT_DEVICE_KIND = "mobile"
DEVICE_DIMENSIONS: Dict[str, Tuple[int, int]] = {
    "mobile": (375, 812),
    "tablet": (768, 1024),
    "desktop": (1920, 1080),
}
PLATFORMS = ("ios", "android", "web", "windows", "macos")

FIDELITY_LEVELS = ("wireframe", "medium", "hi", "creative")
DEFAULT_FIDELITY = "medium"
DENSITIES = ("compact", "comfortable", "spacious")
THEMES = ("light", "dark")

LAYOUT_DIRECTIONS = ("vertical", "horizontal")
DEFAULT_LAYOUT_DIRECTION = "vertical"
DEFAULT_LAYOUT_PADDING = 16
DEFAULT_LAYOUT_GAP = 12
PADDING_SIDES = ("top", "right", "bottom", "left")

BLOCK_TYPES = ("heading", "bodyText", "button", "input", "card", "spacer", "image")
HEADING_LEVELS = (1, 2, 3)
DEFAULT_HEADING_LEVEL = 1
BUTTON_VARIANTS = ("primary", "secondary", "tertiary")
DEFAULT_BUTTON_VARIANT = "primary"
INPUT_TYPES = ("text", "email", "password")
DEFAULT_INPUT_TYPE = "text"
DEFAULT_SPACER_HEIGHT = 16

# ============================================================================
# DiscoverySpecV1
# ============================================================================

DISCOVERY_TYPE = "discovery"
DISCOVERY_VERSION = 1
DISCOVERY_KEYS = (
    "type",
    "version",
    "meta",
    "problemFrame",
    "risksAndAssumptions",
    "hypothesesAndExperiments",
    "decisionLog",
    "asyncTasks",
)

MAX_TITLE_LENGTH = 48
TITLE_KEEP_CHARS = MAX_TITLE_LENGTH - 3
DEFAULT_DISCOVERY_TITLE = "Discovery Session"
PROBLEM_FRAME_FIELDS = ("what", "who", "why", "success")

MAX_RISKS = 12
MAX_HYPOTHESES = 12
MAX_DECISIONS = 20
MAX_ASYNC_TASKS = 6
DISCOVERY_TRUNCATION_NOTICE = "Generated maximum items. Run again with narrower scope for more."

RISK_TYPES = ("risk", "assumption")
DEFAULT_RISK_TYPE = "risk"
IMPACT_LEVELS = ("high", "medium", "low")
HYPOTHESIS_STATUSES = ("untested", "testing", "validated", "invalidated")
OWNER_ROLES = ("Design", "Product", "Dev", "Research", "Analytics", "Other")
DEFAULT_OWNER_ROLE = "Other"

# ============================================================================
# ContentTableV1
# ============================================================================

CONTENT_TABLE_TYPE = "universal-content-table"
CONTENT_TABLE_VERSION = 1
CONTENT_TABLE_KEYS = (
    "type",
    "version",
    "generatedAtISO",
    "source",
    "meta",
    "items",
    "designSystemByNodeId",
)

SOURCE_FIELDS = ("pageId", "pageName", "selectionNodeId", "selectionName")
TABLE_META_FIELDS = (
    "contentModel",
    "contentStage",
    "adaStatus",
    "legalStatus",
    "lastUpdated",
    "version",
    "rootNodeId",
    "rootNodeName",
    "rootNodeUrl",
)
ITEM_REQUIRED_FIELDS = ("id", "nodeId", "nodeUrl", "component", "field", "content", "meta")
ITEM_OPTIONAL_TEXT_FIELDS = (
    "textLayerName",
    "notes",
    "contentKey",
    "jiraTicket",
    "adaNotes",
    "errorMessage",
)

COMPONENT_KINDS = ("component", "componentSet", "instance", "custom")
DEFAULT_COMPONENT_KIND = "custom"
DEFAULT_COMPONENT_NAME = "Unknown Component"
DEFAULT_FIELD_LABEL = "Unknown Field"
DEFAULT_PAGE_NAME = "Unknown Page"
DEFAULT_SELECTION_NAME = "Unknown Selection"
DEFAULT_CONTENT_MODEL = "Universal v2"
DEFAULT_CONTENT_STAGE = "Draft"
DEFAULT_REVIEW_STATUS = "⏳ Pending"
DEFAULT_TABLE_VERSION = "v1"
