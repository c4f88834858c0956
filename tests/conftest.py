"""
Shared pytest fixtures for the artifact pipeline tests.

Provides a mock scene graph and one valid payload per schema kind.
"""

import copy
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

# Add repository root to path
REPO_ROOT = Path(__file__).parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from artifact_core.placement.artifact_registry import artifact_tags  # noqa: E402


# ============================================================================
# Mock scene graph
# ============================================================================

@dataclass(eq=False)
class MockNode:
    """Mock scene node exposing only what a test sets."""
    name: str = "node"
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    parent: Optional["MockNode"] = None
    is_root: bool = False
    absolute_bounding_box: Any = None
    absolute_render_bounds: Any = None
    absolute_transform: Any = None
    children: List["MockNode"] = field(default_factory=list)
    plugin_data: Dict[str, str] = field(default_factory=dict)

    def add(self, child: "MockNode") -> "MockNode":
        child.parent = self
        self.children.append(child)
        return child


def make_artifact(name: str, artifact_type: str, version: str) -> MockNode:
    return MockNode(name=name, plugin_data=artifact_tags(artifact_type, version))


@pytest.fixture
def page():
    """Document root."""
    return MockNode(name="page", is_root=True)


# ============================================================================
# Valid payloads
# ============================================================================

SCORECARD = {
    "score": 85,
    "summary": "Clear hierarchy, weak contrast.",
    "wins": ["Consistent spacing", "Readable type"],
    "fixes": ["Increase button contrast"],
}

DECEPTIVE_DIMENSIONS = [
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
]

DECEPTIVE_REPORT = {
    "summary": "One nagging pattern found.",
    "overallSeverity": "Medium",
    "findings": [
        {
            "category": "Nagging",
            "severity": "Medium",
            "description": "Rating prompt reappears every session.",
            "whyDeceptive": "Wears users down until they comply.",
            "userHarm": "Interrupts core tasks.",
            "remediation": "Ask once and respect dismissal.",
        }
    ],
    "dimensionsChecklist": [
        {"dimension": d, "passed": d != "Nagging"} for d in DECEPTIVE_DIMENSIONS
    ],
}

DESIGN_SPEC = {
    "type": "designScreens",
    "version": 1,
    "meta": {
        "title": "Meditation App",
        "userRequest": "Design a calm meditation app",
        "intent": {"appType": "mindfulness", "tone": "calm", "theme": "light"},
    },
    "canvas": {"device": {"kind": "mobile", "width": 375, "height": 812}},
    "render": {"intent": {"fidelity": "medium"}},
    "screens": [
        {
            "name": "Home",
            "layout": {"direction": "vertical", "padding": 16, "gap": 12},
            "blocks": [
                {"type": "heading", "text": "Breathe", "level": 1},
                {"type": "bodyText", "text": "Take a minute for yourself."},
                {"type": "button", "text": "Start", "variant": "primary"},
            ],
        }
    ],
}

DISCOVERY_SPEC = {
    "type": "discovery",
    "version": 1,
    "meta": {"title": "Checkout drop-off", "userRequest": "Why do users abandon checkout?"},
    "problemFrame": {
        "what": "Users abandon checkout at the payment step",
        "who": "First-time mobile buyers",
        "why": "Lost revenue",
        "success": "Abandonment below 20%",
    },
    "risksAndAssumptions": [
        {"id": "risk-1", "type": "risk", "description": "Payment errors", "impact": "high"},
    ],
    "hypothesesAndExperiments": [
        {"id": "hyp-1", "hypothesis": "Guest checkout reduces drop-off", "status": "untested"},
    ],
    "decisionLog": [],
    "asyncTasks": [{"ownerRole": "Research", "task": "Interview 5 buyers", "dueInHours": 48}],
}

CONTENT_TABLE = {
    "type": "universal-content-table",
    "version": 1,
    "generatedAtISO": "2026-01-15T10:00:00Z",
    "source": {
        "pageId": "0:1",
        "pageName": "Checkout",
        "selectionNodeId": "12:34",
        "selectionName": "Payment Form",
    },
    "meta": {
        "contentModel": "Universal v2",
        "contentStage": "Draft",
        "adaStatus": "⏳ Pending",
        "legalStatus": "⏳ Pending",
        "lastUpdated": "2026-01-15T10:00:00Z",
        "version": "v1",
        "rootNodeId": "12:34",
        "rootNodeName": "Payment Form",
        "rootNodeUrl": "https://example.com/file?node-id=12-34",
    },
    "items": [
        {
            "id": "12:40",
            "nodeId": "12:40",
            "nodeUrl": "https://example.com/file?node-id=12-40",
            "component": {"kind": "instance", "name": "Button", "key": "btn-key"},
            "field": {"label": "CTA", "path": "Payment Form > CTA"},
            "content": {"type": "text", "value": "Pay now"},
            "meta": {"visible": True, "locked": False},
        }
    ],
}


@pytest.fixture
def scorecard_payload():
    return copy.deepcopy(SCORECARD)


@pytest.fixture
def deceptive_payload():
    return copy.deepcopy(DECEPTIVE_REPORT)


@pytest.fixture
def design_payload():
    return copy.deepcopy(DESIGN_SPEC)


@pytest.fixture
def discovery_payload():
    return copy.deepcopy(DISCOVERY_SPEC)


@pytest.fixture
def content_table_payload():
    return copy.deepcopy(CONTENT_TABLE)


@pytest.fixture
def payload_for():
    """Fresh copy of the valid payload for a schema kind."""
    from artifact_core.schemas.kinds import SchemaKind

    payloads = {
        SchemaKind.SCORECARD: SCORECARD,
        SchemaKind.DECEPTIVE_REPORT: DECEPTIVE_REPORT,
        SchemaKind.DESIGN_SPEC_V1: DESIGN_SPEC,
        SchemaKind.DISCOVERY_SPEC_V1: DISCOVERY_SPEC,
        SchemaKind.CONTENT_TABLE_V1: CONTENT_TABLE,
    }

    def _get(kind):
        return copy.deepcopy(payloads[kind])

    return _get
