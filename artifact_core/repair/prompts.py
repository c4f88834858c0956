"""
Prompt templates for JSON-only responses and one-shot repair.

Only schemas with a repair template can be repaired; asking for any
other kind is a programming error.
"""

from typing import Dict, List

from ..schemas.kinds import SchemaKind

Message = Dict[str, str]

JSON_ONLY_SYSTEM = (
    "Return ONLY valid JSON. No prose. No markdown. No code fences. "
    "Output must be a single JSON object."
)

SCORECARD_SCHEMA = """{
  "score": number (0-100),
  "summary": string,
  "wins": string[],
  "fixes": string[],
  "checklist": string[] (optional),
  "notes": string[] (optional)
}"""

DESIGN_SPEC_SCHEMA = """{
  "type": "designScreens",
  "version": 1,
  "meta": {"title": string, "userRequest": string (optional)},
  "canvas": {"device": {"kind": "mobile" | "tablet" | "desktop", "width": number, "height": number}},
  "render": {"intent": {"fidelity": "wireframe" | "medium" | "hi" | "creative"}},
  "screens": [{"name": string, "blocks": [{"type": "heading" | "bodyText" | "button" | "input" | "card" | "spacer" | "image", ...}]}] (1-5 screens)
}"""

REPAIR_TEMPLATES: Dict[SchemaKind, str] = {
    SchemaKind.SCORECARD: (
        "Convert the following critique into ONLY valid JSON with the required schema. "
        "Return JSON only, no other text.\n\n"
        f"Required schema:\n{SCORECARD_SCHEMA}\n\n"
        "Critique text:\n{original}"
    ),
    SchemaKind.DESIGN_SPEC_V1: (
        "Convert the following design description into ONLY valid JSON matching the "
        "DesignSpecV1 schema. Return JSON only, no other text.\n\n"
        f"Required schema:\n{DESIGN_SPEC_SCHEMA}\n\n"
        "Design description:\n{original}"
    ),
}

JSON_ONLY_REMINDERS: Dict[SchemaKind, str] = {
    SchemaKind.SCORECARD: f"Respond with ONLY the JSON object, using this schema:\n{SCORECARD_SCHEMA}",
    SchemaKind.DESIGN_SPEC_V1: f"Respond with ONLY the JSON object, using this schema:\n{DESIGN_SPEC_SCHEMA}",
}


def supports_repair(kind: SchemaKind) -> bool:
    return SchemaKind(kind) in REPAIR_TEMPLATES


def build_repair_messages(kind: SchemaKind, original_text: str, cap: int = 2000) -> List[Message]:
    """
    Build the single repair re-prompt.

    Args:
        kind: Target schema; must have a repair template.
        original_text: The model's original response.
        cap: Maximum characters of ``original_text`` to include.

    Raises:
        ValueError: If ``kind`` has no repair template.
    """
    kind = SchemaKind(kind)
    if kind not in REPAIR_TEMPLATES:
        supported = ", ".join(k.value for k in REPAIR_TEMPLATES)
        raise ValueError(f"No repair template for {kind.value} (supported: {supported})")

    return [
        {"role": "system", "content": JSON_ONLY_SYSTEM},
        {"role": "user", "content": REPAIR_TEMPLATES[kind].replace("{original}", original_text[:cap])},
    ]


def enforce_json_only(messages: List[Message], kind: SchemaKind) -> List[Message]:
    """Return a copy of ``messages`` with a JSON-only reminder appended."""
    reminder = JSON_ONLY_REMINDERS.get(SchemaKind(kind), JSON_ONLY_SYSTEM)
    return [dict(m) for m in messages] + [{"role": "user", "content": reminder}]
