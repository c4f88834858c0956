"""Scorecard normalization."""

from typing import Any, Dict

from ..schemas.kinds import SCORE_MAX, SCORE_MIN
from ..schemas.models import NormalizedScorecard
from ..validation.checks import is_number
from .coerce import string_list, text


def clamp_score(value: Any) -> Any:
    """Clamp a score into [0, 100]; anything non-numeric becomes 0."""
    if not is_number(value):
        return SCORE_MIN
    return min(max(value, SCORE_MIN), SCORE_MAX)


def normalize_scorecard(spec: Dict[str, Any]) -> NormalizedScorecard:
    raw_score = spec["score"] if "score" in spec else spec.get("overallScore")
    return NormalizedScorecard(
        score=clamp_score(raw_score),
        summary=text(spec.get("summary")),
        wins=string_list(spec.get("wins")) or [],
        fixes=string_list(spec.get("fixes")) or [],
        checklist=string_list(spec.get("checklist")),
        notes=string_list(spec.get("notes")),
    )
