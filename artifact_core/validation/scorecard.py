"""Scorecard rules: score in [0, 100], wins and fixes arrays."""

from typing import Any

from ..schemas.kinds import SCORE_MAX, SCORE_MIN, SCORECARD_KEYS
from .checks import (
    check_optional_text,
    check_string_array,
    check_top_level,
    is_number,
    warn_unknown_keys,
)
from .validation_result import ValidationResult


def validate_scorecard(value: Any, result: ValidationResult) -> None:
    spec = check_top_level(value, result)
    if spec is None:
        return

    # overallScore is accepted when score is absent
    score = spec["score"] if "score" in spec else spec.get("overallScore")
    if not is_number(score):
        result.error("score is missing or not a number")
    elif score < SCORE_MIN or score > SCORE_MAX:
        result.error(f"score must be between {SCORE_MIN} and {SCORE_MAX} (got {score})")

    check_optional_text(spec, "summary", "summary", result)
    check_string_array(spec, "wins", "wins", result, required=True)
    check_string_array(spec, "fixes", "fixes", result, required=True)
    check_string_array(spec, "checklist", "checklist", result)
    check_string_array(spec, "notes", "notes", result)

    if "summary" not in spec:
        result.note("summary is missing (defaults to empty)")

    warn_unknown_keys(spec, SCORECARD_KEYS, result)
