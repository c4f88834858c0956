"""Deceptive report rules: severities, findings and the 10-dimension checklist."""

from typing import Any, Set

from ..schemas.kinds import (
    DECEPTIVE_REPORT_KEYS,
    FINDING_SEVERITIES,
    FINDING_TEXT_FIELDS,
    OVERALL_SEVERITIES,
    REQUIRED_DIMENSIONS,
)
from .checks import (
    check_enum,
    check_optional_text,
    check_required_text,
    check_top_level,
    describe,
    warn_unknown_keys,
)
from .validation_result import ValidationResult


def _validate_findings(findings: Any, result: ValidationResult) -> None:
    if not isinstance(findings, list):
        result.error(f"findings must be an array (got {describe(findings)})")
        return
    if not findings:
        result.note("findings is empty (no deceptive patterns reported)")

    for i, finding in enumerate(findings):
        path = f"findings[{i}]"
        if not isinstance(finding, dict):
            result.error(f"{path} must be an object (got {describe(finding)})")
            continue
        for name in FINDING_TEXT_FIELDS:
            check_required_text(finding, name, f"{path}.{name}", result)
        check_enum(finding, "severity", f"{path}.severity", FINDING_SEVERITIES, result)
        check_optional_text(finding, "evidence", f"{path}.evidence", result)


def _validate_checklist(checklist: Any, result: ValidationResult) -> None:
    if not isinstance(checklist, list):
        result.error(f"dimensionsChecklist must be an array (got {describe(checklist)})")
        return

    expected = len(REQUIRED_DIMENSIONS)
    if len(checklist) != expected:
        result.error(
            f"dimensionsChecklist must contain exactly {expected} entries (got {len(checklist)})"
        )

    seen: Set[str] = set()
    for i, entry in enumerate(checklist):
        path = f"dimensionsChecklist[{i}]"
        if not isinstance(entry, dict):
            result.error(f"{path} must be an object (got {describe(entry)})")
            continue
        dimension = entry.get("dimension")
        if not isinstance(dimension, str):
            result.error(f"{path}.dimension is missing or invalid")
        elif dimension not in REQUIRED_DIMENSIONS:
            result.error(f"{path}.dimension '{dimension}' is not a recognized dimension")
        elif dimension in seen:
            result.error(f"{path}.dimension '{dimension}' is duplicated")
        else:
            seen.add(dimension)
        if not isinstance(entry.get("passed"), bool):
            result.error(f"{path}.passed must be a boolean")

    missing = [d for d in REQUIRED_DIMENSIONS if d not in seen]
    if missing:
        result.error(f"dimensionsChecklist is missing dimensions: {', '.join(missing)}")


def validate_deceptive_report(value: Any, result: ValidationResult) -> None:
    spec = check_top_level(value, result)
    if spec is None:
        return

    check_required_text(spec, "summary", "summary", result, non_empty=False)
    check_enum(spec, "overallSeverity", "overallSeverity", OVERALL_SEVERITIES, result)
    _validate_findings(spec.get("findings"), result)
    _validate_checklist(spec.get("dimensionsChecklist"), result)
    warn_unknown_keys(spec, DECEPTIVE_REPORT_KEYS, result)
