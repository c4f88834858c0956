"""
Deceptive report normalization.

The dimensions checklist is rebuilt in canonical order with exactly one
entry per required dimension. A dimension the model left out is marked
as passed unless some finding's category names it.
"""

from typing import Any, Dict, List

from ..schemas.kinds import (
    DEFAULT_FINDING_SEVERITY,
    FINDING_SEVERITIES,
    OVERALL_SEVERITIES,
    REQUIRED_DIMENSIONS,
    SEVERITY_RANK,
)
from ..schemas.models import DeceptiveFinding, DimensionCheck, NormalizedDeceptiveReport
from .coerce import as_list, choice, optional_text, text


def _normalize_findings(raw: Any) -> List[DeceptiveFinding]:
    findings = []
    for item in as_list(raw):
        if not isinstance(item, dict):
            continue
        description = item.get("description")
        if not isinstance(description, str) or not description.strip():
            continue
        findings.append(
            DeceptiveFinding(
                category=text(item.get("category")),
                severity=choice(item.get("severity"), FINDING_SEVERITIES, DEFAULT_FINDING_SEVERITY),
                description=description,
                why_deceptive=text(item.get("whyDeceptive")),
                user_harm=text(item.get("userHarm")),
                remediation=text(item.get("remediation")),
                evidence=optional_text(item.get("evidence")),
            )
        )
    return findings


def _category_names(category: str, dimension: str) -> bool:
    return dimension.lower() in category.lower()


def _normalize_checklist(raw: Any, findings: List[DeceptiveFinding]) -> List[DimensionCheck]:
    reported: Dict[str, bool] = {}
    for entry in as_list(raw):
        if not isinstance(entry, dict):
            continue
        dimension = entry.get("dimension")
        passed = entry.get("passed")
        if dimension in REQUIRED_DIMENSIONS and isinstance(passed, bool):
            reported.setdefault(dimension, passed)

    checklist = []
    for dimension in REQUIRED_DIMENSIONS:
        if dimension in reported:
            passed = reported[dimension]
        else:
            passed = not any(_category_names(f.category, dimension) for f in findings)
        checklist.append(DimensionCheck(dimension=dimension, passed=passed))
    return checklist


def _overall_severity(raw: Any, findings: List[DeceptiveFinding]) -> str:
    if raw in OVERALL_SEVERITIES:
        return raw
    if not findings:
        return "None"
    return max((f.severity for f in findings), key=lambda s: SEVERITY_RANK[s])


def normalize_deceptive_report(spec: Dict[str, Any]) -> NormalizedDeceptiveReport:
    findings = _normalize_findings(spec.get("findings"))
    return NormalizedDeceptiveReport(
        summary=text(spec.get("summary")),
        overall_severity=_overall_severity(spec.get("overallSeverity"), findings),
        findings=findings,
        dimensions_checklist=_normalize_checklist(spec.get("dimensionsChecklist"), findings),
    )
