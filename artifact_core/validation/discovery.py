"""DiscoverySpecV1 rules: problem frame, bounded risk/hypothesis lists, follow-ups."""

from typing import Any

from ..schemas.kinds import (
    DISCOVERY_KEYS,
    DISCOVERY_TYPE,
    DISCOVERY_VERSION,
    HYPOTHESIS_STATUSES,
    IMPACT_LEVELS,
    MAX_ASYNC_TASKS,
    MAX_DECISIONS,
    MAX_HYPOTHESES,
    MAX_RISKS,
    MAX_TITLE_LENGTH,
    OWNER_ROLES,
    PROBLEM_FRAME_FIELDS,
    RISK_TYPES,
)
from .checks import (
    check_ceiling,
    check_discriminant,
    check_enum,
    check_object,
    check_optional_text,
    check_required_text,
    check_top_level,
    describe,
    is_positive_number,
    warn_unknown_keys,
)
from .validation_result import ValidationResult


def _validate_meta(spec: dict, result: ValidationResult) -> None:
    meta = check_object(spec, "meta", "meta", result)
    if meta is None:
        return
    check_required_text(meta, "title", "meta.title", result)
    title = meta.get("title")
    if isinstance(title, str) and len(title) > MAX_TITLE_LENGTH:
        result.warn(
            f"meta.title is {len(title)} characters (will be truncated to {MAX_TITLE_LENGTH})"
        )
    check_optional_text(meta, "userRequest", "meta.userRequest", result)
    check_optional_text(meta, "runId", "meta.runId", result)


def _validate_problem_frame(spec: dict, result: ValidationResult) -> None:
    frame = check_object(spec, "problemFrame", "problemFrame", result)
    if frame is None:
        return
    for name in PROBLEM_FRAME_FIELDS:
        check_required_text(frame, name, f"problemFrame.{name}", result)


def _bounded_list(spec: dict, key: str, ceiling: int, result: ValidationResult, required: bool):
    """Return the list under ``key`` after checking type and ceiling, or None."""
    if key not in spec or spec[key] is None:
        if required:
            result.error(f"{key} must be an array (got null)")
        return None
    items = spec[key]
    if not isinstance(items, list):
        result.error(f"{key} must be an array (got {describe(items)})")
        return None
    if not items and required:
        result.note(f"{key} is empty")
    check_ceiling(items, key, ceiling, result)
    return items


def _validate_risks(spec: dict, result: ValidationResult) -> None:
    items = _bounded_list(spec, "risksAndAssumptions", MAX_RISKS, result, required=True)
    for i, item in enumerate(items or []):
        path = f"risksAndAssumptions[{i}]"
        if not isinstance(item, dict):
            result.error(f"{path} must be an object (got {describe(item)})")
            continue
        check_required_text(item, "id", f"{path}.id", result, non_empty=False)
        check_enum(item, "type", f"{path}.type", RISK_TYPES, result)
        check_required_text(item, "description", f"{path}.description", result)
        check_enum(item, "impact", f"{path}.impact", IMPACT_LEVELS, result, required=False)


def _validate_hypotheses(spec: dict, result: ValidationResult) -> None:
    items = _bounded_list(spec, "hypothesesAndExperiments", MAX_HYPOTHESES, result, required=True)
    for i, item in enumerate(items or []):
        path = f"hypothesesAndExperiments[{i}]"
        if not isinstance(item, dict):
            result.error(f"{path} must be an object (got {describe(item)})")
            continue
        check_required_text(item, "id", f"{path}.id", result, non_empty=False)
        check_required_text(item, "hypothesis", f"{path}.hypothesis", result)
        check_optional_text(item, "experiment", f"{path}.experiment", result)
        check_enum(item, "status", f"{path}.status", HYPOTHESIS_STATUSES, result, required=False)


def _validate_decision_log(spec: dict, result: ValidationResult) -> None:
    items = _bounded_list(spec, "decisionLog", MAX_DECISIONS, result, required=False)
    for i, item in enumerate(items or []):
        path = f"decisionLog[{i}]"
        if not isinstance(item, dict):
            result.error(f"{path} must be an object (got {describe(item)})")
            continue
        check_required_text(item, "timestamp", f"{path}.timestamp", result, non_empty=False)
        check_required_text(item, "decision", f"{path}.decision", result)
        check_optional_text(item, "rationale", f"{path}.rationale", result)
        check_optional_text(item, "context", f"{path}.context", result)


def _validate_async_tasks(spec: dict, result: ValidationResult) -> None:
    items = _bounded_list(spec, "asyncTasks", MAX_ASYNC_TASKS, result, required=False)
    for i, item in enumerate(items or []):
        path = f"asyncTasks[{i}]"
        if not isinstance(item, dict):
            result.error(f"{path} must be an object (got {describe(item)})")
            continue
        check_enum(item, "ownerRole", f"{path}.ownerRole", OWNER_ROLES, result)
        check_required_text(item, "task", f"{path}.task", result)
        due = item.get("dueInHours")
        if due is not None and not is_positive_number(due):
            result.error(f"{path}.dueInHours must be a positive number (got {due!r})")


def validate_discovery(value: Any, result: ValidationResult) -> None:
    spec = check_top_level(value, result)
    if spec is None:
        return
    check_discriminant(spec, DISCOVERY_TYPE, DISCOVERY_VERSION, result)
    warn_unknown_keys(spec, DISCOVERY_KEYS, result)
    _validate_meta(spec, result)
    _validate_problem_frame(spec, result)
    _validate_risks(spec, result)
    _validate_hypotheses(spec, result)
    _validate_decision_log(spec, result)
    _validate_async_tasks(spec, result)
