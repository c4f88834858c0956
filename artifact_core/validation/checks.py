"""Shared predicates and message builders for the schema rules."""

import math
from typing import Any, Iterable, Optional, Sequence

from .validation_result import ValidationResult


def describe(value: Any) -> str:
    """JSON type name of ``value`` for diagnostics."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def is_number(value: Any) -> bool:
    """True for ints and finite floats. Booleans are not numbers."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    # JSON integers are unbounded; math.isfinite would overflow on huge ones
    if isinstance(value, int):
        return True
    return math.isfinite(value)


def is_coordinate(value: Any) -> bool:
    """True for numbers that convert to a finite float (canvas geometry)."""
    if not is_number(value):
        return False
    try:
        return math.isfinite(float(value))
    except OverflowError:
        return False


def is_positive_number(value: Any) -> bool:
    return is_number(value) and value > 0


def is_non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def one_of_message(path: str, allowed: Sequence[Any], value: Any) -> str:
    choices = ", ".join(str(a) for a in allowed)
    return f"{path} must be one of: {choices} (got {value!r})"


def in_domain(value: Any, allowed: Sequence[Any]) -> bool:
    # 1 == True in Python, so booleans never match a numeric domain
    if isinstance(value, bool):
        return False
    return value in allowed


def check_top_level(value: Any, result: ValidationResult) -> Optional[dict]:
    """Return ``value`` if it is an object, else record an error and return None."""
    if isinstance(value, dict):
        return value
    result.error(f"Expected a JSON object at the top level (got {describe(value)})")
    return None


def check_discriminant(
    spec: dict, expected_type: str, expected_version: int, result: ValidationResult
) -> None:
    if spec.get("type") != expected_type:
        result.error(f"type must be '{expected_type}' (got {spec.get('type')!r})")
    version = spec.get("version")
    if isinstance(version, bool) or version != expected_version:
        result.error(f"version must be {expected_version} (got {version!r})")


def warn_unknown_keys(spec: dict, known: Iterable[str], result: ValidationResult) -> None:
    known_set = set(known)
    for key in spec:
        if key not in known_set:
            result.warn(f"Unknown top-level key: {key}")


def check_object(
    parent: dict, key: str, path: str, result: ValidationResult
) -> Optional[dict]:
    """Fetch a required sub-object, recording an error when it is absent or mistyped."""
    value = parent.get(key)
    if isinstance(value, dict):
        return value
    result.error(f"{path} is missing or invalid")
    return None


def check_required_text(
    obj: dict, key: str, path: str, result: ValidationResult, non_empty: bool = True
) -> None:
    value = obj.get(key)
    ok = is_non_empty_str(value) if non_empty else isinstance(value, str)
    if not ok:
        result.error(f"{path} is missing or invalid")


def check_optional_text(obj: dict, key: str, path: str, result: ValidationResult) -> None:
    if key in obj and obj[key] is not None and not isinstance(obj[key], str):
        result.error(f"{path} must be a string (got {describe(obj[key])})")


def check_enum(
    obj: dict,
    key: str,
    path: str,
    allowed: Sequence[Any],
    result: ValidationResult,
    required: bool = True,
) -> None:
    if key not in obj or obj[key] is None:
        if required:
            result.error(one_of_message(path, allowed, obj.get(key)))
        return
    if not in_domain(obj[key], allowed):
        result.error(one_of_message(path, allowed, obj[key]))


def check_string_array(
    obj: dict, key: str, path: str, result: ValidationResult, required: bool = False
) -> None:
    if key not in obj or obj[key] is None:
        if required:
            result.error(f"{path} must be an array")
        return
    value = obj[key]
    if not isinstance(value, list):
        result.error(f"{path} must be an array (got {describe(value)})")
        return
    for i, item in enumerate(value):
        if not isinstance(item, str):
            result.warn(f"{path}[{i}] is not a string (got {describe(item)}, will be converted)")


def check_ceiling(items: list, path: str, ceiling: int, result: ValidationResult) -> None:
    if len(items) > ceiling:
        result.warn(f"{path} array has {len(items)} items (will be truncated to {ceiling})")
