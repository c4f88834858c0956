"""Coercion helpers shared by the per-schema normalizers."""

import json
from typing import Any, Dict, List, Optional, Sequence, TypeVar

from ..validation.checks import in_domain, is_number, is_positive_number

T = TypeVar("T")


def as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def text(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def non_empty_text(value: Any, default: str) -> str:
    """``value`` when it is a string with visible content, else ``default``."""
    return value if isinstance(value, str) and value.strip() else default


def optional_text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def as_text(value: Any) -> str:
    """Render any JSON value as display text."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, ensure_ascii=False, sort_keys=True)


def string_list(value: Any) -> Optional[List[str]]:
    """Coerce an array to a list of strings; None when ``value`` is not an array."""
    if not isinstance(value, list):
        return None
    return [as_text(v) for v in value]


def choice(value: Any, allowed: Sequence[T], default: T) -> T:
    return value if in_domain(value, allowed) else default


def optional_choice(value: Any, allowed: Sequence[T]) -> Optional[T]:
    return value if in_domain(value, allowed) else None


def number(value: Any, default: float) -> float:
    return value if is_number(value) else default


def positive_number(value: Any, default: Any) -> Any:
    return value if is_positive_number(value) else default


class TruncationTracker:
    """
    Applies array ceilings and remembers the first truncation notice.

    Seeded with any notice already present on the input, so normalizing an
    already-normalized value never replaces or duplicates its notice.
    """

    def __init__(self, existing: Any = None):
        self.notice: Optional[str] = existing if isinstance(existing, str) and existing else None

    def cap(self, items: List[Any], ceiling: int, notice: str) -> List[Any]:
        if len(items) <= ceiling:
            return items
        if self.notice is None:
            self.notice = notice
        return items[:ceiling]
