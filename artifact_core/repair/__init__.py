"""One-shot repair of non-conforming model responses."""

from .orchestrator import NO_JSON_FOUND, RepairOrchestrator, RepairOutcome, RepairState
from .prompts import (
    JSON_ONLY_SYSTEM,
    REPAIR_TEMPLATES,
    build_repair_messages,
    enforce_json_only,
    supports_repair,
)

__all__ = [
    "JSON_ONLY_SYSTEM",
    "NO_JSON_FOUND",
    "REPAIR_TEMPLATES",
    "RepairOrchestrator",
    "RepairOutcome",
    "RepairState",
    "build_repair_messages",
    "enforce_json_only",
    "supports_repair",
]
