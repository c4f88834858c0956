"""JSON candidate extraction from model output."""

from .text_extractor import (
    STRATEGY_BRACE,
    STRATEGY_DIRECT,
    STRATEGY_FENCE,
    ExtractionResult,
    decode_json,
    extract,
    extract_json_candidate,
    extract_payload,
    strip_progress_markers,
)

__all__ = [
    "STRATEGY_BRACE",
    "STRATEGY_DIRECT",
    "STRATEGY_FENCE",
    "ExtractionResult",
    "decode_json",
    "extract",
    "extract_json_candidate",
    "extract_payload",
    "strip_progress_markers",
]
