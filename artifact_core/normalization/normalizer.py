"""
Normalizer

Turns any decoded value into a fully-populated, bounded artifact for its
``SchemaKind``. Runs whether or not validation passed, never raises for
bad payloads and never mutates its input. Normalizing an
already-normalized artifact returns an equal artifact. An unknown kind is
a caller error and raises ValueError.
"""

import copy
import logging
from typing import Any, Callable, Dict, Optional

from ..core.log import resolve_logger
from ..schemas.kinds import SchemaKind
from ..schemas.models import NormalizedSpec
from .content_table import normalize_content_table
from .deceptive_report import normalize_deceptive_report
from .design_spec import normalize_design_spec
from .discovery import normalize_discovery
from .scorecard import normalize_scorecard

logger = logging.getLogger(__name__)

Normalizer = Callable[[Dict[str, Any]], NormalizedSpec]

NORMALIZERS_BY_KIND: Dict[SchemaKind, Normalizer] = {
    SchemaKind.SCORECARD: normalize_scorecard,
    SchemaKind.DECEPTIVE_REPORT: normalize_deceptive_report,
    SchemaKind.DESIGN_SPEC_V1: normalize_design_spec,
    SchemaKind.DISCOVERY_SPEC_V1: normalize_discovery,
    SchemaKind.CONTENT_TABLE_V1: normalize_content_table,
}


def _working_copy(decoded: Any) -> Dict[str, Any]:
    if hasattr(decoded, "to_dict") and hasattr(decoded, "KIND"):
        return decoded.to_dict()
    if isinstance(decoded, dict):
        return copy.deepcopy(decoded)
    return {}


def normalize(
    decoded: Any,
    kind: SchemaKind,
    log: Optional[logging.Logger] = None,
) -> NormalizedSpec:
    """
    Normalize a decoded payload (or an already-normalized artifact).

    Args:
        decoded: Decoded JSON value; non-objects normalize to all defaults.
        kind: Target schema.
        log: Optional logger for this call (defaults to the module logger).

    Returns:
        The schema's normalized dataclass.

    Raises:
        ValueError: If ``kind`` is not a ``SchemaKind``. There is no artifact
            type to fall back to, unlike ``validate`` which can report it.
    """
    log = resolve_logger(log, logger)
    kind = SchemaKind(kind)
    normalizer = NORMALIZERS_BY_KIND[kind]

    if not isinstance(decoded, dict) and not hasattr(decoded, "KIND"):
        log.warning(f"Normalizing non-object payload for {kind.value}; using defaults")

    try:
        spec = _working_copy(decoded)
        normalized = normalizer(spec)
    except Exception:
        log.exception(f"Normalizer for {kind.value} failed unexpectedly; using defaults")
        normalized = normalizer({})

    if normalized.truncation_notice:
        log.info(f"{kind.value}: {normalized.truncation_notice}")
    return normalized
