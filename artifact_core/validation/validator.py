"""
Schema Validator

Dispatches a decoded payload to the rules for its ``SchemaKind`` and
returns a ``ValidationResult``. Never raises: malformed input of any
shape is reported as errors.
"""

import logging
from typing import Any, Callable, Dict, Optional

from ..core.log import resolve_logger
from ..schemas.kinds import SchemaKind
from .content_table import validate_content_table
from .deceptive_report import validate_deceptive_report
from .design_spec import validate_design_spec
from .discovery import validate_discovery
from .scorecard import validate_scorecard
from .validation_result import ValidationResult

logger = logging.getLogger(__name__)

Rules = Callable[[Any, ValidationResult], None]

RULES_BY_KIND: Dict[SchemaKind, Rules] = {
    SchemaKind.SCORECARD: validate_scorecard,
    SchemaKind.DECEPTIVE_REPORT: validate_deceptive_report,
    SchemaKind.DESIGN_SPEC_V1: validate_design_spec,
    SchemaKind.DISCOVERY_SPEC_V1: validate_discovery,
    SchemaKind.CONTENT_TABLE_V1: validate_content_table,
}


def validate(
    decoded: Any,
    kind: SchemaKind,
    log: Optional[logging.Logger] = None,
) -> ValidationResult:
    """
    Validate a decoded JSON value against one schema.

    Args:
        decoded: Any decoded JSON value (object, array, scalar or None).
        kind: Schema to validate against.
        log: Optional logger for this call (defaults to the module logger).

    Returns:
        ValidationResult; ``ok`` is True when no errors were recorded.
    """
    log = resolve_logger(log, logger)
    result = ValidationResult()

    try:
        kind = SchemaKind(kind)
    except ValueError:
        result.error(f"Unsupported schema kind: {kind!r}")
        return result

    try:
        RULES_BY_KIND[kind](decoded, result)
    except Exception as e:
        # Rules are total over JSON values; anything else reaching here is a bug
        log.exception(f"Validator for {kind.value} failed unexpectedly")
        result.error(f"Internal validation error: {type(e).__name__}: {e}")

    log.debug(f"Validated {kind.value}: {result.summary()}")
    return result
