"""Schema validation: diagnostics without exceptions."""

from .validation_result import ValidationResult, ValidationSeverity
from .validator import RULES_BY_KIND, validate

__all__ = [
    "RULES_BY_KIND",
    "ValidationResult",
    "ValidationSeverity",
    "validate",
]
