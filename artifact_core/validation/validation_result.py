"""
Validation result types.

Validation never raises. Every finding is recorded on a
``ValidationResult`` at one of three severities, and ``ok`` is simply
"no errors were recorded".
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class ValidationSeverity(str, Enum):
    """Severity levels for schema findings."""
    ERROR = "error"      # Payload does not conform; repair or fallback needed
    WARNING = "warning"  # Conforms after normalization (truncation, unknown keys)
    INFO = "info"        # Optional context missing


@dataclass
class ValidationResult:
    """
    Outcome of validating one decoded payload against one schema.

    Attributes:
        errors: Field-scoped messages for nonconforming content.
        warnings: Messages for content normalization will fix up.
        info: Notes about optional content that is absent.
    """
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    info: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add(self, severity: ValidationSeverity, message: str) -> None:
        if severity == ValidationSeverity.ERROR:
            self.errors.append(message)
        elif severity == ValidationSeverity.WARNING:
            self.warnings.append(message)
        else:
            self.info.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def note(self, message: str) -> None:
        self.info.append(message)

    def summary(self) -> str:
        """One-line summary for log output."""
        status = "ok" if self.ok else "FAILED"
        return (
            f"{status}: {len(self.errors)} errors, "
            f"{len(self.warnings)} warnings, {len(self.info)} info"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "info": list(self.info),
        }
