"""Optional deployment-specific adapters."""

from .work_adapter import ContentTableIgnoreRules, WorkAdapter

__all__ = ["ContentTableIgnoreRules", "WorkAdapter"]
