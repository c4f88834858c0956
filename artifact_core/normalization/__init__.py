"""Normalization: defaults, ceilings and placeholders for every schema."""

from .discovery import derive_title
from .normalizer import NORMALIZERS_BY_KIND, normalize
from .scorecard import clamp_score

__all__ = [
    "NORMALIZERS_BY_KIND",
    "clamp_score",
    "derive_title",
    "normalize",
]
