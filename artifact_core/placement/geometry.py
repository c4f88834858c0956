"""Geometry value types shared by anchor resolution and placement."""

import math
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Point(BaseModel):
    """A point in absolute canvas units."""
    x: float
    y: float


class Rect(BaseModel):
    """An axis-aligned rectangle in absolute canvas units."""
    x: float
    y: float
    width: float
    height: float

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (self.x, self.y, self.width, self.height))

    def is_usable(self) -> bool:
        """Finite with strictly positive size."""
        return self.is_finite() and self.width > 0 and self.height > 0

    def is_at_origin(self) -> bool:
        return self.x == 0 and self.y == 0

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(x=self.x + self.width / 2, y=self.y + self.height / 2)


class PlacementMode(str, Enum):
    """Where the new artifact goes relative to its anchor."""
    LEFT = "left"
    RIGHT = "right"
    ABOVE = "above"
    BELOW = "below"
    CENTER = "center"


class PlacementMethod(str, Enum):
    ANCHOR = "anchor"
    VIEWPORT = "viewport"


class PlacementResult(BaseModel):
    """
    Target top-left corner for a new artifact.

    ``reason`` explains why anchor placement was abandoned when
    ``method`` is viewport and an anchor was supplied.
    """
    x: float
    y: float
    method: PlacementMethod
    reason: Optional[str] = None
