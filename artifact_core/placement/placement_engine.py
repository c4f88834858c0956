"""
Placement Engine

Computes where a new artifact of a given size goes, relative to an
optional anchor rectangle.

- No anchor (or a degenerate one): centre on the viewport.
- Anchor, mode LEFT: only if the anchor leaves room on its left
  (anchor.x >= width + offset); otherwise fall back to the viewport with
  a reason instead of clamping the artifact on top of the anchor.
- Anchor, other modes: offset from the opposite edge, or centroid for CENTER.

Every result is clamped to x >= min_x and y >= min_y.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..core.config import PipelineConfig
from ..core.log import resolve_logger
from ..validation.checks import is_coordinate
from .geometry import PlacementMethod, PlacementMode, PlacementResult, Point, Rect

logger = logging.getLogger(__name__)


@dataclass
class PlacementOptions:
    mode: PlacementMode = PlacementMode.LEFT
    offset: float = 40.0
    min_x: float = 0.0
    min_y: float = 40.0

    @classmethod
    def from_config(cls, config: PipelineConfig, mode: PlacementMode = PlacementMode.LEFT) -> "PlacementOptions":
        return cls(
            mode=mode,
            offset=config.placement_offset,
            min_x=config.placement_min_x,
            min_y=config.placement_min_y,
        )


def _finite(value: Any, default: float) -> float:
    if not is_coordinate(value):
        return default
    return float(value)


def _clamp(value: float, lower: float) -> float:
    return max(_finite(value, lower), lower)


class PlacementEngine:
    """
    Stateless placement calculator.

    Args:
        log: Optional logger (defaults to the module logger).
    """

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = resolve_logger(log, logger)

    def _viewport(
        self,
        width: float,
        height: float,
        options: PlacementOptions,
        viewport_center: Optional[Point],
        reason: Optional[str],
    ) -> PlacementResult:
        cx = _finite(viewport_center.x, 0.0) if viewport_center is not None else 0.0
        cy = _finite(viewport_center.y, 0.0) if viewport_center is not None else 0.0
        min_x = _finite(options.min_x, 0.0)
        min_y = _finite(options.min_y, 0.0)
        return PlacementResult(
            x=_clamp(cx - width / 2, min_x),
            y=_clamp(cy - height / 2, min_y),
            method=PlacementMethod.VIEWPORT,
            reason=reason,
        )

    def place(
        self,
        anchor: Optional[Rect],
        output_width: float,
        output_height: float,
        options: Optional[PlacementOptions] = None,
        viewport_center: Optional[Point] = None,
    ) -> PlacementResult:
        """
        Compute the top-left corner for an artifact of the given size.

        Args:
            anchor: Absolute anchor bounds, or None.
            output_width: Artifact width.
            output_height: Artifact height.
            options: Mode, offset and edge clamps.
            viewport_center: Current viewport centre for the fallback path.

        Returns:
            PlacementResult with method "anchor" or "viewport".
        """
        options = options or PlacementOptions()
        width = max(_finite(output_width, 0.0), 0.0)
        height = max(_finite(output_height, 0.0), 0.0)
        offset = _finite(options.offset, 0.0)
        min_x = _finite(options.min_x, 0.0)
        min_y = _finite(options.min_y, 0.0)

        if anchor is None:
            return self._viewport(width, height, options, viewport_center, None)

        if not anchor.is_usable():
            reason = f"Anchor is degenerate ({anchor.width}x{anchor.height} at {anchor.x}, {anchor.y})"
            self.log.warning(f"{reason}; centering on viewport")
            return self._viewport(width, height, options, viewport_center, reason)

        mode = PlacementMode(options.mode)
        if mode == PlacementMode.LEFT:
            needed = width + offset
            if anchor.x < needed:
                reason = (
                    f"Insufficient anchor X ({anchor.x:g}) for left placement: "
                    f"needs at least {needed:g}"
                )
                self.log.info(f"{reason}; centering on viewport")
                return self._viewport(width, height, options, viewport_center, reason)
            x, y = anchor.x - width - offset, anchor.y
        elif mode == PlacementMode.RIGHT:
            x, y = anchor.right + offset, anchor.y
        elif mode == PlacementMode.ABOVE:
            x, y = anchor.x, anchor.y - height - offset
        elif mode == PlacementMode.BELOW:
            x, y = anchor.x, anchor.bottom + offset
        else:
            center = anchor.center
            x, y = center.x - width / 2, center.y - height / 2

        return PlacementResult(
            x=_clamp(x, min_x),
            y=_clamp(y, min_y),
            method=PlacementMethod.ANCHOR,
        )


_default_engine = PlacementEngine()


def place(
    anchor: Optional[Rect],
    output_width: float,
    output_height: float,
    options: Optional[PlacementOptions] = None,
    viewport_center: Optional[Point] = None,
) -> PlacementResult:
    return _default_engine.place(anchor, output_width, output_height, options, viewport_center)
