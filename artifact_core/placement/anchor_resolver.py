"""
Anchor Resolver

Computes a best-effort absolute bounding rectangle for an opaque scene
node, and finds the node's top-level ancestor (the ancestor whose parent
is the document root).

Nodes are duck-typed. A node may expose any of:
    absolute_bounding_box    Rect-like (mapping or object with x/y/width/height)
    absolute_render_bounds   Rect-like, includes effects and strokes
    absolute_transform       2x3 affine matrix [[a, c, tx], [b, d, ty]]
    x, y, width, height      local offset and intrinsic size
    parent                   parent node or None
    is_root                  bool (or zero-arg callable): node is the document root

Bounds strategies, in strict priority order (first usable rectangle wins):
1. bounding_box    - absolute_bounding_box
2. render_bounds   - absolute_render_bounds
3. transform       - absolute_transform applied to the node's size
4. manual          - sum of local offsets from the node up to the root

A rectangle pinned at exactly (0, 0) whose node is not a direct child of
the root is discarded as untrustworthy.
"""

import logging
from typing import Any, Optional, Set, Tuple

import numpy as np

from ..core.log import resolve_logger
from ..validation.checks import is_coordinate
from .geometry import Rect

logger = logging.getLogger(__name__)

STRATEGY_BOUNDING_BOX = "bounding_box"
STRATEGY_RENDER_BOUNDS = "render_bounds"
STRATEGY_TRANSFORM = "transform"
STRATEGY_MANUAL = "manual"


def is_root(node: Any) -> bool:
    """True when ``node`` reports itself as the document root."""
    if node is None:
        return False
    flag = getattr(node, "is_root", False)
    if callable(flag):
        flag = flag()
    return flag is True


def _field(source: Any, name: str) -> Any:
    if isinstance(source, dict):
        return source.get(name)
    return getattr(source, name, None)


def rect_from(source: Any) -> Optional[Rect]:
    """Build a Rect from a mapping or attribute object; None if any field is not numeric."""
    if source is None:
        return None
    if isinstance(source, Rect):
        return source
    values = [_field(source, name) for name in ("x", "y", "width", "height")]
    # is_coordinate rejects NaN, infinities and ints too large for a float
    if not all(is_coordinate(v) for v in values):
        return None
    x, y, width, height = values
    return Rect(x=x, y=y, width=width, height=height)


def _usable(rect: Optional[Rect]) -> Optional[Rect]:
    return rect if rect is not None and rect.is_usable() else None


class AnchorResolver:
    """
    Resolves anchors against a scene graph.

    Args:
        log: Optional logger (defaults to the module logger).
    """

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = resolve_logger(log, logger)

    # ------------------------------------------------------------------
    # Ancestry
    # ------------------------------------------------------------------

    def top_level_ancestor(self, node: Any) -> Any:
        """
        Walk up to the first node whose parent is the document root.

        Returns ``node`` itself if no such ancestor exists (detached node,
        cyclic parent chain).
        """
        current = node
        seen: Set[int] = set()
        while current is not None and id(current) not in seen:
            seen.add(id(current))
            parent = getattr(current, "parent", None)
            if parent is None:
                break
            if is_root(parent):
                return current
            current = parent

        self.log.debug("No top-level ancestor found; using the node itself")
        return node

    # ------------------------------------------------------------------
    # Bounds strategies
    # ------------------------------------------------------------------

    def _from_transform(self, node: Any) -> Optional[Rect]:
        matrix = getattr(node, "absolute_transform", None)
        width = getattr(node, "width", None)
        height = getattr(node, "height", None)
        if matrix is None or not is_coordinate(width) or not is_coordinate(height):
            return None
        if width <= 0 or height <= 0:
            return None
        try:
            m = np.asarray(matrix, dtype=float)
        except (TypeError, ValueError, OverflowError):
            return None
        if m.shape != (2, 3) or not np.all(np.isfinite(m)):
            return None

        corners = np.array([
            [0.0, width, 0.0, width],
            [0.0, 0.0, height, height],
            [1.0, 1.0, 1.0, 1.0],
        ])
        points = m @ corners
        min_xy = points.min(axis=1)
        max_xy = points.max(axis=1)
        return Rect(
            x=float(min_xy[0]),
            y=float(min_xy[1]),
            width=float(max_xy[0] - min_xy[0]),
            height=float(max_xy[1] - min_xy[1]),
        )

    def _from_offsets(self, node: Any) -> Optional[Rect]:
        width = getattr(node, "width", None)
        height = getattr(node, "height", None)
        if not is_coordinate(width) or not is_coordinate(height):
            return None

        x = y = 0.0
        seen: Set[int] = set()
        current = node
        while current is not None and not is_root(current):
            if id(current) in seen:
                self.log.warning("Cyclic parent chain while accumulating offsets")
                return None
            seen.add(id(current))
            local_x = getattr(current, "x", None)
            local_y = getattr(current, "y", None)
            if not is_coordinate(local_x) or not is_coordinate(local_y):
                return None
            x += local_x
            y += local_y
            current = getattr(current, "parent", None)

        return Rect(x=x, y=y, width=width, height=height)

    def resolve_bounds_with_strategy(self, node: Any) -> Tuple[Optional[Rect], str]:
        """
        Resolve absolute bounds and report the strategy that produced them.

        Returns:
            (rect, strategy_name), or (None, "") when nothing usable was found
            or the result was discarded by the origin check.
        """
        if node is None:
            return None, ""

        strategies = (
            (STRATEGY_BOUNDING_BOX, lambda n: rect_from(getattr(n, "absolute_bounding_box", None))),
            (STRATEGY_RENDER_BOUNDS, lambda n: rect_from(getattr(n, "absolute_render_bounds", None))),
            (STRATEGY_TRANSFORM, self._from_transform),
            (STRATEGY_MANUAL, self._from_offsets),
        )

        for name, strategy in strategies:
            rect = _usable(strategy(node))
            if rect is None:
                continue
            if rect.is_at_origin() and not is_root(getattr(node, "parent", None)):
                self.log.warning(
                    f"Discarding {name} bounds at (0, 0) for a node not parented to the root"
                )
                return None, ""
            self.log.debug(f"Resolved anchor bounds via {name}: {rect}")
            return rect, name

        self.log.info("No usable anchor bounds; placement will fall back to the viewport")
        return None, ""

    def resolve_bounds(self, node: Any) -> Optional[Rect]:
        rect, _ = self.resolve_bounds_with_strategy(node)
        return rect


_default_resolver = AnchorResolver()


def top_level_ancestor(node: Any) -> Any:
    return _default_resolver.top_level_ancestor(node)


def resolve_bounds(node: Any) -> Optional[Rect]:
    return _default_resolver.resolve_bounds(node)
