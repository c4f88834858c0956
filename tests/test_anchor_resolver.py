"""Tests for anchor resolution: top-level ancestors and bounds strategies."""

import math

import pytest

from artifact_core.placement import AnchorResolver, Rect, is_root, rect_from, resolve_bounds, top_level_ancestor

from conftest import MockNode


@pytest.fixture
def resolver():
    return AnchorResolver()


# ----------------------------------------------------------------------------
# Ancestry
# ----------------------------------------------------------------------------

class TestTopLevelAncestor:

    def test_direct_child_of_root_is_its_own_ancestor(self, page):
        frame = page.add(MockNode(name="frame"))
        assert top_level_ancestor(frame) is frame

    def test_nested_node_resolves_to_frame(self, page):
        frame = page.add(MockNode(name="frame"))
        group = frame.add(MockNode(name="group"))
        text = group.add(MockNode(name="text"))
        assert top_level_ancestor(text) is frame

    def test_detached_node_returns_itself(self):
        orphan = MockNode(name="orphan")
        child = orphan.add(MockNode(name="child"))
        assert top_level_ancestor(child) is child

    def test_cyclic_parents_terminate(self):
        a = MockNode(name="a")
        b = MockNode(name="b", parent=a)
        a.parent = b
        assert top_level_ancestor(a) is a

    def test_is_root_accepts_callable(self):
        node = MockNode()
        node.is_root = lambda: True
        assert is_root(node)
        assert not is_root(None)


# ----------------------------------------------------------------------------
# Bounds strategies
# ----------------------------------------------------------------------------

class TestBoundsStrategies:

    def test_bounding_box_wins(self, resolver, page):
        frame = page.add(MockNode(
            x=5, y=5, width=10, height=10,
            absolute_bounding_box={"x": 100, "y": 200, "width": 300, "height": 400},
            absolute_render_bounds={"x": 90, "y": 190, "width": 320, "height": 420},
        ))
        rect, strategy = resolver.resolve_bounds_with_strategy(frame)
        assert strategy == "bounding_box"
        assert rect == Rect(x=100, y=200, width=300, height=400)

    def test_render_bounds_when_box_degenerate(self, resolver, page):
        frame = page.add(MockNode(
            absolute_bounding_box={"x": 100, "y": 200, "width": 0, "height": 400},
            absolute_render_bounds=Rect(x=90, y=190, width=320, height=420),
        ))
        rect, strategy = resolver.resolve_bounds_with_strategy(frame)
        assert strategy == "render_bounds"
        assert rect.width == 320

    def test_transform_applied_to_size(self, resolver, page):
        frame = page.add(MockNode(
            width=100, height=50,
            absolute_transform=[[1, 0, 250], [0, 1, 75]],
        ))
        rect, strategy = resolver.resolve_bounds_with_strategy(frame)
        assert strategy == "transform"
        assert rect == Rect(x=250, y=75, width=100, height=50)

    def test_rotated_transform_uses_enclosing_box(self, resolver, page):
        # 90 degree rotation: width and height swap
        frame = page.add(MockNode(
            width=100, height=50,
            absolute_transform=[[0, -1, 300], [1, 0, 100]],
        ))
        rect, strategy = resolver.resolve_bounds_with_strategy(frame)
        assert strategy == "transform"
        assert rect.x == pytest.approx(250)
        assert rect.y == pytest.approx(100)
        assert rect.width == pytest.approx(50)
        assert rect.height == pytest.approx(100)

    def test_negative_size_rejected_for_transform(self, resolver, page):
        frame = page.add(MockNode(
            width=-200, height=100,
            absolute_transform=[[1, 0, 500], [0, 1, 300]],
        ))
        assert resolver.resolve_bounds_with_strategy(frame) == (None, "")

    def test_malformed_transform_falls_through(self, resolver, page):
        frame = page.add(MockNode(x=20, y=30, width=100, height=50, absolute_transform=[[1, 0]]))
        _, strategy = resolver.resolve_bounds_with_strategy(frame)
        assert strategy == "manual"

    def test_manual_sums_offsets_to_root(self, resolver, page):
        frame = page.add(MockNode(x=100, y=200, width=500, height=500))
        child = frame.add(MockNode(x=10, y=20, width=50, height=60))
        rect, strategy = resolver.resolve_bounds_with_strategy(child)
        assert strategy == "manual"
        assert rect == Rect(x=110, y=220, width=50, height=60)

    def test_manual_gives_up_on_missing_offset(self, resolver, page):
        frame = page.add(MockNode(x=None, y=200, width=500, height=500))
        assert resolver.resolve_bounds(frame) is None

    def test_manual_cycle_returns_none(self, resolver):
        a = MockNode(x=1, y=1, width=10, height=10)
        b = MockNode(x=1, y=1, width=10, height=10, parent=a)
        a.parent = b
        assert resolver.resolve_bounds(a) is None

    def test_nothing_usable(self, resolver, page):
        frame = page.add(MockNode())
        assert resolver.resolve_bounds_with_strategy(frame) == (None, "")

    def test_none_node(self):
        assert resolve_bounds(None) is None


# ----------------------------------------------------------------------------
# Origin check
# ----------------------------------------------------------------------------

class TestOriginCheck:

    def test_origin_discarded_for_nested_node(self, resolver, page):
        frame = page.add(MockNode(x=100, y=100, width=500, height=500))
        child = frame.add(MockNode(
            x=0, y=0, width=50, height=50,
            absolute_bounding_box={"x": 0, "y": 0, "width": 50, "height": 50},
        ))
        assert resolver.resolve_bounds_with_strategy(child) == (None, "")

    def test_origin_kept_for_top_level_frame(self, resolver, page):
        frame = page.add(MockNode(absolute_bounding_box={"x": 0, "y": 0, "width": 50, "height": 50}))
        rect, strategy = resolver.resolve_bounds_with_strategy(frame)
        assert strategy == "bounding_box"
        assert rect.is_at_origin()


class TestRectFrom:

    def test_rejects_non_finite(self):
        assert rect_from({"x": math.nan, "y": 0, "width": 1, "height": 1}) is None
        assert rect_from({"x": 0, "y": 0, "width": math.inf, "height": 1}) is None

    def test_rejects_missing_and_bool_fields(self):
        assert rect_from({"x": 0, "y": 0, "width": 1}) is None
        assert rect_from({"x": True, "y": 0, "width": 1, "height": 1}) is None

    def test_accepts_attribute_objects(self):
        source = MockNode(x=1, y=2, width=3, height=4)
        assert rect_from(source) == Rect(x=1, y=2, width=3, height=4)


# ----------------------------------------------------------------------------
# Integers too large for a float
# ----------------------------------------------------------------------------

class TestHugeIntegers:

    def test_huge_bounding_box_falls_through(self, resolver, page):
        frame = page.add(MockNode(
            x=100, y=200, width=50, height=60,
            absolute_bounding_box={"x": 10 ** 400, "y": 0, "width": 10, "height": 10},
        ))
        rect, strategy = resolver.resolve_bounds_with_strategy(frame)
        assert strategy == "manual"
        assert rect == Rect(x=100, y=200, width=50, height=60)

    def test_huge_transform_entry(self, resolver, page):
        frame = page.add(MockNode(width=100, height=50, absolute_transform=[[1, 0, 10 ** 400], [0, 1, 0]]))
        assert resolver.resolve_bounds(frame) is None

    def test_huge_offset(self, resolver, page):
        frame = page.add(MockNode(x=10 ** 400, y=0, width=100, height=50))
        assert resolver.resolve_bounds(frame) is None

    def test_rect_from_huge_integer(self):
        assert rect_from({"x": 0, "y": 0, "width": 10 ** 400, "height": 1}) is None
