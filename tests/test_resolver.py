"""Tests for resolving placements into pixel rectangles."""
import pytest

from scalablelayout import (
    Cell, Dimension, FreePlacement, GridFormatter, GridPlacement, MalformedExpression,
    PixelRect, RectangleResolver, resolve_rect,
)
from scalablelayout.config import PIXEL_MAX
from scalablelayout.model.expression import Literal


def free(x="0", y="0", width="?width", height="?height"):
    return RectangleResolver.free(x, y, width, height)


class TestDimension:
    def test_continuation_prefix(self):
        dim = Dimension.from_text("?width")
        assert dim.continuation is True
        assert dim == Dimension.from_text("  ?width ")

    def test_plain_length(self):
        assert Dimension.from_text("width/2").continuation is False

    def test_missing_is_zero(self):
        assert Dimension.from_text(None) == Dimension(Literal(0.0))


class TestFreePlacement:
    """Tests for expression-based placement."""

    def test_fill_parent(self, canvas):
        assert free().resolve(canvas) == canvas

    def test_fill_offset_parent(self):
        parent = PixelRect(10, 20, 640, 480)
        assert free().resolve(parent) == parent

    def test_centered(self):
        resolver = free("CENTERX", "CENTERY", "width/2", "height/2")
        assert resolver.resolve(PixelRect(0, 0, 200, 100)) == PixelRect(50, 25, 100, 50)

    def test_right_aligned(self):
        rect = free("width - WIDTH", "0", "30", "?height").resolve(PixelRect(0, 0, 200, 100))
        assert (rect.x, rect.width) == (170, 30)
        assert rect.height == 100

    def test_rounds_half_up(self, canvas):
        assert free("2.5", "0.5", "10", "10").resolve(canvas).as_tuple()[:2] == (3, 1)

    def test_rescales_with_canvas(self):
        resolver = free("width/4", "0", "width/2", "height")
        assert resolver.resolve(PixelRect(0, 0, 100, 10)) == PixelRect(25, 0, 50, 10)
        assert resolver.resolve(PixelRect(0, 0, 400, 10)) == PixelRect(100, 0, 200, 10)

    def test_continuations_share_edges(self):
        parent = PixelRect(0, 0, 100, 20)
        thirds = [
            free("0", "0", "?width/3"),
            free("width/3", "0", "?2width/3"),
            free("2width/3", "0", "?width"),
        ]
        rects = [r.resolve(parent) for r in thirds]
        assert [(r.x, r.width) for r in rects] == [(0, 33), (33, 34), (67, 33)]
        assert sum(r.width for r in rects) == 100

    def test_size_cannot_see_extended_variables(self, canvas):
        with pytest.raises(MalformedExpression):
            free("0", "0", "WIDTH", "10").resolve(canvas)

    def test_continuation_axis_has_no_extended_variables(self, canvas):
        with pytest.raises(MalformedExpression):
            free("CENTERX", "0", "?width", "10").resolve(canvas)

    def test_other_axis_keeps_extended_variables(self):
        rect = free("0", "CENTERY", "?width", "20").resolve(PixelRect(0, 0, 100, 100))
        assert rect.y == 40

    def test_non_finite_values_saturate(self, canvas):
        rect = free("0/0", "0", "1/0", "10").resolve(canvas)
        assert rect.x == 0
        assert rect.width == PIXEL_MAX

    def test_malformed_formula_fails_early(self):
        with pytest.raises(MalformedExpression):
            FreePlacement.from_text("2+", "0", "10", "10")


class TestGridPlacement:
    def test_delegates_to_grid(self):
        grid = GridFormatter()
        grid.place_at(Cell(0, 0), object())
        grid.place_at(Cell(1, 0), object())
        rect = resolve_rect(GridPlacement(grid, Cell(1, 0)), PixelRect(0, 0, 100, 40))
        assert rect == PixelRect(50, 0, 50, 40)

    def test_resolver_facade(self):
        grid = GridFormatter()
        grid.place_at(Cell(0, 0), object())
        resolver = RectangleResolver.gridded(grid, Cell(0, 0))
        assert resolver.is_gridded
        assert not free().is_gridded
        assert resolver.resolve(PixelRect(5, 5, 10, 10)) == PixelRect(5, 5, 10, 10)
