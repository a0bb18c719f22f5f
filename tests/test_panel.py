"""Tests for the component tree and layout passes."""
import logging

import pytest

from scalablelayout import Cell, Component, MalformedExpression, Panel, PixelRect


@pytest.fixture
def root() -> Panel:
    return Panel.root()


class TestLayoutPass:
    """Tests for resolving a whole tree."""

    def test_grid_and_free_children(self, root):
        left = Component(root, cell=Cell(0, 0))
        right = Component(root, cell=Cell(1, 0))
        badge = Component(root, x="10", y="10", width="20", height="20")
        result = root.layout(PixelRect(0, 0, 100, 50))
        assert result.ok
        assert result.rect_of(root) == PixelRect(0, 0, 100, 50)
        assert result.rect_of(left) == PixelRect(0, 0, 50, 50)
        assert result.rect_of(right) == PixelRect(50, 0, 50, 50)
        assert result.rect_of(badge) == PixelRect(10, 10, 20, 20)

    def test_children_order(self, root):
        badge = Component(root, x="1", y="1", width="1", height="1")
        cell = Component(root, cell=Cell(0, 0))
        assert root.children() == [cell, badge]

    def test_nested_panel(self, root):
        inner = Panel(root, x="width/4", y="0", width="width/2", height="?height")
        child = Component(inner, cell=Cell(0, 0))
        result = root.layout(PixelRect(0, 0, 200, 100))
        assert result.rect_of(inner) == PixelRect(50, 0, 100, 100)
        assert result.rect_of(child) == PixelRect(50, 0, 100, 100)

    def test_invisible_subtree_skipped(self, root):
        inner = Panel(root, cell=Cell(0, 0))
        child = Component(inner)
        inner.visible = False
        result = root.layout(PixelRect(0, 0, 10, 10))
        assert result.rect_of(inner) is None
        assert result.rect_of(child) is None

    def test_iterates_rects(self, root):
        child = Component(root)
        assert dict(root.layout(PixelRect(0, 0, 10, 10))) == {
            root: PixelRect(0, 0, 10, 10),
            child: PixelRect(0, 0, 10, 10),
        }


class TestFailures:
    """Tests for formulas that fail during a pass."""

    def test_failure_is_isolated(self, root, caplog):
        good = Component(root, cell=Cell(0, 0))
        bad = Component(root, x="0", y="0", width="WIDTH", height="10", name="bad")
        with caplog.at_level(logging.ERROR, logger="scalablelayout"):
            result = root.layout(PixelRect(0, 0, 100, 100))
        assert not result.ok
        assert isinstance(result.failures[bad], MalformedExpression)
        assert result.rect_of(bad) is None
        assert result.rect_of(good) == PixelRect(0, 0, 100, 100)
        assert "bad" in caplog.text

    def test_strict_raises(self, root):
        Component(root, width="WIDTH")
        with pytest.raises(MalformedExpression):
            root.layout(PixelRect(0, 0, 100, 100), strict=True)

    def test_malformed_declaration(self, root):
        with pytest.raises(MalformedExpression):
            Component(root, x="2+")
        assert root.children() == []

    def test_long_formula_resolves_with_siblings(self, root):
        sibling = Component(root, cell=Cell(0, 0))
        long_x = Component(root, x="+".join(["1"] * 1500), y="0", width="10", height="10")
        result = root.layout(PixelRect(0, 0, 100, 100))
        assert result.ok
        assert result.rect_of(long_x) == PixelRect(1500, 0, 10, 10)
        assert result.rect_of(sibling) == PixelRect(0, 0, 100, 100)

    def test_deeply_nested_declaration(self, root):
        with pytest.raises(MalformedExpression):
            Component(root, x="(" * 500 + "1" + ")" * 500)
        assert root.children() == []


class TestParenting:
    """Tests for moving components between panels."""

    def test_move_gridded(self, root):
        other = Panel(root, cell=Cell(1, 0))
        child = Component(root, cell=Cell(0, 0))
        child.set_parent(other)
        assert Cell(0, 0) not in root.grid
        assert other.grid.children() == [child]
        assert child.parent is other

    def test_detach_free(self, root):
        child = Component(root)
        child.set_parent(None)
        assert child.parent is None
        assert root.children() == []

    def test_displaced_child(self, root):
        first = Component(root, cell=Cell(0, 0))
        second = Component(root, cell=Cell(0, 0))
        assert root.children() == [second]
        assert first.resolve(PixelRect(0, 0, 10, 10)) == PixelRect.zero()

    def test_detaching_displaced_child_keeps_occupant(self, root):
        first = Component(root, cell=Cell(0, 0))
        second = Component(root, cell=Cell(0, 0))
        first.set_parent(None)
        assert root.children() == [second]

    def test_parentless_component_fills_canvas(self):
        assert Component().resolve(PixelRect(1, 2, 3, 4)) == PixelRect(1, 2, 3, 4)
