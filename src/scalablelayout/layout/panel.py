"""
Components, Panels and the Layout Pass
======================================
The container side of the resolver: which children exist, where they are
declared, and in what order they are resolved on each render.

Why is this file needed?
------------------------
1. Ownership: A Panel owns its children. Its GridFormatter only keeps
   non-owning references for the gridded ones.
2. Traversal: One layout pass walks the tree from the root panel, resolving
   each visible child against its parent's rectangle.
3. Isolation: A broken formula aborts the resolution of its own component
   (and that component's subtree) without touching its siblings.

Classes:
    Component: Anything placed in a Panel, either gridded or free-form.
    Panel: A Component that holds other Components.
    LayoutPass: The rectangles (and failures) produced by one pass.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from scalablelayout.layout.grid import GridFormatter
from scalablelayout.layout.resolver import FreePlacement, GridPlacement, Placement, resolve_rect
from scalablelayout.model.errors import LayoutError
from scalablelayout.model.geometry import Cell, PixelRect, Present

logger = logging.getLogger(__name__)

# Free-form size used when none is given: stretch to the parent's far edge
DEFAULT_WIDTH: str = "?width"
DEFAULT_HEIGHT: str = "?height"


@dataclass
class LayoutPass:
    """Result of resolving a component tree once."""
    rects: Dict[Component, PixelRect] = field(default_factory=dict)
    failures: Dict[Component, LayoutError] = field(default_factory=dict)

    def rect_of(self, component: Component) -> Optional[PixelRect]:
        return self.rects.get(component)

    @property
    def ok(self) -> bool:
        return not self.failures

    def __iter__(self) -> Iterator[Tuple[Component, PixelRect]]:
        return iter(self.rects.items())


class Component:
    """
    A node placed in a parent Panel.

    Pass `cell` to place the component in the parent's grid, otherwise it is
    placed free-form by the x/y/width/height formulas. Formulas are parsed
    here, once, so a malformed one fails at declaration time.
    """

    def __init__(
        self,
        parent: Optional[Panel] = None,
        *,
        cell: Optional[Cell] = None,
        x: str = "0",
        y: str = "0",
        width: str = DEFAULT_WIDTH,
        height: str = DEFAULT_HEIGHT,
        name: str = "",
    ) -> None:
        self.name = name or type(self).__name__
        self.visible: bool = True
        self.cell: Optional[Cell] = cell
        self._free: Optional[FreePlacement] = None if cell is not None else FreePlacement.from_text(x, y, width, height)
        self.parent: Optional[Panel] = None
        if parent is not None:
            self.set_parent(parent)

    def __repr__(self) -> str:
        where = f"cell=({self.cell.col}, {self.cell.row})" if self.cell is not None else "free"
        return f"{type(self).__name__}({self.name!r}, {where})"

    @property
    def is_gridded(self) -> bool:
        return self.cell is not None

    @property
    def placement(self) -> Optional[Placement]:
        """The placement against the current parent, or None for a parentless component."""
        if self.cell is None:
            return self._free
        if self.parent is None:
            return None
        return GridPlacement(self.parent.grid, self.cell)

    def set_parent(self, parent: Optional[Panel]) -> None:
        """
        Move this component to another panel, keeping its placement mode.
        Passing None detaches it.
        """
        if self.parent is not None:
            if self.cell is not None:
                if self.parent.grid.get(self.cell) == Present(self):
                    self.parent.remove_from_grid(self.cell, shrink=True)
            else:
                self.parent.remove_free(self)
        self.parent = None
        if parent is not None:
            if self.cell is not None:
                parent.add_to_grid(self, self.cell)
            else:
                parent.add_free(self)

    def resolve(self, canvas: PixelRect) -> PixelRect:
        """
        Resolve this component's rectangle inside the rectangle its parent
        makes available.

        Raises:
            ExpressionError: If one of the component's formulas fails.
        """
        placement = self.placement
        if placement is None:
            return canvas
        if isinstance(placement, GridPlacement) and placement.grid.get(self.cell) != Present(self):
            # Displaced by another child at the same cell
            return PixelRect.zero()
        return resolve_rect(placement, canvas)


class Panel(Component):
    """A Component holding a grid of children and a list of free children."""

    def __init__(self, parent: Optional[Panel] = None, **kwargs) -> None:
        self.grid = GridFormatter()
        self._free_children: List[Component] = []
        super().__init__(parent, **kwargs)

    @classmethod
    def root(cls, name: str = "root") -> Panel:
        """A parentless panel that fills whatever rectangle it is laid out in."""
        return cls(None, name=name)

    # ---- children ----

    def add_to_grid(self, component: Component, cell: Cell) -> None:
        self.grid.place_at(cell, component)
        component.cell = cell
        component.parent = self

    def remove_from_grid(self, cell: Cell, shrink: bool = True) -> bool:
        ref = self.grid.get(cell)
        removed = self.grid.remove(cell, shrink)
        if isinstance(ref, Present) and isinstance(ref.child, Component) and ref.child.parent is self:
            ref.child.parent = None
        return removed

    def add_free(self, component: Component) -> None:
        if component not in self._free_children:
            self._free_children.append(component)
        component.parent = self

    def remove_free(self, component: Component) -> bool:
        if component not in self._free_children:
            return False
        self._free_children.remove(component)
        if component.parent is self:
            component.parent = None
        return True

    def children(self) -> List[Component]:
        """Gridded children first, then free children in declaration order."""
        gridded = [child for child in self.grid.children() if isinstance(child, Component)]
        return gridded + list(self._free_children)

    # ---- layout ----

    def layout(self, canvas: PixelRect, strict: bool = False) -> LayoutPass:
        """
        Resolve this panel and all of its visible descendants.

        Args:
            canvas: The rectangle this panel is laid out in. For the root
                panel this is the whole canvas.
            strict: Re-raise the first resolution failure instead of
                recording it in the result.

        Returns:
            The rectangle of every resolved component, plus failures.
        """
        result = LayoutPass()
        result.rects[self] = canvas
        self._layout_children(canvas, result, strict)
        return result

    def _layout_children(self, rect: PixelRect, result: LayoutPass, strict: bool) -> None:
        for child in self.children():
            if not child.visible:
                continue
            try:
                child_rect = child.resolve(rect)
            except LayoutError as e:
                if strict:
                    raise
                logger.error(f"Could not resolve {child!r}: {e}")
                result.failures[child] = e
                continue
            result.rects[child] = child_rect
            if isinstance(child, Panel):
                child._layout_children(child_rect, result, strict)
