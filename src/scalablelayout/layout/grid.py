"""
Grid Formatter
==============
Partitions a parent's content rectangle among a sparse set of logical cells.

Why is this file needed?
------------------------
1. Authors place children at (column, row) instead of writing formulas for
   each child; the grid turns those positions into pixel rectangles.
2. Rows and columns can be weighted, separated by a margin and inset by a
   frame. Margin and frame are formulas, so they scale with the parent too.

Notes:
    The grid holds non-owning references to children. The container that
    declared a child owns it and removes it from the grid when destroying it.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

import numpy as np

from scalablelayout.model.environment import VariableEnvironment
from scalablelayout.model.expression import Expression
from scalablelayout.model.geometry import (
    EMPTY, Axis, Cell, CellRef, PixelRect, Present, truncate_pixel,
)
from scalablelayout.solver import evaluate, parse

logger = logging.getLogger(__name__)

DEFAULT_WEIGHT: float = 1.0


def identity_div(numerator: float, denominator: float) -> float:
    """
    Division that gives priority to identity: any number divided by itself is 1,
    even 0/0.
    """
    if numerator == denominator:
        return 1.0
    with np.errstate(all="ignore"):
        return float(np.divide(np.float64(numerator), np.float64(denominator)))


class GridFormatter:
    """Sparse map of cells to children with weights, margin and frame."""

    def __init__(self) -> None:
        self._cells: Dict[Cell, CellRef] = {}
        # Tracked bound (columns, rows); grows on insert, shrinks conservatively on removal
        self._columns: int = 0
        self._rows: int = 0
        self._weights: Dict[Axis, Dict[int, float]] = {Axis.X: {}, Axis.Y: {}}
        self._margin: Dict[Axis, Optional[Expression]] = {Axis.X: None, Axis.Y: None}
        self._frame: Dict[Axis, Optional[Expression]] = {Axis.X: None, Axis.Y: None}

    # ---- contents ----

    @property
    def bounds(self) -> Tuple[int, int]:
        """The tracked (columns, rows) extent of the grid."""
        return self._columns, self._rows

    def place_at(self, cell: Cell, ref: Any) -> None:
        """
        Register a child (or the EMPTY placeholder) at a cell, replacing any
        previous occupant, and extend the tracked bound if needed.
        """
        entry: CellRef = ref if ref is EMPTY or isinstance(ref, Present) else Present(ref)
        if cell.col >= self._columns:
            self._columns = cell.col + 1
        if cell.row >= self._rows:
            self._rows = cell.row + 1
        self._cells[cell] = entry
        logger.debug(f"Placed {entry!r} at {cell}; bounds now {self.bounds}")

    def reserve(self, cell: Cell) -> None:
        """Occupy a cell with the EMPTY placeholder, e.g. to keep a blank row."""
        self.place_at(cell, EMPTY)

    def remove(self, cell: Cell, shrink: bool = True) -> bool:
        """
        Delete the entry at a cell.

        The bound only shrinks when no remaining cell lies beyond the removed
        one on both axes. Removing cells in some orders therefore leaves a
        stale, larger bound; callers rely on it never shrinking below a cell
        that is still occupied.

        Args:
            cell: The cell to clear.
            shrink: Whether to try shrinking the tracked bound.

        Returns:
            Whether an entry was removed.
        """
        if cell not in self._cells:
            return False
        del self._cells[cell]

        if shrink and self._columns > cell.col and self._rows > cell.row:
            max_col, max_row = -1, -1
            interior = False
            for other in self._cells:
                max_col = max(max_col, other.col)
                max_row = max(max_row, other.row)
                if max_col > cell.col and max_row > cell.row:
                    interior = True
                    break
            if not interior:
                self._columns = max_col + 1
                self._rows = max_row + 1
                logger.debug(f"Grid shrunk to {self.bounds} after removing {cell}")
        return True

    def get(self, cell: Cell) -> Optional[CellRef]:
        return self._cells.get(cell)

    def entries(self) -> Iterator[Tuple[Cell, CellRef]]:
        return iter(list(self._cells.items()))

    def children(self) -> List[Any]:
        """The children held by the grid, placeholders excluded."""
        return [ref.child for ref in self._cells.values() if isinstance(ref, Present)]

    def cell_of(self, child: Any) -> Optional[Cell]:
        target = Present(child)
        for cell, ref in self._cells.items():
            if ref == target:
                return cell
        return None

    def __contains__(self, cell: Cell) -> bool:
        return cell in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    # ---- configuration ----

    def set_weight(self, axis: Axis, index: int, weight: float) -> None:
        """
        Define the weight of a column (Axis.X) or row (Axis.Y).
        A weight of 1 is the default and deletes the override.
        """
        if index < 0:
            raise ValueError(f"Weight index must be non-negative, got {index}")
        if weight == DEFAULT_WEIGHT:
            self._weights[axis].pop(index, None)
        else:
            self._weights[axis][index] = float(weight)

    def weight(self, axis: Axis, index: int) -> float:
        return self._weights[axis].get(index, DEFAULT_WEIGHT)

    def set_margin(self, x_expr: Optional[str], y_expr: Optional[str]) -> None:
        """Set the gap between adjacent cells. None means no margin on that axis."""
        self._margin[Axis.X] = None if x_expr is None else parse(x_expr)
        self._margin[Axis.Y] = None if y_expr is None else parse(y_expr)

    def set_frame(self, x_expr: Optional[str], y_expr: Optional[str]) -> None:
        """Set the inset around the whole grid. None means no frame on that axis."""
        self._frame[Axis.X] = None if x_expr is None else parse(x_expr)
        self._frame[Axis.Y] = None if y_expr is None else parse(y_expr)

    # ---- resolution ----

    def _weight_prefix(self, axis: Axis, count: int) -> np.ndarray:
        """Running weight sums: prefix[i] is the total weight of indices < i."""
        weights = np.full(count, DEFAULT_WEIGHT, dtype=np.float64)
        for index, value in self._weights[axis].items():
            if index < count:
                weights[index] = value
        return np.concatenate(([0.0], np.cumsum(weights)))

    def _span(
        self,
        axis: Axis,
        index: int,
        origin: int,
        extent: int,
        margin: int,
    ) -> Tuple[int, int]:
        count = self._columns if axis is Axis.X else self._rows
        prefix = self._weight_prefix(axis, max(count, index + 1))
        total = prefix[count]
        with np.errstate(all="ignore"):
            start = origin + truncate_pixel(
                extent * prefix[index] / total * identity_div(margin * index, margin * (count - 1))
            )
            end = origin + truncate_pixel(
                extent * prefix[index + 1] / total * identity_div(margin * (index + 1), margin * (count - 1))
            )
        return start, end - start - margin

    def _measure(self, expressions: Dict[Axis, Optional[Expression]], axis: Axis, env: VariableEnvironment) -> int:
        expr = expressions[axis]
        return 0 if expr is None else truncate_pixel(evaluate(expr, env))

    def resolve(self, cell: Cell, parent: PixelRect) -> PixelRect:
        """
        Compute the pixel rectangle of a cell inside a parent rectangle.

        A cell that is not in the grid resolves to a zero-sized rectangle;
        children are routinely queried before they are inserted.

        Args:
            cell: The logical cell.
            parent: The parent's rectangle in canvas pixels.

        Returns:
            The cell's rectangle in canvas pixels.

        Raises:
            ExpressionError: If a margin or frame formula cannot be evaluated.
        """
        if cell not in self._cells:
            return PixelRect.zero()

        # Margin and frame formulas see the parent's whole size
        env = VariableEnvironment.for_container(parent.width, parent.height)

        placed: Dict[Axis, Tuple[int, int]] = {}
        for axis in (Axis.X, Axis.Y):
            origin = parent.origin(axis)
            extent = parent.extent(axis)

            frame = self._measure(self._frame, axis, env)
            extent -= frame * 2
            if extent < 0:
                extent = 0
            else:
                origin += frame

            margin = self._measure(self._margin, axis, env)
            if margin < 0 or extent < 1:
                margin = 0

            placed[axis] = self._span(axis, cell.index(axis), origin, extent, margin)

        (x, width), (y, height) = placed[Axis.X], placed[Axis.Y]
        return PixelRect(x, y, width, height)
