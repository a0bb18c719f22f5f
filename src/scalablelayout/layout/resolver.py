"""
Rectangle Resolver
==================
Turns a component's placement into a concrete pixel rectangle.

Why is this file needed?
------------------------
A component is either placed in its parent's grid or free-form with four
formulas (x, y, width, height). This module hides the difference: the caller
hands over a placement and the available canvas rectangle and gets pixels back.

Free-form rules:
    * width/height see only the base variables (centerx, centery, width,
      height, pi, e).
    * x/y additionally see CENTERX, CENTERY, WIDTH, HEIGHT, computed from the
      resolved width/height.
    * A width/height starting with '?' is an end coordinate, not a length.
      The extended variables of that axis stay unbound.
    * Final values are rounded half up, and a continuation's length is
      computed from rounded edges so chained components share exact borders.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from scalablelayout.config import CONTINUATION_PREFIX
from scalablelayout.layout.grid import GridFormatter
from scalablelayout.model.environment import VariableEnvironment
from scalablelayout.model.expression import Expression
from scalablelayout.model.geometry import Cell, PixelRect, round_pixel
from scalablelayout.solver import evaluate, parse


@dataclass(frozen=True)
class Dimension:
    """A parsed width/height formula."""
    expr: Expression
    continuation: bool = False

    @classmethod
    def from_text(cls, text: Optional[str]) -> Dimension:
        text = (text or "").strip()
        if text.startswith(CONTINUATION_PREFIX):
            return cls(parse(text[len(CONTINUATION_PREFIX):]), True)
        return cls(parse(text))


@dataclass(frozen=True)
class FreePlacement:
    """Expression-based placement. Build with `from_text` to parse once."""
    x: Expression
    y: Expression
    width: Dimension
    height: Dimension

    @classmethod
    def from_text(cls, x: str, y: str, width: str, height: str) -> FreePlacement:
        return cls(parse(x), parse(y), Dimension.from_text(width), Dimension.from_text(height))


@dataclass(frozen=True)
class GridPlacement:
    """Placement in a cell of a parent's grid."""
    grid: GridFormatter
    cell: Cell


Placement = Union[FreePlacement, GridPlacement]


def _resolve_free(placement: FreePlacement, canvas: PixelRect) -> PixelRect:
    env = VariableEnvironment.for_container(canvas.width, canvas.height)

    # Sizes first: they may not depend on the extended variables
    width = evaluate(placement.width.expr, env)
    height = evaluate(placement.height.expr, env)
    if placement.width.continuation:
        width += canvas.x
    if placement.height.continuation:
        height += canvas.y

    position_env = env.with_component(
        width=None if placement.width.continuation else width,
        height=None if placement.height.continuation else height,
    )
    x = round_pixel(canvas.x + evaluate(placement.x, position_env))
    y = round_pixel(canvas.y + evaluate(placement.y, position_env))

    w = round_pixel(width) - x if placement.width.continuation else round_pixel(width)
    h = round_pixel(height) - y if placement.height.continuation else round_pixel(height)
    return PixelRect(x, y, w, h)


def resolve_rect(placement: Placement, canvas: PixelRect) -> PixelRect:
    """
    Resolve a placement against the available canvas rectangle.

    Args:
        placement: A GridPlacement (delegated to the grid) or a FreePlacement.
        canvas: The rectangle the parent makes available, in canvas pixels.

    Returns:
        The component's rectangle in canvas pixels.

    Raises:
        ExpressionError: If one of the formulas is malformed or uses a
            variable that is not available to it.
    """
    if isinstance(placement, GridPlacement):
        return placement.grid.resolve(placement.cell, canvas)
    return _resolve_free(placement, canvas)


class RectangleResolver:
    """
    Per-component facade: holds the component's placement (parsed once) and
    resolves it on every render pass.
    """

    def __init__(self, placement: Placement) -> None:
        self.placement = placement

    @classmethod
    def free(cls, x: str, y: str, width: str, height: str) -> RectangleResolver:
        return cls(FreePlacement.from_text(x, y, width, height))

    @classmethod
    def gridded(cls, grid: GridFormatter, cell: Cell) -> RectangleResolver:
        return cls(GridPlacement(grid, cell))

    @property
    def is_gridded(self) -> bool:
        return isinstance(self.placement, GridPlacement)

    def resolve(self, canvas: PixelRect) -> PixelRect:
        return resolve_rect(self.placement, canvas)
