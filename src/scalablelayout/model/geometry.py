"""
Pixel Geometry and Grid Cells.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Union

from scalablelayout.config import PIXEL_MAX, PIXEL_MIN


class Axis(StrEnum):
    X = "x"
    Y = "y"


@dataclass(frozen=True)
class PixelRect:
    """An integer rectangle in canvas pixels."""
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def zero(cls) -> PixelRect:
        return cls(0, 0, 0, 0)

    @property
    def right(self) -> int:
        """First x coordinate past the rectangle."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """First y coordinate past the rectangle."""
        return self.y + self.height

    def origin(self, axis: Axis) -> int:
        return self.x if axis is Axis.X else self.y

    def extent(self, axis: Axis) -> int:
        return self.width if axis is Axis.X else self.height

    def as_tuple(self) -> tuple[int, int, int, int]:
        return self.x, self.y, self.width, self.height


@dataclass(frozen=True, order=True)
class Cell:
    """A logical (column, row) position in a grid."""
    col: int
    row: int

    def __post_init__(self) -> None:
        for name in ("col", "row"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"Cell {name} must be an int, got {type(value).__name__}: {value}")
            if value < 0:
                raise ValueError(f"Cell {name} must be non-negative, got {value}")

    def index(self, axis: Axis) -> int:
        return self.col if axis is Axis.X else self.row


# ------------------------------------------------------------------------------
# Grid cell references
# ------------------------------------------------------------------------------
class _EmptyPlaceholder:
    """Occupies a cell without a child, only to force the grid's size."""
    _instance = None

    def __new__(cls) -> _EmptyPlaceholder:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "EMPTY"


EMPTY = _EmptyPlaceholder()


@dataclass(frozen=True, eq=False)
class Present:
    """
    Non-owning reference to a child placed in a grid cell.
    Compared by identity of the child, the way the owning container sees it.
    """
    child: Any

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Present) and other.child is self.child

    def __hash__(self) -> int:
        return id(self.child)


CellRef = Union[Present, _EmptyPlaceholder]


# ------------------------------------------------------------------------------
# Float -> pixel conversion
# ------------------------------------------------------------------------------
def _saturate(value: float) -> int:
    if math.isnan(value):
        return 0
    if value >= PIXEL_MAX:
        return PIXEL_MAX
    if value <= PIXEL_MIN:
        return PIXEL_MIN
    return int(value)


def truncate_pixel(value: float) -> int:
    """Convert to pixels truncating toward zero. NaN gives 0, infinities clamp."""
    return _saturate(float(value))


def round_pixel(value: float) -> int:
    """Convert to pixels rounding half up. NaN gives 0, infinities clamp."""
    value = float(value)
    if not math.isfinite(value):
        return _saturate(value)
    return _saturate(math.floor(value + 0.5))
