"""
Scalable Layout
===============
Expression-driven layout for desktop widgets: components describe position
and size with formulas such as "centerx - width/3", resolved to pixels on
every render.
"""
from scalablelayout.layout.grid import GridFormatter, identity_div
from scalablelayout.layout.panel import Component, LayoutPass, Panel
from scalablelayout.layout.resolver import (
    Dimension, FreePlacement, GridPlacement, RectangleResolver, resolve_rect,
)
from scalablelayout.model.environment import VariableEnvironment
from scalablelayout.model.errors import (
    ExpressionError, LayoutError, MalformedExpression, UnsupportedOperator,
)
from scalablelayout.model.geometry import EMPTY, Axis, Cell, PixelRect, Present
from scalablelayout.solver import evaluate, parse

__all__ = [
    # Expressions
    "parse",
    "evaluate",
    "VariableEnvironment",
    # Grid
    "GridFormatter",
    "identity_div",
    "Cell",
    "Axis",
    "EMPTY",
    "Present",
    # Resolution
    "PixelRect",
    "Dimension",
    "FreePlacement",
    "GridPlacement",
    "RectangleResolver",
    "resolve_rect",
    # Component tree
    "Component",
    "Panel",
    "LayoutPass",
    # Errors
    "LayoutError",
    "ExpressionError",
    "MalformedExpression",
    "UnsupportedOperator",
]
