"""
Layout Errors
=============
Exception types raised while parsing, evaluating or resolving layout formulas.

Why is this file needed?
------------------------
Layout formulas are author-time configuration. A broken formula is a
programming mistake in the menu definition, so it must fail loudly and be
attributable to the widget that declared it, never silently default to 0.
"""
from __future__ import annotations

from typing import Optional


class LayoutError(Exception):
    """Base class for all errors raised by the layout resolver."""


class ExpressionError(LayoutError, ValueError):
    """
    An expression could not be parsed or evaluated.

    Attributes:
        expression: The source text of the offending expression.
        position: Index into the whitespace-free text where the problem was
            found, or None when it is not tied to a single spot.
    """

    def __init__(self, message: str, expression: str = "", position: Optional[int] = None) -> None:
        self.expression = expression
        self.position = position
        detail = message
        if expression:
            detail = f"{message} in expression '{expression}'"
            if position is not None:
                detail += f" (at index {position})"
        super().__init__(detail)


class MalformedExpression(ExpressionError):
    """Leftover text that cannot be read as a number after all substitutions."""


class UnsupportedOperator(ExpressionError):
    """A symbol that is not one of the supported operators was encountered."""
