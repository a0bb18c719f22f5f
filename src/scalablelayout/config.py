"""
Configuration & Global Constants
================================
This module serves as the central registry for global constants shared by the
expression solver, the layout resolver and the Qt front-end.

Why is this file needed?
------------------------
1. Abstraction: It prevents variable names and magic numbers (e.g. "?" or the
   pixel clamp range) from being scattered throughout the code.
2. Consistency: The tokenizer, the environment and the resolver must agree on
   exactly which names are variables. Keeping them here guarantees that.

Exports:
    BASE_VARIABLES (tuple[str, ...]): Names usable in every expression.
    EXTENDED_VARIABLES (tuple[str, ...]): Names usable only in x/y expressions.
    CONSTANTS (dict[str, float]): Mathematical constants always bound.
    CONTINUATION_PREFIX (str): Marks a width/height as an end coordinate.
"""
import math
from typing import Dict, Tuple


# Variables derived from the container size
CENTER_X: str = "centerx"
CENTER_Y: str = "centery"
WIDTH: str = "width"
HEIGHT: str = "height"

# Mathematical constants
PI: str = "pi"
E: str = "e"

BASE_VARIABLES: Tuple[str, ...] = (CENTER_X, CENTER_Y, WIDTH, HEIGHT, PI, E)

# Variables derived from a component's own resolved size
EXT_CENTER_X: str = "CENTERX"
EXT_CENTER_Y: str = "CENTERY"
EXT_WIDTH: str = "WIDTH"
EXT_HEIGHT: str = "HEIGHT"

EXTENDED_VARIABLES: Tuple[str, ...] = (EXT_CENTER_X, EXT_CENTER_Y, EXT_WIDTH, EXT_HEIGHT)

CONSTANTS: Dict[str, float] = {
    PI: math.pi,
    E: math.e,
}

# A width/height prefixed with this denotes an end coordinate instead of a length
CONTINUATION_PREFIX: str = "?"

# Pixel coordinates live in a signed 32-bit space (mirrors toolkit geometry types)
PIXEL_MIN: int = -(2 ** 31)
PIXEL_MAX: int = 2 ** 31 - 1

# Demo application
APP_NAME: str = "Scalable Layout"
DEFAULT_WINDOW_SIZE: Tuple[int, int] = (800, 600)
