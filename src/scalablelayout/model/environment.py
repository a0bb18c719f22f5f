"""
Variable Environment
====================
Name -> value bindings visible to an expression during one evaluation.

Why is this file needed?
------------------------
1. Every render pass rebuilds the bindings from the current container size.
   Keeping that derivation in one place guarantees every widget sees the same
   `centerx`, `width`, ... for a given container.
2. The extended names (CENTERX, CENTERY, WIDTH, HEIGHT) depend on a
   component's own resolved size. They are only added through
   `with_component`, so width/height formulas can never see them.

Classes:
    VariableEnvironment: Immutable Mapping of bindings.
"""
from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Optional

from scalablelayout.config import (
    CENTER_X, CENTER_Y, CONSTANTS, EXT_CENTER_X, EXT_CENTER_Y, EXT_HEIGHT,
    EXT_WIDTH, HEIGHT, WIDTH,
)


class VariableEnvironment(Mapping):
    """
    Read-only bindings for one evaluation context.

    The environment is a plain Mapping, so `evaluate` accepts it as well as a
    dict. Deriving a new environment never mutates the original.
    """

    __slots__ = ("_values", "container_width", "container_height")

    def __init__(
        self,
        container_width: float,
        container_height: float,
        values: Mapping[str, float],
    ) -> None:
        self.container_width = float(container_width)
        self.container_height = float(container_height)
        self._values = MappingProxyType(dict(values))

    @classmethod
    def for_container(cls, width: float, height: float) -> VariableEnvironment:
        """
        Build the base bindings for a container of the given pixel size.

        Args:
            width: Container width in pixels.
            height: Container height in pixels.

        Returns:
            An environment with centerx, centery, width, height, pi and e bound.
        """
        values: dict[str, float] = dict(CONSTANTS)
        values[CENTER_X] = width / 2
        values[CENTER_Y] = height / 2
        values[WIDTH] = float(width)
        values[HEIGHT] = float(height)
        return cls(width, height, values)

    def with_component(
        self,
        width: Optional[float] = None,
        height: Optional[float] = None,
    ) -> VariableEnvironment:
        """
        Derive the environment used for x/y formulas once a component's size is known.

        An axis passed as None keeps its extended variables unbound.

        Args:
            width: The component's resolved width in pixels.
            height: The component's resolved height in pixels.
        """
        values = dict(self._values)
        if width is not None:
            values[EXT_CENTER_X] = (self.container_width - width) / 2
            values[EXT_WIDTH] = float(width)
        if height is not None:
            values[EXT_CENTER_Y] = (self.container_height - height) / 2
            values[EXT_HEIGHT] = float(height)
        return VariableEnvironment(self.container_width, self.container_height, values)

    # Mapping protocol
    def __getitem__(self, name: str) -> float:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        bindings = ", ".join(f"{k}={v:g}" for k, v in self._values.items())
        return f"VariableEnvironment({bindings})"
