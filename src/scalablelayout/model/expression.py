"""
Expression Tree
===============
Immutable node types produced by the parser and consumed by the evaluator.

Why is this file needed?
------------------------
A widget's formula is tokenized and parsed exactly once. The resulting tree is
then re-evaluated on every render pass, so the nodes are frozen dataclasses that
can be shared freely between passes without defensive copies.

Classes:
    Operator: Binary arithmetic operators in precedence order.
    Function: Named functions (single-argument prefix and two-argument infix).
    Literal, Variable, Negate, BinaryOp, UnaryCall, InfixCall: Tree nodes.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Union


# ------------------------------------------------------------------------------
# Enums
# ------------------------------------------------------------------------------
class Operator(StrEnum):
    """Arithmetic operators. Declaration order is binding order, tightest first."""
    POW = "^"
    ROOT = "r"
    MUL = "*"
    DIV = "/"
    ADD = "+"
    SUB = "-"


class Function(StrEnum):
    """Functions of the mini-language."""
    COS = "cos"
    SIN = "sin"
    TAN = "tan"
    LOG = "log"
    LN = "ln"
    MAX = "max"
    MIN = "min"

    @property
    def is_infix(self) -> bool:
        """Two-argument functions sit between their operands like an operator."""
        return self in (Function.MAX, Function.MIN)


# ------------------------------------------------------------------------------
# Nodes
# ------------------------------------------------------------------------------
@dataclass(frozen=True)
class Literal:
    """A numeric constant."""
    value: float

    def __str__(self) -> str:
        return f"{self.value:g}"


@dataclass(frozen=True)
class Variable:
    """A reference to a name bound in the Variable Environment."""
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Negate:
    """Negation of the value immediately following a '-' sign."""
    operand: Expression

    def __str__(self) -> str:
        return f"-{self.operand}"


@dataclass(frozen=True)
class BinaryOp:
    operator: Operator
    left: Expression
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass(frozen=True)
class UnaryCall:
    """cos, sin, tan, log or ln applied to a single value."""
    function: Function
    operand: Expression

    def __str__(self) -> str:
        return f"{self.function}({self.operand})"


@dataclass(frozen=True)
class InfixCall:
    """max or min written between its two arguments, e.g. '3 max 4'."""
    function: Function
    left: Expression
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.function} {self.right})"


# Union type for the tree
Expression = Union[Literal, Variable, Negate, BinaryOp, UnaryCall, InfixCall]

ZERO = Literal(0.0)
