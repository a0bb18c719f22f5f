"""
Tree-walking evaluator for parsed layout formulas.

Arithmetic goes through numpy float64 ufuncs so that division by zero, roots
of zero, logs of zero and negative bases with fractional powers give IEEE
results (inf / nan) instead of raising, the way the render loop expects.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Callable

import numpy as np

from scalablelayout.config import CONSTANTS
from scalablelayout.model.errors import MalformedExpression
from scalablelayout.model.expression import (
    BinaryOp, Expression, Function, InfixCall, Literal, Negate, Operator,
    UnaryCall, Variable,
)

_BINARY: dict[Operator, Callable[[np.float64, np.float64], np.float64]] = {}
_FUNCTIONS: dict[Function, Callable[..., np.float64]] = {}


def register_operator(op: Operator):
    """Decorator registering the implementation of a binary operator."""
    def wrap(fn):
        _BINARY[op] = fn
        return fn
    return wrap


def register_function(function: Function):
    """Decorator registering the implementation of a named function."""
    def wrap(fn):
        _FUNCTIONS[function] = fn
        return fn
    return wrap


@register_operator(Operator.POW)
def _pow(a, b):
    return np.power(a, b)


@register_operator(Operator.ROOT)
def _root(a, b):
    # a r b is the a-th root of b
    return np.power(b, np.divide(1.0, a))


@register_operator(Operator.MUL)
def _mul(a, b):
    return np.multiply(a, b)


@register_operator(Operator.DIV)
def _div(a, b):
    return np.divide(a, b)


@register_operator(Operator.ADD)
def _add(a, b):
    return np.add(a, b)


@register_operator(Operator.SUB)
def _sub(a, b):
    return np.subtract(a, b)


register_function(Function.COS)(np.cos)
register_function(Function.SIN)(np.sin)
register_function(Function.TAN)(np.tan)
register_function(Function.LOG)(np.log10)
register_function(Function.LN)(np.log)
register_function(Function.MAX)(np.maximum)
register_function(Function.MIN)(np.minimum)


def _operands(node: Expression) -> tuple[Expression, ...]:
    match node:
        case Negate(operand=operand) | UnaryCall(operand=operand):
            return (operand,)
        case BinaryOp(left=left, right=right) | InfixCall(left=left, right=right):
            return (left, right)
        case _:
            return ()


def _apply(node: Expression, args: tuple[np.float64, ...], bindings: Mapping[str, float]) -> np.float64:
    match node:
        case Literal(value=value):
            return np.float64(value)
        case Variable(name=name):
            if name in bindings:
                return np.float64(bindings[name])
            if name in CONSTANTS:
                return np.float64(CONSTANTS[name])
            raise MalformedExpression(f"variable '{name}' is not available here")
        case Negate():
            return np.negative(args[0])
        case BinaryOp(operator=op):
            return _BINARY[op](*args)
        case UnaryCall(function=fn) | InfixCall(function=fn):
            return _FUNCTIONS[fn](*args)
        case _:
            raise TypeError(f"Cannot evaluate {type(node).__name__}: {node!r}")


def _walk(root: Expression, bindings: Mapping[str, float]) -> np.float64:
    # Post-order on an explicit stack; long sums build trees deeper than the call stack
    values: list[np.float64] = []
    pending: list[tuple[Expression, bool]] = [(root, False)]
    while pending:
        node, expanded = pending.pop()
        operands = _operands(node)
        if expanded or not operands:
            split = len(values) - len(operands)
            args = tuple(values[split:])
            del values[split:]
            values.append(_apply(node, args, bindings))
        else:
            pending.append((node, True))
            pending.extend((operand, False) for operand in reversed(operands))
    return values[0]


def evaluate(expr: Expression, env: Mapping[str, float]) -> float:
    """
    Evaluate a parsed Expression against variable bindings.

    Evaluation has no side effects: neither the tree nor the mapping is
    modified, so a cached Expression can be re-evaluated with any number of
    environments.

    Args:
        expr: A tree produced by `parse`.
        env: Name -> value bindings, usually a VariableEnvironment. `pi` and `e`
            are always available even when missing from the mapping.

    Returns:
        The value as a Python float (may be inf or nan).

    Raises:
        MalformedExpression: If the formula uses a variable not bound in `env`.
    """
    with np.errstate(all="ignore"):
        return float(_walk(expr, env))
