"""Tests for the recursive-descent parser."""
import dataclasses
import logging

import pytest

from scalablelayout import MalformedExpression, parse
from scalablelayout.model.expression import (
    BinaryOp, Function, InfixCall, Literal, Negate, Operator, UnaryCall, Variable,
)


class TestParseTrees:
    """Tests for the shape of parsed trees."""

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_empty_is_zero(self, text):
        assert parse(text) == Literal(0.0)

    def test_implicit_multiplication_with_group(self):
        assert parse("2(5+3)") == BinaryOp(
            Operator.MUL, Literal(2.0), BinaryOp(Operator.ADD, Literal(5.0), Literal(3.0))
        )

    def test_implicit_multiplication_with_variable(self):
        assert parse("2width") == BinaryOp(Operator.MUL, Literal(2.0), Variable("width"))

    def test_leading_minus_is_negation(self):
        assert parse("-2^2") == BinaryOp(Operator.POW, Negate(Literal(2.0)), Literal(2.0))

    def test_binary_minus_negates_following_value(self):
        assert parse("2-3") == BinaryOp(Operator.ADD, Literal(2.0), Negate(Literal(3.0)))

    def test_infix_function(self):
        assert parse("3max4") == InfixCall(Function.MAX, Literal(3.0), Literal(4.0))

    def test_function_application(self):
        assert parse("cos0") == UnaryCall(Function.COS, Literal(0.0))

    def test_function_with_negated_argument(self):
        assert parse("cos-pi") == UnaryCall(Function.COS, Negate(Variable("pi")))

    def test_multiplication_binds_tighter_than_division(self):
        assert parse("8/2*2") == BinaryOp(
            Operator.DIV, Literal(8.0), BinaryOp(Operator.MUL, Literal(2.0), Literal(2.0))
        )

    def test_unclosed_parenthesis_runs_to_end(self):
        assert parse("(2+3") == parse("(2+3)")

    def test_empty_group(self):
        assert parse("()") == Literal(0.0)

    def test_parsing_is_deterministic(self):
        assert parse("centerx - width/3") == parse("centerx-width/3")

    def test_trees_are_immutable(self):
        tree = parse("1+2")
        with pytest.raises(dataclasses.FrozenInstanceError):
            tree.left = Literal(5.0)


class TestParseErrors:
    """Tests for malformed formulas."""

    @pytest.mark.parametrize("text", [
        "2+3)",      # stray closing parenthesis
        "2+",        # dangling operator
        "+2",        # no left operand
        "cossin0",   # function arguments must be values
        "max3",      # infix function without left operand
        "--2",       # double negation at start
        "2---3",     # too many signs
        "2*/3",
    ])
    def test_malformed(self, text):
        with pytest.raises(MalformedExpression):
            parse(text)

    def test_error_keeps_expression_text(self):
        with pytest.raises(MalformedExpression) as exc_info:
            parse("1 + )")
        assert exc_info.value.expression == "1+)"
        assert exc_info.value.position == 2


class TestParseLimits:
    """Tests for very long and very deep formulas."""

    def test_moderate_nesting(self):
        assert parse("(" * 20 + "1" + ")" * 20) == Literal(1.0)

    def test_deep_nesting_is_malformed(self):
        with pytest.raises(MalformedExpression):
            parse("(" * 500 + "1" + ")" * 500)

    def test_long_sum(self):
        tree = parse("+".join(["1"] * 350))
        assert isinstance(tree, BinaryOp)
        assert tree.operator is Operator.ADD

    def test_long_sum_with_debug_logging(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="scalablelayout.solver.parser"):
            parse("+".join(["1"] * 350))
        assert "699 tokens" in caplog.text
