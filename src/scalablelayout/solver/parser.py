"""
Recursive-descent parser for the layout expression language.

Binding tiers, tightest first (left-to-right inside a tier):

    value       number | variable | ( expression )
    call        cos sin tan log ln applied to one (optionally negated) value
    signed      an optional '-' in front of a call or value
    max, min    infix two-argument functions
    ^  r  *  /  each its own tier; juxtaposed values multiply in the '*' tier
    + -         sums

A binary '-' negates the value that immediately follows it and adds the rest
of that term. This keeps "2-3^2" == 11 and "5-3*-2" == 11, exactly as the
formulas authored against the classic solver expect.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Union

from scalablelayout.model.errors import MalformedExpression
from scalablelayout.model.expression import (
    ZERO, BinaryOp, Expression, Function, InfixCall, Literal, Negate, Operator,
    UnaryCall, Variable,
)
from scalablelayout.solver.tokenizer import Token, TokenKind, strip_whitespace, tokenize

logger = logging.getLogger(__name__)

# Loosest first; the sum tier (+, -) sits above all of these
_TIERS: tuple[Union[Operator, Function], ...] = (
    Operator.DIV,
    Operator.MUL,
    Operator.ROOT,
    Operator.POW,
    Function.MIN,
    Function.MAX,
)

_VALUE_STARTS = (TokenKind.NUMBER, TokenKind.VARIABLE, TokenKind.LPAREN)


class Parser:
    """Single-use parser over one token list."""

    def __init__(self, tokens: List[Token], source: str) -> None:
        self.tokens = tokens
        self.source = source
        self.pos = 0
        # Set by a binary '-' and consumed by the next signed value
        self._negate_next = False

    # ---- token helpers ----

    def _peek(self) -> Optional[Token]:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def _advance(self) -> Token:
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def _at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def _is_operator(self, token: Optional[Token], op: Operator) -> bool:
        return token is not None and token.kind is TokenKind.OPERATOR and token.operator is op

    def _error(self, message: str, token: Optional[Token] = None) -> MalformedExpression:
        position = token.position if token is not None else len(self.source)
        return MalformedExpression(message, self.source, position)

    # ---- grammar ----

    def parse(self) -> Expression:
        if self._at_end():
            return ZERO
        node = self._parse_sum()
        if not self._at_end():
            token = self._peek()
            raise self._error(f"unexpected '{token.text}'", token)
        return node

    def _parse_sum(self) -> Expression:
        left = self._parse_tier(0)
        while True:
            token = self._peek()
            if self._is_operator(token, Operator.ADD):
                self._advance()
            elif self._is_operator(token, Operator.SUB):
                self._advance()
                self._negate_next = True
            else:
                return left
            right = self._parse_tier(0)
            left = BinaryOp(Operator.ADD, left, right)

    def _continues_tier(self, level: int) -> bool:
        token = self._peek()
        if token is None:
            return False
        op = _TIERS[level]
        if isinstance(op, Function):
            return token.kind is TokenKind.FUNCTION and token.function is op
        if self._is_operator(token, op):
            return True
        # Juxtaposition: "2(3)", "2width", "5cos0"
        if op is Operator.MUL:
            if token.kind in _VALUE_STARTS:
                return True
            return token.kind is TokenKind.FUNCTION and not token.function.is_infix
        return False

    def _parse_tier(self, level: int) -> Expression:
        if level == len(_TIERS):
            return self._parse_signed()
        op = _TIERS[level]
        left = self._parse_tier(level + 1)
        while self._continues_tier(level):
            token = self._peek()
            if token.kind in (TokenKind.OPERATOR, TokenKind.FUNCTION) and (token.operator is op or token.function is op):
                self._advance()
            right = self._parse_tier(level + 1)
            if isinstance(op, Function):
                left = InfixCall(op, left, right)
            else:
                left = BinaryOp(op, left, right)
        return left

    def _parse_signed(self) -> Expression:
        negate = self._negate_next
        self._negate_next = False
        if self._is_operator(self._peek(), Operator.SUB):
            self._advance()
            negate = not negate
        node = self._parse_call()
        return Negate(node) if negate else node

    def _parse_call(self) -> Expression:
        token = self._peek()
        if token is not None and token.kind is TokenKind.FUNCTION:
            if token.function.is_infix:
                raise self._error(f"'{token.text}' needs a value on its left", token)
            self._advance()
            return UnaryCall(token.function, self._parse_argument(token))
        return self._parse_value()

    def _parse_argument(self, function_token: Token) -> Expression:
        """A function consumes only the (optionally negated) value right after it."""
        negate = False
        if self._is_operator(self._peek(), Operator.SUB):
            self._advance()
            negate = True
        token = self._peek()
        if token is None or token.kind not in _VALUE_STARTS:
            raise self._error(
                f"'{function_token.text}' must be followed by a number, variable or parenthesized group",
                token,
            )
        node = self._parse_value()
        return Negate(node) if negate else node

    def _parse_value(self) -> Expression:
        token = self._peek()
        if token is None:
            raise self._error("expression ends where a value was expected")
        if token.kind is TokenKind.NUMBER:
            self._advance()
            return Literal(token.value)
        if token.kind is TokenKind.VARIABLE:
            self._advance()
            return Variable(token.text)
        if token.kind is TokenKind.LPAREN:
            self._advance()
            return self._parse_group()
        if token.kind is TokenKind.RPAREN:
            raise self._error("unbalanced ')'", token)
        raise self._error(f"expected a value before '{token.text}'", token)

    def _parse_group(self) -> Expression:
        # An unclosed '(' runs to the end of the text
        token = self._peek()
        if token is None:
            return ZERO
        if token.kind is TokenKind.RPAREN:
            self._advance()
            return ZERO
        inner = self._parse_sum()
        token = self._peek()
        if token is None:
            return inner
        if token.kind is TokenKind.RPAREN:
            self._advance()
            return inner
        raise self._error(f"unexpected '{token.text}'", token)


def parse(text: Optional[str], variables: Optional[Iterable[str]] = None) -> Expression:
    """
    Parse a layout formula once into a reusable Expression tree.

    Args:
        text: The formula. None, empty and whitespace-only text mean 0.
        variables: Extra variable names to recognise on top of the base and
            extended layout variables. Their values are supplied to
            `evaluate` in the bindings mapping.

    Returns:
        The root node of the parsed tree.

    Raises:
        MalformedExpression: If the text is not a valid formula, or nests
            parentheses too deeply to parse.
        UnsupportedOperator: If the text contains an unknown symbol.
    """
    if text is None:
        return ZERO
    tokens = tokenize(text, variables)
    source = strip_whitespace(text)
    try:
        tree = Parser(tokens, source).parse()
    except RecursionError:
        raise MalformedExpression("parentheses nest too deeply", source) from None
    # Token count only: rendering a long tree is as deep as the tree itself
    logger.debug(f"Parsed '{source}' ({len(tokens)} tokens)")
    return tree
