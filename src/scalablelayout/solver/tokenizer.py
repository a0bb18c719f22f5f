"""
Tokenizer for the layout expression language.

Whitespace is stripped before scanning, so "3 5" reads as the single number 35,
matching how authors' formulas have always been interpreted.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Iterable, List, Optional

from scalablelayout.config import BASE_VARIABLES, EXTENDED_VARIABLES
from scalablelayout.model.errors import MalformedExpression, UnsupportedOperator
from scalablelayout.model.expression import Function, Operator

# 'r' is a letter but acts as the root operator
_SYMBOLS: dict[str, Operator] = {op.value: op for op in Operator if op is not Operator.ROOT}

DEFAULT_VARIABLES: tuple[str, ...] = BASE_VARIABLES + EXTENDED_VARIABLES


class TokenKind(StrEnum):
    NUMBER = "number"
    VARIABLE = "variable"
    FUNCTION = "function"
    OPERATOR = "operator"
    LPAREN = "("
    RPAREN = ")"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    position: int
    value: Optional[float] = None
    operator: Optional[Operator] = None
    function: Optional[Function] = None


def strip_whitespace(text: str) -> str:
    return "".join(text.split())


def _scan_number(text: str, start: int) -> int:
    """Return the index one past a numeric literal beginning at `start`."""
    i = start
    n = len(text)
    while i < n and (text[i].isdigit() or text[i] == "."):
        i += 1
    # Scientific notation: 1E5, 1E-2. Only the uppercase marker, 'e' is a constant.
    if i < n and text[i] == "E":
        i += 1
        if i < n and text[i] == "-":
            i += 1
        while i < n and text[i].isdigit():
            i += 1
    return i


def tokenize(text: str, variables: Optional[Iterable[str]] = None) -> List[Token]:
    """
    Split a formula into tokens.

    Identifiers are matched greedily against the known words (variables,
    function names and the 'r' operator), longest word first, so "lne" reads
    as "ln" followed by "e" and "cospi" as "cos" followed by "pi".

    Args:
        text: Formula text. Whitespace is insignificant.
        variables: Extra variable names to recognise on top of the base and
            extended layout variables.

    Returns:
        Tokens in source order. Positions index into the whitespace-free text.

    Raises:
        MalformedExpression: For an unreadable number or an unknown identifier.
        UnsupportedOperator: For a symbol that is not an operator or parenthesis.
    """
    source = strip_whitespace(text)
    names = DEFAULT_VARIABLES + tuple(variables or ())

    words: dict[str, Token] = {}
    for name in names:
        words[name] = Token(TokenKind.VARIABLE, name, -1)
    for fn in Function:
        words[fn.value] = Token(TokenKind.FUNCTION, fn.value, -1, function=fn)
    words[Operator.ROOT.value] = Token(TokenKind.OPERATOR, Operator.ROOT.value, -1, operator=Operator.ROOT)
    by_length = sorted(words, key=len, reverse=True)

    tokens: List[Token] = []
    i = 0
    while i < len(source):
        c = source[i]
        if c.isdigit() or c == ".":
            end = _scan_number(source, i)
            literal = source[i:end]
            try:
                value = float(literal)
            except ValueError:
                raise MalformedExpression(f"'{literal}' is not a number", source, i) from None
            tokens.append(Token(TokenKind.NUMBER, literal, i, value=value))
            i = end
        elif c == "(":
            tokens.append(Token(TokenKind.LPAREN, c, i))
            i += 1
        elif c == ")":
            tokens.append(Token(TokenKind.RPAREN, c, i))
            i += 1
        elif c in _SYMBOLS:
            tokens.append(Token(TokenKind.OPERATOR, c, i, operator=_SYMBOLS[c]))
            i += 1
        elif c.isalpha():
            word = next((w for w in by_length if source.startswith(w, i)), None)
            if word is None:
                raise MalformedExpression(f"unknown name starting with '{c}'", source, i)
            template = words[word]
            tokens.append(Token(template.kind, word, i, operator=template.operator, function=template.function))
            i += len(word)
        else:
            raise UnsupportedOperator(f"'{c}' is not a supported operator", source, i)
    return tokens
