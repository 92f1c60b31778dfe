"""
Token types and tokenizer for Formula Tower expressions.

Only base-10 integers, the four operators ``+ - * /`` and parentheses are
accepted. Whitespace is ignored. Unary operators are rejected so that every
number on the board is used as-is.
"""

import re
from dataclasses import dataclass
from typing import List, Union

from .errors import InvalidArithmeticResult, InvalidCharacter, UnsupportedUnaryOperator

OPERATORS = frozenset("+-*/")

# Keypad glyphs accepted as aliases for the ASCII operators
_GLYPHS = {"×": "*", "÷": "/"}

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class NumberToken:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class OperatorToken:
    symbol: str

    def __post_init__(self):
        if self.symbol not in OPERATORS:
            raise ValueError(f"Unknown operator: {self.symbol!r}")

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True)
class ParenToken:
    is_open: bool

    def __str__(self) -> str:
        return "(" if self.is_open else ")"


Token = Union[NumberToken, OperatorToken, ParenToken]

OPEN_PAREN = ParenToken(is_open=True)
CLOSE_PAREN = ParenToken(is_open=False)


def normalize_expression(text: str) -> str:
    """Strip whitespace and map keypad glyphs to ASCII operators."""
    for glyph, symbol in _GLYPHS.items():
        text = text.replace(glyph, symbol)
    return _WHITESPACE.sub("", text)


def tokenize(text: str) -> List[Token]:
    """
    Split an expression into tokens.

    Args:
        text: Raw expression, e.g. ``"25*40 + 4"``.

    Returns:
        List of tokens. Empty when ``text`` holds only whitespace.

    Raises:
        InvalidCharacter: On anything other than digits, operators and parens.
        UnsupportedUnaryOperator: When an operator starts the expression or
            follows another operator or an opening parenthesis.
        InvalidArithmeticResult: When a literal has too many digits to convert.
    """
    expr = normalize_expression(text)
    tokens: List[Token] = []
    i = 0
    while i < len(expr):
        ch = expr[i]
        if "0" <= ch <= "9":
            j = i + 1
            while j < len(expr) and "0" <= expr[j] <= "9":
                j += 1
            try:
                value = int(expr[i:j])
            except ValueError:
                # Beyond the interpreter's int-string conversion limit
                raise InvalidArithmeticResult("Number literal is too long.") from None
            tokens.append(NumberToken(value))
            i = j
        elif ch == "(":
            tokens.append(OPEN_PAREN)
            i += 1
        elif ch == ")":
            tokens.append(CLOSE_PAREN)
            i += 1
        elif ch in OPERATORS:
            tokens.append(OperatorToken(ch))
            i += 1
        else:
            raise InvalidCharacter(ch)

    _reject_unary(tokens)
    return tokens


def _reject_unary(tokens: List[Token]) -> None:
    previous = None
    for token in tokens:
        if isinstance(token, OperatorToken):
            if (
                previous is None
                or isinstance(previous, OperatorToken)
                or previous == OPEN_PAREN
            ):
                raise UnsupportedUnaryOperator()
        previous = token
