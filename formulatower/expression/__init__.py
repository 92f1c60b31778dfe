"""
Expression engine: tokenizer -> shunting-yard parser -> postfix evaluator.
"""

from .errors import (
    ExpressionError,
    InvalidCharacter,
    UnsupportedUnaryOperator,
    EmptyExpression,
    MismatchedParentheses,
    MalformedExpression,
    InvalidArithmeticResult,
)
from .tokens import (
    Token,
    NumberToken,
    OperatorToken,
    ParenToken,
    normalize_expression,
    tokenize,
)
from .parser import PRECEDENCE, to_postfix, render_postfix, render_infix
from .evaluator import evaluate, evaluate_postfix

__all__ = [
    "ExpressionError",
    "InvalidCharacter",
    "UnsupportedUnaryOperator",
    "EmptyExpression",
    "MismatchedParentheses",
    "MalformedExpression",
    "InvalidArithmeticResult",
    "Token",
    "NumberToken",
    "OperatorToken",
    "ParenToken",
    "normalize_expression",
    "tokenize",
    "PRECEDENCE",
    "to_postfix",
    "render_postfix",
    "render_infix",
    "evaluate",
    "evaluate_postfix",
]
