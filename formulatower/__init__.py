"""
Formula Tower: reach-the-target arithmetic practice game.

This module exposes the expression engine, the game state machine and the
gymnasium environment.
"""

from .expression.errors import (
    FormulaTowerError,
    ExpressionError,
    InvalidCharacter,
    UnsupportedUnaryOperator,
    EmptyExpression,
    MismatchedParentheses,
    MalformedExpression,
    InvalidArithmeticResult,
    PoolError,
    NoNumbersUsed,
    NonIntegerUsage,
    OutOfRange,
    DuplicateUsageInExpression,
    NumberAlreadyConsumed,
    PoolExhausted,
    InvalidTransition,
)
from .expression import (
    Token,
    NumberToken,
    OperatorToken,
    ParenToken,
    tokenize,
    to_postfix,
    evaluate,
    evaluate_postfix,
)
from .game import *  # noqa: F403,F401
from . import game
from .environment import FormulaTowerEnv, create_environment

__all__ = [
    "FormulaTowerError",
    "ExpressionError",
    "InvalidCharacter",
    "UnsupportedUnaryOperator",
    "EmptyExpression",
    "MismatchedParentheses",
    "MalformedExpression",
    "InvalidArithmeticResult",
    "PoolError",
    "NoNumbersUsed",
    "NonIntegerUsage",
    "OutOfRange",
    "DuplicateUsageInExpression",
    "NumberAlreadyConsumed",
    "PoolExhausted",
    "InvalidTransition",
    "Token",
    "NumberToken",
    "OperatorToken",
    "ParenToken",
    "tokenize",
    "to_postfix",
    "evaluate",
    "evaluate_postfix",
    "FormulaTowerEnv",
    "create_environment",
] + game.__all__
