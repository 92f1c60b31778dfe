"""
Postfix evaluator for Formula Tower expressions.

No eval(), no ast module. Division is true division, so ``7/2`` is 3.5 and
a target can be hit through a non-integer intermediate.
"""

import math
import operator
from typing import Callable, Dict, List

from .errors import EmptyExpression, InvalidArithmeticResult, MalformedExpression
from .parser import to_postfix
from .tokens import NumberToken, OperatorToken, Token, tokenize


def _divide(a: float, b: float) -> float:
    if b == 0:
        raise InvalidArithmeticResult("Division by zero.")
    return a / b


_APPLY: Dict[str, Callable[[float, float], float]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _divide,
}


def evaluate_postfix(postfix: List[Token]) -> float:
    """
    Execute a postfix token sequence.

    Raises:
        MalformedExpression: If an operator lacks operands or more than one
            value is left at the end.
        InvalidArithmeticResult: On division by zero or a non-finite result.
    """
    stack: List[float] = []
    for token in postfix:
        if isinstance(token, NumberToken):
            try:
                stack.append(float(token.value))
            except OverflowError:
                raise InvalidArithmeticResult()
        elif isinstance(token, OperatorToken):
            if len(stack) < 2:
                raise MalformedExpression()
            b = stack.pop()
            a = stack.pop()
            try:
                value = _APPLY[token.symbol](a, b)
            except OverflowError:
                raise InvalidArithmeticResult()
            if not math.isfinite(value):
                raise InvalidArithmeticResult()
            stack.append(value)
        else:
            raise MalformedExpression()

    if len(stack) != 1:
        raise MalformedExpression()
    return stack[0]


def evaluate(text: str) -> float:
    """
    Tokenize, parse and evaluate an expression.

    Args:
        text: Expression such as ``"(2+3)*4"``.

    Returns:
        The value as a float.

    Raises:
        ExpressionError: Any tokenizer, parser or evaluator failure, including
            ``EmptyExpression`` for blank input.
    """
    tokens = tokenize(text)
    if not tokens:
        raise EmptyExpression()
    return evaluate_postfix(to_postfix(tokens))
