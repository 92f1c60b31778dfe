"""
Shunting-yard conversion from infix tokens to postfix (RPN).

All four operators are left-associative, so an operator on the stack is
popped whenever its precedence is greater than or equal to the incoming one.
"""

from typing import Dict, List

from .errors import MalformedExpression, MismatchedParentheses
from .tokens import NumberToken, OperatorToken, ParenToken, Token

PRECEDENCE: Dict[str, int] = {"+": 1, "-": 1, "*": 2, "/": 2}


def to_postfix(tokens: List[Token]) -> List[Token]:
    """
    Convert an infix token sequence to postfix order.

    Args:
        tokens: Output of ``tokenize``.

    Returns:
        New list of Number and Operator tokens in postfix order.

    Raises:
        MismatchedParentheses: On an unmatched ``(`` or ``)``.
    """
    output: List[Token] = []
    stack: List[Token] = []

    for token in tokens:
        if isinstance(token, NumberToken):
            output.append(token)
        elif isinstance(token, OperatorToken):
            prec = PRECEDENCE[token.symbol]
            while (
                stack
                and isinstance(stack[-1], OperatorToken)
                and PRECEDENCE[stack[-1].symbol] >= prec
            ):
                output.append(stack.pop())
            stack.append(token)
        elif isinstance(token, ParenToken):
            if token.is_open:
                stack.append(token)
                continue
            while stack and not isinstance(stack[-1], ParenToken):
                output.append(stack.pop())
            if not stack:
                raise MismatchedParentheses()
            stack.pop()
        else:
            raise TypeError(f"Unknown token: {token!r}")

    while stack:
        top = stack.pop()
        if isinstance(top, ParenToken):
            raise MismatchedParentheses()
        output.append(top)

    return output


def render_postfix(postfix: List[Token]) -> str:
    """Canonical RPN text, e.g. ``"2 3 4 * +"``."""
    return " ".join(str(token) for token in postfix)


def render_infix(postfix: List[Token]) -> str:
    """
    Rebuild a fully parenthesised infix expression from postfix tokens.

    The result re-tokenizes without unary operators and evaluates to the
    same value as the postfix sequence.
    """
    stack: List[str] = []
    for token in postfix:
        if isinstance(token, NumberToken):
            stack.append(str(token.value))
        elif isinstance(token, OperatorToken):
            if len(stack) < 2:
                raise MalformedExpression()
            b = stack.pop()
            a = stack.pop()
            stack.append(f"({a}{token.symbol}{b})")
        else:
            raise MalformedExpression()
    if len(stack) != 1:
        raise MalformedExpression()
    return stack[0]
