"""
Exception hierarchy for Formula Tower.

Every failure a player can trigger is a FormulaTowerError. They are all
recoverable: session transitions catch them and report ``str(error)`` back
to the presentation layer without touching game state.

    FormulaTowerError
    ├── ExpressionError     tokenizer / parser / evaluator
    └── PoolError           number pool validation and transitions
"""

from typing import Optional


class FormulaTowerError(Exception):
    """Base class for all user-recoverable game errors."""

    kind: str = "error"
    default_message: str = "Invalid input."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


# =========================================================================
# Expression errors
# =========================================================================


class ExpressionError(FormulaTowerError):
    """Raised when an expression is invalid or cannot be evaluated."""

    kind = "expression_error"
    default_message = "The expression is not valid."


class InvalidCharacter(ExpressionError):
    kind = "invalid_character"

    def __init__(self, character: str):
        self.character = character
        super().__init__(f"Unexpected character: {character!r}")


class UnsupportedUnaryOperator(ExpressionError):
    kind = "unsupported_unary_operator"
    default_message = (
        "Unary operators (e.g. -5) are not supported. Rewrite the expression."
    )


class EmptyExpression(ExpressionError):
    kind = "empty_expression"
    default_message = "Empty expression: enter a formula."


class MismatchedParentheses(ExpressionError):
    kind = "mismatched_parentheses"
    default_message = "Mismatched parentheses."


class MalformedExpression(ExpressionError):
    kind = "malformed_expression"
    default_message = "The expression is malformed."


class InvalidArithmeticResult(ExpressionError):
    kind = "invalid_arithmetic_result"
    default_message = "Invalid calculation (e.g. division by zero)."


# =========================================================================
# Pool errors
# =========================================================================


class PoolError(FormulaTowerError):
    """Raised when an expression breaks the number pool rules."""

    kind = "pool_error"
    default_message = "The numbers in this expression cannot be used."


class NoNumbersUsed(PoolError):
    kind = "no_numbers_used"
    default_message = "Enter an expression that contains at least one number."


class _ValueError(PoolError):
    """Pool error that names the offending number."""

    template = "{value}"

    def __init__(self, value):
        self.value = value
        super().__init__(self.template.format(value=value))


class NonIntegerUsage(_ValueError):
    kind = "non_integer_usage"
    template = "Only whole numbers can be used (got {value})."


class OutOfRange(_ValueError):
    kind = "out_of_range"
    template = "Number {value} is not on the board."


class DuplicateUsageInExpression(_ValueError):
    kind = "duplicate_usage_in_expression"
    template = "Number {value} appears more than once in the expression."


class NumberAlreadyConsumed(_ValueError):
    kind = "number_already_consumed"
    template = "Number {value} has already been used or removed."


class PoolExhausted(PoolError):
    kind = "pool_exhausted"
    default_message = "No numbers left to remove."


class InvalidTransition(_ValueError):
    kind = "invalid_transition"
    template = "Number {value} is no longer available."
