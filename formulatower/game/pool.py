"""
Number pool: the board of numbers 1..N and their lifecycle.

Each number starts AVAILABLE and moves exactly once, either to USED (spent
on a correct answer) or to REMOVED (taken by a random removal). Pools are
immutable; every transition returns a new pool.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Sequence, Tuple

import numpy as np

from formulatower.expression.errors import (
    DuplicateUsageInExpression,
    InvalidTransition,
    NoNumbersUsed,
    NonIntegerUsage,
    NumberAlreadyConsumed,
    OutOfRange,
    PoolExhausted,
)
from formulatower.expression.tokens import NumberToken, tokenize

logger = logging.getLogger(__name__)


class PoolState(str, Enum):
    AVAILABLE = "available"
    USED = "used"
    REMOVED = "removed"


_BOARD_MARKS = {PoolState.USED: ".", PoolState.REMOVED: "x"}


@dataclass(frozen=True)
class PoolNumber:
    value: int
    state: PoolState


@dataclass(frozen=True)
class NumberPool:
    """Immutable board state. ``states[i]`` is the state of number ``i + 1``."""

    states: Tuple[PoolState, ...]

    @property
    def size(self) -> int:
        return len(self.states)

    def __len__(self) -> int:
        return len(self.states)

    def __iter__(self) -> Iterator[PoolNumber]:
        for i, state in enumerate(self.states):
            yield PoolNumber(i + 1, state)

    def __contains__(self, value: object) -> bool:
        return isinstance(value, int) and 1 <= value <= self.size

    def state_of(self, value: int) -> PoolState:
        if value not in self:
            raise OutOfRange(value)
        return self.states[value - 1]

    def is_available(self, value: int) -> bool:
        return value in self and self.states[value - 1] is PoolState.AVAILABLE

    def counts(self) -> Dict[str, int]:
        """Number of entries per state, keyed by state name."""
        result = {state.value: 0 for state in PoolState}
        for state in self.states:
            result[state.value] += 1
        return result

    def as_mask(self) -> np.ndarray:
        """int8 array with 1 where the number is still available."""
        return np.fromiter(
            (state is PoolState.AVAILABLE for state in self.states),
            dtype=np.int8,
            count=self.size,
        )

    def _transition(self, values: Iterable[int], target: PoolState) -> NumberPool:
        states = list(self.states)
        for value in values:
            if value not in self:
                raise OutOfRange(value)
            if states[value - 1] is not PoolState.AVAILABLE:
                raise InvalidTransition(value)
            states[value - 1] = target
        return NumberPool(tuple(states))

    def mark_used(self, values: Iterable[int]) -> NumberPool:
        return self._transition(values, PoolState.USED)

    def mark_removed(self, value: int) -> NumberPool:
        return self._transition([value], PoolState.REMOVED)

    def board(self, width: int = 10) -> str:
        """
        Text grid of the pool, ``width`` numbers per row.

        Available numbers show their value, used ones ``.`` and removed ones ``x``.
        """
        cells = [
            f"{n.value:3d}" if n.state is PoolState.AVAILABLE else f"  {_BOARD_MARKS[n.state]}"
            for n in self
        ]
        return "\n".join(" ".join(cells[i:i + width]) for i in range(0, len(cells), width))


def make_pool(size: int = 100) -> NumberPool:
    """Fresh pool holding 1..size, all available."""
    if size < 1:
        raise ValueError(f"size must be >= 1, got {size}")
    return NumberPool((PoolState.AVAILABLE,) * size)


def extract_numbers(text: str) -> List[int]:
    """Number literals of an expression, in order of appearance."""
    return [t.value for t in tokenize(text) if isinstance(t, NumberToken)]


def check_numbers(numbers: Sequence, pool: NumberPool) -> List[int]:
    """
    Check that ``numbers`` can be drawn from ``pool`` for a single answer.

    Args:
        numbers: Values used by an expression, in order of appearance.
        pool: Current board.

    Returns:
        The distinct values, in order of first appearance.

    Raises:
        NoNumbersUsed: If ``numbers`` is empty.
        NonIntegerUsage: If a value is not an integer.
        OutOfRange: If a value is not on the board.
        DuplicateUsageInExpression: If a value appears twice.
        NumberAlreadyConsumed: If a value is used or removed.
    """
    if not numbers:
        raise NoNumbersUsed()

    seen: List[int] = []
    for n in numbers:
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
            if isinstance(n, float) and n.is_integer():
                n = int(n)
            else:
                raise NonIntegerUsage(n)
        n = int(n)
        if n not in pool:
            raise OutOfRange(n)
        if n in seen:
            raise DuplicateUsageInExpression(n)
        seen.append(n)

    for n in seen:
        if not pool.is_available(n):
            raise NumberAlreadyConsumed(n)
    return seen


def validate_usage(text: str, pool: NumberPool) -> List[int]:
    """
    Validate the numbers of an expression against the pool. Read-only.

    Tokenizer errors propagate unchanged; see ``check_numbers`` for the rest.
    """
    return check_numbers(extract_numbers(text), pool)


def remove_random(pool: NumberPool, rng: np.random.Generator) -> Tuple[NumberPool, int]:
    """
    Remove one available number chosen uniformly at random.

    Returns:
        (new_pool, removed_value)

    Raises:
        PoolExhausted: If nothing is available.
    """
    candidates = np.flatnonzero(pool.as_mask()) + 1
    if candidates.size == 0:
        raise PoolExhausted()
    value = int(rng.choice(candidates))
    logger.debug("Removing %d from pool (%d available)", value, candidates.size)
    return pool.mark_removed(value), value
