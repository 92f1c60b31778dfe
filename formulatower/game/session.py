"""
Round and game state machine.

A GameSession is an immutable snapshot. Every transition below is a pure
function ``(session, ...) -> SessionDelta``; the caller keeps the returned
``delta.session`` as the new state. Phases:

    SETUP --start--> PLAYING --correct--> PLAYING[awaiting] --advance--> PLAYING
                        |                       |                  (no target left)
                        +--- countdown 0 / terminate ---> OVER <-------+
    OVER --restart--> SETUP

Player mistakes never raise from here: expression and pool errors come back
as ``ok=False`` with the error message and the session unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple

import numpy as np

from formulatower.expression.errors import FormulaTowerError, PoolExhausted
from formulatower.expression.evaluator import evaluate
from .config import GameConfig
from .pool import NumberPool, make_pool, remove_random, validate_usage
from .scoring import compute_points, format_time
from .targets import generate_targets

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    SETUP = "setup"
    PLAYING = "playing"
    OVER = "over"


@dataclass(frozen=True)
class GameSession:
    config: GameConfig
    pool: NumberPool
    targets: Tuple[int, ...]
    phase: Phase = Phase.SETUP
    index: int = 0
    time_left: int = 0
    correct: int = 0
    expression: str = ""
    awaiting_advance: bool = False
    message: Optional[str] = None

    @property
    def current_target(self) -> Optional[int]:
        if 0 <= self.index < len(self.targets):
            return self.targets[self.index]
        return None

    @property
    def points(self) -> int:
        return compute_points(self.correct)

    @property
    def is_playing(self) -> bool:
        return self.phase is Phase.PLAYING

    @property
    def accepts_input(self) -> bool:
        return self.phase is Phase.PLAYING and not self.awaiting_advance

    @property
    def clock_running(self) -> bool:
        """True while the one-second tick should decrement the countdown."""
        return self.accepts_input and self.time_left > 0


@dataclass(frozen=True)
class SessionDelta:
    """Outcome of one transition."""

    session: GameSession
    ok: bool
    message: str = ""
    value: Optional[float] = None
    removed: Optional[int] = None
    used: Tuple[int, ...] = field(default_factory=tuple)

    # Convenience accessors for the presentation layer
    @property
    def time_left(self) -> int:
        return self.session.time_left

    @property
    def pool(self) -> NumberPool:
        return self.session.pool

    @property
    def correct(self) -> int:
        return self.session.correct


def _ok(session: GameSession, message: str, **kwargs) -> SessionDelta:
    return SessionDelta(replace(session, message=message), True, message, **kwargs)


def _reject(session: GameSession, message: str) -> SessionDelta:
    return SessionDelta(replace(session, message=message), False, message)


def format_value(value: float) -> str:
    """Integers print as integers, anything else with six decimals."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.6f}"


def _game_over(session: GameSession, reason: str) -> GameSession:
    logger.info(
        "Game over (%s): %d correct, %d pt, %ds left",
        reason, session.correct, session.points, session.time_left,
    )
    return replace(session, phase=Phase.OVER, awaiting_advance=False)


# =========================================================================
# Setup / lifecycle
# =========================================================================


def new_session(
    config: Optional[GameConfig] = None,
    rng: Optional[np.random.Generator] = None,
) -> GameSession:
    """Fresh session in SETUP with a new pool and target list."""
    config = config or GameConfig()
    targets = generate_targets(config.target_count, rng, policy=config.target_policy)
    return GameSession(
        config=config,
        pool=make_pool(config.pool_size),
        targets=tuple(targets),
        time_left=config.base_time,
    )


def start(session: GameSession) -> SessionDelta:
    """SETUP -> PLAYING. Clears the input buffer and starts the countdown."""
    if session.phase is not Phase.SETUP:
        return _reject(session, "The game has already started.")
    logger.debug("Starting game with %ds on the clock", session.time_left)
    started = replace(session, phase=Phase.PLAYING, expression="", awaiting_advance=False)
    return _ok(started, "Game started!")


def terminate(session: GameSession) -> SessionDelta:
    """End the game early."""
    if session.phase is not Phase.PLAYING:
        return _reject(session, "No game in progress.")
    return _ok(_game_over(session, "terminated"), "Game ended.")


def restart(
    session: GameSession, rng: Optional[np.random.Generator] = None
) -> SessionDelta:
    """Any phase -> fresh SETUP session with the same config."""
    logger.debug("Restarting game from phase %s", session.phase.value)
    return _ok(new_session(session.config, rng), "New game.")


# =========================================================================
# Player actions
# =========================================================================


def remove_random_number(
    session: GameSession, rng: Optional[np.random.Generator] = None
) -> SessionDelta:
    """
    Remove one random available number in exchange for extra time.

    Before the game starts each removal is worth ``setup_removal_bonus``;
    during play ``play_removal_bonus``, including between rounds. An exhausted pool is reported with
    ``ok=False`` and changes nothing.
    """
    if session.phase is Phase.SETUP:
        bonus = session.config.setup_removal_bonus
    elif session.phase is Phase.PLAYING:
        bonus = session.config.play_removal_bonus
    else:
        return _reject(session, "Numbers cannot be removed right now.")

    rng = rng if rng is not None else np.random.default_rng()
    try:
        pool, value = remove_random(session.pool, rng)
    except PoolExhausted as e:
        return _reject(session, str(e))

    updated = replace(session, pool=pool, time_left=session.time_left + bonus)
    return _ok(updated, f"Removed random number {value} (+{bonus}s)", removed=value)


def submit(session: GameSession, text: Optional[str] = None) -> SessionDelta:
    """
    Check an answer against the current target.

    Args:
        session: Current state.
        text: Expression to submit; defaults to the session's input buffer.

    Returns:
        Delta with ``ok=True`` on a correct answer. A wrong answer costs
        ``wrong_penalty`` seconds and reports the computed value. Invalid
        input leaves the session untouched.
    """
    if session.phase is not Phase.PLAYING:
        return _reject(session, "No game in progress.")
    if session.awaiting_advance:
        return _reject(session, "Start the next round before submitting.")
    target = session.current_target
    if target is None:
        return _reject(session, "No target for this round.")

    expr = session.expression if text is None else text
    try:
        used = validate_usage(expr, session.pool)
        value = evaluate(expr)
    except FormulaTowerError as e:
        logger.debug("Rejected %r: %s", expr, e)
        return _reject(session, str(e))

    if abs(value - target) >= session.config.tolerance:
        penalty = session.config.wrong_penalty
        updated = replace(
            session,
            time_left=max(0, session.time_left - penalty),
            expression="",
        )
        message = f"Wrong (-{penalty}s). Computed: {format_value(value)}"
        if updated.time_left == 0:
            updated = _game_over(updated, "time")
        delta = _reject(updated, message)
        return replace(delta, value=value)

    updated = replace(
        session,
        pool=session.pool.mark_used(used),
        correct=session.correct + 1,
        expression="",
        awaiting_advance=True,
    )
    used_text = ", ".join(str(n) for n in sorted(used))
    logger.debug("Round %d cleared with %s", session.index + 1, used)
    return _ok(updated, f"Correct! Used numbers: {used_text}", value=value, used=tuple(used))


def advance_round(session: GameSession) -> SessionDelta:
    """Move on after a correct answer; the game ends after the last target."""
    if not (session.phase is Phase.PLAYING and session.awaiting_advance):
        return _reject(session, "Solve the current round first.")
    if session.index + 1 >= len(session.targets):
        return _ok(_game_over(session, "last round"), "All rounds cleared.")
    updated = replace(
        session, index=session.index + 1, expression="", awaiting_advance=False
    )
    return _ok(updated, "Next round!")


def tick(session: GameSession) -> SessionDelta:
    """One second passes. Only counts down while input is accepted."""
    if not session.clock_running:
        return SessionDelta(session, True)
    remaining = max(0, session.time_left - 1)
    updated = replace(session, time_left=remaining)
    if remaining == 0:
        return _ok(_game_over(updated, "time"), "Time is up.")
    return SessionDelta(updated, True)


# =========================================================================
# Input buffer
# =========================================================================


def append_input(session: GameSession, text: str) -> SessionDelta:
    if not session.accepts_input:
        return _reject(session, "Input is locked.")
    return SessionDelta(replace(session, expression=session.expression + "".join(text.split())), True)


def press_number(session: GameSession, value: int) -> SessionDelta:
    """Append a board number; two numbers need an operator between them."""
    if not session.accepts_input:
        return _reject(session, "Input is locked.")
    if not session.pool.is_available(value):
        return _reject(session, f"Number {value} is not available.")
    last = session.expression[-1:]
    if last and (last.isdigit() or last == ")"):
        return _reject(session, "Put an operator between numbers.")
    return append_input(session, str(value))


def backspace(session: GameSession) -> SessionDelta:
    if not session.accepts_input:
        return _reject(session, "Input is locked.")
    return SessionDelta(replace(session, expression=session.expression[:-1]), True)


def clear_input(session: GameSession) -> SessionDelta:
    if not session.accepts_input:
        return _reject(session, "Input is locked.")
    return SessionDelta(replace(session, expression=""), True)


def summary(session: GameSession) -> Dict[str, Any]:
    """Flat view of the session for display and logging."""
    return {
        "phase": session.phase.value,
        "round": session.index + 1,
        "rounds": len(session.targets),
        "target": session.current_target,
        "time_left": session.time_left,
        "clock": format_time(session.time_left),
        "correct": session.correct,
        "points": session.points,
        "awaiting_advance": session.awaiting_advance,
        **session.pool.counts(),
    }
