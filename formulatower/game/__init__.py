"""
Game layer: number pool, target policies, scoring and the round state machine.
"""

from .config import GameConfig
from .pool import (
    PoolState,
    PoolNumber,
    NumberPool,
    make_pool,
    extract_numbers,
    check_numbers,
    validate_usage,
    remove_random,
)
from .targets import (
    TargetPolicy,
    register_target_policy,
    get_target_policy,
    list_target_policies,
    generate_targets,
)
from .scoring import SCORE_THRESHOLDS, compute_points, format_time
from .session import (
    Phase,
    GameSession,
    SessionDelta,
    new_session,
    start,
    submit,
    tick,
    advance_round,
    remove_random_number,
    terminate,
    restart,
    append_input,
    press_number,
    backspace,
    clear_input,
    summary,
)
from .scheduler import TickScheduler
from .clock import GameClock

__all__ = [
    "GameConfig",
    "PoolState",
    "PoolNumber",
    "NumberPool",
    "make_pool",
    "extract_numbers",
    "check_numbers",
    "validate_usage",
    "remove_random",
    "TargetPolicy",
    "register_target_policy",
    "get_target_policy",
    "list_target_policies",
    "generate_targets",
    "SCORE_THRESHOLDS",
    "compute_points",
    "format_time",
    "Phase",
    "GameSession",
    "SessionDelta",
    "new_session",
    "start",
    "submit",
    "tick",
    "advance_round",
    "remove_random_number",
    "terminate",
    "restart",
    "append_input",
    "press_number",
    "backspace",
    "clear_input",
    "summary",
    "TickScheduler",
    "GameClock",
]
