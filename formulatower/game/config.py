"""
Game configuration.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict


@dataclass(frozen=True)
class GameConfig:
    """
    Tunable rules for one game of Formula Tower.

    Attributes:
        base_time: Countdown budget in seconds at setup.
        pool_size: Board holds the numbers 1..pool_size.
        target_count: Number of rounds generated per game.
        wrong_penalty: Seconds lost on a wrong but well-formed answer.
        setup_removal_bonus: Seconds gained per random removal before start.
        play_removal_bonus: Seconds gained per random removal during play.
        tolerance: Absolute tolerance when comparing a result to the target.
        target_policy: Name of a registered target policy.
        tick_interval: Real seconds between countdown ticks.
    """

    base_time: int = 5 * 60
    pool_size: int = 100
    target_count: int = 60
    wrong_penalty: int = 20
    setup_removal_bonus: int = 30
    play_removal_bonus: int = 20
    tolerance: float = 1e-9
    target_policy: str = "tower"
    tick_interval: float = 1.0

    def __post_init__(self):
        if self.base_time < 0:
            raise ValueError(f"base_time must be >= 0, got {self.base_time}")
        if self.pool_size < 1:
            raise ValueError(f"pool_size must be >= 1, got {self.pool_size}")
        if self.target_count < 1:
            raise ValueError(f"target_count must be >= 1, got {self.target_count}")
        for name in ("wrong_penalty", "setup_removal_bonus", "play_removal_bonus"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")
        if self.tolerance < 0:
            raise ValueError(f"tolerance must be >= 0, got {self.tolerance}")
        if self.tick_interval <= 0:
            raise ValueError(f"tick_interval must be > 0, got {self.tick_interval}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> GameConfig:
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
