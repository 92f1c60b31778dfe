"""
Gymnasium environment adapter.
"""

from typing import Any, Dict, Optional, Tuple

import gymnasium as gym

from ..game import GameSession
from .base import Environment


class GymAdapter(Environment):
    """
    Adapter over a registered gymnasium id (e.g. "FormulaTower-v0").

    The wrapped env is expected to carry a ``session`` attribute on its
    unwrapped instance; each step result gets the game summary attached.
    """

    def __init__(self, env_name: str, **kwargs):
        """
        Args:
            env_name: Registered gymnasium id
            **kwargs: Passed to gym.make() (config, seconds_per_step, ...)
        """
        self.env_name = env_name
        self.env_kwargs = kwargs
        self.env = gym.make(env_name, **kwargs)

    @property
    def session(self) -> Optional[GameSession]:
        return getattr(self.env.unwrapped, "session", None)

    def clone(self) -> 'GymAdapter':
        """Fresh instance with the same configuration (state is not copied)."""
        return GymAdapter(self.env_name, **self.env_kwargs)

    def reset(
        self, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Any, Dict[str, Any]]:
        return self.env.reset(seed=seed, options=options)

    def step(self, action: str) -> Dict[str, Any]:
        obs, reward, terminated, truncated, info = self.env.step(action)
        return {
            "observation": obs,
            "reward": reward,
            "terminated": terminated,
            "truncated": truncated,
            "info": info,
            "summary": self.summary(),
        }

    @property
    def observation_space(self):
        return self.env.observation_space

    @property
    def action_space(self):
        return self.env.action_space

    def render(self) -> Any:
        return self.env.render()

    def close(self):
        self.env.close()

    def __repr__(self) -> str:
        return f"GymAdapter(env_name='{self.env_name}', kwargs={self.env_kwargs})"
