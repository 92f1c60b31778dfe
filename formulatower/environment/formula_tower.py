# formulatower/environment/formula_tower.py
"""
Formula Tower as a gymnasium environment.

One episode is one game. The agent submits expression text; the environment
runs the same transitions as the interactive game and moves straight on to
the next round after a correct answer.

Reward scale:
     1.0  correct answer
     0.0  well-formed but wrong answer (costs ``wrong_penalty`` seconds)
    -0.5  invalid expression or illegal use of the board (configurable)
"""

import logging
from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from formulatower.game import session as transitions
from formulatower.game.config import GameConfig
from formulatower.game.session import GameSession, Phase

logger = logging.getLogger(__name__)

EXPRESSION_CHARSET = "0123456789+-*/() "


class FormulaTowerEnv(gym.Env):
    """
    Gymnasium environment for the Formula Tower game.

    Observation (Dict):
        target:    current target, shape (1,); 0 once the game is over
        time_left: countdown in seconds, shape (1,)
        pool:      MultiBinary mask, 1 where the number is still available

    Action:
        Text expression, e.g. ``"25*40+4"``.
    """

    metadata = {"render_modes": ["ansi", "human"]}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        invalid_penalty: float = -0.5,
        seconds_per_step: int = 0,
        max_expression_length: int = 256,
        render_mode: Optional[str] = None,
    ):
        super().__init__()
        if seconds_per_step < 0:
            raise ValueError(f"seconds_per_step must be >= 0, got {seconds_per_step}")
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode: {render_mode!r}")

        self.config = config or GameConfig()
        self.invalid_penalty = invalid_penalty
        self.seconds_per_step = seconds_per_step
        self.render_mode = render_mode

        self.observation_space = spaces.Dict(
            {
                "target": spaces.Box(low=0.0, high=np.inf, shape=(1,), dtype=np.float64),
                "time_left": spaces.Box(low=0.0, high=np.inf, shape=(1,), dtype=np.float64),
                "pool": spaces.MultiBinary(self.config.pool_size),
            }
        )
        self.action_space = spaces.Text(
            max_length=max_expression_length, charset=EXPRESSION_CHARSET
        )
        self.session: Optional[GameSession] = None

    def _observation(self) -> Dict[str, np.ndarray]:
        target = self.session.current_target if self.session.phase is not Phase.OVER else None
        return {
            "target": np.array([target or 0], dtype=np.float64),
            "time_left": np.array([self.session.time_left], dtype=np.float64),
            "pool": self.session.pool.as_mask(),
        }

    def _info(self, **extra) -> Dict[str, Any]:
        info = transitions.summary(self.session)
        info.update(extra)
        return info

    def reset(
        self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Start a new game.

        Options:
            removals: random setup removals to perform before starting,
                each worth ``setup_removal_bonus`` seconds.
        """
        super().reset(seed=seed)
        options = options or {}
        session = transitions.new_session(self.config, self.np_random)

        removed = []
        for _ in range(int(options.get("removals", 0))):
            delta = transitions.remove_random_number(session, self.np_random)
            if not delta.ok:
                break
            session = delta.session
            removed.append(delta.removed)

        self.session = transitions.start(session).session
        return self._observation(), self._info(removed=removed)

    def step(self, action: str):
        if self.session is None:
            raise RuntimeError("Environment not reset - call reset() first")
        if self.session.phase is Phase.OVER:
            raise RuntimeError("Game is over - call reset() to start a new one")

        delta = transitions.submit(self.session, str(action))
        if delta.ok:
            reward = 1.0
            session = transitions.advance_round(delta.session).session
        elif delta.value is not None:
            reward = 0.0
            session = delta.session
        else:
            reward = float(self.invalid_penalty)
            session = delta.session

        for _ in range(self.seconds_per_step):
            session = transitions.tick(session).session

        self.session = session
        terminated = session.phase is Phase.OVER
        info = self._info(
            message=delta.message,
            is_correct=delta.ok,
            valid=delta.ok or delta.value is not None,
            value=delta.value,
        )
        if terminated:
            logger.debug("Episode finished with %d correct", session.correct)
        if self.render_mode == "human":
            print(self._render_text())
        return self._observation(), reward, terminated, False, info

    def _render_text(self) -> str:
        s = transitions.summary(self.session)
        header = (
            f"Round {s['round']}/{s['rounds']}  target={s['target']}  "
            f"time={s['clock']}  correct={s['correct']}  points={s['points']}"
        )
        return header + "\n" + self.session.pool.board()

    def render(self):
        if self.session is None:
            return None
        text = self._render_text()
        if self.render_mode == "human":
            print(text)
            return None
        return text
