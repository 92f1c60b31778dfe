"""
Base environment interface for Formula Tower agents.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

from ..game import GameSession, summary


class Environment(ABC):
    """
    Unified environment interface.

    Agents and evaluation loops talk to this contract instead of a specific
    gymnasium version. ``step`` returns a dict so callers never depend on
    tuple ordering, and every environment exposes the live ``GameSession``
    behind it so the round, countdown and pool can be inspected directly.
    """

    @abstractmethod
    def reset(
        self, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Any, Dict[str, Any]]:
        """
        Start a new game and return the initial observation.

        Args:
            seed: Seed for targets and random removals
            options: ``{"removals": n}`` performs n setup removals first

        Returns:
            Tuple of (observation, info)
        """

    @abstractmethod
    def step(self, action: str) -> Dict[str, Any]:
        """
        Submit one expression for the current target.

        Returns:
            Dict with keys: observation, reward, terminated, truncated, info,
            summary
        """

    @property
    @abstractmethod
    def session(self) -> Optional[GameSession]:
        """Current game state, or None before the first reset."""

    @property
    @abstractmethod
    def observation_space(self) -> Any:
        pass

    @property
    @abstractmethod
    def action_space(self) -> Any:
        pass

    @abstractmethod
    def clone(self) -> 'Environment':
        """Fresh environment with the same configuration."""

    @abstractmethod
    def render(self) -> Any:
        pass

    @abstractmethod
    def close(self):
        pass

    def summary(self) -> Dict[str, Any]:
        """Flat status dict for the current game (empty before reset)."""
        if self.session is None:
            return {}
        return summary(self.session)
