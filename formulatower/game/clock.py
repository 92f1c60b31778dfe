"""
GameClock: owner of the single live GameSession.

Wires the pure transitions in ``session`` to a TickScheduler. The scheduler
runs only while a game is in progress and is stopped as soon as the game is
over, the clock is closed, or its ``async with`` block exits.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

import numpy as np

from . import session as transitions
from .config import GameConfig
from .scheduler import SleepFn, TickScheduler
from .session import GameSession, Phase, SessionDelta

logger = logging.getLogger(__name__)

Listener = Callable[[SessionDelta], None]


class GameClock:
    """
    Stateful driver for one player.

    Every action returns the SessionDelta it produced and notifies the
    registered listeners, which is where a presentation layer re-renders.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[np.random.Generator] = None,
        sleep: Optional[SleepFn] = None,
    ):
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.session: GameSession = transitions.new_session(self.config, self.rng)
        self._listeners: List[Listener] = []
        kwargs = {"sleep": sleep} if sleep is not None else {}
        self.scheduler = TickScheduler(self._on_tick, self.config.tick_interval, **kwargs)

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _apply(self, delta: SessionDelta) -> SessionDelta:
        self.session = delta.session
        if self.session.phase is Phase.OVER:
            self.scheduler.cancel()
        for listener in self._listeners:
            listener(delta)
        return delta

    def _on_tick(self) -> None:
        if self.session.clock_running:
            self._apply(transitions.tick(self.session))

    # Player actions -----------------------------------------------------

    def start(self) -> SessionDelta:
        """Start play. Must be called from inside the running event loop."""
        delta = self._apply(transitions.start(self.session))
        if delta.ok:
            self.scheduler.start()
        return delta

    def submit(self, text: Optional[str] = None) -> SessionDelta:
        return self._apply(transitions.submit(self.session, text))

    def advance_round(self) -> SessionDelta:
        return self._apply(transitions.advance_round(self.session))

    def remove_random(self) -> SessionDelta:
        return self._apply(transitions.remove_random_number(self.session, self.rng))

    def append_input(self, text: str) -> SessionDelta:
        return self._apply(transitions.append_input(self.session, text))

    def press_number(self, value: int) -> SessionDelta:
        return self._apply(transitions.press_number(self.session, value))

    def backspace(self) -> SessionDelta:
        return self._apply(transitions.backspace(self.session))

    def clear_input(self) -> SessionDelta:
        return self._apply(transitions.clear_input(self.session))

    def terminate(self) -> SessionDelta:
        return self._apply(transitions.terminate(self.session))

    async def restart(self) -> SessionDelta:
        await self.scheduler.stop()
        return self._apply(transitions.restart(self.session, self.rng))

    async def close(self) -> None:
        await self.scheduler.stop()

    async def __aenter__(self) -> GameClock:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
