from __future__ import annotations

import logging
from typing import Callable, List, Optional

import pygame

from torus_snake import config
from torus_snake.game import SnakeGame, TickResult, Vec2

logger = logging.getLogger(__name__)

TICK_EVENT = pygame.USEREVENT + 1

TickListener = Callable[[TickResult], None]


def tick_interval(difficulty: int) -> int:
    """Milliseconds between ticks: 397 at difficulty 1 down to 100 at 100."""
    return config.BASE_INTERVAL_MS - difficulty * config.DIFFICULTY_SCALE_MS


class GameLoop:
    """Drives a SnakeGame from the pygame event queue.

    Each tick is a one-shot timer event. When it arrives the loop runs one
    full tick, notifies listeners and only then arms the next timer, reading
    the difficulty afresh. Key handlers run on the same event pump, so they
    never interleave with a tick. ``stop()`` disarms the timer.
    """

    def __init__(
        self,
        game: SnakeGame,
        interval: Callable[[int], int] = tick_interval,
        event_type: int = TICK_EVENT,
    ) -> None:
        self.game = game
        self.interval = interval
        self.event_type = event_type
        self._listeners: List[TickListener] = []
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def on_tick(self, listener: TickListener) -> TickListener:
        self._listeners.append(listener)
        return listener

    def request_direction(self, direction: Vec2) -> None:
        self.game.request_direction(direction)

    def step(self) -> TickResult:
        result = self.game.tick()
        for listener in list(self._listeners):
            listener(result)
        return result

    def run_for(self, ticks: int) -> None:
        """Run ``ticks`` ticks back to back, without waiting on the timer."""
        for _ in range(ticks):
            self.step()

    def start(self) -> None:
        if self._running:
            raise RuntimeError("game loop is already running")
        self._running = True
        logger.info("Game loop started at tick %d", self.game.tick_count)
        self._schedule()

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        pygame.time.set_timer(self.event_type, 0)
        logger.info("Game loop stopped at tick %d", self.game.tick_count)

    def handle_event(self, event: pygame.event.Event) -> Optional[TickResult]:
        if event.type != self.event_type or not self._running:
            return None
        result = self.step()
        # A listener may have stopped the loop
        if self._running:
            self._schedule()
        return result

    def _schedule(self) -> None:
        delay = max(1, int(self.interval(self.game.difficulty)))
        pygame.time.set_timer(self.event_type, delay, 1)
