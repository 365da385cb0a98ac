from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Sequence, Tuple

import numpy as np

from torus_snake import config
from torus_snake.score import ScoreKeeper, ScoreService

logger = logging.getLogger(__name__)

Vec2 = Tuple[int, int]

SNAKE = "snake"
FOOD = "food"
EMPTY = "empty"

# Codes used by grid_array()
CELL_CODES = {EMPTY: 0, SNAKE: 1, FOOD: 2}

DIRECTIONS = {
    "UP": (0, -1),
    "RIGHT": (1, 0),
    "DOWN": (0, 1),
    "LEFT": (-1, 0),
}


def wrap_pos(pos: Vec2, size: int) -> Vec2:
    return pos[0] % size, pos[1] % size


def add_pos(a: Vec2, b: Vec2, size: int) -> Vec2:
    return wrap_pos((a[0] + b[0], a[1] + b[1]), size)


def opposite(a: Vec2, b: Vec2) -> bool:
    return a[0] == -b[0] and a[1] == -b[1]


def step_between(a: Vec2, b: Vec2, size: int) -> Vec2:
    """Shortest vector from ``a`` to ``b`` on the torus."""
    dx = (b[0] - a[0]) % size
    dy = (b[1] - a[1]) % size
    if dx > size // 2:
        dx -= size
    if dy > size // 2:
        dy -= size
    return dx, dy


class BoardFullError(RuntimeError):
    """Raised when food has to be placed but every cell is taken."""


@dataclass(frozen=True)
class FoodItem:
    position: Vec2
    spawn_tick: int

    def expired(self, tick: int, lifetime: int = config.FOOD_LIFETIME) -> bool:
        return tick - self.spawn_tick >= lifetime


@dataclass(frozen=True)
class TickResult:
    tick: int
    snake: Tuple[Vec2, ...]
    food: Tuple[FoodItem, ...]
    score: Optional[int]
    ate_food: bool
    collision: bool


class SnakeGame:
    """State owner for one session: snake, food, clock and staged direction.

    The snake is stored oldest segment first, so ``snake[-1]`` is the head and
    ``snake[0]`` the tail. Every coordinate is wrapped into ``[0, grid_size)``.
    The constructor takes ``direction`` as given, without the reversal check
    that ``request_direction`` applies, so a game can start heading into its
    own body.
    """

    def __init__(
        self,
        grid_size: int = config.GRID_SIZE,
        snake: Optional[Sequence[Vec2]] = None,
        direction: Vec2 = DIRECTIONS["DOWN"],
        food: Optional[Sequence[FoodItem]] = None,
        tick: int = 0,
        difficulty: int = config.DEFAULT_DIFFICULTY,
        score_service: Optional[ScoreService] = None,
        seed: Optional[int] = None,
        food_lifetime: int = config.FOOD_LIFETIME,
        spawn_every: int = config.FOOD_SPAWN_EVERY,
        spawn_retry_limit: int = config.SPAWN_RETRY_LIMIT,
    ) -> None:
        if snake is None:
            snake = [(0, 0), (0, 1)]
        if not snake:
            raise ValueError("snake needs at least one segment")

        self.grid_size = grid_size
        self.difficulty = difficulty
        self.score_service: ScoreService = score_service if score_service is not None else ScoreKeeper()
        self.random = random.Random(seed)
        self.food_lifetime = food_lifetime
        self.spawn_every = spawn_every
        self.spawn_retry_limit = spawn_retry_limit

        self._snake: Deque[Vec2] = deque(wrap_pos(tuple(part), grid_size) for part in snake)
        self._direction: Vec2 = tuple(direction)
        self._food: List[FoodItem] = [
            FoodItem(wrap_pos(tuple(item.position), grid_size), item.spawn_tick) for item in food or ()
        ]
        self._tick = tick
        self.deaths = 0

    @property
    def snake(self) -> Tuple[Vec2, ...]:
        return tuple(self._snake)

    @property
    def head(self) -> Vec2:
        return self._snake[-1]

    @property
    def food(self) -> Tuple[FoodItem, ...]:
        return tuple(self._food)

    @property
    def direction(self) -> Vec2:
        return self._direction

    @property
    def tick_count(self) -> int:
        return self._tick

    @property
    def score(self) -> Optional[int]:
        return self.score_service.score

    # Grid queries

    def classify(self, x: int, y: int) -> str:
        pos = wrap_pos((x, y), self.grid_size)
        for part in self._snake:
            if part == pos:
                return SNAKE
        for item in self._food:
            if item.position == pos:
                return FOOD
        return EMPTY

    def enumerate_grid(self) -> Tuple[str, ...]:
        """Row-major classifications (y outer, x inner) for a renderer."""
        return tuple(
            self.classify(x, y) for y in range(self.grid_size) for x in range(self.grid_size)
        )

    def grid_array(self) -> np.ndarray:
        grid = np.full((self.grid_size, self.grid_size), CELL_CODES[EMPTY], dtype=np.int8)
        for item in self._food:
            x, y = item.position
            grid[y, x] = CELL_CODES[FOOD]
        # Snake wins over food, as in classify()
        for x, y in self._snake:
            grid[y, x] = CELL_CODES[SNAKE]
        return grid

    def unoccupied_random_cell(self) -> Vec2:
        """Pick a uniformly random empty cell.

        Sampling gives up after ``spawn_retry_limit`` draws and falls back to
        scanning the board in row-major order, so the call always terminates.
        """
        for _ in range(self.spawn_retry_limit):
            pos = (self.random.randrange(self.grid_size), self.random.randrange(self.grid_size))
            if self.classify(*pos) == EMPTY:
                return pos

        logger.warning(
            "No empty cell after %d random draws; scanning the board", self.spawn_retry_limit
        )
        for y in range(self.grid_size):
            for x in range(self.grid_size):
                if self.classify(x, y) == EMPTY:
                    return x, y
        raise BoardFullError(
            f"all {self.grid_size * self.grid_size} cells are occupied "
            f"(snake={len(self._snake)}, food={len(self._food)})"
        )

    # Input

    def request_direction(self, direction: Vec2) -> None:
        direction = tuple(direction)
        if direction not in DIRECTIONS.values():
            logger.debug("Ignoring unknown direction %s", direction)
            return
        if len(self._snake) >= 2:
            travel = step_between(self._snake[-2], self._snake[-1], self.grid_size)
            if opposite(direction, travel):
                logger.debug("Ignoring reversal %s while travelling %s", direction, travel)
                return
        self._direction = direction

    # Simulation

    def tick(self) -> TickResult:
        current = self._tick
        ate_food, collision = self._move()

        if current % self.spawn_every == 0:
            self._spawn_food(current)
        self._expire_food(current)

        self._tick += 1
        return self._result(current, ate_food=ate_food, collision=collision)

    def _move(self) -> Tuple[bool, bool]:
        new_head = add_pos(self._snake[-1], self._direction, self.grid_size)
        tail = self._snake.popleft()
        ate_food = False
        collision = False

        kind = self.classify(*new_head)
        if kind == FOOD:
            ate_food = True
            self._eat(new_head)
            self._snake.appendleft(tail)
            if tail == new_head:
                collision = True
                self._die()
        elif kind == SNAKE:
            collision = True
            self._die()

        self._snake.append(new_head)
        return ate_food, collision

    def _eat(self, pos: Vec2) -> None:
        for i, item in enumerate(self._food):
            if item.position == pos:
                del self._food[i]
                break
        self.score_service.increment_score()

    def _die(self) -> None:
        lost = len(self._snake)
        self._snake = deque([self._snake[-1]])
        self.deaths += 1
        logger.info("Snake bit itself at tick %d, dropped %d segments", self._tick, lost - 1)

    def _spawn_food(self, tick: int) -> None:
        item = FoodItem(self.unoccupied_random_cell(), tick)
        self._food.append(item)
        logger.debug("Spawned food at %s on tick %d", item.position, tick)

    def _expire_food(self, tick: int) -> None:
        kept = [item for item in self._food if not item.expired(tick, self.food_lifetime)]
        if len(kept) != len(self._food):
            logger.debug("Expired %d food item(s) on tick %d", len(self._food) - len(kept), tick)
        self._food = kept

    def _result(self, tick: int, ate_food: bool, collision: bool) -> TickResult:
        return TickResult(
            tick=tick,
            snake=tuple(self._snake),
            food=tuple(self._food),
            score=self.score,
            ate_food=ate_food,
            collision=collision,
        )
