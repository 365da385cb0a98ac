from __future__ import annotations

import logging
from typing import Dict

import pygame

from torus_snake import config
from torus_snake.game import CELL_CODES, DIRECTIONS, EMPTY, FOOD, SNAKE, SnakeGame, Vec2
from torus_snake.loop import GameLoop

logger = logging.getLogger(__name__)

KEY_DIRECTIONS: Dict[int, Vec2] = {
    pygame.K_w: DIRECTIONS["UP"],
    pygame.K_s: DIRECTIONS["DOWN"],
    pygame.K_d: DIRECTIONS["RIGHT"],
    pygame.K_a: DIRECTIONS["LEFT"],
    pygame.K_UP: DIRECTIONS["UP"],
    pygame.K_DOWN: DIRECTIONS["DOWN"],
    pygame.K_RIGHT: DIRECTIONS["RIGHT"],
    pygame.K_LEFT: DIRECTIONS["LEFT"],
}

FASTER_KEYS = (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS)
SLOWER_KEYS = (pygame.K_MINUS, pygame.K_KP_MINUS)

# Keyed by the codes grid_array() returns
CELL_COLORS = {
    CELL_CODES[SNAKE]: config.SNAKE_COLOR,
    CELL_CODES[FOOD]: config.FOOD_COLOR,
    CELL_CODES[EMPTY]: config.EMPTY_COLOR,
}

STATUS_HEIGHT = 30


def clamp_difficulty(value: int) -> int:
    return max(config.MIN_DIFFICULTY, min(config.MAX_DIFFICULTY, value))


def handle_key(loop: GameLoop, key: int) -> bool:
    """Apply one key press to the running game. Returns False when the player quits."""
    game = loop.game
    if key == pygame.K_ESCAPE:
        return False
    if key in KEY_DIRECTIONS:
        loop.request_direction(KEY_DIRECTIONS[key])
    elif key in FASTER_KEYS:
        game.difficulty = clamp_difficulty(game.difficulty + config.DIFFICULTY_STEP)
        logger.debug("Difficulty raised to %d", game.difficulty)
    elif key in SLOWER_KEYS:
        game.difficulty = clamp_difficulty(game.difficulty - config.DIFFICULTY_STEP)
        logger.debug("Difficulty lowered to %d", game.difficulty)
    return True


class Renderer:
    """pygame window showing the board, difficulty and score."""

    def __init__(self, game: SnakeGame, cell_size: int = config.CELL_SIZE) -> None:
        self.game = game
        self.cell_size = cell_size

        pygame.init()
        side = game.grid_size * cell_size
        self._window = pygame.display.set_mode((side, side + STATUS_HEIGHT))
        pygame.display.set_caption("Torus Snake")
        self._font = pygame.font.Font(None, 24)

    def handle_events(self, loop: GameLoop) -> bool:
        """Pump the pygame queue. Returns False once the player quits."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN:
                if not handle_key(loop, event.key):
                    return False
            else:
                loop.handle_event(event)
        return True

    def draw(self) -> None:
        size = self.game.grid_size
        self._window.fill(config.BACKGROUND_COLOR)
        grid = self.game.grid_array()
        for y in range(size):
            for x in range(size):
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size,
                    self.cell_size,
                )
                pygame.draw.rect(self._window, CELL_COLORS[int(grid[y, x])], rect)

        status = f"Difficulty {self.game.difficulty}"
        if self.game.score is not None:
            status += f"   Score: {self.game.score}"
        text = self._font.render(status, True, config.TEXT_COLOR)
        self._window.blit(text, (6, size * self.cell_size + 6))

        pygame.display.flip()

    def close(self) -> None:
        pygame.quit()
