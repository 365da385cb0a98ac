"""Real-time snake on a small toroidal board."""

from torus_snake.game import DIRECTIONS, BoardFullError, FoodItem, SnakeGame, TickResult
from torus_snake.loop import GameLoop, tick_interval
from torus_snake.score import ScoreKeeper, ScoreService

__version__ = "0.1.0"

__all__ = [
    "DIRECTIONS",
    "BoardFullError",
    "FoodItem",
    "GameLoop",
    "ScoreKeeper",
    "ScoreService",
    "SnakeGame",
    "TickResult",
    "tick_interval",
]
