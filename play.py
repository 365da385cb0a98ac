from __future__ import annotations

import argparse
import logging

import pygame

from torus_snake import config
from torus_snake.game import SnakeGame, TickResult
from torus_snake.loop import GameLoop
from torus_snake.render import Renderer

logger = logging.getLogger(__name__)


def difficulty_arg(value: str) -> int:
    difficulty = int(value)
    if not config.MIN_DIFFICULTY <= difficulty <= config.MAX_DIFFICULTY:
        raise argparse.ArgumentTypeError(
            f"difficulty must be between {config.MIN_DIFFICULTY} and {config.MAX_DIFFICULTY}"
        )
    return difficulty


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play snake on a wrap-around board")
    parser.add_argument("--difficulty", type=difficulty_arg, default=config.DEFAULT_DIFFICULTY)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--cell-size", type=int, default=config.CELL_SIZE)
    parser.add_argument(
        "--headless-ticks",
        type=int,
        default=0,
        help="Run this many ticks without a window and print the result (0 opens a window)",
    )
    parser.add_argument("--log-level", type=str, default="WARNING")
    return parser.parse_args(argv)


def log_tick(result: TickResult) -> None:
    if result.ate_food or result.collision:
        logger.info(
            "tick=%d length=%d ate_food=%s collision=%s",
            result.tick,
            len(result.snake),
            result.ate_food,
            result.collision,
        )


def run_window(loop: GameLoop, cell_size: int) -> None:
    renderer = Renderer(loop.game, cell_size=cell_size)
    clock = pygame.time.Clock()
    loop.start()
    try:
        while renderer.handle_events(loop):
            renderer.draw()
            clock.tick(config.FPS)
    finally:
        loop.stop()
        renderer.close()


def main(argv=None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    game = SnakeGame(difficulty=args.difficulty, seed=args.seed)
    loop = GameLoop(game)
    loop.on_tick(log_tick)

    if args.headless_ticks > 0:
        loop.run_for(args.headless_ticks)
    else:
        run_window(loop, args.cell_size)

    print(f"Session over after {game.tick_count} ticks. Score: {game.score or 0}, deaths: {game.deaths}")


if __name__ == "__main__":
    main()
