import pygame
import pytest

from torus_snake import config
from torus_snake.game import DIRECTIONS, FoodItem, SnakeGame
from torus_snake.loop import GameLoop
from torus_snake.render import Renderer, handle_key


@pytest.fixture
def pygame_session(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    pygame.init()
    yield
    pygame.quit()


def make_loop(**kwargs):
    game = SnakeGame(snake=[(0, 0), (0, 1)], direction=DIRECTIONS["DOWN"], **kwargs)
    return GameLoop(game)


def test_wasd_and_arrows_request_directions():
    loop = make_loop()
    assert handle_key(loop, pygame.K_d)
    assert loop.game.direction == DIRECTIONS["RIGHT"]
    assert handle_key(loop, pygame.K_LEFT)
    assert loop.game.direction == DIRECTIONS["LEFT"]


def test_reverse_key_is_ignored():
    loop = make_loop()
    handle_key(loop, pygame.K_w)
    assert loop.game.direction == DIRECTIONS["DOWN"]


def test_difficulty_keys_are_clamped():
    loop = make_loop(difficulty=98)
    handle_key(loop, pygame.K_EQUALS)
    assert loop.game.difficulty == 100
    loop = make_loop(difficulty=3)
    handle_key(loop, pygame.K_MINUS)
    assert loop.game.difficulty == 1
    handle_key(loop, pygame.K_KP_PLUS)
    assert loop.game.difficulty == 6


def test_escape_quits():
    assert not handle_key(make_loop(), pygame.K_ESCAPE)


def test_closing_window_ends_session(pygame_session):
    loop = make_loop()
    renderer = Renderer(loop.game, cell_size=4)
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    assert renderer.handle_events(loop) is False


def test_key_events_reach_the_game(pygame_session):
    loop = make_loop()
    renderer = Renderer(loop.game, cell_size=4)
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_d))
    assert renderer.handle_events(loop) is True
    assert loop.game.direction == DIRECTIONS["RIGHT"]


def test_draw_paints_cells_from_grid(pygame_session):
    loop = make_loop(food=[FoodItem((3, 2), 0)])
    renderer = Renderer(loop.game, cell_size=4)
    renderer.draw()
    surface = pygame.display.get_surface()
    assert tuple(surface.get_at((0 * 4 + 1, 1 * 4 + 1)))[:3] == config.SNAKE_COLOR
    assert tuple(surface.get_at((3 * 4 + 1, 2 * 4 + 1)))[:3] == config.FOOD_COLOR
    assert tuple(surface.get_at((5 * 4 + 1, 5 * 4 + 1)))[:3] == config.EMPTY_COLOR
