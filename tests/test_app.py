import pygame
import pytest

from tankduel.app import PygameRenderer, main, translate_key
from tankduel.game import DrawCall
from tankduel.geometry import create_frame, create_rectangle
from tankduel.input import Key
from tankduel.mathutils import translate2d

RED = (1.0, 0.0, 0.0)


def _square(x0, y0, x1, y1):
    return create_rectangle("sq", (x0, y0, 0), (x1, y0, 0), (x1, y1, 0), (x0, y1, 0), RED)


@pytest.mark.parametrize(
    "pygame_key, expected",
    [
        (pygame.K_a, Key.A),
        (pygame.K_SPACE, Key.SPACE),
        (pygame.K_RETURN, Key.ENTER),
        (pygame.K_LEFT, Key.LEFT),
        (pygame.K_ESCAPE, Key.ESCAPE),
    ],
)
def test_translate_key(pygame_key, expected):
    assert translate_key(pygame_key) == expected


def test_translate_unknown_key():
    assert translate_key(pygame.K_F12) is None


def test_to_screen_flips_y():
    renderer = PygameRenderer((1280, 720))
    assert renderer.to_screen((0, 0)) == (0.0, 720.0)
    assert renderer.to_screen((100, 720)) == (100.0, 0.0)


def test_draw_fills_rectangle():
    surface = pygame.Surface((100, 100))
    renderer = PygameRenderer((100, 100), clear_color=(0.0, 0.0, 0.0))
    count = renderer.draw(surface, [DrawCall(_square(10, 10, 30, 30))])
    assert count == 2
    assert tuple(surface.get_at((20, 80)))[:3] == (255, 0, 0)
    assert tuple(surface.get_at((90, 5)))[:3] == (0, 0, 0)


def test_draw_applies_model_matrix():
    surface = pygame.Surface((100, 100))
    renderer = PygameRenderer((100, 100), clear_color=(0.0, 0.0, 0.0))
    renderer.draw(surface, [DrawCall(_square(10, 10, 30, 30), translate2d(50, 0))])
    assert tuple(surface.get_at((70, 80)))[:3] == (255, 0, 0)
    assert tuple(surface.get_at((20, 80)))[:3] == (0, 0, 0)


def test_draw_line_loop_counts_one_primitive():
    surface = pygame.Surface((100, 100))
    renderer = PygameRenderer((100, 100), clear_color=(0.0, 0.0, 0.0))
    frame = create_frame("f", (10, 10, 0), (90, 10, 0), (90, 90, 0), (10, 90, 0), RED)
    assert renderer.draw(surface, [DrawCall(frame)]) == 1
    assert tuple(surface.get_at((50, 50)))[:3] == (0, 0, 0)


def test_main_runs_a_few_frames(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    assert main(["--width", "320", "--height", "240", "--frames", "2"]) == 0


def test_main_rejects_bad_size(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    with pytest.raises(SystemExit):
        main(["--width", "0"])