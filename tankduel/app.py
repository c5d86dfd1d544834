"""The game window: pygame event handling and drawing."""

from __future__ import annotations

import argparse
import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pygame

from tankduel.game import CLEAR_COLOR, DrawCall, TankGame
from tankduel.geometry import DrawMode
from tankduel.input import Action, InputController, InputState, Key, Mod
from tankduel.mathutils import transform_point

log = logging.getLogger(__name__)

Vec2 = Tuple[float, float]

_KEYMAP: Dict[int, Key] = {
    pygame.K_SPACE: Key.SPACE,
    pygame.K_a: Key.A,
    pygame.K_c: Key.C,
    pygame.K_d: Key.D,
    pygame.K_e: Key.E,
    pygame.K_q: Key.Q,
    pygame.K_s: Key.S,
    pygame.K_w: Key.W,
    pygame.K_ESCAPE: Key.ESCAPE,
    pygame.K_RETURN: Key.ENTER,
    pygame.K_KP_ENTER: Key.ENTER,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_UP: Key.UP,
    pygame.K_F3: Key.F3,
    pygame.K_F5: Key.F5,
}

_MOUSE_BUTTONS = {1: 0, 2: 2, 3: 1}


def translate_key(pygame_key: int) -> Optional[Key]:
    """The game key for a pygame key code, or ``None`` if the game ignores it."""
    return _KEYMAP.get(pygame_key)


def _translate_mods(pygame_mods: int) -> int:
    mods = Mod.NONE
    if pygame_mods & pygame.KMOD_SHIFT:
        mods |= Mod.SHIFT
    if pygame_mods & pygame.KMOD_CTRL:
        mods |= Mod.CONTROL
    if pygame_mods & pygame.KMOD_ALT:
        mods |= Mod.ALT
    if pygame_mods & pygame.KMOD_META:
        mods |= Mod.SUPER
    return int(mods)


def _to_rgb(color: Sequence[float]) -> Tuple[int, int, int]:
    return tuple(int(round(min(max(c, 0.0), 1.0) * 255)) for c in color[:3])  # type: ignore[return-value]


class PygameRenderer:
    """Draws meshes on a surface, with world y pointing up from the bottom edge."""

    def __init__(self, resolution: Tuple[int, int], clear_color=CLEAR_COLOR) -> None:
        self.resolution = (int(resolution[0]), int(resolution[1]))
        self.clear_color = clear_color

    def to_screen(self, point: Sequence[float]) -> Vec2:
        """Map a world point to surface pixel coordinates."""
        return (float(point[0]), float(self.resolution[1] - point[1]))

    def draw(self, surface: pygame.Surface, draw_calls: Iterable[DrawCall]) -> int:
        """Clear ``surface`` and draw every call; returns the number of primitives drawn."""
        surface.fill(_to_rgb(self.clear_color))
        return sum(self._draw_call(surface, call) for call in draw_calls)

    def _draw_call(self, surface: pygame.Surface, call: DrawCall) -> int:
        mesh = call.mesh
        points = [self.to_screen(transform_point(call.model, v.position)) for v in mesh.vertices]
        colors = [_to_rgb(v.color) for v in mesh.vertices]
        indices = [i for i in mesh.indices if 0 <= i < len(points)]
        width = max(1, int(round(call.line_width)))
        mode = mesh.draw_mode

        if mode == DrawMode.TRIANGLES:
            groups = [indices[i:i + 3] for i in range(0, len(indices) - 2, 3)]
            return self._triangles(surface, points, colors, groups)
        if mode == DrawMode.TRIANGLE_STRIP:
            groups = [list(t) for t in zip(indices, indices[1:], indices[2:])]
            return self._triangles(surface, points, colors, groups)
        if mode == DrawMode.TRIANGLE_FAN:
            groups = [[indices[0], a, b] for a, b in zip(indices[1:], indices[2:])]
            return self._triangles(surface, points, colors, groups)
        if mode == DrawMode.LINES:
            pairs = [indices[i:i + 2] for i in range(0, len(indices) - 1, 2)]
            for a, b in pairs:
                pygame.draw.line(surface, colors[a], points[a], points[b], width)
            return len(pairs)
        if mode in (DrawMode.LINE_STRIP, DrawMode.LINE_LOOP):
            if len(indices) < 2:
                return 0
            closed = mode == DrawMode.LINE_LOOP
            pygame.draw.lines(surface, colors[indices[0]], closed,
                              [points[i] for i in indices], width)
            return 1
        for i in indices:
            pygame.draw.circle(surface, colors[i], points[i], width)
        return len(indices)

    @staticmethod
    def _triangles(surface: pygame.Surface, points: List[Vec2], colors, groups) -> int:
        for group in groups:
            pygame.draw.polygon(surface, colors[group[0]], [points[i] for i in group])
        return len(groups)


class _SceneKeys(InputController):
    """Scene-wide keys: ESCAPE closes the game."""

    def __init__(self, input_state: InputState, world: TankGame) -> None:
        super().__init__(input_state)
        self.world = world

    def on_key_press(self, key: int, mods: int) -> None:
        if key == Key.ESCAPE:
            self.world.exit()


def _pump_events(state: InputState, game: TankGame) -> None:
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            game.exit()
        elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
            key = translate_key(event.key)
            if key is not None:
                action = Action.PRESS if event.type == pygame.KEYDOWN else Action.RELEASE
                state.key_callback(key, action, _translate_mods(event.mod))
        elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
            button = _MOUSE_BUTTONS.get(event.button)
            if button is not None:
                action = Action.PRESS if event.type == pygame.MOUSEBUTTONDOWN else Action.RELEASE
                state.mouse_button_callback(button, action,
                                            _translate_mods(pygame.key.get_mods()))
        elif event.type == pygame.MOUSEMOTION:
            state.mouse_move(*event.pos)
        elif event.type == pygame.MOUSEWHEEL:
            state.mouse_scroll(event.x, event.y)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open the game window and run until it is closed."""
    parser = argparse.ArgumentParser(prog="tankduel", description="Two-player tank duel.")
    parser.add_argument("--width", type=int, default=1280)
    parser.add_argument("--height", type=int, default=720)
    parser.add_argument("--fps", type=int, default=60)
    parser.add_argument("--frames", type=int, default=None,
                        help="stop after this many frames")
    args = parser.parse_args(argv)
    if args.width <= 0 or args.height <= 0:
        parser.error("window size must be positive")

    pygame.display.init()
    try:
        screen = pygame.display.set_mode((args.width, args.height))
        pygame.display.set_caption("Tank Duel")
        state = InputState((args.width, args.height))
        game = TankGame(state)
        _SceneKeys(state, game)
        renderer = PygameRenderer((args.width, args.height), game.clear_color)
        clock = pygame.time.Clock()

        game.init()
        frames = 0
        while not game.should_close:
            if args.frames is not None and frames >= args.frames:
                break
            _pump_events(state, game)
            game.tick()
            renderer.draw(screen, game.draw_calls)
            pygame.display.flip()
            clock.tick(args.fps)
            frames += 1
    finally:
        log.info("engine closed")
        pygame.quit()
    return 0