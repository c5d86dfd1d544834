"""The two-player tank duel scene."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from tankduel.geometry import DrawMode, Mesh, VertexFormat
from tankduel.input import InputState, Key
from tankduel.mathutils import (
    Mat3,
    identity3,
    mat3_mul,
    rotate2d,
    scale2d,
    translate2d,
)
from tankduel.tank import Tank, build_tank_meshes
from tankduel.terrain import Terrain, generate_terrain
from tankduel.world import World

Vec3 = Tuple[float, float, float]

log = logging.getLogger(__name__)

CLEAR_COLOR: Vec3 = (0.53, 0.81, 0.92)
MOVE_SPEED = 200.0
BARREL_SPEED = 1.0
AIM_MAGNITUDE = 125.0
SLIDE_THRESHOLD = 7.0
SLIDE_EPSILON = 40.0
TURRET_OFFSET = 30.0
LIFE_BAR_HALF_WIDTH = 40.0
PINK_START_X = 500.0
PURPLE_START_X = 600.0
PINK_COLORS: Tuple[Vec3, Vec3] = ((0.8, 0.4, 0.5), (0.9, 0.5, 0.6))
PURPLE_COLORS: Tuple[Vec3, Vec3] = ((0.5, 0.0, 0.5), (0.8, 0.5, 0.8))
TRAJECTORY_COLOR: Vec3 = (1.0, 1.0, 1.0)


@dataclass
class DrawCall:
    """A mesh to draw with a 2D model matrix."""

    mesh: Mesh
    model: Mat3 = identity3()
    line_width: float = 1.0


class TankGame(World):
    """Two tanks on rolling terrain shooting at each other.

    The pink tank moves with A/D, aims with W/S and fires with SPACE; the
    purple tank moves with LEFT/RIGHT, aims with UP/DOWN and fires with ENTER.
    Every :meth:`update` rebuilds :attr:`draw_calls` for the renderer.
    """

    def __init__(self, input_state: Optional[InputState] = None,
                 clock: Callable[[], float] = time.monotonic) -> None:
        super().__init__(input_state, clock)
        self.width = 0
        self.height = 0
        self.terrain: Optional[Terrain] = None
        self.terrain_mesh: Optional[Mesh] = None
        self.pink = Tank()
        self.purple = Tank()
        self.pink_angle = 0.0
        self.purple_angle = 0.0
        self.pink_turret_matrix: Mat3 = identity3()
        self.purple_turret_matrix: Mat3 = identity3()
        self.draw_calls: List[DrawCall] = []
        self.clear_color = CLEAR_COLOR

    def _require_terrain(self) -> Terrain:
        if self.terrain is None:
            raise RuntimeError("the game has not been initialised")
        return self.terrain

    def init(self) -> None:
        """Create the terrain and place both tanks on it."""
        self.width, self.height = self.input_state.get_resolution()
        self.terrain = generate_terrain(self.width, self.height)
        self.terrain_mesh = self.terrain.to_mesh()

        self.pink = Tank(meshes=build_tank_meshes(*PINK_COLORS), life=1.0)
        self.purple = Tank(meshes=build_tank_meshes(*PURPLE_COLORS), life=1.0)
        self.pink.position = (PINK_START_X, self.terrain.height_at(PINK_START_X))
        self.purple.position = (PURPLE_START_X, self.terrain.height_at(PURPLE_START_X))
        self.pink_angle = self.terrain.slope_at(self.pink.position[0])
        self.purple_angle = self.terrain.slope_at(self.purple.position[0])
        self.draw_calls = []

    def update(self, delta_time: float) -> None:
        """Let the terrain settle, then move shots and collect the frame's draw calls."""
        terrain = self._require_terrain()
        terrain.slide(SLIDE_THRESHOLD, SLIDE_EPSILON, delta_time)
        self.terrain_mesh = terrain.to_mesh()
        self.draw_calls = [DrawCall(self.terrain_mesh)]

        if self.pink.life > 0:
            self.pink_turret_matrix = self._render_tank(
                self.pink, self.purple, self.pink_angle, delta_time)
        if self.purple.life > 0:
            self.purple_turret_matrix = self._render_tank(
                self.purple, self.pink, self.purple_angle, delta_time)

    def _render_tank(self, tank: Tank, target: Tank, angle: float, delta_time: float) -> Mat3:
        terrain = self._require_terrain()
        meshes = tank.meshes
        if meshes is None:
            raise RuntimeError("tank has no meshes")
        x, y = tank.position
        model = mat3_mul(translate2d(x, y), rotate2d(angle))
        self.draw_calls.extend(
            DrawCall(mesh, model) for mesh in (meshes.base1, meshes.base2, meshes.turret)
        )

        turret = mat3_mul(mat3_mul(model, translate2d(0.0, TURRET_OFFSET)),
                          rotate2d(tank.barrel_angle))
        self.draw_calls.append(DrawCall(meshes.barrel, turret))

        tank.generate_trajectory(turret[0][2], turret[1][2], tank.barrel_angle, angle,
                                 AIM_MAGNITUDE, delta_time, terrain)
        self.draw_calls.append(DrawCall(self._trajectory_mesh(tank)))

        self.draw_calls.append(DrawCall(meshes.life_bar, model, line_width=3.0))
        health = tank.life
        life_matrix = mat3_mul(
            mat3_mul(model, translate2d(-LIFE_BAR_HALF_WIDTH * (1.0 - health), 0.0)),
            scale2d(health, 1.0),
        )
        self.draw_calls.append(DrawCall(meshes.life, life_matrix))

        for projectile in list(tank.active_projectiles):
            matrix = turret
            if projectile.trajectory_index < len(projectile.trajectory):
                current = projectile.trajectory[projectile.trajectory_index]
                tank.update_projectiles(target, delta_time, terrain)
                projectile.update(delta_time)
                matrix = translate2d(current[0], current[1])
            self.draw_calls.append(DrawCall(projectile.mesh, matrix))

        return turret

    def _trajectory_mesh(self, tank: Tank) -> Mesh:
        terrain = self._require_terrain()
        vertices: List[VertexFormat] = []
        indices: List[int] = []
        for i, (px, py) in enumerate(tank.trajectory_points):
            if py <= terrain.height_at(px) or py < 0:
                break
            vertices.append(VertexFormat((px, py, 0.0), TRAJECTORY_COLOR))
            if i > 0:
                indices.extend((i - 1, i))
        mesh = Mesh("trajectory", draw_mode=DrawMode.LINE_STRIP)
        mesh.init_from_data(vertices, indices)
        return mesh

    def on_input_update(self, delta_time: float, mods: int) -> None:
        """Move tanks along the terrain and turn their barrels while keys are held."""
        terrain = self._require_terrain()
        state = self.input_state
        max_x = float(state.get_resolution()[0])
        step = MOVE_SPEED * delta_time

        for tank, left, right in ((self.pink, Key.A, Key.D),
                                  (self.purple, Key.LEFT, Key.RIGHT)):
            x = tank.position[0]
            if state.key_hold(left):
                x = min(max(x - step, 0.0), max_x)
            if state.key_hold(right):
                x = min(max(x + step, 0.0), max_x)
            tank.position = (x, terrain.height_at(x))

        self.pink_angle = terrain.slope_at(self.pink.position[0])
        self.purple_angle = terrain.slope_at(self.purple.position[0])

        turn = BARREL_SPEED * delta_time
        if state.key_hold(Key.W):
            self.pink.rotate_barrel(turn)
        if state.key_hold(Key.S):
            self.pink.rotate_barrel(-turn)
        if state.key_hold(Key.UP):
            self.purple.rotate_barrel(turn)
        if state.key_hold(Key.DOWN):
            self.purple.rotate_barrel(-turn)

    def on_key_press(self, key: int, mods: int) -> None:
        """Fire: SPACE for the pink tank, ENTER for the purple one."""
        if key == Key.SPACE:
            log.info("pink tank fires")
            self.pink.launch_projectile(self.pink.trajectory_points)
        if key == Key.ENTER:
            self.purple.launch_projectile(self.purple.trajectory_points)
            log.info("purple tank fires")