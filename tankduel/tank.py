"""Tanks: meshes, barrel aiming, trajectories, shots and hits."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from tankduel.geometry import (
    Mesh,
    create_arc,
    create_frame,
    create_rectangle,
    create_trapezoid,
)
from tankduel.projectile import Projectile
from tankduel.terrain import Terrain

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]

log = logging.getLogger(__name__)

GRAVITY = 30.0
TRAJECTORY_STEPS = 300
DAMAGE = 0.1
EXPLOSION_RADIUS = 50.0
LAUNCH_OFFSET: Vec2 = (0.0, 30.0)
_BAR_WIDTH = 40.0


@dataclass
class TankMeshes:
    """The shapes a tank is drawn from."""

    base1: Mesh
    base2: Mesh
    turret: Mesh
    barrel: Mesh
    life_bar: Mesh
    life: Mesh


def build_tank_meshes(color1: Vec3, color2: Vec3) -> TankMeshes:
    """Build the tank's body, turret, barrel and life bar."""
    base1 = create_trapezoid(
        "base1", (-40, 10, 0), (40, 10, 0), (30, 0, 0), (-30, 0, 0), color1
    )
    base2 = create_trapezoid(
        "base2", (-50, 30, 0), (50, 30, 0), (55, 10, 0), (-55, 10, 0), color2
    )
    turret = create_arc("turret", (0, 30, 0), 20.0, 0.0, math.pi, color2)
    barrel = create_rectangle(
        "barrel", (-2.5, 10, 0), (2.5, 10, 0), (2.5, 60, 0), (-2.5, 60, 0), (0.0, 0.0, 0.0)
    )
    bar_corners = (
        (-_BAR_WIDTH, 120.0, 0.0),
        (_BAR_WIDTH, 120.0, 0.0),
        (_BAR_WIDTH, 135.0, 0.0),
        (-_BAR_WIDTH, 135.0, 0.0),
    )
    life = create_rectangle("Life", *bar_corners, (0.0, 1.0, 0.0))
    life_bar = create_frame("LifeBar", *bar_corners, (1.0, 1.0, 1.0))
    return TankMeshes(base1, base2, turret, barrel, life_bar, life)


@dataclass
class Tank:
    """A player's tank."""

    position: Vec2 = (0.0, 0.0)
    life: float = 1.0
    barrel_angle: float = 0.0
    radius: float = 55.0
    meshes: Optional[TankMeshes] = None
    trajectory_points: List[Vec2] = field(default_factory=list)
    active_projectiles: List[Projectile] = field(default_factory=list)

    def rotate_barrel(self, angle: float) -> None:
        """Turn the barrel, keeping it within a quarter turn either way."""
        limit = math.pi / 2
        self.barrel_angle = max(-limit, min(limit, self.barrel_angle + angle))

    def generate_trajectory(self, start_x: float, start_y: float, barrel_angle: float,
                            angle: float, magnitude: float, delta_time: float,
                            terrain: Terrain) -> List[Vec2]:
        """Compute the aiming trajectory from the barrel tip and store it."""
        direction = barrel_angle + angle + math.pi / 2
        vx = magnitude * math.cos(direction)
        vy = magnitude * math.sin(direction)
        t = 0.0
        x, y = float(start_x), float(start_y)
        points: List[Vec2] = []
        for _ in range(TRAJECTORY_STEPS + 1):
            points.append((x, y))
            x += vx * t
            y += vy * t + 0.5 * GRAVITY * t * t
            vy -= GRAVITY * t
            t += delta_time * 0.05
        self.trajectory_points = points
        return points

    def launch_projectile(self, trajectory: Sequence[Vec2]) -> Optional[Projectile]:
        """Fire a shot along ``trajectory`` if an aiming trajectory exists."""
        if not self.trajectory_points:
            return None
        projectile = Projectile(LAUNCH_OFFSET, list(trajectory), (1.0, 0.0, 0.0))
        self.active_projectiles.append(projectile)
        return projectile

    def check_collision(self, other: "Tank", projectile: Projectile) -> bool:
        """Whether ``projectile`` hits ``other``; a hit damages ``other``."""
        distance = math.dist(other.position, projectile.position)
        if distance <= self.radius + projectile.radius:
            other.life -= DAMAGE
            return True
        return False

    def update_projectiles(self, other: "Tank", delta_time: float, terrain: Terrain) -> None:
        """Step every active shot, resolving hits on ``other`` and on the ground."""
        remaining: List[Projectile] = []
        for projectile in self.active_projectiles:
            if projectile.trajectory_index >= len(projectile.trajectory):
                continue
            projectile.position = projectile.trajectory[projectile.trajectory_index]
            if self.check_collision(other, projectile):
                log.info("tank hit")
                continue
            px, py = projectile.position
            ground = terrain.height_at(px)
            if py - 10 <= ground:
                terrain.deform(px, ground, EXPLOSION_RADIUS)
                continue
            projectile.mesh.positions.append((px, py, 0.0))
            projectile.trajectory_index += 1
            remaining.append(projectile)
        self.active_projectiles = remaining