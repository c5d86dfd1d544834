"""Projectiles that follow a precomputed trajectory."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Tuple

from tankduel.geometry import Mesh, create_circle

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]

PROJECTILE_SPEED = 15.5
_ARRIVAL_DISTANCE = 0.1


@dataclass
class Projectile:
    """A round shot moving along a list of trajectory points."""

    position: Vec2 = (0.0, 0.0)
    trajectory: List[Vec2] = field(default_factory=list)
    color: Vec3 = (1.0, 0.0, 0.0)
    radius: float = 5.0
    trajectory_index: int = 0
    mesh: Mesh = field(init=False)

    def __post_init__(self) -> None:
        self.position = (float(self.position[0]), float(self.position[1]))
        self.trajectory = [(float(p[0]), float(p[1])) for p in self.trajectory]
        self.mesh = create_circle("projectileMesh", self.position, self.radius, self.color)

    def update(self, delta_time: float) -> None:
        """Advance towards the next trajectory point."""
        if self.trajectory_index >= len(self.trajectory) - 1:
            return
        cx, cy = self.trajectory[self.trajectory_index]
        nx, ny = self.trajectory[self.trajectory_index + 1]
        dx, dy = nx - cx, ny - cy
        distance = math.hypot(dx, dy)
        if distance <= 0.0:
            return
        step = delta_time * PROJECTILE_SPEED / distance
        px, py = self.position
        self.position = (px + dx * step, py + dy * step)
        if math.dist(self.position, (nx, ny)) < _ARRIVAL_DISTANCE:
            self.trajectory_index += 1