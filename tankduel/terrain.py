"""Height-map terrain: sampling, sliding, crater deformation and meshing."""

from __future__ import annotations

import math
from typing import Iterable, List, Sequence, Tuple

from tankduel.geometry import DrawMode, Mesh, VertexFormat
from tankduel.mathutils import lerp

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]

DEFAULT_TERRAIN_COLOR: Vec3 = (1.0, 1.0, 0.5)

_AMPLITUDE_1 = 50.0
_AMPLITUDE_2 = 30.0
_OMEGA_1 = 0.01
_OMEGA_2 = 0.02


class Terrain:
    """A 2D terrain described by points ordered by x."""

    def __init__(self, points: Iterable[Sequence[float]]) -> None:
        self.points: List[List[float]] = [[float(p[0]), float(p[1])] for p in points]
        if not self.points:
            raise ValueError("terrain needs at least one point")

    def __len__(self) -> int:
        return len(self.points)

    @property
    def heights(self) -> List[float]:
        """The y value of every point."""
        return [y for _, y in self.points]

    def height_at(self, x: float) -> float:
        """Interpolated height at ``x``; the last point's height outside the map."""
        for (x1, y1), (x2, y2) in zip(self.points, self.points[1:]):
            if x1 <= x <= x2:
                if x2 == x1:
                    return y1
                return lerp(y1, y2, (x - x1) / (x2 - x1))
        return self.points[-1][1]

    def slope_at(self, x: float) -> float:
        """Angle in radians of the terrain between ``x`` and ``x + 1``."""
        return math.atan(self.height_at(x + 1.0) - self.height_at(x))

    def slide(self, threshold: float, epsilon: float, delta_time: float) -> None:
        """Move height from steep neighbours towards each other."""
        transfer = epsilon * delta_time
        for left, right in zip(self.points, self.points[1:]):
            diff = left[1] - right[1]
            if abs(diff) > threshold:
                if diff > 0:
                    left[1] -= transfer
                    right[1] += transfer
                else:
                    left[1] += transfer
                    right[1] -= transfer
                left[1] = max(left[1], 0.0)
                right[1] = max(right[1], 0.0)

    def deform(self, impact_x: float, impact_y: float, radius: float) -> None:
        """Dig a crater of ``radius`` around the impact point, never below zero."""
        if radius <= 0:
            return
        for point in self.points:
            distance = math.hypot(point[0] - impact_x, point[1] - impact_y)
            if distance <= radius:
                point[1] -= (1.0 - distance / radius) * radius
                point[1] = max(point[1], 0.0)

    def to_mesh(self, color: Vec3 = DEFAULT_TERRAIN_COLOR) -> Mesh:
        """A triangle-strip mesh filling the area under the terrain down to y = 0."""
        vertices: List[VertexFormat] = []
        for (x1, y1), (x2, y2) in zip(self.points, self.points[1:]):
            vertices.extend(
                (
                    VertexFormat((x1, y1, 0.0), color),
                    VertexFormat((x1, 0.0, 0.0), color),
                    VertexFormat((x2, y2, 0.0), color),
                    VertexFormat((x2, 0.0, 0.0), color),
                )
            )
        mesh = Mesh("terrain", draw_mode=DrawMode.TRIANGLE_STRIP)
        mesh.init_from_data(vertices, range(len(vertices)))
        return mesh


def generate_terrain(width: int, height: int, num_points: int = 200) -> Terrain:
    """Rolling hills made of two sine waves around half the window height."""
    if num_points <= 0:
        raise ValueError("num_points must be positive")
    step = width / float(num_points)
    base = height // 2
    points = []
    for i in range(num_points + 1):
        x = i * step
        y = _AMPLITUDE_1 * math.sin(_OMEGA_1 * x) + _AMPLITUDE_2 * math.sin(_OMEGA_2 * x)
        points.append((x, y + base))
    return Terrain(points)