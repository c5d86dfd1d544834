"""Vertex data, meshes and builders for the 2D shapes used in the game."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Sequence, Tuple

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]

NUM_BONES_PER_VERTEX = 4
_CIRCLE_SEGMENTS = 30


class DrawMode(IntEnum):
    """Primitive types a mesh can be drawn as."""

    POINTS = 0
    LINES = 1
    LINE_LOOP = 2
    LINE_STRIP = 3
    TRIANGLES = 4
    TRIANGLE_STRIP = 5
    TRIANGLE_FAN = 6


@dataclass(frozen=True)
class VertexFormat:
    """A vertex with position, colour, normal and texture coordinates."""

    position: Vec3
    color: Vec3 = (1.0, 1.0, 1.0)
    normal: Vec3 = (0.0, 1.0, 0.0)
    text_coord: Vec2 = (0.0, 0.0)


@dataclass
class VertexBoneData:
    """Up to four bone influences for one vertex."""

    ids: List[int] = field(default_factory=lambda: [0] * NUM_BONES_PER_VERTEX)
    weights: List[float] = field(default_factory=lambda: [0.0] * NUM_BONES_PER_VERTEX)

    def reset(self) -> None:
        """Clear all influences."""
        self.ids = [0] * NUM_BONES_PER_VERTEX
        self.weights = [0.0] * NUM_BONES_PER_VERTEX

    def add_bone_data(self, bone_id: int, weight: float) -> None:
        """Store an influence in the first free slot."""
        for slot, current in enumerate(self.weights):
            if current == 0.0:
                self.ids[slot] = bone_id
                self.weights[slot] = weight
                return
        raise ValueError(f"more than {NUM_BONES_PER_VERTEX} bones for one vertex")


@dataclass
class Mesh:
    """Named vertex and index data with a draw mode."""

    mesh_id: str
    draw_mode: DrawMode = DrawMode.TRIANGLES
    vertices: List[VertexFormat] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    positions: List[Vec3] = field(default_factory=list)

    def init_from_data(self, vertices: Sequence[VertexFormat], indices: Sequence[int]) -> None:
        """Replace the mesh's vertices and indices with copies of the given data."""
        self.vertices = list(vertices)
        self.indices = list(indices)


def _mesh(name: str, mode: DrawMode, corners: Sequence[Vec3], color: Vec3,
          indices: Sequence[int]) -> Mesh:
    mesh = Mesh(name, draw_mode=mode)
    mesh.init_from_data([VertexFormat(tuple(c), color) for c in corners], indices)
    return mesh


def create_triangle(name: str, corner1: Vec3, corner2: Vec3, corner3: Vec3,
                    color: Vec3) -> Mesh:
    """A single triangle drawn as a strip."""
    return _mesh(name, DrawMode.TRIANGLE_STRIP, (corner1, corner2, corner3), color, (0, 1, 2))


def create_trapezoid(name: str, corner1: Vec3, corner2: Vec3, corner3: Vec3,
                     corner4: Vec3, color: Vec3) -> Mesh:
    """A filled quadrilateral made of two triangles."""
    return _mesh(name, DrawMode.TRIANGLES, (corner1, corner2, corner3, corner4), color,
                 (0, 1, 2, 0, 2, 3))


def create_arc(name: str, center: Vec3, radius: float, angle_start: float,
               angle_end: float, color: Vec3) -> Mesh:
    """A filled circular sector between two angles in radians."""
    cx, cy, cz = center
    vertices = [VertexFormat(tuple(center), color)]
    indices: List[int] = []
    for i in range(_CIRCLE_SEGMENTS + 1):
        angle = angle_start + (angle_end - angle_start) * i / _CIRCLE_SEGMENTS
        point = (cx + radius * math.cos(angle), cy + radius * math.sin(angle), cz)
        vertices.append(VertexFormat(point, color))
        if i > 0:
            indices.extend((0, i, i + 1))
    mesh = Mesh(name, draw_mode=DrawMode.TRIANGLES)
    mesh.init_from_data(vertices, indices)
    return mesh


def create_rectangle(name: str, corner1: Vec3, corner2: Vec3, corner3: Vec3,
                     corner4: Vec3, color: Vec3) -> Mesh:
    """A filled rectangle made of two triangles."""
    return _mesh(name, DrawMode.TRIANGLES, (corner1, corner2, corner3, corner4), color,
                 (0, 1, 2, 0, 2, 3))


def create_frame(name: str, corner1: Vec3, corner2: Vec3, corner3: Vec3,
                 corner4: Vec3, color: Vec3) -> Mesh:
    """A rectangle outline drawn as a line loop."""
    return _mesh(name, DrawMode.LINE_LOOP, (corner1, corner2, corner3, corner4), color,
                 (0, 1, 2, 3))


def create_circle(name: str, center: Vec2, radius: float, color: Vec3) -> Mesh:
    """A filled circle in the z = 0 plane."""
    cx, cy = center
    vertices = [VertexFormat((cx, cy, 0.0), color)]
    indices: List[int] = []
    for i in range(_CIRCLE_SEGMENTS):
        angle = 2 * math.pi * i / _CIRCLE_SEGMENTS
        point = (cx + radius * math.cos(angle), cy + radius * math.sin(angle), 0.0)
        vertices.append(VertexFormat(point, color))
        if i > 0:
            indices.extend((0, i, i + 1))
    indices.extend((0, _CIRCLE_SEGMENTS, 1))
    mesh = Mesh(name, draw_mode=DrawMode.TRIANGLES)
    mesh.init_from_data(vertices, indices)
    return mesh