"""Small numeric helpers: angles, bit flags, colours, quaternions and 2D matrices.

2D transforms are 3x3 matrices stored row-major as tuples of rows, so the
translation part of an affine matrix lives in ``m[0][2]`` and ``m[1][2]``.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence, Tuple

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]
Vec4 = Tuple[float, float, float, float]
Quat = Tuple[float, float, float, float]  # (w, x, y, z)
Mat3 = Tuple[Tuple[float, float, float], Tuple[float, float, float], Tuple[float, float, float]]

TO_RADIANS = 0.0174532925194444
TO_DEGREES = 57.29577951308233

VEC3_UP: Vec3 = (0.0, 1.0, 0.0)
VEC3_DOWN: Vec3 = (0.0, -1.0, 0.0)
VEC3_LEFT: Vec3 = (-1.0, 0.0, 0.0)
VEC3_RIGHT: Vec3 = (1.0, 0.0, 0.0)
VEC3_FORWARD: Vec3 = (0.0, 0.0, 1.0)
VEC3_BACKWARD: Vec3 = (0.0, 0.0, -1.0)


def lerp(v0: float, v1: float, t: float) -> float:
    """Linear interpolation between ``v0`` and ``v1``."""
    return v0 + (v1 - v0) * t


def radians(angle: float) -> float:
    """Convert degrees to radians."""
    return angle * TO_RADIANS


def degrees(rad: float) -> float:
    """Convert radians to degrees."""
    return rad * TO_DEGREES


def upper_bound(a: int, b: int) -> int:
    """Integer division of ``a`` by ``b`` rounded up."""
    return (a + b - 1) // b


def normalized_rgb(r: int, g: int, b: int) -> Vec3:
    """Turn 8-bit colour channels into floats in [0, 1]."""
    for channel in (r, g, b):
        if not 0 <= channel <= 255:
            raise ValueError(f"colour channel out of range: {channel}")
    return (r / 255.0, g / 255.0, b / 255.0)


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def axis_angle(x: float, y: float, z: float, angle360: float) -> Quat:
    """Quaternion ``(w, x, y, z)`` rotating ``angle360`` degrees about an axis."""
    t = radians(angle360) / 2.0
    sin_t = math.sin(t)
    return (math.cos(t), x * sin_t, y * sin_t, z * sin_t)


def get_axis_angle(rotation: Quat, precision: int = 0) -> Vec4:
    """Return ``(ax, ay, az, degrees)`` for a quaternion ``(w, x, y, z)``.

    With a non-zero ``precision`` the axis components are rounded to
    ``1 / precision`` steps.
    """
    w, qx, qy, qz = rotation
    angle = math.acos(max(-1.0, min(1.0, w)))
    if angle == 0:
        return (1.0, 0.0, 0.0, 0.0)

    t = math.sqrt(1 - w * w)
    rounded_angle = _round_half_away(degrees(angle))
    if precision:
        return (
            _round_half_away(qx / t * precision) / precision,
            _round_half_away(qy / t * precision) / precision,
            _round_half_away(qz / t * precision) / precision,
            rounded_angle,
        )
    return (qx / t, qy / t, qz / t, rounded_angle)


def set_bit(item: int, bit: int) -> int:
    """Return ``item`` with ``bit`` set."""
    return item | (1 << bit)


def clear_bit(item: int, bit: int) -> int:
    """Return ``item`` with ``bit`` cleared."""
    return item & ~(1 << bit)


def is_bit_set(item: int, bit: int) -> bool:
    """Whether ``bit`` is set in ``item``."""
    return (item & (1 << bit)) != 0


def format_vector(values: Iterable[float]) -> str:
    """Format a vector or quaternion as ``[a b c]``."""
    parts = (str(v) if isinstance(v, int) else format(v, "g") for v in values)
    return "[" + " ".join(parts) + "]"


def identity3() -> Mat3:
    """The 3x3 identity matrix."""
    return ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))


def translate2d(tx: float, ty: float) -> Mat3:
    """Affine translation matrix."""
    return ((1.0, 0.0, tx), (0.0, 1.0, ty), (0.0, 0.0, 1.0))


def rotate2d(angle: float) -> Mat3:
    """Counter-clockwise rotation by ``angle`` radians."""
    c, s = math.cos(angle), math.sin(angle)
    return ((c, -s, 0.0), (s, c, 0.0), (0.0, 0.0, 1.0))


def scale2d(sx: float, sy: float) -> Mat3:
    """Axis-aligned scale matrix."""
    return ((sx, 0.0, 0.0), (0.0, sy, 0.0), (0.0, 0.0, 1.0))


def mat3_mul(a: Sequence[Sequence[float]], b: Sequence[Sequence[float]]) -> Mat3:
    """Matrix product ``a @ b``."""
    columns = list(zip(*b))
    return tuple(
        tuple(sum(x * y for x, y in zip(row, col)) for col in columns) for row in a
    )  # type: ignore[return-value]


def transform_point(matrix: Sequence[Sequence[float]], point: Sequence[float]) -> Vec2:
    """Apply an affine 3x3 matrix to a 2D point."""
    x, y = point[0], point[1]
    return (
        matrix[0][0] * x + matrix[0][1] * y + matrix[0][2],
        matrix[1][0] * x + matrix[1][1] * y + matrix[1][2],
    )