"""Two-player artillery duel on a sliding, deformable terrain, drawn with pygame."""

__version__ = "0.1.0"
__all__ = [
    "app",
    "game",
    "geometry",
    "input",
    "mathutils",
    "projectile",
    "tank",
    "terrain",
    "textutils",
    "world",
]