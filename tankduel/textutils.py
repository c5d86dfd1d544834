"""String joining and resource path helpers."""

from __future__ import annotations

import os
from typing import Iterable

PATH_SEPARATOR = os.sep


def join(elements: Iterable[str], separator: str) -> str:
    """Join ``elements`` with ``separator`` between them."""
    return separator.join(elements)


def path_join(*args: str) -> str:
    """Join path parts with the platform separator."""
    return join(args, PATH_SEPARATOR)


def get_parent_dir(file_path: str) -> str:
    """Directory part of ``file_path``, or ``"."`` when it has none."""
    pos = max(file_path.rfind("/"), file_path.rfind("\\"))
    return "." if pos < 0 else file_path[:pos]


ROOT = path_join("assets")
MODELS = path_join(ROOT, "models")
TEXTURES = path_join(ROOT, "textures")
SHADERS = path_join(ROOT, "shaders")
FONTS = path_join(ROOT, "fonts")