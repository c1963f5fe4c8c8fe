"""
Small 3-vector helpers shared by the probe and the raycast wrapper.

Host runtimes hand out positions as ``{x, y, z}`` objects, plain sequences or
arrays; ``to_point`` folds all of them into a ``Point3``.
"""
import math
from collections.abc import Mapping
from typing import Any, Iterable, NamedTuple

import numpy as np

from ._core import _normalize, _rotate_direction


class Point3(NamedTuple):
    """World-space position."""
    x: float
    y: float
    z: float


class GridCell(NamedTuple):
    """Integer coordinates of a unit cube in the voxel grid."""
    x: int
    y: int
    z: int


def to_point(v: Any) -> Point3:
    """Coerce a sequence, array, ``{x, y, z}`` mapping or object with ``x/y/z`` attributes."""
    if isinstance(v, Mapping):
        return Point3(float(v["x"]), float(v["y"]), float(v["z"]))
    if hasattr(v, "x") and hasattr(v, "y") and hasattr(v, "z"):
        return Point3(float(v.x), float(v.y), float(v.z))
    x, y, z = (float(c) for c in v)
    return Point3(x, y, z)


def as_array(v: Any) -> np.ndarray:
    return np.asarray(to_point(v), dtype=np.float64)


def normalize(v: Iterable[float]) -> np.ndarray:
    """Unit-length copy of *v*; the zero vector stays zero."""
    return _normalize(as_array(v))


def add(a, b) -> np.ndarray:
    return as_array(a) + as_array(b)


def scale(v, factor: float) -> np.ndarray:
    return as_array(v) * float(factor)


def distance(a, b) -> float:
    return float(np.linalg.norm(as_array(a) - as_array(b)))


def cell_of(p) -> GridCell:
    """Grid cell containing *p* (component-wise floor)."""
    x, y, z = to_point(p)
    return GridCell(math.floor(x), math.floor(y), math.floor(z))


def rotate_direction(direction, yaw_offset: float = 0.0, pitch_offset: float = 0.0) -> np.ndarray:
    """
    Rotate *direction* by yaw/pitch offsets in degrees.

    Yaw turns about the global up axis (positive = right), pitch about the
    yawed heading's right axis (positive = up). The result is unit length,
    or zero when *direction* is the zero vector.
    """
    return _rotate_direction(as_array(direction), float(yaw_offset), float(pitch_offset))
