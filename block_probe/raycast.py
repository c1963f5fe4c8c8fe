"""
Single block raycast against the host world geometry.

The host dimension does the intersection; this wrapper only turns its hit into
a world-space position and a travelled distance.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple

from .vectors import Point3, distance, to_point

logger = logging.getLogger("block_probe.raycast")

DEFAULT_OPTIONS: Dict[str, Any] = {"include_passable_blocks": False, "max_distance": 100}

# face name -> (axis index, whether a 0 on that axis means the far side of the cell)
FACE_DATA: Dict[str, Tuple[int, bool]] = {
    "north": (2, False),
    "south": (2, True),
    "west": (0, False),
    "east": (0, True),
    "up": (1, True),
    "down": (1, False),
}


@dataclass(frozen=True)
class RaycastHit:
    block: Any
    face: Any
    face_location: Point3
    world_hit_position: Point3
    distance: float


def _face_key(face: Any) -> str:
    # host faces arrive as plain strings or enum members ("Direction.South")
    value = getattr(face, "value", face)
    if not isinstance(value, str):
        value = getattr(face, "name", face)
    return str(value).lower().rsplit(".", 1)[-1]


def face_data(face: Any) -> Tuple[int, bool]:
    """Axis and zero-fix flag for *face*; unknown faces map to x with no fix."""
    return FACE_DATA.get(_face_key(face), (0, False))


class BlockRaycast:
    """
    Perform one block raycast on construction and keep the result.

    ``dimension.get_block_from_ray(origin, direction, options)`` must return
    ``None`` on a miss, otherwise an object exposing ``block`` (with a
    ``location``), ``face`` and ``face_location`` (0..1 on each axis).
    """

    def __init__(self, dimension, origin: Iterable[float], direction: Iterable[float],
                 options: Optional[Dict[str, Any]] = None) -> None:
        self.dimension = dimension
        self.origin = to_point(origin)
        self.direction = to_point(direction)
        self.options = {**DEFAULT_OPTIONS, **(options or {})}
        self._result = self._cast()

    @property
    def hit(self) -> Optional[RaycastHit]:
        """The hit, or *None* when nothing was struck."""
        return self._result

    @staticmethod
    def cast(dimension, origin, direction, options=None) -> Optional[RaycastHit]:
        return BlockRaycast(dimension, origin, direction, options).hit

    def _cast(self) -> Optional[RaycastHit]:
        raw = self.dimension.get_block_from_ray(self.origin, self.direction, self.options)
        if raw is None:
            logger.debug("raycast from %s missed", tuple(self.origin))
            return None

        block = raw.block
        face = raw.face
        # copy so the host object is never mutated
        face_loc = list(to_point(raw.face_location))

        axis, zero_fix = face_data(face)
        if zero_fix and face_loc[axis] == 0:
            face_loc[axis] = 1.0

        loc = to_point(block.location)
        world_hit = Point3(loc.x + face_loc[0], loc.y + face_loc[1], loc.z + face_loc[2])
        hit = RaycastHit(
            block=block,
            face=face,
            face_location=Point3(*face_loc),
            world_hit_position=world_hit,
            distance=distance(self.origin, world_hit),
        )
        logger.debug("raycast hit %s on face %s at distance %.3f", tuple(world_hit), _face_key(face), hit.distance)
        return hit
