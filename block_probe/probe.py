"""
User-facing block probe: walk the voxel grid along a segment and collect
what the world reports for each cell, near to far.
"""
import logging
import numbers
from typing import Any, Callable, Generator, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import matplotlib.pyplot as plt
from mpl_toolkits.mplot3d import Axes3D  # noqa: F401

from ._core import _dda_cells
from .errors import InvalidConfiguration
from .vectors import GridCell, Point3, add, as_array, cell_of, rotate_direction, scale, to_point

logger = logging.getLogger("block_probe.probe")

WorldQuery = Callable[[GridCell], Any]
ProbeHit = Tuple[GridCell, Any]


class BlockRayProbe:
    """
    Cast a segment from ``origin`` and list the blocks it passes through.

    Provide either ``direction`` (with optional offsets and ``distance``) or an
    explicit ``end_point``; an explicit end point overrides the other three.

    Parameters
    ----------
    world               : callable ``world(cell) -> content | None``
    origin              : world-space start point
    direction           : direction vector, normalized internally
    end_point           : absolute end point
    distance            : segment length when using ``direction``
    yaw_offset          : degrees, rotate ``direction`` about +Y (positive = right)
    pitch_offset        : degrees, rotate about the local right axis (positive = up)
    max_steps           : cap on visited cells
    cast_through_blocks : keep going past blocking cells
    is_blocking         : classifies content as a blocker (default: nothing blocks)
    should_cancel       : polled once per visited cell; true aborts the cast
    """

    def __init__(
        self,
        world: WorldQuery,
        origin: Iterable[float],
        *,
        direction: Optional[Iterable[float]] = None,
        end_point: Optional[Iterable[float]] = None,
        distance: float = 4.0,
        yaw_offset: float = 0.0,
        pitch_offset: float = 0.0,
        max_steps: int = 4096,
        cast_through_blocks: bool = False,
        is_blocking: Optional[Callable[[Any], bool]] = None,
        should_cancel: Optional[Callable[[], bool]] = None,
    ) -> None:
        if direction is None and end_point is None:
            raise InvalidConfiguration(
                "BlockRayProbe requires either a direction or an end_point to be specified."
            )
        if isinstance(max_steps, bool) or not isinstance(max_steps, numbers.Integral) or max_steps <= 0:
            raise InvalidConfiguration(f"max_steps must be a positive integer, got {max_steps!r}")
        if distance < 0:
            raise InvalidConfiguration(f"distance must not be negative, got {distance!r}")

        self.world = world
        self.origin = to_point(origin)
        self.direction = None if direction is None else to_point(direction)
        self.explicit_end_point = None if end_point is None else to_point(end_point)
        self.distance = float(distance)
        self.yaw_offset = float(yaw_offset)
        self.pitch_offset = float(pitch_offset)
        self.max_steps = int(max_steps)
        self.cast_through_blocks = bool(cast_through_blocks)
        self.is_blocking = is_blocking
        self.should_cancel = should_cancel

    # ---------------------------------------------------------------------
    # Geometry
    # ---------------------------------------------------------------------
    @property
    def end_point(self) -> Point3:
        """Effective end of the segment."""
        if self.explicit_end_point is not None:
            return self.explicit_end_point
        heading = rotate_direction(self.direction, self.yaw_offset, self.pitch_offset)
        return to_point(add(self.origin, scale(heading, self.distance)))

    def cells(self) -> Generator[GridCell, None, None]:
        """Yield the cells on the segment, near to far, without querying the world."""
        end = self.end_point
        # a 6-connected path never needs more than the Manhattan cell distance + 1
        span = np.abs(np.subtract(cell_of(end), cell_of(self.origin))).sum()
        max_cells = min(self.max_steps, int(span) + 1)

        buf_ix = np.empty((max_cells, 3), dtype=np.int64)
        n_cells = _dda_cells(as_array(self.origin), as_array(end), buf_ix)
        for i in range(n_cells):
            yield GridCell(int(buf_ix[i, 0]), int(buf_ix[i, 1]), int(buf_ix[i, 2]))

    def _stops_at(self, content: Any) -> bool:
        if self.cast_through_blocks or self.is_blocking is None:
            return False
        return bool(self.is_blocking(content))

    # ---------------------------------------------------------------------
    # World queries
    # ---------------------------------------------------------------------
    def cast(self) -> List[ProbeHit]:
        """Return ``(cell, content)`` for each visited cell the world reports content for."""
        hits: List[ProbeHit] = []
        visited = 0
        for cell in self.cells():
            if self.should_cancel is not None and self.should_cancel():
                logger.debug("probe cancelled after %d cells", visited)
                break
            visited += 1
            content = self.world(cell)
            if content is None:
                continue
            hits.append((cell, content))
            if self._stops_at(content):
                logger.debug("probe stopped at blocking cell %s", tuple(cell))
                break
        logger.debug("probe from %s visited %d cells, %d hits", tuple(self.origin), visited, len(hits))
        return hits


# -------------------------------------------------------------------------
# Convenience top-level helpers
# -------------------------------------------------------------------------
def probe_blocks(world: WorldQuery, origin: Iterable[float], **options) -> List[ProbeHit]:
    """One-shot ``BlockRayProbe(world, origin, **options).cast()``."""
    return BlockRayProbe(world, origin, **options).cast()


def array_world(
    grid_array: np.ndarray,
    grid_origin: Tuple[int, int, int] = (0, 0, 0),
) -> WorldQuery:
    """
    Wrap a dense 3-D array as a world query.

    Cell ``grid_origin`` maps to ``grid_array[0, 0, 0]``; cells outside the
    array report nothing.
    """
    if grid_array.ndim != 3:
        raise ValueError("grid_array must be 3-D")
    offset = tuple(int(c) for c in grid_origin)
    shape = grid_array.shape

    def query(cell: GridCell) -> Any:
        ix = cell[0] - offset[0]
        iy = cell[1] - offset[1]
        iz = cell[2] - offset[2]
        if 0 <= ix < shape[0] and 0 <= iy < shape[1] and 0 <= iz < shape[2]:
            return grid_array[ix, iy, iz]
        return None

    return query


def _cell_index_array(items: Sequence) -> np.ndarray:
    # accepts bare cells or (cell, content) pairs as returned by cast()
    rows = [tuple(item[0]) if len(item) == 2 else tuple(item) for item in items]
    return np.asarray(rows, dtype=np.int64).reshape(-1, 3)


def plot_cells(
    cells: Sequence,
    ax: Optional[Axes3D] = None,
    color: str = 'tab:orange',
    edgecolor: str = 'k',
    set_limits: bool = True,
    show: bool = True,
) -> Axes3D:
    """Plot visited cells as voxels at their world positions using matplotlib."""
    if ax is None:
        fig = plt.figure()
        ax = fig.add_subplot(111, projection='3d')

    idx = _cell_index_array(cells)
    if len(idx):
        lo = idx.min(axis=0)
        nx, ny, nz = idx.max(axis=0) - lo + 1
        mask = np.zeros((nx, ny, nz), dtype=bool)
        rel = idx - lo
        mask[rel[:, 0], rel[:, 1], rel[:, 2]] = True

        # Corner coordinates of the bounding block of cells
        xs = lo[0] + np.arange(nx + 1)
        ys = lo[1] + np.arange(ny + 1)
        zs = lo[2] + np.arange(nz + 1)
        xv, yv, zv = np.meshgrid(xs, ys, zs, indexing='ij')
        ax.voxels(xv, yv, zv, mask, facecolors=color, edgecolor=edgecolor)

        if set_limits:
            ax.set_xlim(lo[0], lo[0] + nx)
            ax.set_ylim(lo[1], lo[1] + ny)
            ax.set_zlim(lo[2], lo[2] + nz)

    if show:
        plt.show()
    return ax
