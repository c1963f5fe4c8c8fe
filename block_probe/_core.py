"""
Low-level NumPy+Numba helpers for direction rotation and 3D DDA cell stepping.
"""
import math
import numpy as np
from numba import njit, int64, float64

# Crossings closer than this are treated as simultaneous (edge/corner hits).
EPS = 1e-10


@njit(cache=True)
def _normalize(v: np.ndarray) -> np.ndarray:
    """Unit vector of *v*; zero (or non-finite) length gives the zero vector."""
    length = math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])
    out = np.zeros(3, dtype=float64)
    if length == 0.0 or not math.isfinite(length):
        return out
    for k in range(3):
        out[k] = v[k] / length
    return out


@njit(cache=True)
def _rotate_direction(d: np.ndarray, yaw_degrees: float, pitch_degrees: float) -> np.ndarray:
    """
    Yaw *d* about global +Y, then pitch it about its own right axis.

    Positive yaw turns right, positive pitch turns up. Pitch uses Rodrigues'
    formula so it stays relative to the yawed heading.
    """
    yaw = -yaw_degrees * math.pi / 180.0
    pitch = -pitch_degrees * math.pi / 180.0
    u = _normalize(d)

    # yaw around global Y
    cy = math.cos(yaw)
    sy = math.sin(yaw)
    vx = u[0] * cy + u[2] * sy
    vy = u[1]
    vz = -u[0] * sy + u[2] * cy

    # right = up x v, with up = (0, 1, 0)
    kx = vz
    ky = 0.0
    kz = -vx
    k_len = math.sqrt(kx * kx + kz * kz)
    if k_len > 0.0:
        kx /= k_len
        kz /= k_len

    cp = math.cos(pitch)
    sp = math.sin(pitch)

    # k x v
    wx = ky * vz - kz * vy
    wy = kz * vx - kx * vz
    wz = kx * vy - ky * vx

    k_dot_v = kx * vx + ky * vy + kz * vz

    # v cos + (k x v) sin + k (k.v)(1 - cos)
    r = np.empty(3, dtype=float64)
    r[0] = vx * cp + wx * sp + kx * k_dot_v * (1.0 - cp)
    r[1] = vy * cp + wy * sp + ky * k_dot_v * (1.0 - cp)
    r[2] = vz * cp + wz * sp + kz * k_dot_v * (1.0 - cp)
    return _normalize(r)


@njit(cache=True)
def _dda_cells(start: np.ndarray, end: np.ndarray, out_ix: np.ndarray) -> int:
    """
    Walk the unit grid from the cell holding *start* to the cell holding *end*.

    Fills the pre-allocated ``out_ix`` buffer (its length is the step cap) and
    returns the number of valid rows. Axes whose crossings tie within ``EPS``
    advance together, so corner crossings never skip the diagonal neighbour.
    """
    d = end - start

    step = np.empty(3, dtype=int64)
    ix = np.empty(3, dtype=int64)
    last = np.empty(3, dtype=int64)
    t_face = np.empty(3, dtype=float64)
    for k in range(3):
        if d[k] > 0.0:
            step[k] = 1
        elif d[k] < 0.0:
            step[k] = -1
        else:
            step[k] = 0
        ix[k] = int64(math.floor(start[k]))
        last[k] = int64(math.floor(end[k]))

    n_cells = 0
    max_cells = out_ix.shape[0]
    while n_cells < max_cells:
        out_ix[n_cells, 0] = ix[0]
        out_ix[n_cells, 1] = ix[1]
        out_ix[n_cells, 2] = ix[2]
        n_cells += 1

        if ix[0] == last[0] and ix[1] == last[1] and ix[2] == last[2]:
            break

        # parametric distance to the next face on each axis
        for k in range(3):
            if step[k] == 1:
                t_face[k] = (ix[k] + 1.0 - start[k]) / d[k]
            elif step[k] == -1:
                t_face[k] = (ix[k] - start[k]) / d[k]
            else:
                t_face[k] = math.inf

        t_min = min(t_face[0], t_face[1], t_face[2])
        if not math.isfinite(t_min):
            break                               # origin == end, no progress

        for k in range(3):
            if step[k] != 0 and t_face[k] - t_min <= EPS:
                ix[k] += step[k]

    return n_cells
