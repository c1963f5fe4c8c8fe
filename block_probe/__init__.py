"""
Helpers for probing a voxel world: grid ray traversal, single block raycasts
and a per-player repeated-input detector.
"""

__version__ = "0.1.0"

from .errors import InvalidConfiguration
from .vectors import GridCell, Point3, rotate_direction
from .probe import BlockRayProbe, array_world, plot_cells, probe_blocks
from .raycast import BlockRaycast, RaycastHit
from .input_pattern import ButtonState, InputButton, InputPatternDetector, PressRecord
from .scheduler import TickSystem
from .config import DetectorSettings, as_provider, configure_logging, load_settings

__all__ = [
    "InvalidConfiguration",
    "GridCell",
    "Point3",
    "rotate_direction",
    "BlockRayProbe",
    "array_world",
    "plot_cells",
    "probe_blocks",
    "BlockRaycast",
    "RaycastHit",
    "ButtonState",
    "InputButton",
    "InputPatternDetector",
    "PressRecord",
    "TickSystem",
    "DetectorSettings",
    "as_provider",
    "configure_logging",
    "load_settings",
]
