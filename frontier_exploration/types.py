"""
Data type definitions for frontier ranking.

Provides structured data classes for type safety and clarity.
"""
from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

import numpy as np


Cell = Tuple[int, int]


@dataclass(frozen=True)
class Frontier:
    """Contiguous set of frontier cells, as (gx, gy) grid coordinates."""
    cells: Tuple[Cell, ...]

    def __post_init__(self):
        # Accept lists and numpy arrays, store a hashable tuple
        object.__setattr__(
            self, 'cells', tuple((int(gx), int(gy)) for gx, gy in self.cells)
        )

    @classmethod
    def from_points(cls, points: Iterable) -> 'Frontier':
        """
        Build a frontier from (y, x) points such as np.argwhere output.

        Args:
            points: Iterable of (row, col) pairs

        Returns:
            Frontier with cells in (gx, gy) order
        """
        return cls(cells=tuple((int(x), int(y)) for y, x in points))

    @property
    def size(self) -> int:
        """Number of cells in the frontier."""
        return len(self.cells)

    @property
    def center_grid(self) -> Optional[Cell]:
        """Mean cell of the frontier, (gx, gy), or None when empty."""
        if not self.cells:
            return None
        cx, cy = np.mean(np.asarray(self.cells, dtype=float), axis=0).astype(int)
        return int(cx), int(cy)

    def __len__(self) -> int:
        return self.size


@dataclass
class RobotState:
    """Robot pose state."""
    x: float = 0.0
    y: float = 0.0
    yaw: float = 0.0


@dataclass
class MapInfo:
    """Occupancy grid data and metadata for coordinate transformations."""
    data: Optional[np.ndarray] = field(default=None, repr=False)
    resolution: float = 0.05
    origin_x: float = 0.0
    origin_y: float = 0.0
    width: int = 0
    height: int = 0

    @classmethod
    def from_grid(
        cls,
        data,
        resolution: float = 0.05,
        origin_x: float = 0.0,
        origin_y: float = 0.0
    ) -> 'MapInfo':
        """
        Build map info from a 2-D array of occupancy values.

        Args:
            data: Rows are gy, columns are gx
            resolution: Cell size in meters
            origin_x, origin_y: World position of cell (0, 0)

        Returns:
            MapInfo with width and height taken from the array shape
        """
        grid = np.asarray(data, dtype=int)
        height, width = grid.shape
        return cls(
            data=grid,
            resolution=resolution,
            origin_x=origin_x,
            origin_y=origin_y,
            width=width,
            height=height
        )

    def is_valid(self) -> bool:
        """Check if map data is available."""
        return self.data is not None and self.width > 0 and self.height > 0


@dataclass
class ExplorationContext:
    """State every frontier value is evaluated against."""
    robot: RobotState = field(default_factory=RobotState)
    map_info: MapInfo = field(default_factory=MapInfo)
    last_direction: Optional[float] = None  # rad - heading to previous goal
