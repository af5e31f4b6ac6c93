"""
Utility functions for frontier ranking.

Common coordinate transformations and math utilities.
"""
import math
from typing import Optional, Tuple

import numpy as np

from frontier_exploration.config import Config
from frontier_exploration.types import MapInfo


def grid_to_world(gx: int, gy: int, map_info: MapInfo) -> Tuple[Optional[float], Optional[float]]:
    """
    Convert grid coordinates to world coordinates.

    Args:
        gx: Grid x coordinate
        gy: Grid y coordinate
        map_info: Map metadata

    Returns:
        Tuple of (world_x, world_y) or (None, None) if invalid
    """
    if not map_info.is_valid():
        return None, None

    wx = map_info.origin_x + (gx + 0.5) * map_info.resolution
    wy = map_info.origin_y + (gy + 0.5) * map_info.resolution
    return wx, wy


def index_to_cell(index: int, width: int) -> Tuple[int, int]:
    """
    Convert a flat row-major cell index to grid coordinates.

    Args:
        index: Index into the flattened grid
        width: Map width in cells

    Returns:
        Tuple of (grid_x, grid_y)
    """
    gy, gx = divmod(index, width)
    return gx, gy


def normalize_angle(angle: float) -> float:
    """
    Normalize angle to [-pi, pi] range.

    Args:
        angle: Angle in radians, must be finite

    Returns:
        Normalized angle in radians
    """
    if not math.isfinite(angle):
        raise ValueError(f"Cannot normalize non-finite angle {angle}")
    return math.remainder(angle, 2 * math.pi)


def euclidean_distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """
    Calculate Euclidean distance between two points.

    Args:
        x1, y1: First point coordinates
        x2, y2: Second point coordinates

    Returns:
        Distance between the points
    """
    return math.sqrt((x2 - x1) ** 2 + (y2 - y1) ** 2)


def extract_window(
    map_data: np.ndarray,
    gx: int,
    gy: int,
    radius: int
) -> Tuple[np.ndarray, int, int]:
    """
    Cut a square window around a cell, clipped to the map.

    Args:
        map_data: Occupancy grid data
        gx, gy: Window center
        radius: Half side length in cells

    Returns:
        Tuple of (region, center_col_in_region, center_row_in_region)
    """
    h, w = map_data.shape
    y_min = max(0, gy - radius)
    y_max = min(h, gy + radius + 1)
    x_min = max(0, gx - radius)
    x_max = min(w, gx + radius + 1)
    return map_data[y_min:y_max, x_min:x_max], gx - x_min, gy - y_min


def occupancy_masks(map_data: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Split an occupancy grid into cell type masks.

    Args:
        map_data: Occupancy values (-1 unknown, 0..100 occupancy probability)

    Returns:
        Tuple of (free, unknown, occupied) boolean arrays
    """
    unknown = map_data == Config.UNKNOWN
    occupied = map_data >= Config.OCCUPIED_THRESHOLD
    free = ~unknown & ~occupied
    return free, unknown, occupied
