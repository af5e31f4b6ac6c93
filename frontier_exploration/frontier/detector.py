"""
Frontier detection and clustering.

Identifies boundaries between known and unknown space in the occupancy grid.
"""
from typing import List

import numpy as np
from scipy import ndimage

from frontier_exploration.config import Config
from frontier_exploration.types import Frontier, MapInfo
from frontier_exploration import utils


def neighbourhood(connectivity: int) -> np.ndarray:
    """3x3 structuring element for 4- or 8-connectivity."""
    if connectivity not in (4, 8):
        raise ValueError("connectivity must be 4 or 8")
    return ndimage.generate_binary_structure(2, 1 if connectivity == 4 else 2)


class FrontierDetector:
    """Detects and clusters frontier cells in occupancy grids."""

    def __init__(
        self,
        connectivity: int = Config.CONNECTIVITY,
        safety_margin: int = Config.SAFETY_MARGIN
    ):
        """
        Initialize frontier detector.

        Args:
            connectivity: Neighbour rule (4 or 8) for adjacency and clustering
            safety_margin: Grid cells to keep away from obstacles (0 = off)
        """
        self.structure = neighbourhood(connectivity)
        self.connectivity = connectivity
        self.safety_margin = safety_margin

    def is_frontier_cell(self, cell: int, map_info: MapInfo) -> bool:
        """
        Check if a single cell is a frontier cell.

        A frontier cell is free and has at least one unknown neighbour.

        Args:
            cell: Flat row-major index into the grid
            map_info: Map data and metadata

        Returns:
            True if the cell is a frontier cell, False otherwise
            (including out-of-range cells and missing maps)
        """
        if not map_info.is_valid():
            return False
        if cell < 0 or cell >= map_info.width * map_info.height:
            return False

        gx, gy = utils.index_to_cell(cell, map_info.width)
        region, cx, cy = utils.extract_window(map_info.data, gx, gy, 1)
        free, unknown, _ = utils.occupancy_masks(region)
        if not free[cy, cx]:
            return False

        # Align the structuring element with the clipped window
        structure = self.structure[1 - cy:1 - cy + region.shape[0], 1 - cx:1 - cx + region.shape[1]]
        return bool(np.any(unknown & structure))

    def find_frontier_cells(self, map_info: MapInfo) -> np.ndarray:
        """
        Boolean mask of frontier cells.

        Frontiers are free cells adjacent to unknown cells, away from obstacles.

        Args:
            map_info: Map data and metadata

        Returns:
            Mask with the grid's shape, or an empty array without a map
        """
        if not map_info.is_valid():
            return np.zeros((0, 0), dtype=bool)

        free, unknown, occupied = utils.occupancy_masks(map_info.data)

        # Frontiers: free cells adjacent to unknown cells
        unknown_dilated = ndimage.binary_dilation(unknown, structure=self.structure)
        frontier_mask = free & unknown_dilated

        # Remove frontiers near obstacles
        if self.safety_margin > 0:
            obstacle_nearby = ndimage.binary_dilation(occupied, iterations=self.safety_margin)
            frontier_mask = frontier_mask & ~obstacle_nearby

        return frontier_mask

    def cluster(self, frontier_mask: np.ndarray) -> List[Frontier]:
        """
        Group frontier cells into connected frontiers.

        Args:
            frontier_mask: Boolean mask from find_frontier_cells

        Returns:
            Frontiers in label order, without size filtering
        """
        if frontier_mask.size == 0 or not frontier_mask.any():
            return []

        labeled, num_features = ndimage.label(frontier_mask, structure=self.structure)

        frontiers = []
        for i in range(1, num_features + 1):
            points = np.argwhere(labeled == i)
            frontiers.append(Frontier.from_points(points))
        return frontiers

    def detect(self, map_info: MapInfo) -> List[Frontier]:
        """Find and cluster all frontiers of a map."""
        return self.cluster(self.find_frontier_cells(map_info))
