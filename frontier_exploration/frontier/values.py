"""
Frontier value strategies.

Each strategy scores one aspect of a frontier (size, distance, information
gain, openness, ...). Strategies are registered by name so they can be
selected from parameter files.
"""
import math
from typing import Callable, Dict, List, Mapping, Optional, Tuple, Type

import numpy as np

from frontier_exploration.config import Config
from frontier_exploration.errors import ConfigurationError, UnknownStrategyError
from frontier_exploration.types import ExplorationContext, Frontier
from frontier_exploration import utils


_REGISTRY: Dict[str, Type['FrontierValue']] = {}


def register_frontier_value(name: str) -> Callable[[Type['FrontierValue']], Type['FrontierValue']]:
    """
    Class decorator registering a FrontierValue subclass under name.

    Args:
        name: Name used in parameter files and add_frontier_value

    Returns:
        Decorator returning the class unchanged
    """
    def decorator(cls: Type['FrontierValue']) -> Type['FrontierValue']:
        if name in _REGISTRY and _REGISTRY[name] is not cls:
            raise ValueError(f"Frontier value '{name}' is already registered")
        cls.NAME = name
        _REGISTRY[name] = cls
        return cls
    return decorator


def available_frontier_values() -> List[str]:
    """Names of all registered frontier values."""
    return sorted(_REGISTRY)


def create_frontier_value(
    name: str,
    params: Optional[Mapping[str, str]] = None
) -> 'FrontierValue':
    """
    Build a registered frontier value.

    Args:
        name: Registered strategy name
        params: String parameters passed to the strategy

    Returns:
        New strategy instance
    """
    cls = _REGISTRY.get(name)
    if cls is None:
        raise UnknownStrategyError(name, _REGISTRY)
    return cls(params)


class FrontierValue:
    """Base class for frontier scoring strategies. Higher scores are better."""

    NAME = 'frontier_value'

    def __init__(self, params: Optional[Mapping[str, str]] = None):
        """
        Initialize frontier value.

        Args:
            params: String parameters; 'weight' scales every score
        """
        self.params: Dict[str, str] = {str(k): str(v) for k, v in (params or {}).items()}
        self.weight = self.get_float('weight', Config.DEFAULT_WEIGHT)

    @property
    def name(self) -> str:
        return self.NAME

    def get_float(self, key: str, default: Optional[float] = None) -> Optional[float]:
        """Parse a float parameter."""
        if key not in self.params:
            return default
        try:
            value = float(self.params[key])
        except ValueError as e:
            raise ConfigurationError(
                f"{self.name}: parameter '{key}' must be a number, got '{self.params[key]}'"
            ) from e
        if not math.isfinite(value):
            raise ConfigurationError(f"{self.name}: parameter '{key}' must be finite")
        return value

    def get_int(self, key: str, default: int) -> int:
        """Parse a non-negative integer parameter."""
        if key not in self.params:
            return default
        try:
            value = int(self.params[key])
        except ValueError as e:
            raise ConfigurationError(
                f"{self.name}: parameter '{key}' must be an integer, got '{self.params[key]}'"
            ) from e
        if value < 0:
            raise ConfigurationError(f"{self.name}: parameter '{key}' must be >= 0")
        return value

    def evaluate(self, frontier: Frontier, context: ExplorationContext) -> float:
        """
        Weighted score of a frontier.

        Args:
            frontier: Frontier to evaluate
            context: Robot pose and map the frontier is evaluated against

        Returns:
            weight * score
        """
        value = self.weight * float(self.score(frontier, context))
        if not math.isfinite(value):
            raise ValueError(f"{self.name} produced a non-finite score ({value})")
        return value

    def score(self, frontier: Frontier, context: ExplorationContext) -> float:
        """Unweighted score. Subclasses override this."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(weight={self.weight}, params={self.params})"


def frontier_center_world(
    frontier: Frontier,
    context: ExplorationContext
) -> Optional[Tuple[float, float]]:
    """World position of the frontier center, or None without a valid map."""
    center = frontier.center_grid
    if center is None or not context.map_info.is_valid():
        return None
    return utils.grid_to_world(center[0], center[1], context.map_info)


@register_frontier_value('max_size')
class MaxSize(FrontierValue):
    """Prefers large frontiers."""

    def __init__(self, params: Optional[Mapping[str, str]] = None):
        super().__init__(params)
        self.normalizer = self.get_float('normalizer', 1.0)
        self.cap = self.get_float('cap')
        if self.normalizer <= 0:
            raise ConfigurationError(f"{self.name}: parameter 'normalizer' must be > 0")

    def score(self, frontier: Frontier, context: ExplorationContext) -> float:
        value = frontier.size / self.normalizer
        if self.cap is not None:
            value = min(value, self.cap)
        return value


@register_frontier_value('min_euclidean_distance')
class MinEuclideanDistance(FrontierValue):
    """Prefers frontiers close to the robot."""

    SIGN = -1.0

    def score(self, frontier: Frontier, context: ExplorationContext) -> float:
        center = frontier_center_world(frontier, context)
        if center is None:
            return 0.0
        robot = context.robot
        return self.SIGN * utils.euclidean_distance(center[0], center[1], robot.x, robot.y)


@register_frontier_value('max_euclidean_distance')
class MaxEuclideanDistance(MinEuclideanDistance):
    """Prefers frontiers far from the robot."""

    SIGN = 1.0


@register_frontier_value('min_angle')
class MinAngle(FrontierValue):
    """Prefers frontiers in front of the robot (least turning)."""

    def score(self, frontier: Frontier, context: ExplorationContext) -> float:
        center = frontier_center_world(frontier, context)
        if center is None:
            return 0.0
        robot = context.robot
        bearing = math.atan2(center[1] - robot.y, center[0] - robot.x)
        return -abs(utils.normalize_angle(bearing - robot.yaw))


@register_frontier_value('information_gain')
class InformationGain(FrontierValue):
    """
    Potential information gain around the frontier center.

    Higher values indicate more unknown area visible from the frontier.
    Unknown cells are weighted by inverse distance, so closer cells are
    worth more. The raw gain is divided by 'normalizer' and capped at 1.
    """

    def __init__(self, params: Optional[Mapping[str, str]] = None):
        super().__init__(params)
        self.radius = self.get_int('radius', Config.INFO_GAIN_RADIUS)
        self.normalizer = self.get_float('normalizer', Config.INFO_GAIN_NORMALIZER)
        if self.normalizer <= 0:
            raise ConfigurationError(f"{self.name}: parameter 'normalizer' must be > 0")

    def raw_gain(self, gx: int, gy: int, map_data: np.ndarray) -> float:
        """Distance-weighted count of unknown cells around (gx, gy)."""
        region, cx, cy = utils.extract_window(map_data, gx, gy, self.radius)

        y_coords, x_coords = np.ogrid[0:region.shape[0], 0:region.shape[1]]
        distances = np.sqrt((y_coords - cy) ** 2 + (x_coords - cx) ** 2)
        distances = np.maximum(distances, 1)  # Avoid division by zero

        _, unknown_mask, _ = utils.occupancy_masks(region)
        return float(np.sum(unknown_mask / distances))

    def score(self, frontier: Frontier, context: ExplorationContext) -> float:
        center = frontier.center_grid
        if center is None or not context.map_info.is_valid():
            return 0.0
        gain = self.raw_gain(center[0], center[1], context.map_info.data)
        return min(gain / self.normalizer, 1.0)


@register_frontier_value('openness')
class Openness(FrontierValue):
    """
    Openness around the frontier center.

    Higher values indicate more open space (fewer obstacles nearby).
    Scores lie between OPENNESS_MIN_SCORE and 1.0 before the wall penalty.
    """

    NEUTRAL = 0.5

    def __init__(self, params: Optional[Mapping[str, str]] = None):
        super().__init__(params)
        self.radius = self.get_int('radius', Config.OPENNESS_RADIUS)
        self.wall_threshold = self.get_int('wall_threshold', Config.WALL_CHECK_THRESHOLD)
        self.wall_penalty = self.get_float('wall_penalty', Config.WALL_PENALTY_FACTOR)

    def openness(self, gx: int, gy: int, map_data: np.ndarray) -> float:
        """Clamped openness score at (gx, gy)."""
        region, _, _ = utils.extract_window(map_data, gx, gy, self.radius)
        total_cells = region.size
        if total_cells == 0:
            return self.NEUTRAL

        free, unknown, occupied = utils.occupancy_masks(region)
        free_cells = np.sum(free)
        unknown_cells = np.sum(unknown)
        obstacle_cells = np.sum(occupied)

        # Openness: free + weighted unknown, minus obstacle penalty
        openness = (free_cells + unknown_cells * Config.UNKNOWN_OPENNESS_FACTOR) / total_cells
        obstacle_penalty = obstacle_cells / total_cells

        return float(max(Config.OPENNESS_MIN_SCORE, min(1.0, openness - obstacle_penalty)))

    def is_near_wall(self, gx: int, gy: int, map_data: np.ndarray) -> bool:
        """True if obstacles exceed WALL_OBSTACLE_FRACTION of the wall check window."""
        region, _, _ = utils.extract_window(map_data, gx, gy, self.wall_threshold)
        _, _, occupied = utils.occupancy_masks(region)
        return int(np.sum(occupied)) > region.size * Config.WALL_OBSTACLE_FRACTION

    def score(self, frontier: Frontier, context: ExplorationContext) -> float:
        center = frontier.center_grid
        if center is None or not context.map_info.is_valid():
            return self.NEUTRAL
        data = context.map_info.data
        value = self.openness(center[0], center[1], data)
        if self.is_near_wall(center[0], center[1], data):
            value *= self.wall_penalty
        return value


@register_frontier_value('direction_consistency')
class DirectionConsistency(FrontierValue):
    """Prefers frontiers in the same direction as the previous goal."""

    def __init__(self, params: Optional[Mapping[str, str]] = None):
        super().__init__(params)
        self.min_distance = self.get_float('min_distance', Config.MIN_DIRECTION_DISTANCE)

    def score(self, frontier: Frontier, context: ExplorationContext) -> float:
        if context.last_direction is None:
            return Config.NEUTRAL_DIRECTION_SCORE
        center = frontier_center_world(frontier, context)
        if center is None:
            return Config.NEUTRAL_DIRECTION_SCORE

        robot = context.robot
        if utils.euclidean_distance(center[0], center[1], robot.x, robot.y) <= self.min_distance:
            return Config.NEUTRAL_DIRECTION_SCORE

        frontier_direction = math.atan2(center[1] - robot.y, center[0] - robot.x)
        # 0 = same direction, pi = opposite
        angle_diff = abs(utils.normalize_angle(frontier_direction - context.last_direction))
        return 1.0 - (angle_diff / math.pi)
