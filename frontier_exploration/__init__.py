"""
Frontier Exploration Package

Ranks and selects exploration frontiers for frontier-based exploration.
"""
from .config import Config
from .errors import (
    FrontierExplorationError,
    ConfigurationError,
    UnknownStrategyError,
    EmptyCollectionError,
)
from .types import (
    Frontier,
    RobotState,
    MapInfo,
    ExplorationContext,
)
from .params import ParameterStore
from .frontier import (
    FrontierDetector,
    FrontierValue,
    FrontierValueComparator,
    HasNotMinimumSize,
    register_frontier_value,
    create_frontier_value,
    available_frontier_values,
)
from .frontiers_map import FrontiersMap
from . import utils

__version__ = "1.0.0"
__all__ = [
    'Config',
    'FrontierExplorationError',
    'ConfigurationError',
    'UnknownStrategyError',
    'EmptyCollectionError',
    'Frontier',
    'RobotState',
    'MapInfo',
    'ExplorationContext',
    'ParameterStore',
    'FrontierDetector',
    'FrontierValue',
    'FrontierValueComparator',
    'HasNotMinimumSize',
    'register_frontier_value',
    'create_frontier_value',
    'available_frontier_values',
    'FrontiersMap',
    'utils',
]
