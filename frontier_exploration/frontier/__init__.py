"""
Frontier detection, valuation and comparison module.

Provides the building blocks FrontiersMap uses to rank exploration frontiers.
"""
from .detector import FrontierDetector
from .values import (
    FrontierValue,
    register_frontier_value,
    create_frontier_value,
    available_frontier_values,
)
from .comparator import FrontierValueComparator, HasNotMinimumSize

__all__ = [
    'FrontierDetector',
    'FrontierValue',
    'register_frontier_value',
    'create_frontier_value',
    'available_frontier_values',
    'FrontierValueComparator',
    'HasNotMinimumSize',
]
