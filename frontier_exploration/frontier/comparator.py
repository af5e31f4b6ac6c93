"""
Frontier filtering and comparison.

HasNotMinimumSize rejects small frontiers, FrontierValueComparator orders
frontiers by the combined score of a set of frontier values.
"""
from typing import Dict, Iterable, Optional, Tuple, Union

from frontier_exploration.config import Config
from frontier_exploration.errors import ConfigurationError
from frontier_exploration.types import ExplorationContext, Frontier
from frontier_exploration.frontier.values import FrontierValue


Key = Union[float, Tuple[float, ...]]


class HasNotMinimumSize:
    """Predicate: frontier has fewer cells than the minimum size."""

    def __init__(self, minimum_size: int):
        if minimum_size < 0:
            raise ValueError("minimum_size must be >= 0")
        self.minimum_size = int(minimum_size)

    def __call__(self, frontier: Frontier) -> bool:
        return frontier.size < self.minimum_size


class FrontierValueComparator:
    """
    Compare frontiers by their aggregate value.

    "weighted_sum" adds the weighted score of every strategy,
    "lexicographic" compares the weighted scores in registration order.
    Keys are cached per frontier, so one comparator should be used for
    one selection pass.
    """

    def __init__(
        self,
        strategies: Iterable[FrontierValue],
        context: Optional[ExplorationContext] = None,
        combination: str = Config.DEFAULT_COMBINATION
    ):
        """
        Initialize comparator.

        Args:
            strategies: Frontier values to combine, in registration order
            context: Robot pose and map frontiers are evaluated against
            combination: "weighted_sum" or "lexicographic"
        """
        if combination not in Config.COMBINATIONS:
            raise ConfigurationError(
                f"Unknown combination '{combination}' "
                f"(expected one of {', '.join(Config.COMBINATIONS)})"
            )
        self.strategies: Tuple[FrontierValue, ...] = tuple(strategies)
        self.context = context if context is not None else ExplorationContext()
        self.combination = combination
        self._cache: Dict[Frontier, Tuple[float, ...]] = {}

    def scores(self, frontier: Frontier) -> Tuple[float, ...]:
        """Weighted score of every strategy for frontier."""
        cached = self._cache.get(frontier)
        if cached is None:
            cached = tuple(s.evaluate(frontier, self.context) for s in self.strategies)
            self._cache[frontier] = cached
        return cached

    def key(self, frontier: Frontier) -> Key:
        """Aggregate value of frontier, usable as a sort key."""
        scores = self.scores(frontier)
        if self.combination == "lexicographic":
            return scores
        return float(sum(scores))

    def __call__(self, f1: Frontier, f2: Frontier) -> bool:
        """True if f1 is less valuable than f2."""
        return self.key(f1) < self.key(f2)
