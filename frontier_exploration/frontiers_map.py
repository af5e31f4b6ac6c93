"""
Collection of frontiers in a map.

FrontiersMap stores the current frontier candidates, the frontier values
used to rank them, and selects the next exploration goal.
"""
from typing import Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from frontier_exploration.config import Config
from frontier_exploration.errors import ConfigurationError, EmptyCollectionError
from frontier_exploration.params import ParameterStore
from frontier_exploration.types import ExplorationContext, Frontier, MapInfo
from frontier_exploration.frontier.comparator import FrontierValueComparator, HasNotMinimumSize, Key
from frontier_exploration.frontier.detector import FrontierDetector
from frontier_exploration.frontier.values import FrontierValue, create_frontier_value


class FrontiersMap:
    """
    Representation of the collection of frontiers in a map.

    Frontiers keep insertion order until sort() or sbegin() reorders them.
    Ranking is ascending: the least valuable frontier sorts first, max()
    returns the most valuable one. Ties are resolved in favour of the
    frontier stored first.
    """

    def __init__(
        self,
        minimum_size: int = Config.MIN_FRONTIER_SIZE,
        combination: str = Config.DEFAULT_COMBINATION,
        connectivity: int = Config.CONNECTIVITY,
        verbosity: int = 0,
        logger: Optional[Callable] = None
    ):
        """
        Initialize an empty, unconfigured frontiers map.

        Args:
            minimum_size: Frontiers smaller than this are dropped by set_frontiers
            combination: How strategy scores combine ("weighted_sum" or "lexicographic")
            connectivity: Neighbour rule for is_frontier (4 or 8)
            verbosity: Diagnostic output level
            logger: Optional logger function (node.get_logger().info, etc.)
        """
        self.logger = logger or (lambda msg: None)
        self.verbosity = verbosity
        self.is_configured = False

        self._frontiers: List[Frontier] = []
        self._strategies: List[FrontierValue] = []
        self._set_minimum_size(minimum_size)
        self._set_combination(combination)
        self._set_connectivity(connectivity)

    # ==================== Frontiers ====================

    def add(self, frontier: Frontier) -> None:
        """
        Append a frontier.

        No minimum size filter is applied here, unlike set_frontiers.

        Args:
            frontier: New frontier
        """
        self._frontiers.append(frontier)

    def set_frontiers(self, frontiers: Iterable[Frontier]) -> None:
        """
        Replace the stored frontiers with those of at least minimum_size cells.

        Args:
            frontiers: Candidate frontiers; relative order is kept
        """
        too_small = HasNotMinimumSize(self.minimum_size)
        self.clear()
        self._frontiers.extend(f for f in frontiers if not too_small(f))

    def clear(self) -> None:
        """Remove all stored frontiers."""
        self._frontiers.clear()

    @property
    def frontiers(self) -> Tuple[Frontier, ...]:
        return tuple(self._frontiers)

    def __iter__(self) -> Iterator[Frontier]:
        return iter(tuple(self._frontiers))

    def __len__(self) -> int:
        return len(self._frontiers)

    # ==================== Strategies ====================

    def add_strategy(self, strategy: FrontierValue) -> None:
        """
        Append a frontier value to consider when ranking.

        The map keeps a reference to the strategy; do not modify it while
        a selection is running.

        Args:
            strategy: Frontier value instance
        """
        if not callable(getattr(strategy, 'evaluate', None)):
            raise TypeError(f"{strategy!r} has no evaluate() method")
        self._strategies.append(strategy)

    def add_frontier_value(
        self,
        name: str,
        params: Optional[Mapping[str, str]] = None
    ) -> FrontierValue:
        """
        Build a registered frontier value and add it.

        Args:
            name: Name of the frontier value
            params: Parameters passed to the frontier value

        Returns:
            The created frontier value
        """
        strategy = create_frontier_value(name, params)
        self.add_strategy(strategy)
        return strategy

    @property
    def strategies(self) -> Tuple[FrontierValue, ...]:
        return tuple(self._strategies)

    # ==================== Ranking ====================

    def comparator(self, context: Optional[ExplorationContext] = None) -> FrontierValueComparator:
        """Comparator over the current strategies for one selection pass."""
        if not self._strategies and self.verbosity > 0:
            self.logger('No frontier values registered, all frontiers score 0')
        return FrontierValueComparator(self._strategies, context, self.combination)

    def aggregate_score(self, frontier: Frontier, context: Optional[ExplorationContext] = None) -> Key:
        """Aggregate value of one frontier."""
        return self.comparator(context).key(frontier)

    def max(self, context: Optional[ExplorationContext] = None) -> Frontier:
        """
        Get the most valuable frontier.

        Args:
            context: Robot pose and map to evaluate against

        Returns:
            First stored frontier with the greatest aggregate value
        """
        self._require_frontiers()
        # max() keeps the first maximal element
        return max(self._frontiers, key=self.comparator(context).key)

    most_valuable = max

    def min(self, context: Optional[ExplorationContext] = None) -> Frontier:
        """
        Get the least valuable frontier.

        Args:
            context: Robot pose and map to evaluate against

        Returns:
            First stored frontier with the smallest aggregate value
        """
        self._require_frontiers()
        return min(self._frontiers, key=self.comparator(context).key)

    least_valuable = min

    def sort(self, context: Optional[ExplorationContext] = None) -> None:
        """Sort stored frontiers in place, least valuable first (stable)."""
        self._frontiers.sort(key=self.comparator(context).key)

    def sbegin(self, context: Optional[ExplorationContext] = None) -> Iterator[Frontier]:
        """
        Sort, then iterate from the least valuable frontier.

        The most valuable frontier comes last; use max() or ranked() to
        get it first.

        Args:
            context: Robot pose and map to evaluate against

        Returns:
            Iterator over the sorted frontiers
        """
        self._require_frontiers()
        self.sort(context)
        return iter(self)

    def ranked(self, context: Optional[ExplorationContext] = None) -> List[Frontier]:
        """Frontiers most valuable first, without reordering the map."""
        key = self.comparator(context).key
        # Stable ascending sort reversed would flip ties, so sort on the index too
        indexed = sorted(
            enumerate(self._frontiers),
            key=lambda item: (key(item[1]), -item[0]),
            reverse=True
        )
        return [f for _, f in indexed]

    def _require_frontiers(self) -> None:
        if not self._frontiers:
            raise EmptyCollectionError("no frontiers available")

    # ==================== Cells ====================

    def is_frontier(self, cell: int, map_info: MapInfo) -> bool:
        """
        Check if the occupancy grid cell is a frontier cell.

        Args:
            cell: Flat row-major index of the cell
            map_info: Map the cell belongs to

        Returns:
            True if the cell is free and borders unknown space
        """
        return self._detector.is_frontier_cell(cell, map_info)

    # ==================== Configuration ====================

    def get_params(self, store: ParameterStore, namespace: str = Config.PARAM_NAMESPACE) -> None:
        """
        Configure the map from a parameter store.

        Nothing changes unless every parameter is valid and every frontier
        value can be built.

        Args:
            store: Parameter store
            namespace: Namespace holding the frontier parameters
        """
        params = store.namespace(namespace)

        minimum_size = params.get(Config.PARAM_MINIMUM_SIZE)
        names = params.get(Config.PARAM_STRATEGIES)
        if names is None:
            names = []
        if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
            raise ConfigurationError(
                f"'{namespace}/{Config.PARAM_STRATEGIES}' must be a list of names"
            )

        strategy_params: Dict = params.get(Config.PARAM_STRATEGY_PARAMS, {}) or {}
        if not isinstance(strategy_params, dict):
            raise ConfigurationError(
                f"'{namespace}/{Config.PARAM_STRATEGY_PARAMS}' must be a mapping"
            )

        combination = params.get(Config.PARAM_COMBINATION, Config.DEFAULT_COMBINATION)
        connectivity = params.get(Config.PARAM_CONNECTIVITY, Config.CONNECTIVITY)
        verbosity = params.get(Config.PARAM_VERBOSITY, 0)
        if isinstance(verbosity, bool) or not isinstance(verbosity, int):
            raise ConfigurationError(f"'{namespace}/{Config.PARAM_VERBOSITY}' must be an integer")

        strategies = []
        for name in names:
            per_strategy = strategy_params.get(name, {}) or {}
            if not isinstance(per_strategy, dict):
                raise ConfigurationError(
                    f"'{namespace}/{Config.PARAM_STRATEGY_PARAMS}/{name}' must be a mapping"
                )
            strategies.append(create_frontier_value(name, per_strategy))

        # Validate before committing anything
        previous = (self.minimum_size, self.combination, self.connectivity)
        try:
            self._set_minimum_size(minimum_size)
            self._set_combination(combination)
            self._set_connectivity(connectivity)
        except ConfigurationError:
            self._set_minimum_size(previous[0])
            self._set_combination(previous[1])
            self._set_connectivity(previous[2])
            raise

        for strategy in strategies:
            self.add_strategy(strategy)
        self.verbosity = verbosity
        self.is_configured = True

        self.logger(
            f'Frontiers map configured: minimum_size={self.minimum_size}, '
            f'combination={self.combination}, '
            f'strategies=[{", ".join(s.name for s in self._strategies)}]'
        )

    def _set_minimum_size(self, minimum_size) -> None:
        if isinstance(minimum_size, bool) or not isinstance(minimum_size, int) or minimum_size < 0:
            raise ConfigurationError(
                f"minimum_size must be a non-negative integer, got {minimum_size!r}"
            )
        self.minimum_size = minimum_size

    def _set_combination(self, combination) -> None:
        if combination not in Config.COMBINATIONS:
            raise ConfigurationError(
                f"Unknown combination {combination!r} "
                f"(expected one of {', '.join(Config.COMBINATIONS)})"
            )
        self.combination = combination

    def _set_connectivity(self, connectivity) -> None:
        if connectivity not in (4, 8) or isinstance(connectivity, bool):
            raise ConfigurationError(f"connectivity must be 4 or 8, got {connectivity!r}")
        self.connectivity = connectivity
        self._detector = FrontierDetector(connectivity=connectivity)

    # ==================== Diagnostics ====================

    def print_all(self, context: Optional[ExplorationContext] = None) -> List[str]:
        """
        Log every frontier with its per-strategy scores.

        Args:
            context: Robot pose and map to evaluate against

        Returns:
            Logged lines (empty when verbosity is 0)
        """
        if self.verbosity <= 0:
            return []

        comparator = self.comparator(context)
        lines = []
        for i, frontier in enumerate(self._frontiers):
            scores = comparator.scores(frontier)
            values = ', '.join(
                f'{s.name}={v:.3f}' for s, v in zip(comparator.strategies, scores)
            )
            lines.append(
                f'Frontier {i}: size={frontier.size} center={frontier.center_grid} '
                f'[{values}] total={comparator.key(frontier)}'
            )
        for line in lines:
            self.logger(line)
        return lines
