"""
Configuration constants for frontier ranking.

All magic numbers are centralized here for easy tuning and maintenance.
"""


class Config:
    """Frontier ranking configuration constants."""

    # ==================== Frontiers ====================
    MIN_FRONTIER_SIZE = 3           # cells - used until get_params sets one
    CONNECTIVITY = 8                # neighbour rule for frontier cells (4 or 8)
    SAFETY_MARGIN = 0               # grid cells - drop frontier cells near obstacles (0 = off)

    # ==================== Occupancy Values ====================
    UNKNOWN = -1
    OCCUPIED_THRESHOLD = 65         # probability >= threshold counts as occupied

    # ==================== Strategy Defaults ====================
    DEFAULT_WEIGHT = 1.0
    DEFAULT_COMBINATION = "weighted_sum"
    COMBINATIONS = ("weighted_sum", "lexicographic")
    NEUTRAL_DIRECTION_SCORE = 0.5   # no previous goal direction
    MIN_DIRECTION_DISTANCE = 0.5    # m - closer frontiers get the neutral direction score

    # ==================== Information Gain ====================
    INFO_GAIN_RADIUS = 40           # grid cells (~2m) - information gain calc radius
    INFO_GAIN_NORMALIZER = 100.0    # raw gain mapped onto [0, 1]

    # ==================== Openness Calculation ====================
    OPENNESS_RADIUS = 12            # grid cells - openness check radius
    OPENNESS_MIN_SCORE = 0.3        # minimum openness score
    UNKNOWN_OPENNESS_FACTOR = 0.7   # unknown cells count as partly open
    WALL_PENALTY_FACTOR = 0.3       # multiply openness for wall-adjacent frontiers
    WALL_CHECK_THRESHOLD = 8        # grid cells - wall proximity check
    WALL_OBSTACLE_FRACTION = 0.3    # obstacle share of the wall check window

    # ==================== Parameter Keys ====================
    PARAM_NAMESPACE = "frontiers"
    PARAM_MINIMUM_SIZE = "minimum_size"
    PARAM_STRATEGIES = "strategies"
    PARAM_STRATEGY_PARAMS = "strategy_params"
    PARAM_COMBINATION = "combination"
    PARAM_CONNECTIVITY = "connectivity"
    PARAM_VERBOSITY = "verbosity"
