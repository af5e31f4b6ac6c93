#!/usr/bin/env python3
"""Unit tests for FrontiersMap."""
import os
import tempfile
import pytest
import yaml

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from frontier_exploration.errors import (
    ConfigurationError,
    EmptyCollectionError,
    UnknownStrategyError,
)
from frontier_exploration.frontier.values import FrontierValue
from frontier_exploration.frontiers_map import FrontiersMap
from frontier_exploration.params import ParameterStore
from frontier_exploration.types import ExplorationContext, Frontier, MapInfo, RobotState


def make_frontier(size, row=0):
    """Frontier of `size` cells laid out along grid row `row`."""
    return Frontier(cells=[(x, row) for x in range(size)])


class RowValue(FrontierValue):
    """Scores a frontier by the grid row of its first cell."""

    NAME = 'row'

    def score(self, frontier, context):
        return frontier.cells[0][1]


# ==================== Fixtures ====================

@pytest.fixture
def frontiers_map():
    """Map with threshold 4 and one size strategy."""
    fmap = FrontiersMap(minimum_size=4)
    fmap.add_frontier_value('max_size')
    return fmap


@pytest.fixture
def sample_params():
    """Sample parameter dict for testing."""
    return {
        'frontiers': {
            'minimum_size': 4,
            'strategies': ['max_size', 'min_euclidean_distance'],
            'strategy_params': {
                'max_size': {'weight': 2, 'normalizer': '10'},
            },
            'combination': 'weighted_sum',
            'connectivity': 4,
            'verbosity': 1,
        },
    }


@pytest.fixture
def params_file(sample_params):
    """Create a temporary parameter YAML file."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        yaml.dump(sample_params, f)
        path = f.name
    yield path
    os.unlink(path)


@pytest.fixture
def free_map():
    """20x20 free map with 1m cells at the origin."""
    return MapInfo.from_grid([[0] * 20 for _ in range(20)], resolution=1.0)


# ==================== Tests ====================

class TestInit:
    def test_starts_empty_and_unconfigured(self):
        fmap = FrontiersMap()
        assert len(fmap) == 0
        assert list(fmap) == []
        assert fmap.strategies == ()
        assert fmap.is_configured is False

    def test_invalid_minimum_size(self):
        with pytest.raises(ConfigurationError):
            FrontiersMap(minimum_size=-1)

    def test_invalid_combination(self):
        with pytest.raises(ConfigurationError):
            FrontiersMap(combination='product')

    def test_invalid_connectivity(self):
        with pytest.raises(ConfigurationError):
            FrontiersMap(connectivity=6)


class TestIngestion:
    def test_set_frontiers_filters_and_keeps_order(self, frontiers_map):
        small, medium, large = make_frontier(2, 0), make_frontier(5, 1), make_frontier(8, 2)
        frontiers_map.set_frontiers([small, medium, large])
        assert list(frontiers_map) == [medium, large]

    @pytest.mark.parametrize('threshold', [0, 1, 3, 5, 9])
    def test_set_frontiers_filter_is_exact(self, threshold):
        candidates = [make_frontier(size, row) for row, size in enumerate([1, 7, 3, 5, 3, 0, 9])]
        fmap = FrontiersMap(minimum_size=threshold)
        fmap.set_frontiers(candidates)

        assert all(f.size >= threshold for f in fmap)
        assert list(fmap) == [f for f in candidates if f.size >= threshold]

    def test_set_frontiers_replaces_previous(self, frontiers_map):
        frontiers_map.set_frontiers([make_frontier(5, 0), make_frontier(6, 1)])
        frontiers_map.set_frontiers([make_frontier(7, 2)])
        assert [f.size for f in frontiers_map] == [7]

    def test_set_frontiers_accepts_generator(self, frontiers_map):
        frontiers_map.set_frontiers(make_frontier(s, s) for s in (4, 5))
        assert len(frontiers_map) == 2

    def test_add_does_not_filter(self, frontiers_map):
        frontiers_map.add(make_frontier(1))
        assert len(frontiers_map) == 1
        frontiers_map.add(make_frontier(10, 1))
        assert len(frontiers_map) == 2

    def test_clear(self, frontiers_map):
        frontiers_map.add(make_frontier(5))
        frontiers_map.clear()
        assert len(frontiers_map) == 0

    def test_iteration_does_not_sort(self, frontiers_map):
        stored = [make_frontier(9, 0), make_frontier(4, 1), make_frontier(6, 2)]
        frontiers_map.set_frontiers(stored)
        assert list(frontiers_map) == stored
        assert frontiers_map.frontiers == tuple(stored)


class TestStrategies:
    def test_add_frontier_value_returns_strategy(self):
        fmap = FrontiersMap()
        strategy = fmap.add_frontier_value('max_size', {'weight': '2'})
        assert fmap.strategies == (strategy,)
        assert strategy.weight == 2.0

    def test_unknown_name_leaves_strategies_unchanged(self, frontiers_map):
        before = frontiers_map.strategies
        with pytest.raises(ConfigurationError) as excinfo:
            frontiers_map.add_frontier_value('no_such_value')
        assert isinstance(excinfo.value, UnknownStrategyError)
        assert excinfo.value.name == 'no_such_value'
        assert 'max_size' in excinfo.value.available
        assert frontiers_map.strategies == before

    def test_add_strategy_keeps_reference(self):
        fmap = FrontiersMap()
        strategy = RowValue()
        fmap.add_strategy(strategy)
        assert fmap.strategies[0] is strategy

    def test_add_strategy_rejects_non_strategy(self):
        fmap = FrontiersMap()
        with pytest.raises(TypeError):
            fmap.add_strategy(object())


class TestSelection:
    def test_filters_then_picks_largest(self, frontiers_map):
        frontiers_map.set_frontiers([make_frontier(2, 0), make_frontier(5, 1), make_frontier(8, 2)])
        assert [f.size for f in frontiers_map] == [5, 8]
        assert frontiers_map.max().size == 8

    def test_max_on_empty_raises(self, frontiers_map):
        with pytest.raises(EmptyCollectionError, match='no frontiers available'):
            frontiers_map.max()

    def test_min_and_sbegin_on_empty_raise(self, frontiers_map):
        with pytest.raises(EmptyCollectionError):
            frontiers_map.min()
        with pytest.raises(EmptyCollectionError):
            frontiers_map.sbegin()

    def test_empty_error_is_lookup_error(self, frontiers_map):
        with pytest.raises(LookupError):
            frontiers_map.max()

    def test_max_is_greatest(self, frontiers_map):
        frontiers_map.set_frontiers([make_frontier(s, i) for i, s in enumerate([6, 11, 4, 9])])
        best = frontiers_map.max()
        assert all(frontiers_map.aggregate_score(best) >= frontiers_map.aggregate_score(f)
                   for f in frontiers_map)

    def test_max_tie_goes_to_first_stored(self, frontiers_map):
        first, second = make_frontier(8, 1), make_frontier(8, 2)
        frontiers_map.set_frontiers([make_frontier(5, 0), first, second])
        assert frontiers_map.max() is first
        assert frontiers_map.most_valuable() is first

    def test_min_tie_goes_to_first_stored(self, frontiers_map):
        first, second = make_frontier(4, 1), make_frontier(4, 2)
        frontiers_map.set_frontiers([make_frontier(9, 0), first, second])
        assert frontiers_map.min() is first
        assert frontiers_map.least_valuable() is first

    def test_max_does_not_reorder(self, frontiers_map):
        stored = [make_frontier(9, 0), make_frontier(4, 1), make_frontier(6, 2)]
        frontiers_map.set_frontiers(stored)
        frontiers_map.max()
        assert list(frontiers_map) == stored

    def test_sbegin_sorts_ascending(self, frontiers_map):
        frontiers_map.set_frontiers([make_frontier(s, i) for i, s in enumerate([9, 4, 6, 12, 5])])
        it = frontiers_map.sbegin()
        sizes = [f.size for f in it]
        assert sizes == [4, 5, 6, 9, 12]
        # The map itself is now sorted
        assert [f.size for f in frontiers_map] == sizes

    def test_sbegin_first_is_least_valuable(self, frontiers_map):
        frontiers_map.set_frontiers([make_frontier(s, i) for i, s in enumerate([9, 4, 6])])
        assert next(frontiers_map.sbegin()).size == 4

    def test_sort_is_idempotent(self, frontiers_map):
        frontiers_map.set_frontiers([make_frontier(s, i) for i, s in enumerate([7, 4, 7, 5, 4])])
        frontiers_map.sort()
        once = list(frontiers_map)
        frontiers_map.sort()
        assert list(frontiers_map) == once

    def test_ranked_most_valuable_first(self, frontiers_map):
        a, b, c, d = make_frontier(5, 0), make_frontier(9, 1), make_frontier(9, 2), make_frontier(6, 3)
        frontiers_map.set_frontiers([a, b, c, d])
        assert frontiers_map.ranked() == [b, c, d, a]
        assert list(frontiers_map) == [a, b, c, d]

    def test_no_strategies_ties_everything(self):
        fmap = FrontiersMap(minimum_size=0)
        first = make_frontier(1, 0)
        fmap.set_frontiers([first, make_frontier(20, 1)])
        assert fmap.aggregate_score(first) == 0.0
        assert fmap.max() is first
        assert fmap.min() is first

    def test_context_drives_selection(self, free_map):
        fmap = FrontiersMap(minimum_size=1)
        fmap.add_frontier_value('min_euclidean_distance')
        near = Frontier(cells=[(2, 0), (3, 0)])
        far = Frontier(cells=[(15, 15), (16, 15)])
        fmap.set_frontiers([far, near])

        at_origin = ExplorationContext(robot=RobotState(x=0.5, y=0.5), map_info=free_map)
        at_far_corner = ExplorationContext(robot=RobotState(x=16.0, y=16.0), map_info=free_map)
        assert fmap.max(at_origin) is near
        assert fmap.max(at_far_corner) is far

    def test_lexicographic_combination(self):
        fmap = FrontiersMap(minimum_size=0, combination='lexicographic')
        fmap.add_frontier_value('max_size')
        fmap.add_strategy(RowValue())
        wide_low = make_frontier(3, 0)
        narrow_high = make_frontier(2, 10)
        wide_high = make_frontier(3, 1)
        fmap.set_frontiers([wide_low, narrow_high, wide_high])
        assert fmap.max() is wide_high
        assert fmap.min() is narrow_high


class TestIsFrontier:
    @pytest.fixture
    def map_info(self):
        return MapInfo.from_grid([
            [0, 0, 0, -1, -1],
            [0, 0, 0, -1, -1],
            [0, 0, 0, -1, -1],
            [0, 0, 0, 0, 0],
            [100, 100, 100, 100, 100],
        ])

    def test_edge_cell(self, map_info):
        assert FrontiersMap().is_frontier(2, map_info) is True

    def test_diagonal_cell_depends_on_connectivity(self, map_info):
        assert FrontiersMap(connectivity=8).is_frontier(17, map_info) is True
        assert FrontiersMap(connectivity=4).is_frontier(17, map_info) is False

    def test_interior_unknown_and_occupied_cells(self, map_info):
        fmap = FrontiersMap()
        assert fmap.is_frontier(0, map_info) is False
        assert fmap.is_frontier(3, map_info) is False
        assert fmap.is_frontier(24, map_info) is False

    def test_does_not_consult_stored_frontiers(self, map_info):
        fmap = FrontiersMap()
        fmap.add(make_frontier(5))
        assert fmap.is_frontier(0, map_info) is False


class TestGetParams:
    def test_configures_from_yaml(self, params_file):
        fmap = FrontiersMap()
        fmap.get_params(ParameterStore.from_yaml(params_file))

        assert fmap.is_configured is True
        assert fmap.minimum_size == 4
        assert fmap.connectivity == 4
        assert fmap.verbosity == 1
        assert [s.name for s in fmap.strategies] == ['max_size', 'min_euclidean_distance']
        assert fmap.strategies[0].weight == 2.0
        assert fmap.strategies[0].normalizer == 10.0

    def test_optional_keys_default(self):
        fmap = FrontiersMap()
        fmap.get_params(ParameterStore({'frontiers': {'minimum_size': 2, 'strategies': []}}))
        assert fmap.is_configured is True
        assert fmap.combination == 'weighted_sum'
        assert fmap.connectivity == 8
        assert fmap.verbosity == 0
        assert fmap.strategies == ()

    def test_custom_namespace(self):
        fmap = FrontiersMap()
        store = ParameterStore({'explorer': {'frontiers': {'minimum_size': 6, 'strategies': ['max_size']}}})
        fmap.get_params(store, namespace='explorer/frontiers')
        assert fmap.minimum_size == 6

    def test_missing_minimum_size(self, sample_params):
        del sample_params['frontiers']['minimum_size']
        fmap = FrontiersMap()
        with pytest.raises(ConfigurationError, match='minimum_size'):
            fmap.get_params(ParameterStore(sample_params))
        assert fmap.is_configured is False

    def test_missing_strategies(self, sample_params):
        del sample_params['frontiers']['strategies']
        with pytest.raises(ConfigurationError):
            FrontiersMap().get_params(ParameterStore(sample_params))

    @pytest.mark.parametrize('value', [-1, 'five', 2.5, True])
    def test_invalid_minimum_size(self, sample_params, value):
        sample_params['frontiers']['minimum_size'] = value
        fmap = FrontiersMap(minimum_size=3)
        with pytest.raises(ConfigurationError):
            fmap.get_params(ParameterStore(sample_params))
        assert fmap.minimum_size == 3

    def test_strategies_must_be_list(self, sample_params):
        sample_params['frontiers']['strategies'] = 'max_size'
        with pytest.raises(ConfigurationError):
            FrontiersMap().get_params(ParameterStore(sample_params))

    def test_unknown_strategy_commits_nothing(self, sample_params):
        sample_params['frontiers']['strategies'] = ['max_size', 'teleport']
        fmap = FrontiersMap(minimum_size=3)
        with pytest.raises(UnknownStrategyError):
            fmap.get_params(ParameterStore(sample_params))
        assert fmap.strategies == ()
        assert fmap.minimum_size == 3
        assert fmap.is_configured is False

    def test_bad_combination_rolls_back(self, sample_params):
        sample_params['frontiers']['combination'] = 'average'
        fmap = FrontiersMap(minimum_size=3)
        with pytest.raises(ConfigurationError):
            fmap.get_params(ParameterStore(sample_params))
        assert fmap.minimum_size == 3
        assert fmap.combination == 'weighted_sum'
        assert fmap.strategies == ()

    def test_bad_strategy_params(self, sample_params):
        sample_params['frontiers']['strategy_params']['max_size'] = {'weight': 'heavy'}
        with pytest.raises(ConfigurationError):
            FrontiersMap().get_params(ParameterStore(sample_params))

    def test_reconfigure_does_not_refilter(self, sample_params):
        fmap = FrontiersMap(minimum_size=1)
        fmap.set_frontiers([make_frontier(2, 0), make_frontier(6, 1)])
        fmap.get_params(ParameterStore(sample_params))
        assert len(fmap) == 2

        fmap.set_frontiers([make_frontier(2, 0), make_frontier(6, 1)])
        assert [f.size for f in fmap] == [6]

    def test_logs_summary(self, sample_params):
        messages = []
        fmap = FrontiersMap(logger=messages.append)
        fmap.get_params(ParameterStore(sample_params))
        assert any('minimum_size=4' in m for m in messages)


class TestPrintAll:
    def test_silent_at_verbosity_zero(self, frontiers_map):
        messages = []
        frontiers_map.logger = messages.append
        frontiers_map.set_frontiers([make_frontier(5)])
        assert frontiers_map.print_all() == []
        assert messages == []

    def test_one_line_per_frontier(self):
        messages = []
        fmap = FrontiersMap(minimum_size=0, verbosity=1, logger=messages.append)
        fmap.add_frontier_value('max_size')
        fmap.set_frontiers([make_frontier(3, 0), make_frontier(7, 1)])

        lines = fmap.print_all()
        assert len(lines) == 2
        assert lines == messages
        assert 'size=7' in lines[1]
        assert 'max_size=7.000' in lines[1]
