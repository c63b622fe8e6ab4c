import itertools

import numpy as np
import pytest

from dcauction.auction import Auction
from dcauction.plotter import plot_valuation, plot_valuations

VALUATIONS = np.array([[5.0, 3.0], [2.0, 6.0]])
DEMAND = np.array([2.0, 1.0])


def test_grid_covers_all_points():
    graph = plot_valuation(VALUATIONS, DEMAND, 3)
    assert set(graph) == set(itertools.product(range(3), range(3)))


def test_values_grow_with_oversupply():
    graph = plot_valuation(VALUATIONS, DEMAND, 4)
    for (s1, s2), value in graph.items():
        assert value >= 0
        if (s1 + 1, s2) in graph:
            assert graph[(s1 + 1, s2)] >= value
        if (s1, s2 + 1) in graph:
            assert graph[(s1, s2 + 1)] >= value


def test_zero_oversupply_has_zero_value():
    graph = plot_valuation(VALUATIONS, DEMAND, 2)
    assert graph[(0, 0)] == 0


def test_plot_valuations_uses_positive_demand():
    auction = Auction(
        pos_valuation=VALUATIONS,
        pos_demand=DEMAND,
        neg_valuation=np.array([[4.0, 4.0]]),
        neg_demand=np.array([1.0]),
        supply=np.array([1.0, 1.0]),
    )
    pos, neg = plot_valuations(auction)
    assert pos == plot_valuation(VALUATIONS, DEMAND, 3)
    assert set(neg) == set(pos)


def test_requires_two_goods():
    with pytest.raises(ValueError):
        plot_valuation(np.array([[1.0, 2.0, 3.0]]), np.array([1.0]), 2)