import numpy as np
import pytest

from dcauction.analysis import SupplyFastSolver, num_marginal_bids, objective_value
from dcauction.auction import Auction


def test_marginal_bid_with_tie():
    assert num_marginal_bids(np.array([[5.0, 5.0]]), np.zeros(2)) == 1


def test_no_marginal_bid_without_tie_or_with_negative_utility():
    assert num_marginal_bids(np.array([[5.0, 1.0]]), np.zeros(2)) == 0
    assert num_marginal_bids(np.array([[1.0, 1.0]]), np.array([2.0, 2.0])) == 0


def test_marginal_bids_bounded_by_bid_count():
    rng = np.random.default_rng(3)
    valuations = rng.integers(0, 5, size=(30, 3)).astype(float)
    count = num_marginal_bids(valuations, np.ones(3))
    assert 0 <= count <= 30


def test_objective_without_bids_is_price_times_supply():
    auction = Auction(
        pos_valuation=np.zeros((0, 2)),
        neg_valuation=np.zeros((0, 2)),
        supply=np.array([3.0, 4.0]),
    )
    prices = np.array([2.0, 5.0])
    assert objective_value(auction, prices) == pytest.approx(float(prices @ auction.supply))


def test_objective_identical_positive_and_negative_bids_cancel():
    valuation = np.array([[7.0, 3.0], [2.0, 9.0]])
    demand = np.array([2.0, 1.0])
    auction = Auction(
        pos_valuation=valuation,
        neg_valuation=valuation.copy(),
        pos_demand=demand,
        neg_demand=demand.copy(),
        supply=np.array([1.0, 1.0]),
    )
    prices = np.array([1.0, 4.0])
    assert objective_value(auction, prices) == pytest.approx(float(prices @ auction.supply))


def test_objective_decreases_with_added_negative_bid():
    base = Auction(
        pos_valuation=np.array([[6.0, 2.0]]),
        neg_valuation=np.zeros((0, 2)),
        pos_demand=np.array([1.0]),
        neg_demand=np.zeros(0),
        supply=np.zeros(2),
    )
    with_neg = Auction(
        pos_valuation=base.pos_valuation,
        neg_valuation=np.array([[4.0, 0.0]]),
        pos_demand=base.pos_demand,
        neg_demand=np.array([1.0]),
        supply=np.zeros(2),
    )
    prices = np.zeros(2)
    assert objective_value(with_neg, prices) < objective_value(base, prices)


def test_supply_goes_to_best_good():
    solver = SupplyFastSolver(np.array([[5.0, 2.0]]), np.array([3.0]))
    assert solver.solve(np.zeros(2)).tolist() == [3.0, 0.0]


def test_supply_zero_when_prices_exceed_valuations():
    solver = SupplyFastSolver(np.array([[5.0, 2.0]]), np.array([3.0]))
    assert solver.solve(np.array([6.0, 6.0])).tolist() == [0.0, 0.0]


def test_ties_resolved_by_permutation_order():
    valuations = np.array([[4.0, 4.0]])
    demand = np.array([2.0])
    assert SupplyFastSolver(valuations, demand).solve(np.zeros(2)).tolist() == [2.0, 0.0]
    assert SupplyFastSolver(valuations, demand, [1, 0]).solve(np.zeros(2)).tolist() == [0.0, 2.0]


def test_fractional_utility_below_one_is_idle():
    solver = SupplyFastSolver(np.array([[0.5, 0.0]]), np.array([1.0]))
    assert solver.solve(np.zeros(2)).tolist() == [0.0, 0.0]


def test_total_supply_bounded_by_demand():
    rng = np.random.default_rng(7)
    valuations = rng.integers(0, 20, size=(15, 4)).astype(float)
    demand = rng.integers(1, 5, size=15).astype(float)
    supply = SupplyFastSolver(valuations, demand).solve(np.full(4, 5.0))
    assert supply.sum() <= demand.sum()
    assert (supply >= 0).all()