import numpy as np
import pytest

from dcauction.analysis import SupplyFastSolver, objective_value
from dcauction.auction import Auction
from dcauction.lp import DualLP, OptimizationError, SubgradientLP


def test_dual_lp_shortage_price_equals_valuation():
    lp = DualLP([[10.0]], [2.0], [1.0])
    lp.optimize()
    assert lp.p == pytest.approx([10.0], abs=1e-6)
    assert lp.pi == pytest.approx([0.0], abs=1e-6)


def test_dual_lp_objective_matches_price_evaluation():
    valuations = np.array([[10.0, 6.0], [4.0, 8.0]])
    demand = np.array([3.0, 2.0])
    supply = np.array([1.0, 1.0])
    lp = DualLP(valuations, demand, supply, penalty=0.001)
    value = lp.optimize()
    auction = Auction(pos_valuation=valuations, pos_demand=demand, supply=supply)
    expected = objective_value(auction, lp.p) + 0.001 * lp.p.sum()
    assert value == pytest.approx(expected, abs=1e-6)
    assert lp.objective_value == value


def test_dual_lp_utilities_are_best_surplus():
    valuations = np.array([[10.0, 6.0], [4.0, 8.0]])
    demand = np.array([3.0, 2.0])
    lp = DualLP(valuations, demand, np.array([1.0, 1.0]))
    lp.set_oversupply([1.0, 0.0])
    lp.optimize()
    surplus = np.maximum((valuations - lp.p).max(axis=1), 0.0)
    assert lp.pi == pytest.approx(surplus, abs=1e-6)


def test_dual_lp_without_bids_has_zero_prices():
    lp = DualLP(np.zeros((0, 2)), [], [1.0, 2.0])
    assert lp.optimize() == pytest.approx(0.0, abs=1e-9)
    assert lp.p == pytest.approx([0.0, 0.0], abs=1e-9)


def test_dual_lp_unbounded_raises():
    lp = DualLP([[10.0]], [2.0], [1.0])
    lp.set_oversupply([-5.0])
    with pytest.raises(OptimizationError):
        lp.optimize()


def test_dual_lp_rejects_mismatched_shapes():
    with pytest.raises(ValueError):
        DualLP([[1.0, 2.0, 3.0]], [1.0], [1.0, 1.0])
    lp = DualLP([[1.0, 2.0]], [1.0], [1.0, 1.0])
    with pytest.raises(ValueError):
        lp.set_oversupply([1.0])


VALUATIONS = np.array([[10.0, 4.0], [3.0, 9.0]])
DEMAND = np.array([2.0, 1.0])


@pytest.mark.parametrize("prices", [[3.0, 1.0], [12.0, 10.0], [5.0, 2.0], [1.0, 7.0]])
def test_subgradient_lp_matches_greedy_supply(prices):
    lp = SubgradientLP(VALUATIONS, DEMAND, np.zeros(2))
    lp.set_prices(prices)
    lp.recalculate_objective()
    supply = lp.optimize()
    expected = SupplyFastSolver(VALUATIONS, DEMAND).solve(np.array(prices))
    assert supply == pytest.approx(expected)
    assert lp.s == pytest.approx(expected)


def test_subgradient_lp_prices_need_objective_rebuild():
    lp = SubgradientLP(VALUATIONS, DEMAND, np.zeros(2))
    lp.set_prices([3.0, 1.0])
    lp.recalculate_objective()
    first = lp.optimize().copy()
    lp.set_prices([12.0, 10.0])
    assert lp.optimize() == pytest.approx(first)
    lp.recalculate_objective()
    assert lp.optimize() == pytest.approx(np.zeros(2))


def test_subgradient_lp_existing_supply_reduces_extra_supply():
    lp = SubgradientLP(VALUATIONS, DEMAND, np.array([2.0, 1.0]))
    lp.set_prices([3.0, 1.0])
    lp.recalculate_objective([1.0, -1.0])
    assert lp.optimize() == pytest.approx(np.zeros(2))
    assert lp.penalty_signature == pytest.approx([1.0, -1.0])


def test_subgradient_lp_rejects_bad_lengths():
    lp = SubgradientLP(VALUATIONS, DEMAND, np.zeros(2))
    with pytest.raises(ValueError):
        lp.set_prices([1.0])
    with pytest.raises(ValueError):
        lp.recalculate_objective([1.0, 1.0, 1.0])