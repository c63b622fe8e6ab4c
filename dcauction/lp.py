"""Linear programs that compute market-clearing prices and induced supply."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from scipy import sparse
from scipy.optimize import OptimizeResult, linprog

SUPPLY_LIMIT = 200000.0
DEMAND_SLACK = 0.0001


class OptimizationError(RuntimeError):
    """Raised when a linear program has no optimal solution."""


def _as_matrix(valuations: np.ndarray, num_bids: int, num_goods: int) -> np.ndarray:
    matrix = np.asarray(valuations, dtype=float)
    try:
        return matrix.reshape(num_bids, num_goods)
    except ValueError as exc:
        raise ValueError(
            f"valuations of shape {matrix.shape} do not match "
            f"{num_bids} bids and {num_goods} goods"
        ) from exc


def _solve(c: np.ndarray, a_ub, b_ub, bounds) -> OptimizeResult:
    result = linprog(c, A_ub=a_ub, b_ub=b_ub, bounds=bounds, method="highs")
    if result.status != 0:
        raise OptimizationError(result.message)
    return result


class DualLP:
    """Minimises the dual of the welfare LP over prices ``p`` and utilities ``pi``.

    The objective is ``demand·pi + (supply + penalty + oversupply)·p`` subject to
    ``pi_i + p_j >= v_ij`` and all variables non-negative.
    """

    def __init__(
        self,
        valuations: np.ndarray,
        demand: np.ndarray,
        supply: np.ndarray,
        penalty: float = 0.001,
    ) -> None:
        self.demand = np.asarray(demand, dtype=float).ravel()
        self.supply = np.asarray(supply, dtype=float).ravel()
        self.num_bids = len(self.demand)
        self.num_goods = len(self.supply)
        self.valuations = _as_matrix(valuations, self.num_bids, self.num_goods)
        self.penalty = float(penalty)

        self.p = self.supply.copy()
        self.pi = self.demand.copy()
        self.objective_value = 0.0
        self._oversupply = np.zeros(self.num_goods)
        self._build_constraints()

    def _build_constraints(self) -> None:
        n, m = self.num_goods, self.num_bids
        if n == 0 or m == 0:
            self._a_ub = None
            self._b_ub = None
            return
        rows = np.arange(m * n)
        bids, goods = np.divmod(rows, n)
        self._a_ub = sparse.coo_matrix(
            (
                -np.ones(2 * m * n),
                (np.concatenate([rows, rows]), np.concatenate([goods, n + bids])),
            ),
            shape=(m * n, n + m),
        ).tocsr()
        self._b_ub = -self.valuations.ravel()

    def set_oversupply(self, oversupply: Sequence[float] | np.ndarray) -> None:
        """Add ``oversupply`` to the supply that prices are charged against."""
        values = np.asarray(oversupply, dtype=float).ravel()
        if len(values) != self.num_goods:
            raise ValueError("oversupply must have one entry per good")
        self._oversupply = values

    def optimize(self) -> float:
        """Solve the program, store ``p``, ``pi`` and ``objective_value`` and return the latter."""
        costs = np.concatenate([self.supply + self.penalty + self._oversupply, self.demand])
        result = _solve(costs, self._a_ub, self._b_ub, (0, None))
        self.p = result.x[: self.num_goods].copy()
        self.pi = result.x[self.num_goods :].copy()
        self.objective_value = float(result.fun)
        return self.objective_value


class SubgradientLP:
    """Maximises welfare of the bids minus the price of the extra supply they need.

    Variables are the extra supply ``s_j`` (at most 200000) and the allocation
    ``x_ij``. Each bid takes at most its demand, and each good hands out at most
    its supply plus ``s_j``. Prices only enter the objective once
    :meth:`recalculate_objective` is called.
    """

    def __init__(self, valuations: np.ndarray, demand: np.ndarray, supply: np.ndarray) -> None:
        self.demand = np.asarray(demand, dtype=float).ravel()
        self.supply = np.asarray(supply, dtype=float).ravel()
        self.num_bids = len(self.demand)
        self.num_goods = len(self.supply)
        self.valuations = _as_matrix(valuations, self.num_bids, self.num_goods)

        self.prices = np.ones(self.num_goods)
        self.penalty_signature = np.ones(self.num_goods)
        self.s = self.supply.copy()
        self._price_coefficients = np.zeros(self.num_goods)
        self._objective = np.zeros(self.num_goods + self.num_bids * self.num_goods)
        self._build_constraints()

    def _build_constraints(self) -> None:
        n, m = self.num_goods, self.num_bids
        if n == 0 or m == 0:
            self._a_ub = None
            self._b_ub = None
            return
        # Allocation x_ij sits in column n + i + j*m.
        bids, goods = np.meshgrid(np.arange(m), np.arange(n), indexing="ij")
        bids, goods = bids.ravel(), goods.ravel()
        x_columns = n + bids + goods * m

        demand_rows = bids
        supply_rows = m + goods
        rows = np.concatenate([demand_rows, supply_rows, m + np.arange(n)])
        columns = np.concatenate([x_columns, x_columns, np.arange(n)])
        data = np.concatenate([np.ones(2 * m * n), -np.ones(n)])
        self._a_ub = sparse.coo_matrix((data, (rows, columns)), shape=(m + n, n + m * n)).tocsr()
        self._b_ub = np.concatenate([self.demand + DEMAND_SLACK, self.supply])

    def set_prices(self, prices: Sequence[float] | np.ndarray) -> None:
        """Set the prices charged for extra supply; takes effect on the next objective rebuild."""
        values = np.asarray(prices, dtype=float).ravel()
        if len(values) != self.num_goods:
            raise ValueError("prices must have one entry per good")
        self.prices = values
        self._price_coefficients = values.copy()

    def recalculate_objective(self, penalty_signature: Sequence[float] | np.ndarray | None = None) -> None:
        """Rebuild the objective from the current prices.

        The penalty signature defaults to all ones; it is recorded but carries
        zero weight in the objective.
        """
        if penalty_signature is None:
            signature = np.ones(self.num_goods)
        else:
            signature = np.asarray(penalty_signature, dtype=float).ravel()
            if len(signature) != self.num_goods:
                raise ValueError("penalty signature must have one entry per good")
        self.penalty_signature = signature
        # linprog minimises, so the welfare objective is negated.
        self._objective = np.concatenate(
            [self._price_coefficients, -self.valuations.ravel(order="F")]
        )

    def optimize(self) -> np.ndarray:
        """Solve the program and return the extra supply, rounded to integers."""
        bounds = [(0.0, SUPPLY_LIMIT)] * self.num_goods + [(0.0, None)] * (
            self.num_bids * self.num_goods
        )
        result = _solve(self._objective, self._a_ub, self._b_ub, bounds)
        self.s = np.floor(result.x[: self.num_goods] + 0.5)
        return self.s