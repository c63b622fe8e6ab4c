"""Prices from the node potentials of a min-cost flow formulation."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from scipy import sparse
from scipy.optimize import linprog

from dcauction.lp import OptimizationError


class FlowPrimalLP:
    """Min-cost flow over goods, bids and a target node whose potentials give prices.

    Arcs run from each bid to each good (cost ``v_ij``, capacity ``d_i``), from
    each bid to the target (cost 0, capacity ``d_i``) and from each good to the
    target (cost 0, capacity ``supply_j``). Bids supply ``num_goods * d_i``,
    goods ``supply_j + oversupply_j - total_demand`` and the target absorbs the
    rest. Quantities are truncated to integers. The price of good ``j`` is the
    potential of its node relative to the target.
    """

    def __init__(self, valuations: np.ndarray, demand: np.ndarray, supply: np.ndarray) -> None:
        self.demand = np.asarray(demand, dtype=float).ravel()
        self.supply = np.asarray(supply, dtype=float).ravel()
        self.num_bids = len(self.demand)
        self.num_goods = len(self.supply)
        matrix = np.asarray(valuations, dtype=float)
        try:
            self.valuations = matrix.reshape(self.num_bids, self.num_goods)
        except ValueError as exc:
            raise ValueError("valuations do not match demand and supply") from exc

        self.total_demand = int(self.demand.sum())
        self.p = np.zeros(self.num_goods)
        self._build_network()
        self.set_oversupply(np.zeros(self.num_goods))

    # Good j is node j, bid i is node num_goods + i, the target comes last.
    def _bid(self, i: int) -> int:
        return self.num_goods + i

    @property
    def _target(self) -> int:
        return self.num_goods + self.num_bids

    def _build_network(self) -> None:
        tails: list[int] = []
        heads: list[int] = []
        costs: list[float] = []
        capacities: list[float] = []

        def add_arc(tail: int, head: int, cost: float, capacity: float) -> None:
            tails.append(tail)
            heads.append(head)
            costs.append(float(np.trunc(cost)))
            capacities.append(float(np.trunc(capacity)))

        for i, (row, quantity) in enumerate(zip(self.valuations, self.demand)):
            for j, value in enumerate(row):
                add_arc(self._bid(i), j, value, quantity)
            add_arc(self._bid(i), self._target, 0.0, quantity)
        for j, amount in enumerate(self.supply):
            add_arc(j, self._target, 0.0, amount)

        # The target's conservation row is implied by the others and is left out,
        # which pins its potential to zero.
        num_rows = self.num_goods + self.num_bids
        rows: list[int] = []
        columns: list[int] = []
        data: list[float] = []
        for arc, (tail, head) in enumerate(zip(tails, heads)):
            rows.append(tail)
            columns.append(arc)
            data.append(1.0)
            if head != self._target:
                rows.append(head)
                columns.append(arc)
                data.append(-1.0)
        self._incidence = sparse.coo_matrix(
            (data, (rows, columns)), shape=(num_rows, len(tails))
        ).tocsr()
        self._costs = np.array(costs)
        self._bounds = np.column_stack([np.zeros(len(capacities)), np.array(capacities)])
        self._bid_supply = np.trunc(self.num_goods * self.demand)

    def set_oversupply(self, oversupply: Sequence[float] | np.ndarray) -> None:
        """Shift the supply of every good node by ``oversupply``."""
        values = np.asarray(oversupply, dtype=float).ravel()
        if len(values) != self.num_goods:
            raise ValueError("oversupply must have one entry per good")
        good_supply = np.trunc(self.supply + values - self.total_demand)
        self._node_supply = np.concatenate([good_supply, self._bid_supply])

    def optimize(self) -> np.ndarray:
        """Solve the flow problem and return the prices of the goods."""
        result = linprog(
            self._costs,
            A_eq=self._incidence,
            b_eq=self._node_supply,
            bounds=self._bounds,
            method="highs",
        )
        if result.status != 0:
            raise OptimizationError(result.message)
        duals = np.asarray(result.eqlin.marginals, dtype=float)
        self.p = 0.0 - duals[: self.num_goods]
        return self.p