"""Inspection of bids, objective evaluation and a greedy supply solver."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from dcauction.auction import Auction


def num_marginal_bids(valuations: np.ndarray, prices: np.ndarray) -> int:
    """Count bids with non-negative utility that are indifferent between two or more goods.

    Two goods are considered tied when their utilities differ by less than 0.1.
    """
    valuations = np.asarray(valuations, dtype=float)
    if valuations.size == 0:
        return 0
    diff = valuations - np.asarray(prices, dtype=float)
    utility = diff.max(axis=1)
    margins = (np.abs(utility[:, None] - diff) < 0.1).sum(axis=1)
    return int(np.count_nonzero((utility >= 0) & (margins >= 2)))


def _weighted_utility(valuations: np.ndarray, demand: np.ndarray, prices: np.ndarray) -> float:
    valuations = np.asarray(valuations, dtype=float)
    if valuations.shape[0] == 0:
        return 0.0
    best = np.maximum((valuations - prices).max(axis=1), 0.0)
    return float(np.dot(np.asarray(demand, dtype=float), best))


def objective_value(auction: Auction, prices: np.ndarray) -> float:
    """Evaluate the difference-of-convex objective of ``auction`` at ``prices``."""
    prices = np.asarray(prices, dtype=float)
    return (
        _weighted_utility(auction.pos_valuation, auction.pos_demand, prices)
        - _weighted_utility(auction.neg_valuation, auction.neg_demand, prices)
        + float(np.dot(prices, auction.supply))
    )


class SupplyFastSolver:
    """Assigns each bid's demand to its most profitable good at given prices."""

    def __init__(
        self,
        valuations: np.ndarray,
        demand: np.ndarray,
        permutation: Sequence[int] | None = None,
    ) -> None:
        self.valuations = np.asarray(valuations, dtype=float)
        self.demand = np.asarray(demand, dtype=float)
        num_goods = self.valuations.shape[1] if self.valuations.ndim == 2 else 0
        self.permutation = list(permutation) if permutation is not None else list(range(num_goods))

    def solve(self, prices: np.ndarray) -> np.ndarray:
        """Return the supply vector induced by ``prices``.

        Goods are scanned in permutation order and a good only replaces the
        current choice when its utility strictly exceeds the best integer
        utility seen so far; bids whose best integer utility is zero are idle.
        """
        prices = np.asarray(prices, dtype=float)
        supply = np.zeros(self.valuations.shape[1] if self.valuations.ndim == 2 else 0)
        for row, quantity in zip(self.valuations, self.demand):
            chosen = 0
            best = 0
            for good in self.permutation:
                utility = row[good] - prices[good]
                if utility > best:
                    best = int(utility)
                    chosen = good
            if best > 0:
                supply[chosen] += quantity
        return supply