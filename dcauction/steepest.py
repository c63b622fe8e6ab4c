"""Local search over oversupply vectors along elementary exchange directions."""

from __future__ import annotations

from itertools import permutations

import numpy as np

from dcauction.auction import Auction
from dcauction.lp import DualLP

_PENALTY = 0.0001


def _format_vector(vector: np.ndarray) -> str:
    return " ".join(f"{value:g}" for value in vector)


class SteepestDescent:
    """Improves the oversupply by unit moves ``e_i - e_j`` until none lowers the objective.

    The objective is the positive bids' dual value minus the negative bids'
    dual value; oversupply never goes below zero.
    """

    def __init__(self, auction: Auction, verbose: bool = True) -> None:
        self.auction = auction
        self.verbose = verbose
        num_goods = auction.num_goods
        self.pos_lp = DualLP(auction.pos_valuation, auction.pos_demand, auction.supply, _PENALTY)
        self.neg_lp = DualLP(
            auction.neg_valuation, auction.neg_demand, np.zeros(num_goods), _PENALTY
        )
        self.oversupply = np.zeros(num_goods)
        self.value = float("nan")

    def _evaluate(self, oversupply: np.ndarray) -> float:
        self.pos_lp.set_oversupply(oversupply)
        self.neg_lp.set_oversupply(oversupply)
        return self.pos_lp.optimize() - self.neg_lp.optimize()

    def _log(self, text: str) -> None:
        if self.verbose:
            print(text)

    def run(self) -> np.ndarray:
        """Run the search and return the prices at the best oversupply found."""
        num_goods = self.auction.num_goods
        steps = [np.zeros(num_goods), *np.eye(num_goods)]
        oversupply = np.zeros(num_goods)
        current = self._evaluate(oversupply)
        prices = self.pos_lp.p.copy()

        while True:
            direction = np.zeros(num_goods)
            changed = False
            for i, j in permutations(range(num_goods + 1), 2):
                delta = steps[i] - steps[j]
                self._log(f"Checking {_format_vector(delta)}...")
                value = self._evaluate(np.maximum(oversupply + delta, 0.0))
                if value < current:
                    prices = self.pos_lp.p.copy()
                    current = value
                    direction = delta
                    changed = True
            self._log(f"Current value: {current:g}")
            if not changed:
                break
            oversupply = np.maximum(oversupply + direction, 0.0)

        self._log(f"Oversupply: {_format_vector(oversupply)}")
        self.oversupply = oversupply
        self.value = current
        return prices