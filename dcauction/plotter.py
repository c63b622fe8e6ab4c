"""Tabulation of dual values over a grid of oversupply for two-good auctions."""

from __future__ import annotations

import numpy as np

from dcauction.auction import Auction
from dcauction.lp import DualLP

Graph = dict[tuple[int, int], int]


def plot_valuation(valuations: np.ndarray, demand: np.ndarray, max_demand: int) -> Graph:
    """Map each oversupply ``(s1, s2)`` below ``max_demand`` to the truncated dual value.

    Only auctions with exactly two goods are supported.
    """
    lp = DualLP(valuations, demand, np.zeros(2), 0.0)
    graph: Graph = {}
    for s1 in range(max_demand):
        for s2 in range(max_demand):
            lp.set_oversupply([s1, s2])
            graph[(s1, s2)] = int(round(lp.optimize(), 6))
    return graph


def plot_valuations(auction: Auction) -> tuple[Graph, Graph]:
    """Tabulate positive and negative bids over a grid sized by total positive demand."""
    max_demand = int(np.sum(auction.pos_demand))
    return (
        plot_valuation(auction.pos_valuation, auction.pos_demand, max_demand),
        plot_valuation(auction.neg_valuation, auction.neg_demand, max_demand),
    )