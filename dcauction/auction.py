"""Auction instances, their metadata and algorithm results, plus CSV loading."""

from __future__ import annotations

from dataclasses import dataclass, field
from os import PathLike
from typing import Union

import numpy as np

PathType = Union[str, "PathLike[str]"]


def _empty_matrix() -> np.ndarray:
    return np.zeros((0, 0))


def _empty_vector() -> np.ndarray:
    return np.zeros(0)


@dataclass
class Auction:
    """A product-mix auction with positive and negative bids."""

    pos_valuation: np.ndarray = field(default_factory=_empty_matrix)
    neg_valuation: np.ndarray = field(default_factory=_empty_matrix)
    pos_demand: np.ndarray = field(default_factory=_empty_vector)
    neg_demand: np.ndarray = field(default_factory=_empty_vector)
    supply: np.ndarray = field(default_factory=_empty_vector)

    @property
    def num_goods(self) -> int:
        return int(len(self.supply))

    @property
    def num_pos_bids(self) -> int:
        return int(len(self.pos_demand))

    @property
    def num_neg_bids(self) -> int:
        return int(len(self.neg_demand))


@dataclass
class AuctionMeta:
    """Descriptive parameters of a stored auction instance."""

    id: int = 0
    num_bids: int = 0
    num_goods: int = 0
    b_lb: int = 0
    b_ub: int = 0
    a_lb: int = 0
    a_ub: int = 0
    displacement_lb: int = 0
    displacement_ub: int = 0
    weight_lb: int = 0
    weight_ub: int = 0
    num_pos_bids: int = 0
    num_neg_bids: int = 0


@dataclass
class Result:
    """Outcome of an algorithm run."""

    oversupply: np.ndarray = field(default_factory=_empty_vector)
    prices: np.ndarray = field(default_factory=_empty_vector)
    objective_value: float = 0.0
    running_time: int = 0


def read_numeric(filename: PathType, header_count: int = 0) -> np.ndarray:
    """Read a comma separated numeric file into a 2-D array.

    The first ``header_count`` lines are skipped, empty fields are dropped and
    short rows are padded with zeros to the length of the longest row.
    """
    rows: list[list[float]] = []
    with open(filename, encoding="utf-8") as handle:
        for _ in range(header_count):
            if not handle.readline():
                break
        for line in handle:
            tokens = (token.strip() for token in line.rstrip("\n").split(","))
            rows.append([float(token) for token in tokens if token])

    width = max((len(row) for row in rows), default=0)
    result = np.zeros((len(rows), width))
    for target, row in zip(result, rows):
        target[: len(row)] = row
    return result


def load_auction_csv(filename_bids: PathType, filename_supply: PathType) -> Auction:
    """Build an auction from a bids file and a supply file, each with one header line.

    Bid rows hold an identifier, a quantity and one valuation per good; the
    positive-quantity bids come first, followed by the negative ones. The supply
    file holds the supply of each good in every second column.
    """
    bids = read_numeric(filename_bids, 1)
    supply_input = read_numeric(filename_supply, 1)

    num_goods = supply_input.size // 2
    supply = supply_input.reshape(-1)[: 2 * num_goods : 2].copy() if num_goods else _empty_vector()

    num_bids = bids.shape[0]
    quantities = bids[:, 1] if num_bids else _empty_vector()
    negative = np.flatnonzero(quantities < 0)
    neg_start = int(negative[0]) if negative.size else num_bids

    valuations = bids[:, 2 : 2 + num_goods] if num_bids else np.zeros((0, num_goods))
    return Auction(
        pos_valuation=valuations[:neg_start].copy(),
        neg_valuation=valuations[neg_start:].copy(),
        pos_demand=quantities[:neg_start].copy(),
        neg_demand=-quantities[neg_start:],
        supply=supply,
    )