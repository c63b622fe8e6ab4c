"""Plain-text and CSV output of results, auctions, vectors and value grids."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from os import PathLike
from typing import Any, TextIO, Union

import numpy as np

from dcauction.auction import Auction, Result
from dcauction.events import OperationCounter

PathType = Union[str, "PathLike[str]"]


def _number(value: float) -> str:
    return f"{float(value):g}"


def _row(vector: np.ndarray, separator: str) -> str:
    return separator.join(_number(value) for value in np.asarray(vector, dtype=float).ravel())


def write_results(
    filename: PathType,
    results: Sequence[Result],
    op_counters: Sequence[OperationCounter] | None = None,
) -> None:
    """Write one CSV line per result, with operation counts when counters are given."""
    with open(filename, "w", encoding="utf-8") as out:
        if op_counters is None:
            out.write("Prices, Objective value, Running time(ms) \n")
            for result in results:
                out.write(
                    f"{_row(result.prices, ' ')},{_number(result.objective_value)},"
                    f"{result.running_time}\n"
                )
            return
        if len(op_counters) != len(results):
            raise ValueError("one operation counter is needed per result")
        out.write(
            "Prices, Objective value, Running time (ms), Iterations, "
            "Lyaponov descent steps, LPs solved \n"
        )
        for result, counter in zip(results, op_counters):
            out.write(
                f"{_row(result.prices, ' ')},{_number(result.objective_value)},"
                f"{result.running_time},{counter.num_iterations},"
                f"{counter.num_descent_searches},{counter.num_lps}\n"
            )


def write_auction_data(filename: PathType, auctions: Iterable[Auction]) -> None:
    """Write the size of each auction as a CSV line."""
    with open(filename, "w", encoding="utf-8") as out:
        out.write("Goods, Positive Bids, Negative Bids\n")
        for auction in auctions:
            out.write(f"{auction.num_goods},{auction.num_pos_bids},{auction.num_neg_bids},\n")


def write_list(items: Iterable[Any], target: TextIO | PathType) -> None:
    """Write each item on its own line to a stream or to a named file."""
    if hasattr(target, "write"):
        for item in items:
            target.write(f"{item}\n")
        return
    with open(target, "w", encoding="utf-8") as out:
        write_list(items, out)


def write_vectors(vectors: Iterable[np.ndarray], filename: PathType) -> None:
    """Write each vector as one comma separated line."""
    with open(filename, "w", encoding="utf-8") as out:
        for vector in vectors:
            out.write(_row(vector, ",") + "\n")


def write_map(graph: Mapping[tuple[int, int], int], filename: PathType) -> None:
    """Write ``x y value`` lines for a grid of values, ordered by coordinates."""
    with open(filename, "w", encoding="utf-8") as out:
        for (first, second), value in sorted(graph.items()):
            out.write(f"{first} {second} {value}\n")