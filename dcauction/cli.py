"""Command line entry: compare flow and LP price solvers on a stored auction."""

from __future__ import annotations

import argparse
import sqlite3
import sys
import time
from contextlib import closing
from pathlib import Path
from typing import TextIO

import numpy as np

from dcauction.auction import Auction
from dcauction.flow import FlowPrimalLP
from dcauction.lp import DualLP, OptimizationError
from dcauction.sqlite_io import SQLiteReader

DEFAULT_COMMENT = "0.01_negbids_30_goods"


def _format_vector(vector: np.ndarray) -> str:
    return " ".join(f"{value:g}" for value in np.asarray(vector, dtype=float).ravel())


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def compare_solvers(
    auction: Auction,
    num_perturbations: int = 10,
    spread: float = 10.0,
    rng: np.random.Generator | int | None = None,
    out: TextIO | None = None,
) -> list[tuple[np.ndarray, np.ndarray, np.ndarray]]:
    """Solve random integer oversupply perturbations with both price solvers.

    Each perturbation is ``floor(spread * u)`` with ``u`` uniform in ``[-1, 1)``
    per good. Prices and timings are written to ``out``; the returned list holds
    ``(perturbation, flow_prices, lp_prices)`` for each perturbation.
    """
    stream = out if out is not None else sys.stdout
    generator = np.random.default_rng(rng)
    perturbations = np.floor(
        spread * generator.uniform(-1.0, 1.0, size=(num_perturbations, auction.num_goods))
    )
    print("Perturbations: ", file=stream)
    for perturbation in perturbations:
        print(_format_vector(perturbation), file=stream)
    print(file=stream)

    network_solver = FlowPrimalLP(auction.pos_valuation, auction.pos_demand, auction.supply)
    lp_solver = DualLP(auction.pos_valuation, auction.pos_demand, auction.supply)
    comparisons = []
    for perturbation in perturbations:
        start = time.perf_counter()
        network_solver.set_oversupply(perturbation)
        network_prices = network_solver.optimize().copy()
        network_time = _elapsed_ms(start)

        start = time.perf_counter()
        lp_solver.set_oversupply(perturbation)
        lp_solver.optimize()
        lp_prices = lp_solver.p.copy()
        lp_time = _elapsed_ms(start)

        print(f"Network prices: {_format_vector(network_prices)}", file=stream)
        print(f"LP prices: {_format_vector(lp_prices)}", file=stream)
        print(file=stream)
        print(f"Network time: {network_time}", file=stream)
        print(f"LP time: {lp_time}", file=stream)
        comparisons.append((perturbation.copy(), network_prices, lp_prices))
    return comparisons


def _connect_readonly(database: str) -> sqlite3.Connection:
    uri = Path(database).resolve().as_uri() + "?mode=ro"
    return sqlite3.connect(uri, uri=True)


def _quote(text: str) -> str:
    return "'" + text.replace("'", "''") + "'"


def main(argv: list[str] | None = None) -> int:
    """Load the first auction with the given comment and compare the price solvers."""
    parser = argparse.ArgumentParser(
        prog="dcauction",
        description="Compare flow and LP price computations on a stored auction.",
    )
    parser.add_argument("database", help="SQLite database holding the auctions")
    parser.add_argument("--comment", default=DEFAULT_COMMENT, help="comment of the auction set")
    parser.add_argument("--perturbations", type=int, default=10, help="number of perturbations")
    parser.add_argument("--spread", type=float, default=10.0, help="size of the perturbations")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    args = parser.parse_args(argv)

    try:
        with closing(_connect_readonly(args.database)) as connection:
            reader = SQLiteReader(connection)
            metas = reader.auction_meta(f"WHERE comment={_quote(args.comment)}")
            if not metas:
                print(f"No auction with comment {args.comment!r}", file=sys.stderr)
                return 1
            auction = reader.load_auction(metas[0].id)
    except (sqlite3.Error, LookupError) as exc:
        print(f"Could not read {args.database}: {exc}", file=sys.stderr)
        return 1

    print(f"Supply: {_format_vector(auction.supply)}")
    try:
        compare_solvers(auction, args.perturbations, args.spread, args.seed)
    except OptimizationError as exc:
        print(f"Optimisation failed: {exc}", file=sys.stderr)
        return 1
    return 0