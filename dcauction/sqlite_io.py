"""Reading auctions from, and writing results to, an SQLite database."""

from __future__ import annotations

import sqlite3
from typing import Any

import numpy as np

from dcauction.auction import Auction, AuctionMeta, Result
from dcauction.events import OperationCounter

_META_COLUMNS = (
    "rowid, num_bids, num_goods, b_lb, b_ub, a_lb, a_ub, displacement_lb, "
    "displacement_ub, weight_lb, weight_ub, num_pos_bids, num_neg_bids"
)


def _int(value: Any) -> int:
    """Convert a column value to an integer the way SQLite's integer accessor does."""
    if value is None:
        return 0
    return int(float(value)) if isinstance(value, (str, bytes)) else int(value)


class SQLiteReader:
    """Loads auction instances stored in the ``auctions``, ``bids`` and ``supply`` tables."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self.connection = connection
        self.auction_id: int | None = None
        self.num_goods = 0
        self.num_bids = 0
        self.num_pos_bids = 0
        self.num_neg_bids = 0

    def open(self, auction_id: int) -> None:
        """Select the auction that later reads refer to."""
        row = self.connection.execute(
            "SELECT num_goods, num_bids, num_pos_bids, num_neg_bids FROM auctions WHERE rowid = ?;",
            (auction_id,),
        ).fetchone()
        if row is None:
            raise LookupError(f"no auction with id {auction_id}")
        self.auction_id = auction_id
        self.num_goods, self.num_bids, self.num_pos_bids, self.num_neg_bids = (
            _int(value) for value in row
        )

    def _require_open(self) -> int:
        if self.auction_id is None:
            raise RuntimeError("no auction has been opened")
        return self.auction_id

    def read_bids(self) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """Return positive valuations, negative valuations, positive and negative demand.

        Bids with a positive quantity are positive bids; all others are negative
        bids whose demand is the negated quantity.
        """
        auction_id = self._require_open()
        columns = ", ".join(["quantity", *(f"v{j}" for j in range(self.num_goods))])
        cursor = self.connection.execute(
            f"SELECT {columns} FROM bids WHERE auction_id = ?;", (auction_id,)
        )
        pos_rows: list[list[int]] = []
        neg_rows: list[list[int]] = []
        pos_demand: list[int] = []
        neg_demand: list[int] = []
        for quantity, *values in cursor:
            quantity = _int(quantity)
            valuation = [_int(value) for value in values]
            if quantity > 0:
                pos_demand.append(quantity)
                pos_rows.append(valuation)
            else:
                neg_demand.append(-quantity)
                neg_rows.append(valuation)
        n = self.num_goods
        return (
            np.array(pos_rows, dtype=float).reshape(len(pos_rows), n),
            np.array(neg_rows, dtype=float).reshape(len(neg_rows), n),
            np.array(pos_demand, dtype=float),
            np.array(neg_demand, dtype=float),
        )

    def read_supply(self) -> np.ndarray:
        """Return the supply of each good of the open auction."""
        auction_id = self._require_open()
        if self.num_goods == 0:
            return np.zeros(0)
        columns = ", ".join(f"s{j}" for j in range(self.num_goods))
        row = self.connection.execute(
            f"SELECT {columns} FROM supply WHERE auction_id = ?;", (auction_id,)
        ).fetchone()
        if row is None:
            raise LookupError(f"no supply stored for auction {auction_id}")
        return np.array([_int(value) for value in row], dtype=float)

    def auction_meta(self, filter: str = "") -> list[AuctionMeta]:
        """Return the metadata of all auctions matching the SQL clause ``filter``."""
        cursor = self.connection.execute(f"SELECT {_META_COLUMNS} FROM auctions {filter};")
        return [AuctionMeta(*(_int(value) for value in row)) for row in cursor]

    def load_auction(self, auction_id: int) -> Auction:
        """Open ``auction_id`` and return it as a complete auction."""
        self.open(auction_id)
        pos_valuation, neg_valuation, pos_demand, neg_demand = self.read_bids()
        return Auction(
            pos_valuation=pos_valuation,
            neg_valuation=neg_valuation,
            pos_demand=pos_demand,
            neg_demand=neg_demand,
            supply=self.read_supply(),
        )


class SQLiteWriter:
    """Stores algorithm results in the ``dc_results`` table."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self.connection = connection

    def write_result(self, auction_id: int, result: Result, counter: OperationCounter) -> None:
        """Insert one result row; numeric values are truncated to integers."""
        prices = np.asarray(result.prices, dtype=float).ravel()
        columns = [
            "auction_id",
            "optimal_value",
            "running_time",
            "num_iterations",
            "num_lyapunov_steps",
            "num_lps_solved",
            *(f"p{i}" for i in range(len(prices))),
        ]
        values = [
            int(auction_id),
            int(result.objective_value),
            int(result.running_time),
            counter.num_iterations,
            counter.num_descent_searches,
            counter.num_lps,
            *(int(price) for price in prices),
        ]
        placeholders = ",".join("?" for _ in columns)
        with self.connection:
            self.connection.execute(
                f"INSERT INTO dc_results ({', '.join(columns)}) VALUES ({placeholders});",
                values,
            )