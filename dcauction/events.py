"""Observers notified of the progress of the auction algorithms."""

from __future__ import annotations

import sys
from typing import Any, TextIO

import numpy as np

from dcauction.auction import Result


def _format_vector(vector: np.ndarray) -> str:
    return " ".join(f"{value:g}" for value in np.asarray(vector, dtype=float).ravel())


class AlgorithmEventHandler:
    """Base observer; by default it only remembers the latest notification."""

    last_event: tuple[str, Any] | None = None

    def _record(self, name: str, payload: Any = None) -> None:
        self.last_event = (name, payload)

    def algorithm_started(self) -> None:
        self._record("algorithm_started")

    def oversupply_updated(self, oversupply: np.ndarray) -> None:
        self._record("oversupply_updated", oversupply)

    def supply_lp_invoked(self) -> None:
        self._record("supply_lp_invoked")

    def price_lp_invoked(self) -> None:
        self._record("price_lp_invoked")

    def price_updated(self, price: np.ndarray) -> None:
        self._record("price_updated", price)

    def iteration_started(self) -> None:
        self._record("iteration_started")

    def iteration_ended(self) -> None:
        self._record("iteration_ended")

    def descent_search_started(self) -> None:
        self._record("descent_search_started")

    def submodular_minimization_started(self) -> None:
        self._record("submodular_minimization_started")

    def descent_direction_found(self, descent_direction: np.ndarray) -> None:
        self._record("descent_direction_found", descent_direction)

    def algorithm_terminated(self, result: Result) -> None:
        self._record("algorithm_terminated", result)


class OperationCounter(AlgorithmEventHandler):
    """Counts the operations performed during a run."""

    def __init__(self) -> None:
        self.num_supply_lps = 0
        self.num_price_lps = 0
        self.num_sm_minimizations = 0
        self.num_iterations = 0
        self.num_descent_searches = 0

    def supply_lp_invoked(self) -> None:
        self.num_supply_lps += 1

    def price_lp_invoked(self) -> None:
        self.num_price_lps += 1

    def iteration_started(self) -> None:
        self.num_iterations += 1

    def submodular_minimization_started(self) -> None:
        self.num_sm_minimizations += 1

    def descent_search_started(self) -> None:
        self.num_descent_searches += 1

    @property
    def num_lps(self) -> int:
        """Total number of linear programs solved."""
        return self.num_supply_lps + self.num_price_lps


class ConsoleLogger(AlgorithmEventHandler):
    """Writes a human readable trace of a run to a text stream."""

    def __init__(self, out: TextIO | None = None) -> None:
        self.out = out
        self.iteration_counter = 0
        self.descent_search_counter = 0

    def _write(self, text: str) -> None:
        print(text, file=self.out if self.out is not None else sys.stdout)

    def oversupply_updated(self, oversupply: np.ndarray) -> None:
        self._write(f"Current oversupply: {_format_vector(oversupply)}")

    def price_updated(self, price: np.ndarray) -> None:
        self._write(f"Current price: {_format_vector(price)}")

    def iteration_started(self) -> None:
        self.iteration_counter += 1

    def iteration_ended(self) -> None:
        self._write("")

    def descent_search_started(self) -> None:
        self.descent_search_counter += 1
        self._write("Searching for descent direction")

    def descent_direction_found(self, descent_direction: np.ndarray) -> None:
        self._write(f"Found descent direction {_format_vector(descent_direction)}")

    def algorithm_terminated(self, result: Result) -> None:
        self._write(f"Algorithm terminated after {self.iteration_counter} iterations.")


class TrajectoryLogger(AlgorithmEventHandler):
    """Records every price and oversupply vector seen during a run."""

    def __init__(self) -> None:
        self.price_trajectory: list[np.ndarray] = []
        self.supply_trajectory: list[np.ndarray] = []

    def oversupply_updated(self, oversupply: np.ndarray) -> None:
        self.supply_trajectory.append(np.array(oversupply, dtype=float))

    def price_updated(self, price: np.ndarray) -> None:
        self.price_trajectory.append(np.array(price, dtype=float))