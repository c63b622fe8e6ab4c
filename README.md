# dcauction

Building blocks for computing prices in product-mix auctions that contain
both positive and negative bids. An auction has a set of goods with a fixed
supply, positive bids (each with a demand and one valuation per good) and
negative bids of the same shape. The package provides the linear programs,
a min-cost flow formulation and a greedy solver for the pieces of the
problem, a simple local search over oversupply, and input/output for CSV,
SQLite and SVG.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `dcauction.auction` – the dataclasses `Auction` (with the properties
  `num_goods`, `num_pos_bids`, `num_neg_bids`), `AuctionMeta` and `Result`;
  `read_numeric(filename, header_count=0)` reads a comma separated numeric
  file into a 2-D array, padding short rows with zeros;
  `load_auction_csv(filename_bids, filename_supply)` builds an auction from a
  bids file (identifier, quantity, one valuation per good; positive bids
  first) and a supply file (supply in every second column), each with one
  header line.
- `dcauction.events` – `AlgorithmEventHandler`, a base observer whose
  notification methods record the latest event in `last_event`, and the
  handlers `OperationCounter` (counts LPs, iterations, descent searches and
  submodular minimizations; `num_lps` is the total of supply and price LPs),
  `ConsoleLogger(out=None)` (writes a trace to a stream, standard output by
  default) and `TrajectoryLogger` (keeps `price_trajectory` and
  `supply_trajectory`).
- `dcauction.iterators` – generators `demand_vectors(num_goods)`,
  `signatures(num_goods)` and `subsets(items)`;
  `random_signature(num_goods, rng=None)`; and `RandomEngine(seed=None)`
  with `random_int(lb, ub)`, `reseed(seed)` and a shared
  `RandomEngine.instance()`.
- `dcauction.analysis` – `num_marginal_bids(valuations, prices)`,
  `objective_value(auction, prices)` for the difference-of-convex objective,
  and `SupplyFastSolver(valuations, demand, permutation=None)` whose
  `solve(prices)` assigns each bid's demand to its most profitable good.
- `dcauction.lp` – `DualLP(valuations, demand, supply, penalty=0.001)`
  computes prices `p` and utilities `pi` for an oversupply set with
  `set_oversupply`; `SubgradientLP(valuations, demand, supply)` computes the
  extra supply `s` for prices set with `set_prices` and
  `recalculate_objective`. Both are solved with SciPy's HiGHS; a solve
  without an optimum raises `OptimizationError`.
- `dcauction.flow` – `FlowPrimalLP(valuations, demand, supply)`, a min-cost
  flow whose node potentials give the prices; `optimize()` returns them.
- `dcauction.steepest` – `SteepestDescent(auction, verbose=True)`; `run()`
  moves the oversupply along unit steps `e_i - e_j` while the objective
  decreases and returns the prices at the best point found.
- `dcauction.plotter` – `plot_valuation(valuations, demand, max_demand)` and
  `plot_valuations(auction)` tabulate the dual value over a grid of
  oversupplies for two-good auctions.
- `dcauction.writers` – `write_results`, `write_auction_data`, `write_list`,
  `write_vectors` and `write_map`.
- `dcauction.sqlite_io` – `SQLiteReader` (`open`, `read_bids`,
  `read_supply`, `auction_meta`, `load_auction`) for the `auctions`, `bids`
  and `supply` tables, and `SQLiteWriter.write_result` for the `dc_results`
  table.
- `dcauction.svg` – SVG element helpers and `price_trajectory_svg` /
  `write_price_trajectory_svg` for drawing the bids and a price trajectory of
  a two-good auction.
- `dcauction.cli` – `compare_solvers` and the command line entry `main`.

## Example

```python
import numpy as np
from dcauction.auction import load_auction_csv
from dcauction.analysis import SupplyFastSolver, objective_value
from dcauction.lp import DualLP

auction = load_auction_csv("bids.csv", "supply.csv")

prices_lp = DualLP(auction.pos_valuation, auction.pos_demand, auction.supply, 0.001)
prices_lp.set_oversupply(np.zeros(auction.num_goods))
prices_lp.optimize()

supply = SupplyFastSolver(auction.neg_valuation, auction.neg_demand, None)
print(supply.solve(prices_lp.p))
print(objective_value(auction, prices_lp.p))
```

## Command line

```
dcauction --help
dcauction DATABASE [--comment TEXT] [--perturbations N] [--spread X] [--seed S]
```

The command opens the SQLite database read-only, loads the first auction
whose `comment` matches (default `0.01_negbids_30_goods`), and solves a
number of random integer oversupply perturbations with both `FlowPrimalLP`
and `DualLP`, printing the prices each returns and the time each takes. It
exits with status 1 if the database cannot be read, no auction matches, or a
solve fails.

## What is not included

The package does not contain the full price-based iteration that alternates
between the price LP and the supply solver and escapes stationary points by
submodular minimization of a Lyapunov function; there is no function that
runs an auction to its final prices. `SteepestDescent` is the only complete
search provided. In `SubgradientLP` the penalty signature is recorded but
carries no weight in the objective.