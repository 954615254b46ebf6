"""Micro-benchmark utilities for the engine.

Run this module as a script to time :class:`~sptree.engine.ShortestPaths`
against the ``heapq`` reference across several random graphs.

Example:
```bash
python -m sptree.bench --trials 5 --sizes 1000,5000 2000,10000 --out-csv out.csv
```
"""

from __future__ import annotations

import argparse
import csv
import statistics
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple

from .engine import EngineConfig, EngineMetrics, ShortestPaths
from .generate import GRAPH_TYPES, random_graph
from .reference import dijkstra_reference


@dataclass
class BenchResult:
    """Result of a single benchmarking run."""

    metrics: EngineMetrics
    reference_ms: float
    mismatches: int


def run_once(
    n: int,
    m: int,
    arity: int = 2,
    graph_type: str = "erdos_renyi",
    seed: int = 0,
) -> BenchResult:
    """Run the engine once and compare it against the reference.

    Args:
        n: Number of vertices.
        m: Number of edges.
        arity: Heap arity.
        graph_type: Random graph family.
        seed: Seed for the random graph generator.

    Returns:
        Engine metrics, reference time and the number of vertices whose
        distances disagree (``0`` unless something is broken).
    """
    graph, weights = random_graph(n, m, graph_type=graph_type, seed=seed)  # type: ignore[arg-type]
    start = graph.vertex("0")

    sp = ShortestPaths(graph, weights, start, EngineConfig(arity=arity, validate_weights=False))
    t0 = time.perf_counter()
    sp.run()
    t1 = time.perf_counter()
    ref = dijkstra_reference(graph, weights, start)
    t2 = time.perf_counter()

    got = sp.distances()
    mismatches = sum(1 for v, d in ref.distances.items() if got[v] != d)
    return BenchResult(
        metrics=sp.metrics(wall_ms=(t1 - t0) * 1000.0),
        reference_ms=(t2 - t1) * 1000.0,
        mismatches=mismatches,
    )


def _p95(values: List[float]) -> float:
    if len(values) < 2:
        return values[0]
    return statistics.quantiles(values, n=100, method="inclusive")[94]


def main(argv: List[str] | None = None) -> int:
    """Run benchmarking trials and optionally record results.

    Args:
        argv: Optional argument list for testing.

    Returns:
        ``0`` if all runs agreed with the reference, ``1`` otherwise.
    """
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--trials", type=int, default=1, help="Number of trials per configuration")
    parser.add_argument(
        "--sizes",
        nargs="+",
        default=["10,20", "20,40"],
        help="Size pairs as n,m (e.g. 1000,5000). Defaults to a small demo.",
    )
    parser.add_argument(
        "--arity", type=int, nargs="+", default=[2, 4], help="Heap arities to compare"
    )
    parser.add_argument("--graph-type", choices=GRAPH_TYPES, default="erdos_renyi")
    parser.add_argument("--seed-base", type=int, default=0, help="Base seed for random graphs")
    parser.add_argument("--out-csv", type=Path, help="Optional path to write per-trial CSV data")
    args = parser.parse_args(argv)

    sizes: List[Tuple[int, int]] = []
    for spec in args.sizes:
        try:
            n_str, m_str = spec.split(",")
            sizes.append((int(n_str), int(m_str)))
        except ValueError:
            parser.error(f"invalid size specification '{spec}'")

    rows: List[List[object]] = []
    aggregates: Dict[Tuple[int, int, int], Tuple[List[float], List[float], List[int]]] = {}
    failures = 0

    for n, m in sizes:
        for arity in args.arity:
            e_times: List[float] = []
            r_times: List[float] = []
            ticks: List[int] = []
            for trial in range(args.trials):
                res = run_once(n, m, arity, args.graph_type, seed=args.seed_base + trial)
                mtx = res.metrics
                failures += res.mismatches
                rows.append(
                    [
                        mtx.n,
                        mtx.m,
                        arity,
                        trial,
                        f"{mtx.wall_ms:.6f}",
                        f"{res.reference_ms:.6f}",
                        mtx.counters["decreases"],
                        mtx.counters["heap_ticks"],
                        res.mismatches,
                    ]
                )
                e_times.append(mtx.wall_ms)
                r_times.append(res.reference_ms)
                ticks.append(mtx.counters["heap_ticks"])
            aggregates[(n, m, arity)] = (e_times, r_times, ticks)

    if args.out_csv:
        with args.out_csv.open("w", newline="") as fh:
            writer = csv.writer(fh)
            writer.writerow(
                [
                    "n",
                    "m",
                    "arity",
                    "trial",
                    "engine_ms",
                    "reference_ms",
                    "decreases",
                    "heap_ticks",
                    "mismatches",
                ]
            )
            writer.writerows(rows)

    print(
        f"{'n':>6} {'m':>7} {'d':>2} {'ticks':>10}"
        f" {'eng_med':>10} {'eng_p95':>10} {'ref_med':>10} {'ref_p95':>10}"
    )
    for (n, m, arity), (e_times, r_times, ticks) in aggregates.items():
        print(
            f"{n:6d} {m:7d} {arity:2d} {int(statistics.median(ticks)):10d}"
            f" {statistics.median(e_times):10.2f} {_p95(e_times):10.2f}"
            f" {statistics.median(r_times):10.2f} {_p95(r_times):10.2f}"
        )
    return 0 if failures == 0 else 1


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
