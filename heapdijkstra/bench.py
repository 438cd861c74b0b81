"""Micro-benchmark utilities for the shortest-path engine.

Run this module as a script to time :class:`ShortestPathEngine` against the
:mod:`heapq` reference on random graphs.

Example:
```bash
python -m heapdijkstra.bench --trials 5 --sizes 1000,5000 2000,10000 --out-csv out.csv
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

from .engine import EngineConfig, ShortestPathEngine
from .generate import generate_graph
from .reference import dijkstra_reference


@dataclass
class BenchResult:
    """Result of a single benchmarking run."""

    n: int
    m: int
    graph_type: str
    engine_ms: float
    reference_ms: float
    max_abs_err: float
    reached: int
    counters: Dict[str, int]


def run_once(n: int, m: int, seed: int = 0, graph_type: str = "random") -> BenchResult:
    """Run the engine once and compare against the reference.

    Args:
        n: Number of vertices.
        m: Number of edges (ignored for grids).
        seed: Seed for the random graph generator.
        graph_type: ``"random"``, ``"dag"`` or ``"grid"``.

    Returns:
        Timings, counters and the largest cost difference (``inf`` when the
        two disagree on which vertices are reachable).
    """
    G = generate_graph(graph_type, n, m, seed)
    source = 0

    t0 = time.perf_counter()
    engine = ShortestPathEngine(G, source, EngineConfig(track_paths=False))
    res = engine.run()
    t1 = time.perf_counter()
    ref = dijkstra_reference(G, source)
    t2 = time.perf_counter()

    if set(res.costs) != set(ref):
        max_err = float("inf")
    else:
        max_err = max((abs(res.costs[v] - ref[v]) for v in ref), default=0.0)

    return BenchResult(
        n=G.number_of_vertices(),
        m=G.number_of_edges(),
        graph_type=graph_type,
        engine_ms=(t1 - t0) * 1000.0,
        reference_ms=(t2 - t1) * 1000.0,
        max_abs_err=float(max_err),
        reached=len(res.costs),
        counters=engine.summary(),
    )


def _p95(values: List[float]) -> float:
    if len(values) == 1:
        return values[0]
    return statistics.quantiles(values, n=100, method="inclusive")[94]


def main(argv: List[str] | None = None) -> int:
    """Run benchmarking trials and print a summary table.

    Args:
        argv: Optional argument list for testing.
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
        "--graph-types",
        nargs="+",
        choices=["random", "dag", "grid"],
        default=["random"],
    )
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
    aggregates: Dict[Tuple[int, int, str], List[BenchResult]] = {}
    for n, m in sizes:
        for graph_type in args.graph_types:
            results = aggregates.setdefault((n, m, graph_type), [])
            for trial in range(args.trials):
                res = run_once(n, m, seed=args.seed_base + trial, graph_type=graph_type)
                results.append(res)
                rows.append(
                    [
                        res.n,
                        res.m,
                        graph_type,
                        trial,
                        f"{res.engine_ms:.6f}",
                        f"{res.reference_ms:.6f}",
                        res.counters["pushes"],
                        res.counters["stale_pops"],
                        res.counters["edges_relaxed"],
                        res.max_abs_err,
                    ]
                )

    if args.out_csv:
        with args.out_csv.open("w", newline="") as fh:
            writer = csv.writer(fh)
            writer.writerow(
                [
                    "n",
                    "m",
                    "graph_type",
                    "trial",
                    "engine_ms",
                    "reference_ms",
                    "pushes",
                    "stale_pops",
                    "edges_relaxed",
                    "max_abs_err",
                ]
            )
            writer.writerows(rows)

    print(
        f"{'n':>6} {'m':>7} {'type':>6} {'pushes':>8} {'stale':>7}"
        f" {'eng_med':>9} {'eng_p95':>9} {'ref_med':>9} {'ref_p95':>9} {'err':>6}"
    )
    for (n, m, graph_type), results in aggregates.items():
        eng = [r.engine_ms for r in results]
        ref = [r.reference_ms for r in results]
        pushes = statistics.median(r.counters["pushes"] for r in results)
        stale = statistics.median(r.counters["stale_pops"] for r in results)
        err = max(r.max_abs_err for r in results)
        print(
            f"{n:6d} {m:7d} {graph_type:>6} {int(pushes):8d} {int(stale):7d}"
            f" {statistics.median(eng):9.2f} {_p95(eng):9.2f}"
            f" {statistics.median(ref):9.2f} {_p95(ref):9.2f} {err:6.2g}"
        )
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
