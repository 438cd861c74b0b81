"""Seeded random graph generators for experiments, benchmarks and tests.

All generators return a :class:`~heapdijkstra.graph.WeightedDiGraph` over the
integer vertices ``0 .. n-1`` with non-negative integer weights.

Supported families:

- ``random``: uniformly sampled directed edges (Erdős–Rényi style).
- ``dag``: edges only from lower to higher vertex ids.
- ``grid``: 2D grid with edges between neighbours in both directions.

Weight distributions: ``uniform`` over ``[w_min, w_max]`` and ``small_int``
which concentrates weights in ``[w_min, w_min + 10]`` to produce many ties.
"""

from __future__ import annotations

import math
import random
from typing import List, Literal, Set, Tuple

from .exceptions import ConfigError
from .graph import WeightedDiGraph

WeightDist = Literal["uniform", "small_int"]
GraphType = Literal["random", "dag", "grid"]

EdgeList = List[Tuple[int, int, int]]


def _sample_weight(rng: random.Random, dist: str, w_min: int, w_max: int) -> int:
    if dist == "uniform":
        return rng.randint(w_min, w_max)
    if dist == "small_int":
        return rng.randint(w_min, min(w_max, w_min + 10))
    raise ConfigError(f"unknown weight distribution {dist!r}")


def _check_weights(w_min: int, w_max: int, dist: str) -> None:
    if dist not in ("uniform", "small_int"):
        raise ConfigError(f"unknown weight distribution {dist!r}")
    if w_min < 0:
        raise ConfigError("w_min must be >= 0.")
    if w_max < w_min:
        raise ConfigError("w_max must be >= w_min.")


class _EdgeSink:
    """Collects unique, non-loop edges with sampled weights."""

    def __init__(self, rng: random.Random, dist: str, w_min: int, w_max: int) -> None:
        self.rng = rng
        self.dist = dist
        self.w_min = w_min
        self.w_max = w_max
        self.seen: Set[Tuple[int, int]] = set()
        self.edges: EdgeList = []

    def add(self, u: int, v: int) -> None:
        if u == v or (u, v) in self.seen:
            return
        self.seen.add((u, v))
        self.edges.append((u, v, _sample_weight(self.rng, self.dist, self.w_min, self.w_max)))


def random_graph(
    n: int,
    m: int,
    seed: int = 0,
    *,
    w_min: int = 1,
    w_max: int = 100,
    weight_dist: WeightDist = "uniform",
    backbone: bool = False,
) -> WeightedDiGraph:
    """Return a graph with ``n`` vertices and up to ``m`` distinct random edges.

    Args:
        n: Number of vertices (``n > 0``).
        m: Target number of edges, capped at ``n * (n - 1)``.
        seed: Seed of the private random generator.
        w_min: Smallest weight.
        w_max: Largest weight.
        weight_dist: ``"uniform"`` or ``"small_int"``.
        backbone: Add the chain ``0 -> 1 -> ... -> n-1`` first so every vertex
            is reachable from ``0``.
    """
    if n <= 0:
        raise ConfigError("n must be > 0.")
    if m < 0:
        raise ConfigError("m must be >= 0.")
    _check_weights(w_min, w_max, weight_dist)
    sink = _EdgeSink(random.Random(seed), weight_dist, w_min, w_max)
    if backbone:
        for i in range(n - 1):
            sink.add(i, i + 1)
    target = min(m, n * (n - 1))
    while len(sink.edges) < target:
        sink.add(sink.rng.randrange(n), sink.rng.randrange(n))
    return WeightedDiGraph.from_edges(sink.edges, range(n))


def dag_graph(
    n: int,
    m: int,
    seed: int = 0,
    *,
    w_min: int = 1,
    w_max: int = 100,
    weight_dist: WeightDist = "uniform",
) -> WeightedDiGraph:
    """Return a directed acyclic graph whose edges all go from lower to higher ids."""
    if n <= 0:
        raise ConfigError("n must be > 0.")
    if m < 0:
        raise ConfigError("m must be >= 0.")
    _check_weights(w_min, w_max, weight_dist)
    sink = _EdgeSink(random.Random(seed), weight_dist, w_min, w_max)
    target = min(m, n * (n - 1) // 2)
    while len(sink.edges) < target:
        u = sink.rng.randrange(n)
        v = sink.rng.randrange(n)
        if u > v:
            u, v = v, u
        sink.add(u, v)
    return WeightedDiGraph.from_edges(sink.edges, range(n))


def grid_graph(
    rows: int,
    cols: int,
    seed: int = 0,
    *,
    w_min: int = 1,
    w_max: int = 100,
    weight_dist: WeightDist = "uniform",
) -> WeightedDiGraph:
    """Return a ``rows x cols`` grid; vertex ``r * cols + c`` is cell ``(r, c)``."""
    if rows <= 0 or cols <= 0:
        raise ConfigError("rows and cols must be > 0.")
    _check_weights(w_min, w_max, weight_dist)
    sink = _EdgeSink(random.Random(seed), weight_dist, w_min, w_max)
    for r in range(rows):
        for c in range(cols):
            u = r * cols + c
            if c + 1 < cols:
                sink.add(u, u + 1)
                sink.add(u + 1, u)
            if r + 1 < rows:
                sink.add(u, u + cols)
                sink.add(u + cols, u)
    return WeightedDiGraph.from_edges(sink.edges, range(rows * cols))


def generate_graph(graph_type: GraphType, n: int, m: int, seed: int = 0, **kwargs) -> WeightedDiGraph:
    """Dispatch to a generator by family name.

    For ``"grid"`` the grid is the most square ``rows x cols`` with
    ``rows * cols >= n`` and ``m`` is ignored.
    """
    if graph_type == "random":
        return random_graph(n, m, seed, **kwargs)
    if graph_type == "dag":
        return dag_graph(n, m, seed, **kwargs)
    if graph_type == "grid":
        if n <= 0:
            raise ConfigError("n must be > 0.")
        rows = max(1, math.isqrt(n))
        cols = (n + rows - 1) // rows
        return grid_graph(rows, cols, seed, **kwargs)
    raise ConfigError(f"unknown graph type {graph_type!r}")


__all__ = ["dag_graph", "generate_graph", "grid_graph", "random_graph"]
