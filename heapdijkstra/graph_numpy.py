"""NumPy-backed graph with integer vertices ``0 .. n-1``."""

from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Real
from typing import Iterable, List, Set, Tuple

import numpy as np
import numpy.typing as npt

from .exceptions import GraphFormatError, InputError
from .graph import WeightedDiGraph

Edge = Tuple[int, int, float]

_EMPTY_ROWS = np.zeros((0, 2), dtype=np.float64)


@dataclass
class NumpyGraph:
    """Directed graph whose adjacency is one ``float64`` array per vertex.

    Row ``k`` of ``adj[u]`` is ``(destination, weight)``. Weights must be
    non-negative real numbers; anything else raises
    :class:`~heapdijkstra.exceptions.GraphFormatError` naming the edge.
    """

    n: int
    adj: List[npt.NDArray[np.float64]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.n, bool) or not isinstance(self.n, int) or self.n <= 0:
            raise InputError(f"NumpyGraph needs a positive vertex count, got {self.n!r}")
        self.adj = [_EMPTY_ROWS.copy() for _ in range(self.n)]

    def _check_vertex(self, u: int) -> None:
        if not 0 <= u < self.n:
            raise InputError(f"vertex {u!r} is outside [0, {self.n})")

    def add_edge(self, u: int, v: int, w: float) -> None:
        """Append the directed edge ``u -> v`` with weight ``w``."""
        self._check_vertex(u)
        self._check_vertex(v)
        if isinstance(w, bool) or not isinstance(w, (Real, np.number)):
            raise GraphFormatError(f"non-numeric weight {w!r} on edge ({u}, {v})")
        if np.isnan(w):
            raise GraphFormatError(f"NaN weight on edge ({u}, {v})")
        if w < 0:
            raise GraphFormatError(f"negative weight {w} on edge ({u}, {v})")
        self.adj[u] = np.append(self.adj[u], [[v, w]], axis=0)

    @classmethod
    def from_edges(cls, n: int, edges: Iterable[Edge]) -> "NumpyGraph":
        g = cls(n)
        for u, v, w in edges:
            g.add_edge(int(u), int(v), w)
        return g

    def vertices(self) -> Set[int]:
        return set(range(self.n))

    def successors_of(self, vertex: int) -> List[Tuple[int, float]]:
        """Return ``(destination, weight)`` pairs as plain Python numbers."""
        self._check_vertex(vertex)
        rows = self.adj[vertex]
        return list(zip(rows[:, 0].astype(np.int64).tolist(), rows[:, 1].tolist()))

    def out_degree(self, u: int) -> int:
        self._check_vertex(u)
        return len(self.adj[u])

    def number_of_edges(self) -> int:
        return sum(len(rows) for rows in self.adj)

    def to_graph(self) -> WeightedDiGraph:
        """Copy into a dict-backed :class:`~heapdijkstra.graph.WeightedDiGraph`."""
        g = WeightedDiGraph.from_edges((), range(self.n))
        for u in range(self.n):
            for v, w in self.successors_of(u):
                g.add_edge(u, v, w)
        return g


__all__ = ["NumpyGraph"]
