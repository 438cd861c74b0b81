"""Weighted graph collaborators consumed by the shortest-path engine."""

from __future__ import annotations

from typing import (
    Dict,
    Hashable,
    Iterable,
    List,
    Protocol,
    Set,
    Tuple,
    Union,
)

from .exceptions import GraphFormatError, InputError

Vertex = Hashable
Weight = Union[int, float]
Edge = Tuple[Vertex, Vertex, Weight]


class WeightedGraphProtocol(Protocol):
    """Read-only query surface required by :mod:`heapdijkstra.engine`."""

    def vertices(self) -> Set[Vertex]:
        """Return the set of all vertices."""
        ...

    def successors_of(self, vertex: Vertex) -> Iterable[Tuple[Vertex, Weight]]:
        """Return ``(destination, weight)`` pairs for edges leaving ``vertex``."""
        ...


def _check_weight(u: Vertex, v: Vertex, w: Weight) -> Weight:
    if isinstance(w, bool) or not isinstance(w, (int, float)):
        raise GraphFormatError(f"non-numeric weight {w!r} on edge ({u!r}, {v!r})")
    if w != w:
        raise GraphFormatError(f"NaN weight on edge ({u!r}, {v!r})")
    if w < 0:
        raise GraphFormatError(f"negative weight {w} on edge ({u!r}, {v!r})")
    return w


class WeightedDiGraph:
    """Directed graph with non-negative edge weights and hashable vertices.

    Adjacency is stored as a dictionary from each vertex to a dictionary of
    destinations and weights, so vertices are compared by value equality and
    hashing. Adding an edge that already exists replaces its weight.

    Examples:
        ```python
        >>> g = WeightedDiGraph.from_edges([("A", "B", 1)])
        >>> sorted(g.vertices())
        ['A', 'B']
        >>> list(g.successors_of("A"))
        [('B', 1)]
        ```
    """

    def __init__(self) -> None:
        self._adj: Dict[Vertex, Dict[Vertex, Weight]] = {}

    @classmethod
    def from_edges(cls, edges: Iterable[Edge], vertices: Iterable[Vertex] = ()):
        """Create a graph from ``(u, v, w)`` edges plus optional extra vertices.

        Endpoints of each edge are added as vertices automatically.
        """
        g = cls()
        for vertex in vertices:
            g.add_vertex(vertex)
        for u, v, w in edges:
            g.add_vertex(u)
            g.add_vertex(v)
            g.add_edge(u, v, w)
        return g

    @classmethod
    def copy_of(cls, graph: "WeightedDiGraph"):
        """Return a graph with the same vertices and edges as ``graph``."""
        return cls.from_edges(graph.edges(), graph.vertices())

    # ---- mutation -----------------------------------------------------

    def add_vertex(self, vertex: Vertex) -> None:
        """Add ``vertex``; adding an existing vertex is a no-op."""
        self._adj.setdefault(vertex, {})

    def add_edge(self, u: Vertex, v: Vertex, w: Weight) -> None:
        """Add a directed edge from ``u`` to ``v``.

        Args:
            u: Tail vertex.
            v: Head vertex.
            w: Non-negative edge weight.

        Raises:
            InputError: If ``u`` or ``v`` is not a vertex of the graph.
            GraphFormatError: If ``w`` is negative or not a number.
        """
        self._require(u)
        self._require(v)
        self._adj[u][v] = _check_weight(u, v, w)

    def delete_edge(self, u: Vertex, v: Vertex) -> None:
        """Remove the edge ``u -> v``.

        Raises:
            InputError: If an endpoint or the edge itself does not exist.
        """
        self._require(u)
        self._require(v)
        if v not in self._adj[u]:
            raise InputError(f"no edge ({u!r}, {v!r})")
        del self._adj[u][v]

    def delete_vertex(self, vertex: Vertex) -> None:
        """Remove ``vertex`` and every edge incident to it."""
        self._require(vertex)
        del self._adj[vertex]
        for targets in self._adj.values():
            targets.pop(vertex, None)

    # ---- queries ------------------------------------------------------

    def _require(self, vertex: Vertex) -> None:
        if vertex not in self._adj:
            raise InputError(f"vertex {vertex!r} is not in the graph")

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._adj

    def has_vertex(self, vertex: Vertex) -> bool:
        return vertex in self._adj

    def is_empty(self) -> bool:
        return not self._adj

    def vertices(self) -> Set[Vertex]:
        return set(self._adj)

    def edges(self) -> List[Edge]:
        """Return all edges as ``(u, v, w)`` tuples."""
        return [(u, v, w) for u, targets in self._adj.items() for v, w in targets.items()]

    def successors_of(self, vertex: Vertex) -> List[Tuple[Vertex, Weight]]:
        """Return ``(destination, weight)`` pairs leaving ``vertex``.

        Raises:
            InputError: If ``vertex`` is not in the graph.
        """
        self._require(vertex)
        return list(self._adj[vertex].items())

    def predecessors_of(self, vertex: Vertex) -> Set[Vertex]:
        """Return every vertex with an edge into ``vertex``."""
        self._require(vertex)
        return {u for u, targets in self._adj.items() if vertex in targets}

    def weight(self, u: Vertex, v: Vertex) -> Weight:
        """Return the weight of ``u -> v``."""
        self._require(u)
        try:
            return self._adj[u][v]
        except KeyError:
            raise InputError(f"no edge ({u!r}, {v!r})") from None

    def number_of_vertices(self) -> int:
        return len(self._adj)

    def number_of_edges(self) -> int:
        return sum(len(targets) for targets in self._adj.values())

    def out_degree(self, vertex: Vertex) -> int:
        self._require(vertex)
        return len(self._adj[vertex])

    def in_degree(self, vertex: Vertex) -> int:
        return len(self.predecessors_of(vertex))

    def __repr__(self) -> str:
        vs = ", ".join(repr(v) for v in self._adj)
        es = ", ".join(f"{u!r}->{v!r}({w})" for u, v, w in self.edges())
        return f"{type(self).__name__}(vertices({vs}), edges({es}))"


class WeightedGraph(WeightedDiGraph):
    """Undirected graph: each edge is stored in both directions."""

    def add_edge(self, u: Vertex, v: Vertex, w: Weight) -> None:
        super().add_edge(u, v, w)
        self._adj[v][u] = w

    def delete_edge(self, u: Vertex, v: Vertex) -> None:
        super().delete_edge(u, v)
        self._adj[v].pop(u, None)

    def edges(self) -> List[Edge]:
        """Return each undirected edge once."""
        seen: Set[Tuple[int, int]] = set()
        out: List[Edge] = []
        positions = {v: i for i, v in enumerate(self._adj)}
        for u, targets in self._adj.items():
            for v, w in targets.items():
                key = tuple(sorted((positions[u], positions[v])))
                if key in seen:
                    continue
                seen.add(key)  # type: ignore[arg-type]
                out.append((u, v, w))
        return out

    def degree(self, vertex: Vertex) -> int:
        return self.out_degree(vertex)

    def number_of_edges(self) -> int:
        return len(self.edges())


__all__ = [
    "Edge",
    "Vertex",
    "Weight",
    "WeightedDiGraph",
    "WeightedGraph",
    "WeightedGraphProtocol",
]
