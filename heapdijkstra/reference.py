"""Reference shortest-path implementations used in tests and benchmarks."""

from __future__ import annotations

import heapq
import itertools
from typing import Dict, Hashable, List, Set, Tuple

from .exceptions import UnknownVertexError
from .graph import Weight, WeightedGraphProtocol

Vertex = Hashable


def dijkstra_reference(G: WeightedGraphProtocol, source: Vertex) -> Dict[Vertex, Weight]:
    """Run the textbook Dijkstra algorithm on top of :mod:`heapq`.

    Args:
        G: Input graph with non-negative edge weights.
        source: Source vertex.

    Returns:
        Minimum cost of every vertex reachable from ``source``.
    """
    if source not in G.vertices():
        raise UnknownVertexError(f"source {source!r} is not a vertex of the graph")
    dist: Dict[Vertex, Weight] = {source: 0}
    tie = itertools.count()
    pq: List[Tuple[Weight, int, Vertex]] = [(0, next(tie), source)]
    seen: Set[Vertex] = set()
    while pq:
        d, _, u = heapq.heappop(pq)
        if u in seen or d != dist[u]:
            continue
        seen.add(u)
        for v, w in G.successors_of(u):
            nd = d + w
            if v not in dist or nd < dist[v]:
                dist[v] = nd
                heapq.heappush(pq, (nd, next(tie), v))
    return dist


def brute_force_costs(G: WeightedGraphProtocol, source: Vertex) -> Dict[Vertex, Weight]:
    """Return minimum costs by enumerating every simple path from ``source``.

    Exponential in the worst case; meant for graphs with a handful of
    vertices. Uses an explicit stack so deep graphs do not hit the recursion
    limit.
    """
    if source not in G.vertices():
        raise UnknownVertexError(f"source {source!r} is not a vertex of the graph")
    best: Dict[Vertex, Weight] = {}
    stack: List[Tuple[Vertex, Weight, frozenset]] = [(source, 0, frozenset([source]))]
    while stack:
        u, cost, on_path = stack.pop()
        if u not in best or cost < best[u]:
            best[u] = cost
        for v, w in G.successors_of(u):
            if v not in on_path:
                stack.append((v, cost + w, on_path | {v}))
    return best


__all__ = ["brute_force_costs", "dijkstra_reference"]
