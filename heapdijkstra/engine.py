"""Single-source shortest paths (Dijkstra) over a :class:`BinaryHeap` frontier."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, replace
from typing import Dict, Hashable, Iterator, List, NamedTuple, Optional, Set, Tuple

from .deprecation import deprecated_alias
from .exceptions import ConfigError, UnknownVertexError
from .graph import Weight, WeightedGraphProtocol
from .heap import DEFAULT_INITIAL_CAPACITY, BinaryHeap
from .logger import Logger, NoopLogger
from .path import reconstruct_path

Vertex = Hashable
Cost = Weight


class _Candidate(NamedTuple):
    """Frontier entry: tentative ``cost`` of reaching ``vertex``."""

    cost: Cost
    seq: int
    vertex: Vertex


def _by_cost(a: _Candidate, b: _Candidate) -> int:
    # Equal costs fall back to push order so runs are reproducible.
    if a.cost < b.cost:
        return -1
    if a.cost > b.cost:
        return 1
    return a.seq - b.seq


@dataclass(frozen=True)
class EngineConfig:
    """Configuration knobs for :class:`ShortestPathEngine`.

    Attributes:
        initial_capacity: Initial slot count of the frontier heap.
        track_paths: Record predecessors so paths can be rebuilt. The
            cost-only entry point turns this off.
    """

    initial_capacity: int = DEFAULT_INITIAL_CAPACITY
    track_paths: bool = True

    def __post_init__(self) -> None:
        if (
            not isinstance(self.initial_capacity, int)
            or isinstance(self.initial_capacity, bool)
            or self.initial_capacity < 1
        ):
            raise ConfigError("initial_capacity must be a positive integer.")


@dataclass(frozen=True)
class ShortestPathResult:
    """Settled costs (and optionally predecessors) of one engine run.

    ``costs`` and ``predecessors`` only hold vertices reached from ``source``;
    ``settle_order`` lists them in the order they were settled.
    """

    source: Vertex
    costs: Dict[Vertex, Cost]
    predecessors: Optional[Dict[Vertex, Optional[Vertex]]]
    settle_order: Tuple[Vertex, ...]

    def path_to(self, target: Vertex) -> List[Vertex]:
        """Return the cheapest path from the source to ``target``.

        The source maps to an empty path. Any other reached vertex maps to
        the full vertex sequence ``[source, ..., target]``; an unreached one
        maps to an empty list.

        Raises:
            ConfigError: If the run did not track predecessors.
        """
        if self.predecessors is None:
            raise ConfigError("paths were not tracked; enable EngineConfig.track_paths")
        if target == self.source:
            return []
        return reconstruct_path(self.predecessors, self.source, target)

    def paths(self) -> Dict[Vertex, Tuple[Cost, List[Vertex]]]:
        """Return ``vertex -> (cost, path)`` for every reached vertex."""
        return {v: (self.costs[v], self.path_to(v)) for v in self.settle_order}


class ShortestPathEngine:
    """Dijkstra's algorithm with one global priority queue.

    The engine keeps every discovered vertex in one of three states. A vertex
    is *unseen* until an edge reaches it, *frontier* while its recorded cost
    may still improve, and *settled* once it has been extracted as the
    cheapest frontier entry. With non-negative weights nothing reached later
    can undercut a settled cost, so settled entries are final.

    An improved cost pushes a new heap entry instead of decreasing a key;
    entries whose cost no longer matches the record are skipped when popped.

    Args:
        graph: Read-only graph collaborator.
        source: Vertex the costs are measured from.
        config: Optional engine configuration.
        logger: Optional structured logger.

    Raises:
        UnknownVertexError: If ``source`` is not a vertex of ``graph``.

    Notes:
        Edge weights must be non-negative. Negative weights are a
        precondition violation and are not checked here.
    """

    def __init__(
        self,
        graph: WeightedGraphProtocol,
        source: Vertex,
        config: Optional[EngineConfig] = None,
        logger: Logger | None = None,
    ) -> None:
        if source not in graph.vertices():
            raise UnknownVertexError(f"source {source!r} is not a vertex of the graph")
        self.graph = graph
        self.source = source
        self.cfg = config or EngineConfig()
        self.logger = logger or NoopLogger()
        self._reset()

    def _reset(self) -> None:
        self.counters: Dict[str, int] = {
            "pushes": 0,
            "pops": 0,
            "stale_pops": 0,
            "edges_relaxed": 0,
            "improvements": 0,
            "max_frontier": 0,
        }
        self._costs: Dict[Vertex, Cost] = {}
        self._preds: Dict[Vertex, Optional[Vertex]] = {}
        self._settled: Set[Vertex] = set()
        self._order: List[Vertex] = []

    def iter_settled(self) -> Iterator[Tuple[Vertex, Cost]]:
        """Run the search lazily, yielding ``(vertex, cost)`` as vertices settle.

        Costs come out in non-decreasing order. Stopping the iteration early
        leaves :meth:`result` describing only the vertices settled so far,
        which is how callers bolt on cancellation or time limits.
        """
        self._reset()
        costs = self._costs
        preds = self._preds
        settled = self._settled
        counters = self.counters
        track_paths = self.cfg.track_paths

        frontier: BinaryHeap[_Candidate] = BinaryHeap(_by_cost, self.cfg.initial_capacity)
        seq = itertools.count()

        costs[self.source] = 0
        if track_paths:
            preds[self.source] = None
        frontier.insert(_Candidate(0, next(seq), self.source))
        counters["pushes"] += 1

        while not frontier.is_empty():
            counters["max_frontier"] = max(counters["max_frontier"], frontier.size())
            cost_u, _, u = frontier.extract_minimum()
            counters["pops"] += 1
            if u in settled or cost_u != costs[u]:
                counters["stale_pops"] += 1
                continue

            settled.add(u)
            self._order.append(u)
            self.logger.debug("settle", vertex=u, cost=cost_u)
            yield u, cost_u

            for v, w in self.graph.successors_of(u):
                if v in settled:
                    continue
                counters["edges_relaxed"] += 1
                candidate = cost_u + w
                recorded = costs.get(v)
                if recorded is None or candidate < recorded:
                    costs[v] = candidate
                    if track_paths:
                        preds[v] = u
                    counters["improvements"] += 1
                    frontier.insert(_Candidate(candidate, next(seq), v))
                    counters["pushes"] += 1

    def result(self) -> ShortestPathResult:
        """Return the settled part of the most recent search."""
        order = tuple(self._order)
        preds = None
        if self.cfg.track_paths:
            preds = {v: self._preds[v] for v in order}
        return ShortestPathResult(
            source=self.source,
            costs={v: self._costs[v] for v in order},
            predecessors=preds,
            settle_order=order,
        )

    def run(self) -> ShortestPathResult:
        """Run the search to completion and return its result."""
        for _ in self.iter_settled():
            pass
        self.logger.info("run", source=self.source, settled=len(self._order), **self.counters)
        return self.result()

    def summary(self) -> Dict[str, int]:
        """Return a copy of internal counter values."""
        return dict(self.counters)


def shortest_costs(
    graph: WeightedGraphProtocol,
    source: Vertex,
    config: Optional[EngineConfig] = None,
    logger: Logger | None = None,
) -> Dict[Vertex, Cost]:
    """Return the minimum cost from ``source`` to every reachable vertex.

    Unreachable vertices are absent from the mapping.

    Raises:
        UnknownVertexError: If ``source`` is not a vertex of ``graph``.

    Examples:
        ```python
        >>> from heapdijkstra.graph import WeightedDiGraph
        >>> g = WeightedDiGraph.from_edges([("A", "B", 1), ("B", "C", 2)])
        >>> shortest_costs(g, "A")
        {'A': 0, 'B': 1, 'C': 3}
        ```
    """
    cfg = replace(config or EngineConfig(), track_paths=False)
    return ShortestPathEngine(graph, source, cfg, logger).run().costs


def shortest_paths(
    graph: WeightedGraphProtocol,
    source: Vertex,
    config: Optional[EngineConfig] = None,
    logger: Logger | None = None,
) -> Dict[Vertex, Tuple[Cost, List[Vertex]]]:
    """Return ``vertex -> (cost, path)`` for every reachable vertex.

    The source maps to ``(0, [])``; every other vertex maps to its cost and
    the vertex sequence from the source to it, both ends included.

    Raises:
        UnknownVertexError: If ``source`` is not a vertex of ``graph``.
    """
    cfg = replace(config or EngineConfig(), track_paths=True)
    return ShortestPathEngine(graph, source, cfg, logger).run().paths()


dijkstra = deprecated_alias(shortest_costs, "dijkstra", remove_in="1.0.0")
dijkstra_paths = deprecated_alias(shortest_paths, "dijkstra_paths", remove_in="1.0.0")


__all__ = [
    "EngineConfig",
    "ShortestPathEngine",
    "ShortestPathResult",
    "dijkstra",
    "dijkstra_paths",
    "shortest_costs",
    "shortest_paths",
]
