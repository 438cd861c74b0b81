"""Public package exports for :mod:`heapdijkstra`."""

from __future__ import annotations

from .engine import (
    EngineConfig,
    ShortestPathEngine,
    ShortestPathResult,
    dijkstra,
    dijkstra_paths,
    shortest_costs,
    shortest_paths,
)
from .exceptions import (
    ConfigError,
    EmptyContainerError,
    GraphFormatError,
    HeapDijkstraError,
    InputError,
    InvalidArgumentError,
    UnknownVertexError,
)
from .graph import WeightedDiGraph, WeightedGraph, WeightedGraphProtocol
from .graph_numpy import NumpyGraph
from .heap import BinaryHeap, natural_order
from .io import load_graph, read_graph, write_graph
from .logger import Logger, NoopLogger, StdLogger
from .reference import brute_force_costs, dijkstra_reference

__version__ = "0.2.0"

__all__ = [
    "BinaryHeap",
    "natural_order",
    "WeightedDiGraph",
    "WeightedGraph",
    "WeightedGraphProtocol",
    "NumpyGraph",
    "EngineConfig",
    "ShortestPathEngine",
    "ShortestPathResult",
    "shortest_costs",
    "shortest_paths",
    "dijkstra",
    "dijkstra_paths",
    "dijkstra_reference",
    "brute_force_costs",
    "Logger",
    "NoopLogger",
    "StdLogger",
    "read_graph",
    "write_graph",
    "load_graph",
    "HeapDijkstraError",
    "EmptyContainerError",
    "InvalidArgumentError",
    "UnknownVertexError",
    "InputError",
    "GraphFormatError",
    "ConfigError",
]
