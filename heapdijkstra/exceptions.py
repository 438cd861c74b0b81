"""Custom exception types used across :mod:`heapdijkstra`."""

from __future__ import annotations


class HeapDijkstraError(Exception):
    """Base class for all package-specific errors."""


class EmptyContainerError(HeapDijkstraError, IndexError):
    """Raised when peeking at or removing from an empty priority queue."""


class InvalidArgumentError(HeapDijkstraError, ValueError):
    """Raised for invalid constructor arguments such as a non-positive capacity."""


class UnknownVertexError(HeapDijkstraError, LookupError):
    """Raised when a query names a vertex that is not part of the graph."""


class InputError(HeapDijkstraError, ValueError):
    """Raised for invalid user input such as malformed edges."""


class GraphFormatError(InputError):
    """Raised when parsing a graph file fails or an edge weight is invalid."""


class ConfigError(HeapDijkstraError, ValueError):
    """Raised for invalid configuration options."""


__all__ = [
    "HeapDijkstraError",
    "EmptyContainerError",
    "InvalidArgumentError",
    "UnknownVertexError",
    "InputError",
    "GraphFormatError",
    "ConfigError",
]
