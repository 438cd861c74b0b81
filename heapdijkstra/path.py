"""Utilities for reconstructing paths from predecessor maps."""

from __future__ import annotations

from typing import Dict, Hashable, List, Optional

Vertex = Hashable


def reconstruct_path(
    predecessors: Dict[Vertex, Optional[Vertex]],
    source: Vertex,
    target: Vertex,
) -> List[Vertex]:
    """Return the vertices from ``source`` to ``target`` (inclusive).

    Args:
        predecessors: Maps every reached vertex to the vertex it was reached
            from. The entry of the source is never read, so it may hold
            anything (the engine stores ``None``).
        source: Source vertex.
        target: Target vertex.

    Returns:
        The path as a list, or an empty list when ``target`` was not reached
        from ``source``.

    Notes:
        The source itself yields ``[source]``; callers that represent the
        trivial path differently handle that case before calling.
    """
    if target not in predecessors:
        return []

    chain: List[Vertex] = [target]
    cur = target
    while cur != source:
        if len(chain) > len(predecessors):  # corrupted map with a cycle
            return []
        if cur not in predecessors:
            return []
        cur = predecessors[cur]
        chain.append(cur)

    chain.reverse()
    return chain


__all__ = ["reconstruct_path"]
