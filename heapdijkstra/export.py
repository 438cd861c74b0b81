"""Export utilities for shortest-path trees."""

from __future__ import annotations

import json
from typing import Hashable, List, Tuple
from xml.sax.saxutils import escape

from .engine import Cost, ShortestPathResult
from .exceptions import ConfigError

Vertex = Hashable


def shortest_path_tree(result: ShortestPathResult) -> List[Tuple[Vertex, Vertex, Cost]]:
    """Return the edges ``(predecessor, vertex, cost)`` of the search tree.

    Edges are listed in settlement order; the source has no incoming edge.

    Raises:
        ConfigError: If ``result`` was produced without tracking paths.
    """
    if result.predecessors is None:
        raise ConfigError("paths were not tracked; enable EngineConfig.track_paths")
    tree: List[Tuple[Vertex, Vertex, Cost]] = []
    for v in result.settle_order:
        if v == result.source:
            continue
        tree.append((result.predecessors[v], v, result.costs[v]))
    return tree


def export_tree_json(result: ShortestPathResult) -> str:
    """Return a JSON string with nodes (and their costs) and tree edges."""
    data = {
        "source": str(result.source),
        "nodes": [{"id": str(v), "cost": result.costs[v]} for v in result.settle_order],
        "edges": [
            {"source": str(u), "target": str(v)} for (u, v, _) in shortest_path_tree(result)
        ],
    }
    return json.dumps(data)


def export_tree_graphml(result: ShortestPathResult) -> str:
    """Return a minimal GraphML string for the shortest-path tree."""
    edges = shortest_path_tree(result)
    lines: List[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append('<graphml xmlns="http://graphml.graphdrawing.org/xmlns">')
    lines.append('  <key id="cost" for="node" attr.name="cost" attr.type="double"/>')
    lines.append('  <graph id="T" edgedefault="directed">')
    for v in result.settle_order:
        lines.append(f'    <node id="{_attr(v)}"><data key="cost">{result.costs[v]}</data></node>')
    for u, v, _ in edges:
        lines.append(f'    <edge source="{_attr(u)}" target="{_attr(v)}"/>')
    lines.append("  </graph>")
    lines.append("</graphml>")
    return "\n".join(lines)


def _attr(value: Vertex) -> str:
    return escape(str(value), {'"': "&quot;"})


__all__ = ["export_tree_graphml", "export_tree_json", "shortest_path_tree"]
