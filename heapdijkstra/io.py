"""Graph input/output helpers.

Vertex labels are read as strings. Weights that parse as integers stay
integers, anything else becomes a float.
"""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from .deprecation import warn_once
from .exceptions import GraphFormatError, InputError
from .graph import Weight, WeightedDiGraph, WeightedGraph

EdgeList = List[Tuple[str, str, Weight]]
Parsed = Tuple[List[str], EdgeList]

GRAPHML_NS = "http://graphml.graphdrawing.org/xmlns"


def _parse_weight(text: str, where: str) -> Weight:
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        raise GraphFormatError(f"invalid weight {text!r} at {where}") from None


def _read_csv(path: Path) -> Parsed:
    """Read ``u,v,w`` rows from a CSV (or TSV) file.

    Lines starting with ``#`` and blank lines are ignored. A row with a single
    column declares an isolated vertex.

    Raises:
        GraphFormatError: On a malformed row or when the file holds nothing.
    """
    vertices: List[str] = []
    edges: EdgeList = []
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            row = raw.strip()
            if not row or row.startswith("#"):
                continue
            parts = [p.strip() for p in row.replace("\t", ",").split(",")]
            where = f"{path.name}:{lineno}"
            if len(parts) == 1:
                vertices.append(parts[0])
            elif len(parts) == 3:
                edges.append((parts[0], parts[1], _parse_weight(parts[2], where)))
            else:
                raise GraphFormatError(f"expected 'u,v,w' or a single vertex at {where}")
    if not vertices and not edges:
        raise GraphFormatError("no vertices or edges parsed from file")
    return vertices, edges


def _csv_label(vertex: object) -> str:
    """Return ``vertex`` as a CSV field that reads back unchanged.

    Raises:
        GraphFormatError: If the label holds a separator or a line break,
            is blank, has surrounding whitespace or starts with ``#``.
    """
    label = str(vertex)
    if (
        not label
        or label != label.strip()
        or label.startswith("#")
        or any(ch in label for ch in ",\t\r\n")
    ):
        raise GraphFormatError(
            f"vertex {label!r} cannot be stored in CSV; use the jsonl or graphml format"
        )
    return label


def _write_csv(path: Path, G: WeightedDiGraph) -> None:
    """Write isolated vertices as single-column rows, then one row per edge."""
    rows = [_csv_label(v) for v in _isolated(G)]
    rows.extend(f"{_csv_label(u)},{_csv_label(v)},{w}" for u, v, w in G.edges())
    with path.open("w", encoding="utf-8") as fh:
        fh.write("# u,v,w\n")
        for row in rows:
            fh.write(row + "\n")


def _read_jsonl(path: Path) -> Parsed:
    """Read one JSON object per line: ``{"u", "v", "w"}`` or ``{"vertex"}``."""
    vertices: List[str] = []
    edges: EdgeList = []
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            row = raw.strip()
            if not row:
                continue
            where = f"{path.name}:{lineno}"
            try:
                obj = json.loads(row)
                if "vertex" in obj:
                    vertices.append(str(obj["vertex"]))
                    continue
                u, v, w = str(obj["u"]), str(obj["v"]), obj["w"]
            except (json.JSONDecodeError, KeyError, TypeError) as exc:
                raise GraphFormatError(f"malformed record at {where}: {exc}") from exc
            if isinstance(w, str):
                w = _parse_weight(w, where)
            edges.append((u, v, w))
    if not vertices and not edges:
        raise GraphFormatError("no vertices or edges parsed from file")
    return vertices, edges


def _write_jsonl(path: Path, G: WeightedDiGraph) -> None:
    with path.open("w", encoding="utf-8") as fh:
        for v in _isolated(G):
            fh.write(json.dumps({"vertex": str(v)}) + "\n")
        for u, v, w in G.edges():
            fh.write(json.dumps({"u": str(u), "v": str(v), "w": w}) + "\n")


def _read_graphml(path: Path) -> Parsed:
    """Parse ``node`` and ``edge`` elements from a GraphML file.

    The weight comes from a ``weight`` attribute on the edge or from a
    ``data`` child whose key is declared with ``attr.name="weight"``. Edges
    without a weight get weight ``1``.
    """
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as exc:
        raise GraphFormatError(f"invalid GraphML: {exc}") from exc
    ns = f"{{{GRAPHML_NS}}}"
    weight_keys = {"weight", "w"}
    for key in root.findall(f"{ns}key"):
        if key.attrib.get("attr.name") == "weight":
            weight_keys.add(key.attrib.get("id", ""))

    vertices = [node.attrib["id"] for node in root.iter(f"{ns}node") if "id" in node.attrib]
    edges: EdgeList = []
    for edge in root.iter(f"{ns}edge"):
        u = edge.attrib.get("source")
        v = edge.attrib.get("target")
        if u is None or v is None:
            raise GraphFormatError("edge without source or target")
        where = f"edge ({u}, {v})"
        w_attr = edge.attrib.get("weight")
        if w_attr is None:
            for data in edge.findall(f"{ns}data"):
                if data.attrib.get("key") in weight_keys and data.text is not None:
                    w_attr = data.text.strip()
                    break
        w: Weight = 1 if w_attr is None else _parse_weight(w_attr, where)
        edges.append((u, v, w))
    if not vertices and not edges:
        raise GraphFormatError("no vertices or edges parsed from file")
    return vertices, edges


def _write_graphml(path: Path, G: WeightedDiGraph) -> None:
    default = "undirected" if isinstance(G, WeightedGraph) else "directed"
    graphml = ET.Element("graphml", xmlns=GRAPHML_NS)
    ET.SubElement(
        graphml,
        "key",
        {"id": "weight", "for": "edge", "attr.name": "weight", "attr.type": "double"},
    )
    graph = ET.SubElement(graphml, "graph", id="G", edgedefault=default)
    for v in G.vertices():
        ET.SubElement(graph, "node", id=str(v))
    for u, v, w in G.edges():
        edge = ET.SubElement(graph, "edge", source=str(u), target=str(v))
        ET.SubElement(edge, "data", key="weight").text = str(w)
    ET.ElementTree(graphml).write(path, encoding="utf-8", xml_declaration=True)


def _isolated(G: WeightedDiGraph) -> List[str]:
    touched = set()
    for u, v, _ in G.edges():
        touched.add(u)
        touched.add(v)
    return sorted((str(v) for v in G.vertices() if v not in touched))


_FMT_READERS = {
    "csv": _read_csv,
    "jsonl": _read_jsonl,
    "graphml": _read_graphml,
}

_FMT_WRITERS = {
    "csv": _write_csv,
    "jsonl": _write_jsonl,
    "graphml": _write_graphml,
}

_EXTENSIONS: Dict[str, str] = {
    ".csv": "csv",
    ".tsv": "csv",
    ".txt": "csv",
    ".jsonl": "jsonl",
    ".json": "jsonl",
    ".graphml": "graphml",
    ".xml": "graphml",
}


def _detect_format(path: Path) -> Optional[str]:
    """Return the format name implied by the extension of ``path``."""
    return _EXTENSIONS.get(path.suffix.lower())


def read_graph(
    path: Union[str, Path], fmt: Optional[str] = None, undirected: bool = False
) -> WeightedDiGraph:
    """Read a graph from a file.

    Args:
        path: The path to the graph file.
        fmt: ``"csv"``, ``"jsonl"`` or ``"graphml"``; auto-detected from the
            extension when ``None``.
        undirected: Build a :class:`~heapdijkstra.graph.WeightedGraph` instead
            of a directed graph.

    Returns:
        The graph built from the file.

    Raises:
        GraphFormatError: If the format is unknown or the content is invalid.
        InputError: If the file cannot be opened.
    """
    p = Path(path)
    fmt = fmt or _detect_format(p)
    if fmt is None or fmt not in _FMT_READERS:
        raise GraphFormatError(f"unknown graph format for {p.name}")
    try:
        vertices, edges = _FMT_READERS[fmt](p)
    except UnicodeDecodeError as exc:
        raise GraphFormatError(f"{p.name} is not UTF-8 text: {exc}") from exc
    except OSError as exc:
        raise InputError(f"cannot read {p}: {exc.strerror or exc}") from exc
    cls = WeightedGraph if undirected else WeightedDiGraph
    return cls.from_edges(edges, vertices)


def write_graph(G: WeightedDiGraph, path: Union[str, Path], fmt: Optional[str] = None) -> None:
    """Write ``G`` to ``path`` in the given (or extension-implied) format.

    Raises:
        GraphFormatError: If the format is unknown.
    """
    p = Path(path)
    fmt = fmt or _detect_format(p)
    if fmt is None or fmt not in _FMT_WRITERS:
        raise GraphFormatError(f"unknown graph format for {p.name}")
    _FMT_WRITERS[fmt](p, G)


def load_graph(path: Union[str, Path], fmt: Optional[str] = None) -> WeightedDiGraph:
    """Deprecated alias of :func:`read_graph`."""
    warn_once(
        "load_graph() is deprecated, use read_graph()",
        remove_in="1.0.0",
    )
    return read_graph(path, fmt=fmt)


__all__ = ["load_graph", "read_graph", "write_graph"]
