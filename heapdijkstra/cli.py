"""Command-line interface for running shortest-path queries."""

from __future__ import annotations

import argparse
import json
import sys
import time
import traceback
from pathlib import Path
from typing import Any, Dict, List, Optional

from .engine import EngineConfig, ShortestPathEngine
from .exceptions import (
    ConfigError,
    HeapDijkstraError,
    InputError,
    UnknownVertexError,
)
from .export import export_tree_graphml, export_tree_json
from .generate import generate_graph
from .graph import WeightedDiGraph
from .io import read_graph
from .logger import LEVELS, StdLogger

EXAMPLE_CSV = """# u,v,w
A,B,1
A,C,4
B,C,1
C,D,1
E
"""

EXIT_OK = 0
EXIT_USAGE = 64
EXIT_INTERNAL = 70


def _build_graph_from_file(path: str, fmt: Optional[str], undirected: bool) -> WeightedDiGraph:
    """Build a graph from an edges file."""
    p = Path(path)
    if not p.exists():
        raise InputError(f"edges file not found: {path}")
    return read_graph(p, fmt, undirected=undirected)


def _write_export(path: str, text: str) -> None:
    try:
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(text)
    except OSError as exc:
        raise InputError(f"cannot write {path}: {exc.strerror or exc}") from exc


def _parser() -> argparse.ArgumentParser:
    examples = (
        "Examples:\n"
        "  heapdijkstra --edges graph.csv --source A\n"
        "  heapdijkstra --edges graph.csv --source A --target D\n"
        "  heapdijkstra --random --n 100 --m 500 --costs-only\n"
        "  heapdijkstra --example > graph.csv\n"
    )
    p = argparse.ArgumentParser(
        prog="heapdijkstra",
        description="Single-source shortest paths (Dijkstra) runner",
        epilog=examples,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("--verbose", action="store_true", help="Show full tracebacks")
    p.add_argument("--log-json", action="store_true", help="Emit structured log lines as JSON")
    p.add_argument(
        "--log-level",
        choices=sorted(LEVELS),
        default="warning",
        help="Log verbosity",
    )
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--edges", type=str, help="Path to edges file")
    src.add_argument("--random", action="store_true", help="Use a random graph")
    src.add_argument(
        "--example",
        action="store_true",
        help="Print a sample edges CSV to stdout and exit",
    )
    p.add_argument(
        "--format",
        choices=["csv", "jsonl", "graphml"],
        default=None,
        help="Edge file format (auto-detected from extension)",
    )
    p.add_argument("--undirected", action="store_true", help="Treat file edges as undirected")

    p.add_argument("--graph-type", choices=["random", "dag", "grid"], default="random")
    p.add_argument("--n", type=int, default=10, help="Vertices (random mode)")
    p.add_argument("--m", type=int, default=20, help="Edges (random mode)")
    p.add_argument("--seed", type=int, default=0, help="Seed controlling random graph generation")

    p.add_argument("--source", type=str, default=None, help="Source vertex (defaults to 0 in random mode)")
    p.add_argument("--target", type=str, default=None, help="Target vertex for path output")
    p.add_argument("--costs-only", action="store_true", help="Skip path reconstruction")
    p.add_argument("--capacity", type=int, default=16, help="Initial frontier heap capacity")

    p.add_argument("--export-json", type=str, default=None, help="Write shortest-path tree as JSON")
    p.add_argument(
        "--export-graphml",
        type=str,
        default=None,
        help="Write shortest-path tree as GraphML",
    )
    return p


def _vertex(label: str, random_mode: bool) -> Any:
    # Generated graphs use integer vertices, file graphs use string labels.
    if random_mode:
        try:
            return int(label)
        except ValueError as exc:
            raise InputError(f"random graphs have integer vertices, got {label!r}") from exc
    return label


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``heapdijkstra`` command-line tool."""
    p = _parser()
    args = p.parse_args(argv)

    if args.example:
        sys.stdout.write(EXAMPLE_CSV)
        return EXIT_OK

    try:
        if args.random:
            G = generate_graph(args.graph_type, args.n, args.m, args.seed)
            source_label = args.source if args.source is not None else "0"
        else:
            G = _build_graph_from_file(args.edges, args.format, args.undirected)
            if args.source is None:
                raise InputError("--source is required with --edges")
            source_label = args.source
        source = _vertex(source_label, args.random)

        track_paths = not args.costs_only
        if not track_paths and (args.target is not None or args.export_json or args.export_graphml):
            raise ConfigError("--target and tree exports need paths; drop --costs-only")
        cfg = EngineConfig(initial_capacity=args.capacity, track_paths=track_paths)

        stream = sys.stdout if args.log_json else sys.stderr
        level = "info" if args.log_json and args.log_level == "warning" else args.log_level
        logger = StdLogger(level=level, json_fmt=args.log_json, stream=stream)

        if args.verbose and not args.log_json:
            sys.stderr.write(
                f"config: n={G.number_of_vertices()} m={G.number_of_edges()} "
                f"source={source!r} capacity={args.capacity} paths={track_paths}\n"
            )

        t0 = time.perf_counter()
        engine = ShortestPathEngine(G, source, config=cfg, logger=logger)
        res = engine.run()
        wall_ms = (time.perf_counter() - t0) * 1000.0

        out: Dict[str, Any] = {
            "source": str(source),
            "costs": {str(v): c for v, c in res.costs.items()},
        }
        if track_paths:
            out["paths"] = {str(v): [str(x) for x in res.path_to(v)] for v in res.settle_order}
        if args.target is not None:
            target = _vertex(args.target, args.random)
            if target not in G.vertices():
                raise UnknownVertexError(f"target {target!r} is not a vertex of the graph")
            out["target"] = str(target)
            out["cost"] = res.costs.get(target)
            out["path"] = [str(x) for x in res.path_to(target)]
            if target not in res.costs:
                logger.warning("unreachable", source=source, target=target)

        if args.export_json:
            _write_export(args.export_json, export_tree_json(res))
        if args.export_graphml:
            _write_export(args.export_graphml, export_tree_graphml(res))

        logger.info(
            "query",
            n=G.number_of_vertices(),
            m=G.number_of_edges(),
            reached=len(res.costs),
            wall_ms=round(wall_ms, 3),
            **engine.summary(),
        )
        if not args.log_json:
            print(json.dumps(out))
        return EXIT_OK

    except (InputError, ConfigError, UnknownVertexError) as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"error: {exc}\n")
        return EXIT_USAGE
    except HeapDijkstraError as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"internal error: {exc}\n")
        return EXIT_INTERNAL
    except Exception as exc:  # pragma: no cover - unexpected
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"internal error: {exc}\n")
        return EXIT_INTERNAL


if __name__ == "__main__":
    sys.exit(main())
