"""Command-line interface for running the engine."""

from __future__ import annotations

import argparse
import json
import sys
import time
import traceback
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .distance import INF
from .engine import EngineConfig, ShortestPaths
from .exceptions import ConfigError, InputError, SptreeError
from .export import export_tree_graphml, export_tree_json
from .generate import GRAPH_TYPES, random_graph
from .graph import DirectedGraph, Weights
from .io import FORMATS, read_graph
from .logger import StdLogger

EXAMPLE_CSV = """# tail,head,weight
A,B,1
A,C,4
B,C,1
B,D,5
C,D,1
"""

EXIT_OK = 0
EXIT_USAGE = 64
EXIT_INTERNAL = 70


def _build_graph_from_file(path: str, fmt: Optional[str]) -> Tuple[DirectedGraph, Weights, Optional[str]]:
    """Build a graph from an edges file."""
    p = Path(path)
    if not p.exists():
        raise InputError(f"edges file not found: {path}")
    loaded = read_graph(p, fmt)
    return loaded.graph, loaded.weights, loaded.source


def _plain(d: Any) -> Any:
    return None if d is INF else d


def _label(v: Any) -> str:
    return str(v.name)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``sptree`` command-line tool."""
    examples = (
        "Examples:\n"
        "  sptree --edges graph.csv --source A --target D\n"
        "  sptree --random --n 100 --m 500 --graph-type grid\n"
        "  sptree --edges graph.csv --source A --export-json tree.json\n"
    )
    p = argparse.ArgumentParser(
        prog="sptree",
        description="Dijkstra shortest-path tree with a decrease-key heap",
        epilog=examples,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("--verbose", action="store_true", help="Show full tracebacks")
    p.add_argument("--log-json", action="store_true", help="Emit structured log lines")
    p.add_argument(
        "--log-level",
        choices=["debug", "info", "warning"],
        default="warning",
        help="Log verbosity (debug also traces every relaxation)",
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
        choices=FORMATS,
        default=None,
        help="Edge file format (auto-detected from extension)",
    )

    p.add_argument("--n", type=int, default=10, help="Vertices (random mode)")
    p.add_argument("--m", type=int, default=20, help="Edges (random mode)")
    p.add_argument("--seed", type=int, default=0, help="Seed controlling random graph generation")
    p.add_argument("--graph-type", choices=GRAPH_TYPES, default="erdos_renyi")
    p.add_argument(
        "--source",
        type=str,
        default=None,
        help="Start vertex name (defaults to the file's source, else the first vertex)",
    )
    p.add_argument("--target", type=str, default=None, help="Target vertex name for path output")

    p.add_argument("--arity", type=int, default=2, help="Heap arity")
    p.add_argument("--no-validate", action="store_true", help="Skip weight checks during the run")

    p.add_argument("--export-json", type=str, default=None, help="Write the tree as JSON")
    p.add_argument("--export-graphml", type=str, default=None, help="Write the tree as GraphML")
    p.add_argument("--metrics-out", type=str, default=None, help="Write run metrics to this JSON file")
    p.add_argument("--plot", type=str, default=None, help="Draw the tree into this image file")

    args = p.parse_args(argv)

    if args.example:
        sys.stdout.write(EXAMPLE_CSV)
        return EXIT_OK

    try:
        if args.random:
            graph, weights = random_graph(
                args.n, args.m, graph_type=args.graph_type, seed=args.seed
            )
            file_source: Optional[str] = "0"
        else:
            graph, weights, file_source = _build_graph_from_file(args.edges, args.format)

        source_name = args.source if args.source is not None else file_source
        if source_name is None:
            start = graph.vertices()[0]
        else:
            start = graph.vertex(source_name)
        target = graph.vertex(args.target) if args.target is not None else None

        cfg = EngineConfig(
            arity=args.arity,
            validate_weights=not args.no_validate,
            trace=args.log_level == "debug",
        )
        stream = sys.stdout if args.log_json else sys.stderr
        level = "info" if args.log_json and args.log_level == "warning" else args.log_level
        logger = StdLogger(level=level, json_fmt=args.log_json, stream=stream)

        if args.verbose and not args.log_json:
            sys.stderr.write(
                f"config: n={graph.num_vertices} m={graph.num_edges} arity={args.arity} "
                f"source={_label(start)} seed={args.seed}\n"
            )

        sp = ShortestPaths(graph, weights, start, config=cfg, logger=logger)
        t0 = time.perf_counter()
        sp.run()
        wall_ms = (time.perf_counter() - t0) * 1000.0

        out: Dict[str, Any] = {
            "source": _label(start),
            "distances": {_label(v): _plain(d) for v, d in sp.distances().items()},
        }
        if target is not None:
            path = sp.find_path(target)
            out["target"] = _label(target)
            out["reachable"] = path is not None
            if path is not None:
                out["path"] = [[_label(e.tail), _label(e.head)] for e in path]
                out["length"] = sp.length(target)

        if args.export_json:
            with open(args.export_json, "w", encoding="utf-8") as fh:
                fh.write(export_tree_json(sp))
        if args.export_graphml:
            with open(args.export_graphml, "w", encoding="utf-8") as fh:
                fh.write(export_tree_graphml(sp))
        if args.metrics_out:
            with open(args.metrics_out, "w", encoding="utf-8") as fh:
                json.dump(asdict(sp.metrics(wall_ms=wall_ms)), fh)
        if args.plot:
            import matplotlib

            matplotlib.use("Agg")
            from .visualize import draw_tree

            ax = draw_tree(sp, show_weights=True)
            ax.figure.savefig(args.plot)

        if args.log_json:
            logger.info("result", **out)
        else:
            print(json.dumps(out))
        return EXIT_OK

    except (InputError, ConfigError) as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"error: {exc}\n")
        return EXIT_USAGE
    except SptreeError as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"internal error: {exc}\n")
        return EXIT_INTERNAL
    except Exception as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"internal error: {exc}\n")
        return EXIT_INTERNAL


if __name__ == "__main__":
    sys.exit(main())
