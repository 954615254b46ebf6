"""Graph input/output helpers.

Vertices are named by strings in every format. A file may also carry the
start vertex (``txt`` header, ``jsonl`` ``{"source": ...}`` line); it is
returned as :attr:`LoadedGraph.source` and is ``None`` otherwise.
"""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional, Tuple

from .exceptions import GraphFormatError
from .graph import DirectedGraph, Vertex, Weights, check_weight

GRAPHML_NS = "http://graphml.graphdrawing.org/xmlns"

Triples = List[Tuple[str, str, int]]


class LoadedGraph(NamedTuple):
    """A graph read from a file together with its weights."""

    graph: DirectedGraph
    weights: Weights
    source: Optional[str]


class _Parsed(NamedTuple):
    vertices: List[str]
    edges: Triples
    source: Optional[str]


def _parse_weight(text: str, where: str) -> int:
    """Parse ``text`` as an integral, non-negative weight."""
    try:
        value: float = int(text)
    except ValueError:
        try:
            value = float(text)
        except ValueError:
            raise GraphFormatError(f"non-numeric weight {text!r} at {where}") from None
    return check_weight(value, where)


def _iter_edges(graph: DirectedGraph, weights: Weights) -> Iterable[Tuple[str, str, int]]:
    """Yield ``(tail, head, weight)`` with vertex names as strings."""
    for e in graph.edges():
        yield _name(e.tail), _name(e.head), weights[e]


def _name(v: Vertex) -> str:
    return "" if v.name is None else str(v.name)


def _finish(parsed: _Parsed, path: Path) -> LoadedGraph:
    if not parsed.edges and not parsed.vertices:
        raise GraphFormatError(f"no edges parsed from {path}")
    graph, weights = DirectedGraph.from_edges(parsed.edges, vertices=parsed.vertices)
    if parsed.source is not None and parsed.source not in {v.name for v in graph.vertices()}:
        raise GraphFormatError(f"source {parsed.source!r} is not a vertex of {path}")
    return LoadedGraph(graph, weights, parsed.source)


# ---- csv ----------------------------------------------------------------


def _read_csv(path: Path) -> _Parsed:
    """Read ``tail,head,weight`` rows; ``#`` lines and blank lines are skipped.

    Tabs are accepted as separators. Rows with fewer than three columns raise
    :class:`GraphFormatError` with the line number.
    """
    edges: Triples = []
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            row = raw.strip()
            if not row or row.startswith("#"):
                continue
            parts = [p.strip() for p in row.replace("\t", ",").split(",")]
            if len(parts) < 3:
                raise GraphFormatError(f"expected tail,head,weight at {path}:{lineno}")
            w = _parse_weight(parts[2], f"{path}:{lineno}")
            edges.append((parts[0], parts[1], w))
    return _Parsed([], edges, None)


def _write_csv(path: Path, graph: DirectedGraph, weights: Weights, source: Optional[str]) -> None:
    with path.open("w", encoding="utf-8") as fh:
        fh.write("# tail,head,weight\n")
        for u, v, w in _iter_edges(graph, weights):
            fh.write(f"{u},{v},{w}\n")


# ---- jsonl --------------------------------------------------------------


def _read_jsonl(path: Path) -> _Parsed:
    """Read one JSON object per line.

    Edge lines look like ``{"u": "a", "v": "b", "w": 3}``; a vertex line
    ``{"vertex": "c"}`` declares an isolated vertex and ``{"source": "a"}``
    names the start vertex.
    """
    vertices: List[str] = []
    edges: Triples = []
    source: Optional[str] = None
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            row = raw.strip()
            if not row:
                continue
            where = f"{path}:{lineno}"
            try:
                obj = json.loads(row)
            except json.JSONDecodeError as exc:
                raise GraphFormatError(f"invalid JSON at {where}: {exc.msg}") from exc
            if not isinstance(obj, dict):
                raise GraphFormatError(f"expected a JSON object at {where}")
            if "source" in obj:
                source = str(obj["source"])
            elif "vertex" in obj:
                vertices.append(str(obj["vertex"]))
            else:
                try:
                    u, v, w = obj["u"], obj["v"], obj["w"]
                except KeyError as exc:
                    raise GraphFormatError(f"missing key {exc.args[0]!r} at {where}") from None
                edges.append((str(u), str(v), check_weight(w, where)))
    return _Parsed(vertices, edges, source)


def _write_jsonl(path: Path, graph: DirectedGraph, weights: Weights, source: Optional[str]) -> None:
    with path.open("w", encoding="utf-8") as fh:
        if source is not None:
            fh.write(json.dumps({"source": source}) + "\n")
        for v in graph.vertices():
            if not v.out_degree():
                fh.write(json.dumps({"vertex": _name(v)}) + "\n")
        for u, v, w in _iter_edges(graph, weights):
            fh.write(json.dumps({"u": u, "v": v, "w": w}) + "\n")


# ---- txt ----------------------------------------------------------------


def _read_txt(path: Path) -> _Parsed:
    """Read the benchmark format ``n m source`` followed by ``u v w`` rows.

    Vertices ``0 .. n-1`` all exist, so isolated ones are kept. The edge count
    in the header is informational and not checked.
    """
    with path.open("r", encoding="utf-8") as fh:
        header = fh.readline().split()
        if len(header) != 3:
            raise GraphFormatError(f"expected header 'n m source' in {path}")
        try:
            n, _m, source = (int(x) for x in header)
        except ValueError:
            raise GraphFormatError(f"non-integer header in {path}") from None
        edges: Triples = []
        for lineno, raw in enumerate(fh, start=2):
            parts = raw.split()
            if not parts:
                continue
            where = f"{path}:{lineno}"
            if len(parts) != 3:
                raise GraphFormatError(f"expected 'u v w' at {where}")
            try:
                u, v = int(parts[0]), int(parts[1])
            except ValueError:
                raise GraphFormatError(f"non-integer vertex id at {where}") from None
            if not (0 <= u < n and 0 <= v < n):
                raise GraphFormatError(f"vertex id out of range at {where}")
            edges.append((str(u), str(v), _parse_weight(parts[2], where)))
    return _Parsed([str(i) for i in range(n)], edges, str(source))


def _write_txt(path: Path, graph: DirectedGraph, weights: Weights, source: Optional[str]) -> None:
    """Write the benchmark format; vertices are renumbered by position."""
    vertices = graph.vertices()
    index: Dict[Vertex, int] = {v: i for i, v in enumerate(vertices)}
    s = 0
    if source is not None:
        s = index[graph.vertex(source)]
    with path.open("w", encoding="utf-8") as fh:
        fh.write(f"{graph.num_vertices} {graph.num_edges} {s}\n")
        for e in graph.edges():
            fh.write(f"{index[e.tail]} {index[e.head]} {weights[e]}\n")


# ---- graphml ------------------------------------------------------------


def _read_graphml(path: Path) -> _Parsed:
    """Parse nodes and edges of a GraphML file.

    The weight is taken from a ``weight`` attribute or a ``<data key="w">``
    child and defaults to ``1``.
    """
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as exc:
        raise GraphFormatError(f"invalid GraphML in {path}: {exc}") from exc
    ns = f"{{{GRAPHML_NS}}}"
    vertices = [node.attrib.get("id", "") for node in root.findall(f".//{ns}node")]
    edges: Triples = []
    for i, edge in enumerate(root.findall(f".//{ns}edge")):
        u = edge.attrib.get("source")
        v = edge.attrib.get("target")
        if u is None or v is None:
            raise GraphFormatError(f"edge #{i} without source/target in {path}")
        w_attr = edge.attrib.get("weight")
        if w_attr is None:
            data = edge.find(f"{ns}data[@key='w']")
            w_attr = data.text if (data is not None and data.text is not None) else "1"
        edges.append((u, v, _parse_weight(w_attr.strip(), f"{path} edge #{i}")))
    return _Parsed(vertices, edges, None)


def _write_graphml(path: Path, graph: DirectedGraph, weights: Weights, source: Optional[str]) -> None:
    ET.register_namespace("", GRAPHML_NS)
    ns = f"{{{GRAPHML_NS}}}"
    root = ET.Element(f"{ns}graphml")
    g = ET.SubElement(root, f"{ns}graph", {"id": "G", "edgedefault": "directed"})
    for v in graph.vertices():
        ET.SubElement(g, f"{ns}node", {"id": _name(v)})
    for u, v, w in _iter_edges(graph, weights):
        ET.SubElement(g, f"{ns}edge", {"source": u, "target": v, "weight": str(w)})
    ET.indent(root)
    ET.ElementTree(root).write(path, encoding="utf-8", xml_declaration=True)


_FMT_READERS: Dict[str, Callable[[Path], _Parsed]] = {
    "csv": _read_csv,
    "jsonl": _read_jsonl,
    "txt": _read_txt,
    "graphml": _read_graphml,
}

_FMT_WRITERS: Dict[str, Callable[[Path, DirectedGraph, Weights, Optional[str]], None]] = {
    "csv": _write_csv,
    "jsonl": _write_jsonl,
    "txt": _write_txt,
    "graphml": _write_graphml,
}

FORMATS = tuple(_FMT_READERS)


def _detect_format(path: Path) -> Optional[str]:
    """Return the format implied by the extension of ``path``, or ``None``."""
    ext = path.suffix.lower()
    if ext in {".csv", ".tsv"}:
        return "csv"
    if ext in {".jsonl", ".json"}:
        return "jsonl"
    if ext == ".txt":
        return "txt"
    if ext == ".graphml":
        return "graphml"
    return None


def read_graph(path: str | Path, fmt: Optional[str] = None) -> LoadedGraph:
    """Read a weighted graph from a file.

    Args:
        path: The path to the graph file.
        fmt: One of :data:`FORMATS`; auto-detected from the extension if
            ``None``.

    Returns:
        The graph, its weights and the start vertex named by the file, if any.

    Raises:
        GraphFormatError: If the format is unknown, the file holds no graph,
            a row or weight is malformed, or the file is not UTF-8 text.
    """
    p = Path(path)
    fmt = fmt or _detect_format(p)
    if fmt is None or fmt not in _FMT_READERS:
        raise GraphFormatError(f"unknown graph format for {p}")
    try:
        parsed = _FMT_READERS[fmt](p)
    except UnicodeDecodeError as exc:
        raise GraphFormatError(f"{p} is not UTF-8 text: {exc.reason}") from exc
    return _finish(parsed, p)


def write_graph(
    graph: DirectedGraph,
    weights: Weights,
    path: str | Path,
    fmt: Optional[str] = None,
    source: Optional[str] = None,
) -> None:
    """Write a weighted graph to a file.

    Vertex names are written with ``str``, so they should be unique for the
    file to read back into the same graph.

    Args:
        graph: The graph to write.
        weights: Weight of every edge.
        path: Destination file.
        fmt: Output format; auto-detected from the extension if ``None``.
        source: Optional start vertex name, stored by ``txt`` and ``jsonl``.

    Raises:
        GraphFormatError: If the format is unknown or unsupported.
    """
    p = Path(path)
    fmt = fmt or _detect_format(p)
    if fmt is None or fmt not in _FMT_WRITERS:
        raise GraphFormatError(f"unknown graph format for {p}")
    _FMT_WRITERS[fmt](p, graph, weights, source)


__all__ = ["FORMATS", "LoadedGraph", "read_graph", "write_graph"]
