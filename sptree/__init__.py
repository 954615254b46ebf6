"""Public package exports for :mod:`sptree`."""

from __future__ import annotations

from .array_graph import ArrayEdge, ArrayGraph, ArrayWeights
from .distance import INF, Distance, VertexAndDist, extend
from .engine import EngineConfig, EngineMetrics, ShortestPathResult, ShortestPaths, shortest_paths
from .exceptions import (
    AlgorithmError,
    ConfigError,
    EmptyQueueError,
    GraphFormatError,
    HeapFullError,
    InputError,
    InvalidDecreaseError,
    InvalidSourceError,
    MissingWeightError,
    SptreeError,
    UnreachableError,
)
from .generate import random_graph
from .graph import DirectedGraph, Edge, GraphView, Vertex
from .heap import Decreaser, MinHeap
from .io import LoadedGraph, read_graph, write_graph
from .logger import Logger, NoopLogger, StdLogger
from .reference import dijkstra_reference
from .ticker import Ticker

__version__ = "0.1.0"

__all__ = [
    "ArrayEdge",
    "ArrayGraph",
    "ArrayWeights",
    "Decreaser",
    "DirectedGraph",
    "Distance",
    "Edge",
    "EngineConfig",
    "EngineMetrics",
    "GraphView",
    "INF",
    "LoadedGraph",
    "Logger",
    "MinHeap",
    "NoopLogger",
    "ShortestPathResult",
    "ShortestPaths",
    "StdLogger",
    "Ticker",
    "Vertex",
    "VertexAndDist",
    "dijkstra_reference",
    "extend",
    "random_graph",
    "read_graph",
    "shortest_paths",
    "write_graph",
    "SptreeError",
    "InputError",
    "GraphFormatError",
    "InvalidSourceError",
    "UnreachableError",
    "ConfigError",
    "MissingWeightError",
    "AlgorithmError",
    "EmptyQueueError",
    "InvalidDecreaseError",
    "HeapFullError",
]
