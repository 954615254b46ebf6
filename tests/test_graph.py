"""
Unit tests for DirectedGraph, ArrayGraph and the distance helpers.
"""

import numpy as np
import pytest

from sptree import (
    INF,
    ArrayGraph,
    DirectedGraph,
    GraphFormatError,
    InputError,
    MissingWeightError,
    extend,
    shortest_paths,
)
from sptree.distance import is_finite
from sptree.graph import check_weight


def test_vertices_compare_by_identity():
    g = DirectedGraph()
    a1 = g.add_vertex("a")
    a2 = g.add_vertex("a")
    assert a1 != a2
    assert g.vertex("a") is a1
    assert g.num_vertices == 2


def test_add_edge_records_outgoing_edges_in_order():
    g = DirectedGraph()
    a, b, c = (g.add_vertex(x) for x in "abc")
    e1 = g.add_edge(a, b)
    e2 = g.add_edge(a, c)
    assert g.edges_from(a) == [e1, e2]
    assert (e1.tail, e1.head) == (a, b)
    assert g.num_edges == 2
    assert list(g.edges()) == [e1, e2]


def test_add_edge_rejects_foreign_vertices():
    g = DirectedGraph()
    a = g.add_vertex("a")
    other = DirectedGraph().add_vertex("x")
    with pytest.raises(InputError):
        g.add_edge(a, other)


def test_unknown_vertex_name():
    g, _ = DirectedGraph.from_edges([("a", "b", 1)])
    with pytest.raises(InputError):
        g.vertex("zz")


def test_from_edges_keeps_isolated_vertices():
    g, w = DirectedGraph.from_edges([("a", "b", 3)], vertices=["z"])
    assert [v.name for v in g.vertices()] == ["z", "a", "b"]
    assert list(w.values()) == [3]


@pytest.mark.parametrize("bad", [-1, 1.5, "3", None, True, float("inf")])
def test_from_edges_rejects_bad_weights(bad):
    with pytest.raises(GraphFormatError):
        DirectedGraph.from_edges([("a", "b", bad)])


def test_check_weight_accepts_integral_numbers():
    assert check_weight(2.0, "e") == 2
    assert check_weight(np.int64(7), "e") == 7
    assert isinstance(check_weight(np.int64(7), "e"), int)


def test_extend_saturates_at_infinity():
    assert extend(INF, 5) is INF
    assert extend(3, 4) == 7
    assert 10**30 < INF
    assert not INF < 10**30
    assert INF == INF and INF != 0
    assert is_finite(0) and not is_finite(INF)


def test_array_graph_csr_layout():
    ag = ArrayGraph.from_edges(4, [(2, 3, 1), (0, 1, 4), (0, 2, 1), (1, 3, 1)])
    assert ag.m == 4
    assert ag.indptr.tolist() == [0, 2, 3, 4, 4]
    assert [e.head for e in ag.edges_from(0)] == [1, 2]
    assert ag.out_degree(3) == 0
    assert [ag.weights[e] for e in ag.edges_from(0)] == [4, 1]


def test_array_graph_runs_through_engine():
    ag = ArrayGraph(
        5,
        tails=np.array([0, 0, 1, 1, 2]),
        heads=np.array([1, 2, 2, 3, 3]),
        weights=np.array([1, 4, 1, 5, 1]),
    )
    sp = shortest_paths(ag, ag.weights, 0)
    assert [sp.distance(v) for v in range(5)] == [0, 1, 2, 3, INF]
    assert [(e.tail, e.head) for e in sp.path(3)] == [(0, 1), (1, 2), (2, 3)]
    assert sp.length(3) == 3


def test_array_graph_matches_directed_graph_copy():
    edges = [(0, 1, 2), (1, 2, 2), (0, 2, 5), (2, 0, 1), (3, 1, 0)]
    ag = ArrayGraph.from_edges(4, edges)
    g, w = ag.to_directed_graph()
    sp_a = shortest_paths(ag, ag.weights, 0)
    sp_g = shortest_paths(g, w, g.vertex(0))
    for i in range(4):
        assert sp_a.distance(i) == sp_g.distance(g.vertex(i))


def test_array_graph_validation():
    with pytest.raises(InputError):
        ArrayGraph.from_edges(2, [(0, 2, 1)])
    with pytest.raises(GraphFormatError):
        ArrayGraph.from_edges(2, [(0, 1, -3)])
    with pytest.raises(GraphFormatError):
        ArrayGraph.from_edges(2, [(0, 1, 0.5)])
    with pytest.raises(InputError):
        ArrayGraph(0, [], [], [])


@pytest.mark.parametrize("bad", [float("inf"), float("nan"), 1e19, 2.0**63])
def test_array_graph_rejects_weights_outside_int64(bad):
    with pytest.raises(GraphFormatError):
        ArrayGraph(2, [0], [1], [bad])


def test_array_graph_rejects_large_unsigned_weights():
    with pytest.raises(GraphFormatError):
        ArrayGraph(2, [0], [1], np.array([2**63], dtype=np.uint64))
    ag = ArrayGraph(2, [0], [1], np.array([2**63 - 1], dtype=np.uint64))
    assert ag.weights[ag.edges_from(0)[0]] == 2**63 - 1


def test_array_weights_unknown_edge_is_missing():
    ag = ArrayGraph.from_edges(2, [(0, 1, 1)])
    with pytest.raises(KeyError):
        ag.weights[("not", "an", "edge")]
    other = ArrayGraph.from_edges(3, [(0, 1, 1), (0, 2, 1), (1, 2, 1)])
    # edges of a bigger graph index past this graph's arrays
    sp_weights = ag.weights
    with pytest.raises(KeyError):
        sp_weights[other.edges_from(1)[0]]


def test_engine_reports_missing_array_weight():
    ag = ArrayGraph.from_edges(2, [(0, 1, 1)])
    with pytest.raises(MissingWeightError):
        shortest_paths(ag, {}, 0)
