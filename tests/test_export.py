"""
Tests for tree export, networkx conversion and drawing.
"""

import json
import xml.etree.ElementTree as ET

import matplotlib

matplotlib.use("Agg")

import networkx as nx  # noqa: E402
import pytest  # noqa: E402

from sptree import ConfigError, DirectedGraph, GraphFormatError, shortest_paths  # noqa: E402
from sptree.convert import from_networkx, tree_to_networkx  # noqa: E402
from sptree.export import export_tree_graphml, export_tree_json, tree_edges  # noqa: E402
from sptree.visualize import draw_tree  # noqa: E402


def test_tree_edges_one_per_reachable_vertex(diamond_with_isolated):
    g, w = diamond_with_isolated
    sp = shortest_paths(g, w, g.vertex("A"))
    pairs = [(e.tail.name, e.head.name, wt) for e, wt in tree_edges(sp)]
    assert pairs == [("A", "B", 1), ("B", "C", 1), ("C", "D", 1)]


def test_export_json(diamond_with_isolated):
    g, w = diamond_with_isolated
    data = json.loads(export_tree_json(shortest_paths(g, w, g.vertex("A"))))
    assert data["source"] == "A"
    assert {n["id"]: n["distance"] for n in data["nodes"]} == {
        "A": 0,
        "B": 1,
        "C": 2,
        "D": 3,
        "E": None,
    }
    assert {"source": "C", "target": "D", "weight": 1} in data["edges"]


def test_export_graphml_is_valid_xml(diamond):
    g, w = diamond
    text = export_tree_graphml(shortest_paths(g, w, g.vertex("A")))
    root = ET.fromstring(text.encode("utf-8"))
    ns = "{http://graphml.graphdrawing.org/xmlns}"
    assert len(root.findall(f".//{ns}node")) == 4
    assert len(root.findall(f".//{ns}edge")) == 3


def test_from_networkx_directed():
    G = nx.DiGraph()
    G.add_weighted_edges_from([("a", "b", 2), ("b", "c", 2), ("a", "c", 5)])
    G.add_node("lonely")
    g, w, vmap = from_networkx(G)
    sp = shortest_paths(g, w, vmap["a"])
    assert sp.distance(vmap["c"]) == 4
    assert not sp.is_reachable(vmap["lonely"])


def test_from_networkx_undirected_adds_both_directions():
    G = nx.Graph()
    G.add_edge(1, 2, weight=3)
    g, w, vmap = from_networkx(G)
    assert g.num_edges == 2
    sp = shortest_paths(g, w, vmap[2])
    assert sp.distance(vmap[1]) == 3


def test_from_networkx_missing_weight():
    G = nx.DiGraph()
    G.add_edge("a", "b")
    with pytest.raises(GraphFormatError):
        from_networkx(G)
    g, w, _ = from_networkx(G, default=1)
    assert list(w.values()) == [1]


def test_tree_to_networkx_matches_networkx_dijkstra():
    G = nx.gnm_random_graph(40, 160, seed=7, directed=True)
    for u, v in G.edges:
        G[u][v]["weight"] = (u * 7 + v * 3) % 11
    g, w, vmap = from_networkx(G)
    T = tree_to_networkx(shortest_paths(g, w, vmap[0]))

    expected = nx.single_source_dijkstra_path_length(G, 0)
    for node, d in T.nodes(data="distance"):
        assert d == expected.get(node)
    assert T.number_of_edges() == len(expected) - 1
    assert nx.is_arborescence(T.subgraph(expected))


def test_draw_tree_returns_axes(diamond_with_isolated):
    g, w = diamond_with_isolated
    ax = draw_tree(shortest_paths(g, w, g.vertex("A")), show_weights=True, layout="circular")
    assert ax.get_title() == "Shortest-path tree from A"
    matplotlib.pyplot.close(ax.figure)


def test_draw_tree_unknown_layout(diamond):
    g, w = diamond
    with pytest.raises(ConfigError):
        draw_tree(shortest_paths(g, w, g.vertex("A")), layout="nope")


def test_exported_weights_are_the_engine_weights():
    g, w = DirectedGraph.from_edges([("a", "b", 1), ("b", "c", 1)])
    floats = {e: float(x) + 1.0 for e, x in w.items()}
    sp = shortest_paths(g, floats, g.vertex("a"))
    assert sp.length(g.vertex("c")) == 4

    pairs = tree_edges(sp)
    assert [wt for _, wt in pairs] == [2, 2]
    assert all(type(wt) is int for _, wt in pairs)
    data = json.loads(export_tree_json(sp))
    assert all(type(e["weight"]) is int for e in data["edges"])
    assert 'weight="2.0"' not in export_tree_graphml(sp)
