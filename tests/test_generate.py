"""
Tests for the random graph generator and the benchmark driver.
"""

import csv

import pytest

from sptree import INF, ConfigError, random_graph, shortest_paths
from sptree.bench import main as bench_main
from sptree.bench import run_once


def _triples(g, w):
    return [(e.tail.name, e.head.name, w[e]) for e in g.edges()]


def test_same_seed_same_graph():
    assert _triples(*random_graph(50, 200, seed=4)) == _triples(*random_graph(50, 200, seed=4))
    assert _triples(*random_graph(50, 200, seed=4)) != _triples(*random_graph(50, 200, seed=5))


@pytest.mark.parametrize("graph_type", ["erdos_renyi", "dag"])
def test_backbone_makes_everything_reachable(graph_type):
    g, w = random_graph(40, 60, graph_type=graph_type, seed=1)
    sp = shortest_paths(g, w, g.vertex("0"))
    assert all(sp.distance(v) is not INF for v in g.vertices())


def test_edge_count_and_weight_range():
    g, w = random_graph(30, 100, w_min=2, w_max=6, seed=2)
    assert g.num_vertices == 30
    assert g.num_edges == 100
    assert all(2 <= x <= 6 for x in w.values())
    assert all(e.tail is not e.head for e in g.edges())


def test_dag_edges_point_forward():
    g, _ = random_graph(25, 80, graph_type="dag", seed=3)
    assert all(int(e.tail.name) < int(e.head.name) for e in g.edges())


def test_grid_is_strongly_connected():
    g, w = random_graph(12, graph_type="grid", seed=0)
    # 3x4 grid: 17 undirected neighbour pairs
    assert g.num_edges == 34
    for name in ("0", "11"):
        sp = shortest_paths(g, w, g.vertex(name))
        assert all(sp.is_reachable(v) for v in g.vertices())


def test_edge_count_is_capped():
    g, _ = random_graph(4, 100, seed=0)
    assert g.num_edges == 12


@pytest.mark.parametrize(
    "kwargs",
    [
        {"n": 0},
        {"n": 5, "w_min": -1},
        {"n": 5, "w_min": 3, "w_max": 2},
        {"n": 5, "m": -1},
        {"n": 5, "graph_type": "torus"},
    ],
)
def test_bad_parameters(kwargs):
    with pytest.raises(ConfigError):
        random_graph(**kwargs)


@pytest.mark.parametrize("arity", [2, 4])
def test_bench_run_once_agrees_with_reference(arity):
    res = run_once(100, 400, arity=arity, seed=9)
    assert res.mismatches == 0
    assert res.metrics.arity == arity
    assert res.metrics.counters["extractions"] == 100


def test_bench_main_writes_csv(tmp_path, capsys):
    out = tmp_path / "bench.csv"
    rc = bench_main(
        ["--trials", "2", "--sizes", "20,60", "--arity", "2", "3", "--out-csv", str(out)]
    )
    assert rc == 0
    with out.open() as fh:
        rows = list(csv.DictReader(fh))
    assert len(rows) == 4
    assert {r["arity"] for r in rows} == {"2", "3"}
    assert all(r["mismatches"] == "0" for r in rows)
    assert "eng_med" in capsys.readouterr().out


def test_bench_rejects_bad_size():
    with pytest.raises(SystemExit):
        bench_main(["--sizes", "20x60"])
