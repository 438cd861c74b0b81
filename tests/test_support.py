import io
import json

import pytest

from heapdijkstra import bench
from heapdijkstra.deprecation import warn_once
from heapdijkstra.exceptions import ConfigError
from heapdijkstra.generate import dag_graph, generate_graph, grid_graph, random_graph
from heapdijkstra.logger import StdLogger
from heapdijkstra.path import reconstruct_path
from heapdijkstra.reference import brute_force_costs


# -----------------------------
# Generators
# -----------------------------

def test_random_graph_is_seeded():
    a = random_graph(30, 90, seed=11)
    b = random_graph(30, 90, seed=11)
    assert a.edges() == b.edges()
    assert a.number_of_edges() == 90
    assert a.vertices() == set(range(30))
    assert random_graph(30, 90, seed=12).edges() != a.edges()


def test_random_graph_caps_edges_and_skips_loops():
    g = random_graph(4, 1000, seed=0)
    assert g.number_of_edges() == 12
    assert all(u != v for u, v, _ in g.edges())


def test_backbone_reaches_everything():
    g = random_graph(25, 0, seed=1, backbone=True)
    assert g.number_of_edges() == 24
    assert len(brute_force_costs(g, 0)) == 25


def test_small_int_weights_stay_in_band():
    g = random_graph(20, 100, seed=2, w_min=5, w_max=1000, weight_dist="small_int")
    assert all(5 <= w <= 15 for _, _, w in g.edges())


def test_dag_edges_go_forward():
    g = dag_graph(15, 40, seed=3)
    assert g.number_of_edges() == 40
    assert all(u < v for u, v, _ in g.edges())


def test_grid_shape():
    g = grid_graph(3, 4, seed=0)
    assert g.number_of_vertices() == 12
    assert g.number_of_edges() == 2 * (3 * 3 + 2 * 4)
    assert sorted(v for v, _ in g.successors_of(5)) == [1, 4, 6, 9]


def test_generate_graph_dispatch():
    assert generate_graph("grid", 10, 0).number_of_vertices() == 12
    assert generate_graph("dag", 10, 5).number_of_edges() == 5
    with pytest.raises(ConfigError):
        generate_graph("hypercube", 10, 5)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"w_min": -1},
        {"w_min": 5, "w_max": 4},
        {"weight_dist": "zipf"},
    ],
)
def test_generator_validation(kwargs):
    with pytest.raises(ConfigError):
        random_graph(5, 5, **kwargs)


# -----------------------------
# Benchmark harness
# -----------------------------

@pytest.mark.parametrize("graph_type", ["random", "dag", "grid"])
def test_bench_run_once_agrees_with_reference(graph_type):
    res = bench.run_once(40, 120, seed=5, graph_type=graph_type)
    assert res.max_abs_err == 0.0
    assert res.reached >= 1
    assert res.counters["pushes"] == res.counters["pops"]


def test_bench_main_writes_csv(tmp_path, capsys):
    out = tmp_path / "bench.csv"
    assert bench.main(["--sizes", "10,20", "--trials", "2", "--out-csv", str(out)]) == 0
    lines = out.read_text().splitlines()
    assert lines[0].startswith("n,m,graph_type")
    assert len(lines) == 3
    assert "eng_med" in capsys.readouterr().out


# -----------------------------
# Path reconstruction
# -----------------------------

def test_reconstruct_path():
    preds = {"s": None, "a": "s", "b": "a"}
    assert reconstruct_path(preds, "s", "b") == ["s", "a", "b"]
    assert reconstruct_path(preds, "s", "s") == ["s"]
    assert reconstruct_path(preds, "s", "zzz") == []


def test_reconstruct_path_through_none_vertex():
    preds = {"s": None, None: "s", "t": None}
    assert reconstruct_path(preds, "s", "t") == ["s", None, "t"]


def test_reconstruct_path_stops_on_cycles():
    assert reconstruct_path({"a": "b", "b": "a"}, "s", "a") == []


# -----------------------------
# Logger / deprecation helpers
# -----------------------------

def test_std_logger_plain_text_respects_level():
    buf = io.StringIO()
    log = StdLogger(level="info", stream=buf)
    log.debug("hidden", x=1)
    log.info("shown", x=1, y="z")
    assert buf.getvalue() == "info shown x=1 y=z\n"
    assert not log.enabled("debug")
    log.warning("bare")
    assert buf.getvalue().endswith("warning bare\n")


def test_std_logger_json():
    buf = io.StringIO()
    StdLogger(level="debug", json_fmt=True, stream=buf).debug("tick", vertex=(1, 2))
    assert json.loads(buf.getvalue()) == {"level": "debug", "event": "tick", "vertex": [1, 2]}


def test_std_logger_rejects_unknown_level():
    with pytest.raises(ValueError):
        StdLogger(level="loud")


def test_warn_once_only_warns_once(fresh_deprecations, recwarn):
    warn_once("old thing", since="0.1", remove_in="0.3")
    warn_once("old thing", since="0.1", remove_in="0.3")
    deprecations = [w for w in recwarn if issubclass(w.category, DeprecationWarning)]
    assert len(deprecations) == 1
    assert "removed in 0.3" in str(deprecations[0].message)
    assert "since 0.1" in str(deprecations[0].message)
