import json

import pytest

from heapdijkstra.cli import EXAMPLE_CSV, EXIT_OK, EXIT_USAGE, main


@pytest.fixture
def example_file(tmp_path):
    p = tmp_path / "graph.csv"
    p.write_text(EXAMPLE_CSV, encoding="utf-8")
    return p


def _stdout_json(capsys):
    return json.loads(capsys.readouterr().out)


def test_example_prints_csv(capsys):
    assert main(["--example"]) == EXIT_OK
    assert capsys.readouterr().out == EXAMPLE_CSV


def test_costs_and_paths_from_file(example_file, capsys):
    assert main(["--edges", str(example_file), "--source", "A"]) == EXIT_OK
    out = _stdout_json(capsys)
    assert out["source"] == "A"
    assert out["costs"] == {"A": 0, "B": 1, "C": 2, "D": 3}
    assert out["paths"]["D"] == ["A", "B", "C", "D"]
    assert out["paths"]["A"] == []
    assert "E" not in out["costs"]


def test_target_output(example_file, capsys):
    assert main(["--edges", str(example_file), "--source", "A", "--target", "D"]) == EXIT_OK
    out = _stdout_json(capsys)
    assert out["cost"] == 3
    assert out["path"] == ["A", "B", "C", "D"]


def test_unreachable_target(example_file, capsys):
    assert main(["--edges", str(example_file), "--source", "A", "--target", "E"]) == EXIT_OK
    captured = capsys.readouterr()
    out = json.loads(captured.out)
    assert out["cost"] is None
    assert out["path"] == []
    assert "warning unreachable source=A target=E" in captured.err


def test_costs_only(example_file, capsys):
    assert main(["--edges", str(example_file), "--source", "B", "--costs-only"]) == EXIT_OK
    out = _stdout_json(capsys)
    assert out["costs"] == {"B": 0, "C": 1, "D": 2}
    assert "paths" not in out


def test_undirected_flag(example_file, capsys):
    assert main(["--edges", str(example_file), "--source", "D", "--undirected"]) == EXIT_OK
    assert _stdout_json(capsys)["costs"]["A"] == 3


@pytest.mark.parametrize(
    "extra",
    [
        ["--source", "Z"],
        [],
        ["--source", "A", "--target", "Z"],
        ["--source", "A", "--costs-only", "--target", "D"],
        ["--source", "A", "--capacity", "0"],
    ],
)
def test_usage_errors(example_file, capsys, extra):
    assert main(["--edges", str(example_file), *extra]) == EXIT_USAGE
    assert capsys.readouterr().err.startswith("error:")


def test_missing_file(tmp_path, capsys):
    assert main(["--edges", str(tmp_path / "nope.csv"), "--source", "A"]) == EXIT_USAGE
    assert "not found" in capsys.readouterr().err


def test_random_graph(capsys):
    assert main(["--random", "--n", "12", "--m", "30", "--seed", "4", "--costs-only"]) == EXIT_OK
    out = _stdout_json(capsys)
    assert out["source"] == "0"
    assert out["costs"]["0"] == 0


def test_random_graph_rejects_label_source(capsys):
    assert main(["--random", "--source", "A"]) == EXIT_USAGE


def test_exports(example_file, tmp_path, capsys):
    tree_json = tmp_path / "tree.json"
    tree_xml = tmp_path / "tree.graphml"
    args = [
        "--edges", str(example_file), "--source", "A",
        "--export-json", str(tree_json), "--export-graphml", str(tree_xml),
    ]
    assert main(args) == EXIT_OK
    assert len(json.loads(tree_json.read_text(encoding="utf-8"))["edges"]) == 3
    assert "<graphml" in tree_xml.read_text(encoding="utf-8")


def test_log_json_goes_to_stdout(example_file, capsys):
    assert main(["--edges", str(example_file), "--source", "A", "--log-json"]) == EXIT_OK
    records = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert [r["event"] for r in records] == ["run", "query"]
    assert records[1]["reached"] == 4


def test_non_utf8_file_is_a_usage_error(tmp_path, capsys):
    p = tmp_path / "bad.csv"
    p.write_bytes(b"\xff\xfeA,B,1\n")
    assert main(["--edges", str(p), "--source", "A"]) == EXIT_USAGE
    assert "not UTF-8" in capsys.readouterr().err


def test_unwritable_export_is_a_usage_error(example_file, tmp_path, capsys):
    args = ["--edges", str(example_file), "--source", "A", "--export-json", str(tmp_path)]
    assert main(args) == EXIT_USAGE
    assert "cannot write" in capsys.readouterr().err
