import json

import pytest

from roadrouter.cli import build_graph, main, process_queries, run

GRAPH = {
    "meta": {"nodes": 3},
    "nodes": [
        {"id": 0, "lat": 1.0, "lon": 2.0, "pois": ["cafe"]},
        {"id": 1, "lat": 1.5, "lon": 2.5, "pois": []},
        {"id": 2, "lat": 2.0, "lon": 3.0, "pois": []},
    ],
    "edges": [
        {"id": 10, "u": 0, "v": 1, "length": 4.0, "average_time": 2.0,
         "speed_profile": [], "oneway": False, "road_type": "primary"},
        {"id": 11, "u": 1, "v": 2, "length": 3.0, "average_time": 1.0,
         "speed_profile": [], "oneway": False, "road_type": "primary"},
        {"id": 12, "u": 0, "v": 7, "length": 1.0, "average_time": 1.0,
         "speed_profile": [], "oneway": True, "road_type": "primary"},
    ],
}

QUERIES = {
    "meta": {"id": "batch", "scale": 1e16},
    "events": [{"type": "shortest_path"}, {"type": "shortest_path"}],
}


def test_build_graph_routes():
    graph = build_graph(GRAPH)
    distance, path = graph.shortest_distance_path(0, 2)
    assert distance == 7.0
    assert path == [0, 1, 2]


def test_build_graph_keeps_node_data():
    graph = build_graph(GRAPH)
    assert graph.node(0).pois == ["cafe"]


def test_build_graph_skips_out_of_range_edge():
    graph = build_graph(GRAPH)
    with pytest.raises(KeyError):
        graph.edge(12)


def test_build_graph_requires_meta():
    with pytest.raises(KeyError):
        build_graph({"nodes": []})


def test_process_queries_one_result_each():
    graph = build_graph(GRAPH)
    results = process_queries(graph, QUERIES["events"])
    assert len(results) == len(QUERIES["events"])
    assert all(r["processing_time"] >= 0 for r in results)


def _write_inputs(tmp_path):
    graph_path = tmp_path / "graph.json"
    queries_path = tmp_path / "queries.json"
    graph_path.write_text(json.dumps(GRAPH))
    queries_path.write_text(json.dumps(QUERIES))
    return graph_path, queries_path


def test_run_writes_meta_and_results(tmp_path):
    graph_path, queries_path = _write_inputs(tmp_path)
    out = tmp_path / "out.json"
    document = run(graph_path, queries_path, out)
    written = json.loads(out.read_text())
    assert written["meta"] == QUERIES["meta"]
    assert len(written["results"]) == 2
    assert written == json.loads(json.dumps(document))


def test_run_output_is_indented(tmp_path):
    graph_path, queries_path = _write_inputs(tmp_path)
    out = tmp_path / "out.json"
    run(graph_path, queries_path, out)
    text = out.read_text()
    assert text.startswith('{\n    "meta": {\n        "id": "batch"')
    assert text.endswith("}\n")
    assert "1e+16" in text


def test_run_missing_events(tmp_path):
    graph_path, _ = _write_inputs(tmp_path)
    queries_path = tmp_path / "q.json"
    queries_path.write_text("{}")
    out = tmp_path / "out.json"
    document = run(graph_path, queries_path, out)
    assert document == {"meta": None, "results": []}
    assert json.loads(out.read_text()) == {"meta": None, "results": []}


def test_main_success(tmp_path):
    graph_path, queries_path = _write_inputs(tmp_path)
    out = tmp_path / "out.json"
    assert main([str(graph_path), str(queries_path), str(out)]) == 0
    assert out.exists()


def test_main_wrong_argument_count(capsys):
    assert main(["only-one"]) == 1
    assert "Usage" in capsys.readouterr().err


def test_main_missing_graph(tmp_path, capsys):
    missing = tmp_path / "nope.json"
    assert main([str(missing), str(missing), str(tmp_path / "out.json")]) == 1
    assert "Failed to open" in capsys.readouterr().err


def test_main_unwritable_output(tmp_path, capsys):
    graph_path, queries_path = _write_inputs(tmp_path)
    out = tmp_path / "missing_dir" / "out.json"
    assert main([str(graph_path), str(queries_path), str(out)]) == 1
    assert "for writing" in capsys.readouterr().err