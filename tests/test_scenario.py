"""
Tests for scenario loading, graph construction and the CLI runner.
"""

from pathlib import Path
import csv

import pytest

from dijkstra_engine import PriorityPathEngine
from fifo_relaxation_engine import FifoRelaxationEngine
from navigation_graph import PathSearchStrategy
from navigation_runner import DEFAULT_SCENARIO, main
from scenario import (
    build_graph,
    load_scenario,
    parse_scenario,
    run_queries,
    write_results_csv,
)


DEMO_PATH = Path(__file__).resolve().parent.parent / "scenarios" / "demo.yml"


def test_demo_scenario_loads():
    scenario = load_scenario(DEMO_PATH)

    assert scenario.name == "demo"
    assert scenario.engine is PathSearchStrategy.FIFO
    assert [loc.id for loc in scenario.locations] == ["A", "B", "C", "D"]
    assert scenario.locations[1].name == "Times Square"
    assert scenario.locations[1].coordinates == (40.7580, -73.9855)
    assert len(scenario.connections) == 6
    assert scenario.connections[0].source == "A"
    assert scenario.connections[0].target == "B"
    assert scenario.connections[0].distance == 1.5
    assert [(r.start, r.end) for r in scenario.routes] == [("A", "D")]
    assert [(q.center, q.radius) for q in scenario.nearby] == [("B", 2.0)]


def test_default_scenario_path_points_at_demo():
    assert DEFAULT_SCENARIO.resolve() == DEMO_PATH


def test_demo_queries():
    scenario = load_scenario(DEMO_PATH)
    graph = build_graph(scenario)

    route, nearby = run_queries(scenario, graph)

    assert route["query"] == "route"
    assert route["found"] is True
    assert route["locations"] == ["A", "B", "C", "D"]
    assert route["distance"] == pytest.approx(5.5)

    assert nearby["query"] == "nearby"
    assert nearby["locations"] == ["A", "C", "D"]


def test_engine_override():
    scenario = load_scenario(DEMO_PATH)

    assert isinstance(build_graph(scenario).engine, FifoRelaxationEngine)
    assert isinstance(build_graph(scenario, engine="priority").engine, PriorityPathEngine)


def test_bidirectional_connections_add_reverse_edge():
    scenario = parse_scenario(
        {
            "connections": [
                {"from": "A", "to": "B", "distance": 2.0, "bidirectional": True},
                {"from": "B", "to": "C", "distance": 1.0},
            ]
        }
    )
    graph = build_graph(scenario)

    assert graph.shortest_path("B", "A") == (["B", "A"], 2.0)
    assert graph.shortest_path("C", "B") is None


def test_missing_sections_default_to_empty():
    scenario = parse_scenario({}, default_name="empty")

    assert scenario.name == "empty"
    assert scenario.engine is PathSearchStrategy.FIFO
    assert list(scenario.locations) == []
    assert run_queries(scenario, build_graph(scenario)) == []


def test_load_scenario_uses_file_stem_as_default_name(tmp_path):
    path = tmp_path / "harbour.yml"
    path.write_text("locations:\n  - {id: X, name: Pier, coordinates: [1, 2]}\n")

    scenario = load_scenario(path)

    assert scenario.name == "harbour"
    assert scenario.locations[0].coordinates == (1.0, 2.0)


def test_unreachable_route_is_reported_not_raised():
    scenario = parse_scenario(
        {
            "locations": [{"id": "A", "name": "A", "coordinates": [0, 0]}],
            "routes": [{"start": "A", "end": "Z"}],
            "nearby": [{"center": "Z", "radius": 1.0}],
        }
    )
    route, nearby = run_queries(scenario, build_graph(scenario))

    assert route["found"] is False
    assert route["locations"] == []
    assert route["distance"] is None
    assert nearby["found"] is False


@pytest.mark.parametrize(
    "data, message",
    [
        ({"locations": [{"id": "A", "name": "A"}]}, "missing required key 'coordinates'"),
        ({"locations": [{"id": "A", "name": "A", "coordinates": [1]}]}, "pair of numbers"),
        (
            {"locations": [{"id": "A", "name": "A", "coordinates": [1, "north"]}]},
            r"locations\[0\]\.coordinates\[1\] must be a number",
        ),
        ({"connections": [{"from": "A", "distance": 1.0}]}, "missing required key 'to'"),
        ({"connections": ["A->B"]}, "must be a mapping"),
        (
            {"connections": [{"from": "A", "to": "B", "distance": 1.0, "bidirectional": "false"}]},
            r"connections\[0\]\.bidirectional must be a boolean, got 'false'",
        ),
        (
            {"connections": [{"from": "A", "to": "B", "distance": 1.0, "bidirectional": 1}]},
            r"connections\[0\]\.bidirectional must be a boolean",
        ),
        (
            {
                "connections": [
                    {"from": "A", "to": "B", "distance": 1.0},
                    {"from": "B", "to": "C", "distance": 1.0},
                    {"from": "C", "to": "D", "distance": "far"},
                ]
            },
            r"connections\[2\]\.distance must be a number, got 'far'",
        ),
        ({"routes": [{"start": "A"}]}, "missing required key 'end'"),
        ({"nearby": [{"center": "A"}]}, "missing required key 'radius'"),
        ({"nearby": [{"center": "A", "radius": "wide"}]}, r"nearby\[0\]\.radius must be a number"),
        ({"engine": "astar"}, "Unknown engine"),
    ],
)
def test_malformed_scenarios_raise_value_error(data, message):
    with pytest.raises(ValueError, match=message):
        parse_scenario(data)


def test_quoted_false_does_not_add_reverse_edge():
    """A string flag is rejected rather than read as truthy."""
    with pytest.raises(ValueError):
        parse_scenario(
            {"connections": [{"from": "A", "to": "B", "distance": 1.0, "bidirectional": "false"}]}
        )

    scenario = parse_scenario(
        {"connections": [{"from": "A", "to": "B", "distance": 1.0, "bidirectional": False}]}
    )
    assert build_graph(scenario).shortest_path("B", "A") is None


def test_non_mapping_document_is_rejected(tmp_path):
    path = tmp_path / "bad.yml"
    path.write_text("- just\n- a list\n")

    with pytest.raises(ValueError, match="mapping at the top level"):
        load_scenario(path)


def test_results_csv_columns(tmp_path):
    scenario = load_scenario(DEMO_PATH)
    results = run_queries(scenario, build_graph(scenario))
    out = tmp_path / "results" / "queries.csv"

    write_results_csv(results, out)
    with out.open(newline="") as f:
        rows = list(csv.DictReader(f))

    assert len(rows) == 2
    assert rows[0]["query"] == "route"
    assert rows[0]["locations"] == "A>B>C>D"
    assert rows[0]["found"] == "True"
    assert float(rows[0]["distance"]) == pytest.approx(5.5)
    assert rows[0]["center"] == ""
    assert rows[1]["query"] == "nearby"
    assert rows[1]["locations"] == "A,C,D"
    assert float(rows[1]["radius"]) == 2.0
    assert rows[1]["distance"] == ""


def test_runner_prints_report_and_writes_csv(tmp_path, capsys):
    out = tmp_path / "queries.csv"

    main([str(DEMO_PATH), "--engine", "priority", "--results-csv", str(out)])

    printed = capsys.readouterr().out
    assert "[nav] scenario=demo locations=4 connections=6 engine=priority" in printed
    assert "- Central Park (A)" in printed
    assert "- Statue of Liberty (D)" in printed
    total = [line for line in printed.splitlines() if line.startswith("Total distance: ")]
    assert len(total) == 1
    assert float(total[0].split()[2]) == pytest.approx(5.5)
    assert "[nav] locations within 2.0 of B: 3" in printed
    assert out.exists()


def test_runner_prints_full_distance(tmp_path, capsys):
    path = tmp_path / "long_haul.yml"
    path.write_text(
        "connections:\n"
        "  - {from: A, to: B, distance: 1234567.25}\n"
        "routes:\n"
        "  - {start: A, end: B}\n"
    )

    main([str(path)])

    assert "Total distance: 1234567.25 units" in capsys.readouterr().out


def test_runner_reports_missing_path(tmp_path, capsys):
    path = tmp_path / "island.yml"
    path.write_text(
        "locations:\n"
        "  - {id: A, name: Mainland, coordinates: [0, 0]}\n"
        "  - {id: I, name: Island, coordinates: [9, 9]}\n"
        "routes:\n"
        "  - {start: A, end: I}\n"
    )

    main([str(path)])

    assert "[nav] no path from A to I" in capsys.readouterr().out
