"""
CLI to load a navigation scenario, run its queries and report the results.

Reads scenarios/demo.yml unless another scenario file is given, builds the
graph, prints each route and nearby query, and optionally writes a CSV.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence
import argparse

from navigation_graph import NavigationGraph, PathSearchStrategy
from scenario import build_graph, load_scenario, run_queries, write_results_csv


DEFAULT_SCENARIO = Path(__file__).parent / "scenarios" / "demo.yml"


def _label(graph: NavigationGraph, location_id: str) -> str:
    loc = graph.get_location(location_id)
    if loc is None:
        return f"{location_id} (unregistered)"
    return f"{loc.name} ({loc.id})"


def report(graph: NavigationGraph, results: List[Dict[str, object]]) -> None:
    """Print one block per query result."""
    for res in results:
        ids = list(res.get("locations") or [])
        if res["query"] == "route":
            if not res["found"]:
                print(f"[nav] no path from {res['start']} to {res['end']}")
                continue
            print(f"[nav] path from {res['start']} to {res['end']}:")
            for location_id in ids:
                print(f"- {_label(graph, location_id)}")
            print(f"Total distance: {res['distance']} units")
        else:
            print(f"[nav] locations within {res['radius']} of {res['center']}: {len(ids)}")
            for location_id in ids:
                print(f"- {_label(graph, location_id)}")


def run(
    scenario_path: Path,
    engine: Optional[str] = None,
    results_csv: Optional[Path] = None,
) -> List[Dict[str, object]]:
    scenario = load_scenario(scenario_path)
    graph = build_graph(scenario, engine=engine)
    print(
        f"[nav] scenario={scenario.name} locations={len(graph)} "
        f"connections={sum(1 for _ in graph.connections())} engine={engine or scenario.engine.value}"
    )

    results = run_queries(scenario, graph)
    report(graph, results)

    if results_csv is not None:
        write_results_csv(results, results_csv)
        print(f"[nav] wrote {len(results)} results to {results_csv}")
    return results


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Run shortest-path and proximity queries from a navigation scenario.")
    parser.add_argument("scenario", nargs="?", type=Path, default=DEFAULT_SCENARIO,
                        help="Scenario YAML file (default: scenarios/demo.yml).")
    parser.add_argument("--engine", choices=[s.value for s in PathSearchStrategy],
                        help="Override the path search engine named in the scenario.")
    parser.add_argument("--results-csv", type=Path,
                        help="Write query results to this CSV file.")
    args = parser.parse_args(argv)

    run(args.scenario, engine=args.engine, results_csv=args.results_csv)


if __name__ == "__main__":
    main()
