"""
Scenario files for navgraph.

A scenario is a YAML document listing locations, connections and the
queries to run against the resulting graph. This module loads scenarios,
builds graphs from them, runs their queries and writes results to CSV.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Sequence
import csv

import yaml

from locations import Location
from navigation_graph import NavigationGraph, PathSearchStrategy, make_engine


@dataclass(frozen=True)
class LocationConfig:
    id: str
    name: str
    coordinates: tuple[float, float]


@dataclass(frozen=True)
class ConnectionConfig:
    source: str
    target: str
    distance: float
    bidirectional: bool = False


@dataclass(frozen=True)
class RouteQuery:
    start: str
    end: str


@dataclass(frozen=True)
class NearbyQuery:
    center: str
    radius: float


@dataclass(frozen=True)
class Scenario:
    name: str
    engine: PathSearchStrategy
    locations: Sequence[LocationConfig]
    connections: Sequence[ConnectionConfig]
    routes: Sequence[RouteQuery]
    nearby: Sequence[NearbyQuery]


def _require(entry: Mapping[str, Any], key: str, section: str, index: int) -> Any:
    if not isinstance(entry, Mapping):
        raise ValueError(f"{section}[{index}] must be a mapping, got {type(entry).__name__}")
    if key not in entry:
        raise ValueError(f"{section}[{index}] is missing required key '{key}'")
    return entry[key]


def _number(value: Any, field: str) -> float:
    # YAML booleans are ints in Python; reject them along with strings.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{field} must be a number, got {value!r}")
    return float(value)


def _parse_location(entry: Mapping[str, Any], index: int) -> LocationConfig:
    coords = _require(entry, "coordinates", "locations", index)
    if not isinstance(coords, (list, tuple)) or len(coords) != 2:
        raise ValueError(f"locations[{index}].coordinates must be a pair of numbers, got {coords!r}")
    return LocationConfig(
        id=str(_require(entry, "id", "locations", index)),
        name=str(_require(entry, "name", "locations", index)),
        coordinates=(
            _number(coords[0], f"locations[{index}].coordinates[0]"),
            _number(coords[1], f"locations[{index}].coordinates[1]"),
        ),
    )


def _parse_connection(entry: Mapping[str, Any], index: int) -> ConnectionConfig:
    source = str(_require(entry, "from", "connections", index))
    target = str(_require(entry, "to", "connections", index))
    distance = _number(_require(entry, "distance", "connections", index), f"connections[{index}].distance")
    bidirectional = entry.get("bidirectional", False)
    if not isinstance(bidirectional, bool):
        raise ValueError(f"connections[{index}].bidirectional must be a boolean, got {bidirectional!r}")
    return ConnectionConfig(source, target, distance, bidirectional)


def parse_scenario(data: Mapping[str, Any], default_name: str = "scenario") -> Scenario:
    """
    Build a Scenario from an already-decoded YAML mapping.

    Only locations/connections/routes/nearby lists are read; missing lists
    are treated as empty.
    """
    if not isinstance(data, Mapping):
        raise ValueError("Scenario document must be a mapping at the top level.")

    try:
        engine = PathSearchStrategy(data.get("engine", PathSearchStrategy.FIFO.value))
    except ValueError:
        raise ValueError(f"Unknown engine {data.get('engine')!r} in scenario.") from None

    locations = [_parse_location(e, i) for i, e in enumerate(data.get("locations") or [])]
    connections = [_parse_connection(e, i) for i, e in enumerate(data.get("connections") or [])]
    routes = [
        RouteQuery(
            start=str(_require(e, "start", "routes", i)),
            end=str(_require(e, "end", "routes", i)),
        )
        for i, e in enumerate(data.get("routes") or [])
    ]
    nearby = [
        NearbyQuery(
            center=str(_require(e, "center", "nearby", i)),
            radius=_number(_require(e, "radius", "nearby", i), f"nearby[{i}].radius"),
        )
        for i, e in enumerate(data.get("nearby") or [])
    ]
    return Scenario(
        name=str(data.get("name", default_name)),
        engine=engine,
        locations=locations,
        connections=connections,
        routes=routes,
        nearby=nearby,
    )


def load_scenario(path: Path) -> Scenario:
    data = yaml.safe_load(path.read_text())
    return parse_scenario(data or {}, default_name=path.stem)


def build_graph(scenario: Scenario, engine: PathSearchStrategy | str | None = None) -> NavigationGraph:
    """
    Populate a NavigationGraph from a scenario, locations first.

    engine overrides the strategy named in the scenario.
    """
    graph = NavigationGraph(engine=make_engine(engine if engine is not None else scenario.engine))
    for loc in scenario.locations:
        graph.add_location(Location(loc.id, loc.name, loc.coordinates))
    for conn in scenario.connections:
        graph.add_connection(conn.source, conn.target, conn.distance)
        if conn.bidirectional:
            graph.add_connection(conn.target, conn.source, conn.distance)
    return graph


def run_queries(scenario: Scenario, graph: NavigationGraph) -> List[Dict[str, object]]:
    """
    Run every route and nearby query and return one flat row per query.
    """
    rows: List[Dict[str, object]] = []
    for route in scenario.routes:
        result = graph.shortest_path(route.start, route.end)
        path, distance = result if result is not None else ([], None)
        rows.append(
            {
                "scenario": scenario.name,
                "query": "route",
                "start": route.start,
                "end": route.end,
                "found": result is not None,
                "locations": path,
                "distance": distance,
            }
        )
    for query in scenario.nearby:
        # Sort by id so reports are stable; the graph itself promises no order.
        matches = sorted(graph.nearby_locations(query.center, query.radius), key=lambda loc: loc.id)
        rows.append(
            {
                "scenario": scenario.name,
                "query": "nearby",
                "center": query.center,
                "radius": query.radius,
                "found": bool(matches),
                "locations": [loc.id for loc in matches],
            }
        )
    return rows


def write_results_csv(results: Iterable[Dict[str, object]], path: Path) -> None:
    """
    Write query results to CSV; list-valued columns are joined with '>' or ','.
    """
    fieldnames = [
        "scenario",
        "query",
        "start",
        "end",
        "center",
        "radius",
        "found",
        "locations",
        "distance",
    ]
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for res in results:
            ids = res.get("locations") or []
            sep = ">" if res.get("query") == "route" else ","
            row = {
                "scenario": res.get("scenario"),
                "query": res.get("query"),
                "start": res.get("start", ""),
                "end": res.get("end", ""),
                "center": res.get("center", ""),
                "radius": res.get("radius", ""),
                "found": res.get("found"),
                "locations": sep.join(str(i) for i in ids),
                "distance": "" if res.get("distance") is None else res.get("distance"),
            }
            writer.writerow(row)
