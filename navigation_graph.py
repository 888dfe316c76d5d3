"""
Concrete navigation graph for navgraph.

Owns a location registry (id -> Location) and an adjacency list
(source id -> outgoing connections in insertion order), and answers
shortest-path and proximity queries over them.
"""

from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

import numpy as np

from algorithms import PathResult, PathSearchEngine
from dijkstra_engine import PriorityPathEngine
from fifo_relaxation_engine import FifoRelaxationEngine
from graph import Graph
from locations import Connection, Location


class PathSearchStrategy(Enum):
    """
    Path search strategy used by shortest_path.

    FIFO: queue-driven relaxation, returns on the first dequeue of end.
    PRIORITY: heap-ordered Dijkstra, returns the minimum-distance path.
    """

    FIFO = "fifo"
    PRIORITY = "priority"


def make_engine(strategy: PathSearchStrategy | str) -> PathSearchEngine:
    """Build the engine for a strategy or its string value."""
    try:
        strategy = PathSearchStrategy(strategy)
    except ValueError:
        choices = ", ".join(s.value for s in PathSearchStrategy)
        raise ValueError(f"Unknown path search strategy {strategy!r}; expected one of: {choices}") from None

    if strategy is PathSearchStrategy.PRIORITY:
        return PriorityPathEngine()
    return FifoRelaxationEngine()


class NavigationGraph(Graph):
    """
    Directed, weighted graph of named locations.

    Connections are not checked against the registry: either endpoint may
    be an id that was never added. Nothing is validated or deduplicated.
    """

    def __init__(self, engine: Optional[PathSearchEngine] = None) -> None:
        self._locations: Dict[str, Location] = {}
        self._connections: Dict[str, List[Connection]] = {}
        self._engine = engine if engine is not None else FifoRelaxationEngine()

    @property
    def engine(self) -> PathSearchEngine:
        return self._engine

    # --- Mutation API --------------------------------------------------------

    def add_location(self, location: Location) -> None:
        """Register location, replacing any earlier one with the same id."""
        self._locations[location.id] = location

    def add_connection(self, source: str, target: str, distance: float) -> None:
        """Append a directed connection source -> target."""
        self._connections.setdefault(source, []).append(Connection(source, target, distance))

    # --- Lookup --------------------------------------------------------------

    def get_location(self, location_id: str) -> Optional[Location]:
        return self._locations.get(location_id)

    def locations(self) -> Iterable[Location]:
        return list(self._locations.values())

    def outgoing(self, location_id: str) -> Sequence[Connection]:
        return list(self._connections.get(location_id, ()))  # defensive copy

    def connections(self) -> Iterator[Connection]:
        for outgoing in self._connections.values():
            yield from outgoing

    def __len__(self) -> int:
        return len(self._locations)

    def __contains__(self, location_id: object) -> bool:
        return location_id in self._locations

    # --- Queries -------------------------------------------------------------

    def shortest_path(self, start: str, end: str) -> Optional[PathResult]:
        """
        Path from start to end as (ids, total distance), or None.

        start does not need to be a registered location; when start == end
        the result is ([start], 0.0).
        """
        return self._engine.search(self, start, end)

    def nearby_locations(self, center: str, radius: float) -> List[Location]:
        """
        Locations within radius of center, excluding center itself.

        Distances are planar Euclidean over the stored coordinates. Returns
        an empty list for an unknown center. Result order is not meaningful.
        """
        center_loc = self._locations.get(center)
        if center_loc is None:
            return []

        others = [loc for loc in self.locations() if loc.id != center_loc.id]
        if not others:
            return []

        coords = np.array([loc.coordinates for loc in others], dtype=float)
        offsets = coords - np.asarray(center_loc.coordinates, dtype=float)
        distances = np.sqrt(np.sum(offsets * offsets, axis=1))
        within = distances <= radius
        return [loc for loc, keep in zip(others, within) if keep]
