"""
Heap-based Dijkstra path search for navgraph.

Uses Python's heapq to find a minimum-distance path between two locations
over any Graph implementation.
"""

from itertools import count
from typing import Dict, List, Optional, Tuple
import heapq
import math

from algorithms import PathResult, PathSearchEngine, reconstruct_path
from graph import Graph


class PriorityPathEngine(PathSearchEngine):
    """
    Single-pair Dijkstra using a binary heap.

    end is only accepted when it is popped with its final distance, so the
    result is minimal for non-negative distances.

    Complexity:
        O(E log V) over the locations reachable from start.
    """

    def search(self, graph: Graph, start: str, end: str) -> Optional[PathResult]:
        dist: Dict[str, float] = {start: 0.0}
        prev: Dict[str, str] = {}
        # Push order breaks distance ties so results follow insertion order.
        order = count()
        pq: List[Tuple[float, int, str]] = [(0.0, next(order), start)]

        while pq:
            d_u, _, u = heapq.heappop(pq)

            # Skip outdated entries
            if d_u != dist.get(u, math.inf):
                continue

            if u == end:
                return reconstruct_path(prev, start, end), d_u

            for connection in graph.outgoing(u):
                v = connection.target
                alt = d_u + connection.distance
                if alt < dist.get(v, math.inf):
                    dist[v] = alt
                    prev[v] = u
                    heapq.heappush(pq, (alt, next(order), v))

        return None
