"""
FIFO relaxation path search for navgraph.

Breadth-first traversal with distance relaxation. This is the default
engine used by NavigationGraph.
"""

from collections import deque
from typing import Deque, Dict, List, Optional

from algorithms import PathResult, PathSearchEngine, reconstruct_path
from graph import Graph


class FifoRelaxationEngine(PathSearchEngine):
    """
    Queue-driven relaxation that stops the first time end is dequeued.

    Nodes are processed in FIFO order, not by distance, so the returned
    distance is the best one known when end came off the queue. A cheaper
    route still waiting in the queue behind end is never considered.
    """

    def search(self, graph: Graph, start: str, end: str) -> Optional[PathResult]:
        """
        Relax outgoing connections in arrival order until end is dequeued.

        A node is requeued every time its distance strictly improves, so it
        may be processed more than once. The visited list is bookkeeping
        only and does not gate processing.
        """
        distances: Dict[str, float] = {start: 0.0}
        previous: Dict[str, str] = {}
        to_visit: Deque[str] = deque([start])
        visited: List[str] = []

        while to_visit:
            current = to_visit.popleft()

            if current == end:
                return reconstruct_path(previous, start, end), distances[end]

            for connection in graph.outgoing(current):
                candidate = distances[current] + connection.distance
                known = distances.get(connection.target)
                if known is None or candidate < known:
                    distances[connection.target] = candidate
                    previous[connection.target] = current
                    to_visit.append(connection.target)

            visited.append(current)

        return None
