"""
Algorithm interfaces for path search.

Keeps graph algorithms separate from graph storage and scenario wiring.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from graph import Graph


PathResult = Tuple[List[str], float]


class PathSearchEngine(ABC):
    """
    Interface for single-pair path search.
    """

    @abstractmethod
    def search(self, graph: Graph, start: str, end: str) -> Optional[PathResult]:
        """
        Find a path from start to end.

        Returns:
            (path, distance) where path lists ids from start to end inclusive,
            or None if end was never reached.
        """
        raise NotImplementedError


def reconstruct_path(previous: Dict[str, str], start: str, end: str) -> List[str]:
    """
    Walk back-pointers from end to start, then reverse.
    """
    path = [end]
    node = end
    while node != start and node in previous:
        node = previous[node]
        path.append(node)
    path.reverse()
    return path
