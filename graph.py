"""
Directed, weighted graph abstraction for navgraph.

Nodes are location ids.
Edges are Connection records: source -> target with a float distance.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Sequence

from locations import Connection, Location


class Graph(ABC):
    """Directed, weighted graph over location ids."""

    @abstractmethod
    def locations(self) -> Iterable[Location]:
        """Return all registered locations."""
        raise NotImplementedError

    @abstractmethod
    def outgoing(self, location_id: str) -> Sequence[Connection]:
        """
        Outgoing connections of a location, in insertion order.

        Returns an empty sequence for ids with no outgoing connections.
        """
        raise NotImplementedError
