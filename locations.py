"""
Location and connection records for navgraph.

Locations are named points on a plane; connections are directed,
weighted edges between location ids.
"""

from dataclasses import dataclass
from typing import Tuple
import math


Coordinates = Tuple[float, float]


@dataclass(frozen=True)
class Location:
    """
    Named point with planar coordinates.

    coordinates may hold lat/lon values, but they are always treated as
    plain x/y on a flat plane.
    """

    id: str
    name: str
    coordinates: Coordinates


@dataclass(frozen=True)
class Connection:
    """
    Directed edge source -> target with a travel distance.

    Endpoints are location ids and need not be registered anywhere.
    """

    source: str
    target: str
    distance: float


def planar_distance(a: Coordinates, b: Coordinates) -> float:
    """Euclidean distance between two coordinate pairs."""
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return math.sqrt(dx * dx + dy * dy)
