"""Immutable domain models for the station routing engine.

All models are frozen dataclasses with slots. They have no external
dependencies and represent the core concepts of the transit network:
stations, computed routes and the stops of a route.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class Unreachable(Enum):
    """Opaque marker for the distance between disconnected stations.

    Kept out of the integer domain so that callers cannot add or
    compare it with real hop counts by accident.
    """

    UNREACHABLE = "unreachable"

    def __repr__(self) -> str:
        return "UNREACHABLE"


UNREACHABLE = Unreachable.UNREACHABLE

Distance = Union[int, Unreachable]


@dataclass(frozen=True, slots=True)
class Station:
    """A station of the transit network.

    Attributes:
        code: Unique station identifier (e.g., 'NS1 EW24')
        name: Human-readable station name, not necessarily unique
        neighbor_codes: Codes of the stations directly connected to this one
    """

    code: str
    name: str
    neighbor_codes: frozenset[str] = field(default_factory=frozenset)

    def is_adjacent_to(self, code: str) -> bool:
        """Check if a direct connection leads to ``code``."""
        return code in self.neighbor_codes


@dataclass(frozen=True, slots=True)
class RouteResult:
    """Result of a shortest-path query between two known stations.

    Attributes:
        path: Ordered tuple of station codes, departure first
        distance: Hop count, or UNREACHABLE when no route exists
    """

    path: tuple[str, ...]
    distance: Distance

    @property
    def is_reachable(self) -> bool:
        """Check if a route exists."""
        return self.distance is not UNREACHABLE

    @property
    def num_hops(self) -> int:
        """Return the number of connections travelled (0 if unreachable)."""
        return max(len(self.path) - 1, 0)

    @property
    def num_stops(self) -> int:
        """Return the number of stations on the route."""
        return len(self.path)


@dataclass(frozen=True, slots=True)
class RouteStop:
    """A station on a route, resolved with its display name."""

    code: str
    name: str
