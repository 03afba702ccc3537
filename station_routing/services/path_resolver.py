"""Path resolver - the per-request query surface of the routing engine.

A resolver is bound to one build (registry plus matrices) and never
mutates it, so any number of threads can query it without locking.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, NoReturn, Optional

from ..domain.errors import InternalConsistencyError, StationNotFoundError
from ..domain.models import UNREACHABLE, RouteResult, RouteStop, Station
from ..graph.floyd_warshall import NO_NEXT_HOP, RoutingMatrices
from ..graph.registry import StationRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class PathResolver:
    """Answers route and station queries against one routing snapshot.

    Attributes:
        registry: Station graph and code/index mapping
        matrices: Distance and next-hop matrices built from the registry
    """

    registry: StationRegistry
    matrices: RoutingMatrices

    def find_shortest_path(
        self, start_code: str, end_code: str
    ) -> Optional[RouteResult]:
        """Find the route with the fewest connections between two stations.

        Args:
            start_code: Departure station code.
            end_code: Arrival station code.

        Returns:
            None if either code is unknown. Otherwise a RouteResult whose
            path runs from start to end, or an empty path with distance
            UNREACHABLE when the stations are not connected.

        Raises:
            InternalConsistencyError: If the next-hop matrix contradicts
                the distance matrix.
        """
        start = self.registry.index_of(start_code)
        end = self.registry.index_of(end_code)
        if start is None or end is None:
            logger.debug(
                "Unknown station in route query",
                extra={"start": start_code, "end": end_code},
            )
            return None

        if start == end:
            return RouteResult(path=(start_code,), distance=0)

        if not self.matrices.is_reachable(start, end):
            return RouteResult(path=(), distance=UNREACHABLE)

        distance = int(self.matrices.distance[start, end])
        path = self._reconstruct(start, end, distance)
        return RouteResult(path=tuple(path), distance=distance)

    def _reconstruct(self, start: int, end: int, distance: int) -> List[str]:
        """Follow the next-hop matrix from start to end."""
        path: List[str] = []
        current = start
        while current != end:
            path.append(self.registry.code_at(current))
            hop = int(self.matrices.next_hop[current, end])
            if (
                hop == NO_NEXT_HOP
                or not 0 <= hop < self.matrices.size
                or len(path) > distance
            ):
                self._fail(start, end, current, distance)
            current = hop
        path.append(self.registry.code_at(end))

        if len(path) - 1 != distance:
            self._fail(start, end, end, distance)
        return path

    def _fail(self, start: int, end: int, at: int, distance: int) -> NoReturn:
        start_code = self.registry.code_at(start)
        end_code = self.registry.code_at(end)
        at_code = self.registry.code_at(at)
        logger.error(
            "Next-hop matrix contradicts distance matrix",
            extra={
                "start": start_code,
                "end": end_code,
                "at": at_code,
                "distance": distance,
            },
        )
        raise InternalConsistencyError(
            f"Broken route from {start_code} to {end_code} at {at_code}",
            start_code=start_code,
            end_code=end_code,
            at_code=at_code,
        )

    def describe_route(self, route: RouteResult) -> List[RouteStop]:
        """Pair every code of a route with its station name."""
        return [
            RouteStop(code=code, name=self.registry.stations[code].name)
            for code in route.path
        ]

    def get_station_codes(self) -> List[str]:
        return list(self.registry.codes)

    def get_station_names(self) -> List[str]:
        return [station.name for station in self.registry.stations.values()]

    def get_station_code_name_map(self) -> Dict[str, str]:
        return {
            code: station.name for code, station in self.registry.stations.items()
        }

    def get_station_by_code(self, code: str) -> Optional[Station]:
        return self.registry.get(code)

    def get_station_by_name(self, name: str) -> Optional[Station]:
        """Return the first station carrying ``name``, or None."""
        return self.registry.find_by_name(name)

    def is_known_station(self, code: str) -> bool:
        """Check membership, for features that store station references."""
        return code in self.registry

    def validate_station_codes(self, *codes: str) -> None:
        """Ensure every code refers to a registered station.

        Raises:
            StationNotFoundError: For the first unknown code.
        """
        for code in codes:
            if code not in self.registry:
                raise StationNotFoundError(
                    f"Unknown station code: {code!r}",
                    station_code=code,
                )
