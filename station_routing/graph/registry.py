"""Station registry: the validated network graph and its index mapping.

The registry turns a parsed dataset into immutable Station objects and
assigns every station a dense index ``0..N-1`` in dataset order. The
indices only serve matrix storage and never leave the routing core.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Set, Tuple

from ..domain.errors import DataIntegrityError
from ..domain.models import Station
from ..ports.dataset import StationDataset

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class StationRegistry:
    """Immutable graph of stations plus the code/index bijection.

    Use StationRegistry.build() rather than the constructor.

    Attributes:
        stations: Read-only mapping of code to Station, in dataset order
        codes: Station codes indexed by their dense index
        symmetric: Whether every declared edge was mirrored
    """

    stations: Mapping[str, Station]
    codes: Tuple[str, ...]
    symmetric: bool
    _index: Mapping[str, int]
    _edges: Tuple[Tuple[int, int], ...]

    @classmethod
    def build(cls, dataset: StationDataset, symmetric: bool = True) -> StationRegistry:
        """Validate a dataset and build the registry.

        Codes and edge references are compared after stripping
        surrounding whitespace. Self-loops are dropped.

        Args:
            dataset: Mapping of station code to record (name, edges).
            symmetric: Mirror every declared edge so the graph is undirected.

        Returns:
            A new registry.

        Raises:
            DataIntegrityError: On an empty or duplicated code, or an edge
                referencing an undeclared station.
        """
        codes: list[str] = []
        index: Dict[str, int] = {}
        for raw_code in dataset:
            code = raw_code.strip()
            if not code:
                raise DataIntegrityError(
                    "Station code must not be empty",
                    station_code=raw_code,
                )
            if code in index:
                raise DataIntegrityError(
                    f"Duplicate station code: {code!r}",
                    station_code=code,
                )
            index[code] = len(codes)
            codes.append(code)

        neighbors: Dict[str, Set[str]] = {code: set() for code in codes}
        for raw_code, record in dataset.items():
            code = raw_code.strip()
            for raw_target in record.edges:
                target = raw_target.strip()
                if target not in index:
                    raise DataIntegrityError(
                        f"Station {code!r} references undeclared station {raw_target!r}",
                        station_code=code,
                        neighbor_code=raw_target,
                    )
                if target == code:
                    continue
                neighbors[code].add(target)
                if symmetric:
                    neighbors[target].add(code)

        stations = {
            code: Station(
                code=code,
                name=dataset[raw_code].name,
                neighbor_codes=frozenset(neighbors[code]),
            )
            for raw_code, code in zip(dataset, codes)
        }
        edges = tuple(
            sorted(
                (index[code], index[target])
                for code in codes
                for target in neighbors[code]
            )
        )

        logger.info(
            "Station registry built",
            extra={
                "stations": len(codes),
                "connections": len(edges),
                "symmetric": symmetric,
            },
        )
        return cls(
            stations=MappingProxyType(stations),
            codes=tuple(codes),
            symmetric=symmetric,
            _index=MappingProxyType(index),
            _edges=edges,
        )

    def index_of(self, code: str) -> Optional[int]:
        """Return the dense index of a station, or None if unknown."""
        return self._index.get(code)

    def code_at(self, index: int) -> str:
        """Return the station code stored at a dense index."""
        return self.codes[index]

    def edges(self) -> Iterator[Tuple[int, int]]:
        """Iterate over directed ``(from_index, to_index)`` connections."""
        return iter(self._edges)

    def get(self, code: str) -> Optional[Station]:
        return self.stations.get(code)

    def find_by_name(self, name: str) -> Optional[Station]:
        """Return the first station with this name, in dataset order."""
        for station in self.stations.values():
            if station.name == name:
                return station
        return None

    def __contains__(self, code: object) -> bool:
        return code in self._index

    def __len__(self) -> int:
        return len(self.codes)
