"""CSV station dataset adapter.

Reads two files:
- stations.csv with columns ``station_id`` and ``station_name``
- edges.csv with columns ``from_station_id`` and ``to_station_id``

Each edge row declares one direct connection; whether it also counts in
the reverse direction is decided by the registry, not here.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

from ...domain.errors import DataIntegrityError, DatasetFormatError
from ...ports.dataset import StationDataset
from .schema import parse_station_records

STATION_COLUMNS = ("station_id", "station_name")
EDGE_COLUMNS = ("from_station_id", "to_station_id")


@dataclass
class CSVStationDataset:
    """Dataset loader for a stations/edges CSV pair.

    Attributes:
        stations_path: Path to the stations CSV file
        edges_path: Path to the edges CSV file
    """

    stations_path: Path
    edges_path: Path
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.stations_path = Path(self.stations_path)
        self.edges_path = Path(self.edges_path)
        self._logger = logging.getLogger(__name__)

    def load(self) -> StationDataset:
        """Load stations and edges and merge them into station records.

        Raises:
            DatasetFormatError: If a file is unreadable, lacks a column, or
                has an edge row with only one end filled in.
            DataIntegrityError: If a station is declared twice, or an edge
                starts at an undeclared station.
        """
        self._logger.debug(
            "Loading station dataset",
            extra={
                "stations_path": str(self.stations_path),
                "edges_path": str(self.edges_path),
            },
        )

        station_rows = self._read_rows(self.stations_path, STATION_COLUMNS)
        edge_rows = self._read_rows(self.edges_path, EDGE_COLUMNS)

        pairs: List[Tuple[str, Dict[str, Any]]] = []
        bodies: Dict[str, Dict[str, Any]] = {}
        for row in station_rows:
            code = (row["station_id"] or "").strip()
            body: Dict[str, Any] = {
                "name": (row["station_name"] or "").strip(),
                "edges": [],
            }
            pairs.append((code, body))
            # Duplicates are reported by parse_station_records.
            bodies.setdefault(code, body)

        for line_no, row in enumerate(edge_rows, start=2):
            from_id = (row["from_station_id"] or "").strip()
            to_id = (row["to_station_id"] or "").strip()
            if not from_id and not to_id:
                continue
            if not from_id or not to_id:
                raise DatasetFormatError(
                    f"Edge on line {line_no} of {self.edges_path.name} is missing "
                    f"{'from_station_id' if not from_id else 'to_station_id'}",
                    source=str(self.edges_path),
                )
            if from_id not in bodies:
                raise DataIntegrityError(
                    f"Edge on line {line_no} of {self.edges_path.name} starts at "
                    f"undeclared station {from_id!r}",
                    station_code=from_id,
                    neighbor_code=to_id,
                )
            bodies[from_id]["edges"].append(to_id)

        records = parse_station_records(pairs, source=str(self.stations_path))
        self._logger.info(
            "Station dataset loaded",
            extra={"stations": len(records), "edges": len(edge_rows)},
        )
        return records

    def _read_rows(
        self, path: Path, required: Sequence[str]
    ) -> List[Dict[str, str]]:
        """Read a CSV file into dict rows, checking the header."""
        try:
            with path.open(newline="", encoding="utf-8") as f:
                reader = csv.DictReader(f)
                missing = [col for col in required if col not in (reader.fieldnames or [])]
                if missing:
                    raise DatasetFormatError(
                        f"Missing columns {missing} in {path.name}",
                        source=str(path),
                    )
                return list(reader)
        except (OSError, csv.Error, UnicodeDecodeError) as e:
            raise DatasetFormatError(
                f"Failed to read {path.name}",
                source=str(path),
                cause=e,
            )

    def describe(self) -> str:
        return f"csv:{self.stations_path},{self.edges_path}"
