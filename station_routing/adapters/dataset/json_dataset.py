"""JSON station dataset adapter.

Reads a document of the form::

    {
        "NS1 EW24": {"name": "Jurong East", "edges": ["NS2", "EW23"]},
        "NS2": {"name": "Bukit Batok", "edges": ["NS1 EW24"]}
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Tuple

from ...domain.errors import DatasetFormatError
from ...ports.dataset import StationDataset
from .schema import parse_station_records


class _Pairs(list):
    """JSON object decoded as its raw key/value pairs."""


def _to_plain(value: Any) -> Any:
    """Turn nested _Pairs back into dicts, rejecting repeated keys."""
    if isinstance(value, _Pairs):
        keys = [key for key, _ in value]
        if len(keys) != len(set(keys)):
            raise ValueError(f"Repeated keys in object: {keys}")
        return {key: _to_plain(item) for key, item in value}
    if isinstance(value, list):
        return [_to_plain(item) for item in value]
    return value


@dataclass
class JSONStationDataset:
    """Dataset loader for a single JSON file.

    Attributes:
        path: Location of the JSON document
    """

    path: Path
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        self._logger = logging.getLogger(__name__)

    def load(self) -> StationDataset:
        """Load and validate the JSON dataset.

        Raises:
            DatasetFormatError: If the file is unreadable or malformed.
            DataIntegrityError: If a station code is declared twice.
        """
        self._logger.debug("Loading station dataset", extra={"path": str(self.path)})

        try:
            with self.path.open(encoding="utf-8") as f:
                document = json.load(f, object_pairs_hook=_Pairs)
        except (OSError, ValueError) as e:
            raise DatasetFormatError(
                "Failed to read station dataset",
                source=str(self.path),
                cause=e,
            )

        if not isinstance(document, _Pairs):
            raise DatasetFormatError(
                "Station dataset must be a JSON object keyed by station code",
                source=str(self.path),
            )

        try:
            pairs: List[Tuple[str, Any]] = [
                (code, _to_plain(body)) for code, body in document
            ]
        except ValueError as e:
            raise DatasetFormatError(
                "Malformed station record",
                source=str(self.path),
                cause=e,
            )

        records = parse_station_records(pairs, source=str(self.path))
        self._logger.info(
            "Station dataset loaded",
            extra={"path": str(self.path), "stations": len(records)},
        )
        return records

    def describe(self) -> str:
        return f"json:{self.path}"
