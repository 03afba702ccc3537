"""Dataset ports - Abstractions for loading the station network.

The routing core never performs I/O. It is handed an already parsed
mapping of station code to record by one of these loaders.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping, Protocol

if TYPE_CHECKING:
    from ..adapters.dataset.schema import StationRecord

# Maps station code -> {name, edges}
StationDataset = Mapping[str, "StationRecord"]


class StationDatasetPort(Protocol):
    """Port for loading the station dataset.

    Implementations:
    - adapters/dataset/json_dataset.py (JSONStationDataset)
    - adapters/dataset/csv_dataset.py (CSVStationDataset)
    - adapters/dataset/memory_dataset.py (InMemoryStationDataset)

    Loaders validate the shape of the data and report codes declared
    twice in the raw source, which a mapping could not carry. Graph
    integrity (empty codes, dangling edges) is checked later by the
    registry.
    """

    def load(self) -> StationDataset:
        """Load and schema-check the station dataset.

        Returns:
            Mapping of station code to its record, in dataset order.

        Raises:
            DatasetFormatError: If the source is unreadable or malformed.
            DataIntegrityError: If a station code is declared twice.
        """
        ...

    def describe(self) -> str:
        """Return a short human-readable description of the source."""
        ...
