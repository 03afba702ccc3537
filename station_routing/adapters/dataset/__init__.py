"""Dataset adapters - Implementations of StationDatasetPort.

Available implementations:
- JSONStationDataset: Loads a JSON object keyed by station code
- CSVStationDataset: Loads a stations CSV plus an edges CSV
- InMemoryStationDataset: Validates an already parsed mapping
"""

from .csv_dataset import CSVStationDataset
from .json_dataset import JSONStationDataset
from .memory_dataset import InMemoryStationDataset
from .schema import StationRecord, parse_station_records

__all__ = [
    "CSVStationDataset",
    "JSONStationDataset",
    "InMemoryStationDataset",
    "StationRecord",
    "parse_station_records",
]
