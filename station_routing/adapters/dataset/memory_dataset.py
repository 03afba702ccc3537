"""In-memory dataset adapter.

Wraps a mapping that was already materialised elsewhere (a config
service, a database query, a test fixture) so it goes through the same
schema check as the file-based loaders.

Example:
    dataset = InMemoryStationDataset({
        "A": {"name": "Alpha", "edges": ["B"]},
        "B": {"name": "Bravo", "edges": ["A"]},
    })
    engine = build_routing_engine(dataset.load())
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ...ports.dataset import StationDataset
from .schema import parse_station_records


@dataclass
class InMemoryStationDataset:
    """Dataset loader for an already parsed mapping."""

    records: Mapping[str, Any]
    name: str = "memory"

    def load(self) -> StationDataset:
        return parse_station_records(self.records.items(), source=self.name)

    def describe(self) -> str:
        return self.name
