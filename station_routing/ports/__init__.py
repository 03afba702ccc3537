"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the routing core and external
adapters. They enable dependency injection and make the system testable.
"""

from .dataset import StationDataset, StationDatasetPort

__all__ = [
    "StationDataset",
    "StationDatasetPort",
]
