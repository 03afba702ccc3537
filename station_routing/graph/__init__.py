"""Graph construction and all-pairs shortest paths.

This subpackage validates the station dataset into a registry and
precomputes the distance and next-hop matrices on top of it.
"""

from .floyd_warshall import (
    NO_NEXT_HOP,
    UNREACHABLE_SENTINEL,
    RoutingMatrices,
    build_matrices,
)
from .registry import StationRegistry

__all__ = [
    "StationRegistry",
    "RoutingMatrices",
    "build_matrices",
    "UNREACHABLE_SENTINEL",
    "NO_NEXT_HOP",
]
