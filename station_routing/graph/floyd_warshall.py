"""All-pairs shortest paths over the station registry.

Hop-count Floyd-Warshall: every connection costs 1. The build produces a
distance matrix and a next-hop matrix that together answer any route
query in O(path length) without searching the graph again.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import numpy as np

from .registry import StationRegistry

logger = logging.getLogger(__name__)

# Larger than any real hop count (at most N - 1), and twice its value
# still fits in int64.
UNREACHABLE_SENTINEL = 2**40
NO_NEXT_HOP = -1


@dataclass(frozen=True, eq=False)
class RoutingMatrices:
    """Read-only N x N matrices produced by one build.

    Attributes:
        distance: ``distance[i, j]`` is the hop count from i to j, or
            UNREACHABLE_SENTINEL
        next_hop: ``next_hop[i, j]`` is the index of the first station
            after i on a shortest route to j, or NO_NEXT_HOP
    """

    distance: np.ndarray
    next_hop: np.ndarray

    @property
    def size(self) -> int:
        return int(self.distance.shape[0])

    def is_reachable(self, i: int, j: int) -> bool:
        return int(self.distance[i, j]) < UNREACHABLE_SENTINEL

    def same_as(self, other: RoutingMatrices) -> bool:
        """Check value equality of both matrices."""
        return bool(
            np.array_equal(self.distance, other.distance)
            and np.array_equal(self.next_hop, other.next_hop)
        )


def build_matrices(registry: StationRegistry) -> RoutingMatrices:
    """Compute distance and next-hop matrices for a registry.

    For each intermediate station k, every pair (i, j) whose route
    improves by going through k takes ``distance[i, k] + distance[k, j]``
    and inherits ``next_hop[i, k]``. Row k and column k cannot improve
    during step k, so each step is evaluated on whole arrays at once.

    Args:
        registry: The validated station graph.

    Returns:
        Immutable matrices. O(N^2) memory, O(N^3) time.
    """
    started = time.perf_counter()
    n = len(registry)

    distance = np.full((n, n), UNREACHABLE_SENTINEL, dtype=np.int64)
    next_hop = np.full((n, n), NO_NEXT_HOP, dtype=np.int64)

    diagonal = np.arange(n)
    distance[diagonal, diagonal] = 0
    next_hop[diagonal, diagonal] = diagonal

    for i, j in registry.edges():
        distance[i, j] = 1
        next_hop[i, j] = j

    for k in range(n):
        through_k = distance[:, k, np.newaxis] + distance[np.newaxis, k, :]
        rows, cols = np.nonzero(through_k < distance)
        if rows.size == 0:
            continue
        distance[rows, cols] = through_k[rows, cols]
        next_hop[rows, cols] = next_hop[rows, k]

    distance.setflags(write=False)
    next_hop.setflags(write=False)

    reachable_pairs = int(np.count_nonzero(distance < UNREACHABLE_SENTINEL)) - n
    logger.info(
        "Routing matrices built",
        extra={
            "stations": n,
            "reachable_pairs": reachable_pairs,
            "elapsed_ms": round((time.perf_counter() - started) * 1000, 2),
        },
    )
    return RoutingMatrices(distance=distance, next_hop=next_hop)
