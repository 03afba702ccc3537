"""Services layer - Routing engine construction and queries.

Available services:
- build_routing_engine: Builds one immutable routing snapshot
- RoutingEngineProvider: Publishes and swaps snapshots
- PathResolver: Route and station queries against a snapshot
"""

from .engine import (
    EngineState,
    RoutingEngine,
    RoutingEngineProvider,
    build_routing_engine,
)
from .path_resolver import PathResolver

__all__ = [
    "EngineState",
    "RoutingEngine",
    "RoutingEngineProvider",
    "build_routing_engine",
    "PathResolver",
]
