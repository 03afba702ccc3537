"""Domain layer - Core models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    ConfigurationError,
    DataIntegrityError,
    DatasetFormatError,
    EngineNotReadyError,
    InternalConsistencyError,
    RoutingError,
    StationNotFoundError,
)
from .models import (
    UNREACHABLE,
    Distance,
    RouteResult,
    RouteStop,
    Station,
    Unreachable,
)

__all__ = [
    # Models
    "Station",
    "RouteResult",
    "RouteStop",
    "Distance",
    "Unreachable",
    "UNREACHABLE",
    # Errors
    "RoutingError",
    "DatasetFormatError",
    "DataIntegrityError",
    "InternalConsistencyError",
    "StationNotFoundError",
    "EngineNotReadyError",
    "ConfigurationError",
]
