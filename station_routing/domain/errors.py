"""Typed domain errors for the station routing engine.

Build-time errors (dataset format, graph integrity) are fatal and keep
the engine from ever becoming ready. Query-time outcomes such as an
unknown station or an unreachable destination are plain values, not
errors; the only query-time exception raised by the resolver is
InternalConsistencyError, which signals a broken build.

All errors inherit from RoutingError and can optionally wrap a root
cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class RoutingError(Exception):
    """Base error for the routing domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class DatasetFormatError(RoutingError):
    """The station dataset could not be read or does not match the schema.

    Raised by dataset adapters before any graph is built, so that a
    malformed file is never confused with a well-formed file describing
    an inconsistent network.

    Attributes:
        source: Path or name of the dataset that failed to load
    """

    source: Optional[str] = None


@dataclass
class DataIntegrityError(RoutingError):
    """The dataset is well-formed but describes an invalid network.

    Attributes:
        station_code: Code of the offending station, if any
        neighbor_code: Code referenced by an edge, for dangling edges
    """

    station_code: str = ""
    neighbor_code: Optional[str] = None


@dataclass
class InternalConsistencyError(RoutingError):
    """The next-hop table contradicts the distance table.

    This never happens for a correct build and must not be turned into
    a "no route" answer.

    Attributes:
        start_code: Requested departure station
        end_code: Requested arrival station
        at_code: Station where the walk broke down
    """

    start_code: str = ""
    end_code: str = ""
    at_code: Optional[str] = None


@dataclass
class StationNotFoundError(RoutingError):
    """Station code not found in the registry.

    Only raised by explicit validation helpers; route queries report
    unknown stations by returning None.

    Attributes:
        station_code: The station code that was not found
    """

    station_code: str = ""


@dataclass
class EngineNotReadyError(RoutingError):
    """A query was made before any routing snapshot was published."""


@dataclass
class ConfigurationError(RoutingError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
