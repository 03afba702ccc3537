"""Routing engine snapshots and their publication.

build_routing_engine() is the one explicit constructor of a routing
snapshot. RoutingEngineProvider owns the currently published snapshot
and replaces it as a whole on rebuild: a new snapshot is built off to
the side and only then swapped in, so a query always sees one complete
build.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum, auto
from typing import Optional

from ..domain.errors import EngineNotReadyError
from ..graph.floyd_warshall import RoutingMatrices, build_matrices
from ..graph.registry import StationRegistry
from ..ports.dataset import StationDataset, StationDatasetPort
from .path_resolver import PathResolver

logger = logging.getLogger(__name__)


class EngineState(Enum):
    """Lifecycle of the published routing snapshot."""

    UNINITIALIZED = auto()
    BUILT = auto()
    READY = auto()


@dataclass(frozen=True, eq=False)
class RoutingEngine:
    """One complete, immutable build of registry and matrices.

    Attributes:
        registry: Validated station graph
        matrices: All-pairs distance and next-hop matrices
        resolver: Query surface bound to this build
        source: Description of the dataset the build came from
        built_at: UTC time the build finished
    """

    registry: StationRegistry
    matrices: RoutingMatrices
    resolver: PathResolver
    source: str = ""
    built_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def num_stations(self) -> int:
        return len(self.registry)


def build_routing_engine(
    dataset: StationDataset,
    symmetric: bool = True,
    source: str = "",
) -> RoutingEngine:
    """Build a routing snapshot from a parsed dataset.

    Args:
        dataset: Mapping of station code to record.
        symmetric: Treat every declared edge as bidirectional.
        source: Optional description of the dataset, for logging.

    Returns:
        A ready-to-query RoutingEngine.

    Raises:
        DataIntegrityError: If the dataset describes an invalid network.
    """
    registry = StationRegistry.build(dataset, symmetric=symmetric)
    matrices = build_matrices(registry)
    return RoutingEngine(
        registry=registry,
        matrices=matrices,
        resolver=PathResolver(registry=registry, matrices=matrices),
        source=source,
    )


@dataclass
class RoutingEngineProvider:
    """Holds the published routing snapshot.

    Publishing happens in two steps. stage() builds a snapshot and keeps
    it pending; activate() swaps the pending snapshot in. Before the very
    first activation the provider is BUILT: a snapshot exists but
    queries still get EngineNotReadyError. After that it stays READY,
    and a staged rebuild waits beside the published snapshot until it is
    activated.

    Readers call current() (or resolver()) once per request and keep
    using the returned snapshot; they never take a lock. Staging and
    activation are serialized so the generation counter and state stay
    consistent.

    Attributes:
        symmetric: Passed to every build
    """

    symmetric: bool = True

    _engine: Optional[RoutingEngine] = field(default=None, repr=False)
    _pending: Optional[RoutingEngine] = field(default=None, repr=False)
    _state: EngineState = field(default=EngineState.UNINITIALIZED, repr=False)
    _generation: int = field(default=0, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def generation(self) -> int:
        """Number of snapshots published so far."""
        return self._generation

    @property
    def pending(self) -> Optional[RoutingEngine]:
        """Snapshot built by stage() and not yet activated."""
        return self._pending

    def stage(self, dataset: StationDataset, source: str = "") -> RoutingEngine:
        """Build a snapshot and hold it until activate() is called.

        A failed build leaves both the published and the pending
        snapshot untouched. Staging again replaces an earlier pending
        snapshot, which is simply discarded.

        Raises:
            DataIntegrityError: If the dataset describes an invalid network.
        """
        engine = build_routing_engine(dataset, symmetric=self.symmetric, source=source)

        with self._lock:
            self._pending = engine
            if self._state is EngineState.UNINITIALIZED:
                self._state = EngineState.BUILT

        self._logger.debug(
            "Routing engine staged",
            extra={"stations": engine.num_stations, "source": source},
        )
        return engine

    def activate(self) -> RoutingEngine:
        """Publish the pending snapshot in place of the current one.

        Raises:
            EngineNotReadyError: If nothing has been staged.
        """
        with self._lock:
            engine = self._pending
            if engine is None:
                raise EngineNotReadyError("No staged routing engine to activate")
            self._engine = engine
            self._pending = None
            self._generation += 1
            self._state = EngineState.READY
            generation = self._generation

        self._logger.info(
            "Routing engine published",
            extra={
                "generation": generation,
                "stations": engine.num_stations,
                "source": engine.source,
            },
        )
        return engine

    def publish(self, dataset: StationDataset, source: str = "") -> RoutingEngine:
        """Build a snapshot from a dataset and make it the current one.

        If the build fails, the previously published snapshot (if any)
        stays in place and the error propagates. Concurrent publishers
        are serialized, so each activates its own build.

        Returns:
            The newly published engine.
        """
        with self._lock:
            self.stage(dataset, source=source)
            return self.activate()

    def load(self, dataset_port: StationDatasetPort) -> RoutingEngine:
        """Load a dataset through a port and publish it.

        Raises:
            DatasetFormatError: If the dataset cannot be read.
            DataIntegrityError: If the dataset describes an invalid network.
        """
        dataset = dataset_port.load()
        return self.publish(dataset, source=dataset_port.describe())

    def rebuild(self, dataset_port: StationDatasetPort) -> RoutingEngine:
        """Reload the dataset and atomically replace the current snapshot."""
        self._logger.info(
            "Rebuilding routing engine",
            extra={"source": dataset_port.describe(), "generation": self._generation},
        )
        return self.load(dataset_port)

    def current(self) -> RoutingEngine:
        """Return the published snapshot.

        Raises:
            EngineNotReadyError: If nothing has been published yet.
        """
        engine = self._engine
        if engine is None:
            raise EngineNotReadyError("Routing engine has not been built yet")
        return engine

    def resolver(self) -> PathResolver:
        """Return the query surface of the published snapshot."""
        return self.current().resolver
