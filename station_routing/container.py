"""Dependency injection container.

This module provides a simple DI container without external frameworks.
Request handlers receive the routing engine through it instead of
relying on import-time state.

Design principles:
1. No magic - explicit registration and resolution
2. Testable - easy to swap implementations
3. Lazy loading - the engine is built on first resolution
4. Thread-safe - for web server contexts
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        resolver = container.resolve(PathResolver)

        # Testing
        container = Container()
        container.register(StationDatasetPort, lambda: InMemoryStationDataset(data))
        dataset = container.resolve(StationDatasetPort)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Args:
            port_type: The type (usually a Protocol) to register.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
        with self._lock:
            self._factories[port_type] = factory
            if singleton:
                self._singleton_types.add(port_type)
            else:
                self._singleton_types.discard(port_type)
                self._singletons.pop(port_type, None)

    def resolve(self, port_type: type[Any]) -> Any:
        """Resolve an instance of a port type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return self._singletons[port_type]

            return self._factories[port_type]()

    def is_registered(self, port_type: type[Any]) -> bool:
        return port_type in self._factories

    def clear_singletons(self) -> None:
        """Clear all cached singletons.

        Call this in tests to ensure fresh instances.
        """
        with self._lock:
            self._singletons.clear()

    def clear_all(self) -> None:
        """Clear all registrations and singletons."""
        with self._lock:
            self._factories.clear()
            self._singletons.clear()
            self._singleton_types.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        The dataset adapter follows ``config.dataset.format``. The engine
        provider loads the dataset the first time it is resolved, and
        PathResolver is resolved per call so it always follows the
        currently published snapshot.

        Args:
            config: Optional configuration override.

        Returns:
            A configured Container instance.

        Raises:
            ConfigurationError: If the dataset format is not supported.
        """
        from .adapters.dataset import CSVStationDataset, JSONStationDataset
        from .domain.errors import ConfigurationError
        from .ports.dataset import StationDatasetPort
        from .services import PathResolver, RoutingEngineProvider

        config = config or get_config()
        container = cls(config=config)

        def create_dataset() -> StationDatasetPort:
            fmt = config.dataset.format
            if fmt == "json":
                return JSONStationDataset(config.dataset.json_path)
            elif fmt == "csv":
                return CSVStationDataset(
                    config.dataset.csv_stations_path,
                    config.dataset.csv_edges_path,
                )
            raise ConfigurationError(
                f"Unsupported dataset format: {fmt}",
                setting_name="dataset.format",
                expected_type="'json' or 'csv'",
            )

        container.register(StationDatasetPort, create_dataset)

        def create_provider() -> RoutingEngineProvider:
            provider = RoutingEngineProvider(
                symmetric=config.routing.symmetric_adjacency
            )
            provider.load(container.resolve(StationDatasetPort))
            return provider

        container.register(RoutingEngineProvider, create_provider)

        container.register(
            PathResolver,
            lambda: container.resolve(RoutingEngineProvider).resolver(),
            singleton=False,
        )

        return container


# Global default container (lazy initialized)
_default_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get the default application container.

    Returns:
        The default Container instance (creates one if needed).
    """
    global _default_container
    if _default_container is None:
        with _container_lock:
            if _default_container is None:
                _default_container = Container.create_default()
    return _default_container


def reset_container() -> None:
    """Reset the default container.

    Call this in tests to ensure a fresh container.
    """
    global _default_container
    with _container_lock:
        if _default_container is not None:
            _default_container.clear_all()
        _default_container = None
