"""
Station routing - command-line entry point.

Usage:
    python -m station_routing stations
    python -m station_routing route "NS1 EW24" NS4
    python -m station_routing --data path/to/stations.json route A D
    python -m station_routing --format csv --data path/to/dir route A D
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from .adapters.dataset import CSVStationDataset, JSONStationDataset
from .config import AppConfig, ObservabilityConfig, get_config
from .domain.errors import RoutingError
from .logging_setup import configure_logging
from .ports.dataset import StationDatasetPort
from .services import PathResolver, RoutingEngineProvider

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_DATA_ERROR = 2

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="station-routing",
        description="Shortest routes (fewest connections) across a station network",
    )
    parser.add_argument(
        "--data",
        type=Path,
        default=None,
        help="JSON dataset file, or directory holding stations.csv/edges.csv "
        "with --format csv (default: configured data directory)",
    )
    parser.add_argument(
        "--format",
        choices=["json", "csv"],
        default=None,
        help="Dataset format (default: SR_DATASET_FORMAT or json)",
    )
    parser.add_argument(
        "--directed",
        action="store_true",
        help="Use edges exactly as declared instead of mirroring them",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: SR_LOG_LEVEL or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("stations", help="List station codes and names")

    route = subparsers.add_parser("route", help="Find the shortest route")
    route.add_argument("start", help="Departure station code")
    route.add_argument("end", help="Arrival station code")

    return parser


def dataset_from_args(
    args: argparse.Namespace, config: AppConfig
) -> StationDatasetPort:
    """Pick the dataset adapter for the given arguments and config."""
    fmt = args.format or config.dataset.format

    if fmt == "csv":
        data_dir = args.data or config.dataset.data_dir
        return CSVStationDataset(
            data_dir / config.dataset.csv_stations_file,
            data_dir / config.dataset.csv_edges_file,
        )
    return JSONStationDataset(args.data or config.dataset.json_path)


def print_stations(resolver: PathResolver) -> int:
    for code, name in resolver.get_station_code_name_map().items():
        print(f"{code}\t{name}")
    return EXIT_OK


def print_route(resolver: PathResolver, start: str, end: str) -> int:
    route = resolver.find_shortest_path(start, end)

    if route is None:
        print(f"Unknown station: {start!r} or {end!r}", file=sys.stderr)
        return EXIT_NOT_FOUND

    if not route.is_reachable:
        print(f"No route found between {start} and {end}.")
        return EXIT_NOT_FOUND

    for position, stop in enumerate(resolver.describe_route(route), start=1):
        print(f"{position:>3}. {stop.code:<12} {stop.name}")
    print(f"Connections: {route.distance}")
    print(f"Stops: {route.num_stops}")
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = get_config()

    observability = config.observability
    if args.log_level:
        observability = ObservabilityConfig(
            level=args.log_level,
            format=observability.format,
            structured=observability.structured,
        )
    configure_logging(observability)

    symmetric = config.routing.symmetric_adjacency and not args.directed
    provider = RoutingEngineProvider(symmetric=symmetric)

    try:
        provider.load(dataset_from_args(args, config))
    except RoutingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_DATA_ERROR

    resolver = provider.resolver()
    if args.command == "stations":
        return print_stations(resolver)
    return print_route(resolver, args.start, args.end)


if __name__ == "__main__":
    sys.exit(main())
