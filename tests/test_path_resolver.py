"""Tests for the path resolver query surface."""

from itertools import product
from pathlib import Path

import numpy as np
import pytest

from station_routing.adapters.dataset import InMemoryStationDataset, JSONStationDataset
from station_routing.domain.errors import InternalConsistencyError, StationNotFoundError
from station_routing.domain.models import UNREACHABLE, RouteResult, RouteStop
from station_routing.graph import NO_NEXT_HOP, RoutingMatrices, StationRegistry
from station_routing.services import PathResolver, build_routing_engine

DATA_DIR = Path(__file__).resolve().parents[1] / "data"

LINE = {
    "A": {"name": "Alpha", "edges": ["B"]},
    "B": {"name": "Bravo", "edges": ["C"]},
    "C": {"name": "Charlie", "edges": ["D"]},
    "D": {"name": "Delta", "edges": []},
}


def _resolver(records, symmetric=True) -> PathResolver:
    return build_routing_engine(
        InMemoryStationDataset(records).load(), symmetric=symmetric
    ).resolver


class TestLineScenario:
    """Four stations on a line: A-B, B-C, C-D."""

    @pytest.fixture
    def resolver(self):
        return _resolver(LINE)

    def test_end_to_end(self, resolver):
        result = resolver.find_shortest_path("A", "D")
        assert result == RouteResult(path=("A", "B", "C", "D"), distance=3)

    def test_partial(self, resolver):
        result = resolver.find_shortest_path("A", "C")
        assert result.path == ("A", "B", "C")
        assert result.distance == 2

    def test_reverse_direction(self, resolver):
        result = resolver.find_shortest_path("D", "A")
        assert result.path == ("D", "C", "B", "A")
        assert result.distance == 3

    def test_same_station(self, resolver):
        result = resolver.find_shortest_path("A", "A")
        assert result.path == ("A",)
        assert result.distance == 0
        assert result.is_reachable

    def test_unknown_station(self, resolver):
        assert resolver.find_shortest_path("A", "ZZZ") is None
        assert resolver.find_shortest_path("ZZZ", "A") is None
        assert resolver.find_shortest_path("ZZZ", "ZZZ") is None

    def test_removing_middle_edge_disconnects(self):
        broken = dict(LINE)
        broken["B"] = {"name": "Bravo", "edges": []}
        resolver = _resolver(broken)

        result = resolver.find_shortest_path("A", "D")

        assert result is not None
        assert result.path == ()
        assert result.distance is UNREACHABLE
        assert not result.is_reachable
        assert result.num_hops == 0
        # Unreachable is distinct from the unknown-station result
        assert resolver.find_shortest_path("A", "ZZZ") is None


class TestSampleNetwork:
    """Properties checked over every pair of the bundled dataset."""

    @pytest.fixture(scope="class")
    def resolver(self):
        dataset = JSONStationDataset(DATA_DIR / "stations.json").load()
        return build_routing_engine(dataset).resolver

    def test_interchange_route(self, resolver):
        result = resolver.find_shortest_path("NS4", "CC23")
        assert result.path == (
            "NS4", "NS3", "NS2", "NS1 EW24", "EW23", "EW22", "EW21 CC22", "CC23",
        )
        assert result.distance == 7

    def test_self_routes(self, resolver):
        for code in resolver.get_station_codes():
            result = resolver.find_shortest_path(code, code)
            assert result.distance == 0
            assert result.path == (code,)

    def test_symmetry(self, resolver):
        codes = resolver.get_station_codes()
        for x, y in product(codes, codes):
            assert (
                resolver.find_shortest_path(x, y).distance
                == resolver.find_shortest_path(y, x).distance
            )

    def test_path_length_matches_distance(self, resolver):
        codes = resolver.get_station_codes()
        for x, y in product(codes, codes):
            result = resolver.find_shortest_path(x, y)
            assert result.num_hops == result.distance
            assert result.path[0] == x
            assert result.path[-1] == y

    def test_consecutive_stops_are_connected(self, resolver):
        codes = resolver.get_station_codes()
        for x, y in product(codes, codes):
            path = resolver.find_shortest_path(x, y).path
            for here, there in zip(path, path[1:]):
                assert resolver.get_station_by_code(here).is_adjacent_to(there)

    def test_triangle_inequality(self, resolver):
        codes = resolver.get_station_codes()
        for x, y, z in product(codes, codes, codes):
            via = resolver.find_shortest_path(x, y).distance + resolver.find_shortest_path(y, z).distance
            assert resolver.find_shortest_path(x, z).distance <= via


DISCONNECTED = {
    "A": {"name": "Alpha", "edges": ["B", "A"]},
    "B": {"name": "Bravo", "edges": ["C"]},
    "C": {"name": "Charlie", "edges": []},
    "X": {"name": "X-ray", "edges": ["Y"]},
    "Y": {"name": "Yankee", "edges": ["Y"]},
    "Z": {"name": "Zulu", "edges": []},
}


class TestDisconnectedNetwork:
    """Properties over every pair when some pairs have no route."""

    @pytest.fixture(params=[True, False], ids=["symmetric", "directed"])
    def resolver(self, request):
        return _resolver(DISCONNECTED, symmetric=request.param)

    def test_unreachable_pairs_have_empty_path(self, resolver):
        codes = resolver.get_station_codes()
        unreachable = 0
        for x, y in product(codes, codes):
            result = resolver.find_shortest_path(x, y)
            if result.is_reachable:
                assert result.num_hops == result.distance
                assert result.path[0] == x
                assert result.path[-1] == y
            else:
                unreachable += 1
                assert result.path == ()
                assert result.distance is UNREACHABLE
        assert unreachable > 0

    def test_consecutive_stops_are_connected(self, resolver):
        codes = resolver.get_station_codes()
        for x, y in product(codes, codes):
            path = resolver.find_shortest_path(x, y).path
            for here, there in zip(path, path[1:]):
                assert resolver.get_station_by_code(here).is_adjacent_to(there)

    def test_self_loop_stations_route_to_themselves(self, resolver):
        for code in ("A", "Y"):
            assert resolver.find_shortest_path(code, code) == RouteResult(
                path=(code,), distance=0
            )

    def test_triangle_inequality_over_reachable_legs(self, resolver):
        codes = resolver.get_station_codes()
        for x, y, z in product(codes, codes, codes):
            first = resolver.find_shortest_path(x, y)
            second = resolver.find_shortest_path(y, z)
            if not (first.is_reachable and second.is_reachable):
                continue
            direct = resolver.find_shortest_path(x, z)
            assert direct.is_reachable
            assert direct.distance <= first.distance + second.distance

    def test_symmetry_when_mirrored(self):
        resolver = _resolver(DISCONNECTED, symmetric=True)
        codes = resolver.get_station_codes()
        for x, y in product(codes, codes):
            assert (
                resolver.find_shortest_path(x, y).distance
                == resolver.find_shortest_path(y, x).distance
            )


def test_directed_graph_reports_unreachable_backwards():
    resolver = _resolver(LINE, symmetric=False)

    assert resolver.find_shortest_path("A", "D").distance == 3
    assert resolver.find_shortest_path("D", "A").distance is UNREACHABLE


def test_station_listings():
    resolver = _resolver(
        {
            "B": {"name": "Bravo", "edges": ["A"]},
            "A": {"name": "Alpha", "edges": []},
        }
    )

    assert resolver.get_station_codes() == ["B", "A"]
    assert resolver.get_station_names() == ["Bravo", "Alpha"]
    assert resolver.get_station_code_name_map() == {"B": "Bravo", "A": "Alpha"}


def test_station_listings_are_copies():
    resolver = _resolver(LINE)

    resolver.get_station_codes().append("X")
    resolver.get_station_code_name_map()["X"] = "X-ray"

    assert "X" not in resolver.get_station_codes()
    assert not resolver.is_known_station("X")


def test_station_lookups():
    resolver = _resolver(
        {
            "X1": {"name": "Expo", "edges": ["X2"]},
            "X2": {"name": "Expo", "edges": []},
        }
    )

    station = resolver.get_station_by_code("X2")
    assert station.name == "Expo"
    assert station.neighbor_codes == frozenset({"X1"})
    assert resolver.get_station_by_code("nope") is None
    assert resolver.get_station_by_name("Expo").code == "X1"
    assert resolver.get_station_by_name("nope") is None


def test_describe_route_adds_names():
    resolver = _resolver(LINE)
    route = resolver.find_shortest_path("A", "C")

    assert resolver.describe_route(route) == [
        RouteStop(code="A", name="Alpha"),
        RouteStop(code="B", name="Bravo"),
        RouteStop(code="C", name="Charlie"),
    ]


def test_validate_station_codes():
    resolver = _resolver(LINE)

    resolver.validate_station_codes("A", "D")
    assert resolver.is_known_station("B")

    with pytest.raises(StationNotFoundError) as excinfo:
        resolver.validate_station_codes("A", "ZZZ", "YYY")
    assert excinfo.value.station_code == "ZZZ"


class TestInternalConsistency:
    """Corrupted matrices must raise instead of looking like a missing route."""

    @pytest.fixture
    def registry(self):
        return StationRegistry.build(InMemoryStationDataset(LINE).load())

    def _matrices(self, registry, corrupt):
        from station_routing.graph import build_matrices

        built = build_matrices(registry)
        distance = built.distance.copy()
        next_hop = built.next_hop.copy()
        corrupt(distance, next_hop)
        return RoutingMatrices(distance=distance, next_hop=next_hop)

    def test_missing_next_hop(self, registry):
        def corrupt(distance, next_hop):
            next_hop[1, 3] = NO_NEXT_HOP

        resolver = PathResolver(registry, self._matrices(registry, corrupt))

        with pytest.raises(InternalConsistencyError) as excinfo:
            resolver.find_shortest_path("A", "D")
        assert excinfo.value.start_code == "A"
        assert excinfo.value.end_code == "D"
        assert excinfo.value.at_code == "B"

    def test_next_hop_cycle(self, registry):
        def corrupt(distance, next_hop):
            next_hop[1, 3] = 0

        resolver = PathResolver(registry, self._matrices(registry, corrupt))

        with pytest.raises(InternalConsistencyError):
            resolver.find_shortest_path("A", "D")

    def test_distance_shorter_than_walk(self, registry):
        def corrupt(distance, next_hop):
            distance[0, 3] = 2

        resolver = PathResolver(registry, self._matrices(registry, corrupt))

        with pytest.raises(InternalConsistencyError):
            resolver.find_shortest_path("A", "D")

    def test_distance_longer_than_walk(self, registry):
        def corrupt(distance, next_hop):
            distance[0, 1] = 4

        resolver = PathResolver(registry, self._matrices(registry, corrupt))

        with pytest.raises(InternalConsistencyError):
            resolver.find_shortest_path("A", "B")

    def test_out_of_range_next_hop(self, registry):
        def corrupt(distance, next_hop):
            next_hop[0, 3] = np.int64(99)

        resolver = PathResolver(registry, self._matrices(registry, corrupt))

        with pytest.raises(InternalConsistencyError):
            resolver.find_shortest_path("A", "D")
