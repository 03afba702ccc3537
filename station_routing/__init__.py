"""Top-level package for the station routing engine.

Given a fixed network of stations and direct connections, the engine
precomputes all-pairs shortest paths (counted in connections) once and
then answers route queries from the precomputed tables.

Typical wiring:

    from station_routing.adapters.dataset import JSONStationDataset
    from station_routing.services import build_routing_engine

    dataset = JSONStationDataset("data/stations.json").load()
    engine = build_routing_engine(dataset)
    engine.resolver.find_shortest_path("NS1 EW24", "NS4")
"""
