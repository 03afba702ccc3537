"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the routing core to where the station network is stored:
- JSON documents
- Stations/edges CSV files
- Already parsed mappings (config services, tests)
"""
