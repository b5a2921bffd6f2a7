"""Weighted Graph - in-memory weighted graphs with shortest paths.

A small library for building directed and undirected weighted graphs with:
- Eagerly derived structural properties (connectivity, self-loops, negativity)
- Dijkstra and Bellman-Ford shortest paths with path reconstruction
- JSON persistence
"""

__version__ = "0.1.0"
__author__ = "Weighted Graph Team"
