"""Graph module for weighted graphs.

Provides the graph store, structural property analysis, shortest paths
and persistence.
"""

from weighted_graph.graph.analysis import PropertyAnalyzer, build_rustworkx_graph
from weighted_graph.graph.models import (
    Edge,
    GraphProperties,
    Node,
    PathResult,
    ShortestPaths,
)
from weighted_graph.graph.pathfinding import BELLMAN_FORD, DIJKSTRA, PathFinder
from weighted_graph.graph.persistence import GraphPersistence, create_persistence
from weighted_graph.graph.schemas import EdgeDocument, GraphDocument, NodeDocument
from weighted_graph.graph.store import GraphStore

__all__ = [
    # Store
    "GraphStore",
    # Models
    "Node",
    "Edge",
    "GraphProperties",
    "ShortestPaths",
    "PathResult",
    # Analysis
    "PropertyAnalyzer",
    "build_rustworkx_graph",
    # Path finding
    "PathFinder",
    "DIJKSTRA",
    "BELLMAN_FORD",
    # Persistence
    "GraphPersistence",
    "create_persistence",
    "GraphDocument",
    "NodeDocument",
    "EdgeDocument",
]
