"""Graph models for weighted graphs.

Defines the node and edge entities held by a GraphStore, the derived
graph properties, and the results of shortest-path queries.

Nodes and edges refer to each other by integer id only. The owning store
resolves ids through its node and edge maps, so no object graph cycles
exist between the entities.
"""

from dataclasses import dataclass, field
from typing import Any

from weighted_graph.core.exceptions import PathComputationError


@dataclass
class Node:
    """A vertex in the graph.

    Attributes:
        id: Unique identifier within the owning store.
        name: Display label (not required to be unique).
        weight: Scalar weight, may be negative.
        edges_in: Ids of edges ending at this node, in insertion order.
        edges_out: Ids of edges starting at this node, in insertion order.
    """

    id: int
    name: str
    weight: float = 0.0
    edges_in: list[int] = field(default_factory=list)
    edges_out: list[int] = field(default_factory=list)

    @property
    def degree_in(self) -> int:
        """Number of incoming edges."""
        return len(self.edges_in)

    @property
    def degree_out(self) -> int:
        """Number of outgoing edges."""
        return len(self.edges_out)

    @property
    def degree(self) -> int:
        """Total number of incident edges (a self-loop counts twice)."""
        return self.degree_in + self.degree_out

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted dictionary representation."""
        return {"id": self.id, "name": self.name, "weight": self.weight}


@dataclass
class Edge:
    """A directed, weighted connection between two nodes.

    Attributes:
        id: Unique identifier within the owning store.
        from_id: Id of the source node.
        to_id: Id of the target node.
        weight: Scalar weight, may be negative.
    """

    id: int
    from_id: int
    to_id: int
    weight: float = 1.0

    @property
    def is_self_loop(self) -> bool:
        """Whether the edge starts and ends at the same node."""
        return self.from_id == self.to_id

    def is_reverse_of(self, other: "Edge") -> bool:
        """Check if ``other`` runs the opposite way with the same weight."""
        return (
            self.from_id == other.to_id
            and self.to_id == other.from_id
            and self.weight == other.weight
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted dictionary representation."""
        return {
            "id": self.id,
            "fromId": self.from_id,
            "toId": self.to_id,
            "weight": self.weight,
        }


@dataclass
class GraphProperties:
    """Structural properties derived from the current nodes and edges.

    Attributes:
        directed: False once any two distinct edges mirror each other
            with equal weight.
        weighted: Whether edge weights are meaningful. Chosen when the
            graph is created, never derived.
        self_looping: Whether any edge starts and ends at the same node.
        connected: Whether at most one component was found.
        connection_degree: Number of components found by the
            outgoing-edge traversal.
        negative_weights: Whether any node or edge weight is negative.
        negative_cycles: Whether a negative cycle is reachable from
            some node.
    """

    directed: bool = True
    weighted: bool = True
    self_looping: bool = False
    connected: bool = True
    connection_degree: int = 1
    negative_weights: bool = False
    negative_cycles: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted dictionary representation."""
        return {
            "directed": self.directed,
            "weighted": self.weighted,
            "selfLooping": self.self_looping,
            "connected": self.connected,
            "connectionDegree": self.connection_degree,
            "negativeWeights": self.negative_weights,
            "negativeCycles": self.negative_cycles,
        }


@dataclass
class ShortestPaths:
    """Result of a single-source shortest-path run.

    Attributes:
        source_id: The node distances are measured from.
        algorithm: Name of the algorithm that produced the result.
        distances: Best known distance per node id (``math.inf`` if unreached).
        predecessors: Previous node id on the best path (None for the
            source and unreached nodes).
        issues: Conditions reported by the run instead of being raised.
    """

    source_id: int
    algorithm: str
    distances: dict[int, float] = field(default_factory=dict)
    predecessors: dict[int, int | None] = field(default_factory=dict)
    issues: list[PathComputationError] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """Whether the run produced no distances at all."""
        return not self.distances

    @property
    def ok(self) -> bool:
        """Whether the run completed without reporting any issue."""
        return not self.issues


@dataclass
class PathResult:
    """A reconstructed path from a source to a target.

    Attributes:
        node_ids: Node ids in source to target order.
        names: Node names in the same order.
        distance: Distance of the target in the run the path came from.
    """

    node_ids: list[int]
    names: list[str]
    distance: float = float("inf")

    @property
    def reachable(self) -> bool:
        """Whether the target was reached from the source."""
        return self.distance != float("inf")

    def __str__(self) -> str:
        return " -> ".join(self.names)
