"""Structural property analysis for weighted graphs.

Every routine here is read-only and recomputes its answer from scratch
over the node and edge maps it is given. The store calls ``analyze``
after each mutation, so properties are never stale.
"""

import math
from collections.abc import Mapping

import rustworkx as rx

from weighted_graph.graph.models import Edge, GraphProperties, Node
from weighted_graph.utils.logging import get_logger

logger = get_logger(__name__)


def build_rustworkx_graph(
    nodes: Mapping[int, Node],
    edges: Mapping[int, Edge],
) -> rx.PyDiGraph:
    """Build a RustworkX directed graph mirroring the given maps.

    Node payloads are the ``Node`` objects and edge payloads the ``Edge``
    objects. Graph indices follow insertion order of ``nodes``.

    Args:
        nodes: Node map keyed by node id.
        edges: Edge map keyed by edge id.

    Returns:
        A new PyDiGraph.
    """
    graph: rx.PyDiGraph = rx.PyDiGraph()
    index_of = {node_id: graph.add_node(node) for node_id, node in nodes.items()}
    for edge in edges.values():
        graph.add_edge(index_of[edge.from_id], index_of[edge.to_id], edge)
    return graph


class PropertyAnalyzer:
    """Derives structural properties of a graph."""

    def __init__(
        self,
        nodes: Mapping[int, Node],
        edges: Mapping[int, Edge],
    ) -> None:
        """Initialize with the graph's node and edge maps.

        Args:
            nodes: Node map keyed by node id.
            edges: Edge map keyed by edge id.
        """
        self._nodes = nodes
        self._edges = edges

    def analyze(self, weighted: bool = True) -> GraphProperties:
        """Recompute every derived property.

        Args:
            weighted: The graph's weighted flag, carried through unchanged.

        Returns:
            Freshly derived GraphProperties.
        """
        connected, components = self.check_connectivity()
        properties = GraphProperties(
            directed=self.is_directed(),
            weighted=weighted,
            self_looping=self.has_self_loop(),
            connected=connected,
            connection_degree=components,
            negative_weights=self.has_negative_weights(),
            negative_cycles=self.has_negative_cycle(),
        )
        logger.debug(
            "Derived graph properties",
            node_count=len(self._nodes),
            edge_count=len(self._edges),
            **properties.to_dict(),
        )
        return properties

    def check_connectivity(self) -> tuple[bool, int]:
        """Check connectivity and count components.

        An empty graph is connected with a single (empty) component.

        Returns:
            Tuple of (connected, component count).
        """
        if not self._nodes:
            return True, 1

        components = self.count_components()
        if components > 1:
            return False, components
        return True, 1

    def count_components(self) -> int:
        """Count components by outgoing-edge reachability.

        Nodes are seeded in insertion order. Each node not yet visited
        starts a new traversal that follows outgoing edges only, and
        every traversal counts as one component. The count therefore
        depends on edge direction and on seed order.

        Returns:
            Number of traversals started.
        """
        visited: set[int] = set()
        components = 0
        for node_id in self._nodes:
            if node_id not in visited:
                self._visit_outgoing(node_id, visited)
                components += 1
        return components

    def _visit_outgoing(self, start_id: int, visited: set[int]) -> None:
        stack = [start_id]
        visited.add(start_id)
        while stack:
            current = self._nodes[stack.pop()]
            for edge_id in current.edges_out:
                target_id = self._edges[edge_id].to_id
                if target_id not in visited:
                    visited.add(target_id)
                    stack.append(target_id)

    def weak_component_count(self) -> int:
        """Count weakly connected components, ignoring edge direction.

        Unlike ``count_components`` this is classic weak connectivity.
        It is informational only and never feeds the derived properties.

        Returns:
            Number of weakly connected components (0 for an empty graph).
        """
        graph = build_rustworkx_graph(self._nodes, self._edges)
        return len(rx.weakly_connected_components(graph))

    def has_self_loop(self) -> bool:
        """Check whether any edge starts and ends at the same node."""
        return any(edge.is_self_loop for edge in self._edges.values())

    def has_negative_weights(self) -> bool:
        """Check whether any edge or node weight is strictly negative."""
        if any(edge.weight < 0 for edge in self._edges.values()):
            return True
        return any(node.weight < 0 for node in self._nodes.values())

    def has_negative_cycle(self) -> bool:
        """Check for a negative cycle reachable from any node.

        Runs V-1 rounds of Bellman-Ford relaxation from every node in
        turn, then looks for an edge that can still be relaxed. Costs
        O(V^2 * E); node weights are not considered.

        Returns:
            True as soon as one source reaches a negative cycle.
        """
        if not self._nodes:
            return False

        rounds = len(self._nodes) - 1
        for source_id in self._nodes:
            distances = dict.fromkeys(self._nodes, math.inf)
            distances[source_id] = 0.0

            for _ in range(rounds):
                for edge in self._edges.values():
                    start = distances[edge.from_id]
                    if start != math.inf and start + edge.weight < distances[edge.to_id]:
                        distances[edge.to_id] = start + edge.weight

            for edge in self._edges.values():
                start = distances[edge.from_id]
                if start != math.inf and start + edge.weight < distances[edge.to_id]:
                    return True

        return False

    def is_directed(self) -> bool:
        """Infer directedness from edge symmetry.

        The graph counts as undirected as soon as two distinct edges run
        between the same pair of nodes in opposite directions with exactly
        equal weight. A self-loop never pairs with itself.

        Returns:
            False if such a pair exists anywhere, True otherwise.
        """
        for edge in self._edges.values():
            for other in self._edges.values():
                if edge.id != other.id and edge.is_reverse_of(other):
                    return False
        return True
