"""Shortest-path algorithms for weighted graphs.

Provides Dijkstra and Bellman-Ford single-source shortest paths and
path reconstruction from a predecessor map. Runs are synchronous and
never mutate the store.
"""

import heapq
import itertools
import math

from weighted_graph.core.exceptions import (
    NegativeCycleBlocksComputationError,
    UnexpectedNegativeCycleError,
)
from weighted_graph.graph.models import Edge, PathResult, ShortestPaths
from weighted_graph.graph.store import GraphStore
from weighted_graph.utils.logging import LogContext, get_logger

logger = get_logger(__name__)

DIJKSTRA = "dijkstra"
BELLMAN_FORD = "bellman-ford"
ALGORITHMS = (DIJKSTRA, BELLMAN_FORD)


class PathFinder:
    """Single-source shortest paths over a GraphStore."""

    def __init__(self, store: GraphStore) -> None:
        """Initialize with a graph store.

        Args:
            store: The graph to search.
        """
        self.store = store

    def _initial_state(
        self,
        source_id: int,
    ) -> tuple[dict[int, float], dict[int, int | None]]:
        distances = {node.id: math.inf for node in self.store.nodes()}
        predecessors: dict[int, int | None] = dict.fromkeys(distances)
        distances[source_id] = 0.0
        return distances, predecessors

    def _edge_cost(self, edge: Edge, use_node_weights: bool) -> float:
        if use_node_weights:
            return edge.weight + self.store.require_node(edge.from_id).weight
        return edge.weight

    def dijkstra(
        self,
        source_id: int,
        use_node_weights: bool = False,
    ) -> ShortestPaths:
        """Compute shortest distances with Dijkstra's algorithm.

        Only correct for non-negative costs; choosing a suitable algorithm
        is up to the caller. Stale frontier entries are skipped when
        popped, and edges into already settled nodes are not relaxed.

        Args:
            source_id: The node to measure from.
            use_node_weights: Add the source node's weight of each edge
                to that edge's cost.

        Returns:
            ShortestPaths with a distance and predecessor for every node.

        Raises:
            NodeNotFoundError: If the source node does not exist.
        """
        self.store.require_node(source_id)

        with LogContext(algorithm=DIJKSTRA, source_id=source_id):
            distances, predecessors = self._initial_state(source_id)
            visited: set[int] = set()
            # Counter breaks ties between equal keys by push order
            counter = itertools.count()
            frontier = [(0.0, next(counter), source_id)]

            while frontier:
                distance, _, node_id = heapq.heappop(frontier)
                if node_id in visited:
                    continue
                visited.add(node_id)

                for edge in self.store.outgoing_edges(node_id):
                    if edge.to_id in visited:
                        continue
                    candidate = distance + self._edge_cost(edge, use_node_weights)
                    if candidate < distances[edge.to_id]:
                        distances[edge.to_id] = candidate
                        predecessors[edge.to_id] = node_id
                        heapq.heappush(frontier, (candidate, next(counter), edge.to_id))

            logger.debug("Shortest paths computed", settled=len(visited))

        return ShortestPaths(
            source_id=source_id,
            algorithm=DIJKSTRA,
            distances=distances,
            predecessors=predecessors,
        )

    def bellman_ford(
        self,
        source_id: int,
        use_node_weights: bool = False,
    ) -> ShortestPaths:
        """Compute shortest distances with the Bellman-Ford algorithm.

        Refuses to run when the graph's ``negative_cycles`` property is
        set and returns empty maps with a blocking issue instead. After
        at most V-1 passes one more pass checks for edges that are still
        relaxable; any found are reported, not corrected.

        Args:
            source_id: The node to measure from.
            use_node_weights: Add the source node's weight of each edge
                to that edge's cost.

        Returns:
            ShortestPaths, with ``issues`` describing any reported condition.

        Raises:
            NodeNotFoundError: If the source node does not exist.
        """
        self.store.require_node(source_id)

        with LogContext(algorithm=BELLMAN_FORD, source_id=source_id):
            if self.store.properties.negative_cycles:
                logger.warning("Graph has negative cycles; not computing")
                return ShortestPaths(
                    source_id=source_id,
                    algorithm=BELLMAN_FORD,
                    issues=[NegativeCycleBlocksComputationError(source_id)],
                )

            distances, predecessors = self._initial_state(source_id)
            edges = list(self.store.edges())

            passes = 0
            for _ in range(self.store.order - 1):
                passes += 1
                updated = False
                for edge in edges:
                    start = distances[edge.from_id]
                    if start == math.inf:
                        continue
                    candidate = start + self._edge_cost(edge, use_node_weights)
                    if candidate < distances[edge.to_id]:
                        distances[edge.to_id] = candidate
                        predecessors[edge.to_id] = edge.from_id
                        updated = True
                if not updated:
                    break

            relaxable = [
                edge.id
                for edge in edges
                if distances[edge.from_id] != math.inf
                and distances[edge.from_id] + self._edge_cost(edge, use_node_weights)
                < distances[edge.to_id]
            ]

            result = ShortestPaths(
                source_id=source_id,
                algorithm=BELLMAN_FORD,
                distances=distances,
                predecessors=predecessors,
            )
            if relaxable:
                logger.warning("Negative cycle detected", edge_ids=relaxable)
                result.issues.append(UnexpectedNegativeCycleError(source_id, relaxable))

            logger.debug("Shortest paths computed", passes=passes)

        return result

    def run(
        self,
        source_id: int,
        algorithm: str = DIJKSTRA,
        use_node_weights: bool = False,
    ) -> ShortestPaths:
        """Run the named shortest-path algorithm.

        Args:
            source_id: The node to measure from.
            algorithm: ``"dijkstra"`` or ``"bellman-ford"``.
            use_node_weights: Include node weights in edge costs.

        Returns:
            The algorithm's ShortestPaths.

        Raises:
            ValueError: If the algorithm name is unknown.
        """
        if algorithm == DIJKSTRA:
            return self.dijkstra(source_id, use_node_weights)
        if algorithm == BELLMAN_FORD:
            return self.bellman_ford(source_id, use_node_weights)
        raise ValueError(f"Unknown algorithm '{algorithm}', expected one of {ALGORITHMS}")

    def reconstruct_path(
        self,
        result: ShortestPaths,
        target_id: int,
    ) -> PathResult:
        """Rebuild the path to a target from a run's predecessor map.

        Walks predecessor links back from the target until a node with no
        predecessor, then reverses. An unreached target yields a
        single-node path with infinite distance.

        Args:
            result: The run to read predecessors and distances from.
            target_id: The node the path should end at.

        Returns:
            PathResult in source to target order.

        Raises:
            NodeNotFoundError: If the target node does not exist.
        """
        self.store.require_node(target_id)

        node_ids: list[int] = []
        seen: set[int] = set()
        current: int | None = target_id
        while current is not None and current not in seen:
            seen.add(current)
            node_ids.append(current)
            current = result.predecessors.get(current)

        node_ids.reverse()
        return PathResult(
            node_ids=node_ids,
            names=[self.store.require_node(i).name for i in node_ids],
            distance=result.distances.get(target_id, math.inf),
        )

    def shortest_path(
        self,
        source_id: int,
        target_id: int,
        algorithm: str = DIJKSTRA,
        use_node_weights: bool = False,
    ) -> PathResult:
        """Find the shortest path between two nodes.

        Args:
            source_id: Source node id.
            target_id: Target node id.
            algorithm: ``"dijkstra"`` or ``"bellman-ford"``.
            use_node_weights: Include node weights in edge costs.

        Returns:
            The reconstructed PathResult.
        """
        result = self.run(source_id, algorithm, use_node_weights)
        return self.reconstruct_path(result, target_id)
