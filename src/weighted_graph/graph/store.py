"""Graph store for weighted graphs.

Owns the node and edge maps, keeps adjacency lists consistent with the
edge map on every mutation, and re-derives all structural properties
after each successful change.
"""

from collections.abc import Iterator
from typing import Any

import rustworkx as rx
from pydantic import ValidationError

from weighted_graph.config import get_settings
from weighted_graph.core.exceptions import (
    DocumentMalformedError,
    EdgeNotFoundError,
    IdentifierConflictError,
    NodeNotFoundError,
    UnresolvedEndpointError,
)
from weighted_graph.graph.analysis import PropertyAnalyzer, build_rustworkx_graph
from weighted_graph.graph.models import Edge, GraphProperties, Node
from weighted_graph.graph.schemas import GraphDocument
from weighted_graph.utils.logging import get_logger

logger = get_logger(__name__)


class GraphStore:
    """An in-memory weighted graph.

    Nodes and edges live in two maps keyed by id. Adjacency lists on each
    node hold edge ids, and edges hold node ids, so every cross reference
    is resolved through the store.

    Not safe for concurrent mutation.
    """

    def __init__(self, weighted: bool | None = None) -> None:
        """Initialize an empty graph.

        Args:
            weighted: Whether edge weights are meaningful. Defaults to the
                configured ``GRAPH_WEIGHTED`` setting.
        """
        if weighted is None:
            weighted = get_settings().graph.weighted

        self._nodes: dict[int, Node] = {}
        self._edges: dict[int, Edge] = {}
        self._last_node_id = -1
        self._last_edge_id = -1
        self._properties = GraphProperties(weighted=weighted)

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def order(self) -> int:
        """Get the number of nodes in the graph."""
        return len(self._nodes)

    @property
    def size(self) -> int:
        """Get the number of edges in the graph."""
        return len(self._edges)

    @property
    def properties(self) -> GraphProperties:
        """Get the derived properties as of the latest mutation or load."""
        return self._properties

    @property
    def weighted(self) -> bool:
        """Get the graph's weighted flag."""
        return self._properties.weighted

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def has_node(self, node_id: int) -> bool:
        """Check if a node exists."""
        return node_id in self._nodes

    def has_edge(self, edge_id: int) -> bool:
        """Check if an edge exists."""
        return edge_id in self._edges

    def get_node(self, node_id: int) -> Node | None:
        """Get a node by its id, or None if not found."""
        return self._nodes.get(node_id)

    def get_edge(self, edge_id: int) -> Edge | None:
        """Get an edge by its id, or None if not found."""
        return self._edges.get(edge_id)

    def require_node(self, node_id: int) -> Node:
        """Get a node by its id.

        Raises:
            NodeNotFoundError: If the node does not exist.
        """
        node = self._nodes.get(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)
        return node

    def require_edge(self, edge_id: int) -> Edge:
        """Get an edge by its id.

        Raises:
            EdgeNotFoundError: If the edge does not exist.
        """
        edge = self._edges.get(edge_id)
        if edge is None:
            raise EdgeNotFoundError(edge_id)
        return edge

    def nodes(self) -> Iterator[Node]:
        """Iterate over nodes in insertion order."""
        return iter(self._nodes.values())

    def edges(self) -> Iterator[Edge]:
        """Iterate over edges in insertion order."""
        return iter(self._edges.values())

    def outgoing_edges(self, node_id: int) -> list[Edge]:
        """Get the outgoing edges of a node, in insertion order.

        Returns:
            List of edges, empty if the node does not exist.
        """
        node = self._nodes.get(node_id)
        if node is None:
            return []
        return [self.require_edge(edge_id) for edge_id in node.edges_out]

    def incoming_edges(self, node_id: int) -> list[Edge]:
        """Get the incoming edges of a node, in insertion order.

        Returns:
            List of edges, empty if the node does not exist.
        """
        node = self._nodes.get(node_id)
        if node is None:
            return []
        return [self.require_edge(edge_id) for edge_id in node.edges_in]

    def next_node_id(self) -> int:
        """Get an unused node id, one past the largest this store has seen."""
        return self._last_node_id + 1

    def next_edge_id(self) -> int:
        """Get an unused edge id, one past the largest this store has seen."""
        return self._last_edge_id + 1

    def analyzer(self) -> PropertyAnalyzer:
        """Get a property analyzer over the current state."""
        return PropertyAnalyzer(self._nodes, self._edges)

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def add_node(self, node_id: int, name: str, weight: float = 0.0) -> Node:
        """Add a node to the graph.

        Args:
            node_id: Unique node id.
            name: Node label.
            weight: Node weight.

        Returns:
            The added node.

        Raises:
            IdentifierConflictError: If a node with the same id exists.
                The graph is left unchanged.
        """
        if node_id in self._nodes:
            logger.warning("Cannot add node - id already exists", node_id=node_id)
            raise IdentifierConflictError("node", node_id)

        node = Node(id=node_id, name=name, weight=weight)
        self._nodes[node_id] = node
        self._last_node_id = max(self._last_node_id, node_id)

        logger.debug("Added node", node_id=node_id, name=name)
        self.refresh_properties()
        return node

    def remove_node(self, node_id: int) -> bool:
        """Remove a node and every edge incident to it.

        Args:
            node_id: The node's id.

        Returns:
            True if the node was removed, False if not found.
        """
        node = self._nodes.get(node_id)
        if node is None:
            return False

        # Incident edges go first so no edge outlives an endpoint
        for edge_id in list(node.edges_in):
            self.remove_edge(edge_id)
        for edge_id in list(node.edges_out):
            self.remove_edge(edge_id)

        del self._nodes[node_id]

        logger.debug("Removed node", node_id=node_id)
        self.refresh_properties()
        return True

    def add_edge(
        self,
        edge_id: int,
        from_id: int,
        to_id: int,
        weight: float = 1.0,
    ) -> Edge:
        """Add a directed edge between two existing nodes.

        Self-edges (``from_id == to_id``) are allowed.

        Args:
            edge_id: Unique edge id.
            from_id: Source node id.
            to_id: Target node id.
            weight: Edge weight.

        Returns:
            The added edge.

        Raises:
            UnresolvedEndpointError: If either endpoint does not exist.
            IdentifierConflictError: If an edge with the same id exists.
                In both cases the graph is left unchanged.
        """
        from_node = self._nodes.get(from_id)
        to_node = self._nodes.get(to_id)

        if from_node is None or to_node is None:
            missing = [i for i in (from_id, to_id) if i not in self._nodes]
            logger.warning(
                "Cannot add edge - node not found",
                edge_id=edge_id,
                from_id=from_id,
                to_id=to_id,
                from_exists=from_node is not None,
                to_exists=to_node is not None,
            )
            raise UnresolvedEndpointError(edge_id, from_id, to_id, missing)

        if edge_id in self._edges:
            logger.warning("Cannot add edge - id already exists", edge_id=edge_id)
            raise IdentifierConflictError("edge", edge_id)

        edge = Edge(id=edge_id, from_id=from_id, to_id=to_id, weight=weight)
        from_node.edges_out.append(edge_id)
        to_node.edges_in.append(edge_id)
        self._edges[edge_id] = edge
        self._last_edge_id = max(self._last_edge_id, edge_id)

        logger.debug(
            "Added edge",
            edge_id=edge_id,
            from_id=from_id,
            to_id=to_id,
            weight=weight,
        )
        self.refresh_properties()
        return edge

    def remove_edge(self, edge_id: int) -> bool:
        """Remove an edge and detach it from both endpoints.

        Args:
            edge_id: The edge's id.

        Returns:
            True if the edge was removed, False if not found.
        """
        edge = self._edges.get(edge_id)
        if edge is None:
            return False

        self._nodes[edge.from_id].edges_out.remove(edge_id)
        self._nodes[edge.to_id].edges_in.remove(edge_id)
        del self._edges[edge_id]

        logger.debug("Removed edge", edge_id=edge_id)
        self.refresh_properties()
        return True

    def clear(self) -> None:
        """Remove all nodes and edges from the graph."""
        self._nodes.clear()
        self._edges.clear()
        logger.debug("Graph cleared")
        self.refresh_properties()

    def refresh_properties(self) -> GraphProperties:
        """Re-derive every structural property from the current state.

        Returns:
            The freshly derived properties.
        """
        self._properties = self.analyzer().analyze(weighted=self._properties.weighted)
        return self._properties

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Convert graph to dictionary for serialization.

        Uses the current properties as they are; ``save`` re-derives first.

        Returns:
            Dictionary in the persisted document layout.
        """
        return {
            "nodes": [node.to_dict() for node in self._nodes.values()],
            "edges": [edge.to_dict() for edge in self._edges.values()],
            **self._properties.to_dict(),
        }

    def save(self, indent: int | None = None) -> bytes:
        """Serialize the graph to a JSON document.

        Properties are re-derived before serializing.

        Args:
            indent: JSON indentation. Defaults to the configured value.

        Returns:
            UTF-8 encoded JSON.
        """
        if indent is None:
            indent = get_settings().graph.json_indent

        self.refresh_properties()
        document = GraphDocument.model_validate(self.to_dict())
        return document.model_dump_json(by_alias=True, indent=indent).encode("utf-8")

    def load(self, data: bytes | str, source: str = "<memory>") -> None:
        """Replace the graph's contents with a JSON document.

        Nodes are indexed first; edges whose endpoints do not resolve are
        dropped. Derived properties are taken from the document as they
        are, not recomputed. Call ``refresh_properties`` for fresh ones.

        Args:
            data: The JSON document.
            source: Where the document came from, for error reporting.

        Raises:
            DocumentMalformedError: If the document is not valid JSON or
                does not match the schema. The graph is left unchanged.
        """
        try:
            document = GraphDocument.model_validate_json(data)
        except ValidationError as e:
            logger.warning("Rejected malformed graph document", source=source)
            raise DocumentMalformedError(
                source,
                f"{e.error_count()} validation error(s)",
                cause=e,
            ) from e

        nodes: dict[int, Node] = {}
        for node_doc in document.nodes:
            nodes[node_doc.id] = Node(
                id=node_doc.id,
                name=node_doc.name,
                weight=node_doc.weight,
            )

        edges: dict[int, Edge] = {}
        for edge_doc in document.edges:
            from_node = nodes.get(edge_doc.from_id)
            to_node = nodes.get(edge_doc.to_id)
            if from_node is None or to_node is None:
                logger.debug(
                    "Dropped edge with unresolved endpoint",
                    edge_id=edge_doc.id,
                    from_id=edge_doc.from_id,
                    to_id=edge_doc.to_id,
                )
                continue
            if edge_doc.id in edges:
                # Last occurrence wins; detach the earlier one
                previous = edges[edge_doc.id]
                nodes[previous.from_id].edges_out.remove(previous.id)
                nodes[previous.to_id].edges_in.remove(previous.id)

            edges[edge_doc.id] = Edge(
                id=edge_doc.id,
                from_id=edge_doc.from_id,
                to_id=edge_doc.to_id,
                weight=edge_doc.weight,
            )
            from_node.edges_out.append(edge_doc.id)
            to_node.edges_in.append(edge_doc.id)

        self._nodes = nodes
        self._edges = edges
        self._last_node_id = max(nodes, default=-1)
        self._last_edge_id = max(edges, default=-1)
        self._properties = GraphProperties(
            directed=document.directed,
            weighted=document.weighted,
            self_looping=document.self_looping,
            connected=document.connected,
            connection_degree=document.connection_degree,
            negative_weights=document.negative_weights,
            negative_cycles=document.negative_cycles,
        )

        logger.debug(
            "Loaded graph document",
            source=source,
            node_count=len(nodes),
            edge_count=len(edges),
            dropped_edges=len(document.edges) - len(edges),
        )

    @classmethod
    def from_bytes(cls, data: bytes | str, source: str = "<memory>") -> "GraphStore":
        """Create a graph from a JSON document.

        Args:
            data: The JSON document.
            source: Where the document came from, for error reporting.

        Returns:
            New GraphStore instance.
        """
        store = cls()
        store.load(data, source=source)
        return store

    def to_rustworkx(self) -> rx.PyDiGraph:
        """Export the graph as a RustworkX directed graph.

        Node payloads are ``Node`` objects and edge payloads ``Edge``
        objects. The export is a copy; mutating it does not touch the store.

        Returns:
            A new PyDiGraph.
        """
        return build_rustworkx_graph(self._nodes, self._edges)

    # -------------------------------------------------------------------------
    # Reporting
    # -------------------------------------------------------------------------

    def summary(self) -> str:
        """Render a plain-text report of the graph.

        Returns:
            Multi-line description of properties, nodes and edges.
        """
        props = self._properties
        lines = [
            "=== Graph ===",
            f"Order (Nodes): {self.order}",
            f"Size (Edges): {self.size}",
            f"Directed: {props.directed}",
            f"Weighted: {props.weighted}",
            f"Self-looping: {props.self_looping}",
            f"Connected: {props.connected}",
            f"Connection Degree: {props.connection_degree}",
            f"Weak Components: {self.analyzer().weak_component_count()}",
            f"Negative Weights: {props.negative_weights}",
            f"Negative Cycles: {props.negative_cycles}",
            "",
            "--- Nodes ---",
        ]
        for node in self._nodes.values():
            lines.append(
                f"ID: {node.id}, Name: {node.name}, Weight: {node.weight}, "
                f"Degree: {node.degree} (In: {node.degree_in}, Out: {node.degree_out})"
            )

        lines.extend(["", "--- Edges ---"])
        for edge in self._edges.values():
            source = self._nodes[edge.from_id]
            target = self._nodes[edge.to_id]
            lines.append(
                f"ID: {edge.id}, From: {source.name} (ID: {source.id}) -> "
                f"To: {target.name} (ID: {target.id}), Weight: {edge.weight}"
            )
        return "\n".join(lines)
