"""Custom exceptions for Weighted Graph.

This module defines a hierarchy of exceptions used throughout the library
for consistent error handling and reporting. Every condition here is
recoverable: the operation that reports it leaves the graph in its prior
valid state.
"""

from typing import Any


class WeightedGraphError(Exception):
    """Base exception for all Weighted Graph errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured reporting."""
        result: dict[str, Any] = {
            "error": self.__class__.__name__,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(WeightedGraphError):
    """Error in library configuration."""

    pass


# =============================================================================
# Graph Errors
# =============================================================================


class GraphError(WeightedGraphError):
    """Base class for graph-related errors."""

    pass


class NodeNotFoundError(GraphError):
    """Requested node not found in graph."""

    def __init__(self, node_id: int) -> None:
        super().__init__(
            message=f"Node not found: {node_id}",
            details={"node_id": node_id},
        )


class EdgeNotFoundError(GraphError):
    """Requested edge not found in graph."""

    def __init__(self, edge_id: int) -> None:
        super().__init__(
            message=f"Edge not found: {edge_id}",
            details={"edge_id": edge_id},
        )


class IdentifierConflictError(GraphError):
    """A node or edge with the same id already exists."""

    def __init__(self, kind: str, identifier: int) -> None:
        super().__init__(
            message=f"{kind.capitalize()} with ID {identifier} already exists",
            details={"kind": kind, "id": identifier},
        )


class UnresolvedEndpointError(GraphError):
    """An edge references a node id that is not in the graph."""

    def __init__(
        self,
        edge_id: int,
        from_id: int,
        to_id: int,
        missing: list[int],
    ) -> None:
        super().__init__(
            message=f"Edge {edge_id} references missing node(s): {missing}",
            details={
                "edge_id": edge_id,
                "from_id": from_id,
                "to_id": to_id,
                "missing": missing,
            },
        )


class PathComputationError(GraphError):
    """Base class for conditions reported by shortest-path runs."""

    pass


class NegativeCycleBlocksComputationError(PathComputationError):
    """Bellman-Ford refused to run on a graph flagged with negative cycles."""

    def __init__(self, source_id: int) -> None:
        super().__init__(
            message="Graph has negative cycles; shortest paths are undefined",
            details={"source_id": source_id},
        )


class UnexpectedNegativeCycleError(PathComputationError):
    """Edges were still relaxable after Bellman-Ford's main passes."""

    def __init__(self, source_id: int, edge_ids: list[int]) -> None:
        super().__init__(
            message="Negative cycle detected after relaxation",
            details={"source_id": source_id, "edge_ids": edge_ids},
        )


# =============================================================================
# Document Errors
# =============================================================================


class DocumentError(WeightedGraphError):
    """Base class for load/save document errors."""

    pass


class DocumentNotFoundError(DocumentError):
    """Graph document does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(
            message=f"Graph file not found: {path}",
            details={"path": path},
        )


class DocumentMalformedError(DocumentError):
    """Graph document could not be decoded or failed validation."""

    def __init__(self, path: str, reason: str, cause: Exception | None = None) -> None:
        super().__init__(
            message=f"Malformed graph document {path}: {reason}",
            details={"path": path, "reason": reason},
            cause=cause,
        )
