"""Unit tests for custom exceptions."""

import pytest

from weighted_graph.core.exceptions import (
    ConfigurationError,
    DocumentError,
    DocumentMalformedError,
    DocumentNotFoundError,
    EdgeNotFoundError,
    GraphError,
    IdentifierConflictError,
    NegativeCycleBlocksComputationError,
    NodeNotFoundError,
    PathComputationError,
    UnexpectedNegativeCycleError,
    UnresolvedEndpointError,
    WeightedGraphError,
)


class TestWeightedGraphError:
    """Tests for base WeightedGraphError."""

    def test_basic_creation(self) -> None:
        """Test basic exception creation."""
        exc = WeightedGraphError("Test error")
        assert exc.message == "Test error"
        assert exc.details == {}
        assert exc.cause is None
        assert str(exc) == "Test error"

    def test_with_cause(self) -> None:
        """Test exception with cause."""
        cause = ValueError("Original error")
        exc = WeightedGraphError("Test error", cause=cause)
        assert exc.cause is cause

    def test_to_dict(self) -> None:
        """Test conversion to dictionary."""
        exc = WeightedGraphError("Test error", details={"key": "value"})
        assert exc.to_dict() == {
            "error": "WeightedGraphError",
            "message": "Test error",
            "details": {"key": "value"},
        }

    def test_to_dict_without_details(self) -> None:
        """Test details are omitted when empty."""
        assert "details" not in WeightedGraphError("x").to_dict()


class TestGraphErrors:
    """Tests for graph errors."""

    def test_node_not_found(self) -> None:
        """Test NodeNotFoundError."""
        exc = NodeNotFoundError(7)
        assert isinstance(exc, GraphError)
        assert "7" in exc.message
        assert exc.details == {"node_id": 7}

    def test_edge_not_found(self) -> None:
        """Test EdgeNotFoundError."""
        exc = EdgeNotFoundError(3)
        assert exc.details == {"edge_id": 3}

    def test_identifier_conflict(self) -> None:
        """Test IdentifierConflictError."""
        exc = IdentifierConflictError("edge", 4)
        assert exc.message == "Edge with ID 4 already exists"
        assert exc.details == {"kind": "edge", "id": 4}

    def test_unresolved_endpoint(self) -> None:
        """Test UnresolvedEndpointError."""
        exc = UnresolvedEndpointError(1, 2, 3, [3])
        assert isinstance(exc, GraphError)
        assert exc.details["missing"] == [3]
        assert exc.to_dict()["error"] == "UnresolvedEndpointError"

    def test_path_computation_errors(self) -> None:
        """Test path computation conditions share a base class."""
        blocked = NegativeCycleBlocksComputationError(1)
        unexpected = UnexpectedNegativeCycleError(1, [2, 3])
        assert isinstance(blocked, PathComputationError)
        assert isinstance(unexpected, PathComputationError)
        assert unexpected.details == {"source_id": 1, "edge_ids": [2, 3]}


class TestDocumentErrors:
    """Tests for document errors."""

    def test_not_found(self) -> None:
        """Test DocumentNotFoundError."""
        exc = DocumentNotFoundError("/tmp/g.json")
        assert isinstance(exc, DocumentError)
        assert exc.details == {"path": "/tmp/g.json"}

    def test_malformed_with_cause(self) -> None:
        """Test DocumentMalformedError keeps its cause."""
        cause = ValueError("bad")
        exc = DocumentMalformedError("g.json", "bad json", cause=cause)
        assert exc.cause is cause
        assert exc.details["reason"] == "bad json"


class TestHierarchy:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize(
        "exc",
        [
            ConfigurationError("x"),
            GraphError("x"),
            NodeNotFoundError(1),
            IdentifierConflictError("node", 1),
            DocumentMalformedError("p", "r"),
            UnexpectedNegativeCycleError(1, []),
        ],
    )
    def test_all_derive_from_base(self, exc: WeightedGraphError) -> None:
        """Test every error can be caught through the base class."""
        with pytest.raises(WeightedGraphError):
            raise exc
