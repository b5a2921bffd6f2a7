"""Tests for graph models."""

import math

from weighted_graph.core.exceptions import NegativeCycleBlocksComputationError
from weighted_graph.graph.models import (
    Edge,
    GraphProperties,
    Node,
    PathResult,
    ShortestPaths,
)


class TestNode:
    """Tests for Node class."""

    def test_basic_creation(self) -> None:
        """Test basic node creation."""
        node = Node(id=1, name="A", weight=-2.0)
        assert node.id == 1
        assert node.name == "A"
        assert node.weight == -2.0
        assert node.edges_in == []
        assert node.edges_out == []

    def test_degrees(self) -> None:
        """Test degrees follow the adjacency lists."""
        node = Node(id=1, name="A", edges_in=[3], edges_out=[4, 5])
        assert node.degree_in == 1
        assert node.degree_out == 2
        assert node.degree == 3

    def test_adjacency_lists_not_shared(self) -> None:
        """Test each node gets its own adjacency lists."""
        a = Node(id=1, name="A")
        b = Node(id=2, name="B")
        a.edges_out.append(1)
        assert b.edges_out == []

    def test_to_dict(self) -> None:
        """Test dictionary conversion omits adjacency."""
        node = Node(id=1, name="A", weight=1.5, edges_out=[2])
        assert node.to_dict() == {"id": 1, "name": "A", "weight": 1.5}


class TestEdge:
    """Tests for Edge class."""

    def test_self_loop(self) -> None:
        """Test self-loop detection."""
        assert Edge(id=1, from_id=2, to_id=2).is_self_loop
        assert not Edge(id=1, from_id=2, to_id=3).is_self_loop

    def test_is_reverse_of(self) -> None:
        """Test reverse detection requires equal weight."""
        edge = Edge(id=1, from_id=1, to_id=2, weight=1.0)
        assert edge.is_reverse_of(Edge(id=2, from_id=2, to_id=1, weight=1.0))
        assert not edge.is_reverse_of(Edge(id=2, from_id=2, to_id=1, weight=2.0))
        assert not edge.is_reverse_of(Edge(id=2, from_id=1, to_id=2, weight=1.0))

    def test_to_dict(self) -> None:
        """Test dictionary conversion uses persisted field names."""
        edge = Edge(id=3, from_id=1, to_id=2, weight=-1.0)
        assert edge.to_dict() == {"id": 3, "fromId": 1, "toId": 2, "weight": -1.0}


class TestGraphProperties:
    """Tests for GraphProperties class."""

    def test_defaults_describe_empty_graph(self) -> None:
        """Test defaults."""
        props = GraphProperties()
        assert props.directed is True
        assert props.weighted is True
        assert props.self_looping is False
        assert props.connected is True
        assert props.connection_degree == 1
        assert props.negative_weights is False
        assert props.negative_cycles is False

    def test_to_dict(self) -> None:
        """Test dictionary conversion keys."""
        data = GraphProperties(connection_degree=3, connected=False).to_dict()
        assert data["connectionDegree"] == 3
        assert data["connected"] is False
        assert set(data) == {
            "directed",
            "weighted",
            "selfLooping",
            "connected",
            "connectionDegree",
            "negativeWeights",
            "negativeCycles",
        }


class TestShortestPaths:
    """Tests for ShortestPaths class."""

    def test_empty_result(self) -> None:
        """Test an empty result."""
        result = ShortestPaths(source_id=1, algorithm="dijkstra")
        assert result.is_empty
        assert result.ok

    def test_result_with_issue(self) -> None:
        """Test a result carrying an issue."""
        result = ShortestPaths(
            source_id=1,
            algorithm="bellman-ford",
            issues=[NegativeCycleBlocksComputationError(1)],
        )
        assert not result.ok


class TestPathResult:
    """Tests for PathResult class."""

    def test_str_joins_names(self) -> None:
        """Test string form."""
        path = PathResult(node_ids=[1, 2, 3], names=["A", "B", "C"], distance=3.0)
        assert str(path) == "A -> B -> C"
        assert path.reachable

    def test_unreachable(self) -> None:
        """Test default distance is unreachable."""
        path = PathResult(node_ids=[1], names=["A"])
        assert path.distance == math.inf
        assert not path.reachable
