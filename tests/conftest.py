"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test modules.
"""

import os
from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

# Set test environment before importing library modules
os.environ["APP_ENV"] = "development"
os.environ["APP_LOG_LEVEL"] = "WARNING"


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path) -> Generator[Any, None, None]:
    """Point graph storage at a temporary directory for every test.

    Args:
        tmp_path: Pytest's temporary path fixture.

    Yields:
        The settings instance in effect for the test.
    """
    from weighted_graph.config import get_settings

    with patch.dict(os.environ, {"GRAPH_STORAGE_PATH": str(tmp_path / "graphs")}):
        get_settings.cache_clear()
        yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def store() -> Any:
    """Create an empty graph store."""
    from weighted_graph.graph.store import GraphStore

    return GraphStore()


@pytest.fixture
def chain_store() -> Any:
    """Create the chain A -> B -> C with edge weights 1 and 2."""
    from weighted_graph.graph.store import GraphStore

    store = GraphStore()
    store.add_node(1, "A", 0)
    store.add_node(2, "B", 0)
    store.add_node(3, "C", 0)
    store.add_edge(1, 1, 2, 1)
    store.add_edge(2, 2, 3, 2)
    return store


@pytest.fixture
def negative_triangle_store() -> Any:
    """Create the triangle 1 -> 2 -> 3 -> 1 with total weight -3."""
    from weighted_graph.graph.store import GraphStore

    store = GraphStore()
    for node_id, name in [(1, "A"), (2, "B"), (3, "C")]:
        store.add_node(node_id, name, 0)
    store.add_edge(1, 1, 2, 1)
    store.add_edge(2, 2, 3, -5)
    store.add_edge(3, 3, 1, 1)
    return store
