"""Command line interface for Weighted Graph.

Usage:
    weighted-graph show PATH
    weighted-graph paths PATH --source ID [--algorithm dijkstra|bellman-ford]
                         [--node-weights] [--refresh]

Example:
    # Print properties, nodes and edges of a saved graph
    weighted-graph show data/graphs/roads.json

    # Distances and paths from node 1, re-deriving stale properties first
    weighted-graph paths roads.json --source 1 --algorithm bellman-ford --refresh
"""

import argparse
import sys

from weighted_graph import __version__
from weighted_graph.core.exceptions import (
    ConfigurationError,
    DocumentError,
    NodeNotFoundError,
)
from weighted_graph.graph.pathfinding import ALGORITHMS, DIJKSTRA, PathFinder
from weighted_graph.graph.persistence import GraphPersistence, create_persistence
from weighted_graph.graph.store import GraphStore
from weighted_graph.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="weighted-graph",
        description="Inspect saved weighted graphs and compute shortest paths",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    show = subparsers.add_parser("show", help="Print a summary of a saved graph")
    show.add_argument("path", help="Graph document (.json or .json.gz)")
    show.add_argument(
        "--refresh",
        action="store_true",
        help="Re-derive properties instead of using the saved ones",
    )

    paths = subparsers.add_parser("paths", help="Shortest paths from a source node")
    paths.add_argument("path", help="Graph document (.json or .json.gz)")
    paths.add_argument("--source", type=int, required=True, help="Source node id")
    paths.add_argument(
        "--algorithm",
        choices=ALGORITHMS,
        default=DIJKSTRA,
        help="Shortest-path algorithm (default: %(default)s)",
    )
    paths.add_argument(
        "--node-weights",
        action="store_true",
        help="Add each edge's source node weight to the edge cost",
    )
    paths.add_argument(
        "--refresh",
        action="store_true",
        help="Re-derive properties instead of using the saved ones",
    )
    return parser


def _load(persistence: GraphPersistence, path: str, refresh: bool) -> GraphStore:
    store = persistence.load_json(path)
    if refresh:
        store.refresh_properties()
    return store


def _show(store: GraphStore) -> None:
    print(store.summary())


def _paths(store: GraphStore, args: argparse.Namespace) -> None:
    finder = PathFinder(store)
    result = finder.run(args.source, args.algorithm, args.node_weights)

    for issue in result.issues:
        print(f"Warning: {issue.message}")

    if result.is_empty:
        return

    print(f"Distances from node {args.source} ({result.algorithm}):")
    for node_id, distance in result.distances.items():
        path = finder.reconstruct_path(result, node_id)
        name = store.require_node(node_id).name
        print(f"  Node {name}: distance: {distance}: Path: {path}")


def main(argv: list[str] | None = None) -> int:
    """Run the command line interface.

    Args:
        argv: Arguments to parse. Defaults to ``sys.argv[1:]``.

    Returns:
        Process exit code.
    """
    args = build_parser().parse_args(argv)

    try:
        setup_logging()
        store = _load(create_persistence(), args.path, args.refresh)
        if args.command == "show":
            _show(store)
        else:
            _paths(store, args)
    except (ConfigurationError, DocumentError, NodeNotFoundError) as e:
        logger.error("Command failed", command=args.command, **e.to_dict())
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
