"""Graph persistence for saving and loading weighted graphs.

Provides file storage of graph documents as plain or gzip-compressed JSON.
"""

import gzip
from pathlib import Path

from weighted_graph.config import get_settings
from weighted_graph.core.exceptions import DocumentMalformedError, DocumentNotFoundError
from weighted_graph.graph.store import GraphStore
from weighted_graph.utils.logging import get_logger

logger = get_logger(__name__)

_EXTENSIONS = (".json.gz", ".json")


class GraphPersistence:
    """Handles saving and loading of graph documents."""

    def __init__(self, storage_dir: Path | None = None) -> None:
        """Initialize persistence handler.

        Args:
            storage_dir: Directory for storing graphs. Defaults to current dir.
                It is created on the first save, so loading never writes.
        """
        self.storage_dir = storage_dir or Path.cwd()

    def save_json(
        self,
        store: GraphStore,
        filename: str,
        compress: bool | None = None,
    ) -> Path:
        """Save a graph to a JSON file.

        Properties are re-derived before writing.

        Args:
            store: The graph to save.
            filename: Output filename (without extension).
            compress: Whether to gzip compress the output. Defaults to the
                configured value.

        Returns:
            Path to the saved file.
        """
        if compress is None:
            compress = get_settings().graph.compress

        data = store.save()
        self.storage_dir.mkdir(parents=True, exist_ok=True)

        if compress:
            file_path = self.storage_dir / f"{filename}.json.gz"
            with gzip.open(file_path, "wb") as f:
                f.write(data)
        else:
            file_path = self.storage_dir / f"{filename}.json"
            file_path.write_bytes(data)

        logger.info(
            "Saved graph to JSON",
            file_path=str(file_path),
            node_count=store.order,
            edge_count=store.size,
            compressed=compress,
        )
        return file_path

    def load_json(
        self,
        file_path: Path | str,
        store: GraphStore | None = None,
    ) -> GraphStore:
        """Load a graph from a JSON file.

        Args:
            file_path: Path to the JSON file. Relative paths that do not
                exist as given are looked up in the storage directory.
            store: Existing store to load into. A new one is created if None.

        Returns:
            The loaded GraphStore.

        Raises:
            DocumentNotFoundError: If the file doesn't exist.
            DocumentMalformedError: If the file can't be decoded or parsed.
                An existing store is left unchanged.
        """
        file_path = self._resolve(Path(file_path))

        if not file_path.is_file():
            raise DocumentNotFoundError(str(file_path))

        try:
            if file_path.suffix == ".gz":
                with gzip.open(file_path, "rb") as f:
                    data = f.read()
            else:
                data = file_path.read_bytes()
        except (OSError, EOFError) as e:
            raise DocumentMalformedError(str(file_path), str(e), cause=e) from e

        if store is None:
            store = GraphStore()
        store.load(data, source=str(file_path))

        logger.info(
            "Loaded graph from JSON",
            file_path=str(file_path),
            node_count=store.order,
            edge_count=store.size,
        )
        return store

    def _resolve(self, file_path: Path) -> Path:
        if file_path.exists() or file_path.is_absolute():
            return file_path
        return self.storage_dir / file_path

    def exists(self, filename: str) -> bool:
        """Check if a graph file exists.

        Args:
            filename: The filename to check (without extension).

        Returns:
            True if the file exists.
        """
        return any(
            (self.storage_dir / f"{filename}{ext}").exists() for ext in _EXTENSIONS
        )

    def delete(self, filename: str) -> bool:
        """Delete a graph file.

        Args:
            filename: The filename to delete (without extension).

        Returns:
            True if a file was deleted.
        """
        deleted = False
        for ext in _EXTENSIONS:
            file_path = self.storage_dir / f"{filename}{ext}"
            if file_path.exists():
                file_path.unlink()
                deleted = True
                logger.info("Deleted graph file", file_path=str(file_path))
        return deleted

    def list_graphs(self) -> list[str]:
        """List all saved graphs.

        Returns:
            Sorted graph filenames (without extensions).
        """
        if not self.storage_dir.is_dir():
            return []

        graphs = set()
        for file_path in self.storage_dir.iterdir():
            for suffix in _EXTENSIONS:
                if file_path.name.endswith(suffix):
                    graphs.add(file_path.name[: -len(suffix)])
                    break
        return sorted(graphs)


def create_persistence(storage_dir: Path | str | None = None) -> GraphPersistence:
    """Create a GraphPersistence instance.

    Args:
        storage_dir: Storage directory path. Defaults to the configured
            ``GRAPH_STORAGE_PATH``.

    Returns:
        GraphPersistence instance.
    """
    if storage_dir is None:
        storage_dir = get_settings().graph.storage_path
    return GraphPersistence(Path(storage_dir))
