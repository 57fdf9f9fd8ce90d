"""Abstract storage backend."""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List


class StorageBackend(ABC):
    """Abstract base class for snapshot storage backends."""

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Whether a file or directory exists."""
        pass

    @abstractmethod
    def create_if_absent(self, path: Path, data: Any) -> bool:
        """Write data as JSON unless path exists, return True if written.

        The existence check and the create are a single operation. Two
        processes fetching the same snapshot can still both hit the API;
        only the first one gets to write.
        """
        pass

    @abstractmethod
    def read_json(self, path: Path) -> Any:
        """Read a JSON document."""
        pass

    @abstractmethod
    def list(self, directory: Path, suffix: str = '') -> List[Path]:
        """List files in a directory, sorted by name."""
        pass

    @abstractmethod
    def ensure_dir(self, directory: Path) -> Path:
        """Create a directory (and parents) if needed."""
        pass
