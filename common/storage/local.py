"""Local filesystem storage for raw JSON snapshots."""

import json
import logging
from pathlib import Path
from typing import Any, List

from .backend import StorageBackend

logger = logging.getLogger(__name__)


class LocalStorage(StorageBackend):
    """Snapshots as pretty-printed JSON files under a data directory."""

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    def create_if_absent(self, path: Path, data: Any) -> bool:
        path = Path(path)
        self.ensure_dir(path.parent)
        try:
            # "x" fails if the file exists, so an existing snapshot is never rewritten
            with open(path, 'x', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except FileExistsError:
            logger.warning(f"{path} already exists, not overwriting")
            return False
        return True

    def read_json(self, path: Path) -> Any:
        with open(path, encoding='utf-8') as f:
            return json.load(f)

    def list(self, directory: Path, suffix: str = '') -> List[Path]:
        directory = Path(directory)
        if not directory.is_dir():
            return []
        return sorted(
            p for p in directory.iterdir()
            if p.is_file() and p.name.endswith(suffix)
        )

    def ensure_dir(self, directory: Path) -> Path:
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        return directory
