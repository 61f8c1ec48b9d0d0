"""
Key-value blob store utilities for persisted state.
"""
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

DEFAULT_DATA_DIR = "~/.period_tracker"

def get_blob_store() -> 'FileBlobStore':
    """
    Create the file blob store configured for this device.

    The directory comes from the TRACKER_DATA_DIR environment variable and
    defaults to ~/.period_tracker.

    Example:
        store = get_blob_store()
        blob = store.get("period_records")
    """
    data_dir = os.environ.get('TRACKER_DATA_DIR', DEFAULT_DATA_DIR)
    return FileBlobStore(data_dir)

class BlobStore(ABC):
    """Minimal key-value store holding text blobs."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Get the blob stored under a key.

        Returns:
            Blob text if found, None otherwise
        """

    @abstractmethod
    def put(self, key: str, blob: str) -> None:
        """Store a blob under a key, replacing any previous value."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key; missing keys are ignored."""

class InMemoryBlobStore(BlobStore):
    """Blob store kept in a dictionary, for tests and previews."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.items: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def put(self, key: str, blob: str) -> None:
        self.items[key] = blob

    def delete(self, key: str) -> None:
        self.items.pop(key, None)

class FileBlobStore(BlobStore):
    """Blob store keeping one JSON file per key in a directory."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory).expanduser()

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def put(self, key: str, blob: str) -> None:
        """
        Write a blob atomically by replacing a temporary file.

        Raises:
            OSError: If the directory or file cannot be written
        """
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(blob, encoding="utf-8")
        os.replace(tmp_path, path)

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)
