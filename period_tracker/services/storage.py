"""
Record persistence service.

This module loads and saves the record collection through a blob store.
Reads fail open: a missing, unreadable or corrupt blob is treated as an
empty collection so the app always starts. Writes raise StorageError.

Typical usage:
    repository = RecordRepository(get_blob_store())
    records = repository.load()
    repository.save(records)
"""
from typing import Iterable, List

from period_tracker.models.record import Record
from period_tracker.services.exceptions import StorageError
from period_tracker.services.records import deserialize, serialize
from period_tracker.utils.logging import logger, log_exception
from period_tracker.utils.storage import BlobStore

RECORDS_KEY = "period_records"

class RecordRepository:
    """Persists the record collection under a single key."""

    def __init__(self, store: BlobStore, key: str = RECORDS_KEY):
        self.store = store
        self.key = key

    def load(self) -> List[Record]:
        """
        Load all records.

        Returns:
            Stored records, or an empty list when nothing usable is stored
        """
        try:
            blob = self.store.get(self.key)
        except (OSError, UnicodeDecodeError):
            log_exception(logger, "Failed to read records blob", extra={"key": self.key})
            return []
        records = deserialize(blob)
        logger.info("Loaded records", extra={"key": self.key, "record_count": len(records)})
        return records

    def save(self, records: Iterable[Record]) -> None:
        """
        Save all records, replacing the stored collection.

        Raises:
            StorageError: If the blob store cannot be written
        """
        blob = serialize(records)
        try:
            self.store.put(self.key, blob)
        except OSError as e:
            log_exception(logger, "Failed to write records blob", extra={"key": self.key})
            raise StorageError(f"Could not save records: {e}") from e
