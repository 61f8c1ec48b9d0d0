"""
Record store service.

This module owns the collection of logged periods: validating new input,
assigning ids, deletion, and the JSON blob format used for persistence.

Typical usage:
    store = RecordStore()
    record = store.add_record("2024-01-01", "2024-01-05")
    blob = store.serialize()
    restored = RecordStore(deserialize(blob))
"""
import uuid
from typing import Any, Iterable, List, Mapping, Optional, Union
from datetime import date

from aws_lambda_powertools import Logger
from pydantic import TypeAdapter, ValidationError

from period_tracker.models.record import Record, RecordDetails
from period_tracker.services.exceptions import RecordValidationError
from period_tracker.utils.validators import validate_date, validate_date_range

logger = Logger()

_RECORDS_ADAPTER = TypeAdapter(List[Record])

DateInput = Union[date, str]

def _new_record_id() -> str:
    """Create a fresh unique record id."""
    return uuid.uuid4().hex

def _parse_details(details: Union[RecordDetails, Mapping[str, Any], None]) -> Optional[RecordDetails]:
    """
    Validate record details supplied by the user.

    Raises:
        RecordValidationError: If the details do not match the allowed values
    """
    if details is None or isinstance(details, RecordDetails):
        return details
    try:
        return RecordDetails.model_validate(details)
    except ValidationError as e:
        raise RecordValidationError(f"Invalid record details: {e.error_count()} error(s)") from e

def serialize(records: Iterable[Record]) -> str:
    """
    Serialize records to a JSON array, preserving order.

    Example:
        >>> serialize([record])
        '[{"id":"...","start_date":"2024-01-01","end_date":"2024-01-05","details":null,"duration":5}]'
    """
    return _RECORDS_ADAPTER.dump_json(list(records)).decode("utf-8")

def deserialize(blob: Union[str, bytes, None]) -> List[Record]:
    """
    Load records from a JSON blob.

    Unreadable state never crashes the application: empty, malformed or
    schema-invalid blobs yield an empty collection and a logged warning.
    Records with a duplicate id keep their first occurrence.

    Args:
        blob: JSON text produced by serialize(), or None

    Returns:
        List of records in stored order
    """
    if not blob:
        return []
    try:
        records = _RECORDS_ADAPTER.validate_json(blob)
    except ValidationError as e:
        logger.warning(
            "Discarding unreadable records blob",
            extra={"error_count": e.error_count(), "first_error": e.errors()[0]["type"]}
        )
        return []

    seen = set()
    unique = []
    for record in records:
        if record.id in seen:
            logger.warning("Skipping record with duplicate id", extra={"record_id": record.id})
            continue
        seen.add(record.id)
        unique.append(record)
    return unique

class RecordStore:
    """In-memory collection of records, most recently added first."""

    def __init__(self, records: Optional[Iterable[Record]] = None):
        self._records: List[Record] = list(records or [])

    def __len__(self) -> int:
        return len(self._records)

    def add_record(
        self,
        start_date: DateInput,
        end_date: DateInput,
        details: Union[RecordDetails, Mapping[str, Any], None] = None
    ) -> Record:
        """
        Validate and add a new record at the front of the collection.

        Args:
            start_date: First day of the period
            end_date: Last day of the period
            details: Optional qualitative attributes

        Returns:
            The created record

        Raises:
            InvalidDateError: If a date is malformed
            InvalidDateRangeError: If end_date is before start_date
            RecordValidationError: If details are invalid
        """
        start = validate_date(start_date)
        end = validate_date(end_date)
        validate_date_range(start, end)
        parsed_details = _parse_details(details)

        record = Record(
            id=_new_record_id(),
            start_date=start,
            end_date=end,
            details=parsed_details
        )
        self._records.insert(0, record)
        logger.info("Record added", extra={
            "record_id": record.id,
            "start_date": str(start),
            "duration": record.duration
        })
        return record

    def delete_record(self, record_id: str) -> bool:
        """
        Remove the record with the given id.

        Returns:
            True if a record was removed, False if no record matched
        """
        remaining = [r for r in self._records if r.id != record_id]
        if len(remaining) == len(self._records):
            logger.debug("Delete requested for unknown record", extra={"record_id": record_id})
            return False
        self._records = remaining
        logger.info("Record deleted", extra={"record_id": record_id})
        return True

    def get(self, record_id: str) -> Optional[Record]:
        """Get a record by id."""
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def all(self) -> List[Record]:
        """Snapshot of all records, most recently added first."""
        return list(self._records)

    def serialize(self) -> str:
        """Serialize the current collection."""
        return serialize(self._records)
