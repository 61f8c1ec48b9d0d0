"""
Pytest configuration and shared fixtures.
"""
import pytest
from datetime import date
from typing import List

from period_tracker.models.record import Record, RecordDetails
from period_tracker.services.records import RecordStore
from period_tracker.services.storage import RecordRepository
from period_tracker.services.tracker import PeriodTracker
from period_tracker.utils.storage import InMemoryBlobStore

TODAY = date(2024, 2, 1)

def make_record(record_id: str, start: date, end: date, details: RecordDetails = None) -> Record:
    """Build a record directly, bypassing the store."""
    return Record(id=record_id, start_date=start, end_date=end, details=details)

@pytest.fixture
def january_record() -> Record:
    """A 5 day period starting 2024-01-01."""
    return make_record("jan", date(2024, 1, 1), date(2024, 1, 5))

@pytest.fixture
def late_january_record() -> Record:
    """A 5 day period starting 2024-01-29, 28 days after the first."""
    return make_record("late-jan", date(2024, 1, 29), date(2024, 2, 2))

@pytest.fixture
def regular_records(january_record, late_january_record) -> List[Record]:
    """Two records in stored order, most recently added first."""
    return [late_january_record, january_record]

@pytest.fixture
def irregular_records() -> List[Record]:
    """Records with cycles of 24, 31 and 26 days, in random stored order."""
    return [
        make_record("c", date(2024, 2, 25), date(2024, 2, 29)),
        make_record("a", date(2024, 1, 1), date(2024, 1, 4)),
        make_record("d", date(2024, 3, 22), date(2024, 3, 27)),
        make_record("b", date(2024, 1, 25), date(2024, 1, 29)),
    ]

@pytest.fixture
def store() -> RecordStore:
    """An empty record store."""
    return RecordStore()

@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    """An empty in-memory blob store."""
    return InMemoryBlobStore()

@pytest.fixture
def repository(blob_store) -> RecordRepository:
    """Repository backed by the in-memory blob store."""
    return RecordRepository(blob_store)

@pytest.fixture
def tracker(repository) -> PeriodTracker:
    """Tracker whose clock is fixed to 2024-02-01."""
    return PeriodTracker(repository, clock=lambda: TODAY)
