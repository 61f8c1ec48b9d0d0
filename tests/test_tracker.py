"""
Tests for the tracker application state.
"""
import json
import pytest
from unittest.mock import Mock
from datetime import date

from period_tracker.models.advice import Page
from period_tracker.models.calendar import DayTag
from period_tracker.models.prediction import CyclePrediction, InsufficientData, NoData
from period_tracker.services.exceptions import InvalidDateRangeError, StorageError
from period_tracker.services.records import serialize
from period_tracker.services.storage import RECORDS_KEY, RecordRepository
from period_tracker.services.tracker import PeriodTracker
from period_tracker.utils.storage import InMemoryBlobStore
from tests.conftest import TODAY

def test_new_tracker_is_empty(tracker):
    """Test a tracker over an empty store."""
    assert tracker.records() == []
    assert isinstance(tracker.prediction(), NoData)
    assert tracker.statistics().total_records == 0
    assert tracker.advisories().is_empty
    assert tracker.reminder() is None
    assert (tracker.current_year, tracker.current_month) == (2024, 2)

def test_add_record_persists(tracker, blob_store):
    """Test successful additions are written to the blob store."""
    record = tracker.add_record("2024-01-01", "2024-01-05")

    stored = json.loads(blob_store.get(RECORDS_KEY))
    assert [item["id"] for item in stored] == [record.id]

def test_rejected_record_is_not_persisted(tracker, blob_store):
    """Test failed validation leaves state and storage untouched."""
    with pytest.raises(InvalidDateRangeError):
        tracker.add_record("2024-01-05", "2024-01-01")

    assert tracker.records() == []
    assert blob_store.get(RECORDS_KEY) is None

def test_delete_record_persists(tracker, blob_store):
    """Test deletions are written and unknown ids are ignored."""
    first = tracker.add_record("2024-01-01", "2024-01-05")
    tracker.add_record("2024-01-29", "2024-02-02")

    assert tracker.delete_record(first.id) is True
    assert tracker.delete_record("missing") is False
    assert len(json.loads(blob_store.get(RECORDS_KEY))) == 1

def test_tracker_loads_existing_records(regular_records):
    """Test construction restores records from the repository."""
    store = InMemoryBlobStore({RECORDS_KEY: serialize(regular_records)})
    tracker = PeriodTracker(RecordRepository(store), clock=lambda: TODAY)

    assert tracker.records() == regular_records
    prediction = tracker.prediction()
    assert isinstance(prediction, CyclePrediction)
    assert prediction.start_date == date(2024, 2, 26)
    assert prediction.days_until == 25

def test_tracker_recovers_from_corrupt_storage():
    """Test corrupt persisted state starts an empty tracker."""
    store = InMemoryBlobStore({RECORDS_KEY: "not json"})
    tracker = PeriodTracker(RecordRepository(store), clock=lambda: TODAY)
    assert tracker.records() == []

def test_insufficient_data_after_one_record(tracker):
    """Test one record gives an advisory instead of a prediction."""
    tracker.add_record("2024-01-01", "2024-01-05")
    assert isinstance(tracker.prediction(), InsufficientData)

def test_calendar_for_displayed_month(tracker):
    """Test the calendar snapshot reflects records and prediction."""
    tracker.add_record("2024-01-01", "2024-01-05")
    tracker.add_record("2024-01-29", "2024-02-02")

    month = tracker.calendar()
    assert (month.year, month.month) == (2024, 2)
    assert month.day(date(2024, 2, 1)).tags == frozenset({DayTag.TODAY, DayTag.PERIOD})
    assert month.day(date(2024, 2, 12)).has(DayTag.OVULATION_DAY)
    assert month.day(date(2024, 2, 26)).has(DayTag.PREDICTION)

    january = tracker.calendar(2024, 1)
    assert january.day(date(2024, 1, 3)).has(DayTag.PERIOD)

def test_month_navigation_wraps_years(tracker):
    """Test moving across year boundaries."""
    for _ in range(2):
        month = tracker.previous_month()
    assert (month.year, month.month) == (2023, 12)

    month = tracker.next_month()
    assert (month.year, month.month) == (2024, 1)

    tracker.current_month = 12
    month = tracker.next_month()
    assert (month.year, month.month) == (2025, 1)

def test_reminder_and_tips(repository):
    """Test reminders and tips use the tracker clock."""
    tracker = PeriodTracker(repository, clock=lambda: date(2024, 2, 25))
    tracker.add_record("2024-01-01", "2024-01-05")
    tracker.add_record("2024-01-29", "2024-02-02")

    assert "tomorrow" in tracker.reminder()
    assert any("tomorrow" in tip for tip in tracker.tips(Page.CALENDAR))
    assert len(tracker.tips("record")) == 2

def test_statistics_and_advisories(tracker):
    """Test summary snapshots."""
    tracker.add_record("2024-01-01", "2024-01-05")
    tracker.add_record("2024-01-29", "2024-02-02", {"pain": "severe"})

    stats = tracker.statistics()
    assert stats.average_cycle_length == 28
    assert stats.min_cycle_length == stats.max_cycle_length == 28
    assert len(tracker.advisories().warnings) == 1

def test_failed_save_discards_added_record():
    """Test a record is not kept in memory when it cannot be saved."""
    store = Mock()
    store.get.return_value = None
    store.put.side_effect = OSError("read-only")
    tracker = PeriodTracker(RecordRepository(store), clock=lambda: TODAY)

    with pytest.raises(StorageError):
        tracker.add_record("2024-01-01", "2024-01-05")

    assert tracker.records() == []

def test_failed_save_keeps_deleted_record(regular_records):
    """Test a deletion is undone when it cannot be saved."""
    store = Mock()
    store.get.return_value = serialize(regular_records)
    store.put.side_effect = OSError("read-only")
    tracker = PeriodTracker(RecordRepository(store), clock=lambda: TODAY)

    with pytest.raises(StorageError):
        tracker.delete_record(regular_records[1].id)

    assert tracker.records() == regular_records

def test_calendar_rejects_invalid_month(tracker):
    """Test an explicit month of zero is not replaced by the displayed month."""
    with pytest.raises(ValueError):
        tracker.calendar(2024, 0)
