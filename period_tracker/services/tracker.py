"""
Application state for the period tracker.

PeriodTracker ties the record store to persistence and exposes the pull-based
snapshots a presentation layer needs: the calendar grid, the prediction, the
statistics summary, detail advisories, reminders and page tips.

Typical usage:
    tracker = PeriodTracker(RecordRepository(get_blob_store()))
    tracker.add_record("2024-01-29", "2024-02-02")
    month = tracker.calendar()
    prediction = tracker.prediction()
"""
from typing import Any, Callable, List, Mapping, Optional, Union
from datetime import date

from aws_lambda_powertools import Logger

from period_tracker.models.advice import DetailAnalysis, Page
from period_tracker.models.calendar import CalendarMonth
from period_tracker.models.prediction import CycleStatistics
from period_tracker.models.record import Record, RecordDetails
from period_tracker.services.calendar import build_month_grid
from period_tracker.services.details import analyze_details
from period_tracker.services.exceptions import StorageError
from period_tracker.services.prediction import (
    PredictionResult,
    get_reminder_message,
    predict_next_cycle
)
from period_tracker.services.records import DateInput, RecordStore
from period_tracker.services.statistics import average_cycle_length, calculate_cycle_statistics
from period_tracker.services.storage import RecordRepository
from period_tracker.services.tips import generate_page_tips

logger = Logger()

class PeriodTracker:
    """Explicit application state built from a record repository."""

    def __init__(
        self,
        repository: RecordRepository,
        clock: Optional[Callable[[], date]] = None
    ):
        """
        Load stored records and show the current month.

        Args:
            repository: Where records are loaded from and saved to
            clock: Returns the current date, defaults to date.today
        """
        self.repository = repository
        self.clock = clock or date.today
        self.store = RecordStore(repository.load())
        today = self.today()
        self.current_year = today.year
        self.current_month = today.month
        logger.info("Tracker initialized", extra={"record_count": len(self.store)})

    def today(self) -> date:
        """Current date from the configured clock."""
        return self.clock()

    def records(self) -> List[Record]:
        """All records, most recently added first."""
        return self.store.all()

    def add_record(
        self,
        start_date: DateInput,
        end_date: DateInput,
        details: Union[RecordDetails, Mapping[str, Any], None] = None
    ) -> Record:
        """
        Add a record and persist the collection.

        Raises:
            RecordValidationError: If the input is rejected; nothing is saved
            StorageError: If the records cannot be saved; the record is not kept
        """
        snapshot = self.store.all()
        record = self.store.add_record(start_date, end_date, details)
        self._save(snapshot)
        return record

    def delete_record(self, record_id: str) -> bool:
        """
        Delete a record and persist the collection when something changed.

        Returns:
            True if a record was removed

        Raises:
            StorageError: If the records cannot be saved; nothing is deleted
        """
        snapshot = self.store.all()
        removed = self.store.delete_record(record_id)
        if removed:
            self._save(snapshot)
        return removed

    def _save(self, snapshot: List[Record]) -> None:
        """Persist the store, restoring the snapshot if the write fails."""
        try:
            self.repository.save(self.store.all())
        except StorageError:
            self.store = RecordStore(snapshot)
            logger.warning("Save failed, changes discarded", extra={"record_count": len(snapshot)})
            raise

    def previous_month(self) -> CalendarMonth:
        """Move the displayed month back by one and return its grid."""
        if self.current_month == 1:
            self.current_year, self.current_month = self.current_year - 1, 12
        else:
            self.current_month -= 1
        return self.calendar()

    def next_month(self) -> CalendarMonth:
        """Move the displayed month forward by one and return its grid."""
        if self.current_month == 12:
            self.current_year, self.current_month = self.current_year + 1, 1
        else:
            self.current_month += 1
        return self.calendar()

    def calendar(self, year: Optional[int] = None, month: Optional[int] = None) -> CalendarMonth:
        """
        Classified grid for a month, the displayed month by default.
        """
        records = self.store.all()
        return build_month_grid(
            self.current_year if year is None else year,
            self.current_month if month is None else month,
            records,
            self.today(),
            prediction=predict_next_cycle(records, self.today()),
            average_cycle=average_cycle_length(records)
        )

    def prediction(self) -> PredictionResult:
        """Next cycle prediction or the reason it is unavailable."""
        return predict_next_cycle(self.store.all(), self.today())

    def statistics(self) -> CycleStatistics:
        """Statistics summary."""
        return calculate_cycle_statistics(self.store.all())

    def advisories(self) -> DetailAnalysis:
        """Advisories for the most recent period's details."""
        return analyze_details(self.store.all())

    def reminder(self) -> Optional[str]:
        """Reminder text when the next period is close."""
        return get_reminder_message(self.prediction())

    def tips(self, page: Union[Page, str]) -> List[str]:
        """Tips for a screen."""
        return generate_page_tips(Page(page), self.store.all(), self.today())
