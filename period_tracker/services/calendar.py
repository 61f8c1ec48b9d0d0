"""
Calendar classification service.

This module maps every day of a displayed month to the status tags a
renderer needs: logged period days, fertile windows and ovulation days of
logged cycles, the predicted period and its fertile window, and today.

Overlapping records are not merged: the first record in stored order that
matches a day decides its period and fertile tags.

Typical usage:
    month = build_month_grid(2024, 2, records, today, prediction, avg_cycle)
    for week in month.weeks():
        ...
"""
from typing import FrozenSet, Optional, Sequence, Set, Union
from datetime import date, datetime, timedelta

from period_tracker.models.calendar import CalendarDay, CalendarMonth, DayTag
from period_tracker.models.prediction import CyclePrediction, FertileWindow
from period_tracker.models.record import Record
from period_tracker.services.constants import CALENDAR_CELLS, DEFAULT_CYCLE_LENGTH
from period_tracker.services.prediction import PredictionResult, ovulation_window
from period_tracker.services.utils import to_day

def _fertile_tag(day: date, window: FertileWindow) -> Optional[DayTag]:
    """Tag for a day relative to a fertile window, ovulation day first."""
    if day == window.ovulation_day:
        return DayTag.OVULATION_DAY
    if window.contains(day):
        return DayTag.FERTILE
    return None

def classify_day(
    day: date,
    records: Sequence[Record],
    today: date,
    prediction: Optional[PredictionResult],
    cycle_length: int
) -> FrozenSet[DayTag]:
    """
    Classify a single in-month day.

    Args:
        day: Day to classify
        records: All records in stored order
        today: Current date
        prediction: Result of predict_next_cycle, if any
        cycle_length: Cycle length used for fertile windows

    Returns:
        Set of tags for the day. A period day never carries fertile or
        prediction tags.
    """
    tags: Set[DayTag] = set()
    if day == today:
        tags.add(DayTag.TODAY)

    if any(record.contains(day) for record in records):
        tags.add(DayTag.PERIOD)
        return frozenset(tags)

    fertile_tag = None
    for record in records:
        fertile_tag = _fertile_tag(day, ovulation_window(record.start_date, cycle_length))
        if fertile_tag:
            tags.add(fertile_tag)
            break

    if isinstance(prediction, CyclePrediction):
        if prediction.start_date <= day <= prediction.end_date:
            tags.add(DayTag.PREDICTION)
        if fertile_tag is None:
            predicted_tag = _fertile_tag(day, ovulation_window(prediction.start_date, cycle_length))
            if predicted_tag:
                tags.add(predicted_tag)

    return frozenset(tags)

def build_month_grid(
    year: int,
    month: int,
    records: Sequence[Record],
    today: Union[date, datetime],
    prediction: Optional[PredictionResult] = None,
    average_cycle: Optional[int] = None
) -> CalendarMonth:
    """
    Build the 42-cell grid for a month, weeks starting on Sunday.

    Leading cells hold the end of the previous month and trailing cells the
    start of the next one; those cells carry no status tags.

    Args:
        year: Displayed year
        month: Displayed month (1-12)
        records: All records in stored order
        today: Current date (time of day is ignored)
        prediction: Result of predict_next_cycle
        average_cycle: Average cycle length, 28 days when unavailable

    Returns:
        CalendarMonth with 42 days

    Raises:
        ValueError: If month is outside 1-12
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")

    today = to_day(today)
    cycle_length = average_cycle or DEFAULT_CYCLE_LENGTH
    first_day = date(year, month, 1)
    # Python weekdays start on Monday; shift so Sunday is column 0
    leading_days = (first_day.weekday() + 1) % 7
    grid_start = first_day - timedelta(days=leading_days)

    days = []
    for offset in range(CALENDAR_CELLS):
        current = grid_start + timedelta(days=offset)
        in_month = current.month == month
        tags = classify_day(current, records, today, prediction, cycle_length) if in_month else frozenset()
        days.append(CalendarDay(date=current, in_month=in_month, tags=tags))

    return CalendarMonth(year=year, month=month, days=days)
