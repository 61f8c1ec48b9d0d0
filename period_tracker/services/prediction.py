"""
Service module for cycle predictions.

This module projects the next period from historical records and estimates
the ovulation day and fertile window of a cycle.

Typical usage:
    result = predict_next_cycle(store.all(), today=date.today())
    if isinstance(result, CyclePrediction):
        window = ovulation_window(result.start_date, result.avg_cycle)
"""
from typing import Optional, Sequence, Union
from datetime import date, datetime, timedelta
from aws_lambda_powertools import Logger

from period_tracker.models.record import Record
from period_tracker.models.prediction import (
    CyclePrediction,
    FertileWindow,
    InsufficientData,
    NoData
)
from period_tracker.services.constants import (
    LUTEAL_PHASE_DAYS,
    FERTILE_DAYS_BEFORE_OVULATION,
    FERTILE_DAYS_AFTER_OVULATION,
    REMINDER_HORIZON_DAYS
)
from period_tracker.services.statistics import average_cycle_length, average_duration
from period_tracker.services.utils import get_latest_record, to_day

logger = Logger()

PredictionResult = Union[CyclePrediction, InsufficientData, NoData]

def predict_next_cycle(
    records: Sequence[Record],
    today: Optional[Union[date, datetime]] = None
) -> PredictionResult:
    """
    Predict the next period from historical records.

    Args:
        records: All stored records, in any order
        today: Reference day, defaults to the current date

    Returns:
        CyclePrediction when an average cycle can be derived, InsufficientData
        when there are records but no usable cycle length, NoData when there
        are no records at all

    Example:
        >>> result = predict_next_cycle(records, today=date(2024, 2, 1))
        >>> print(f"Next period on {result.start_date}, in {result.days_until} days")
    """
    if not records:
        return NoData()

    avg_cycle = average_cycle_length(records)
    if avg_cycle is None:
        logger.info("Not enough usable cycles for a prediction", extra={"record_count": len(records)})
        return InsufficientData()

    avg_duration = average_duration(records)
    last_record = get_latest_record(records)
    reference_day = to_day(today) if today is not None else date.today()

    start_date = last_record.start_date + timedelta(days=avg_cycle)
    end_date = start_date + timedelta(days=avg_duration - 1)

    prediction = CyclePrediction(
        start_date=start_date,
        end_date=end_date,
        days_until=(start_date - reference_day).days,
        avg_cycle=avg_cycle,
        avg_duration=avg_duration
    )
    logger.info("Predicted next cycle", extra={
        "start_date": str(start_date),
        "end_date": str(end_date),
        "days_until": prediction.days_until
    })
    return prediction

def ovulation_window(cycle_start: date, cycle_length: int) -> FertileWindow:
    """
    Estimate the ovulation day and fertile window of a cycle.

    Ovulation is assumed to happen 14 days before the next period; the
    fertile window covers the 5 days before it through the 4 days after.

    Example:
        >>> window = ovulation_window(date(2024, 1, 29), 28)
        >>> window.ovulation_day
        datetime.date(2024, 2, 12)
    """
    ovulation_day = cycle_start + timedelta(days=cycle_length - LUTEAL_PHASE_DAYS)
    return FertileWindow(
        start=ovulation_day - timedelta(days=FERTILE_DAYS_BEFORE_OVULATION),
        end=ovulation_day + timedelta(days=FERTILE_DAYS_AFTER_OVULATION),
        ovulation_day=ovulation_day
    )

def get_reminder_message(result: PredictionResult) -> Optional[str]:
    """
    Build a reminder when the predicted period is at most two days away.

    Returns:
        Reminder text, or None when no reminder should be shown
    """
    if not isinstance(result, CyclePrediction):
        return None
    if not 0 <= result.days_until <= REMINDER_HORIZON_DAYS:
        return None

    when = {0: "today", 1: "tomorrow"}.get(result.days_until, "the day after tomorrow")
    return f"Your period is expected {when}, get ready"
