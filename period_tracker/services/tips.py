"""
Service module for contextual page tips.

Each screen of the app shows a short list of tips built from local rules over
the current records and prediction.

Typical usage:
    tips = generate_page_tips(Page.CALENDAR, store.all(), date.today())
"""
from typing import List, Sequence
from datetime import date

from period_tracker.models.advice import Page
from period_tracker.models.prediction import CyclePrediction
from period_tracker.models.record import Record
from period_tracker.services.constants import (
    LONG_CYCLE_DAYS,
    MIN_RECORDS_FOR_ACCURACY,
    NORMAL_CYCLE_RANGE,
    NORMAL_DURATION_RANGE,
    REMINDER_HORIZON_DAYS,
    SHORT_CYCLE_DAYS,
    STALE_RECORD_DAYS,
    UPCOMING_HORIZON_DAYS
)
from period_tracker.services.prediction import predict_next_cycle
from period_tracker.services.statistics import average_cycle_length, average_duration

def _calendar_tips(records: Sequence[Record], today: date) -> List[str]:
    if not records:
        return ["🌸 Welcome! Start logging your periods to get predictions and advice."]

    tips = []
    prediction = predict_next_cycle(records, today)
    if isinstance(prediction, CyclePrediction):
        days_until = prediction.days_until
        if 0 <= days_until <= REMINDER_HORIZON_DAYS:
            when = {0: "today", 1: "tomorrow"}.get(days_until, "in two days")
            tips.append(f"⚠️ Reminder: your period is expected {when}, keep supplies at hand.")
        elif REMINDER_HORIZON_DAYS < days_until <= UPCOMING_HORIZON_DAYS:
            tips.append(f"📅 Your period is expected in {days_until} days, watch for early signs.")

    avg_cycle = average_cycle_length(records)
    if avg_cycle and not SHORT_CYCLE_DAYS <= avg_cycle <= LONG_CYCLE_DAYS:
        length = "short" if avg_cycle < SHORT_CYCLE_DAYS else "long"
        tips.append(
            f"💡 Note: your average cycle is {avg_cycle} days, which is on the {length} side. "
            "Consider seeing a doctor if you feel unwell."
        )
    return tips

def _record_tips(records: Sequence[Record], today: date) -> List[str]:
    tips = []
    if not records:
        tips.append("📝 No records yet! Add your first one to start your health history.")
    elif len(records) < MIN_RECORDS_FOR_ACCURACY:
        tips.append(
            f"📊 {len(records)} record(s) so far. Log at least {MIN_RECORDS_FOR_ACCURACY} "
            "cycles for more accurate predictions!"
        )
    else:
        # Newest-added record, not the latest start date
        days_since_end = (today - records[0].end_date).days
        if days_since_end > STALE_RECORD_DAYS:
            tips.append("💭 It has been a while since your last record, remember to keep it up to date!")
    tips.append("💡 Tip: logging exact start and end dates helps you understand your body's rhythm.")
    return tips

def _prediction_tips(records: Sequence[Record], today: date) -> List[str]:
    tips = []
    prediction = predict_next_cycle(records, today)
    if not isinstance(prediction, CyclePrediction):
        return tips

    avg_cycle = average_cycle_length(records)
    avg_duration = average_duration(records)
    if (NORMAL_CYCLE_RANGE[0] <= avg_cycle <= NORMAL_CYCLE_RANGE[1]
            and NORMAL_DURATION_RANGE[0] <= avg_duration <= NORMAL_DURATION_RANGE[1]):
        tips.append("✅ Regular cycle: your cycle and period length are both in the normal range.")
    if 0 <= prediction.days_until <= UPCOMING_HORIZON_DAYS:
        tips.append(
            "🌟 Premenstrual care: stay active, keep your mood up and avoid overwork and cold foods."
        )
    return tips

_PAGE_TIPS = {
    Page.CALENDAR: _calendar_tips,
    Page.RECORD: _record_tips,
    Page.PREDICTION: _prediction_tips,
}

def generate_page_tips(page: Page, records: Sequence[Record], today: date) -> List[str]:
    """
    Generate tips for a screen.

    Args:
        page: Screen to generate tips for
        records: All records, most recently added first
        today: Current date

    Returns:
        List of tip strings, possibly empty
    """
    return _PAGE_TIPS[Page(page)](records, today)
