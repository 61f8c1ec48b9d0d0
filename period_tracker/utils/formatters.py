"""
Plain-text formatting functions for tracker snapshots.
"""
from typing import List, Sequence

from period_tracker.models.advice import DetailAnalysis
from period_tracker.models.calendar import CalendarDay, CalendarMonth, DayTag
from period_tracker.models.prediction import CyclePrediction, CycleStatistics
from period_tracker.models.record import Record
from period_tracker.services.prediction import PredictionResult

WEEKDAY_HEADER = "Su Mo Tu We Th Fr Sa"

# Marker shown next to the day number, highest priority first
DAY_MARKERS = [
    (DayTag.PERIOD, "*"),
    (DayTag.OVULATION_DAY, "@"),
    (DayTag.PREDICTION, "?"),
    (DayTag.FERTILE, "+"),
]

def format_prediction(result: PredictionResult) -> str:
    """
    Format a prediction result into a message.

    Args:
        result: CyclePrediction, InsufficientData or NoData

    Returns:
        Formatted message string
    """
    if not isinstance(result, CyclePrediction):
        return f"🌙 Next period\n{result.message}"

    if result.days_until > 0:
        emoji = "⚠️" if result.days_until <= 3 else "🌙"
        when = f"in {result.days_until} days"
    elif result.days_until == 0:
        emoji = "💝"
        when = "today"
    else:
        emoji = "⏰"
        when = f"overdue by {abs(result.days_until)} days"

    message = [
        f"{emoji} Next period: {when}",
        f"Start date: {result.start_date.isoformat()}",
        f"End date: {result.end_date.isoformat()}",
        f"Average cycle: {result.avg_cycle} days",
        f"Average period: {result.avg_duration} days",
    ]
    return "\n".join(message)

def format_statistics(stats: CycleStatistics) -> str:
    """Format the statistics summary, skipping values that are unavailable."""
    if stats.total_records == 0:
        return "📊 No statistics yet"

    def days(value):
        return f"{value} days" if value is not None else "-"

    message = [
        "📊 Your Cycle Statistics",
        "------------------------",
        f"Total records: {stats.total_records}",
        f"Average cycle: {days(stats.average_cycle_length)}",
        f"Average period: {days(stats.average_duration)}",
    ]
    if stats.min_cycle_length is not None:
        message.append(f"Shortest cycle: {stats.min_cycle_length} days")
        message.append(f"Longest cycle: {stats.max_cycle_length} days")
    return "\n".join(message)

def format_records(records: Sequence[Record]) -> str:
    """Format the record history, most recently added first."""
    if not records:
        return "No records yet"

    lines = []
    for record in records:
        lines.append(
            f"📅 {record.start_date.isoformat()} to {record.end_date.isoformat()} "
            f"({record.duration} days)"
        )
        if record.details and record.details.note:
            lines.append(f"   📝 {record.details.note}")
    return "\n".join(lines)

def _format_day(day: CalendarDay) -> str:
    """Render a cell as five characters: day number, today brackets, marker."""
    if not day.in_month:
        return "     "
    marker = " "
    for tag, symbol in DAY_MARKERS:
        if day.has(tag):
            marker = symbol
            break
    number = f"{day.date.day:>2}"
    if day.has(DayTag.TODAY):
        return f"[{number}]{marker}"
    return f" {number} {marker}"

def format_calendar(month: CalendarMonth) -> str:
    """
    Format a month grid as a text calendar.

    Legend: * period, @ ovulation day, ? predicted period, + fertile window,
    [ ] today. Days of other months are left blank.
    """
    header = " ".join(f"{name:^5}" for name in WEEKDAY_HEADER.split())
    lines = [f"{month.year}-{month.month:02d}".center(len(header)), header]
    for week in month.weeks():
        lines.append(" ".join(_format_day(day) for day in week))
    return "\n".join(lines)

def format_advisories(analysis: DetailAnalysis) -> str:
    """Format detail advisories grouped by urgency."""
    if analysis.is_empty:
        return "No advice for your latest period"

    sections = [
        ("🚨 Warnings", analysis.warnings),
        ("🩺 Worth watching", analysis.concerns),
        ("💡 Suggestions", analysis.suggestions),
    ]
    message: List[str] = []
    for title, items in sections:
        if not items:
            continue
        if message:
            message.append("")
        message.append(title)
        message.extend(f"• {item}" for item in items)
    return "\n".join(message)

def format_tips(tips: Sequence[str]) -> str:
    """Format page tips, one per line."""
    return "\n".join(tips)
