"""
Command line handlers for the period tracker.

Each subcommand loads the tracker from the configured data directory, runs
one operation and prints the formatted result.

Typical usage:
    period-tracker add 2024-01-29 2024-02-02 --amount heavy --symptom cramps
    period-tracker calendar --year 2024 --month 2
    period-tracker chat "Is a 35 day cycle normal?"
"""
import sys
import argparse
from typing import Callable, Dict, List, Optional

from aws_lambda_powertools import Logger

from period_tracker.models.advice import Page
from period_tracker.models.record import FlowAmount, FlowColor, PainLevel, Symptom
from period_tracker.services.exceptions import AdviceServiceError, RecordValidationError, StorageError
from period_tracker.services.storage import RecordRepository
from period_tracker.services.tracker import PeriodTracker
from period_tracker.utils.advice_client import AdviceClient
from period_tracker.utils.formatters import (
    format_advisories,
    format_calendar,
    format_prediction,
    format_records,
    format_statistics,
    format_tips
)
from period_tracker.utils.storage import get_blob_store

logger = Logger()

def create_tracker() -> PeriodTracker:
    """Build a tracker over the configured blob store."""
    return PeriodTracker(RecordRepository(get_blob_store()))

def handle_add_command(tracker: PeriodTracker, args: argparse.Namespace) -> int:
    """Add a record and show advice for it."""
    details = {
        field: getattr(args, field)
        for field in ("color", "amount", "pain", "note")
        if getattr(args, field) is not None
    }
    if args.symptom:
        details["symptoms"] = args.symptom

    record = tracker.add_record(args.start, args.end, details or None)
    print(f"Record saved: {record.id}")
    print(format_records([record]))

    advisories = tracker.advisories()
    if not advisories.is_empty:
        print()
        print(format_advisories(advisories))
    return 0

def handle_delete_command(tracker: PeriodTracker, args: argparse.Namespace) -> int:
    """Delete a record by id."""
    if not tracker.delete_record(args.record_id):
        print(f"No record with id {args.record_id}", file=sys.stderr)
        return 1
    print("Record deleted")
    return 0

def handle_list_command(tracker: PeriodTracker, args: argparse.Namespace) -> int:
    """List records with their ids, most recently added first."""
    records = tracker.records()
    if not records:
        print(format_records(records))
    for record in records:
        print(f"# {record.id}")
        print(format_records([record]))
    return 0

def handle_calendar_command(tracker: PeriodTracker, args: argparse.Namespace) -> int:
    """Show a month grid, the current month by default."""
    print(format_calendar(tracker.calendar(args.year, args.month)))
    return 0

def handle_predict_command(tracker: PeriodTracker, args: argparse.Namespace) -> int:
    """Show the next period prediction and any reminder."""
    print(format_prediction(tracker.prediction()))
    reminder = tracker.reminder()
    if reminder:
        print()
        print(f"🔔 {reminder}")
    return 0

def handle_stats_command(tracker: PeriodTracker, args: argparse.Namespace) -> int:
    print(format_statistics(tracker.statistics()))
    return 0

def handle_advice_command(tracker: PeriodTracker, args: argparse.Namespace) -> int:
    print(format_advisories(tracker.advisories()))
    return 0

def handle_tips_command(tracker: PeriodTracker, args: argparse.Namespace) -> int:
    print(format_tips(tracker.tips(args.page)))
    return 0

def handle_chat_command(tracker: PeriodTracker, args: argparse.Namespace) -> int:
    """Stream an answer from the advice service."""
    try:
        client = AdviceClient()
    except KeyError:
        print("ADVICE_API_KEY is not set", file=sys.stderr)
        return 1

    for chunk in client.stream_reply(args.message):
        print(chunk, end="", flush=True)
    print()
    return 0

HANDLERS: Dict[str, Callable[[PeriodTracker, argparse.Namespace], int]] = {
    "add": handle_add_command,
    "delete": handle_delete_command,
    "list": handle_list_command,
    "calendar": handle_calendar_command,
    "predict": handle_predict_command,
    "stats": handle_stats_command,
    "advice": handle_advice_command,
    "tips": handle_tips_command,
    "chat": handle_chat_command,
}

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="period-tracker", description="Menstrual cycle tracking")
    sub = parser.add_subparsers(dest="command")

    add = sub.add_parser("add", help="Record a period")
    add.add_argument("start", help="Start date (YYYY-MM-DD)")
    add.add_argument("end", help="End date (YYYY-MM-DD)")
    add.add_argument("--color", choices=[c.value for c in FlowColor])
    add.add_argument("--amount", choices=[a.value for a in FlowAmount])
    add.add_argument("--pain", choices=[p.value for p in PainLevel])
    add.add_argument("--symptom", action="append", choices=[s.value for s in Symptom],
                     help="Symptom, may be repeated")
    add.add_argument("--note", help="Free-text note")

    delete = sub.add_parser("delete", help="Delete a record")
    delete.add_argument("record_id", help="Record id as shown by list")

    sub.add_parser("list", help="Record history")

    calendar = sub.add_parser("calendar", help="Month calendar")
    calendar.add_argument("--year", type=int)
    calendar.add_argument("--month", type=int, choices=range(1, 13))

    sub.add_parser("predict", help="Next period prediction")
    sub.add_parser("stats", help="Cycle statistics")
    sub.add_parser("advice", help="Advice for the latest period")

    tips = sub.add_parser("tips", help="Tips for a screen")
    tips.add_argument("page", choices=[p.value for p in Page])

    chat = sub.add_parser("chat", help="Ask the advice service a question")
    chat.add_argument("message", help="Question to ask")

    return parser

def main(argv: Optional[List[str]] = None, tracker: Optional[PeriodTracker] = None) -> int:
    """
    Run a tracker command.

    Args:
        argv: Command line arguments, sys.argv[1:] by default
        tracker: Tracker to operate on, loaded from the data directory by default

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    tracker = tracker or create_tracker()
    try:
        return HANDLERS[args.command](tracker, args)
    except RecordValidationError as e:
        print(f"Invalid record: {e}", file=sys.stderr)
        return 1
    except StorageError as e:
        print(str(e), file=sys.stderr)
        return 1
    except AdviceServiceError as e:
        logger.warning("Chat failed", extra={"error": str(e)})
        print(str(e), file=sys.stderr)
        return 1

if __name__ == "__main__":
    sys.exit(main())
