"""
Shared utility functions for cycle-related services.

These utilities are used across multiple service modules to handle common
operations like date normalization, rounding and record ordering.
"""
import math
from typing import Iterable, List, Optional, Union
from datetime import date, datetime

from period_tracker.models.record import Record

def to_day(value: Union[date, datetime]) -> date:
    """
    Normalize a date or datetime to a plain date (midnight).
    
    Example:
        >>> to_day(datetime(2024, 2, 1, 18, 30))
        datetime.date(2024, 2, 1)
    """
    if isinstance(value, datetime):
        return value.date()
    return value

def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with halves rounded up.
    
    The builtin round() uses banker's rounding, which would turn an average
    of 28.5 days into 28.
    
    Example:
        >>> round_half_up(28.5)
        29
    """
    return int(math.floor(value + 0.5))

def sort_by_start(records: Iterable[Record], reverse: bool = False) -> List[Record]:
    """
    Sort records by start date.
    
    Args:
        records: Records to sort
        reverse: Whether to sort newest first
        
    Returns:
        New list of records sorted by start date (stable for equal dates)
    """
    return sorted(records, key=lambda r: r.start_date, reverse=reverse)

def get_latest_record(records: Iterable[Record]) -> Optional[Record]:
    """
    Get the record with the latest start date.
    
    On ties the record that comes first in stored order wins.
    """
    latest = None
    for record in records:
        if latest is None or record.start_date > latest.start_date:
            latest = record
    return latest
