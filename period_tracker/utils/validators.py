"""
Date validation utilities for record input.
"""
from typing import Any
from datetime import date, datetime

from period_tracker.services.exceptions import InvalidDateError, InvalidDateRangeError

DATE_FORMAT = "%Y-%m-%d"

def validate_date(value: Any) -> date:
    """
    Validate and parse a date value.
    
    Args:
        value: A date, a datetime (time is dropped) or a string in YYYY-MM-DD format
        
    Returns:
        Parsed date
        
    Raises:
        InvalidDateError: If the value is missing or malformed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip(), DATE_FORMAT).date()
        except ValueError:
            raise InvalidDateError(f"Invalid date '{value}', expected YYYY-MM-DD")
    raise InvalidDateError(f"Invalid date value: {value!r}")

def validate_date_range(start_date: date, end_date: date) -> None:
    """
    Validate that a period does not end before it starts.
    
    Raises:
        InvalidDateRangeError: If end_date is earlier than start_date
    """
    if end_date < start_date:
        raise InvalidDateRangeError("End date cannot be earlier than start date")
