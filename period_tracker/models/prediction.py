"""
Derived prediction and statistics models.

None of these are persisted; they are recomputed from the records on every read.
"""
from datetime import date
from typing import Optional
from pydantic import BaseModel


class CyclePrediction(BaseModel):
    """
    Projected next period.
    """
    start_date: date
    end_date: date
    days_until: int  # Negative when the period is overdue
    avg_cycle: int
    avg_duration: int


class InsufficientData(BaseModel):
    """
    Returned when there are records but no usable cycle length.
    """
    message: str = "At least two records are needed to make a prediction"


class NoData(BaseModel):
    """
    Returned when no records exist at all.
    """
    message: str = "No records yet, add your first period to get started"


class FertileWindow(BaseModel):
    """
    Estimated fertile window around an ovulation day.
    """
    start: date
    end: date
    ovulation_day: date

    def contains(self, day: date) -> bool:
        """Check if a day falls inside the window."""
        return self.start <= day <= self.end


class CycleStatistics(BaseModel):
    """
    Summary statistics over all records.
    """
    total_records: int
    average_cycle_length: Optional[int] = None
    average_duration: Optional[int] = None
    min_cycle_length: Optional[int] = None
    max_cycle_length: Optional[int] = None
