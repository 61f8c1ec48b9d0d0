"""
Calendar grid model definitions.
"""
from enum import Enum
from datetime import date
from typing import FrozenSet, List
from pydantic import BaseModel, computed_field


class DayTag(str, Enum):
    """
    Status tags a calendar day can carry. Several may apply to one day.
    """
    TODAY = "today"
    PERIOD = "has-period"
    OVULATION_DAY = "has-ovulation-day"
    FERTILE = "has-ovulation"
    PREDICTION = "has-prediction"


class CalendarDay(BaseModel):
    """
    A single cell of the month grid.
    """
    date: date
    in_month: bool
    tags: FrozenSet[DayTag] = frozenset()

    @computed_field
    @property
    def membership(self) -> str:
        """Membership tag used by renderers."""
        return "current-month" if self.in_month else "other-month"

    def has(self, tag: DayTag) -> bool:
        """Check if the day carries a tag."""
        return tag in self.tags


class CalendarMonth(BaseModel):
    """
    A 6x7 grid of days for a displayed month, weeks starting on Sunday.
    """
    year: int
    month: int
    days: List[CalendarDay]

    def weeks(self) -> List[List[CalendarDay]]:
        """Split the grid into rows of seven days."""
        return [self.days[i:i + 7] for i in range(0, len(self.days), 7)]

    def day(self, target: date) -> CalendarDay:
        """
        Look up the cell for a date.

        Raises:
            KeyError: If the date is not part of the grid
        """
        for cell in self.days:
            if cell.date == target:
                return cell
        raise KeyError(target)
