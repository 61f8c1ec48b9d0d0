"""
Record model definition for logged menstrual periods.
"""
from enum import Enum
from datetime import date
from typing import FrozenSet, Optional
from pydantic import BaseModel, ConfigDict, computed_field, model_validator


class FlowColor(str, Enum):
    """
    Observed flow color.
    """
    BRIGHT_RED = "bright_red"
    DARK_RED = "dark_red"
    BROWN = "brown"
    PINK = "pink"
    BLACK = "black"


class FlowAmount(str, Enum):
    """
    Observed flow amount.
    """
    SPOTTING = "spotting"
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"


class PainLevel(str, Enum):
    """
    Self-reported pain level.
    """
    NONE = "none"
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


class Symptom(str, Enum):
    """
    Symptom tags that can be attached to a record.
    """
    CRAMPS = "cramps"
    HEADACHE = "headache"
    BLOATING = "bloating"
    FATIGUE = "fatigue"
    MOOD_SWINGS = "mood_swings"
    BACK_PAIN = "back_pain"
    NAUSEA = "nausea"
    DIZZINESS = "dizziness"
    CLOTS = "clots"
    BREAST_TENDERNESS = "breast_tenderness"
    ACNE = "acne"


class RecordDetails(BaseModel):
    """
    Qualitative attributes of a logged period.
    """
    model_config = ConfigDict(frozen=True)

    color: Optional[FlowColor] = None
    amount: Optional[FlowAmount] = None
    pain: Optional[PainLevel] = None
    symptoms: FrozenSet[Symptom] = frozenset()
    note: Optional[str] = None


class Record(BaseModel):
    """
    Represents a logged period as an inclusive date range.

    Records are immutable; ``duration`` is always derived from the dates and
    any stored value is ignored when a record is loaded.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    start_date: date
    end_date: date
    details: Optional[RecordDetails] = None

    @model_validator(mode="after")
    def check_date_range(self) -> "Record":
        """Reject ranges that end before they start."""
        if self.end_date < self.start_date:
            raise ValueError("end_date cannot be earlier than start_date")
        return self

    @computed_field
    @property
    def duration(self) -> int:
        """Period length in days, counting both endpoints."""
        return (self.end_date - self.start_date).days + 1

    def contains(self, day: date) -> bool:
        """Check if a day falls inside this period."""
        return self.start_date <= day <= self.end_date
