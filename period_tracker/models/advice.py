"""
Advisory model definitions.
"""
from enum import Enum
from typing import List
from pydantic import BaseModel, Field


class DetailAnalysis(BaseModel):
    """
    Advisories derived from the latest record's details, by urgency.
    """
    warnings: List[str] = Field(default_factory=list)
    concerns: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """Check if no advisory was produced."""
        return not (self.warnings or self.concerns or self.suggestions)


class Page(str, Enum):
    """
    Screens that show contextual tips.
    """
    CALENDAR = "calendar"
    RECORD = "record"
    PREDICTION = "prediction"
