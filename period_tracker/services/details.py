"""
Detail analysis service.

Turns the qualitative details of the latest logged period (flow color,
amount, pain and symptoms) into advisories grouped by urgency. The result
is informational only and does not feed into predictions or the calendar.
"""
from typing import Dict, List, Mapping, Sequence
from aws_lambda_powertools import Logger

from period_tracker.models.advice import DetailAnalysis
from period_tracker.models.record import FlowAmount, Record
from period_tracker.services.constants import (
    AMOUNT_ADVISORIES,
    COLOR_ADVISORIES,
    LONG_HEAVY_PERIOD_DAYS,
    LONG_HEAVY_PERIOD_WARNING,
    MAX_ADVISORIES,
    PAIN_ADVISORIES,
    SYMPTOM_ADVISORIES
)
from period_tracker.services.utils import get_latest_record

logger = Logger()

ADVISORY_LEVELS = ("warnings", "concerns", "suggestions")

def _collect(advisories: Dict[str, List[str]], rule: Mapping[str, List[str]]) -> None:
    """Merge a rule's advisories, skipping duplicates."""
    for level in ADVISORY_LEVELS:
        for message in rule.get(level, []):
            if message not in advisories[level]:
                advisories[level].append(message)

def analyze_details(records: Sequence[Record]) -> DetailAnalysis:
    """
    Analyze the details of the most recent period.

    Only the record with the latest start date is inspected. Each advisory
    list is capped at MAX_ADVISORIES entries, most urgent rules first.

    Args:
        records: All stored records

    Returns:
        DetailAnalysis with warnings, concerns and suggestions; all empty
        when there are no records or the latest one has no details
    """
    latest = get_latest_record(records)
    if latest is None or latest.details is None:
        return DetailAnalysis()

    details = latest.details
    advisories: Dict[str, List[str]] = {level: [] for level in ADVISORY_LEVELS}

    if details.pain in PAIN_ADVISORIES:
        _collect(advisories, PAIN_ADVISORIES[details.pain])
    if details.amount == FlowAmount.HEAVY and latest.duration > LONG_HEAVY_PERIOD_DAYS:
        _collect(advisories, {"warnings": [LONG_HEAVY_PERIOD_WARNING]})
    if details.color in COLOR_ADVISORIES:
        _collect(advisories, COLOR_ADVISORIES[details.color])
    if details.amount in AMOUNT_ADVISORIES:
        _collect(advisories, AMOUNT_ADVISORIES[details.amount])
    # Iterate in rule order so the output does not depend on set ordering
    for symptom, rule in SYMPTOM_ADVISORIES.items():
        if symptom in details.symptoms:
            _collect(advisories, rule)

    analysis = DetailAnalysis(**{
        level: messages[:MAX_ADVISORIES] for level, messages in advisories.items()
    })
    logger.debug("Analyzed record details", extra={
        "record_id": latest.id,
        "warnings": len(analysis.warnings),
        "concerns": len(analysis.concerns),
        "suggestions": len(analysis.suggestions)
    })
    return analysis
