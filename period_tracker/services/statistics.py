"""
Statistics calculation service for cycle tracking data.

This module provides functionality for calculating menstrual cycle statistics,
including period durations and the lengths of cycles between period starts.
"""
from typing import List, Optional, Sequence, Tuple
from statistics import mean
from aws_lambda_powertools import Logger

from period_tracker.models.record import Record
from period_tracker.models.prediction import CycleStatistics
from period_tracker.services.constants import MIN_CYCLE_GAP, MAX_CYCLE_GAP
from period_tracker.services.utils import round_half_up, sort_by_start

logger = Logger()

def calculate_cycle_gaps(records: Sequence[Record]) -> List[int]:
    """
    Calculate the days between consecutive period starts.

    Gaps of zero or fewer days (duplicate starts) and gaps of 60 days or more
    (missed logging or anomalous cycles) are dropped as outliers.

    Args:
        records: Records in any order

    Returns:
        Accepted gaps in chronological order
    """
    ordered = sort_by_start(records)
    gaps = []
    for previous, current in zip(ordered, ordered[1:]):
        gap = (current.start_date - previous.start_date).days
        if MIN_CYCLE_GAP < gap < MAX_CYCLE_GAP:
            gaps.append(gap)
        else:
            logger.debug("Skipping outlier cycle gap", extra={
                "previous_start": str(previous.start_date),
                "current_start": str(current.start_date),
                "gap": gap
            })
    return gaps

def average_cycle_length(records: Sequence[Record]) -> Optional[int]:
    """
    Average cycle length in whole days.

    Returns:
        Rounded mean of the accepted gaps, or None with fewer than two
        records or when every gap is an outlier

    Example:
        >>> average_cycle_length([jan_1_record, jan_29_record])
        28
    """
    if len(records) < 2:
        return None
    gaps = calculate_cycle_gaps(records)
    if not gaps:
        return None
    return round_half_up(mean(gaps))

def average_duration(records: Sequence[Record]) -> Optional[int]:
    """
    Average period duration in whole days, or None without records.
    """
    if not records:
        return None
    return round_half_up(mean(r.duration for r in records))

def min_max_cycle(records: Sequence[Record]) -> Optional[Tuple[int, int]]:
    """
    Shortest and longest accepted cycle lengths.

    Returns:
        Tuple of (min, max), or None when no gap is accepted
    """
    gaps = calculate_cycle_gaps(records)
    if not gaps:
        return None
    return min(gaps), max(gaps)

def calculate_cycle_statistics(records: Sequence[Record]) -> CycleStatistics:
    """
    Calculate the statistics summary shown to the user.

    Args:
        records: All stored records

    Returns:
        CycleStatistics with every value that can be derived from the data
    """
    extremes = min_max_cycle(records)
    stats = CycleStatistics(
        total_records=len(records),
        average_cycle_length=average_cycle_length(records),
        average_duration=average_duration(records),
        min_cycle_length=extremes[0] if extremes else None,
        max_cycle_length=extremes[1] if extremes else None
    )
    logger.info("Calculated cycle statistics", extra=stats.model_dump())
    return stats
