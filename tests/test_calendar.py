"""
Tests for calendar grid construction and day classification.
"""
import pytest
from datetime import date, datetime

from period_tracker.models.calendar import DayTag
from period_tracker.models.prediction import InsufficientData
from period_tracker.services.calendar import build_month_grid, classify_day
from period_tracker.services.prediction import predict_next_cycle
from tests.conftest import TODAY, make_record

@pytest.fixture
def february(regular_records):
    """February 2024 grid for the regular records, viewed on 2024-02-01."""
    prediction = predict_next_cycle(regular_records, TODAY)
    return build_month_grid(2024, 2, regular_records, TODAY, prediction, 28)

def test_grid_has_42_cells_starting_on_sunday(february):
    """Test the grid layout around a month starting on Thursday."""
    assert len(february.days) == 42
    assert len(february.weeks()) == 6
    assert february.days[0].date == date(2024, 1, 28)
    assert february.days[0].date.weekday() == 6
    assert february.days[4].date == date(2024, 2, 1)
    assert february.days[-1].date == date(2024, 3, 9)

def test_membership(february):
    """Test leading and trailing cells belong to other months."""
    in_month = [d for d in february.days if d.in_month]
    assert len(in_month) == 29
    assert february.days[0].membership == "other-month"
    assert february.day(date(2024, 2, 15)).membership == "current-month"

def test_other_month_cells_have_no_tags(february):
    """Test a logged period day in the leading cells stays untagged."""
    assert february.day(date(2024, 1, 29)).tags == frozenset()

def test_month_starting_on_sunday():
    """Test a month whose first day is Sunday has no leading cells."""
    grid = build_month_grid(2024, 9, [], date(2024, 9, 10))
    assert grid.days[0].date == date(2024, 9, 1)
    assert grid.days[-1].date == date(2024, 10, 12)

def test_today_and_period(february):
    """Test today is tagged alongside the period."""
    assert february.day(date(2024, 2, 1)).tags == frozenset({DayTag.TODAY, DayTag.PERIOD})
    assert february.day(date(2024, 2, 2)).tags == frozenset({DayTag.PERIOD})
    assert february.day(date(2024, 2, 3)).tags == frozenset()

def test_fertile_window_of_logged_cycle(february):
    """Test ovulation day and fertile window from the late January record."""
    assert february.day(date(2024, 2, 12)).tags == frozenset({DayTag.OVULATION_DAY})
    for day in (7, 11, 13, 16):
        assert february.day(date(2024, 2, day)).tags == frozenset({DayTag.FERTILE})
    assert february.day(date(2024, 2, 6)).tags == frozenset()
    assert february.day(date(2024, 2, 17)).tags == frozenset()

def test_predicted_period(february):
    """Test the predicted period is tagged through the end of the month."""
    for day in (26, 27, 28, 29):
        assert february.day(date(2024, 2, day)).tags == frozenset({DayTag.PREDICTION})
    assert february.day(date(2024, 2, 25)).tags == frozenset()

def test_predicted_fertile_window(regular_records):
    """Test the predicted cycle's ovulation day appears in the next month."""
    prediction = predict_next_cycle(regular_records, TODAY)
    march = build_month_grid(2024, 3, regular_records, TODAY, prediction, 28)

    assert march.day(date(2024, 3, 1)).tags == frozenset({DayTag.PREDICTION})
    assert march.day(date(2024, 3, 11)).tags == frozenset({DayTag.OVULATION_DAY})
    assert march.day(date(2024, 3, 6)).tags == frozenset({DayTag.FERTILE})
    assert march.day(date(2024, 3, 15)).tags == frozenset({DayTag.FERTILE})
    assert march.day(date(2024, 3, 2)).tags == frozenset()

def test_period_excludes_every_other_status(regular_records):
    """Test a period day never carries fertile or prediction tags."""
    overlapping = regular_records + [make_record("x", date(2024, 2, 10), date(2024, 2, 27))]
    prediction = predict_next_cycle(overlapping, TODAY)
    grid = build_month_grid(2024, 2, overlapping, TODAY, prediction, 28)

    for day in grid.days:
        if day.has(DayTag.PERIOD):
            assert day.tags - {DayTag.TODAY, DayTag.PERIOD} == frozenset()

def test_first_matching_record_wins():
    """Test overlapping fertile windows resolve by stored order."""
    earlier = make_record("a", date(2024, 3, 1), date(2024, 3, 2))
    later = make_record("b", date(2024, 3, 4), date(2024, 3, 5))
    day = date(2024, 3, 15)  # Ovulation day of "a", inside the window of "b"

    assert classify_day(day, [later, earlier], TODAY, None, 28) == frozenset({DayTag.FERTILE})
    assert classify_day(day, [earlier, later], TODAY, None, 28) == frozenset({DayTag.OVULATION_DAY})

def test_logged_fertile_tag_blocks_predicted_fertile_tag():
    """Test the predicted window is only consulted when no logged window matched."""
    record = make_record("a", date(2024, 3, 1), date(2024, 3, 2))
    prediction = predict_next_cycle(
        [record, make_record("b", date(2024, 2, 27), date(2024, 2, 28))],
        TODAY
    )
    # Cycle of 3 days puts the predicted start on 2024-03-04
    assert prediction.start_date == date(2024, 3, 4)

    # Ovulation day of the predicted cycle, inside the fertile window of "a"
    day = date(2024, 3, 18)
    assert classify_day(day, [record], TODAY, prediction, 28) == frozenset({DayTag.FERTILE})

def test_prediction_and_fertile_tags_can_combine():
    """Test a predicted period day can also be in a logged fertile window."""
    record = make_record("a", date(2024, 3, 1), date(2024, 3, 2))
    prediction = predict_next_cycle(
        [record, make_record("b", date(2024, 2, 14), date(2024, 2, 15))],
        TODAY
    )
    # 16 day cycle: predicted 2024-03-17 through 2024-03-18
    assert prediction.start_date == date(2024, 3, 17)

    tags = classify_day(date(2024, 3, 17), [record], TODAY, prediction, 28)
    assert tags == frozenset({DayTag.PREDICTION, DayTag.FERTILE})

def test_default_cycle_length_without_average(january_record):
    """Test fertile windows fall back to a 28 day cycle."""
    grid = build_month_grid(2024, 1, [january_record], TODAY, InsufficientData(), None)
    assert grid.day(date(2024, 1, 15)).has(DayTag.OVULATION_DAY)
    assert not any(day.has(DayTag.PREDICTION) for day in grid.days)

def test_no_records_only_marks_today():
    """Test an empty history leaves only the today tag."""
    grid = build_month_grid(2024, 2, [], datetime(2024, 2, 1, 15, 30))
    tagged = [day for day in grid.days if day.tags]
    assert len(tagged) == 1
    assert tagged[0].date == date(2024, 2, 1)
    assert tagged[0].tags == frozenset({DayTag.TODAY})

def test_classification_is_deterministic(regular_records):
    """Test repeated classification yields identical grids."""
    prediction = predict_next_cycle(regular_records, TODAY)
    first = build_month_grid(2024, 2, regular_records, TODAY, prediction, 28)
    second = build_month_grid(2024, 2, regular_records, TODAY, prediction, 28)
    assert first == second

def test_invalid_month():
    """Test months outside 1-12 are rejected."""
    with pytest.raises(ValueError):
        build_month_grid(2024, 13, [], TODAY)
