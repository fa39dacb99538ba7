from datetime import date

import pytest

from errors import InputValidationWarning
from schemas import AggregationCell, SpecificDateSlot, WeeklySlot, make_slot


def test_hours_are_deduplicated_and_sorted(make_participant):
    alice = make_participant("Alice", "UTC", {"Monday": [17, 9, 9, 12]})

    assert alice.availability == {"Monday": [9, 12, 17]}
    assert alice.available_hours == 3


def test_make_slot():
    assert make_slot("weekly", "Friday", 23) == WeeklySlot("Friday", 23)
    assert make_slot("specific", "2024-07-04", 0) == SpecificDateSlot(date(2024, 7, 4), 0)


@pytest.mark.parametrize("availability_type,key,hour", [
    ("weekly", "monday", 9),
    ("weekly", "Monday", -1),
    ("weekly", "Monday", 24),
    ("specific", "07/04/2024", 9),
    ("specific", "2024-07-04", 25),
])
def test_make_slot_rejects_invalid_entries(availability_type, key, hour):
    with pytest.raises(InputValidationWarning):
        make_slot(availability_type, key, hour)


def test_input_validation_warning_is_a_warning():
    assert issubclass(InputValidationWarning, UserWarning)


def test_full_coverage_needs_participants():
    assert not AggregationCell("Monday", 9, [], total=0).is_full_coverage
    assert AggregationCell("Monday", 9, ["a", "b"], total=2).is_full_coverage
    assert not AggregationCell("Monday", 9, ["a"], total=2).is_full_coverage
