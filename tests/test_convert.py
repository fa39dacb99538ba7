from datetime import date, datetime, timedelta

import pytest
import pytz

from conftest import SUMMER_WEEK, WINTER_WEEK
from convert import (
    convert_slot,
    convert_timestamp,
    fallback_slot,
    is_daylight_saving_time,
    next_weekday_occurrence,
    offset_differs_from_january,
    resolve_zone,
    utc_offset,
)
from errors import ConversionFailure, ZoneResolutionError
from schemas import SpecificDateSlot, WeeklySlot


def test_next_weekday_occurrence_includes_reference_day():
    assert next_weekday_occurrence("Wednesday", WINTER_WEEK) == WINTER_WEEK
    assert next_weekday_occurrence("Monday", WINTER_WEEK) == date(2024, 1, 15)
    assert next_weekday_occurrence("Sunday", WINTER_WEEK) == date(2024, 1, 14)


def test_weekly_new_york_to_tokyo_moves_to_tuesday():
    result = convert_slot(WeeklySlot("Monday", 22), "America/New_York", "Asia/Tokyo", WINTER_WEEK)

    # 기대값은 하드코딩하지 않고 tz database 오프셋 차이로 계산
    instant = pytz.timezone("America/New_York").localize(datetime(2024, 1, 15, 22))
    delta = utc_offset(instant, "Asia/Tokyo") - utc_offset(instant, "America/New_York")
    expected_hour = (22 + int(delta / timedelta(hours=1))) % 24

    assert result.key == "Tuesday"
    assert result.weekday == "Tuesday"
    assert result.hour == expected_hour == 12
    assert result.instant == datetime(2024, 1, 16, 3, tzinfo=pytz.UTC)
    assert not result.degraded


def test_specific_los_angeles_to_london_crosses_midnight():
    result = convert_slot(SpecificDateSlot(date(2024, 7, 4), 23), "America/Los_Angeles", "Europe/London")

    assert result.key == "2024-07-05"
    assert result.hour == 7
    assert result.weekday == "Friday"


def test_conversion_can_move_back_a_day():
    result = convert_slot(WeeklySlot("Monday", 3), "Asia/Tokyo", "America/New_York", WINTER_WEEK)

    assert (result.key, result.hour) == ("Sunday", 13)


def test_round_trip_returns_original_slot():
    there = convert_slot(WeeklySlot("Friday", 23), "America/New_York", "Asia/Tokyo", WINTER_WEEK)
    back = convert_slot(WeeklySlot(there.key, there.hour), "Asia/Tokyo", "America/New_York", WINTER_WEEK)
    assert (back.key, back.hour) == ("Friday", 23)

    there = convert_slot(SpecificDateSlot(date(2024, 7, 4), 23), "America/Los_Angeles", "Europe/London")
    back = convert_slot(
        SpecificDateSlot(date.fromisoformat(there.key), there.hour), "Europe/London", "America/Los_Angeles"
    )
    assert (back.key, back.hour) == ("2024-07-04", 23)


def test_weekly_conversion_uses_offset_of_reference_week():
    slot = WeeklySlot("Monday", 9)

    # 미국만 서머타임인 3월 중순
    assert convert_slot(slot, "America/New_York", "Europe/London", date(2024, 3, 11)).hour == 13
    assert convert_slot(slot, "America/New_York", "Europe/London", date(2024, 2, 5)).hour == 14
    assert convert_slot(slot, "America/New_York", "Europe/London", date(2024, 4, 1)).hour == 14


def test_same_reference_date_is_deterministic():
    slot = WeeklySlot("Thursday", 8)
    first = convert_slot(slot, "Australia/Sydney", "America/Chicago", SUMMER_WEEK)
    second = convert_slot(slot, "Australia/Sydney", "America/Chicago", SUMMER_WEEK)
    assert first == second


def test_non_hour_offset_truncates_to_containing_hour():
    result = convert_slot(WeeklySlot("Monday", 22), "America/New_York", "Asia/Kolkata", WINTER_WEEK)
    # 03:00 UTC = 08:30 IST
    assert (result.key, result.hour) == ("Tuesday", 8)


def test_weekly_slot_requires_reference_date():
    with pytest.raises(ValueError):
        convert_slot(WeeklySlot("Monday", 9), "UTC", "Asia/Tokyo")


def test_unknown_zone_raises_zone_resolution_error():
    with pytest.raises(ZoneResolutionError):
        convert_slot(WeeklySlot("Monday", 9), "Mars/Olympus_Mons", "UTC", WINTER_WEEK)
    with pytest.raises(ZoneResolutionError):
        resolve_zone("")


def test_fallback_slot_keeps_original_position():
    weekly = fallback_slot(WeeklySlot("Sunday", 5))
    assert (weekly.key, weekly.hour, weekly.weekday, weekly.degraded) == ("Sunday", 5, "Sunday", True)

    specific = fallback_slot(SpecificDateSlot(date(2024, 7, 4), 23))
    assert (specific.key, specific.weekday, specific.instant) == ("2024-07-04", "Thursday", None)


def test_daylight_saving_flag():
    assert is_daylight_saving_time(datetime(2024, 7, 1, 12), "America/New_York")
    assert not is_daylight_saving_time(datetime(2024, 1, 1, 12), "America/New_York")
    assert not is_daylight_saving_time(datetime(2024, 7, 1, 12), "Asia/Tokyo")


def test_daylight_saving_flag_in_southern_hemisphere():
    summer = datetime(2024, 1, 15, tzinfo=pytz.UTC)

    assert is_daylight_saving_time(summer, "Australia/Sydney")
    # 1월 1일 비교 방식은 남반구에서 틀린다
    assert not offset_differs_from_january(summer, "Australia/Sydney")


def test_utc_offset():
    assert utc_offset(datetime(2024, 7, 1), "Asia/Kolkata") == timedelta(hours=5, minutes=30)
    assert utc_offset(datetime(2024, 7, 1), "America/Los_Angeles") == timedelta(hours=-7)


def test_convert_timestamp():
    result = convert_timestamp("2024-07-04T12:00:00Z", "America/New_York")

    assert result.date == "2024-07-04"
    assert result.time == "08:00"
    assert result.is_daylight_saving_time
    assert result.display == "2024-07-04 08:00"


def test_convert_timestamp_rejects_garbage():
    with pytest.raises(ConversionFailure):
        convert_timestamp("not a timestamp", "UTC")


def test_reference_date_past_calendar_end_raises_conversion_failure():
    # 9999-12-31은 금요일. 다음 월요일은 date 범위를 넘는다
    with pytest.raises(ConversionFailure):
        convert_slot(WeeklySlot("Monday", 9), "UTC", "UTC", date(9999, 12, 31))


def test_instant_past_calendar_end_raises_conversion_failure():
    with pytest.raises(ConversionFailure):
        convert_slot(SpecificDateSlot(date(9999, 12, 31), 23), "UTC", "Asia/Tokyo")
