from timezones import (
    COMMON_TIMEZONES,
    format_date,
    format_hour,
    format_timezone,
    is_valid_timezone,
    uses_12_hour_clock,
)


def test_common_timezones_are_known():
    assert all(is_valid_timezone(zone) for zone in COMMON_TIMEZONES)
    assert not is_valid_timezone("Mars/Olympus_Mons")


def test_uses_12_hour_clock():
    assert uses_12_hour_clock("America/New_York")
    assert uses_12_hour_clock("Asia/Kolkata")
    assert not uses_12_hour_clock("Europe/London")
    assert not uses_12_hour_clock("Asia/Tokyo")
    assert not uses_12_hour_clock("UTC")


def test_uses_12_hour_clock_falls_back_to_country_table():
    # 매핑에 없지만 pytz 국가 테이블에 있는 미국 타임존
    assert uses_12_hour_clock("America/Boise")


def test_format_hour():
    assert format_hour(9) == "09:00"
    assert format_hour(0, twelve_hour=True) == "12:00 AM"
    assert format_hour(12, twelve_hour=True) == "12:00 PM"
    assert format_hour(23, twelve_hour=True) == "11:00 PM"


def test_format_helpers():
    assert format_timezone("America/Argentina/Buenos_Aires") == "America/Argentina/Buenos Aires"
    assert format_date("2024-06-15") == "June 15, 2024"
    assert format_date("2024-06-15T10:00:00+00:00") == "June 15, 2024"
