"""
타임존 목록과 표시 형식

참가자 폼에서 고르는 타임존 목록, 지역별 12/24시간제 판단, 시간/날짜 표시 형식.
"""

from datetime import date

import pytz

COMMON_TIMEZONES: list[str] = [
    "Etc/GMT+12",                       # UTC-12
    "Pacific/Honolulu",                 # UTC-10
    "America/Anchorage",                # UTC-9
    "America/Los_Angeles",              # UTC-8 (PST)
    "America/Denver",                   # UTC-7 (MST)
    "America/Chicago",                  # UTC-6 (CST)
    "America/New_York",                 # UTC-5 (EST)
    "America/Caracas",                  # UTC-4
    "America/Sao_Paulo",                # UTC-3 (BRT)
    "America/Argentina/Buenos_Aires",   # UTC-3
    "Etc/GMT+2",                        # UTC-2
    "Atlantic/Azores",                  # UTC-1
    "Europe/London",                    # UTC+0 (GMT)
    "Europe/Berlin",                    # UTC+1 (CET)
    "Europe/Paris",                     # UTC+1
    "Africa/Cairo",                     # UTC+2
    "Europe/Moscow",                    # UTC+3
    "Asia/Dubai",                       # UTC+4
    "Asia/Karachi",                     # UTC+5
    "Asia/Dhaka",                       # UTC+6
    "Asia/Bangkok",                     # UTC+7
    "Asia/Hong_Kong",                   # UTC+8
    "Asia/Tokyo",                       # UTC+9
    "Australia/Sydney",                 # UTC+10
    "Pacific/Auckland",                 # UTC+12
    "UTC",
]

# 주로 12시간제(AM/PM)를 쓰는 나라
COUNTRIES_USING_12_HOUR = {
    "US", "CA", "AU", "NZ", "PH", "MY", "SG", "IN", "PK", "BD", "LK", "NP",
    "MM", "KH", "LA", "BT", "MV", "FJ", "PW", "MH", "FM", "KI", "TV", "NR",
    "TO", "WS", "VU", "SB", "PG", "NC", "GU", "AS", "VI", "PR", "MP",
}

TIMEZONE_TO_COUNTRY = {
    # North America
    "America/New_York": "US",
    "America/Chicago": "US",
    "America/Denver": "US",
    "America/Los_Angeles": "US",
    "America/Phoenix": "US",
    "America/Anchorage": "US",
    "Pacific/Honolulu": "US",
    "America/Toronto": "CA",
    "America/Vancouver": "CA",
    "America/Montreal": "CA",
    "America/Halifax": "CA",
    "America/Winnipeg": "CA",
    "America/Edmonton": "CA",
    "America/Regina": "CA",
    "America/St_Johns": "CA",
    "America/Mexico_City": "MX",
    # Oceania
    "Australia/Sydney": "AU",
    "Australia/Melbourne": "AU",
    "Australia/Brisbane": "AU",
    "Australia/Perth": "AU",
    "Australia/Adelaide": "AU",
    "Pacific/Auckland": "NZ",
    "Pacific/Fiji": "FJ",
    # Asia
    "Asia/Manila": "PH",
    "Asia/Kuala_Lumpur": "MY",
    "Asia/Singapore": "SG",
    "Asia/Kolkata": "IN",
    "Asia/Karachi": "PK",
    "Asia/Dhaka": "BD",
    "Asia/Colombo": "LK",
    "Asia/Kathmandu": "NP",
    "Asia/Tokyo": "JP",
    "Asia/Shanghai": "CN",
    "Asia/Hong_Kong": "HK",
    "Asia/Seoul": "KR",
    "Asia/Bangkok": "TH",
    "Asia/Jakarta": "ID",
    "Asia/Dubai": "AE",
    "Asia/Riyadh": "SA",
    # Europe
    "Europe/London": "GB",
    "Europe/Paris": "FR",
    "Europe/Berlin": "DE",
    "Europe/Rome": "IT",
    "Europe/Madrid": "ES",
    "Europe/Amsterdam": "NL",
    "Europe/Stockholm": "SE",
    "Europe/Moscow": "RU",
    "Europe/Istanbul": "TR",
    "Europe/Athens": "GR",
    "Europe/Dublin": "IE",
    "Europe/Lisbon": "PT",
    # South America
    "America/Sao_Paulo": "BR",
    "America/Argentina/Buenos_Aires": "AR",
    "America/Lima": "PE",
    "America/Bogota": "CO",
    "America/Caracas": "VE",
    "America/Santiago": "CL",
    # Africa
    "Africa/Cairo": "EG",
    "Africa/Lagos": "NG",
    "Africa/Johannesburg": "ZA",
    "Africa/Nairobi": "KE",
    "Africa/Casablanca": "MA",
}

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def is_valid_timezone(name: str) -> bool:
    return name in pytz.all_timezones_set


def uses_12_hour_clock(zone: str) -> bool:
    """타임존이 속한 나라가 주로 12시간제를 쓰는지 판단합니다. 모르는 타임존은 24시간제."""
    country = TIMEZONE_TO_COUNTRY.get(zone)
    if country is None:
        country = _country_for_zone(zone)
    return country in COUNTRIES_USING_12_HOUR


def _country_for_zone(zone: str) -> str | None:
    for country, zones in pytz.country_timezones.items():
        if zone in zones:
            return country
    return None


def format_hour(hour: int, twelve_hour: bool = False) -> str:
    """0~23 시간을 "14:00" 또는 "2:00 PM" 형태로 바꿉니다."""
    if not twelve_hour:
        return f"{hour:02d}:00"
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12}:00 {suffix}"


def format_timezone(zone: str) -> str:
    """예: America/New_York -> America/New York"""
    return zone.replace("_", " ")


def format_date(iso_date: str) -> str:
    """예: 2024-06-15 -> June 15, 2024"""
    day = date.fromisoformat(iso_date[:10])
    return f"{MONTH_NAMES[day.month - 1]} {day.day}, {day.year}"
