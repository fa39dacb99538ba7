"""
타임존 변환 모듈

한 타임존의 (요일 또는 날짜, 시간) 슬롯을 UTC 시각을 거쳐 다른 타임존으로 변환합니다.
오프셋과 DST 정보는 pytz(tz database)에서 가져옵니다.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo

import pytz

from errors import ConversionFailure, ZoneResolutionError
from schemas import DAYS_OF_WEEK, ConvertedSlot, Slot, WeeklySlot


# =============================================================================
# 타임존 DB
# =============================================================================

def resolve_zone(name: str) -> tzinfo:
    """IANA 식별자로 타임존을 찾습니다. 없으면 ZoneResolutionError."""
    if not isinstance(name, str) or not name:
        raise ZoneResolutionError(name)
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError as exc:
        raise ZoneResolutionError(name) from exc


def localize(wall: datetime, zone: tzinfo) -> datetime:
    """
    벽시계 시간을 해당 타임존의 시각으로 만듭니다.

    DST 전환으로 애매하거나 존재하지 않는 시간은 pytz 기본값(is_dst=False)에 맡깁니다.
    """
    return zone.normalize(zone.localize(wall))


def utc_offset(instant: datetime, zone: str) -> timedelta:
    """instant 시점에 zone에서 적용되는 UTC 오프셋"""
    return _to_aware(instant).astimezone(resolve_zone(zone)).utcoffset()


def offset_differs_from_january(instant: datetime, zone: str) -> bool:
    """
    instant 시점의 오프셋이 같은 해 1월 1일의 오프셋과 다른지 확인합니다.

    남반구처럼 1월이 여름인 타임존에서는 결과가 반대로 나옵니다.
    DST 판단에는 is_daylight_saving_time()을 쓰고, 이 함수는 오프셋 비교가 필요할 때만 씁니다.
    """
    tz = resolve_zone(zone)
    local = _to_aware(instant).astimezone(tz)
    january = localize(datetime(local.year, 1, 1), tz)
    return local.utcoffset() != january.utcoffset()


def is_daylight_saving_time(instant: datetime, zone: str) -> bool:
    """instant 시점에 zone이 서머타임인지 tz database의 DST 플래그로 확인합니다."""
    local = _to_aware(instant).astimezone(resolve_zone(zone))
    return local.dst() != timedelta(0)


def _to_aware(instant: datetime) -> datetime:
    # naive datetime은 UTC로 간주
    if instant.tzinfo is None:
        return pytz.UTC.localize(instant)
    return instant


# =============================================================================
# 슬롯 변환
# =============================================================================

def next_weekday_occurrence(weekday: str, reference_date: date) -> date:
    """reference_date 당일을 포함해서 가장 가까운 해당 요일의 날짜를 구합니다."""
    days_ahead = (DAYS_OF_WEEK.index(weekday) - reference_date.weekday()) % 7
    return reference_date + timedelta(days=days_ahead)


def convert_slot(
    slot: Slot,
    source_zone: str,
    target_zone: str,
    reference_date: date | None = None,
) -> ConvertedSlot:
    """
    슬롯을 source_zone의 벽시계 시간에서 target_zone의 벽시계 시간으로 변환합니다.

    Args:
        slot: WeeklySlot 또는 SpecificDateSlot
        source_zone: 슬롯 소유자의 타임존
        target_zone: 그리드를 보는 사람의 타임존
        reference_date: weekly 모드의 기준 주. 이 날짜 이후 첫 번째 해당 요일을 사용

    Returns:
        ConvertedSlot (날짜가 하루 앞뒤로 바뀔 수 있음)

    Raises:
        ZoneResolutionError: 타임존을 찾을 수 없는 경우
        ConversionFailure: datetime 생성/연산 실패
    """
    source = resolve_zone(source_zone)
    target = resolve_zone(target_zone)

    if isinstance(slot, WeeklySlot) and reference_date is None:
        raise ValueError("reference_date is required to convert a weekly slot")

    try:
        if isinstance(slot, WeeklySlot):
            day = next_weekday_occurrence(slot.weekday, reference_date)
        else:
            day = slot.day
        wall = datetime.combine(day, time(hour=slot.hour))
        instant = localize(wall, source).astimezone(pytz.UTC)
        observed = instant.astimezone(target)
    except (OverflowError, ValueError) as exc:
        raise ConversionFailure(f"Cannot convert {slot.key} {slot.hour}:00 from {source_zone} to {target_zone}") from exc

    weekday = DAYS_OF_WEEK[observed.weekday()]
    key = weekday if isinstance(slot, WeeklySlot) else observed.date().isoformat()

    return ConvertedSlot(key=key, hour=observed.hour, weekday=weekday, instant=instant)


def fallback_slot(slot: Slot) -> ConvertedSlot:
    """변환에 실패한 슬롯을 변환 없이 그대로 돌려줍니다."""
    if isinstance(slot, WeeklySlot):
        weekday = slot.weekday
    else:
        weekday = DAYS_OF_WEEK[slot.day.weekday()]
    return ConvertedSlot(key=slot.key, hour=slot.hour, weekday=weekday, degraded=True)


# =============================================================================
# 타임스탬프 표시
# =============================================================================

@dataclass(frozen=True)
class ZonedTimestamp:
    time_zone: str
    date: str                     # YYYY-MM-DD
    time: str                     # HH:MM
    is_daylight_saving_time: bool
    display: str


def convert_timestamp(timestamp: str | datetime, zone: str) -> ZonedTimestamp:
    """
    타임스탬프를 zone 기준의 날짜/시간으로 바꿉니다.

    Args:
        timestamp: ISO 문자열 또는 datetime. 오프셋이 없으면 UTC로 간주
        zone: IANA 타임존

    Raises:
        ZoneResolutionError: 타임존을 찾을 수 없는 경우
        ConversionFailure: 타임스탬프를 읽을 수 없는 경우
    """
    if isinstance(timestamp, str):
        try:
            timestamp = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
        except ValueError as exc:
            raise ConversionFailure(f"Invalid timestamp: {timestamp!r}") from exc

    local = _to_aware(timestamp).astimezone(resolve_zone(zone))
    date_str = local.strftime("%Y-%m-%d")
    time_str = local.strftime("%H:%M")

    return ZonedTimestamp(
        time_zone=zone,
        date=date_str,
        time=time_str,
        is_daylight_saving_time=is_daylight_saving_time(timestamp, zone),
        display=f"{date_str} {time_str}",
    )
