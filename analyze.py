import logging
from collections import defaultdict
from collections.abc import Mapping
from datetime import date
from typing import Generator, Iterator

from convert import convert_slot, fallback_slot
from errors import ConversionFailure, InputValidationWarning, ZoneResolutionError
from schemas import (
    DAYS_OF_WEEK,
    HOURS,
    PARTICIPANT_COLORS,
    AggregationCell,
    AvailabilityType,
    ConvertedSlot,
    Participant,
    Slot,
    SlotIssue,
    make_slot,
)

logger = logging.getLogger(__name__)


# =============================================================================
# 집계 결과
# =============================================================================

class AvailabilityGrid(Mapping):
    """
    보는 사람 타임존 기준의 (열 키, 시간) → AggregationCell 매핑.

    열 키는 weekly 모드에서 요일 이름, specific 모드에서 ISO 날짜입니다.
    참가자가 없는 셀도 포함됩니다 (count == 0).
    """

    def __init__(
        self,
        mode: AvailabilityType,
        axis: list[str],
        cells: dict[tuple[str, int], AggregationCell],
        total: int,
        issues: list[SlotIssue],
    ):
        self.mode = mode
        self.axis = axis
        self.total = total
        self.issues = issues
        self._cells = cells

    def __getitem__(self, key: tuple[str, int]) -> AggregationCell:
        return self._cells[key]

    def __iter__(self) -> Iterator[tuple[str, int]]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def rows(self) -> Generator[tuple[int, list[AggregationCell]], None, None]:
        """시간별로 한 줄씩 (시간, [열마다 셀]) 을 돌려줍니다."""
        for hour in HOURS:
            yield hour, [self._cells[(key, hour)] for key in self.axis]


# =============================================================================
# 1. 슬롯 변환
# =============================================================================

def _iter_slots(
    participant: Participant,
    mode: AvailabilityType,
    issues: list[SlotIssue],
) -> Generator[Slot, None, None]:
    """참가자의 원본 항목을 슬롯으로 바꿉니다. 잘못된 항목은 건너뛰고 기록합니다."""
    for key, hours in participant.availability.items():
        for hour in hours:
            try:
                if participant.availability_type != mode:
                    raise InputValidationWarning(
                        f"Participant uses {participant.availability_type!r} availability in a {mode!r} session"
                    )
                yield make_slot(mode, key, hour)
            except InputValidationWarning as exc:
                logger.warning("Skipping %s hour %r for participant %s: %s", key, hour, participant.id, exc)
                issues.append(SlotIssue(participant.id, key, hour, "skipped", str(exc)))


def _convert_all(
    participants: list[Participant],
    observer_zone: str,
    mode: AvailabilityType,
    reference_date: date | None,
    issues: list[SlotIssue],
) -> list[tuple[Participant, ConvertedSlot]]:
    """
    모든 참가자의 모든 항목을 보는 사람 타임존으로 변환합니다.

    변환에 실패한 항목은 원래 (키, 시간)을 그대로 쓰고 기록합니다.
    같은 (슬롯, 타임존) 조합은 한 번만 변환합니다.
    """
    cache: dict[tuple[Slot, str], ConvertedSlot] = {}
    failures: dict[tuple[Slot, str], str] = {}
    converted = []

    for participant in participants:
        for slot in _iter_slots(participant, mode, issues):
            cache_key = (slot, participant.timezone)

            if cache_key not in cache:
                try:
                    cache[cache_key] = convert_slot(slot, participant.timezone, observer_zone, reference_date)
                except (ZoneResolutionError, ConversionFailure) as exc:
                    logger.warning(
                        "Cannot convert %s %02d:00 from %s to %s, using unconverted slot: %s",
                        slot.key, slot.hour, participant.timezone, observer_zone, exc,
                    )
                    cache[cache_key] = fallback_slot(slot)
                    failures[cache_key] = str(exc)

            result = cache[cache_key]
            if result.degraded:
                issues.append(SlotIssue(participant.id, slot.key, slot.hour, "degraded", failures[cache_key]))
            converted.append((participant, result))

    return converted


# =============================================================================
# 2. 날짜 축 (specific 모드)
# =============================================================================

def _observer_dates(converted: list[tuple[Participant, ConvertedSlot]]) -> list[str]:
    return sorted({slot.key for _, slot in converted})


def enumerate_observer_dates(participants: list[Participant], observer_zone: str) -> list[str]:
    """
    specific 모드에서 변환 결과로 나올 수 있는 보는 사람 기준 날짜를 모두 구합니다.

    Returns:
        ["2024-07-04", "2024-07-05", ...] (오름차순, 중복 없음)
    """
    converted = _convert_all(participants, observer_zone, "specific", None, [])
    return _observer_dates(converted)


# =============================================================================
# 3. 집계
# =============================================================================

def session_mode(participants: list[Participant]) -> AvailabilityType:
    """첫 번째 참가자의 방식을 따릅니다. 참가자가 없으면 weekly."""
    if not participants:
        return "weekly"
    return participants[0].availability_type


def aggregate(
    participants: list[Participant],
    observer_zone: str,
    mode: AvailabilityType,
    reference_date: date | None = None,
) -> AvailabilityGrid:
    """
    참가자들의 가능 시간을 보는 사람 타임존 기준 그리드로 집계합니다.

    Args:
        participants: 참가자 리스트 (순서 = 색상, 셀 내 순서 기준)
        observer_zone: 그리드를 보는 사람의 타임존
        mode: "weekly" 또는 "specific"
        reference_date: weekly 모드의 기준 주 (필수)

    Returns:
        AvailabilityGrid. 잘못된 항목은 grid.issues에 기록되고 예외는 발생하지 않습니다.
    """
    if mode == "weekly" and reference_date is None:
        raise ValueError("reference_date is required for weekly availability")

    issues: list[SlotIssue] = []
    converted = _convert_all(participants, observer_zone, mode, reference_date, issues)

    axis = list(DAYS_OF_WEEK) if mode == "weekly" else _observer_dates(converted)
    total = len(participants)
    cells = {
        (key, hour): AggregationCell(key, hour, total=total)
        for key in axis
        for hour in HOURS
    }

    for participant, slot in converted:
        cell = cells[(slot.key, slot.hour)]
        if participant.id not in cell.participant_ids:
            cell.participant_ids.append(participant.id)

    return AvailabilityGrid(mode, axis, cells, total, issues)


# =============================================================================
# 4. 색상
# =============================================================================

def color_map(participants: list[Participant], palette: list[str] = PARTICIPANT_COLORS) -> dict[str, str]:
    """{참가자 id: 색상}. 참가자 순서가 같으면 항상 같은 색입니다."""
    colors: dict[str, str] = {}
    for index, participant in enumerate(participants):
        colors.setdefault(participant.id, palette[index % len(palette)])
    return colors


def participant_color(
    participants: list[Participant],
    participant_id: str,
    palette: list[str] = PARTICIPANT_COLORS,
) -> str | None:
    return color_map(participants, palette).get(participant_id)


# =============================================================================
# 5. 전원 가능 시간 묶기
# =============================================================================

def find_full_coverage_slots(grid: AvailabilityGrid) -> Generator[tuple[str, int], None, None]:
    """모든 참가자가 가능한 (열 키, 시간)을 찾습니다."""
    for key in grid.axis:
        for hour in HOURS:
            if grid[(key, hour)].is_full_coverage:
                yield key, hour


def merge_consecutive_hours(hours: list[int], min_duration_hours: int = 0) -> list[tuple[int, int]]:
    """
    연속된 시간들을 묶어서 (시작, 종료) 튜플 리스트로 반환합니다.

    Args:
        hours: 0~23 시간 리스트
        min_duration_hours: 최소 연속 시간. 이보다 짧은 범위는 제외

    Returns:
        [(시작, 종료), ...] 종료 시간은 포함하지 않음 (예: (14, 17) = 14:00 ~ 17:00)
    """
    if not hours:
        return []

    sorted_hours = sorted(set(hours))
    merged = []

    start = end = sorted_hours[0]

    for hour in sorted_hours[1:]:
        if hour == end + 1:
            end = hour
        else:
            merged.append((start, end + 1))
            start = end = hour

    merged.append((start, end + 1))

    if min_duration_hours > 0:
        merged = [(s, e) for s, e in merged if (e - s) >= min_duration_hours]

    return merged


def format_hour_range(start: int, end: int) -> str:
    return f"{start:02d}:00 ~ {end:02d}:00 ({end - start}h)"


def get_full_coverage_ranges(grid: AvailabilityGrid, min_duration_hours: int = 1) -> dict[str, list[str]]:
    """
    전원 가능한 시간을 열(요일/날짜)별로 묶어서 반환합니다.

    Returns:
        {"Monday": ["14:00 ~ 17:00 (3h)", ...], ...} (그리드 열 순서)
    """
    grouped = defaultdict(list)
    for key, hour in find_full_coverage_slots(grid):
        grouped[key].append(hour)

    result = {}
    for key in grid.axis:
        ranges = merge_consecutive_hours(grouped.get(key, []), min_duration_hours)
        if ranges:
            result[key] = [format_hour_range(s, e) for s, e in ranges]

    return result
