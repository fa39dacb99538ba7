from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Literal, Union
from uuid import uuid4

import pytz
from pydantic import BaseModel, Field, field_validator

from errors import InputValidationWarning

AvailabilityType = Literal["weekly", "specific"]
ParticipantRole = Literal["Judge", "Prosecution", "Defendant", "Defense Attorney", "Witness"]

# 월요일 = 0 ... 일요일 = 6 (date.weekday()와 동일한 기준)
DAYS_OF_WEEK = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]

HOURS = range(24)

PARTICIPANT_ROLES: list[str] = [
    "Judge",
    "Prosecution",
    "Defendant",
    "Defense Attorney",
    "Witness",
]

ROLE_COLORS = {
    "Judge": "#6D28D9",
    "Prosecution": "#B91C1C",
    "Defendant": "#C2410C",
    "Defense Attorney": "#1D4ED8",
    "Witness": "#047857",
}

# 참가자 색상 (insertion order 기준으로 index mod 12)
PARTICIPANT_COLORS = [
    "#3B82F6",  # blue
    "#EF4444",  # red
    "#10B981",  # emerald
    "#FACC15",  # yellow
    "#6B7280",  # gray
    "#F472B6",  # rose
    "#0EA5E9",  # cyan
    "#5EEAD4",  # mint
    "#FB923C",  # orange
    "#8B5CF6",  # purple
    "#6366F1",  # indigo
    "#D97706",  # copper
]


class Participant(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    role: ParticipantRole = "Witness"
    timezone: str                                              # IANA 타임존
    availability_type: AvailabilityType = "weekly"
    availability: dict[str, list[int]] = Field(default_factory=dict)  # {요일 또는 ISO 날짜: [시간]}
    created_at: datetime = Field(default_factory=lambda: datetime.now(pytz.UTC))

    @field_validator("availability", mode="after")
    @classmethod
    def dedupe_hours(cls, v: dict[str, list[int]]) -> dict[str, list[int]]:
        # 범위 검사는 엔진에서 한다 (잘못된 항목은 건너뛰고 기록)
        return {key: sorted(set(hours)) for key, hours in v.items()}

    @property
    def available_hours(self) -> int:
        return sum(len(hours) for hours in self.availability.values())


# =============================================================================
# 슬롯 (tagged variant)
# =============================================================================

def _check_hour(hour) -> None:
    if isinstance(hour, bool) or not isinstance(hour, int) or not 0 <= hour <= 23:
        raise InputValidationWarning(f"Hour out of range [0, 23]: {hour!r}")


@dataclass(frozen=True)
class WeeklySlot:
    """매주 반복되는 (요일, 시간). 소유자 타임존의 벽시계 시간입니다."""
    weekday: str
    hour: int

    def __post_init__(self):
        if self.weekday not in DAYS_OF_WEEK:
            raise InputValidationWarning(f"Invalid day name: {self.weekday!r}")
        _check_hour(self.hour)

    @property
    def key(self) -> str:
        return self.weekday


@dataclass(frozen=True)
class SpecificDateSlot:
    """특정 날짜의 (날짜, 시간). 소유자 타임존의 벽시계 시간입니다."""
    day: date
    hour: int

    def __post_init__(self):
        _check_hour(self.hour)

    @property
    def key(self) -> str:
        return self.day.isoformat()


Slot = Union[WeeklySlot, SpecificDateSlot]


def make_slot(availability_type: AvailabilityType, key: str, hour: int) -> Slot:
    """
    원본 availability 항목 하나를 슬롯으로 만듭니다.

    Raises:
        InputValidationWarning: 요일 이름, ISO 날짜, 시간 중 하나라도 잘못된 경우
    """
    if availability_type == "weekly":
        return WeeklySlot(key, hour)
    try:
        day = date.fromisoformat(key)
    except (TypeError, ValueError) as exc:
        raise InputValidationWarning(f"Invalid ISO date: {key!r}") from exc
    return SpecificDateSlot(day, hour)


# =============================================================================
# 변환 / 집계 결과
# =============================================================================

@dataclass(frozen=True)
class ConvertedSlot:
    key: str                          # 요일 이름 (weekly) 또는 ISO 날짜 (specific)
    hour: int
    weekday: str                      # specific 모드에서도 항상 채워짐
    instant: datetime | None = None   # UTC 기준 시각. 변환 실패 시 None
    degraded: bool = False            # 변환 실패로 원래 슬롯을 그대로 쓴 경우


@dataclass
class AggregationCell:
    key: str
    hour: int
    participant_ids: list[str] = field(default_factory=list)
    total: int = 0

    @property
    def count(self) -> int:
        return len(self.participant_ids)

    @property
    def is_full_coverage(self) -> bool:
        # 참가자가 0명이면 항상 False
        return self.total > 0 and self.count == self.total


@dataclass(frozen=True)
class SlotIssue:
    participant_id: str
    key: str
    hour: object
    kind: Literal["skipped", "degraded"]
    message: str
