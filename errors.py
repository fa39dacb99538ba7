"""
스케줄링 오류 정의

엔진 내부에서 발생하고 엔진 안에서 처리됩니다.
aggregate() 호출자에게는 예외가 전달되지 않습니다.
"""


class SchedulingError(Exception):
    """모든 스케줄링 오류의 기본 클래스"""


class ZoneResolutionError(SchedulingError):
    """알 수 없거나 잘못된 IANA 타임존 식별자"""

    def __init__(self, zone: str):
        self.zone = zone
        super().__init__(f"Unknown timezone: {zone!r}")


class ConversionFailure(SchedulingError):
    """datetime 생성 또는 시간 연산 실패"""


class InputValidationWarning(SchedulingError, UserWarning):
    """잘못된 요일 이름, 범위를 벗어난 시간 등 입력 검증 실패. 해당 항목만 건너뜁니다."""
