"""
참가자 저장 모듈

참가자 리스트와 마지막으로 쓴 타임존을 JSON 파일에 저장합니다.
실패해도 예외를 던지지 않고 로그만 남깁니다 (불러오기 실패 = 빈 리스트).
"""

import json
import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from schemas import Participant

logger = logging.getLogger(__name__)

_participants_adapter = TypeAdapter(list[Participant])


class ParticipantStore:
    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> list[Participant]:
        """저장된 참가자를 불러옵니다. 파일이 없거나 읽을 수 없으면 빈 리스트."""
        if not self.path.exists():
            return []
        try:
            return _participants_adapter.validate_json(self.path.read_bytes())
        except (OSError, ValidationError) as exc:
            logger.error("Failed to load participants from %s: %s", self.path, exc)
            return []

    def save(self, participants: list[Participant]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_bytes(_participants_adapter.dump_json(participants, indent=2))
        except OSError as exc:
            logger.error("Failed to save participants to %s: %s", self.path, exc)

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as exc:
            logger.error("Failed to clear participants at %s: %s", self.path, exc)


class PreferenceStore:
    """마지막으로 선택한 참가자 타임존. 값은 호출하는 쪽(UI)이 들고 있고 여기는 저장만 합니다."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error("Failed to load preferences from %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def load_last_timezone(self) -> str | None:
        zone = self._read().get("last_timezone")
        return zone if isinstance(zone, str) and zone else None

    def save_last_timezone(self, zone: str) -> None:
        data = self._read()
        data["last_timezone"] = zone
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        except OSError as exc:
            logger.error("Failed to save preferences to %s: %s", self.path, exc)
