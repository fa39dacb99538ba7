"""
Application settings (Pydantic Settings).
"""
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

from schemas import PARTICIPANT_COLORS

# .env next to this file
_env_path = Path(__file__).resolve().parent / ".env"


class Settings(BaseSettings):
    storage_path: Path = Path("participants.json")
    preferences_path: Path = Path("preferences.json")
    default_timezone: str = "UTC"  # 저장된 마지막 타임존이 없을 때
    log_level: str = "INFO"
    palette: list[str] = PARTICIPANT_COLORS

    class Config:
        env_file = _env_path
        env_prefix = "COURT_SCHEDULER_"
        extra = "ignore"

    @field_validator("default_timezone", mode="after")
    @classmethod
    def strip_timezone(cls, v: str) -> str:
        return (v or "").strip() or "UTC"

    @field_validator("log_level", mode="after")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return (v or "").strip().upper() or "INFO"

    @field_validator("palette", mode="after")
    @classmethod
    def non_empty_palette(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("palette must contain at least one colour")
        return v


settings = Settings()
