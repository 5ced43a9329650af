from datetime import time
from typing import List, Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

from app.core.shifts import SHIFTS


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str = Field(..., alias="DATABASE_URL")

    timezone: str = Field("Asia/Jakarta", alias="APP_TIMEZONE")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    cors_origins: str = Field("*", alias="CORS_ORIGINS")
    auto_create_tables: bool = Field(True, alias="AUTO_CREATE_TABLES")

    # Recorded jam_keluar never goes past the shift end when enabled.
    clamp_checkout_to_shift_end: bool = Field(True, alias="CLAMP_CHECKOUT_TO_SHIFT_END")

    absence_sweep_enabled: bool = Field(True, alias="ABSENCE_SWEEP_ENABLED")
    absence_sweep_time: str = Field("00:05", alias="ABSENCE_SWEEP_TIME")
    # "today" needs a trigger at or after the last shift end, otherwise
    # interns who have not checked in yet are marked alpa and locked out.
    absence_sweep_target: Literal["yesterday", "today"] = Field("yesterday", alias="ABSENCE_SWEEP_TARGET")
    absence_sweep_reason: Literal["alpa", "libur"] = Field("alpa", alias="ABSENCE_SWEEP_REASON")

    @property
    def allowed_origins(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @model_validator(mode="after")
    def check_sweep_schedule(self) -> "Settings":
        hour, minute = (int(p) for p in self.absence_sweep_time.strip().split(":")[:2])
        trigger = time(hour, minute)
        last_shift_end = max(s.end for s in SHIFTS.values())
        if self.absence_sweep_target == "today" and trigger < last_shift_end:
            raise ValueError(
                f"ABSENCE_SWEEP_TARGET=today needs ABSENCE_SWEEP_TIME at or after "
                f"{last_shift_end.strftime('%H:%M')}, got {self.absence_sweep_time}"
            )
        return self

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
