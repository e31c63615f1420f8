from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path.cwd()

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="AGROTIC_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # ===== STORAGE =====
    data_dir: Path = Field(default=BASE_DIR / "data")

    # ===== LOGGING =====
    log_dir: Path = Field(default=BASE_DIR / "logs")
    log_level: str = Field(default="INFO")

    # ===== RESERVATIONS =====
    # Reject usage confirmations above the reserved quantity.
    reject_over_use: bool = Field(default=False)

    @field_validator("log_level", mode="after")
    @classmethod
    def known_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


settings = Settings()
