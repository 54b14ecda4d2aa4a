from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # APP
    APP_NAME: str = "WOD Board"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL

    # Calendar
    APP_TIMEZONE: str = "Asia/Dubai"

    # Medal points
    GOLD_POINTS: int = 3
    SILVER_POINTS: int = 2
    BRONZE_POINTS: int = 1

    # Rx bonus per unique scored date (0 disables)
    RX_BONUS_POINTS: float = 0.5

    # Profile stats
    PLACEMENT_CLAMP: int = 10
    STREAK_LOOKBACK_DAYS: int = 365

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def medal_points(self) -> tuple[int, int, int]:
        """Points for gold, silver and bronze, in that order."""
        return self.GOLD_POINTS, self.SILVER_POINTS, self.BRONZE_POINTS


@lru_cache()
def get_settings() -> Settings:
    """Cached settings only loads once"""
    return Settings()
