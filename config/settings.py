"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
Work schedule values here only seed the initial production settings;
the scheduling engine receives its schedule as an explicit parameter.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # WORK SCHEDULE DEFAULTS
    # ===================
    work_start_hour: int = Field(
        default=9,
        ge=0,
        le=23,
        description="Hour the workshop opens"
    )
    work_end_hour: int = Field(
        default=18,
        ge=1,
        le=24,
        description="Hour the workshop closes"
    )
    lunch_start_hour: int = Field(
        default=13,
        ge=0,
        le=23,
        description="Hour the lunch break starts"
    )
    lunch_end_hour: int = Field(
        default=14,
        ge=0,
        le=23,
        description="Hour the lunch break ends"
    )
    work_days: str = Field(
        default="1,2,3,4,5,6",
        pattern=r"^[0-6](,[0-6])*$",
        description="Comma-separated worked weekdays (0=Sunday ... 6=Saturday)"
    )

    # ===================
    # ORDER DEFAULTS
    # ===================
    default_list_prep_minutes: int = Field(
        default=15,
        ge=0,
        le=480,
        description="Minutes of roster/list preparation added to design time"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=8000,
        ge=1000,
        le=65535,
        description="API port"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def work_day_list(self) -> list[int]:
        """Worked weekdays as a sorted list of unique indices."""
        return sorted({int(day) for day in self.work_days.split(",")})


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
