"""Configuration management for SubTrack Core."""

from decimal import Decimal
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class Settings(BaseSettings):
    """Engine defaults loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SUBTRACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Money
    money_places: int = Field(default=2, ge=0, le=6)

    # Settlement
    settlement_tolerance: Decimal = Field(default=Decimal("0.01"), ge=0)
    unbalanced_policy: Literal["reject", "normalize"] = "reject"

    # Trend analysis
    momentum_period: int = Field(default=14, ge=1)
    outlier_threshold: float = Field(default=2.5, gt=0)


def load_settings() -> Settings:
    """Load engine settings from environment variables."""
    try:
        return Settings()
    except Exception as e:
        raise ConfigurationError(
            f"Failed to load settings. Check the SUBTRACK_* environment "
            f"variables and your .env file.\n"
            f"Error: {e}"
        ) from e
