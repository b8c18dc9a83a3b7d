"""
Configuration Management for Chip Settle

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The settlement engine itself is a pure function; the only knobs are the
tolerance, the roster size threshold and how results are rendered.
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SettlementSettings(BaseSettings):
    """Settlement engine and share summary configuration."""

    model_config = SettingsConfigDict(
        env_prefix="CHIPSETTLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    tolerance: Decimal = Field(
        default=Decimal("0.01"),
        gt=0,
        description="Balances and transfers at or below this are treated as zero"
    )
    min_participants: int = Field(
        default=2,
        ge=2,
        description="Minimum number of named participants for a settlement"
    )

    # Share summary rendering
    currency_symbol: str = Field(
        default="₪",
        max_length=5,
        description="Symbol printed in front of amounts"
    )
    summary_decimal_places: int = Field(
        default=0,
        ge=0,
        le=4,
        description="Decimal places for amounts in the share text"
    )
    summary_title: str = Field(
        default="Poker night summary",
        description="First line of the share text"
    )
    email_subject: str = Field(
        default="Poker night summary 🃏",
        description="Subject line for the e-mail share link"
    )

    @field_validator('tolerance')
    @classmethod
    def validate_tolerance(cls, v: Decimal) -> Decimal:
        """Tolerance must be a finite amount below one currency unit."""
        if not v.is_finite() or v >= 1:
            raise ValueError(f"Tolerance must be a finite amount below 1, got {v}")
        return v


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode (shows raw balances in the UI)"
    )
    audit_enabled: bool = Field(
        default=True,
        description="Emit structured audit events for each calculation"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def settlement(self) -> SettlementSettings:
        return SettlementSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with a
    "<name>_error" entry for each section that failed.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.settlement
        results["settlement"] = True
    except Exception as e:
        results["settlement"] = False
        results["settlement_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
