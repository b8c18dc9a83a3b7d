"""Configuration package."""

from chipsettle.config.settings import (
    AppSettings,
    SettlementSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "SettlementSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
